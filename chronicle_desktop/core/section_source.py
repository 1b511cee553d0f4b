import json
import logging
import time
from pathlib import Path

import pandas as pd

logger = logging.getLogger(__name__)

SECTIONS = ("blog_posts", "cities", "contact_submissions")

# Columns parsed as datetimes for each section
DATE_COLUMNS = {
    "blog_posts": ["created_at", "published_at"],
    "cities": ["created_at"],
    "contact_submissions": ["created_at"],
}


class JsonSectionSource:
    """
    Reads admin section rows from a local JSON file.

    The file maps a section name to a list of row objects. Each fetch re-reads
    the file so edits show up on refresh, and sleeps for ``latency_ms`` to
    stand in for the round trip to the hosted backend.

    Args:
        path: Path to the JSON file.
        latency_ms: Artificial delay applied to every fetch.
    """

    def __init__(self, path, latency_ms=0):
        self.path = Path(path)
        self.latency_ms = latency_ms

    def _read(self):
        with open(self.path, "r", encoding="utf-8") as f:
            payload = json.load(f)
        if not isinstance(payload, dict):
            raise ValueError(f"Section file {self.path} must contain a JSON object")
        return payload

    def fetch_section(self, name):
        """
        Fetch the rows of one section as a DataFrame.

        Raises:
            KeyError: If ``name`` is not a known section or is missing from the file.
        """
        if name not in SECTIONS:
            raise KeyError(f"Unknown section: {name}")

        logger.info(f"Fetching section '{name}' from {self.path}")
        if self.latency_ms:
            time.sleep(self.latency_ms / 1000)

        payload = self._read()
        if name not in payload:
            raise KeyError(f"Section '{name}' not found in {self.path}")

        df = pd.DataFrame(payload[name])
        for col in DATE_COLUMNS.get(name, []):
            if col in df.columns:
                df[col] = pd.to_datetime(df[col], errors="coerce", utc=True)
        logger.debug(f"Fetched {len(df)} rows for section '{name}'")
        return df
