import os
import sys
from pathlib import Path

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# config/, core/ and ui/ are imported as top-level packages, as main.py does
APP_DIR = Path(__file__).resolve().parent.parent
if str(APP_DIR) not in sys.path:
    sys.path.insert(0, str(APP_DIR))

SAMPLE_DATA = APP_DIR / "data" / "sections.json"


@pytest.fixture
def sample_data_path():
    return SAMPLE_DATA


@pytest.fixture
def settings():
    """Default settings with short timings so tests never wait on the real splash windows."""
    from config.loader import DEFAULT_SETTINGS

    values = dict(DEFAULT_SETTINGS)
    values.update({"min_display_ms": 0, "fallback_ms": 50, "debounce_ms": 0, "simulated_latency_ms": 0})
    return values
