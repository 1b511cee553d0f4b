from datetime import datetime
from unittest.mock import MagicMock

import pandas as pd

from core.data_fetcher import fetch_all_sections, fetch_section_data, fetch_submissions_data
from core.section_source import JsonSectionSource


def test_fetch_section_data(sample_data_path):
    result = fetch_section_data(JsonSectionSource(sample_data_path), "cities")
    assert isinstance(result["data"], pd.DataFrame)
    assert list(result["data"]["name"]) == ["Dubai", "Riyadh", "Abu Dhabi"]
    assert isinstance(result["refreshed_at"], datetime)


def test_fetch_submissions_data_includes_stats(sample_data_path):
    result = fetch_submissions_data(JsonSectionSource(sample_data_path), force_refresh=True)
    rows, stats = result["data"]["rows"], result["data"]["stats"]
    assert stats["total"] == len(rows)
    assert stats["spam"] == int(rows["is_spam"].sum())


def test_fetch_all_sections(sample_data_path):
    results = fetch_all_sections(JsonSectionSource(sample_data_path))
    assert set(results) == {"blog_posts", "cities", "contact_submissions"}
    assert isinstance(results["blog_posts"]["data"], pd.DataFrame)
    assert "stats" in results["contact_submissions"]["data"]


def test_fetch_all_sections_isolates_failures():
    frame = pd.DataFrame({"name": ["Dubai"]})
    source = MagicMock()

    def fetch_section(name):
        if name == "blog_posts":
            raise ConnectionError("backend unreachable")
        return frame

    source.fetch_section.side_effect = fetch_section

    results = fetch_all_sections(source)
    assert results["blog_posts"]["error"] == "backend unreachable"
    assert results["cities"]["data"] is frame
    assert "data" in results["contact_submissions"]
