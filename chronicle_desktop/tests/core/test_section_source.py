import json

import pandas as pd
import pytest

from core.section_source import SECTIONS, JsonSectionSource


def test_sample_file_has_every_section(sample_data_path):
    source = JsonSectionSource(sample_data_path)
    for section in SECTIONS:
        df = source.fetch_section(section)
        assert isinstance(df, pd.DataFrame)
        assert not df.empty


def test_date_columns_are_parsed_as_utc(sample_data_path):
    df = JsonSectionSource(sample_data_path).fetch_section("blog_posts")
    assert isinstance(df["created_at"].dtype, pd.DatetimeTZDtype)
    assert str(df["created_at"].dt.tz) == "UTC"
    # Drafts have no publish date
    assert df["published_at"].isna().sum() == 1


def test_unknown_section_raises(sample_data_path):
    with pytest.raises(KeyError, match="Unknown section"):
        JsonSectionSource(sample_data_path).fetch_section("events")


def test_section_missing_from_file_raises(tmp_path):
    path = tmp_path / "sections.json"
    path.write_text(json.dumps({"cities": []}))
    with pytest.raises(KeyError, match="not found"):
        JsonSectionSource(path).fetch_section("blog_posts")


def test_non_object_file_raises(tmp_path):
    path = tmp_path / "sections.json"
    path.write_text("[]")
    with pytest.raises(ValueError, match="must contain a JSON object"):
        JsonSectionSource(path).fetch_section("cities")


def test_latency_is_applied(sample_data_path, mocker):
    sleep = mocker.patch("core.section_source.time.sleep")
    JsonSectionSource(sample_data_path, latency_ms=250).fetch_section("cities")
    sleep.assert_called_once_with(0.25)
