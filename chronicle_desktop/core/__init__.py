"""Core functionality for Chronicle Desktop."""

from .data_fetcher import fetch_all_sections, fetch_section_data, fetch_submissions_data
from .section_source import SECTIONS, JsonSectionSource
from .stats import submission_stats

__all__ = [
    "SECTIONS",
    "JsonSectionSource",
    "submission_stats",
    "fetch_all_sections",
    "fetch_section_data",
    "fetch_submissions_data",
]
