"""
Chronicle Desktop UI widgets.
"""

from .base_tab import BaseTabWidget
from .dataframe_table import DataFrameTable
from .section_tab import SectionTab
from .submissions_tab import SubmissionsTab

__all__ = [
    'BaseTabWidget',
    'DataFrameTable',
    'SectionTab',
    'SubmissionsTab',
]
