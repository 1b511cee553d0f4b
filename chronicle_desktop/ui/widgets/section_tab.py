import logging

import pandas as pd
from PySide6.QtWidgets import QLabel

from .base_tab import BaseTabWidget
from .dataframe_table import DataFrameTable

logger = logging.getLogger(__name__)


class SectionTab(BaseTabWidget):
    """
    Lists the rows of one admin section (blog posts, city pages, ...).

    Args:
        tab_title: Header text.
        section: Section name passed to the data source.
        columns: Columns to show, in order.
        loading_message: Message reported to the loader while this tab is busy.
    """

    def __init__(self, tab_title, section, columns=None, loading_message=None, parent=None):
        super().__init__(tab_title=tab_title, parent=parent)
        self.section = section
        self.columns = columns
        self.loading_message = loading_message or f"Loading {tab_title.lower()}..."

        self.summary_label = QLabel()
        self.content_layout.addWidget(self.summary_label)

        self.table = DataFrameTable()
        self.content_layout.addWidget(self.table, 1)

        self._show_placeholder()

    def populate_ui(self, data, refreshed_at):
        logger.debug(f"Populating {self.title} with {0 if data is None else len(data)} rows")
        self._update_refresh_time_label(refreshed_at)

        if not isinstance(data, pd.DataFrame):
            self._show_error(f"Failed to load {self.title.lower()}.")
            return
        if data.empty:
            self._show_error(f"No {self.title.lower()} found.")
            return

        self.table.set_dataframe(data, columns=self.columns)
        self.summary_label.setText(f"{len(data)} {self.title.lower()}")

        self.placeholder_status_label.setVisible(False)
        self.summary_label.setVisible(True)
        self.table.setVisible(True)
        self.has_data = True
        self._hide_loading()
