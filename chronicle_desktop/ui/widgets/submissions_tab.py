import logging

import pandas as pd
from PySide6.QtWidgets import QGridLayout, QLabel, QWidget

from .base_tab import BaseTabWidget
from .dataframe_table import DataFrameTable

logger = logging.getLogger(__name__)

STAT_LABELS = [
    ("total", "Total"),
    ("new", "New"),
    ("read", "Read"),
    ("replied", "Replied"),
    ("archived", "Archived"),
    ("spam", "Spam"),
    ("today", "Today"),
    ("this_week", "This week"),
    ("this_month", "This month"),
]


class SubmissionsTab(BaseTabWidget):
    """Contact form submissions with a row of summary counters above the table."""

    section = "contact_submissions"
    loading_message = "Loading submissions..."

    def __init__(self, parent=None):
        super().__init__(tab_title="Submissions", parent=parent)
        self.stats = {}

        self.stats_widget = QWidget()
        stats_layout = QGridLayout(self.stats_widget)
        stats_layout.setContentsMargins(0, 0, 0, 5)
        self.stat_value_labels = {}
        for column, (key, text) in enumerate(STAT_LABELS):
            name_label = QLabel(text)
            name_label.setStyleSheet("color: grey;")
            value_label = QLabel("0")
            value_label.setStyleSheet("font-weight: bold; font-size: 16px;")
            stats_layout.addWidget(value_label, 0, column)
            stats_layout.addWidget(name_label, 1, column)
            self.stat_value_labels[key] = value_label
        self.content_layout.addWidget(self.stats_widget)

        self.table = DataFrameTable()
        self.content_layout.addWidget(self.table, 1)

        self._show_placeholder()

    def populate_ui(self, data, refreshed_at):
        self._update_refresh_time_label(refreshed_at)

        rows = data.get("rows") if isinstance(data, dict) else None
        stats = data.get("stats") if isinstance(data, dict) else None
        if not isinstance(rows, pd.DataFrame) or stats is None:
            self._show_error("Failed to load submissions.")
            return

        self.stats = stats
        for key, label in self.stat_value_labels.items():
            label.setText(str(stats.get(key, 0)))

        self.stats_widget.setVisible(True)
        if rows.empty:
            self.table.setVisible(False)
            self.placeholder_status_label.setText("<i>No submissions yet.</i>")
            self.placeholder_status_label.setVisible(True)
        else:
            ordered = rows.sort_values("created_at", ascending=False) if "created_at" in rows.columns else rows
            self.table.set_dataframe(ordered, columns=["name", "email", "status", "is_spam", "created_at"])
            self.table.setVisible(True)
            self.placeholder_status_label.setVisible(False)

        self.has_data = True
        self._hide_loading()
