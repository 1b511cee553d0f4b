from PySide6.QtWidgets import QTableWidget, QTableWidgetItem, QHeaderView
from PySide6.QtCore import Qt
import pandas as pd


SORT_ROLE = Qt.ItemDataRole.UserRole


def format_cell(value):
    """Display text for one DataFrame cell."""
    if value is None or (not isinstance(value, (list, dict)) and pd.isna(value)):
        return ''
    if pd.api.types.is_bool(value):
        return '✓' if value else '✗'
    if isinstance(value, pd.Timestamp):
        return value.strftime('%Y-%m-%d %H:%M')
    if pd.api.types.is_float(value):
        return f"{value:.2f}"
    return str(value)


class SortableItem(QTableWidgetItem):
    """Table item that compares by its numeric sort key when both items have one."""

    def __lt__(self, other):
        mine, theirs = self.data(SORT_ROLE), other.data(SORT_ROLE)
        if mine is not None and theirs is not None:
            return mine < theirs
        return super().__lt__(other)


class DataFrameTable(QTableWidget):
    """
    Read-only QTableWidget showing section rows from a pandas DataFrame.

    Booleans render as check marks, timestamps without seconds, and numeric
    columns sort numerically.
    """

    def __init__(self, parent=None):
        super().__init__(parent)

        self.setSortingEnabled(True)
        self.setAlternatingRowColors(True)
        self.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)

    def set_dataframe(self, df, columns=None):
        """
        Display ``df``.

        Args:
            df: DataFrame to display
            columns: Column names to show, in order. Missing columns are skipped.

        Raises:
            TypeError: If ``df`` is not a DataFrame.
        """
        if not isinstance(df, pd.DataFrame):
            raise TypeError("Data must be a pandas DataFrame")

        if columns is None:
            columns = list(df.columns)
        else:
            columns = [col for col in columns if col in df.columns]

        # Sorting while inserting shuffles rows under our feet
        self.setSortingEnabled(False)
        self.clear()
        self.setRowCount(len(df))
        self.setColumnCount(len(columns))
        self.setHorizontalHeaderLabels([col.replace('_', ' ').title() for col in columns])

        for i, (_, row) in enumerate(df[columns].iterrows()):
            for j, col in enumerate(columns):
                value = row[col]
                item = SortableItem(format_cell(value))
                if pd.api.types.is_number(value) and not pd.api.types.is_bool(value) and pd.notna(value):
                    # Display text stays formatted; the sort key carries the number
                    item.setData(SORT_ROLE, float(value))
                    item.setTextAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
                self.setItem(i, j, item)

        self.setSortingEnabled(True)
        self.resizeColumnsToContents()
        if columns:
            self.horizontalHeader().setSectionResizeMode(len(columns) - 1, QHeaderView.ResizeMode.Stretch)
