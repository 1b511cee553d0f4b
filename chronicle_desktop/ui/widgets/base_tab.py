import logging
from abc import ABCMeta, abstractmethod

from PySide6.QtWidgets import (
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSizePolicy
)
from PySide6.QtCore import Qt, Signal, Slot

logger = logging.getLogger(__name__)

# Combine QWidget metaclass and ABCMeta
class QtABCMeta(type(QWidget), ABCMeta):
    pass

class BaseTabWidget(QWidget, metaclass=QtABCMeta):
    """
    Abstract base class for admin section tabs.

    Handles the header (title, refresh time, refresh button), the
    placeholder/status label and the tab's busy flag. ``busy_changed`` is what
    the main window feeds into the loader binding, so every state method that
    starts or stops work goes through :meth:`_set_busy`.
    """
    refresh_requested = Signal()
    busy_changed = Signal(bool)

    def __init__(self, tab_title="Tab Title", parent=None):
        super().__init__(parent)
        self.last_refreshed = None
        self.has_data = False
        self.busy = False

        # --- Main Layout ---
        self.main_layout = QVBoxLayout(self)
        self.main_layout.setContentsMargins(10, 10, 10, 10)
        self.main_layout.setSpacing(5)

        # --- Header Layout ---
        self.header_layout = QHBoxLayout()
        self.header_layout.setContentsMargins(0, 0, 0, 5)

        self.header_label = QLabel(tab_title)
        self.header_label.setStyleSheet("font-weight: bold;")
        self.header_layout.addWidget(self.header_label)

        self.refresh_time_label = QLabel("Last refreshed: N/A")
        self.refresh_time_label.setStyleSheet("font-style: italic; color: grey;")
        self.header_layout.addStretch()
        self.header_layout.addWidget(self.refresh_time_label)
        self.header_layout.addSpacing(10)

        self.refresh_button = QPushButton("Refresh")
        self.refresh_button.setToolTip("Reload this section from the data source")
        self.refresh_button.setEnabled(False)  # Enabled once the first load finished
        self.refresh_button.clicked.connect(self._request_refresh)
        self.header_layout.addWidget(self.refresh_button)

        self.main_layout.addLayout(self.header_layout)

        # --- Content Area ---
        self.content_widget = QWidget()
        self.content_layout = QVBoxLayout(self.content_widget)
        self.content_layout.setContentsMargins(0, 0, 0, 0)
        self.main_layout.addWidget(self.content_widget, 1)

        self.placeholder_status_label = QLabel()
        self.placeholder_status_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.placeholder_status_label.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.placeholder_status_label.setVisible(False)
        self.content_layout.addWidget(self.placeholder_status_label)

    @property
    def title(self):
        return self.header_label.text()

    def _request_refresh(self):
        if self.busy:
            logger.warning(f"Refresh requested for {self.title} while it is still loading.")
            return
        logger.info(f"Refresh requested for tab: {self.title}")
        self.refresh_requested.emit()

    def _set_busy(self, busy):
        if busy == self.busy:
            return
        self.busy = busy
        self.busy_changed.emit(busy)

    def _update_refresh_time_label(self, refreshed_at=None):
        timestamp_str = "N/A"
        if refreshed_at:
            timestamp_str = refreshed_at.strftime('%Y-%m-%d %H:%M:%S')
        self.refresh_time_label.setText(f"Last refreshed: {timestamp_str}")
        self.last_refreshed = refreshed_at

    def clear_content_layout(self):
        """Hides all widgets in content_layout except the placeholder label."""
        for i in range(self.content_layout.count()):
            widget = self.content_layout.itemAt(i).widget()
            if widget and widget != self.placeholder_status_label:
                widget.setVisible(False)

    def _show_placeholder(self, message=None):
        logger.debug(f"Showing placeholder for {self.title}")
        self.clear_content_layout()
        text = message or f"<i>No {self.title.lower()} loaded yet.</i>"
        self.placeholder_status_label.setText(text)
        self.placeholder_status_label.setStyleSheet("")
        self.placeholder_status_label.setVisible(True)
        self._update_refresh_time_label(None)
        self.has_data = False

    def _show_loading(self, message=None):
        """Shows a loading message, disables the refresh button and marks the tab busy."""
        logger.debug(f"Showing loading for {self.title}")
        self.clear_content_layout()
        text = message or f"<i>Loading {self.title.lower()}...</i>"
        self.placeholder_status_label.setText(text)
        self.placeholder_status_label.setStyleSheet("color: grey;")
        self.placeholder_status_label.setVisible(True)
        self.refresh_button.setEnabled(False)
        self.refresh_button.setText("Loading...")
        self._set_busy(True)

    @Slot()
    def _hide_loading(self):
        """Restores the refresh button and clears the busy flag."""
        logger.debug(f"Hiding loading for {self.title}")
        self.refresh_button.setEnabled(True)
        self.refresh_button.setText("Refresh")
        self._set_busy(False)

    def _show_error(self, message):
        logger.error(f"Showing error for {self.title}: {message}")
        self.clear_content_layout()
        self.placeholder_status_label.setText(f"<font color='orange'>{message}</font>")
        self.placeholder_status_label.setStyleSheet("")
        self.placeholder_status_label.setVisible(True)
        self.has_data = False
        self._hide_loading()

    @Slot(object)
    def handle_result(self, result_dict):
        """Receives a worker result of the form {'data': ..., 'refreshed_at': datetime}."""
        self.populate_ui(result_dict.get('data'), result_dict.get('refreshed_at'))

    @Slot(tuple)
    def handle_error(self, error_tuple):
        exctype, value, traceback_str = error_tuple
        logger.error(f"Data worker for {self.title} failed: {exctype.__name__} - {value}\n{traceback_str}")
        self._show_error(f"Error loading {self.title.lower()}: {value}")

    @abstractmethod
    def populate_ui(self, data, refreshed_at):
        """
        Populate the tab with fetched data.

        Implementations should update the refresh label, add their widgets to
        ``content_layout``, hide ``placeholder_status_label`` when content is
        shown, set ``has_data`` and finish with ``_hide_loading()``.
        """
        pass
