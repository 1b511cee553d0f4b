import logging

from PySide6.QtWidgets import (
    QHBoxLayout,
    QMainWindow,
    QPushButton,
    QTabWidget,
    QVBoxLayout,
    QWidget,
)
from PySide6.QtCore import QThreadPool, Slot

from pageloader import ComponentLoading, DataLoading, InitialLoadingProvider, MinimalLoadingProvider
from pageloader.utils import DebouncedLoader, LoadingMessages
from pageloader.workers import Worker

from config.loader import save_settings
from core.data_fetcher import fetch_all_sections, fetch_section_data, fetch_submissions_data
from ui.widgets.section_tab import SectionTab
from ui.widgets.submissions_tab import SubmissionsTab
from ui.styles import STYLESHEET

logger = logging.getLogger(__name__)

WINDOW_TITLE = "Chronicle Desktop"


class MainWindow(QMainWindow):
    """
    Admin shell: one tab per content section.

    The window mounts both loading providers. The initial load of every
    section runs as a single background job through ``DataLoading``; a tab
    refresh marks only that tab busy, and the tab's busy flag drives the
    loader through a ``ComponentLoading`` binding.
    """

    def __init__(self, settings, source, threadpool=None, static_splash=None):
        super().__init__()
        logger.info("Initializing MainWindow...")

        self.setStyleSheet(STYLESHEET)
        self.setWindowTitle(WINDOW_TITLE)

        self.settings = settings
        self.source = source
        self.initial_load_running = False

        # --- Initialize Thread Pool --- #
        self.threadpool = threadpool or QThreadPool.globalInstance()
        logger.info(f"Using thread pool with max {self.threadpool.maxThreadCount()} threads.")

        # --- Setup Main UI --- #
        central_widget = QWidget()
        central_layout = QVBoxLayout(central_widget)
        central_layout.setContentsMargins(5, 5, 5, 5)

        button_layout = QHBoxLayout()
        self.reload_button = QPushButton("Reload All")
        self.reload_button.setToolTip("Reload every section from the data source")
        self.reload_button.clicked.connect(self.load_all_sections)
        button_layout.addWidget(self.reload_button)
        self.save_settings_button = QPushButton("Save Settings")
        self.save_settings_button.setToolTip("Write the current loader settings to disk")
        self.save_settings_button.clicked.connect(self.save_current_settings)
        button_layout.addWidget(self.save_settings_button)
        button_layout.addStretch()
        central_layout.addLayout(button_layout)

        self.tab_widget = QTabWidget()
        central_layout.addWidget(self.tab_widget, 1)
        self.setCentralWidget(central_widget)

        # --- Loading Providers --- #
        self.loading_provider = MinimalLoadingProvider(self)
        self.initial_loading = InitialLoadingProvider(
            self,
            min_display_ms=settings["min_display_ms"],
            fallback_ms=settings["fallback_ms"],
            static_splash=static_splash,
        )
        self.data_loading = DataLoading(self, threadpool=self.threadpool, parent=self)
        self.debounced_loader = DebouncedLoader(self, debounce_ms=settings["debounce_ms"], parent=self)
        self.load_options = {
            "size": settings["default_size"],
            "position": settings["default_position"],
        }

        # --- Create Tab Instances --- #
        self.blog_tab = SectionTab(
            "Blog Posts",
            "blog_posts",
            columns=["title", "slug", "status", "is_featured", "published_at"],
            loading_message=LoadingMessages.LOADING_BLOG,
            parent=self,
        )
        self.cities_tab = SectionTab(
            "Cities",
            "cities",
            columns=["name", "slug", "subtitle", "is_active", "created_at"],
            loading_message=LoadingMessages.LOADING_CITIES,
            parent=self,
        )
        self.submissions_tab = SubmissionsTab(self)
        self.tabs = {
            "blog_posts": self.blog_tab,
            "cities": self.cities_tab,
            "contact_submissions": self.submissions_tab,
        }

        self.component_bindings = []
        for tab in self.tabs.values():
            self.tab_widget.addTab(tab, tab.title)
            binding = ComponentLoading(tab)
            binding.bind(tab.busy_changed, tab.loading_message)
            self.component_bindings.append(binding)
            tab.refresh_requested.connect(lambda t=tab: self.refresh_section(t))

        # --- Initial State --- #
        self.initial_loading.start()
        self.load_all_sections()
        logger.info("MainWindow initialization complete.")

    def _set_loading_state(self, loading):
        """Enable/disable UI elements based on loading state."""
        logger.debug(f"Setting loading state: {loading}")
        self.reload_button.setEnabled(not loading)
        for tab in self.tabs.values():
            tab.refresh_button.setEnabled(not loading and tab.has_data)
        if loading:
            self.setWindowTitle(f"{WINDOW_TITLE} - Loading...")
        else:
            self.setWindowTitle(WINDOW_TITLE)

    def load_all_sections(self):
        """Fetch every section in one background job with the loader shown."""
        if self.initial_load_running:
            logger.warning("Section load already running; ignoring request.")
            return

        self.initial_load_running = True
        self._set_loading_state(True)
        for tab in self.tabs.values():
            tab._show_placeholder(f"<i>{tab.loading_message}</i>")

        self.data_loading.start_with_loading(
            fetch_all_sections,
            self.source,
            message=LoadingMessages.LOADING_CONTENT,
            options=self.load_options,
            on_result=self._handle_all_sections_result,
            on_error=self._handle_load_error,
            on_finished=self._on_all_sections_finished,
        )

    @Slot(object)
    def _handle_all_sections_result(self, results):
        for section, tab in self.tabs.items():
            result = results.get(section) or {}
            if "error" in result:
                tab._show_error(f"Error loading {tab.title.lower()}: {result['error']}")
            else:
                tab.handle_result(result)

    @Slot(tuple)
    def _handle_load_error(self, error_tuple):
        exctype, value, traceback_str = error_tuple
        logger.error(f"Section load worker failed: {exctype.__name__} - {value}\n{traceback_str}")
        for tab in self.tabs.values():
            tab._show_error(f"Error loading content: {value}")

    @Slot()
    def _on_all_sections_finished(self):
        logger.info("Section load finished.")
        self.initial_load_running = False
        self._set_loading_state(False)
        self.initial_loading.notify_loaded()

    def _fetch_for(self, tab):
        if tab is self.submissions_tab:
            return fetch_submissions_data, (self.source,)
        return fetch_section_data, (self.source, tab.section)

    def refresh_section(self, tab):
        """Reload one tab. Its busy flag drives the loader while the worker runs."""
        if tab.busy:
            logger.warning(f"Tab {tab.title} is already refreshing.")
            return

        fetch_func, args = self._fetch_for(tab)
        logger.info(f"Starting REFRESH worker for {fetch_func.__name__} on tab {tab.title}")
        tab._show_loading(f"<i>{tab.loading_message}</i>")

        worker = Worker(fetch_func, *args, force_refresh=True)
        worker.signals.result.connect(tab.handle_result)
        worker.signals.error.connect(tab.handle_error)
        # Clears the busy flag even when populate_ui is never reached
        worker.signals.finished.connect(tab._hide_loading)
        self.threadpool.start(worker)

    def save_current_settings(self):
        """Write settings on the pool. The loader appears only if the write outlasts the debounce."""
        self.save_settings_button.setEnabled(False)
        self.debounced_loader.show(LoadingMessages.SAVING_CHANGES)

        worker = Worker(save_settings, self.settings)
        worker.signals.error.connect(self._handle_save_error)
        worker.signals.finished.connect(self.debounced_loader.hide)
        worker.signals.finished.connect(self._on_save_finished)
        self.threadpool.start(worker)

    @Slot(tuple)
    def _handle_save_error(self, error_tuple):
        exctype, value, _ = error_tuple
        logger.error(f"Saving settings failed: {exctype.__name__} - {value}")

    @Slot()
    def _on_save_finished(self):
        self.save_settings_button.setEnabled(True)

    def closeEvent(self, event):
        logger.info("Closing MainWindow; waiting for running workers.")
        self.threadpool.waitForDone(2000)
        super().closeEvent(event)
