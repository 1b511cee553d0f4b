import sys
from pathlib import Path
import logging
import logging.handlers

from pageloader.logging import set_log_level

# --- Logging Setup --- #
LOG_DIR = Path.home() / ".chronicle_desktop"
LOG_FILE = LOG_DIR / "app.log"


def setup_logging():
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    log_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    logger = logging.getLogger()  # Root logger
    logger.setLevel(logging.DEBUG)

    # Console Handler
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(log_formatter)
    console_handler.setLevel(logging.INFO)
    logger.addHandler(console_handler)

    # Rotate logs after 1MB, keep 3 backup files
    file_handler = logging.handlers.RotatingFileHandler(
        LOG_FILE, maxBytes=1024*1024, backupCount=3
    )
    file_handler.setFormatter(log_formatter)
    file_handler.setLevel(logging.DEBUG)
    logger.addHandler(file_handler)

    # pageloader only attaches a NullHandler; its records reach the root handlers
    set_log_level(logging.DEBUG)

    logging.info("Logging configured.")


setup_logging()
# --- End Logging Setup --- #

# Make config/, core/ and ui/ importable when running the script directly
if __package__ is None and not hasattr(sys, 'frozen'):
    script_dir = Path(__file__).resolve().parent
    sys.path.insert(0, str(script_dir))

from PySide6.QtWidgets import QApplication
from qt_material import apply_stylesheet

from config.loader import load_settings
from core.section_source import JsonSectionSource
from ui.main_window import MainWindow

# --- Main Application Execution --- #
if __name__ == "__main__":
    app = QApplication(sys.argv)

    apply_stylesheet(app, theme='light_lightgreen.xml')

    settings = load_settings()
    source = JsonSectionSource(settings["data_path"], latency_ms=settings["simulated_latency_ms"])
    logging.info(f"Using section data from {settings['data_path']}")

    try:
        window = MainWindow(settings, source)
        window.show()
    except Exception as e:
        logging.error(f"Failed to create or show MainWindow: {e}")
        sys.exit(1)

    sys.exit(app.exec())
