import logging
import json
from pathlib import Path

from pageloader.options import LoaderPosition, LoaderSize

logger = logging.getLogger(__name__)

# Constants for configuration file path
CONFIG_DIR = Path.home() / ".chronicle_desktop"
CONFIG_FILE = CONFIG_DIR / "loader.json"

DEFAULT_DATA_PATH = Path(__file__).resolve().parent.parent / "data" / "sections.json"

DEFAULT_SETTINGS = {
    "min_display_ms": 1200,
    "fallback_ms": 3000,
    "debounce_ms": 300,
    "default_size": LoaderSize.SMALL.value,
    "default_position": LoaderPosition.TOP_RIGHT.value,
    "data_path": str(DEFAULT_DATA_PATH),
    "simulated_latency_ms": 400,
}


def _validate(key, value):
    """Return True if ``value`` is acceptable for setting ``key``."""
    if key in ("min_display_ms", "fallback_ms", "debounce_ms", "simulated_latency_ms"):
        return isinstance(value, int) and not isinstance(value, bool) and value >= 0
    if key == "default_size":
        return value in {s.value for s in LoaderSize}
    if key == "default_position":
        return value in {p.value for p in LoaderPosition}
    if key == "data_path":
        return isinstance(value, str) and bool(value)
    return False


def load_settings(config_file=None):
    """Load loader settings from the config file, merged over the defaults."""
    config_file = Path(config_file) if config_file else CONFIG_FILE
    logger.debug(f"Attempting to load settings from {config_file}")
    settings = dict(DEFAULT_SETTINGS)
    if not config_file.exists():
        logger.info("Config file not found. Using default loader settings.")
        return settings

    try:
        with open(config_file, "r") as f:
            loaded_data = json.load(f)
    except json.JSONDecodeError:
        logger.warning(f"Config file {config_file} is corrupted. Using default loader settings.")
        return settings
    except OSError:
        logger.exception(f"Unexpected error reading config file {config_file}")
        return settings

    if not isinstance(loaded_data, dict):
        logger.warning(f"Config file {config_file} does not hold an object. Using default loader settings.")
        return settings

    for key, value in loaded_data.items():
        if key not in DEFAULT_SETTINGS:
            logger.warning(f"Skipping unknown setting in config: {key}")
        elif not _validate(key, value):
            logger.warning(f"Skipping invalid setting in config: {key} = {value!r}")
        else:
            settings[key] = value

    logger.info(f"Loaded loader settings from {config_file}.")
    return settings


def save_settings(settings, config_file=None):
    """Save loader settings to the config file, keeping only known, valid keys."""
    config_file = Path(config_file) if config_file else CONFIG_FILE
    logger.debug(f"Saving loader settings to {config_file}")
    data_to_save = {}
    for key, value in settings.items():
        if key in DEFAULT_SETTINGS and _validate(key, value):
            data_to_save[key] = value
        else:
            logger.warning(f"Skipping save for invalid setting: {key} = {value!r}")

    try:
        config_file.parent.mkdir(parents=True, exist_ok=True)
        with open(config_file, "w") as f:
            json.dump(data_to_save, f, indent=4)
        logger.info("Loader settings saved successfully.")
    except OSError:
        logger.exception(f"Failed to save loader settings to {config_file}")
