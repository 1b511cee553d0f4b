"""
Helpers for timing loaders around asynchronous operations.
"""

import asyncio
from dataclasses import dataclass

from PySide6.QtCore import QObject, QTimer, Slot

from .logging import get_logger
from .options import DEFAULT_MESSAGE
from .provider import use_minimal_loading

logger = get_logger("utils")


class LoadingTimeoutError(TimeoutError):
    """Raised by :func:`with_timeout` when an operation outlives its maximum duration."""


@dataclass(frozen=True)
class LoadingConfig:
    """
    Timing constraints for a loader-wrapped operation.

    Durations are in milliseconds. A value of 0 or less disables that constraint.
    """

    message: str | None = None
    min_duration: int = 1000
    max_duration: int = 30000


class LoadingMessages:
    # General
    DEFAULT = DEFAULT_MESSAGE
    INITIALIZING = "Initializing Chronicle Exhibits..."

    # Data loading
    FETCHING_DATA = "Fetching data..."
    LOADING_CONTENT = "Loading content..."
    UPDATING_DATA = "Updating data..."
    SAVING_CHANGES = "Saving changes..."

    # Page specific
    LOADING_HERO = "Loading hero section..."
    LOADING_PORTFOLIO = "Loading portfolio..."
    LOADING_EXHIBITIONS = "Loading exhibitions..."
    LOADING_EVENTS = "Loading events..."
    LOADING_BLOG = "Loading blog posts..."
    LOADING_CITIES = "Loading city pages..."
    LOADING_SUBMISSIONS = "Loading submissions..."

    # Actions
    PROCESSING = "Processing..."
    UPLOADING = "Uploading files..."
    DOWNLOADING = "Downloading..."
    GENERATING = "Generating content..."

    # Authentication
    SIGNING_IN = "Signing in..."
    SIGNING_OUT = "Signing out..."
    VERIFYING = "Verifying credentials..."

    # Navigation
    NAVIGATING = "Loading page..."
    REDIRECTING = "Redirecting..."


class LoadingConfigs:
    QUICK = LoadingConfig(min_duration=500, max_duration=10000)  # form submissions
    STANDARD = LoadingConfig(min_duration=1000, max_duration=30000)  # data fetching
    LONG = LoadingConfig(min_duration=1500, max_duration=60000)  # file uploads
    CRITICAL = LoadingConfig(min_duration=800, max_duration=15000)  # authentication


async def with_minimum_duration(awaitable, min_duration=1000):
    """Await ``awaitable`` but return no sooner than ``min_duration`` ms after the call."""
    result, _ = await asyncio.gather(awaitable, asyncio.sleep(min_duration / 1000))
    return result


async def with_timeout(awaitable, max_duration=30000, timeout_message="Operation timed out"):
    """
    Await ``awaitable``, giving up after ``max_duration`` ms.

    Raises:
        LoadingTimeoutError: If the operation does not finish in time. It is cancelled.
    """
    try:
        return await asyncio.wait_for(awaitable, max_duration / 1000)
    except asyncio.TimeoutError as e:
        logger.warning(f"Operation cancelled after {max_duration} ms")
        raise LoadingTimeoutError(timeout_message) from e


async def with_loading_constraints(awaitable, config=None):
    """Apply both the maximum and the minimum duration of ``config`` to ``awaitable``."""
    config = config or LoadingConfig()
    constrained = awaitable

    if config.max_duration > 0:
        constrained = with_timeout(constrained, config.max_duration, "Loading timed out. Please try again.")

    if config.min_duration > 0:
        constrained = with_minimum_duration(constrained, config.min_duration)

    return await constrained


def create_loading_wrapper(context):
    """
    Build an async wrapper that shows the loader around an operation.

    Usage::

        run = create_loading_wrapper(window)
        rows = await run(fetch_rows, LoadingConfigs.QUICK)
    """
    store = use_minimal_loading(context)

    async def run(operation, config=None):
        config = config or LoadingConfig()
        with store.show(config.message or LoadingMessages.DEFAULT):
            return await with_loading_constraints(operation(), config)

    return run


class DebouncedLoader(QObject):
    """
    Delays ``show`` so that operations faster than ``debounce_ms`` never flash a loader.

    Args:
        context: Component inside a provider's shell, or a LoadingStore.
        debounce_ms: Delay before a pending show reaches the store.
    """

    def __init__(self, context, debounce_ms=300, parent=None):
        super().__init__(parent)
        self._store = use_minimal_loading(context)
        self._showing = False
        self._pending_message = None

        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(debounce_ms)
        self._timer.timeout.connect(self._fire)

    @property
    def showing(self):
        return self._showing

    @property
    def pending(self):
        return self._timer.isActive()

    def show(self, message=None):
        self._timer.stop()
        if not self._showing:
            self._pending_message = message
            self._timer.start()

    @Slot()
    def hide(self):
        self._timer.stop()
        if self._showing:
            self._store.hide()
            self._showing = False

    def _fire(self):
        self._store.show(self._pending_message)
        self._showing = True
