"""
One-time full-page splash shown while the shell paints for the first time.

The splash moves through ``INIT -> WAITING -> HIDDEN`` and never comes back.
Once the host reports that loading finished, it stays up until at least
``min_display_ms`` have passed since mount. If that report never comes, the
fallback timer hides it after ``fallback_ms``.
"""

import math
import time
from enum import Enum

from PySide6.QtCore import QObject, Qt, QTimer, Signal, Slot

from .logging import get_logger
from .provider import LoadingProviderError, ensure_not_mounted, find_provider
from .widgets import InitialLoader

logger = get_logger("initial")

MIN_DISPLAY_MS = 1200
FALLBACK_MS = 3000


class InitialLoadPhase(Enum):
    INIT = "init"
    WAITING = "waiting"
    HIDDEN = "hidden"


class InitialLoadingProvider(QObject):
    """
    Owns the ``is_initial_loading`` flag and the :class:`InitialLoader` splash.

    Args:
        shell: Top-level widget the splash covers.
        min_display_ms: Minimum time the splash stays up after mount.
        fallback_ms: Time after mount at which the splash is hidden even without a load signal.
        static_splash: Optional pre-application splash (e.g. QSplashScreen) to close on mount.
        fade_ms: Fade-out duration of the splash widget.
        clock: Callable returning seconds, used to measure time since mount.

    Signals:
        interactive: Emitted once on mount, after the static splash is gone.
        initial_loading_changed: Emitted once with False when the splash is hidden.
    """

    interactive = Signal()
    initial_loading_changed = Signal(bool)

    def __init__(
        self,
        shell,
        min_display_ms=MIN_DISPLAY_MS,
        fallback_ms=FALLBACK_MS,
        static_splash=None,
        fade_ms=500,
        clock=None,
    ):
        ensure_not_mounted(shell, InitialLoadingProvider)
        super().__init__(shell)
        self.setObjectName("initialLoadingProvider")
        self.shell = shell
        self.min_display_ms = min_display_ms
        self.fallback_ms = fallback_ms
        self.static_splash = static_splash
        self._clock = clock or time.monotonic

        self.phase = InitialLoadPhase.INIT
        self._started_at = None
        self._loaded = False

        self._fallback_timer = QTimer(self)
        self._fallback_timer.setSingleShot(True)
        self._fallback_timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._fallback_timer.timeout.connect(self._on_fallback)

        self._hide_timer = QTimer(self)
        self._hide_timer.setSingleShot(True)
        self._hide_timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._hide_timer.timeout.connect(self.dismiss)

        self.loader = InitialLoader(shell, fade_ms=fade_ms)
        self.loader.present(True)

    @property
    def is_initial_loading(self):
        return self.phase is not InitialLoadPhase.HIDDEN

    def elapsed_ms(self):
        if self._started_at is None:
            return 0
        return (self._clock() - self._started_at) * 1000

    def start(self, already_loaded=False):
        """
        Mount the provider: unlock the shell and start waiting.

        Args:
            already_loaded: True if the host finished loading before mount.
        """
        if self.phase is not InitialLoadPhase.INIT:
            logger.debug("Initial loader already started; ignoring start()")
            return

        self._started_at = self._clock()
        self._mark_interactive()
        self.phase = InitialLoadPhase.WAITING

        if already_loaded or self._loaded:
            self._schedule_hide()
        else:
            self._fallback_timer.start(self.fallback_ms)

    @Slot()
    def notify_loaded(self):
        """The host finished loading. Safe to call any number of times."""
        if self.phase is InitialLoadPhase.INIT:
            self._loaded = True
            return
        if self.phase is InitialLoadPhase.HIDDEN or self._loaded:
            return
        self._loaded = True
        self._fallback_timer.stop()
        self._schedule_hide()

    @Slot()
    def dismiss(self):
        """Hide the splash for good."""
        if self.phase is InitialLoadPhase.HIDDEN:
            return
        self.phase = InitialLoadPhase.HIDDEN
        self._fallback_timer.stop()
        self._hide_timer.stop()
        self.loader.present(False)
        logger.info(f"Initial loader hidden after {self.elapsed_ms():.0f} ms")
        self.initial_loading_changed.emit(False)

    def _on_fallback(self):
        if self.phase is InitialLoadPhase.WAITING:
            logger.warning(f"No load signal within {self.fallback_ms} ms; hiding initial loader")
            self._schedule_hide()

    def _schedule_hide(self):
        if self.phase is InitialLoadPhase.HIDDEN or self._hide_timer.isActive():
            # A hide already scheduled fires no later than a new one would
            return
        remaining = max(0, math.ceil(self.min_display_ms - self.elapsed_ms()))
        logger.debug(f"Initial loader hides in {remaining} ms")
        self._hide_timer.start(remaining)

    def _mark_interactive(self):
        if self.static_splash is not None:
            if hasattr(self.static_splash, "finish"):
                self.static_splash.finish(self.shell)
            else:
                self.static_splash.close()
            self.static_splash = None
        self.interactive.emit()


def use_initial_loading(context) -> InitialLoadingProvider:
    """
    Return the initial loading provider visible from ``context``.

    Raises:
        LoadingProviderError: If no provider is reachable from ``context``.
    """
    provider = find_provider(context, InitialLoadingProvider) if isinstance(context, QObject) else None
    if provider is None:
        raise LoadingProviderError("use_initial_loading must be used within an InitialLoadingProvider")
    return provider
