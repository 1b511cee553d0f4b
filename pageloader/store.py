"""
Shared loading state for one application shell.

The store is a plain QObject: every mutation happens on the GUI thread and
is announced through Qt signals, so any widget connected to ``changed``
re-renders after each call. There is no queueing or reference counting;
the most recent ``show``/``hide`` decides what is visible.
"""


from PySide6.QtCore import QObject, Signal, Slot

from .logging import get_logger
from .options import DEFAULT_MESSAGE, DEFAULT_OPTIONS, LoaderOptions, LoadingState

logger = get_logger("store")


class LoadingHandle(QObject):
    """
    Scoped acquisition of the loading flag.

    Returned by :meth:`LoadingStore.show`. Releasing the handle hides the
    loader exactly once, however many times ``release`` is called. The
    handle does not know about other handles: releasing it hides the loader
    even if another caller still expects it to be visible.

    Usage::

        with store.show("Saving changes..."):
            save()
    """

    def __init__(self, store):
        super().__init__()
        self._store = store
        self._released = False

    @property
    def released(self):
        return self._released

    @Slot()
    def release(self):
        """Hide the loader if this handle has not done so already."""
        if self._released:
            return
        self._released = True
        self._store.hide()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()
        return False


class LoadingStore(QObject):
    """
    Holds ``is_loading``, ``message`` and the current :class:`LoaderOptions`.

    Signals:
        changed: Emitted after any field changes.
        loading_changed: Emitted with the new flag when ``is_loading`` flips.
    """

    changed = Signal()
    loading_changed = Signal(bool)

    def __init__(self, parent=None):
        super().__init__(parent)
        self._is_loading = False
        self._message = DEFAULT_MESSAGE
        self._options = DEFAULT_OPTIONS

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def message(self) -> str:
        return self._message

    @property
    def options(self) -> LoaderOptions:
        return self._options

    @property
    def state(self) -> LoadingState:
        return LoadingState(self._is_loading, self._message, self._options)

    def show(self, message=None, options=None) -> LoadingHandle:
        """
        Show the loader, replacing any message and options currently displayed.

        Args:
            message: Text for the loader. Falls back to "Loading..." when empty.
            options: Partial mapping or LoaderOptions merged over the defaults.

        Returns:
            LoadingHandle: releasing it calls :meth:`hide` once.
        """
        self._message = message or DEFAULT_MESSAGE
        self._options = DEFAULT_OPTIONS.merged(options)
        was_loading = self._is_loading
        self._is_loading = True
        logger.debug(f"Loader shown: {self._message!r} ({self._options.size.value}, {self._options.position.value})")

        self.changed.emit()
        if not was_loading:
            self.loading_changed.emit(True)
        return LoadingHandle(self)

    @Slot()
    def hide(self):
        """Hide the loader. Calling it while hidden does nothing."""
        if not self._is_loading:
            return
        self._is_loading = False
        logger.debug("Loader hidden")
        self.changed.emit()
        self.loading_changed.emit(False)

    @Slot(bool)
    def set_loading(self, loading):
        """Flip the flag without touching message or options."""
        if loading == self._is_loading:
            return
        self._is_loading = bool(loading)
        self.changed.emit()
        self.loading_changed.emit(self._is_loading)
