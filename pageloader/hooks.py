"""
Entry points feature code uses to report busy state.

* :class:`ComponentLoading` turns a component's own busy flag into
  ``show``/``hide`` calls, only on transitions.
* :class:`DataLoading` wraps an operation so that the loader is hidden on
  every exit path.
* :class:`MinimalLoaderControls` offers the preset show variants.
"""


from PySide6.QtCore import QObject, QThreadPool, Slot

from .logging import get_logger
from .options import COMPONENT_OPTIONS, DEFAULT_DATA_MESSAGE, LoaderOptions, LoaderPosition, LoaderSize
from .provider import use_minimal_loading
from .workers import Worker

logger = get_logger("hooks")


class ComponentLoading:
    """
    Binds a component's busy flag to the shared loading store.

    The binding remembers the last ``(is_loading, message)`` pair it saw and
    only talks to the store when that pair changes. It never listens to the
    store, so store updates cannot feed back into it.

    Args:
        context: The component (or any object inside a provider's shell), or a LoadingStore.

    Raises:
        LoadingProviderError: If no provider is reachable from ``context``.
    """

    def __init__(self, context):
        self._store = use_minimal_loading(context)
        self._is_loading = False
        self._message = None

    @property
    def is_loading(self):
        return self._is_loading

    def update(self, is_loading, message=None):
        """
        Report the component's current busy flag.

        ``False -> True`` shows the loader, ``True -> False`` hides it. A new
        message while still loading re-shows with that message. Anything else
        is a no-op.
        """
        is_loading = bool(is_loading)
        if is_loading == self._is_loading and message == self._message:
            return

        was_loading = self._is_loading
        self._is_loading = is_loading
        self._message = message

        if is_loading:
            self._store.show(message, COMPONENT_OPTIONS)
        elif was_loading:
            self._store.hide()

    def bind(self, signal, message=None):
        """Drive the binding from a ``Signal(bool)`` emitted by the component."""
        signal.connect(lambda loading: self.update(loading, message))


def use_component_loading(context, is_loading, message=None):
    """
    Report ``is_loading`` for ``context``, reusing one binding per component.

    Returns:
        ComponentLoading: the binding attached to ``context``.
    """
    binding = getattr(context, "_component_loading", None)
    if binding is None:
        binding = ComponentLoading(context)
        context._component_loading = binding
    binding.update(is_loading, message)
    return binding


class MinimalLoaderControls:
    """Manual control of the minimal loader with the common presets."""

    def __init__(self, context):
        self._store = use_minimal_loading(context)

    @property
    def is_loading(self):
        return self._store.is_loading

    def show_loader(self, message=None, options=None):
        return self._store.show(message, LoaderOptions().merged(options))

    def show_inline_loader(self, message=None):
        return self._store.show(
            message,
            LoaderOptions(LoaderSize.SMALL, LoaderPosition.INLINE, show_message=True, persistent=True),
        )

    def show_center_loader(self, message=None):
        return self._store.show(
            message,
            LoaderOptions(LoaderSize.MEDIUM, LoaderPosition.CENTER, show_message=True, persistent=True),
        )

    def hide_loader(self):
        self._store.hide()


class DataLoading(QObject):
    """
    Runs operations with the loader shown for exactly their duration.

    Every variant shows before the operation starts and hides once when it
    ends, whether it returned, raised or was cancelled. Errors reach the
    caller unchanged. Calls are not reference counted: when two loads
    overlap, whichever finishes first hides the loader for both.

    Args:
        context: Component inside a provider's shell, or a LoadingStore.
        threadpool: Pool used by :meth:`start_with_loading`. Defaults to the global pool.
        parent: Optional QObject parent.
    """

    def __init__(self, context, threadpool=None, parent=None):
        super().__init__(parent)
        self._store = use_minimal_loading(context)
        self.threadpool = threadpool or QThreadPool.globalInstance()
        self._active = {}  # WorkerSignals -> Worker, kept alive until finished

    @property
    def active_count(self):
        return len(self._active)

    @staticmethod
    def _options(options):
        return COMPONENT_OPTIONS.merged(options)

    def fetch_with_loading(self, operation, message=DEFAULT_DATA_MESSAGE, options=None):
        """Call ``operation()`` on the current thread with the loader shown."""
        with self._store.show(message or DEFAULT_DATA_MESSAGE, self._options(options)):
            return operation()

    async def fetch_with_loading_async(self, operation, message=DEFAULT_DATA_MESSAGE, options=None):
        """Await ``operation()`` with the loader shown."""
        with self._store.show(message or DEFAULT_DATA_MESSAGE, self._options(options)):
            return await operation()

    def start_with_loading(
        self,
        fn,
        *args,
        message=DEFAULT_DATA_MESSAGE,
        options=None,
        on_result=None,
        on_error=None,
        on_finished=None,
        **kwargs,
    ):
        """
        Run ``fn(*args, **kwargs)`` on the thread pool with the loader shown.

        The loader is hidden from the worker's ``finished`` signal, which fires
        after both success and failure. Callbacks are connected before the
        worker starts.

        Returns:
            Worker: the started worker.
        """
        worker = Worker(fn, *args, **kwargs)
        handle = self._store.show(message or DEFAULT_DATA_MESSAGE, self._options(options))
        worker.loading_handle = handle

        worker.signals.finished.connect(handle.release)
        if on_result is not None:
            worker.signals.result.connect(on_result)
        if on_error is not None:
            worker.signals.error.connect(on_error)
        if on_finished is not None:
            worker.signals.finished.connect(on_finished)
        worker.signals.finished.connect(self._on_worker_finished)

        self._active[worker.signals] = worker
        logger.debug(f"Starting worker {worker.name} ({message!r})")
        self.threadpool.start(worker)
        return worker

    @Slot()
    def _on_worker_finished(self):
        worker = self._active.pop(self.sender(), None)
        if worker is not None:
            logger.debug(f"Worker {worker.name} released its loader")


def use_data_loading(context, threadpool=None):
    return DataLoading(context, threadpool=threadpool)
