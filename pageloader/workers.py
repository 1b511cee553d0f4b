import traceback

from PySide6.QtCore import QObject, QRunnable, Signal, Slot

from .logging import get_logger

logger = get_logger("workers")


class WorkerSignals(QObject):
    """
    Signals for worker thread communication.

    Signals:
        finished: Emitted when the worker completes, after result or error
        error: Emitted on exception with tuple (exctype, value, traceback)
        result: Emitted with the return value of the worker function
    """

    finished = Signal()
    error = Signal(tuple)
    result = Signal(object)


class Worker(QRunnable):
    """
    Runs a callable on a QThreadPool thread and reports back through signals.

    Args:
        fn: The function to run in the worker thread
        *args: Arguments to pass to the function
        **kwargs: Keyword arguments to pass to the function
    """

    def __init__(self, fn, *args, **kwargs):
        super().__init__()
        self.fn = fn
        self.args = args
        self.kwargs = kwargs
        self.signals = WorkerSignals()

    @property
    def name(self):
        return getattr(self.fn, "__name__", repr(self.fn))

    @Slot()
    def run(self):
        """Execute the target function with provided arguments."""
        logger.debug(f"Worker started for function: {self.name}")

        try:
            result = self.fn(*self.args, **self.kwargs)
        except Exception as e:
            logger.exception(f"Worker error in function {self.name}")
            self.signals.error.emit((type(e), e, traceback.format_exc()))
        else:
            self.signals.result.emit(result)
        finally:
            logger.debug(f"Worker finished for function: {self.name}")
            self.signals.finished.emit()
