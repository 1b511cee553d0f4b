"""
Providers attach one loading store to an application shell.

Components never reach a store through a module-level variable: they pass
themselves (or any QObject inside the shell) to :func:`use_minimal_loading`,
which walks up the parent chain to the nearest provider.
"""


from PySide6.QtCore import QObject

from .logging import get_logger
from .store import LoadingStore
from .widgets import MinimalLoader

logger = get_logger("provider")


class LoadingProviderError(RuntimeError):
    """Raised when a loading hook runs outside its provider, or a provider is mounted twice."""


def find_provider(context, provider_type):
    """
    Find the nearest ``provider_type`` attached to ``context`` or one of its ancestors.

    A provider counts as attached to an object when it is a direct child of it.

    Returns:
        The provider instance, or None if there is none up to the root object.
    """
    obj = context
    while obj is not None:
        if isinstance(obj, provider_type):
            return obj
        for child in obj.children():
            if isinstance(child, provider_type):
                return child
        obj = obj.parent()
    return None


def ensure_not_mounted(shell, provider_type):
    for child in shell.children():
        if isinstance(child, provider_type):
            raise LoadingProviderError(f"{provider_type.__name__} is already mounted on {type(shell).__name__}")


class MinimalLoadingProvider(QObject):
    """
    Owns the shell's :class:`LoadingStore` and the :class:`MinimalLoader` that renders it.

    Args:
        shell: Top-level widget of the application. The loader widget floats over it.
        fade_ms: Fade duration for the loader badge.

    Raises:
        LoadingProviderError: If the shell already has a MinimalLoadingProvider.
    """

    def __init__(self, shell, fade_ms=200):
        ensure_not_mounted(shell, MinimalLoadingProvider)
        super().__init__(shell)
        self.setObjectName("minimalLoadingProvider")
        self.store = LoadingStore(self)
        self.loader = MinimalLoader(shell, fade_ms=fade_ms)
        self.store.changed.connect(self._render)
        logger.info(f"MinimalLoadingProvider mounted on {type(shell).__name__}")

    def _render(self):
        state = self.store.state
        self.loader.present(
            state.is_loading,
            state.message,
            size=state.options.size,
            position=state.options.position,
            show_message=state.options.show_message,
        )


def use_minimal_loading(context) -> LoadingStore:
    """
    Return the loading store visible from ``context``.

    Args:
        context: A LoadingStore (returned as is), a provider, or any QObject
            inside a shell that has a MinimalLoadingProvider.

    Raises:
        LoadingProviderError: If no provider is reachable from ``context``.
    """
    if isinstance(context, LoadingStore):
        return context
    provider = find_provider(context, MinimalLoadingProvider) if isinstance(context, QObject) else None
    if provider is None:
        raise LoadingProviderError("use_minimal_loading must be used within a MinimalLoadingProvider")
    return provider.store
