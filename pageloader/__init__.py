from pageloader.hooks import (
    ComponentLoading,
    DataLoading,
    MinimalLoaderControls,
    use_component_loading,
    use_data_loading,
)
from pageloader.initial import InitialLoadingProvider, InitialLoadPhase, use_initial_loading
from pageloader.logging import get_logger, set_log_level
from pageloader.options import LoaderOptions, LoaderPosition, LoaderSize, LoadingState
from pageloader.provider import LoadingProviderError, MinimalLoadingProvider, use_minimal_loading
from pageloader.store import LoadingHandle, LoadingStore

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("pageloader")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    "LoadingStore",
    "LoadingHandle",
    "LoaderOptions",
    "LoaderSize",
    "LoaderPosition",
    "LoadingState",
    "MinimalLoadingProvider",
    "InitialLoadingProvider",
    "InitialLoadPhase",
    "LoadingProviderError",
    "ComponentLoading",
    "DataLoading",
    "MinimalLoaderControls",
    "use_minimal_loading",
    "use_initial_loading",
    "use_component_loading",
    "use_data_loading",
    "get_logger",
    "set_log_level",
]
