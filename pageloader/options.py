"""
Loader option and state value types.
"""

from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Mapping

DEFAULT_MESSAGE = "Loading..."
DEFAULT_DATA_MESSAGE = "Loading data..."


class LoaderSize(str, Enum):
    TINY = "tiny"
    SMALL = "small"
    MEDIUM = "medium"


class LoaderPosition(str, Enum):
    CENTER = "center"
    TOP_RIGHT = "top-right"
    BOTTOM_RIGHT = "bottom-right"
    INLINE = "inline"


@dataclass(frozen=True)
class LoaderOptions:
    """
    Display options for the minimal loader.

    Attributes:
        size: Badge size.
        position: Where the badge is placed relative to the shell.
        show_message: Whether the message text is rendered under the ring.
        persistent: Advisory flag meant to survive navigation. Nothing enforces it.
    """

    size: LoaderSize = LoaderSize.SMALL
    position: LoaderPosition = LoaderPosition.TOP_RIGHT
    show_message: bool = False
    persistent: bool = False

    def __post_init__(self):
        # Accept plain strings ("medium", "top-right") from callers and config files
        object.__setattr__(self, "size", LoaderSize(self.size))
        object.__setattr__(self, "position", LoaderPosition(self.position))

    def merged(self, overrides=None, **kwargs) -> "LoaderOptions":
        """
        Return a copy with ``overrides`` laid over this value.

        Args:
            overrides: Another LoaderOptions (all fields win) or a partial mapping.
            **kwargs: Individual field overrides, applied last.

        Raises:
            ValueError: If a key is not a LoaderOptions field or a value is not a valid enum member.
        """
        values = {}
        if isinstance(overrides, LoaderOptions):
            values.update({f.name: getattr(overrides, f.name) for f in fields(LoaderOptions)})
        elif overrides is not None:
            values.update(overrides)
        values.update(kwargs)

        unknown = set(values) - {f.name for f in fields(LoaderOptions)}
        if unknown:
            raise ValueError(f"Unknown loader options: {sorted(unknown)}")
        return replace(self, **values)

    @classmethod
    def from_partial(cls, partial: "LoaderOptions | Mapping[str, Any] | None" = None) -> "LoaderOptions":
        """Build options from a partial mapping, filling omitted fields with the defaults."""
        return cls().merged(partial)


DEFAULT_OPTIONS = LoaderOptions()

# Options the component binding and data wrapper apply before any caller overrides
COMPONENT_OPTIONS = LoaderOptions(persistent=True)


@dataclass(frozen=True)
class LoadingState:
    """Snapshot of the store at one point in time."""

    is_loading: bool = False
    message: str = DEFAULT_MESSAGE
    options: LoaderOptions = field(default_factory=LoaderOptions)
