"""UI components for Chronicle Desktop."""

from .main_window import MainWindow
from .styles import STYLESHEET

__all__ = [
    'MainWindow',
    'STYLESHEET',
]
