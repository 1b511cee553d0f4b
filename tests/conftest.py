"""
Shared pytest fixtures for pageloader tests.
"""

import os

import pytest

# Widgets are created in every test; no display is needed
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QWidget  # noqa: E402

from pageloader import MinimalLoadingProvider  # noqa: E402


@pytest.fixture
def shell(qtbot):
    """A bare top-level widget standing in for the application shell."""
    widget = QWidget()
    widget.resize(800, 600)
    qtbot.addWidget(widget)
    return widget


@pytest.fixture
def provider(shell):
    """A MinimalLoadingProvider mounted on ``shell`` with fades disabled."""
    return MinimalLoadingProvider(shell, fade_ms=0)


@pytest.fixture
def store(provider):
    return provider.store


@pytest.fixture
def component(shell, provider):
    """A child widget nested two levels below a shell that has a provider mounted."""
    outer = QWidget(shell)
    return QWidget(outer)


@pytest.fixture
def recorder(store):
    """Records every show/hide reaching the store, in order."""
    calls = []
    store.changed.connect(lambda: calls.append(("changed", store.is_loading, store.message)))
    return calls


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')")
