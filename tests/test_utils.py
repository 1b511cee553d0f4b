import asyncio
import time

import pytest

from pageloader.utils import (
    DebouncedLoader,
    LoadingConfig,
    LoadingConfigs,
    LoadingMessages,
    LoadingTimeoutError,
    create_loading_wrapper,
    with_loading_constraints,
    with_minimum_duration,
    with_timeout,
)
from pageloader.workers import Worker


async def value_after(value, ms=0):
    await asyncio.sleep(ms / 1000)
    return value


class TestWithMinimumDuration:
    def test_fast_operation_is_padded(self):
        start = time.monotonic()
        result = asyncio.run(with_minimum_duration(value_after("rows"), 100))
        assert result == "rows"
        assert time.monotonic() - start >= 0.09

    def test_error_propagates(self):
        async def failing():
            raise ValueError("nope")

        with pytest.raises(ValueError):
            asyncio.run(with_minimum_duration(failing(), 10))


class TestWithTimeout:
    def test_result_within_limit(self):
        assert asyncio.run(with_timeout(value_after(3), 1000)) == 3

    def test_timeout_raises(self):
        with pytest.raises(LoadingTimeoutError, match="Operation timed out"):
            asyncio.run(with_timeout(value_after(3, 500), 20))

    def test_timeout_error_is_a_timeout_error(self):
        assert issubclass(LoadingTimeoutError, TimeoutError)


class TestWithLoadingConstraints:
    def test_timeout_message(self):
        config = LoadingConfig(min_duration=0, max_duration=20)
        with pytest.raises(LoadingTimeoutError, match="Loading timed out. Please try again."):
            asyncio.run(with_loading_constraints(value_after(1, 500), config))

    def test_disabled_constraints(self):
        config = LoadingConfig(min_duration=0, max_duration=0)
        assert asyncio.run(with_loading_constraints(value_after("ok"), config)) == "ok"

    def test_presets(self):
        assert (LoadingConfigs.QUICK.min_duration, LoadingConfigs.QUICK.max_duration) == (500, 10000)
        assert (LoadingConfigs.STANDARD.min_duration, LoadingConfigs.STANDARD.max_duration) == (1000, 30000)
        assert (LoadingConfigs.LONG.min_duration, LoadingConfigs.LONG.max_duration) == (1500, 60000)
        assert (LoadingConfigs.CRITICAL.min_duration, LoadingConfigs.CRITICAL.max_duration) == (800, 15000)


class TestCreateLoadingWrapper:
    def test_shows_with_config_message(self, store, component):
        run = create_loading_wrapper(component)
        seen = []

        async def operation():
            seen.append((store.is_loading, store.message))
            return "done"

        config = LoadingConfig(message=LoadingMessages.UPLOADING, min_duration=0, max_duration=1000)
        assert asyncio.run(run(operation, config)) == "done"
        assert seen == [(True, "Uploading files...")]
        assert not store.is_loading

    def test_hides_after_timeout(self, store, component):
        run = create_loading_wrapper(component)
        config = LoadingConfig(min_duration=0, max_duration=20)

        with pytest.raises(LoadingTimeoutError):
            asyncio.run(run(lambda: value_after(1, 500), config))
        assert not store.is_loading
        assert store.message == LoadingMessages.DEFAULT


class TestDebouncedLoader:
    def test_fast_operation_never_shows(self, qtbot, store, component):
        debounced = DebouncedLoader(component, debounce_ms=200)
        with qtbot.assertNotEmitted(store.changed, wait=300):
            debounced.show("Saving changes...")
            assert debounced.pending
            debounced.hide()
        assert not debounced.showing

    def test_slow_operation_shows_after_delay(self, qtbot, store, component):
        debounced = DebouncedLoader(component, debounce_ms=20)
        debounced.show("Saving changes...")
        assert not store.is_loading

        qtbot.waitUntil(lambda: store.is_loading, timeout=1000)
        assert debounced.showing
        assert store.message == "Saving changes..."

        debounced.hide()
        assert not store.is_loading
        assert not debounced.showing

    def test_worker_finish_hides(self, qtbot, store, component):
        debounced = DebouncedLoader(component, debounce_ms=0)
        worker = Worker(lambda: None)
        worker.signals.finished.connect(debounced.hide)

        debounced.show("Saving changes...")
        qtbot.waitUntil(lambda: debounced.showing, timeout=1000)
        worker.run()

        assert not store.is_loading
        assert not debounced.showing
