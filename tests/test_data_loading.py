import asyncio

import pytest
from PySide6.QtCore import QThreadPool

from pageloader import DataLoading, use_data_loading
from pageloader.options import DEFAULT_DATA_MESSAGE, LoaderPosition
from pageloader.workers import Worker


@pytest.fixture
def data_loading(component):
    return DataLoading(component)


class TestFetchWithLoading:
    def test_returns_result_and_hides(self, store, data_loading):
        seen = []

        def operation():
            seen.append((store.is_loading, store.message))
            return 42

        assert data_loading.fetch_with_loading(operation) == 42
        assert seen == [(True, DEFAULT_DATA_MESSAGE)]
        assert not store.is_loading

    def test_error_propagates_and_hides(self, store, data_loading, mocker):
        hide = mocker.spy(store, "hide")

        def operation():
            raise ValueError("bad row")

        with pytest.raises(ValueError, match="bad row"):
            data_loading.fetch_with_loading(operation, "Saving changes...")

        assert hide.call_count == 1
        assert not store.is_loading

    def test_options_are_merged_over_persistent_defaults(self, store, data_loading):
        captured = []
        data_loading.fetch_with_loading(lambda: captured.append(store.options), options={"position": "center"})
        assert captured[0].position is LoaderPosition.CENTER
        assert captured[0].persistent is True

    def test_empty_message_falls_back(self, store, data_loading):
        data_loading.fetch_with_loading(lambda: None, message="")
        assert store.message == DEFAULT_DATA_MESSAGE


class TestFetchWithLoadingAsync:
    def test_returns_result(self, store, data_loading):
        async def operation():
            await asyncio.sleep(0)
            return store.is_loading

        assert asyncio.run(data_loading.fetch_with_loading_async(operation)) is True
        assert not store.is_loading

    def test_error_propagates(self, store, data_loading, mocker):
        hide = mocker.spy(store, "hide")

        async def operation():
            raise KeyError("cities")

        with pytest.raises(KeyError):
            asyncio.run(data_loading.fetch_with_loading_async(operation))
        assert hide.call_count == 1

    def test_overlapping_loads_first_finisher_hides(self, store, data_loading):
        """No reference counting: the load that ends first hides the loader for both."""
        seen = []

        async def main():
            release_a, release_b = asyncio.Event(), asyncio.Event()

            async def wait_for(event):
                await event.wait()

            task_a = asyncio.ensure_future(data_loading.fetch_with_loading_async(lambda: wait_for(release_a), "X"))
            await asyncio.sleep(0)
            task_b = asyncio.ensure_future(data_loading.fetch_with_loading_async(lambda: wait_for(release_b), "Y"))
            await asyncio.sleep(0)
            seen.append(("both running", store.is_loading, store.message))

            release_b.set()
            await task_b
            seen.append(("after B", store.is_loading, store.message))

            release_a.set()
            await task_a
            seen.append(("after A", store.is_loading, store.message))

        asyncio.run(main())
        assert seen == [("both running", True, "Y"), ("after B", False, "Y"), ("after A", False, "Y")]

    def test_cancellation_hides(self, store, data_loading):
        async def main():
            task = asyncio.ensure_future(data_loading.fetch_with_loading_async(lambda: asyncio.sleep(10)))
            await asyncio.sleep(0)
            assert store.is_loading
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        asyncio.run(main())
        assert not store.is_loading


class TestStartWithLoading:
    def test_shows_until_worker_finishes(self, qtbot, store, data_loading):
        results = []
        worker = data_loading.start_with_loading(
            lambda a, b=0: a + b, 2, b=3, message="Fetching data...", on_result=results.append
        )

        assert isinstance(worker, Worker)
        assert store.is_loading
        assert store.message == "Fetching data..."

        qtbot.waitUntil(lambda: not store.is_loading, timeout=5000)
        qtbot.waitUntil(lambda: data_loading.active_count == 0, timeout=5000)
        assert results == [5]

    def test_hides_on_worker_error(self, qtbot, store, data_loading):
        errors = []

        def failing():
            raise RuntimeError("source unavailable")

        data_loading.start_with_loading(failing, on_error=errors.append)
        qtbot.waitUntil(lambda: not store.is_loading, timeout=5000)
        qtbot.waitUntil(lambda: len(errors) == 1, timeout=5000)

        exctype, value, traceback_str = errors[0]
        assert exctype is RuntimeError
        assert "source unavailable" in traceback_str

    def test_on_finished_called(self, qtbot, data_loading):
        finished = []
        data_loading.start_with_loading(lambda: None, on_finished=lambda: finished.append(True))
        qtbot.waitUntil(lambda: finished == [True], timeout=5000)

    def test_uses_given_threadpool(self, component, mocker):
        pool = mocker.MagicMock(spec=QThreadPool)
        loading = DataLoading(component, threadpool=pool)
        worker = loading.start_with_loading(lambda: None)

        pool.start.assert_called_once_with(worker)
        assert loading.active_count == 1
        assert worker.loading_handle.released is False


def test_use_data_loading(store, component):
    loading = use_data_loading(component)
    assert isinstance(loading, DataLoading)
    assert loading.fetch_with_loading(lambda: store.is_loading) is True
