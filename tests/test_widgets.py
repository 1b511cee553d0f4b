import pytest

from pageloader.options import LoaderPosition, LoaderSize
from pageloader.widgets import BRAND_TEXT, EDGE_INSET, SIZE_CONFIG, InitialLoader, MinimalLoader, SpinnerRing


@pytest.fixture
def loader(shell):
    return MinimalLoader(shell, fade_ms=0)


class TestMinimalLoader:
    def test_hidden_until_presented(self, loader):
        assert not loader.is_shown
        assert loader.isHidden()
        assert loader.logo_label.text() == BRAND_TEXT

    def test_present_shows_and_spins(self, loader):
        loader.present(True, "Loading...")
        assert loader.is_shown
        assert not loader.isHidden()
        assert loader.ring.spinning

    def test_present_false_hides_and_stops(self, loader):
        loader.present(True)
        loader.present(False)
        assert not loader.is_shown
        assert loader.isHidden()
        assert not loader.ring.spinning

    def test_message_only_rendered_on_request(self, loader):
        loader.present(True, "Uploading files...")
        assert loader.message_label.isHidden()

        loader.present(True, "Uploading files...", show_message=True)
        assert not loader.message_label.isHidden()
        assert loader.message_label.text() == "Uploading files..."

    @pytest.mark.parametrize("size", list(LoaderSize))
    def test_size_sets_ring_diameter(self, loader, size):
        loader.present(True, size=size)
        assert loader.ring.width() == SIZE_CONFIG[size]["ring"]
        assert loader.badge.minimumWidth() == SIZE_CONFIG[size]["container"]

    def test_top_right_is_inset_from_corner(self, shell, loader):
        loader.present(True, position=LoaderPosition.TOP_RIGHT)
        geometry = loader.geometry()
        assert geometry.top() == EDGE_INSET
        assert geometry.right() + 1 == shell.width() - EDGE_INSET

    def test_bottom_right_is_inset_from_corner(self, shell, loader):
        loader.present(True, position="bottom-right")
        geometry = loader.geometry()
        assert geometry.bottom() + 1 == shell.height() - EDGE_INSET

    def test_center_covers_parent_and_follows_resize(self, qtbot, shell, loader):
        shell.show()
        qtbot.waitExposed(shell)
        loader.present(True, position=LoaderPosition.CENTER)
        assert loader.geometry() == shell.rect()

        shell.resize(400, 300)
        qtbot.waitUntil(lambda: loader.geometry() == shell.rect(), timeout=1000)

    def test_fade_keeps_widget_until_animation_ends(self, qtbot, shell):
        loader = MinimalLoader(shell, fade_ms=50)
        loader.present(True)
        loader.present(False)

        assert not loader.is_shown
        assert not loader.isHidden()
        qtbot.waitUntil(loader.isHidden, timeout=1000)

    def test_show_during_fade_out_wins(self, qtbot, shell):
        loader = MinimalLoader(shell, fade_ms=50)
        loader.present(True)
        loader.present(False)
        loader.present(True)

        qtbot.wait(150)
        assert loader.is_shown
        assert not loader.isHidden()


class TestInitialLoader:
    def test_starts_opaque_and_covers_parent(self, shell):
        loader = InitialLoader(shell, fade_ms=0)
        loader.present(True)
        assert loader.is_shown
        assert loader.geometry() == shell.rect()
        assert loader.graphicsEffect().opacity() == 1.0

    def test_hide(self, shell):
        loader = InitialLoader(shell, fade_ms=0)
        loader.present(True)
        loader.present(False)
        assert loader.isHidden()
        assert not loader.ring.spinning


def test_spinner_ring(qtbot):
    ring = SpinnerRing(40)
    qtbot.addWidget(ring)
    assert ring.width() == 40
    ring.start()
    assert ring.spinning
    ring.stop()
    assert not ring.spinning
