"""
Loader presentation widgets.

Both widgets are a pure function of what is passed to ``present``: they keep
no loading state of their own beyond the logical visibility flag. Fading is
cosmetic; ``is_shown`` changes as soon as ``present`` is called, and the fade
only delays when Qt actually hides the widget.
"""

from PySide6.QtCore import QEasingCurve, QEvent, QPropertyAnimation, QRectF, Qt, QTimer
from PySide6.QtGui import QColor, QPainter, QPen
from PySide6.QtWidgets import QFrame, QGraphicsOpacityEffect, QLabel, QVBoxLayout, QWidget

from .options import DEFAULT_MESSAGE, LoaderPosition, LoaderSize

ACCENT_COLOR = "#a5cd39"
BRAND_TEXT = "Chronicle Exhibits"
EDGE_INSET = 16

SIZE_CONFIG = {
    LoaderSize.TINY: {"container": 48, "padding": 8, "ring": 28, "font_px": 10},
    LoaderSize.SMALL: {"container": 64, "padding": 12, "ring": 36, "font_px": 10},
    LoaderSize.MEDIUM: {"container": 80, "padding": 16, "ring": 44, "font_px": 12},
}


class SpinnerRing(QWidget):
    """Circle with a rotating accent arc."""

    STEP_DEGREES = 12

    def __init__(self, diameter=36, parent=None):
        super().__init__(parent)
        self._angle = 0
        self.setFixedSize(diameter, diameter)
        self._timer = QTimer(self)
        self._timer.setInterval(30)
        self._timer.timeout.connect(self._tick)

    @property
    def spinning(self):
        return self._timer.isActive()

    def set_diameter(self, diameter):
        self.setFixedSize(diameter, diameter)

    def start(self):
        self._timer.start()

    def stop(self):
        self._timer.stop()

    def _tick(self):
        self._angle = (self._angle + self.STEP_DEGREES) % 360
        self.update()

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        rect = QRectF(self.rect()).adjusted(2, 2, -2, -2)

        painter.setPen(QPen(QColor(0, 0, 0, 25), 2))
        painter.drawEllipse(rect)

        painter.setPen(QPen(QColor(ACCENT_COLOR), 2, Qt.PenStyle.SolidLine, Qt.PenCapStyle.RoundCap))
        # Qt angles are in 1/16th of a degree, counter-clockwise
        painter.drawArc(rect, int((90 - self._angle) * 16), int(-90 * 16))
        painter.end()


class _FadingWidget(QWidget):
    """Shared fade-in/fade-out handling for the loader widgets."""

    def __init__(self, parent=None, fade_ms=200):
        super().__init__(parent)
        self._shown = False
        self.fade_ms = fade_ms

        self._opacity = QGraphicsOpacityEffect(self)
        self._opacity.setOpacity(0.0)
        self.setGraphicsEffect(self._opacity)

        self._fade = QPropertyAnimation(self._opacity, b"opacity", self)
        self._fade.setEasingCurve(QEasingCurve.Type.OutCubic)
        self._fade.finished.connect(self._on_fade_finished)

        if parent is not None:
            parent.installEventFilter(self)
        super().setVisible(False)

    @property
    def is_shown(self):
        """Logical visibility, independent of any running fade."""
        return self._shown

    def _appear(self):
        self._shown = True
        self._fade.stop()
        self._relayout()
        super().setVisible(True)
        self.raise_()
        self._started()
        self._animate_to(1.0)

    def _disappear(self):
        if not self._shown:
            return
        self._shown = False
        self._fade.stop()
        self._animate_to(0.0)

    def _animate_to(self, target):
        if self.fade_ms <= 0:
            self._opacity.setOpacity(target)
            self._on_fade_finished()
            return
        self._fade.setDuration(self.fade_ms)
        self._fade.setStartValue(self._opacity.opacity())
        self._fade.setEndValue(target)
        self._fade.start()

    def _on_fade_finished(self):
        # A show that arrived during the fade-out wins
        if not self._shown:
            super().setVisible(False)
            self._stopped()

    def _started(self):
        pass

    def _stopped(self):
        pass

    def _relayout(self):
        if self.parentWidget() is not None:
            self.setGeometry(self.parentWidget().rect())

    def eventFilter(self, obj, event):
        if obj is self.parentWidget() and event.type() == QEvent.Type.Resize and self._shown:
            self._relayout()
        return super().eventFilter(obj, event)


class MinimalLoader(_FadingWidget):
    """
    Small logo badge with a spinning ring, placed over the shell.

    ``present`` takes the whole loader description every time; the widget
    derives its geometry from ``size`` and ``position`` on each call.
    """

    def __init__(self, parent=None, fade_ms=200):
        super().__init__(parent, fade_ms=fade_ms)
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents)
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground)
        self.setObjectName("minimalLoader")

        self.size_name = LoaderSize.SMALL
        self.position = LoaderPosition.TOP_RIGHT

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self.badge = QFrame()
        self.badge.setObjectName("minimalLoaderBadge")
        self.badge.setStyleSheet(
            "QFrame#minimalLoaderBadge {"
            " background-color: rgba(255, 255, 255, 0.95);"
            " border: 1px solid #e5e7eb;"
            " border-radius: 8px;"
            "}"
        )
        badge_layout = QVBoxLayout(self.badge)
        badge_layout.setAlignment(Qt.AlignmentFlag.AlignCenter)
        badge_layout.setSpacing(8)

        self.ring = SpinnerRing()
        badge_layout.addWidget(self.ring, alignment=Qt.AlignmentFlag.AlignCenter)

        self.logo_label = QLabel(BRAND_TEXT)
        self.logo_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        badge_layout.addWidget(self.logo_label)

        self.message_label = QLabel(DEFAULT_MESSAGE)
        self.message_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.message_label.setVisible(False)
        badge_layout.addWidget(self.message_label)

        layout.addWidget(self.badge)

    def present(
        self,
        visible,
        message=DEFAULT_MESSAGE,
        size=LoaderSize.SMALL,
        position=LoaderPosition.TOP_RIGHT,
        show_message=False,
    ):
        """Apply a loader description. Passing ``visible=False`` starts the fade-out."""
        self.size_name = LoaderSize(size)
        self.position = LoaderPosition(position)
        self.message_label.setText(message or DEFAULT_MESSAGE)
        self.message_label.setVisible(bool(show_message))
        self._apply_size()

        if visible:
            self._appear()
        else:
            self._disappear()

    def _apply_size(self):
        config = SIZE_CONFIG[self.size_name]
        padding = config["padding"]
        self.badge.layout().setContentsMargins(padding, padding, padding, padding)
        self.badge.setMinimumSize(config["container"], config["container"])
        self.ring.set_diameter(config["ring"])
        font_css = f"color: #4b5563; font-size: {config['font_px']}px; background: transparent;"
        self.logo_label.setStyleSheet(font_css + " font-weight: bold;")
        self.message_label.setStyleSheet(font_css)

    def _relayout(self):
        parent = self.parentWidget()
        if parent is None:
            return
        if self.position in (LoaderPosition.CENTER, LoaderPosition.INLINE):
            self.setGeometry(parent.rect())
            return

        self.badge.adjustSize()
        hint = self.sizeHint()
        x = parent.width() - hint.width() - EDGE_INSET
        if self.position == LoaderPosition.TOP_RIGHT:
            y = EDGE_INSET
        else:
            y = parent.height() - hint.height() - EDGE_INSET
        self.setGeometry(max(x, 0), max(y, 0), hint.width(), hint.height())

    def _started(self):
        self.ring.start()

    def _stopped(self):
        self.ring.stop()


class InitialLoader(_FadingWidget):
    """Opaque white splash covering the whole shell during first paint."""

    def __init__(self, parent=None, fade_ms=500):
        super().__init__(parent, fade_ms=fade_ms)
        self.setObjectName("initialLoader")
        self.setAutoFillBackground(True)
        self.setStyleSheet("QWidget#initialLoader { background-color: #ffffff; }")
        # The splash is already on screen at first paint, so it never fades in
        self._opacity.setOpacity(1.0)

        layout = QVBoxLayout(self)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self.ring = SpinnerRing(96)
        layout.addWidget(self.ring, alignment=Qt.AlignmentFlag.AlignCenter)

        self.logo_label = QLabel(BRAND_TEXT)
        self.logo_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.logo_label.setStyleSheet("color: #111827; font-size: 14px; font-weight: bold;")
        layout.addWidget(self.logo_label)

    def present(self, visible):
        if visible:
            self._appear()
        else:
            self._disappear()

    def _started(self):
        self.ring.start()

    def _stopped(self):
        self.ring.stop()
