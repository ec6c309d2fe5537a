"""
Tray icons, painted at runtime so the app ships without image resources.

A round face: eyes open when sleep is blocked, closed when allowed.
White faces for manual mode, blue for auto mode.
"""

from __future__ import annotations

from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import QColor, QIcon, QPainter, QPen, QPixmap

from packages.core.awake.presentation import IconKind

_SIZE = 64

_FILL = {
    "white": QColor("#F5F5F7"),
    "blue": QColor("#0A84FF"),
}
_INK = QColor("#1C1C1E")


def _paint(awake: bool, color: str) -> QPixmap:
    pm = QPixmap(_SIZE, _SIZE)
    pm.fill(Qt.GlobalColor.transparent)

    p = QPainter(pm)
    p.setRenderHint(QPainter.RenderHint.Antialiasing)
    p.setPen(QPen(_INK, 3))
    p.setBrush(_FILL[color])
    p.drawEllipse(QRectF(4, 4, _SIZE - 8, _SIZE - 8))

    p.setBrush(_INK)
    if awake:
        p.drawEllipse(QPointF(22, 26), 5, 7)
        p.drawEllipse(QPointF(42, 26), 5, 7)
        p.setBrush(Qt.BrushStyle.NoBrush)
        p.drawEllipse(QPointF(32, 45), 6, 6)
    else:
        p.drawLine(QPointF(16, 28), QPointF(28, 28))
        p.drawLine(QPointF(36, 28), QPointF(48, 28))
        p.drawLine(QPointF(26, 44), QPointF(38, 44))
    p.end()
    return pm


def make_icon(kind: IconKind) -> QIcon:
    state, color = kind.split("_", 1)
    return QIcon(_paint(state == "awake", color))


def make_icons() -> dict[IconKind, QIcon]:
    kinds: tuple[IconKind, ...] = ("sleeping_white", "awake_white", "awake_blue", "sleeping_blue")
    return {k: make_icon(k) for k in kinds}
