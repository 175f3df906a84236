"""Reusable style generators for the list widgets."""

from __future__ import annotations

from PySide6.QtGui import QColor

from ...config import SELECTED_PROPERTY_NAME


def _hex(color: QColor, alpha: int) -> str:
    tinted = QColor(color)
    tinted.setAlpha(alpha)
    return tinted.name(QColor.NameFormat.HexArgb)


def modern_scrollbar_style(
    base_color: QColor,
    *,
    track_alpha: int = 30,
    handle_alpha: int = 40,
    handle_hover_alpha: int = 100,
    radius: int = 4,
    handle_radius: int = 3,
) -> str:
    """Return a stylesheet for a slim, translucent vertical scrollbar.

    Only the vertical bar is styled: lists are virtualised along the vertical
    axis only.  ``base_color`` is usually the palette's text colour; its alpha
    channel is replaced by the values passed in.
    """

    if base_color.alpha() < 255:
        base_color = QColor(base_color)
        base_color.setAlpha(255)

    return (
        "QScrollBar:vertical {\n"
        f"    background-color: {_hex(base_color, track_alpha)};\n"
        "    width: 8px;\n"
        "    margin: 0px;\n"
        "    border: none;\n"
        f"    border-radius: {radius}px;\n"
        "}\n"
        "QScrollBar::handle:vertical {\n"
        f"    background-color: {_hex(base_color, handle_alpha)};\n"
        f"    border-radius: {handle_radius}px;\n"
        "    min-height: 24px;\n"
        "    margin: 1px;\n"
        "}\n"
        "QScrollBar::handle:vertical:hover {\n"
        f"    background-color: {_hex(base_color, handle_hover_alpha)};\n"
        "}\n"
        "QScrollBar::add-line:vertical, QScrollBar::sub-line:vertical {\n"
        "    height: 0px;\n"
        "}\n"
    )


def selectable_row_style(highlight_color: QColor, *, alpha: int = 60) -> str:
    """Background for rows whose ``selected`` dynamic property is set."""

    return (
        f'#iListSelectableRow[{SELECTED_PROPERTY_NAME}="true"] {{\n'
        f"    background-color: {_hex(highlight_color, alpha)};\n"
        "}\n"
    )
