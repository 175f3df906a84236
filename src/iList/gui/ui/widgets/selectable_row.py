"""Widget wrapping one rendered item with its checkbox and click handling."""

from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QMouseEvent
from PySide6.QtWidgets import (
    QAbstractButton,
    QApplication,
    QCheckBox,
    QFrame,
    QHBoxLayout,
    QWidget,
)

from ....config import CHECKBOX_COLUMN_WIDTH, SELECTED_PROPERTY_NAME
from ....models.types import Modifiers
from ...viewmodels.selection_viewmodel import SelectableRow

CheckboxFactory = Callable[[QWidget], QAbstractButton]


def modifiers_from_qt(flags: Qt.KeyboardModifier) -> Modifiers:
    """Translate Qt keyboard modifier flags into :class:`Modifiers`.

    On macOS Qt reports Command as ``ControlModifier`` and Control as
    ``MetaModifier``; both count as the ctrl-like toggle key.
    """

    return Modifiers(
        ctrl=bool(flags & Qt.KeyboardModifier.ControlModifier),
        shift=bool(flags & Qt.KeyboardModifier.ShiftModifier),
        meta=bool(flags & Qt.KeyboardModifier.MetaModifier),
    )


class SelectableRowWidget(QFrame):
    """Host a caller widget and forward gestures to its :class:`SelectableRow`.

    Clicks on the checkbox only trigger the check gesture; clicks anywhere
    else on the row trigger the click gesture.  *checkbox_factory* builds the
    check control from its parent widget; any checkable ``QAbstractButton``
    works and a plain ``QCheckBox`` is used when it is omitted.
    """

    def __init__(
        self,
        row: SelectableRow,
        content: QWidget,
        parent: Optional[QWidget] = None,
        *,
        checkbox_factory: Optional[CheckboxFactory] = None,
    ) -> None:
        super().__init__(parent)
        self._row = row
        self.setObjectName("iListSelectableRow")
        self.setProperty(SELECTED_PROPERTY_NAME, row.highlighted)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        self._checkbox: Optional[QAbstractButton] = None
        if row.checkable:
            self._checkbox = (checkbox_factory or QCheckBox)(self)
            self._checkbox.setCheckable(True)
            self._checkbox.setChecked(row.checked)
            self._checkbox.setFixedWidth(CHECKBOX_COLUMN_WIDTH)
            self._checkbox.clicked.connect(self._handle_check_clicked)
            layout.addWidget(self._checkbox)

        content.setParent(self)
        layout.addWidget(content, 1)
        self._content = content

    @property
    def row(self) -> SelectableRow:
        return self._row

    @property
    def checkbox(self) -> Optional[QAbstractButton]:
        return self._checkbox

    @property
    def content(self) -> QWidget:
        return self._content

    def mousePressEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        if event.button() == Qt.MouseButton.LeftButton:
            event.accept()
            self._row.click(modifiers_from_qt(event.modifiers()))
            return
        super().mousePressEvent(event)

    def _handle_check_clicked(self, _checked: bool) -> None:
        self._row.toggle_check(modifiers_from_qt(QApplication.keyboardModifiers()))


__all__ = ["CheckboxFactory", "SelectableRowWidget", "modifiers_from_qt"]
