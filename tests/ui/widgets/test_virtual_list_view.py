"""Widget tests for the Qt host of the list engines."""

from __future__ import annotations

import os

import pytest

pytest.importorskip("PySide6.QtWidgets")

from PySide6.QtCore import QEvent, QPointF, Qt
from PySide6.QtGui import QMouseEvent
from PySide6.QtWidgets import QApplication, QLabel, QToolButton

from iList.gui.ui.widgets import SelectableRowWidget, VirtualListView, modifiers_from_qt
from iList.gui.viewmodels import ListEngine, SelectionEngine
from iList.models.types import Modifiers


@pytest.fixture(scope="module")
def qapp():
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


def _press(widget, modifiers=Qt.KeyboardModifier.NoModifier):
    point = QPointF(5, 5)
    event = QMouseEvent(
        QEvent.Type.MouseButtonPress,
        point,
        point,
        Qt.MouseButton.LeftButton,
        Qt.MouseButton.LeftButton,
        modifiers,
    )
    widget.mousePressEvent(event)


def _engine(list_height=50, count=10):
    return ListEngine(
        {"data": [f"item {i}" for i in range(count)], "item_height": 20, "list_height": list_height},
        render_item=lambda context: context.item,
    )


def test_only_visible_rows_are_materialised(qapp):
    view = VirtualListView(_engine())

    assert view.row_keys() == ["iw_0", "iw_1", "iw_2"]
    label = view.row_widget("iw_1")
    assert isinstance(label, QLabel)
    assert label.text() == "item 1"
    assert label.y() == 20
    assert view.widget().minimumHeight() == 200


def test_engine_scroll_moves_the_window(qapp):
    engine = _engine()
    view = VirtualListView(engine)
    view.resize(200, 50)
    view.show()
    qapp.processEvents()
    received = []
    view.scrolled.connect(lambda offset, boundary: received.append(offset))

    engine.scroll_to(100)

    assert view.row_keys() == ["iw_5", "iw_6", "iw_7"]
    assert view.row_widget("iw_5").y() == 100
    assert received == [100.0]
    view.close()


def test_scroll_bar_drives_engine(qapp):
    engine = _engine()
    view = VirtualListView(engine)
    view.resize(200, 60)
    view.show()
    qapp.processEvents()

    view.verticalScrollBar().setValue(40)

    assert engine.scroll_offset.value == 40
    assert "iw_2" in view.row_keys()
    view.close()


def test_zero_height_renders_nothing(qapp):
    view = VirtualListView(_engine(list_height=0))

    assert view.row_keys() == []


def test_auto_height_tracks_viewport(qapp):
    engine = _engine(list_height="auto")
    view = VirtualListView(engine)
    assert view.row_keys() == []

    view.resize(200, 100)
    view.show()
    qapp.processEvents()

    assert engine.options.list_height == view.viewport().height()
    assert engine.is_renderable
    assert view.row_keys()
    view.close()


def test_clicking_a_row_selects_it(qapp):
    selection = SelectionEngine(_engine())
    view = VirtualListView(selection)
    emitted = []
    view.selectionChanged.connect(emitted.append)

    row = view.row_widget("iw_1")
    assert isinstance(row, SelectableRowWidget)
    _press(row)

    assert emitted == [[1]]
    refreshed = view.row_widget("iw_1")
    assert refreshed.property("selected") is True
    assert view.row_widget("iw_0").property("selected") is False


def test_checkbox_toggles_check_state(qapp):
    selection = SelectionEngine(_engine())
    view = VirtualListView(selection)

    view.row_widget("iw_2").checkbox.click()

    assert selection.selected_result() == [2]
    assert view.row_widget("iw_2").checkbox.isChecked()


def test_single_select_rows_have_no_checkbox(qapp):
    selection = SelectionEngine(_engine(), enable_multi_select=False)
    view = VirtualListView(selection)

    assert view.row_widget("iw_0").checkbox is None


def test_modifiers_from_qt():
    flags = Qt.KeyboardModifier.ControlModifier | Qt.KeyboardModifier.ShiftModifier

    assert modifiers_from_qt(flags) == Modifiers(ctrl=True, shift=True)
    assert modifiers_from_qt(Qt.KeyboardModifier.NoModifier) == Modifiers()


def test_ctrl_click_extends_selection(qapp):
    selection = SelectionEngine(_engine())
    view = VirtualListView(selection)

    _press(view.row_widget("iw_0"))
    _press(view.row_widget("iw_2"), Qt.KeyboardModifier.ControlModifier)

    assert selection.selected_result() == [0, 2]
    assert view.row_widget("iw_2").checkbox.isChecked()


def test_checkbox_factory_builds_check_control(qapp):
    built = []

    def star_button(parent):
        button = QToolButton(parent)
        button.setText("*")
        built.append(button)
        return button

    selection = SelectionEngine(_engine())
    view = VirtualListView(selection, checkbox_factory=star_button)

    control = view.row_widget("iw_1").checkbox
    assert isinstance(control, QToolButton)
    assert control in built
    control.click()

    assert selection.selected_result() == [1]
    refreshed = view.row_widget("iw_1").checkbox
    assert isinstance(refreshed, QToolButton)
    assert refreshed.isChecked()
