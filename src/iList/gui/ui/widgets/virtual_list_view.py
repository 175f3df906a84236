"""Scroll area that materialises only the rows a list engine renders."""

from __future__ import annotations

import logging
import math
from typing import Any, Optional, Union

from PySide6.QtCore import QEvent, Qt, Signal
from PySide6.QtGui import QPalette, QResizeEvent, QShowEvent
from PySide6.QtWidgets import QFrame, QLabel, QScrollArea, QScrollBar, QWidget

from ....config import AUTO_LIST_HEIGHT
from ....models.types import ExpectedBoundary, RenderRange
from ...viewmodels.list_viewmodel import ListEngine
from ...viewmodels.selection_viewmodel import SelectableRow, SelectionEngine
from ..styles import modern_scrollbar_style, selectable_row_style
from .selectable_row import CheckboxFactory, SelectableRowWidget

_LOGGER = logging.getLogger(__name__)


class QtScrollContainer:
    """Expose a :class:`QScrollBar` as the engine's scroll primitive."""

    def __init__(self, scroll_bar: QScrollBar) -> None:
        self._scroll_bar = scroll_bar

    def get_scroll_offset(self) -> float:
        return self._scroll_bar.value()

    def set_scroll_offset(self, offset: float) -> None:
        value = int(round(offset))
        if self._scroll_bar.value() != value:
            self._scroll_bar.setValue(value)


class _RowCanvas(QWidget):
    """Content widget as tall as the whole list; rows sit at absolute tops."""

    def resizeEvent(self, event: QResizeEvent) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        width = self.width()
        for child in self.children():
            if isinstance(child, QWidget):
                child.resize(width, child.height())


class VirtualListView(QScrollArea):
    """Qt host for a :class:`ListEngine`, optionally wrapped by a selection engine.

    Renderers return a fresh ``QWidget`` per call (the view owns and deletes
    the widgets it is handed); any other non-``None`` element is shown in a
    :class:`QLabel`.  When the engine was configured with the
    ``"auto"`` list height the view feeds its viewport height into the engine
    whenever it is resized.  *checkbox_factory* is handed to every
    :class:`SelectableRowWidget` to build its check control.
    """

    scrolled = Signal(float, object)
    selectionChanged = Signal(list)

    def __init__(
        self,
        engine: Union[ListEngine, SelectionEngine],
        parent: Optional[QWidget] = None,
        *,
        checkbox_factory: Optional[CheckboxFactory] = None,
    ) -> None:
        super().__init__(parent)
        self._checkbox_factory = checkbox_factory
        if isinstance(engine, SelectionEngine):
            self._selection: Optional[SelectionEngine] = engine
            self._engine = engine.host
        else:
            self._selection = None
            self._engine = engine
        self._tracks_viewport = self._engine.options.list_height == AUTO_LIST_HEIGHT
        self._row_widgets: dict[str, QWidget] = {}
        self._updating_style = False

        self.setFrameShape(QFrame.Shape.NoFrame)
        self.setWidgetResizable(True)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAsNeeded)

        self._canvas = _RowCanvas()
        self.setWidget(self._canvas)

        self._container = QtScrollContainer(self.verticalScrollBar())
        self.verticalScrollBar().valueChanged.connect(self._on_scroll_value_changed)

        self._engine.range_changed.connect(self._on_range_changed)
        self._engine.layout_changed.connect(self._on_layout_changed)
        self._engine.render_invalidated.connect(self.refresh)
        self._engine.scrolled.connect(self._forward_scrolled)
        if self._selection is not None:
            self._selection.selection_changed.connect(self.selectionChanged.emit)

        self._apply_style()
        self.refresh()
        self._engine.attach_scroll_container(self._container)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def engine(self) -> ListEngine:
        return self._engine

    @property
    def selection(self) -> Optional[SelectionEngine]:
        return self._selection

    def row_widget(self, key: str) -> Optional[QWidget]:
        """Return the materialised widget for the row keyed *key*, if any."""

        return self._row_widgets.get(key)

    def row_keys(self) -> list[str]:
        return list(self._row_widgets)

    def refresh(self) -> None:
        """Render the engine and replace the materialised row widgets."""

        rendered = self._engine.render()
        self._clear_rows()
        if rendered is None:
            self._canvas.setFixedHeight(0)
            return

        self._canvas.setFixedHeight(int(math.ceil(rendered.total_height)))
        width = self._canvas.width()
        for rendered_row in rendered.rows:
            widget = self._widget_for(rendered_row.element)
            if widget is None:
                continue
            widget.setParent(self._canvas)
            widget.setGeometry(
                0,
                int(rendered_row.top),
                width,
                int(round(rendered_row.height)),
            )
            widget.show()
            self._row_widgets[rendered_row.key] = widget
        _LOGGER.debug(
            "Materialised %d rows for range %s",
            len(self._row_widgets),
            rendered.render_range.as_tuple(),
        )

    # ------------------------------------------------------------------
    # Qt events
    # ------------------------------------------------------------------
    def resizeEvent(self, event: QResizeEvent) -> None:  # type: ignore[override]
        super().resizeEvent(event)
        if self._tracks_viewport:
            height = self.viewport().height()
            if height != self._engine.options.list_height:
                self._engine.update_options(list_height=height)
                self.refresh()
        self._engine.attach_scroll_container(self._container)

    def showEvent(self, event: QShowEvent) -> None:  # type: ignore[override]
        super().showEvent(event)
        self._engine.attach_scroll_container(self._container)

    def changeEvent(self, event: QEvent) -> None:  # type: ignore[override]
        if event.type() == QEvent.Type.PaletteChange and not self._updating_style:
            self._apply_style()
        super().changeEvent(event)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _on_scroll_value_changed(self, value: int) -> None:
        self._engine.handle_scroll(value)

    def _on_range_changed(self, _render_range: RenderRange) -> None:
        self.refresh()

    def _on_layout_changed(self, _row_table: Any) -> None:
        self.refresh()

    def _forward_scrolled(self, offset: float, boundary: ExpectedBoundary) -> None:
        self.scrolled.emit(float(offset), boundary)

    def _clear_rows(self) -> None:
        # Rows may be cleared from inside their own mouse handler, so deletion
        # is deferred to the event loop.
        for widget in self._row_widgets.values():
            widget.hide()
            widget.deleteLater()
        self._row_widgets.clear()

    def _widget_for(self, element: Any) -> Optional[QWidget]:
        if element is None:
            return None
        if isinstance(element, SelectableRow):
            content = self._widget_for(element.element)
            if content is None:
                return None
            return SelectableRowWidget(element, content, checkbox_factory=self._checkbox_factory)
        if isinstance(element, QWidget):
            return element
        return QLabel(str(element))

    def _apply_style(self) -> None:
        palette = self.palette()
        style = modern_scrollbar_style(palette.color(QPalette.ColorRole.WindowText))
        style += selectable_row_style(palette.color(QPalette.ColorRole.Highlight))
        if self.styleSheet() == style:
            return
        self._updating_style = True
        try:
            self.setStyleSheet(style)
        finally:
            self._updating_style = False


__all__ = ["QtScrollContainer", "VirtualListView"]
