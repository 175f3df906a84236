"""ListEngine: pure Python list windowing, no Qt dependency.

The engine owns the row table built from the caller's data and the current
scroll offset.  Every render pass recomputes the render range synchronously
from those two values, so scroll updates that the host coalesces into a
single pass never leave stale rows on screen.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional, Protocol, Union

from ...config import AUTO_LIST_HEIGHT
from ...core.row_model import build_row_table
from ...core.viewport import resolve_render_range
from ...errors import ConfigurationError
from ...models.types import (
    EMPTY_RANGE,
    BoundaryRow,
    ExpectedBoundary,
    ListRender,
    RenderedRow,
    RenderRange,
    Row,
    RowContext,
    RowTable,
)
from ...settings.schema import ListOptions, build_list_options, with_changes
from .signal import ObservableProperty, Signal

_LOGGER = logging.getLogger(__name__)

RowRenderer = Callable[[RowContext], Any]

_LAYOUT_KEYS = (
    "item_total_count",
    "item_height",
    "enable_section",
    "section_header_height",
)


class ScrollContainer(Protocol):
    """Native scroll primitive supplied by the host framework."""

    def get_scroll_offset(self) -> float: ...

    def set_scroll_offset(self, offset: float) -> None: ...


class ListEngine:
    """Virtualised list that materialises only the rows inside the viewport.

    Signals:

    * ``scrolled(offset, ExpectedBoundary)``: the render range changed after
      an update; the ``on_scroll`` option is connected to it.
    * ``range_changed(RenderRange)``: any change of the notified range,
      including a change to the empty range.
    * ``layout_changed(RowTable)``: the row table was rebuilt.
    * ``render_invalidated()``: a renderer was swapped; hosts should render
      again even though the range did not move.
    """

    def __init__(
        self,
        options: Union[ListOptions, Mapping[str, Any]],
        render_item: Optional[RowRenderer] = None,
        render_section_header: Optional[RowRenderer] = None,
    ) -> None:
        self._options = build_list_options(options)
        self._render_item = render_item
        self._render_section_header = render_section_header
        self._container: Optional[ScrollContainer] = None
        self._row_table = self._build_row_table(self._options)
        self._render_range: RenderRange = EMPTY_RANGE
        self._notified_range: Optional[tuple[int, int]] = None

        self.scrolled = Signal()
        self.range_changed = Signal()
        self.layout_changed = Signal()
        self.render_invalidated = Signal()
        if self._options.on_scroll is not None:
            self.scrolled.connect(self._options.on_scroll)

        initial_offset: float = 0
        if self._options.enable_section and self._options.default_shown_section_index is not None:
            initial_offset = self.section_header_top(self._options.default_shown_section_index)
        self.scroll_offset = ObservableProperty(initial_offset)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------
    @property
    def options(self) -> ListOptions:
        return self._options

    @property
    def row_table(self) -> RowTable:
        return self._row_table

    @property
    def render_range(self) -> RenderRange:
        """Range computed by the most recent :meth:`calc_render_range` call."""

        return self._render_range

    @property
    def render_item(self) -> Optional[RowRenderer]:
        return self._render_item

    @property
    def is_renderable(self) -> bool:
        """``False`` when the list height is ``0`` or still ``"auto"``."""

        return self._options.list_height not in (0, AUTO_LIST_HEIGHT)

    # ------------------------------------------------------------------
    # Host wiring
    # ------------------------------------------------------------------
    def attach_scroll_container(self, container: ScrollContainer) -> None:
        """Bind the native scroll primitive and push the current offset to it."""

        self._container = container
        self._scroll_container_to(self.scroll_offset.value)

    def detach_scroll_container(self) -> None:
        self._container = None

    def set_render_item(self, render_item: Optional[RowRenderer]) -> None:
        self._render_item = render_item
        self.render_invalidated.emit()

    def set_render_section_header(self, render_section_header: Optional[RowRenderer]) -> None:
        self._render_section_header = render_section_header
        self.render_invalidated.emit()

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------
    def update_options(self, **changes: Any) -> None:
        """Apply option *changes*; rebuild the row table when layout inputs change."""

        previous = self._options
        current = with_changes(previous, changes)
        self._options = current

        if current.on_scroll is not previous.on_scroll:
            if previous.on_scroll is not None:
                self.scrolled.disconnect(previous.on_scroll)
            if current.on_scroll is not None:
                self.scrolled.connect(current.on_scroll)

        if self._needs_rebuild(previous, current):
            self._row_table = self._build_row_table(current)
            self.scroll_offset.value = self._clamp_offset(self.scroll_offset.value)
            self.layout_changed.emit(self._row_table)

        if (
            current.enable_section
            and current.default_shown_section_index is not None
            and current.default_shown_section_index != previous.default_shown_section_index
        ):
            self.scroll_offset.value = self.section_header_top(current.default_shown_section_index)

        self._did_update()

    def handle_scroll(self, offset: Optional[float] = None) -> None:
        """React to a scroll event; *offset* defaults to the container's value."""

        if offset is None:
            if self._container is None:
                return
            offset = self._container.get_scroll_offset()
        self.scroll_offset.value = max(offset, 0)
        self._did_update()

    def scroll_to(self, offset: float) -> None:
        self.scroll_offset.value = max(offset, 0)
        self._did_update()

    def scroll_to_section(self, section_index: int) -> None:
        if not self._options.enable_section:
            raise ValueError("scroll_to_section requires sections to be enabled")
        top = self.section_header_top(section_index)
        _LOGGER.debug("Scrolling to section %d at offset %s", section_index, top)
        self.scroll_to(top)

    def section_header_top(self, section_index: int) -> float:
        """Return the header top of *section_index*, clamped to valid sections."""

        sections = self._row_table.sections
        if not sections:
            return 0
        index = max(0, min(section_index, len(sections) - 1))
        return sections[index].rect.top

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def calc_render_range(self) -> RenderRange:
        """Compute and cache the render range for the current offset and table."""

        options = self._options
        self._render_range = resolve_render_range(
            self._row_table,
            self.scroll_offset.value,
            options.viewport_height,
            options.buffer_count,
            strategy=options.range_strategy,
        )
        return self._render_range

    def render(self) -> Optional[ListRender]:
        """Materialise the rows of the current render range.

        Returns ``None`` while the list has no height; that is a valid empty
        state rather than an error.
        """

        if not self.is_renderable:
            return None
        render_range = self.calc_render_range()
        rows = self._row_table.rows[render_range.render_start_index : render_range.render_end_index + 1]
        rendered = tuple(
            RenderedRow(
                key=row.key,
                top=row.rect.top,
                height=row.rect.height,
                element=self._render_row(row),
                row=row,
            )
            for row in rows
        )
        return ListRender(
            total_height=self._row_table.total_height,
            list_height=self._options.list_height,
            render_range=render_range,
            rows=rendered,
        )

    def expected_boundary(self, render_range: RenderRange) -> ExpectedBoundary:
        if not self._options.enable_section:
            return ExpectedBoundary(render_range.render_start_index, render_range.render_end_index)
        rows = self._row_table.rows
        return ExpectedBoundary(
            self._boundary_row(rows[render_range.render_start_index]),
            self._boundary_row(rows[render_range.render_end_index]),
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _build_row_table(options: ListOptions) -> RowTable:
        return build_row_table(
            options.data,
            item_height=options.item_height,
            item_total_count=options.item_total_count,
            sectioned=options.enable_section,
            section_header_height=options.section_header_height,
        )

    @staticmethod
    def _needs_rebuild(previous: ListOptions, current: ListOptions) -> bool:
        if current.data is not previous.data or len(current.data) != len(previous.data):
            return True
        return any(getattr(current, key) != getattr(previous, key) for key in _LAYOUT_KEYS)

    def _clamp_offset(self, offset: float) -> float:
        total = self._row_table.total_height
        limit = max(total - self._options.viewport_height, 0) if self.is_renderable else total
        return max(0, min(offset, limit))

    def _did_update(self) -> None:
        self._scroll_container_to(self.scroll_offset.value)
        if not self.is_renderable:
            return
        render_range = self.calc_render_range()
        pair = render_range.as_tuple()
        if pair == self._notified_range:
            return
        self._notified_range = pair
        _LOGGER.debug("Render range changed to %s at offset %s", pair, self.scroll_offset.value)
        self.range_changed.emit(render_range)
        if not render_range.is_empty:
            self.scrolled.emit(self.scroll_offset.value, self.expected_boundary(render_range))

    def _scroll_container_to(self, offset: float) -> None:
        container = self._container
        if container is not None and container.get_scroll_offset() != offset:
            container.set_scroll_offset(offset)

    def _render_row(self, row: Row) -> Any:
        if row.is_section_header:
            if self._render_section_header is None:
                return None
            return self._render_section_header(
                RowContext(
                    global_index=row.global_index,
                    section=row.data,
                    section_index=row.section_index,
                    is_section_header=True,
                )
            )
        if self._render_item is None:
            raise ConfigurationError("A render_item function is required to render list rows")
        return self._render_item(
            RowContext(
                global_index=row.global_index,
                item=row.data,
                section=row.section,
                section_index=row.section_index,
                item_index=row.item_index,
            )
        )

    @staticmethod
    def _boundary_row(row: Row) -> BoundaryRow:
        return BoundaryRow(
            global_index=row.global_index,
            section_index=row.section_index,
            item_index=None if row.is_section_header else row.item_index,
        )


__all__ = ["ListEngine", "RowRenderer", "ScrollContainer"]
