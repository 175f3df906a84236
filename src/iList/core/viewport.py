"""Virtualised list window: decides which rows intersect the viewport."""

from __future__ import annotations

from bisect import bisect_left, bisect_right

from ..config import RANGE_STRATEGIES, RANGE_STRATEGY_BISECT, RANGE_STRATEGY_LINEAR
from ..models.types import EMPTY_RANGE, RenderRange, RowTable


def _clamp(value: int, lower: int, upper: int) -> int:
    return max(lower, min(value, upper))


def resolve_render_range(
    row_table: RowTable,
    scroll_top: float,
    viewport_height: float,
    buffer_count: int = 0,
    *,
    strategy: str = RANGE_STRATEGY_LINEAR,
) -> RenderRange:
    """Return the inclusive range of rows to materialise.

    The start row straddles ``scroll_top`` and the end row straddles the
    bottom edge of the viewport.  Both are then widened by *buffer_count* rows
    and clamped to the table.  An empty table yields ``(0, -1)``.
    """

    if buffer_count < 0:
        raise ValueError(f"buffer_count must be non-negative, got {buffer_count}")
    if strategy not in RANGE_STRATEGIES:
        raise ValueError(f"Unknown range strategy {strategy!r}")

    row_total_count = row_table.row_total_count
    if row_total_count == 0:
        return EMPTY_RANGE

    visible_bottom = scroll_top + viewport_height
    end_index = -1
    if row_table.total_height <= viewport_height:
        # Everything fits: the last row closes the range.
        end_index = row_total_count - 1

    if strategy == RANGE_STRATEGY_BISECT:
        start_index, end_index = _locate_bisect(row_table, scroll_top, visible_bottom, end_index)
    else:
        start_index, end_index = _locate_linear(row_table, scroll_top, visible_bottom, end_index)

    return RenderRange(
        max(start_index - buffer_count, 0),
        _clamp(end_index + buffer_count, 0, row_total_count - 1),
    )


# ------------------------------------------------------------------
# Internal
# ------------------------------------------------------------------


def _locate_linear(
    row_table: RowTable,
    visible_top: float,
    visible_bottom: float,
    end_index: int,
) -> tuple[int, int]:
    start_index = -1
    for index, row in enumerate(row_table.rows):
        rect = row.rect
        if rect.top <= visible_top < rect.bottom:
            start_index = index
        if rect.top < visible_bottom <= rect.bottom:
            end_index = index
        if start_index != -1 and end_index != -1:
            break
    return start_index, end_index


def _locate_bisect(
    row_table: RowTable,
    visible_top: float,
    visible_bottom: float,
    end_index: int,
) -> tuple[int, int]:
    rows = row_table.rows
    tops = row_table.tops

    # Last row whose top is <= visible_top; rows after it start below.
    start_index = bisect_right(tops, visible_top) - 1
    if start_index < 0 or not visible_top < rows[start_index].rect.bottom:
        start_index = -1

    if end_index == -1:
        # Last row whose top is strictly above the viewport's bottom edge.
        candidate = bisect_left(tops, visible_bottom) - 1
        if candidate >= 0 and visible_bottom <= rows[candidate].rect.bottom:
            end_index = candidate
    return start_index, end_index


__all__ = ["resolve_render_range"]
