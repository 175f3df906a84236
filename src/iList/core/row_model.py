"""Build the absolute row layout of a list from the caller's data."""

from __future__ import annotations

import logging
import math
from numbers import Real
from typing import Any, Callable, Iterable, Optional, Sequence, Union

from ..errors import InvalidHeightError, InvalidHeightTypeError
from ..models.types import ItemPosition, Rect, Row, RowTable, Section

_LOGGER = logging.getLogger(__name__)

HeightSpec = Union[float, int, Callable[..., float]]


def is_real_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def resolve_height(spec: HeightSpec, *args: Any, name: str = "item_height") -> float:
    """Return the height described by *spec* for the row described by *args*.

    *spec* is either a fixed number or a callable invoked with *args*.  The
    result must be a non-negative real number; anything else aborts the build.
    """

    if is_real_number(spec):
        height = spec
        if math.isnan(height):
            raise InvalidHeightError(f'"{name}" can not be NaN')
    elif callable(spec):
        height = spec(*args)
        if not is_real_number(height) or math.isnan(height):
            raise InvalidHeightError(
                f'When "{name}" is a function, its return value must be a number and not NaN '
                f"(got {height!r})"
            )
    else:
        raise InvalidHeightTypeError(f'"{name}" must be a number or a function, got {type(spec).__name__}')
    if height < 0:
        raise InvalidHeightError(f'"{name}" resolved to a negative height ({height!r})')
    return height


def build_row_table(
    data: Sequence[Any],
    *,
    item_height: HeightSpec,
    item_total_count: Optional[int] = None,
    sectioned: bool = False,
    section_header_height: Optional[HeightSpec] = None,
) -> RowTable:
    """Flatten *data* into an ordered, contiguous :class:`RowTable`.

    Without sections every element of *data* becomes a row; ``item_total_count``
    overrides ``len(data)`` for callers that stream data lazily.  With
    sections, *data* is a sequence of :class:`Section` (or mappings) and every
    section contributes one header row followed by its item rows.
    """

    if sectioned:
        table = _build_sectioned(data, item_height, section_header_height)
    else:
        table = _build_flat(data, item_height, item_total_count)
    _LOGGER.debug(
        "Built %s row table: %d rows, total height %s",
        "sectioned" if sectioned else "flat",
        table.row_total_count,
        table.total_height,
    )
    return table


def _build_flat(
    data: Sequence[Any],
    item_height: HeightSpec,
    item_total_count: Optional[int],
) -> RowTable:
    count = item_total_count if item_total_count is not None else len(data)
    rows: list[Row] = []
    top: float = 0
    for index in range(count):
        payload = data[index] if index < len(data) else None
        height = resolve_height(item_height, payload, index)
        rows.append(Row(global_index=index, rect=Rect(top, height), data=payload))
        top += height
    return RowTable(
        rows=tuple(rows),
        total_height=top,
        item_total_count=count,
        tops=tuple(row.rect.top for row in rows),
    )


def _build_sectioned(
    data: Iterable[Any],
    item_height: HeightSpec,
    section_header_height: Optional[HeightSpec],
) -> RowTable:
    rows: list[Row] = []
    headers: list[Row] = []
    item_total = 0
    top: float = 0
    for section_index, raw_section in enumerate(data):
        section = Section.coerce(raw_section)
        header_height = resolve_height(
            section_header_height,
            section.data,
            section_index,
            name="section_header_height",
        )
        header = Row(
            global_index=len(rows),
            rect=Rect(top, header_height),
            data=section.data,
            section_index=section_index,
            is_section_header=True,
        )
        rows.append(header)
        headers.append(header)
        top += header_height

        for item_index in range(section.item_count):
            payload = section.item_at(item_index)
            height = resolve_height(
                item_height,
                section.data,
                payload,
                ItemPosition(section_index, item_index),
            )
            rows.append(
                Row(
                    global_index=len(rows),
                    rect=Rect(top, height),
                    data=payload,
                    section_index=section_index,
                    item_index=item_index,
                    section=section.data,
                )
            )
            top += height
        item_total += section.item_count

    return RowTable(
        rows=tuple(rows),
        total_height=top,
        item_total_count=item_total,
        sectioned=True,
        sections=tuple(headers),
        tops=tuple(row.rect.top for row in rows),
    )


__all__ = ["HeightSpec", "build_row_table", "is_real_number", "resolve_height"]
