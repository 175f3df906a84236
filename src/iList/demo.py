"""Sample data sets used by the ``ilist preview`` command."""

from __future__ import annotations

from .config import (
    DEMO_ITEM_COUNT,
    DEMO_SECTION_ITEM_TOTAL,
    DEMO_SECTION_LETTERS,
    DEMO_SECTION_SUPPLIED_ITEMS,
)
from .models.types import Section


def flat_items(count: int = DEMO_ITEM_COUNT) -> list[dict[str, str]]:
    return [{"content": f"item {index}"} for index in range(count)]


def sections(
    letters: tuple[str, ...] = DEMO_SECTION_LETTERS,
    supplied: int = DEMO_SECTION_SUPPLIED_ITEMS,
    item_total_count: int = DEMO_SECTION_ITEM_TOTAL,
) -> list[Section]:
    """Return one section per letter.

    Each section supplies fewer payloads than it declares, so the trailing
    rows render with a ``None`` item.
    """

    return [
        Section(
            data={"title": letter},
            items=tuple({"content": f"{letter}{index}"} for index in range(supplied)),
            item_total_count=item_total_count,
        )
        for letter in letters
    ]


__all__ = ["flat_items", "sections"]
