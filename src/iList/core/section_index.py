"""Linear global-index lookup for sectioned data."""

from __future__ import annotations

from typing import Any, Iterable, Iterator

from ..models.types import IndexEntry, Section


class SectionIndex:
    """Map every global index of a sectioned list to its section addressing."""

    def __init__(self, entries: Iterable[IndexEntry]) -> None:
        self._entries: tuple[IndexEntry, ...] = tuple(entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[IndexEntry]:
        return iter(self._entries)

    def entry(self, global_index: int) -> IndexEntry:
        return self._entries[global_index]

    def item_entries(self) -> Iterator[IndexEntry]:
        """Yield item entries in ascending global order, skipping headers."""

        return (entry for entry in self._entries if not entry.is_section_header)

    def range(self, start: int, stop: int | None = None) -> list[IndexEntry]:
        """Return item entries for ``[start, stop)``; headers are filtered out.

        With a single argument the range starts at ``0``, like :func:`range`.
        """

        if stop is None:
            start, stop = 0, start
        start = max(start, 0)
        stop = min(stop, len(self._entries))
        return [
            entry
            for entry in self._entries[start:stop]
            if not entry.is_section_header
        ]


def build_section_index(sections: Iterable[Any]) -> SectionIndex:
    entries: list[IndexEntry] = []
    for section_index, raw_section in enumerate(sections):
        section = Section.coerce(raw_section)
        entries.append(IndexEntry(global_index=len(entries), section_index=section_index))
        for item_index in range(section.item_count):
            entries.append(
                IndexEntry(
                    global_index=len(entries),
                    section_index=section_index,
                    item_index=item_index,
                )
            )
    return SectionIndex(entries)


__all__ = ["SectionIndex", "build_section_index"]
