"""Data models used by iList."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from ..config import ROW_KEY_PREFIX


@dataclass(frozen=True, slots=True)
class Rect:
    """Absolute vertical rectangle of a row, in pixels."""

    top: float
    height: float

    @property
    def bottom(self) -> float:
        return self.top + self.height


@dataclass(frozen=True, slots=True)
class Row:
    """One renderable unit of a :class:`RowTable`.

    Flat rows only carry ``global_index`` (aliased as :attr:`index`) and their
    payload.  Sectioned rows also carry their section addressing; a header row
    has ``is_section_header`` set and no ``item_index``.
    """

    global_index: int
    rect: Rect
    data: Any = None
    section_index: Optional[int] = None
    item_index: Optional[int] = None
    is_section_header: bool = False
    section: Any = None

    @property
    def index(self) -> int:
        return self.global_index

    @property
    def key(self) -> str:
        return f"{ROW_KEY_PREFIX}{self.global_index}"


@dataclass(frozen=True, slots=True)
class RowTable:
    rows: tuple[Row, ...]
    total_height: float
    item_total_count: int
    sectioned: bool = False
    sections: tuple[Row, ...] = ()
    tops: tuple[float, ...] = ()

    @property
    def row_total_count(self) -> int:
        return len(self.rows)

    @property
    def section_total_count(self) -> int:
        return len(self.sections)

    @property
    def is_empty(self) -> bool:
        return not self.rows


@dataclass(frozen=True, slots=True)
class Section:
    """Caller data for one section: a header payload plus its items.

    ``item_total_count`` may exceed ``len(items)`` when the caller streams
    items lazily; the missing rows are built with a ``None`` payload.
    """

    data: Any = None
    items: tuple[Any, ...] = ()
    item_total_count: Optional[int] = None

    @property
    def item_count(self) -> int:
        if self.item_total_count is None:
            return len(self.items)
        return self.item_total_count

    def item_at(self, item_index: int) -> Any:
        if 0 <= item_index < len(self.items):
            return self.items[item_index]
        return None

    @classmethod
    def coerce(cls, value: Union["Section", Mapping[str, Any]]) -> "Section":
        """Accept either a :class:`Section` or a plain mapping."""

        if isinstance(value, Section):
            return value
        if not isinstance(value, Mapping):
            raise TypeError(f"Section data must be a Section or a mapping, got {type(value).__name__}")
        total = value.get("item_total_count", value.get("itemTotalCount"))
        return cls(
            data=value.get("data"),
            items=tuple(value.get("items") or ()),
            item_total_count=total,
        )


@dataclass(frozen=True, slots=True)
class ItemPosition:
    """Addressing info handed to sectioned item height functions."""

    section_index: int
    item_index: int


@dataclass(frozen=True, slots=True)
class RenderRange:
    """Inclusive range of row indices to materialise."""

    render_start_index: int
    render_end_index: int

    @property
    def is_empty(self) -> bool:
        return self.render_end_index < self.render_start_index

    def __len__(self) -> int:
        if self.is_empty:
            return 0
        return self.render_end_index - self.render_start_index + 1

    def as_tuple(self) -> tuple[int, int]:
        return (self.render_start_index, self.render_end_index)


EMPTY_RANGE = RenderRange(0, -1)


@dataclass(frozen=True, slots=True)
class BoundaryRow:
    """Sectioned boundary descriptor; ``item_index`` is ``None`` for headers."""

    global_index: int
    section_index: int
    item_index: Optional[int] = None


@dataclass(frozen=True, slots=True)
class ExpectedBoundary:
    """First and last rows the host is expected to render after a scroll."""

    expect_start_index: Union[int, BoundaryRow]
    expect_end_index: Union[int, BoundaryRow]


@dataclass(frozen=True, slots=True)
class RowContext:
    """Argument passed to the caller's row renderers.

    Flat items use ``item`` and ``index``; sectioned items use ``item``,
    ``global_index``, ``item_index`` and ``section_index``; section headers
    use ``section``, ``section_index`` and ``global_index``.
    """

    global_index: int
    item: Any = None
    section: Any = None
    section_index: Optional[int] = None
    item_index: Optional[int] = None
    is_section_header: bool = False

    @property
    def index(self) -> int:
        return self.global_index


@dataclass(frozen=True, slots=True)
class RenderedRow:
    key: str
    top: float
    height: float
    element: Any
    row: Row


@dataclass(frozen=True, slots=True)
class ListRender:
    """Output of one render pass of a list engine."""

    total_height: float
    list_height: float
    render_range: RenderRange
    rows: tuple[RenderedRow, ...] = ()


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True, eq=False)
class FlatItem:
    """Selection identity of a row in a flat list."""

    index: int


@dataclass(frozen=True, slots=True, eq=False)
class SectionItem:
    """Selection identity of a row in a sectioned list."""

    global_index: int
    section_index: int
    item_index: Optional[int] = None

    @property
    def is_section_header(self) -> bool:
        return self.item_index is None


SelectedItem = Union[FlatItem, SectionItem]


@dataclass(frozen=True, slots=True)
class IndexEntry:
    """Linear lookup entry produced by the section indexer."""

    global_index: int
    section_index: int
    item_index: Optional[int] = None

    @property
    def is_section_header(self) -> bool:
        return self.item_index is None


@dataclass(frozen=True, slots=True)
class Modifiers:
    """Keyboard modifiers held during a click or check gesture."""

    ctrl: bool = False
    shift: bool = False
    meta: bool = False

    @property
    def ctrl_like(self) -> bool:
        """``True`` when ctrl (or cmd on macOS) is held."""

        return self.ctrl or self.meta


NO_MODIFIERS = Modifiers()


@dataclass(frozen=True, slots=True)
class SelectionState:
    """Complete selection state owned by a selection engine.

    ``highlight_anchor`` and ``check_anchor`` are the endpoints used to resolve
    shift-range gestures.  They are written only when a gesture is committed.
    """

    highlighted: tuple[SelectedItem, ...] = ()
    checked: tuple[SelectedItem, ...] = ()
    selected: tuple[SelectedItem, ...] = ()
    highlight_anchor: Optional[SelectedItem] = None
    check_anchor: Optional[SelectedItem] = None
