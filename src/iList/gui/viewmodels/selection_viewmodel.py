"""SelectionEngine: highlight and check state layered over a list engine.

The engine decorates the item renderer of the list it wraps: every rendered
item becomes a :class:`SelectableRow` that knows whether it is highlighted or
checked and forwards click and checkbox gestures back to the engine.  Gesture
handling follows file-manager conventions:

* plain click replaces the selection (and clears the checkboxes),
* ctrl/cmd click, or any checkbox gesture, toggles a single row,
* shift click selects the range between the anchor and the clicked row.

All state lives in one immutable :class:`SelectionState` value which is
replaced atomically per gesture.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Iterable, Optional, Sequence

from ...core.section_index import SectionIndex, build_section_index
from ...errors import InvalidPredicateError
from ...models.types import (
    NO_MODIFIERS,
    FlatItem,
    IndexEntry,
    Modifiers,
    RowContext,
    Section,
    SectionItem,
    SelectedItem,
    SelectionState,
)
from .list_viewmodel import ListEngine, RowRenderer
from .signal import ObservableProperty, Signal

_LOGGER = logging.getLogger(__name__)

SelectionPredicate = Callable[[Any, Any], bool]


def item_address(item: SelectedItem) -> int:
    """Ordering key of a selection item: ``index`` or ``global_index``."""

    if isinstance(item, SectionItem):
        return item.global_index
    return item.index


def is_same_item(first: SelectedItem, second: SelectedItem) -> bool:
    return item_address(first) == item_address(second)


def contains_item(items: Iterable[SelectedItem], item: SelectedItem) -> bool:
    return any(is_same_item(candidate, item) for candidate in items)


def _never_selected(_payload: Any, _index_info: Any) -> bool:
    return False


@dataclass(frozen=True)
class SelectableRow:
    """Rendered item decorated with selection state and gesture callbacks."""

    element: Any
    item: SelectedItem
    highlighted: bool
    checked: bool
    checkable: bool
    on_click: Callable[[Modifiers], None]
    on_check: Callable[[Modifiers], None]

    def click(self, modifiers: Modifiers = NO_MODIFIERS) -> None:
        self.on_click(modifiers)

    def toggle_check(self, modifiers: Modifiers = NO_MODIFIERS) -> None:
        self.on_check(modifiers)


class SelectionEngine:
    """Selectable/checkable overlay for a :class:`ListEngine`.

    ``selection_changed`` receives the committed selection after every
    gesture: sorted indices for flat lists, :class:`SectionItem` descriptors
    sorted by global index for sectioned lists.  ``state`` is an
    :class:`ObservableProperty` holding the current :class:`SelectionState`.
    """

    def __init__(
        self,
        host: ListEngine,
        *,
        enable_multi_select: Optional[bool] = None,
        enable_checkable: Optional[bool] = None,
        default_selected_status: Optional[SelectionPredicate] = None,
        on_selected_change: Optional[Callable[[list], Any]] = None,
    ) -> None:
        options = host.options
        if enable_multi_select is not None:
            options = replace(options, enable_multi_select=enable_multi_select)
        self._host = host
        self._enable_multi_select = options.enable_multi_select
        self._enable_checkable = options.checkable if enable_checkable is None else enable_checkable
        self._render_item = host.render_item
        self._section_index: Optional[SectionIndex] = None
        if default_selected_status is None:
            default_selected_status = options.default_selected_status
        self._predicate: Any = (
            _never_selected if default_selected_status is None else default_selected_status
        )

        self.selection_changed = Signal()
        callback = on_selected_change or options.on_selected_change
        if callback is not None:
            self.selection_changed.connect(callback)

        self._rebuild_section_index()
        self.state = ObservableProperty(self._derive_default_state())
        host.set_render_item(self.build_render_item())
        host.layout_changed.connect(self._on_layout_changed)
        self._emit_selected_change()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------
    @property
    def host(self) -> ListEngine:
        return self._host

    @property
    def enable_multi_select(self) -> bool:
        return self._enable_multi_select

    @property
    def enable_checkable(self) -> bool:
        return self._enable_checkable

    @property
    def sectioned(self) -> bool:
        return self._host.options.enable_section

    @property
    def section_index(self) -> Optional[SectionIndex]:
        return self._section_index

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def set_render_item(self, render_item: RowRenderer) -> None:
        """Replace the caller's item renderer; the decoration is kept."""

        self._render_item = render_item
        self._host.set_render_item(self.build_render_item())

    def set_default_selected_status(self, predicate: SelectionPredicate) -> None:
        """Swap the default-selection predicate and re-derive the selection."""

        if predicate is self._predicate:
            return
        self._predicate = predicate
        self._commit(self._derive_default_state())

    def update_data(self, **changes: Any) -> None:
        """Forward data changes to the host.

        The default selection is re-derived from the host's ``layout_changed``
        notification, so changes applied directly through
        :meth:`ListEngine.update_options` are picked up as well.
        """

        self._host.update_options(**changes)

    def handle_item_click(self, item: SelectedItem, modifiers: Modifiers = NO_MODIFIERS) -> None:
        state = self.state.value
        selected = self._candidates_for(
            state.highlighted, state.highlight_anchor, item, modifiers, is_check_mode=False
        )
        if len(selected) == 1 and not modifiers.ctrl_like:
            checked: tuple[SelectedItem, ...] = ()
        else:
            checked = selected
        self._commit_gesture(selected, checked)

    def handle_check_change(self, item: SelectedItem, modifiers: Modifiers = NO_MODIFIERS) -> None:
        state = self.state.value
        selected = self._candidates_for(
            state.checked, state.check_anchor, item, modifiers, is_check_mode=True
        )
        self._commit_gesture(selected, selected)

    def clear_selection(self) -> None:
        self._commit(SelectionState())

    def is_highlighted(self, item: SelectedItem) -> bool:
        return contains_item(self.state.value.highlighted, item)

    def is_checked(self, item: SelectedItem) -> bool:
        return contains_item(self.state.value.checked, item)

    def selected_result(self) -> list:
        """Return the committed selection in its emitted form."""

        items = sorted(self.state.value.selected, key=item_address)
        if self.sectioned:
            return [
                item
                for item in items
                if isinstance(item, SectionItem) and not item.is_section_header
            ]
        return [item_address(item) for item in items]

    def get_candidates(
        self,
        base: Sequence[SelectedItem],
        anchor: Optional[SelectedItem],
        item: SelectedItem,
        modifiers: Modifiers,
        is_check_mode: bool,
    ) -> list[SelectedItem]:
        """Apply the multi-select rule to *base* for a gesture on *item*."""

        toggle = not modifiers.shift and (modifiers.ctrl_like or is_check_mode)
        if toggle:
            if contains_item(base, item):
                return [entry for entry in base if not is_same_item(entry, item)]
            return [*base, item]

        if modifiers.shift and not modifiers.ctrl_like:
            target = item_address(item)
            if anchor is None:
                return self.item_range(0, target + 1)
            origin = item_address(anchor)
            if origin < target:
                return [*self.item_range(origin + 1, target + 1), anchor]
            return self.item_range(target, origin + 1)

        return [item]

    def item_range(self, start: int, stop: int) -> list[SelectedItem]:
        """Return selection items for addresses ``[start, stop)``, headers excluded."""

        if self.sectioned:
            return [self._item_from_entry(entry) for entry in self._section_index.range(start, stop)]
        upper = min(stop, self._flat_item_count())
        return [FlatItem(index) for index in range(max(start, 0), upper)]

    def item_for(self, context: RowContext) -> SelectedItem:
        """Return the selection identity of a rendered row."""

        if self.sectioned:
            return SectionItem(
                global_index=context.global_index,
                section_index=context.section_index,
                item_index=context.item_index,
            )
        return FlatItem(context.index)

    def build_render_item(self) -> RowRenderer:
        """Return the decorated renderer installed on the host list."""

        def render(context: RowContext) -> Any:
            if self._render_item is None:
                return None
            element = self._render_item(context)
            if element is None:
                return None
            item = self.item_for(context)
            return SelectableRow(
                element=element,
                item=item,
                highlighted=self.is_highlighted(item),
                checked=self._enable_checkable and self.is_checked(item),
                checkable=self._enable_checkable,
                on_click=lambda modifiers: self.handle_item_click(item, modifiers),
                on_check=lambda modifiers: self.handle_check_change(item, modifiers),
            )

        return render

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _candidates_for(
        self,
        base: Sequence[SelectedItem],
        anchor: Optional[SelectedItem],
        item: SelectedItem,
        modifiers: Modifiers,
        is_check_mode: bool,
    ) -> tuple[SelectedItem, ...]:
        if not self._enable_multi_select:
            return (item,)
        return tuple(self.get_candidates(base, anchor, item, modifiers, is_check_mode))

    def _commit_gesture(
        self,
        selected: tuple[SelectedItem, ...],
        checked: tuple[SelectedItem, ...],
    ) -> None:
        self._commit(
            SelectionState(
                highlighted=selected,
                checked=checked,
                selected=selected,
                highlight_anchor=selected[-1] if selected else None,
                check_anchor=checked[-1] if checked else None,
            )
        )

    def _commit(self, state: SelectionState) -> None:
        self.state.value = state
        _LOGGER.debug(
            "Selection committed: %d highlighted, %d checked",
            len(state.highlighted),
            len(state.checked),
        )
        self._host.render_invalidated.emit()
        self._emit_selected_change()

    def _emit_selected_change(self) -> None:
        self.selection_changed.emit(self.selected_result())

    def _on_layout_changed(self, _row_table: Any) -> None:
        if self._data_source_unchanged():
            return
        _LOGGER.debug("List data changed; re-deriving the default selection")
        self._rebuild_section_index()
        self._commit(self._derive_default_state())

    def _data_source_unchanged(self) -> bool:
        options = self._host.options
        data, length, item_total_count, enable_section = self._data_source
        return (
            options.data is data
            and len(options.data) == length
            and options.item_total_count == item_total_count
            and options.enable_section == enable_section
        )

    def _rebuild_section_index(self) -> None:
        options = self._host.options
        self._data_source = (
            options.data,
            len(options.data),
            options.item_total_count,
            options.enable_section,
        )
        if self.sectioned:
            self._section_index = build_section_index(options.data)
        else:
            self._section_index = None

    def _flat_item_count(self) -> int:
        options = self._host.options
        if options.item_total_count is not None:
            return options.item_total_count
        return len(options.data)

    def _item_from_entry(self, entry: IndexEntry) -> SectionItem:
        return SectionItem(
            global_index=entry.global_index,
            section_index=entry.section_index,
            item_index=entry.item_index,
        )

    def _derive_default_state(self) -> SelectionState:
        predicate = self._predicate
        if not callable(predicate):
            raise InvalidPredicateError('The "default_selected_status" predicate must be a function')

        data = self._host.options.data
        selected: list[SelectedItem] = []
        if self.sectioned:
            sections = [Section.coerce(section) for section in data]
            for entry in self._section_index.item_entries():
                payload = sections[entry.section_index].item_at(entry.item_index)
                if predicate(payload, entry):
                    selected.append(self._item_from_entry(entry))
        else:
            for index in range(self._flat_item_count()):
                payload = data[index] if index < len(data) else None
                if predicate(payload, index):
                    selected.append(FlatItem(index))

        items = tuple(selected)
        checked = items if self._enable_checkable else ()
        return SelectionState(
            highlighted=items,
            checked=checked,
            selected=items,
            highlight_anchor=items[-1] if items else None,
            check_anchor=checked[-1] if checked else None,
        )


__all__ = [
    "SelectableRow",
    "SelectionEngine",
    "contains_item",
    "is_same_item",
    "item_address",
]
