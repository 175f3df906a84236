"""Tests for SelectionEngine: pure Python, no Qt dependency."""

import pytest

from iList.errors import InvalidPredicateError
from iList.gui.viewmodels.list_viewmodel import ListEngine
from iList.gui.viewmodels.selection_viewmodel import (
    SelectableRow,
    SelectionEngine,
    item_address,
)
from iList.models.types import FlatItem, IndexEntry, Modifiers, SectionItem

CTRL = Modifiers(ctrl=True)
META = Modifiers(meta=True)
SHIFT = Modifiers(shift=True)


def _make_selection(count=10, *, selection_kwargs=None, **overrides):
    options = {"data": list(range(count)), "item_height": 20, "list_height": 500}
    options.update(overrides)
    host = ListEngine(options, render_item=lambda context: f"item {context.index}")
    emitted = []
    selection = SelectionEngine(host, on_selected_change=emitted.append, **(selection_kwargs or {}))
    return selection, emitted


def _make_sectioned(sections=3, items=5, **selection_kwargs):
    data = [{"data": f"S{s}", "items": [f"{s}-{i}" for i in range(items)]} for s in range(sections)]
    host = ListEngine(
        {
            "data": data,
            "item_height": 20,
            "list_height": 500,
            "enable_section": True,
            "section_header_height": 10,
        },
        render_item=lambda context: context.item,
        render_section_header=lambda context: context.section,
    )
    emitted = []
    selection = SelectionEngine(host, on_selected_change=emitted.append, **selection_kwargs)
    return selection, emitted


def _addresses(items):
    return [item_address(item) for item in items]


class TestInitialState:
    def test_emits_empty_selection_on_construction(self):
        _, emitted = _make_selection()

        assert emitted == [[]]

    def test_predicate_derives_default_selection(self):
        selection, emitted = _make_selection(
            default_selected_status=lambda payload, index: payload % 2 == 0
        )

        assert emitted == [[0, 2, 4, 6, 8]]
        assert _addresses(selection.state.value.checked) == [0, 2, 4, 6, 8]
        assert item_address(selection.state.value.highlight_anchor) == 8

    def test_predicate_sees_padding_rows_as_none(self):
        seen = []

        def predicate(payload, index):
            seen.append((payload, index))
            return False

        _make_selection(count=2, item_total_count=3, default_selected_status=predicate)

        assert seen == [(0, 0), (1, 1), (None, 2)]

    def test_unchecked_default_when_checkboxes_disabled(self):
        selection, _ = _make_selection(
            default_selected_status=lambda payload, index: index == 1,
            selection_kwargs={"enable_checkable": False},
        )

        assert _addresses(selection.state.value.highlighted) == [1]
        assert selection.state.value.checked == ()

    def test_checkable_follows_host_multi_select(self):
        single, _ = _make_selection(enable_multi_select=False)
        explicit, _ = _make_selection(enable_multi_select=False, enable_checkable=True)
        overridden, _ = _make_selection(
            enable_multi_select=False, selection_kwargs={"enable_multi_select": True}
        )

        assert not single.enable_multi_select
        assert not single.enable_checkable
        assert explicit.enable_checkable
        assert overridden.enable_multi_select
        assert overridden.enable_checkable

    def test_non_callable_predicate_rejected(self):
        selection, _ = _make_selection()

        with pytest.raises(InvalidPredicateError):
            selection.set_default_selected_status(True)

    def test_swapping_predicate_re_derives(self):
        selection, emitted = _make_selection()

        selection.set_default_selected_status(lambda payload, index: index in (3, 7))

        assert emitted[-1] == [3, 7]


class TestClickGestures:
    def test_plain_click_replaces_and_clears_checks(self):
        selection, emitted = _make_selection()
        selection.handle_check_change(FlatItem(4))

        selection.handle_item_click(FlatItem(3))

        assert emitted[-1] == [3]
        assert selection.state.value.checked == ()

    def test_ctrl_click_toggles(self):
        selection, emitted = _make_selection()
        selection.handle_item_click(FlatItem(3))

        selection.handle_item_click(FlatItem(5), CTRL)
        assert emitted[-1] == [3, 5]
        assert _addresses(selection.state.value.checked) == [3, 5]

        selection.handle_item_click(FlatItem(3), META)
        assert emitted[-1] == [5]
        assert _addresses(selection.state.value.checked) == [5]

    def test_toggle_twice_restores_selection(self):
        selection, emitted = _make_selection()
        selection.handle_item_click(FlatItem(3))

        selection.handle_item_click(FlatItem(5), CTRL)
        selection.handle_item_click(FlatItem(5), CTRL)

        assert emitted[-1] == [3]

    def test_shift_click_selects_range_after_anchor(self):
        selection, emitted = _make_selection()
        selection.handle_item_click(FlatItem(2))

        selection.handle_item_click(FlatItem(5), SHIFT)

        assert _addresses(selection.state.value.highlighted) == [3, 4, 5, 2]
        assert item_address(selection.state.value.highlight_anchor) == 2
        assert emitted[-1] == [2, 3, 4, 5]

    def test_shift_click_before_anchor(self):
        selection, emitted = _make_selection()
        selection.handle_item_click(FlatItem(2))
        selection.handle_item_click(FlatItem(5), SHIFT)

        selection.handle_item_click(FlatItem(0), SHIFT)

        assert _addresses(selection.state.value.highlighted) == [0, 1, 2]
        assert emitted[-1] == [0, 1, 2]

    def test_shift_click_without_anchor_starts_at_zero(self):
        selection, emitted = _make_selection()

        selection.handle_item_click(FlatItem(3), SHIFT)

        assert emitted[-1] == [0, 1, 2, 3]

    def test_range_is_deterministic(self):
        first, first_emitted = _make_selection()
        second, second_emitted = _make_selection()
        for selection in (first, second):
            selection.handle_item_click(FlatItem(6))
            selection.handle_item_click(FlatItem(1), SHIFT)

        assert first_emitted[-1] == second_emitted[-1] == [1, 2, 3, 4, 5, 6]

    def test_ctrl_and_shift_together_replace(self):
        selection, emitted = _make_selection()
        selection.handle_item_click(FlatItem(2))

        selection.handle_item_click(FlatItem(7), Modifiers(ctrl=True, shift=True))

        assert emitted[-1] == [7]

    def test_single_select_ignores_modifiers(self):
        selection, emitted = _make_selection(selection_kwargs={"enable_multi_select": False})
        selection.handle_item_click(FlatItem(3))

        selection.handle_item_click(FlatItem(5), CTRL)
        selection.handle_item_click(FlatItem(8), SHIFT)

        assert emitted[-1] == [8]
        assert not selection.enable_checkable

    def test_clear_selection(self):
        selection, emitted = _make_selection()
        selection.handle_item_click(FlatItem(3))

        selection.clear_selection()

        assert emitted[-1] == []
        assert selection.state.value.highlight_anchor is None


class TestCheckGestures:
    def test_check_toggles_without_modifiers(self):
        selection, emitted = _make_selection()

        selection.handle_check_change(FlatItem(4))
        selection.handle_check_change(FlatItem(6))
        assert emitted[-1] == [4, 6]
        assert selection.is_checked(FlatItem(6))

        selection.handle_check_change(FlatItem(4))
        assert emitted[-1] == [6]

    def test_shift_check_uses_check_anchor(self):
        selection, emitted = _make_selection()
        selection.handle_check_change(FlatItem(2))

        selection.handle_check_change(FlatItem(5), SHIFT)

        assert _addresses(selection.state.value.checked) == [3, 4, 5, 2]
        assert emitted[-1] == [2, 3, 4, 5]

    def test_single_check_keeps_checkbox(self):
        selection, _ = _make_selection()

        selection.handle_check_change(FlatItem(1))

        assert _addresses(selection.state.value.checked) == [1]
        assert selection.is_highlighted(FlatItem(1))


class TestGetCandidates:
    def test_toggle_adds_and_removes(self):
        selection, _ = _make_selection()
        base = [FlatItem(1), FlatItem(2)]

        added = selection.get_candidates(base, None, FlatItem(3), CTRL, False)
        removed = selection.get_candidates(base, None, FlatItem(1), CTRL, False)

        assert _addresses(added) == [1, 2, 3]
        assert _addresses(removed) == [2]

    def test_check_mode_toggles_without_ctrl(self):
        selection, _ = _make_selection()

        result = selection.get_candidates([FlatItem(1)], None, FlatItem(1), Modifiers(), True)

        assert result == []

    def test_range_stays_inside_list(self):
        selection, _ = _make_selection(count=4)

        result = selection.get_candidates([], FlatItem(1), FlatItem(9), SHIFT, False)

        assert _addresses(result) == [2, 3, 1]


class TestSections:
    def test_range_skips_headers(self):
        selection, emitted = _make_sectioned()
        selection.handle_item_click(SectionItem(4, 0, 3))

        selection.handle_item_click(SectionItem(9, 1, 2), SHIFT)

        result = emitted[-1]
        assert [item.global_index for item in result] == [4, 5, 7, 8, 9]
        assert all(isinstance(item, SectionItem) for item in result)
        assert (result[2].section_index, result[2].item_index) == (1, 0)

    def test_predicate_receives_index_entries(self):
        calls = []

        def predicate(payload, entry):
            calls.append(entry)
            return entry.item_index == 0

        selection, emitted = _make_sectioned(default_selected_status=predicate)

        assert all(isinstance(entry, IndexEntry) for entry in calls)
        assert not any(entry.is_section_header for entry in calls)
        assert [item.global_index for item in emitted[-1]] == [1, 7, 13]

    def test_headers_are_not_decorated(self):
        selection, _ = _make_sectioned()

        rows = selection.host.render().rows

        assert rows[0].element == "S0"
        assert isinstance(rows[1].element, SelectableRow)
        assert rows[1].element.item.global_index == 1


class TestRenderDecoration:
    def test_rows_reflect_selection_state(self):
        selection, _ = _make_selection()
        selection.handle_item_click(FlatItem(2))

        rows = selection.host.render().rows

        assert [row.element.highlighted for row in rows[:4]] == [False, False, True, False]
        assert rows[2].element.element == "item 2"
        assert rows[2].element.checkable

    def test_row_callbacks_drive_gestures(self):
        selection, emitted = _make_selection()
        rows = selection.host.render().rows

        rows[1].element.click()
        rows[4].element.click(CTRL)
        rows[6].element.toggle_check()

        assert emitted[-1] == [1, 4, 6]

    def test_commit_invalidates_host_render(self):
        selection, _ = _make_selection()
        invalidations = []
        selection.host.render_invalidated.connect(lambda: invalidations.append(True))

        selection.handle_item_click(FlatItem(0))

        assert invalidations == [True]

    def test_none_element_passes_through(self):
        selection, _ = _make_selection()

        selection.set_render_item(lambda context: None if context.index == 0 else context.index)
        rows = selection.host.render().rows

        assert rows[0].element is None
        assert rows[1].element.element == 1


class TestUpdateData:
    def test_new_data_re_derives_selection(self):
        selection, emitted = _make_selection(
            default_selected_status=lambda payload, index: payload % 2 == 0
        )
        selection.handle_item_click(FlatItem(1))

        selection.update_data(data=[10, 11, 12, 13])

        assert emitted[-1] == [0, 2]

    def test_layout_only_change_keeps_selection(self):
        selection, emitted = _make_selection()
        selection.handle_item_click(FlatItem(1))

        selection.update_data(list_height=300)

        assert emitted[-1] == [1]

    def test_host_data_change_rebuilds_section_ranges(self):
        selection, emitted = _make_sectioned(sections=2, items=2)
        grown = [{"data": f"S{s}", "items": [f"{s}-{i}" for i in range(5)]} for s in range(2)]

        selection.host.update_options(data=grown)
        selection.handle_item_click(SectionItem(1, 0, 0))
        selection.handle_item_click(SectionItem(9, 1, 2), SHIFT)

        assert [item.global_index for item in emitted[-1]] == [1, 2, 3, 4, 5, 7, 8, 9]

    def test_host_switch_to_sections_supports_ranges(self):
        selection, emitted = _make_selection()
        sections = [{"data": "S0", "items": ["a", "b", "c", "d"]}]

        selection.host.update_options(
            data=sections, enable_section=True, section_header_height=10
        )
        assert emitted[-1] == []
        assert selection.section_index is not None

        selection.handle_item_click(SectionItem(1, 0, 0))
        selection.handle_item_click(SectionItem(4, 0, 3), SHIFT)

        assert [item.global_index for item in emitted[-1]] == [1, 2, 3, 4]

    def test_host_item_count_change_re_derives(self):
        selection, emitted = _make_selection(
            count=2, default_selected_status=lambda payload, index: payload is None
        )
        assert emitted[-1] == []

        selection.host.update_options(item_total_count=4)

        assert emitted[-1] == [2, 3]
