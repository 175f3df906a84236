"""Tests for the ``ilist`` command line tool."""

import pytest
import typer
from typer.testing import CliRunner

from iList.cli import app, parse_gestures

runner = CliRunner()


def test_preview_flat_defaults():
    result = runner.invoke(app, ["preview"])

    assert result.exit_code == 0, result.output
    assert "Rows 0..6" in result.output
    assert "iw_6" in result.output
    assert "iw_7" not in result.output
    assert "item 3" in result.output
    assert "Selection: []" in result.output


def test_preview_scroll_with_buffer():
    result = runner.invoke(app, ["preview", "--scroll", "800", "--buffer", "1"])

    assert result.exit_code == 0, result.output
    assert "Rows 9..17" in result.output
    assert "Offset: 800" in result.output


def test_preview_gesture_script():
    result = runner.invoke(app, ["preview", "--select", "3,ctrl:5,shift:9"])

    assert result.exit_code == 0, result.output
    assert "Selection: [5, 6, 7, 8, 9]" in result.output


def test_preview_sections_scrolls_to_section():
    result = runner.invoke(app, ["preview", "--sections", "--section", "2"])

    assert result.exit_code == 0, result.output
    assert "Offset: 3920" in result.output
    assert "Rows 50..56" in result.output
    assert "Section C" in result.output


def test_preview_sections_selection_lists_addresses():
    result = runner.invoke(app, ["preview", "--sections", "--select", "check:1,check:27"])

    assert result.exit_code == 0, result.output
    assert "Selection: [0:0 (#1), 1:1 (#27)]" in result.output


def test_preview_zero_height():
    result = runner.invoke(app, ["preview", "--height", "0"])

    assert result.exit_code == 0, result.output
    assert "Nothing to render" in result.output


@pytest.mark.parametrize(
    "args",
    [
        ["--height", "-5"],
        ["--item-height", "-1"],
        ["--strategy", "binary"],
    ],
)
def test_invalid_options_exit_with_error(args):
    result = runner.invoke(app, ["preview", *args])

    assert result.exit_code == 1
    assert "Error" in result.output


@pytest.mark.parametrize(
    "args",
    [
        ["--select", "alt:3"],
        ["--select", "ctrl:x"],
        ["--select", "5000"],
        ["--section", "1"],
        ["--sections", "--select", "0"],
    ],
)
def test_bad_parameters_are_usage_errors(args):
    result = runner.invoke(app, ["preview", *args])

    assert result.exit_code == 2


def test_parse_gestures():
    assert parse_gestures(" 3, ctrl:5,shift+check:9 ,") == [
        (frozenset(), 3),
        (frozenset({"ctrl"}), 5),
        (frozenset({"shift", "check"}), 9),
    ]


def test_parse_gestures_rejects_unknown_modifier():
    with pytest.raises(typer.BadParameter):
        parse_gestures("hyper:1")
