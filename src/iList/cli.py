"""Typer-based CLI entry point."""

from __future__ import annotations

import functools
import logging
from typing import Any, Optional

import typer
from rich import print
from rich.markup import escape
from rich.table import Table

from . import demo
from .config import (
    DEFAULT_BUFFER_COUNT,
    DEMO_ITEM_HEIGHT,
    DEMO_LIST_HEIGHT,
    DEMO_SECTION_HEADER_HEIGHT,
    RANGE_STRATEGY_LINEAR,
)
from .errors import (
    InvalidHeightError,
    InvalidHeightTypeError,
    IListError,
    OptionsValidationError,
)
from .gui.viewmodels.list_viewmodel import ListEngine
from .gui.viewmodels.selection_viewmodel import SelectableRow, SelectionEngine
from .models.types import Modifiers, RowContext, SectionItem, SelectedItem
from .utils.console_logger import ensure_console_logger

app = typer.Typer(help="Virtualised list engine with selection support")


@app.callback()
def main() -> None:
    """Inspect the list engine from the command line."""


_MODIFIER_NAMES = ("ctrl", "shift", "meta", "check")


def _handle_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except (InvalidHeightError, InvalidHeightTypeError, OptionsValidationError) as exc:
            typer.echo(f"Error: {exc}", err=True)
            raise typer.Exit(1) from exc
        except IListError as exc:
            typer.echo(f"Unexpected error: {exc}", err=True)
            raise typer.Exit(1) from exc

    return wrapper


def parse_gestures(script: str) -> list[tuple[frozenset[str], int]]:
    """Parse a gesture script such as ``"3,ctrl:5,shift:9,check:11"``.

    Each comma separated step is an optional ``+`` joined modifier list, a
    colon and a global row index.  Known modifiers are ``ctrl``, ``shift``,
    ``meta`` and ``check``; ``check`` turns the step into a checkbox gesture.
    """

    gestures: list[tuple[frozenset[str], int]] = []
    for raw in script.split(","):
        step = raw.strip()
        if not step:
            continue
        names, _, index_text = step.rpartition(":")
        modifiers = frozenset(name.strip().lower() for name in names.split("+") if name.strip())
        unknown = modifiers.difference(_MODIFIER_NAMES)
        if unknown:
            raise typer.BadParameter(f"Unknown modifier(s) {', '.join(sorted(unknown))} in {step!r}")
        try:
            index = int(index_text)
        except ValueError as exc:
            raise typer.BadParameter(f"Invalid row index in {step!r}") from exc
        gestures.append((modifiers, index))
    return gestures


def _run_gestures(selection: SelectionEngine, gestures: list[tuple[frozenset[str], int]]) -> None:
    rows = selection.host.row_table.rows
    for names, index in gestures:
        if not 0 <= index < len(rows):
            raise typer.BadParameter(f"Row {index} is outside the list (0..{len(rows) - 1})")
        row = rows[index]
        if row.is_section_header:
            raise typer.BadParameter(f"Row {index} is a section header and cannot be selected")
        item = selection.item_for(
            RowContext(
                global_index=row.global_index,
                item=row.data,
                section=row.section,
                section_index=row.section_index,
                item_index=row.item_index,
            )
        )
        modifiers = Modifiers(ctrl="ctrl" in names, shift="shift" in names, meta="meta" in names)
        if "check" in names:
            selection.handle_check_change(item, modifiers)
        else:
            selection.handle_item_click(item, modifiers)


def _item_label(context: RowContext) -> str:
    if isinstance(context.item, dict):
        return str(context.item.get("content", ""))
    if context.item is None:
        return f"(row {context.global_index})"
    return str(context.item)


def _header_label(context: RowContext) -> str:
    title = context.section.get("title") if isinstance(context.section, dict) else context.section
    return f"Section {title}"


def _describe_item(item: SelectedItem) -> str:
    if isinstance(item, SectionItem):
        return f"{item.section_index}:{item.item_index} (#{item.global_index})"
    return str(item)


def _mark(flag: bool) -> str:
    return "[green]✓[/green]" if flag else ""


@app.command()
@_handle_errors
def preview(
    sections: bool = typer.Option(False, "--sections/--flat", help="Use the sectioned demo data."),
    height: float = typer.Option(DEMO_LIST_HEIGHT, "--height", help="Viewport height in pixels."),
    item_height: float = typer.Option(DEMO_ITEM_HEIGHT, "--item-height"),
    header_height: float = typer.Option(DEMO_SECTION_HEADER_HEIGHT, "--header-height"),
    buffer: int = typer.Option(DEFAULT_BUFFER_COUNT, "--buffer", help="Extra rows on each side."),
    scroll: Optional[float] = typer.Option(None, "--scroll", help="Scroll offset to apply."),
    section: Optional[int] = typer.Option(None, "--section", help="Scroll to this section."),
    select: str = typer.Option("", "--select", help='Gesture script, e.g. "3,ctrl:5,shift:9".'),
    strategy: str = typer.Option(RANGE_STRATEGY_LINEAR, "--strategy", help="linear or bisect."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log engine activity to stderr."),
) -> None:
    """Render the demo list at a scroll position and print the visible rows."""

    if verbose:
        ensure_console_logger("ilist-cli", level=logging.DEBUG)

    gestures = parse_gestures(select)
    options: dict[str, Any] = {
        "list_height": height,
        "item_height": item_height,
        "buffer_count": buffer,
        "range_strategy": strategy,
    }
    if sections:
        options.update(
            data=demo.sections(),
            enable_section=True,
            section_header_height=header_height,
            default_shown_section_index=section,
        )
    else:
        if section is not None:
            raise typer.BadParameter("--section requires --sections")
        options["data"] = demo.flat_items()

    emitted: list[list] = []
    engine = ListEngine(options, render_item=_item_label, render_section_header=_header_label)
    selection = SelectionEngine(engine, on_selected_change=emitted.append)

    if scroll is not None:
        engine.scroll_to(scroll)
    _run_gestures(selection, gestures)

    rendered = engine.render()
    if rendered is None:
        print("[yellow]Nothing to render: the list has no height")
        return

    start, end = rendered.render_range.as_tuple()
    table = Table(title=f"Rows {start}..{end}")
    table.add_column("key")
    table.add_column("top", justify="right")
    table.add_column("height", justify="right")
    table.add_column("label")
    table.add_column("highlighted", justify="center")
    table.add_column("checked", justify="center")
    for row in rendered.rows:
        element = row.element
        if isinstance(element, SelectableRow):
            table.add_row(
                row.key,
                f"{row.top:g}",
                f"{row.height:g}",
                escape(str(element.element)),
                _mark(element.highlighted),
                _mark(element.checked),
            )
        else:
            label = f"[bold]{escape(str(element))}[/bold]"
            table.add_row(row.key, f"{row.top:g}", f"{row.height:g}", label, "", "")
    print(table)
    print(f"Offset: {engine.scroll_offset.value:g} / total height {rendered.total_height:g}")

    result = emitted[-1] if emitted else []
    described = ", ".join(_describe_item(item) for item in result)
    print(escape(f"Selection: [{described}]"))


if __name__ == "__main__":  # pragma: no cover
    app()
