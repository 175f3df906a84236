"""Default configuration values for iList."""

from __future__ import annotations

from typing import Final

# ``AUTO_LIST_HEIGHT`` is the sentinel accepted for ``list_height`` when the
# host has not measured the viewport yet.  The engine renders nothing in that
# state, exactly as it does for a height of ``0``.
AUTO_LIST_HEIGHT: Final[str] = "auto"
DEFAULT_BUFFER_COUNT: Final[int] = 0
DEFAULT_SHOWN_SECTION_INDEX: Final[int] = 0

# Rendered rows are keyed "iw_<global index>".
ROW_KEY_PREFIX: Final[str] = "iw_"

RANGE_STRATEGY_LINEAR: Final[str] = "linear"
RANGE_STRATEGY_BISECT: Final[str] = "bisect"
RANGE_STRATEGIES: Final[tuple[str, ...]] = (RANGE_STRATEGY_LINEAR, RANGE_STRATEGY_BISECT)

# ---------------------------------------------------------------------------
# Demo data set used by the ``ilist`` command line tool
# ---------------------------------------------------------------------------

DEMO_ITEM_COUNT: Final[int] = 944
DEMO_SECTION_LETTERS: Final[tuple[str, ...]] = ("A", "B", "C", "D", "Z")
DEMO_SECTION_SUPPLIED_ITEMS: Final[int] = 14
DEMO_SECTION_ITEM_TOTAL: Final[int] = 24
DEMO_ITEM_HEIGHT: Final[int] = 80
DEMO_SECTION_HEADER_HEIGHT: Final[int] = 40
DEMO_LIST_HEIGHT: Final[int] = 500

# ---------------------------------------------------------------------------
# Qt host surface
# ---------------------------------------------------------------------------

SELECTED_PROPERTY_NAME: Final[str] = "selected"
CHECKBOX_COLUMN_WIDTH: Final[int] = 28
