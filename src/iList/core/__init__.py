"""Pure layout primitives: row tables, viewport windows and section lookups."""

from .row_model import build_row_table, resolve_height
from .section_index import SectionIndex, build_section_index
from .viewport import resolve_render_range

__all__ = [
    "SectionIndex",
    "build_row_table",
    "build_section_index",
    "resolve_height",
    "resolve_render_range",
]
