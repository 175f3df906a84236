"""Reusable Qt widgets for iList."""

from .selectable_row import CheckboxFactory, SelectableRowWidget, modifiers_from_qt
from .virtual_list_view import QtScrollContainer, VirtualListView

__all__ = [
    "CheckboxFactory",
    "QtScrollContainer",
    "SelectableRowWidget",
    "VirtualListView",
    "modifiers_from_qt",
]
