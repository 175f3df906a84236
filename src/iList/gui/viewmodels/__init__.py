from .signal import Signal, ObservableProperty
from .list_viewmodel import ListEngine, ScrollContainer
from .selection_viewmodel import SelectableRow, SelectionEngine

__all__ = [
    "ListEngine",
    "ObservableProperty",
    "ScrollContainer",
    "SelectableRow",
    "SelectionEngine",
    "Signal",
]
