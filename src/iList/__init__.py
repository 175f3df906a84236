"""iList: virtualised, selectable lists with optional sections."""

__version__ = "0.1.0"
