"""Pure Python signal system: no Qt dependency.

Provides ``Signal`` for observer callbacks (scroll notifications, selection
changes) and ``ObservableProperty`` for the state values owned by the list
and selection engines.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

_logger = logging.getLogger(__name__)


class Signal:
    """Observer list invoked synchronously on :meth:`emit`.

    Engines run on the UI thread only, so no locking is performed.  Handlers
    are snapshotted before dispatch; a handler may disconnect itself while
    the signal is being emitted.  Exceptions raised by one handler are logged
    and do not prevent the remaining handlers from running.
    """

    def __init__(self) -> None:
        self._handlers: list[Callable] = []

    def connect(self, handler: Callable) -> None:
        if handler not in self._handlers:
            self._handlers.append(handler)

    def disconnect(self, handler: Callable) -> None:
        self._handlers.remove(handler)

    def emit(self, *args: Any, **kwargs: Any) -> None:
        for handler in list(self._handlers):
            try:
                handler(*args, **kwargs)
            except Exception as exc:
                _logger.error("Signal handler %r failed: %s", handler, exc)

    @property
    def handler_count(self) -> int:
        return len(self._handlers)


class ObservableProperty:
    """Value holder emitting ``changed(new_value, old_value)`` on change."""

    def __init__(self, initial_value: Any = None) -> None:
        self._value = initial_value
        self.changed = Signal()

    @property
    def value(self) -> Any:
        return self._value

    @value.setter
    def value(self, new_value: Any) -> None:
        if self._value != new_value:
            old_value = self._value
            self._value = new_value
            self.changed.emit(new_value, old_value)
