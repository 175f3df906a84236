"""Schema helpers for list engine options."""

from __future__ import annotations

import re
from collections.abc import Sequence
from copy import deepcopy
from dataclasses import dataclass, field, fields
from typing import Any, Callable, Mapping, Optional, Union

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

from ..config import (
    AUTO_LIST_HEIGHT,
    DEFAULT_BUFFER_COUNT,
    DEFAULT_SHOWN_SECTION_INDEX,
    RANGE_STRATEGIES,
    RANGE_STRATEGY_LINEAR,
)
from ..core.row_model import HeightSpec, is_real_number
from ..errors import InvalidHeightTypeError, InvalidPredicateError, OptionsValidationError

LIST_OPTIONS_SCHEMA: dict[str, Any] = {
    "$id": "iList/list-options.schema.json",
    "type": "object",
    "properties": {
        "list_height": {
            "oneOf": [
                {"type": "number", "minimum": 0},
                {"const": AUTO_LIST_HEIGHT},
            ],
        },
        "buffer_count": {"type": "integer", "minimum": 0},
        "item_total_count": {"type": ["integer", "null"], "minimum": 0},
        "enable_section": {"type": "boolean"},
        "default_shown_section_index": {"type": ["integer", "null"]},
        "enable_multi_select": {"type": "boolean"},
        "enable_checkable": {"type": ["boolean", "null"]},
        "range_strategy": {"type": "string", "enum": list(RANGE_STRATEGIES)},
    },
    "additionalProperties": True,
}

DEFAULT_LIST_OPTIONS: dict[str, Any] = {
    "data": (),
    "item_total_count": None,
    "item_height": None,
    "list_height": AUTO_LIST_HEIGHT,
    "buffer_count": DEFAULT_BUFFER_COUNT,
    "enable_section": False,
    "section_header_height": None,
    "default_shown_section_index": DEFAULT_SHOWN_SECTION_INDEX,
    "on_scroll": None,
    "enable_multi_select": True,
    "enable_checkable": None,
    "default_selected_status": None,
    "on_selected_change": None,
    "range_strategy": RANGE_STRATEGY_LINEAR,
}

# Keys holding callables or caller data are checked in Python; the schema only
# sees the JSON-compatible scalars.
_NON_SCHEMA_KEYS = frozenset(
    {
        "data",
        "item_height",
        "section_header_height",
        "on_scroll",
        "default_selected_status",
        "on_selected_change",
    }
)

_validator = Draft202012Validator(LIST_OPTIONS_SCHEMA)
_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


@dataclass(frozen=True)
class ListOptions:
    """Validated options of one list instance."""

    data: Sequence[Any] = ()
    item_height: Optional[HeightSpec] = None
    item_total_count: Optional[int] = None
    list_height: Union[float, str] = AUTO_LIST_HEIGHT
    buffer_count: int = DEFAULT_BUFFER_COUNT
    enable_section: bool = False
    section_header_height: Optional[HeightSpec] = None
    default_shown_section_index: Optional[int] = DEFAULT_SHOWN_SECTION_INDEX
    on_scroll: Optional[Callable[..., Any]] = None
    enable_multi_select: bool = True
    enable_checkable: Optional[bool] = None
    default_selected_status: Optional[Callable[..., bool]] = None
    on_selected_change: Optional[Callable[[list], Any]] = None
    range_strategy: str = RANGE_STRATEGY_LINEAR
    extra: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def checkable(self) -> bool:
        """Check mode defaults to the multi-select flag."""

        if self.enable_checkable is None:
            return self.enable_multi_select
        return self.enable_checkable

    @property
    def viewport_height(self) -> float:
        """Numeric viewport height; ``0`` for the ``"auto"`` sentinel."""

        if self.list_height == AUTO_LIST_HEIGHT:
            return 0
        return self.list_height

    def as_dict(self) -> dict[str, Any]:
        payload = {f.name: getattr(self, f.name) for f in fields(self) if f.name != "extra"}
        payload.update(self.extra)
        return payload


def normalise_key(key: str) -> str:
    """Convert ``itemTotalCount`` style keys to ``item_total_count``."""

    return _CAMEL_RE.sub("_", key).lower()


def merge_with_defaults(data: Mapping[str, Any] | None) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_LIST_OPTIONS` and validate the result."""

    merged = deepcopy(DEFAULT_LIST_OPTIONS)
    if data:
        for key, value in data.items():
            merged[normalise_key(key)] = value
    try:
        _validator.validate({k: v for k, v in merged.items() if k not in _NON_SCHEMA_KEYS})
    except ValidationError as exc:
        location = ".".join(str(part) for part in exc.absolute_path) or "<root>"
        raise OptionsValidationError(f"{location}: {exc.message}") from exc
    return merged


def _check_height_spec(name: str, value: Any) -> None:
    if is_real_number(value) or callable(value):
        return
    raise InvalidHeightTypeError(f'"{name}" must be a number or a function, got {type(value).__name__}')


def build_list_options(data: Union[ListOptions, Mapping[str, Any], None] = None) -> ListOptions:
    """Return validated :class:`ListOptions` for *data*.

    Scalars are validated against :data:`LIST_OPTIONS_SCHEMA`; height
    specifications, callbacks and the data sequence are checked here.
    """

    if isinstance(data, ListOptions):
        return data
    merged = merge_with_defaults(data)

    rows = merged["data"]
    if rows is None:
        rows = ()
    if isinstance(rows, (str, bytes)) or not isinstance(rows, Sequence):
        raise OptionsValidationError(f"data: expected a sequence, got {type(rows).__name__}")
    merged["data"] = rows

    _check_height_spec("item_height", merged["item_height"])
    if merged["enable_section"]:
        if merged["section_header_height"] is None:
            raise InvalidHeightTypeError(
                '"section_header_height" is required when sections are enabled'
            )
        _check_height_spec("section_header_height", merged["section_header_height"])

    predicate = merged["default_selected_status"]
    if predicate is not None and not callable(predicate):
        raise InvalidPredicateError('The "default_selected_status" option must be a function')
    for name in ("on_scroll", "on_selected_change"):
        if merged[name] is not None and not callable(merged[name]):
            raise OptionsValidationError(f'"{name}" must be a function')

    known = {f.name for f in fields(ListOptions)}
    extra = {k: v for k, v in merged.items() if k not in known}
    options = {k: v for k, v in merged.items() if k in known and k != "extra"}
    return ListOptions(**options, extra=extra)


def with_changes(options: ListOptions, changes: Mapping[str, Any]) -> ListOptions:
    """Return *options* with *changes* applied (camelCase keys accepted)."""

    normalised = {normalise_key(k): v for k, v in changes.items()}
    return build_list_options({**options.as_dict(), **normalised})


__all__ = [
    "DEFAULT_LIST_OPTIONS",
    "LIST_OPTIONS_SCHEMA",
    "ListOptions",
    "build_list_options",
    "merge_with_defaults",
    "normalise_key",
    "with_changes",
]
