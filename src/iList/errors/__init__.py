"""Custom exception hierarchy for iList."""

from __future__ import annotations


class IListError(Exception):
    """Base class for all custom errors raised by iList."""


class ConfigurationError(IListError):
    """Base class for misuse of the list configuration.

    These are programmer errors: nothing is retried, the caller is expected to
    fix the options that were handed to the engine.
    """


class InvalidHeightError(ConfigurationError):
    """Raised when a height specification resolves to a non-number, NaN or a negative value."""


class InvalidHeightTypeError(ConfigurationError):
    """Raised when a height specification is neither a number nor a callable."""


class InvalidPredicateError(ConfigurationError):
    """Raised when the default-selection predicate is not callable."""


class OptionsValidationError(ConfigurationError):
    """Raised when list options fail schema validation."""


__all__ = [
    "ConfigurationError",
    "IListError",
    "InvalidHeightError",
    "InvalidHeightTypeError",
    "InvalidPredicateError",
    "OptionsValidationError",
]
