"""Argument and state validation for calendar operations."""

from datetime import date, datetime
from typing import Any


class CalendarError(Exception):
    """Base class for all calendar errors."""
    pass


class InvalidArgumentError(CalendarError, ValueError):
    """Raised when a required argument is missing or outside its valid domain."""
    pass


class InvalidStateError(CalendarError, RuntimeError):
    """Raised when a structural precondition is violated."""
    pass


def not_none(value: Any, name: str) -> Any:
    """Return value, raising InvalidArgumentError if it is None.

    Raises:
        InvalidArgumentError: If value is None.
    """
    if value is None:
        raise InvalidArgumentError(f"Mandatory argument '{name}' is missing.")
    return value


def state(condition: bool, message: str) -> None:
    """Raise InvalidStateError unless condition holds."""
    if not condition:
        raise InvalidStateError(message)


def to_date(value: Any, name: str) -> date:
    """Validate and normalize a date argument.

    Datetimes are truncated to their date part so that a calendar only ever
    holds plain ``date`` objects.

    Raises:
        InvalidArgumentError: If value is None or not a date.
    """
    not_none(value, name)
    if isinstance(value, datetime):
        return value.date()
    if not isinstance(value, date):
        raise InvalidArgumentError(
            f"Argument '{name}' must be a date, got {type(value).__name__}."
        )
    return value


def to_month(value: Any) -> int:
    """Validate a month number (1-12)."""
    not_none(value, "month")
    if not isinstance(value, int) or not 1 <= value <= 12:
        raise InvalidArgumentError(f"Argument 'month' must be in 1..12, got {value!r}.")
    return int(value)
