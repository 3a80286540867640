"""Parser for calendar create statements.

Statements take the form::

    create calendar 'payroll' start '2018-01-01' duration 2 years without_weekends

Keywords are case-insensitive. The start date is parsed with the configured
date pattern.
"""

import re
from dataclasses import dataclass
from datetime import date, timedelta

from datecal.calendar import LocalDateCalendar
from datecal.events import Listener
from datecal.loader import parse_date
from datecal.validation import InvalidArgumentError, not_none, state

_CREATE_STATEMENT = re.compile(
    r"""
    ^\s*create\s+calendar
    \s+'(?P<name>[^']+)'
    \s+start\s+'(?P<start>[^']+)'
    \s+duration\s+(?P<duration>[+-]?\d+)\s+years?
    (?:\s+(?P<without_weekends>without_weekends))?
    \s*;?\s*$
    """,
    re.IGNORECASE | re.VERBOSE,
)


class QuerySyntaxError(InvalidArgumentError):
    """Raised when a statement does not match the create grammar."""
    pass


def _add_years(day: date, years: int) -> date:
    if (day.month, day.day) == (2, 29):
        try:
            return day.replace(year=day.year + years)
        except ValueError:
            # non-leap target year
            return date(day.year + years, 3, 1)
    return day.replace(year=day.year + years)


@dataclass(frozen=True)
class CreateCalendarStatement:
    """Tokens of a parsed create statement."""

    name: str
    start_date: date
    duration_years: int
    without_weekends: bool = False
    statement_type: str = "create"

    @property
    def end_date(self) -> date:
        """Day before the start date's anniversary after duration_years."""
        return _add_years(self.start_date, self.duration_years) - timedelta(days=1)

    @property
    def period(self) -> int:
        return (self.end_date - self.start_date).days + 1

    def to_calendar(self, *listeners: Listener) -> LocalDateCalendar:
        """Build the calendar this statement describes."""
        calendar = LocalDateCalendar(self.end_date, self.name, self.period, *listeners)
        if self.without_weekends:
            calendar.remove_weekend_days()
        return calendar


def parse_create_statement(text: str) -> CreateCalendarStatement:
    """Parse a create statement into its tokens.

    Raises:
        InvalidArgumentError: If text is None or blank, or the start date
            does not match the configured pattern, or the window ends past
            the supported date range.
        QuerySyntaxError: If text is not a create statement.
        InvalidStateError: If the duration is not > 0.
    """
    not_none(text, "statement")
    if not text.strip():
        raise InvalidArgumentError("Statement is empty.")
    match = _CREATE_STATEMENT.match(text)
    if match is None:
        raise QuerySyntaxError(f"Not a create calendar statement: {text.strip()!r}")

    duration = int(match["duration"])
    state(duration > 0, "Statement duration must be > 0")
    statement = CreateCalendarStatement(
        name=match["name"],
        start_date=parse_date(match["start"]),
        duration_years=duration,
        without_weekends=match["without_weekends"] is not None,
    )
    try:
        statement.end_date
    except (ValueError, OverflowError) as e:
        raise InvalidArgumentError(
            f"Statement duration of {duration} years is outside of supported date range."
        ) from e
    return statement
