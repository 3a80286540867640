"""Mixin classes for calendar queries."""

from bisect import bisect_left, bisect_right
from datetime import date

from datecal.validation import (
    InvalidArgumentError,
    not_none,
    state,
    to_date,
    to_month,
)


def _desc_key(day: date) -> int:
    """Sort key that makes a newest-first date list ascending."""
    return -day.toordinal()


class QueryMixin:
    """Mixin providing read-only range queries over a calendar's dates.

    Expects the host class to provide ``_days`` (a newest-first list of
    unique dates), ``_members`` (a set mirroring ``_days``) and the
    ``start_date`` / ``end_date`` properties.
    """

    _days: list[date]
    _members: set[date]

    # Positional helpers
    def _index_of(self, day: date) -> int:
        """Index of a date known to be present."""
        return bisect_left(self._days, _desc_key(day), key=_desc_key)

    def _index_before(self, day: date) -> int:
        """Index of the first entry strictly before day (may equal len)."""
        return bisect_right(self._days, _desc_key(day), key=_desc_key)

    def _in_range(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def _require_in_range(self, day: date) -> None:
        if not self._in_range(day):
            raise InvalidArgumentError("Date supplied is outside of calendar range.")

    # Point lookups
    def get_day(self, day: date) -> date | None:
        """Locate a date in the calendar.

        Args:
            day: Search key.

        Returns:
            The date if the calendar holds it, otherwise None.
        """
        day = to_date(day, "date")
        return day if day in self._members else None

    def get_day_before(self, day: date) -> date | None:
        """Get the closest date held by the calendar that precedes day.

        The result is not necessarily ``day - 1``: that date may have been
        removed. ``day`` itself does not need to be present, so gaps can be
        queried too.

        Args:
            day: Search key, within [start_date, end_date].

        Returns:
            The closest present date strictly before day, or None when no
            present date precedes it.

        Raises:
            InvalidArgumentError: If day is None, outside the calendar range,
                equal to the start date, or the calendar holds no dates.
        """
        day = to_date(day, "date")
        self._require_in_range(day)
        if day == self.start_date:
            raise InvalidArgumentError("Date before will be outside of calendar range.")
        if not self._days:
            raise InvalidArgumentError("Cannot use get_day_before() on an empty calendar.")
        index = self._index_before(day)
        return self._days[index] if index < len(self._days) else None

    def is_first_day_in_the_month(self, day: date) -> bool:
        """Check whether day is the first date of its month in this calendar.

        "First" is relative to the dates present: once the 1st is removed,
        the 2nd becomes the first day of the month.

        Raises:
            InvalidArgumentError: If day is None or outside the calendar range.
        """
        day = to_date(day, "date")
        self._require_in_range(day)
        if day not in self._members:
            return False
        index = self._index_before(day)
        if index >= len(self._days):
            return True
        previous = self._days[index]
        return (previous.year, previous.month) != (day.year, day.month)

    def is_day_of_the_month(self, day: date, offset: int) -> bool:
        """Check whether day is the offset-th present date of its month.

        ``is_day_of_the_month(date(2018, 1, 1), 1)`` is True on a full 2018
        calendar, while ``is_day_of_the_month(date(2018, 1, 5), 2)`` depends
        on what has been removed.

        Args:
            day: Lookup key, within [start_date, end_date].
            offset: 1-based position counted from the first present date of
                the month.

        Raises:
            InvalidArgumentError: If day is None or outside the calendar range.
            InvalidStateError: If offset is negative.
        """
        day = to_date(day, "date")
        self._require_in_range(day)
        not_none(offset, "offset")
        state(offset >= 0, "Argument 'offset' must be >= 0")
        if day not in self._members:
            return False
        probe = self._index_of(day) + (offset - 1)
        if not 0 <= probe < len(self._days):
            return False
        return self.is_first_day_in_the_month(self._days[probe])

    # Filters
    def get_dates_for_days_of_week(self, day_of_week: int) -> list[date]:
        """Get every date falling on the given day of the week, newest first."""
        not_none(day_of_week, "day_of_week")
        return [d for d in self._days if d.weekday() == day_of_week]

    def get_days_in_month(self, month: int, *, year: int | None = None) -> list[date]:
        """Get the dates in a month, newest first.

        Args:
            month: Month number 1-12.
            year: Restrict to this year. None matches the month in every year
                the calendar spans.

        Returns:
            Possibly empty list of dates.
        """
        month = to_month(month)
        days = self.get_days_in_year(year) if year is not None else self._days
        return [d for d in days if d.month == month]

    def get_days_in_year(self, year: int) -> list[date]:
        not_none(year, "year")
        return [d for d in self._days if d.year == year]

    def get_first_day_of_the_month(self, year: int, month: int) -> date | None:
        """Get the earliest date the calendar holds in year/month, or None."""
        not_none(year, "year")
        days = self.get_days_in_month(month, year=year)
        return days[-1] if days else None

    def get_last_day_of_month_before(
        self, day: date, month_subtraction: int = 1
    ) -> date | None:
        """Get the latest date held in the month N months before day's month.

        If the calendar holds no dates for that month, None is returned even
        if the month lies inside the calendar range.

        Args:
            day: Reference date, within [start_date, end_date].
            month_subtraction: Number of months to step back. 0 looks at
                day's own month.

        Raises:
            InvalidArgumentError: If day is None or outside the calendar range.
            InvalidStateError: If month_subtraction is negative.
        """
        day = to_date(day, "date")
        self._require_in_range(day)
        not_none(month_subtraction, "month_subtraction")
        state(month_subtraction >= 0, "Argument 'month_subtraction' must be >= 0")
        year, month_index = divmod(day.year * 12 + day.month - 1 - month_subtraction, 12)
        for d in self._days:
            if d.year == year and d.month == month_index + 1:
                return d
        return None
