"""Calendar of dates managed as an ordered, bounded set."""

import threading
from bisect import bisect_left
from datetime import date, timedelta
from enum import IntEnum
from typing import Any, Iterable, Iterator

from datecal.config import get_calendar_config
from datecal.events import CalendarChangeEvent, ChangeEventContext, Listener, ListenerRegistry
from datecal.logging import get_logger
from datecal.mixins import QueryMixin, _desc_key
from datecal.validation import (
    InvalidArgumentError,
    InvalidStateError,
    not_none,
    state,
    to_date,
)

_UNSET: Any = object()


class DayOfWeek(IntEnum):
    """Days of the week, numbered like ``date.weekday()``."""

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6


WEEK_DAYS = (
    DayOfWeek.MONDAY,
    DayOfWeek.TUESDAY,
    DayOfWeek.WEDNESDAY,
    DayOfWeek.THURSDAY,
    DayOfWeek.FRIDAY,
)
WEEKEND_DAYS = (DayOfWeek.SATURDAY, DayOfWeek.SUNDAY)


class LocalDateCalendar(QueryMixin):
    """A mutable set of dates bounded by [start_date, end_date].

    The calendar starts out holding every date of its window and is then
    shaped with add/remove operations. It only ever reasons about the dates
    it holds: asking for the last day of a month it holds no dates for
    returns None, even when that month is inside the window.

    Dates are kept newest first. Mutators return the calendar itself so
    calls can be chained, and every mutation that changes the set notifies
    registered listeners before returning.
    """

    def __init__(
        self,
        end_date: date = _UNSET,
        name: str = _UNSET,
        period: int = _UNSET,
        *listeners: Listener,
    ) -> None:
        """Initialize a calendar.

        Args:
            end_date: Last date of the window. Defaults to today.
            name: Friendly name. Defaults to the configured default name.
            period: Length of the window in days. Defaults to the configured
                default period.
            *listeners: Listeners registered before the INITIALISED event
                fires.

        Raises:
            InvalidArgumentError: If end_date or name is None.
            InvalidStateError: If period is not > 0.
        """
        config = get_calendar_config()
        if end_date is _UNSET:
            end_date = date.today()
        if name is _UNSET:
            name = config.default_name
        if period is _UNSET:
            period = config.default_period

        self._end_date = to_date(end_date, "end_date")
        self._name = not_none(name, "name")
        not_none(period, "period")
        if isinstance(period, bool) or not isinstance(period, int):
            raise InvalidArgumentError(
                f"Argument 'period' must be an int, got {type(period).__name__}."
            )
        state(period > 0, "Argument 'period' must be > 0")
        try:
            self._end_date - timedelta(days=period - 1)
        except OverflowError as e:
            raise InvalidArgumentError(
                "Calendar window is outside of supported date range."
            ) from e
        self._period = period
        self._frozen = False

        self._days: list[date] = [
            self._end_date - timedelta(days=offset) for offset in range(period)
        ]
        self._members: set[date] = set(self._days)
        self._listeners = ListenerRegistry(listeners)
        self._log = get_logger(__name__).bind(calendar=self._name)
        self._log.debug(
            "calendar_created",
            start=self.start_date.isoformat(),
            end=self._end_date.isoformat(),
            period=period,
        )
        self._notify(CalendarChangeEvent.INITIALISED, "Calendar initialised.")

    # Identity
    @property
    def name(self) -> str:
        return self._name

    @property
    def end_date(self) -> date:
        """Last date of the window, whether or not the calendar holds it."""
        return self._end_date

    @property
    def start_date(self) -> date:
        """First date of the window, whether or not the calendar holds it."""
        return self._end_date - timedelta(days=self._period - 1)

    @property
    def period(self) -> int:
        return self._period

    def get_all_dates(self) -> tuple[date, ...]:
        """Return every date held, newest first, as a read-only snapshot."""
        return tuple(self._days)

    # Listeners
    def register(self, listener: Listener) -> "LocalDateCalendar":
        """Register a listener for every change event of this calendar.

        Raises:
            InvalidArgumentError: If listener is None or not callable.
        """
        self._check_mutable()
        self._listeners.register(listener)
        return self

    def unregister(self, listener: Listener) -> bool:
        return self._listeners.remove(listener)

    def _notify(
        self,
        event: CalendarChangeEvent,
        message: str,
        *dates: date,
        calendar: "LocalDateCalendar | None" = None,
    ) -> None:
        if calendar is None:
            calendar = self
        self._listeners.dispatch(ChangeEventContext(event, message, calendar, dates))

    def _check_mutable(self) -> None:
        if self._frozen:
            raise InvalidStateError(f"Calendar '{self._name}' is read-only.")

    def _discard(self, days: set[date]) -> None:
        self._days[:] = [d for d in self._days if d not in days]
        self._members -= days

    # Additions
    def add(self, target: "date | LocalDateCalendar") -> "LocalDateCalendar":
        """Add a date, or every date of another calendar.

        The date may land in a gap: its neighbours need not be one day away.
        Adding a date already held is a silent no-op, while a date outside
        the window is always an error.

        Raises:
            InvalidArgumentError: If target is None.
            InvalidStateError: If the date is outside [start_date, end_date].
        """
        if isinstance(target, LocalDateCalendar):
            return self.add_calendar(target)
        day = to_date(target, "date")
        self._check_mutable()
        if not self._in_range(day):
            raise InvalidStateError("Date supplied is outside of calendar range.")
        if day in self._members:
            return self
        # First index whose date is not after day; entries before it are newer.
        index = bisect_left(self._days, _desc_key(day), key=_desc_key)
        self._days.insert(index, day)
        self._members.add(day)
        self._notify(CalendarChangeEvent.DATE_ADDED, "New date added to calendar.", day)
        return self

    def add_calendar(self, calendar: "LocalDateCalendar") -> "LocalDateCalendar":
        """Add every date held by another calendar.

        DATE_ADDED fires for each date actually inserted, followed by one
        CALENDAR_ADDED event referencing the other calendar. The other
        calendar is only read.

        Raises:
            InvalidArgumentError: If calendar is None.
            InvalidStateError: If any of its dates falls outside this
                calendar's window. Nothing is added in that case.
        """
        calendar = self._require_calendar(calendar)
        self._check_mutable()
        incoming = list(calendar._days)
        if incoming and not (self._in_range(incoming[0]) and self._in_range(incoming[-1])):
            raise InvalidStateError(
                f"Calendar '{calendar.name}' holds dates outside of calendar range."
            )
        for day in incoming:
            self.add(day)
        self._notify(
            CalendarChangeEvent.CALENDAR_ADDED,
            f"Calendar dates from {calendar.name} added to {self._name}.",
            calendar=calendar,
        )
        return self

    # Removals
    def remove(
        self,
        target: "date | DayOfWeek | LocalDateCalendar",
        ignore_not_located: bool = False,
    ) -> "LocalDateCalendar":
        """Remove a date, a day-of-week class, or another calendar's dates.

        Args:
            target: A date, a DayOfWeek, or a LocalDateCalendar.
            ignore_not_located: For a date target, silently ignore a date the
                calendar does not hold instead of raising.

        Raises:
            InvalidArgumentError: If target is None, or if a date target is
                not held and ignore_not_located is False.
        """
        if isinstance(target, DayOfWeek):
            return self.remove_day_of_week(target)
        if isinstance(target, LocalDateCalendar):
            return self.remove_calendar(target)
        day = to_date(target, "date")
        self._check_mutable()
        if day not in self._members:
            if not ignore_not_located:
                raise InvalidArgumentError("Date supplied is not managed by this calendar.")
            return self
        del self._days[self._index_of(day)]
        self._members.discard(day)
        self._notify(CalendarChangeEvent.DATE_REMOVED, "Date removed from calendar.", day)
        return self

    def remove_all(
        self, dates: Iterable[date], ignore_unknown_dates: bool = False
    ) -> "LocalDateCalendar":
        """Remove a collection of dates.

        Presence is checked for the whole collection before anything is
        removed. The single DATES_REMOVED event carries the dates as supplied,
        not only those that were held.

        Raises:
            InvalidArgumentError: If dates is None, or if ignore_unknown_dates
                is False and any date is not held.
        """
        not_none(dates, "dates")
        supplied = [to_date(d, "dates") for d in dates]
        self._check_mutable()
        if not ignore_unknown_dates and any(d not in self._members for d in supplied):
            raise InvalidArgumentError(
                "One or more dates supplied is not managed by this calendar."
            )
        held = self._members.intersection(supplied)
        if held:
            self._discard(held)
            self._notify(
                CalendarChangeEvent.DATES_REMOVED,
                "Collection of dates removed from calendar.",
                *supplied,
            )
        return self

    def remove_day_of_week(self, day_of_week: DayOfWeek) -> "LocalDateCalendar":
        """Remove every date falling on day_of_week.

        One DAY_OF_WEEK_REMOVED event carries the removed dates; nothing fires
        if no date matched.
        """
        not_none(day_of_week, "day_of_week")
        try:
            day_of_week = DayOfWeek(day_of_week)
        except ValueError:
            raise InvalidArgumentError(f"Unknown day of week: {day_of_week!r}") from None
        self._check_mutable()
        matching = self.get_dates_for_days_of_week(day_of_week)
        if matching:
            self._discard(set(matching))
            self._notify(
                CalendarChangeEvent.DAY_OF_WEEK_REMOVED,
                f"Day of week removed [{day_of_week.name}].",
                *matching,
            )
        return self

    def remove_weekend_days(self) -> "LocalDateCalendar":
        self._check_mutable()
        for day_of_week in WEEKEND_DAYS:
            self.remove_day_of_week(day_of_week)
        self._notify(
            CalendarChangeEvent.DAY_OF_WEEK_REMOVED,
            "All weekend dates have been removed from calendar.",
        )
        return self

    def remove_week_days(self) -> "LocalDateCalendar":
        self._check_mutable()
        for day_of_week in WEEK_DAYS:
            self.remove_day_of_week(day_of_week)
        self._notify(
            CalendarChangeEvent.DAY_OF_WEEK_REMOVED,
            "All weekday dates have been removed from calendar.",
        )
        return self

    def remove_calendar(self, calendar: "LocalDateCalendar") -> "LocalDateCalendar":
        """Remove every date held by another calendar.

        Dates this calendar does not hold are ignored. DATE_REMOVED fires for
        each date actually removed, then exactly one CALENDAR_REMOVED event
        referencing the other calendar, even if nothing was removed.

        Raises:
            InvalidArgumentError: If calendar is None.
            InvalidStateError: If calendar is this calendar.
        """
        calendar = self._require_calendar(calendar)
        state(calendar is not self, "A calendar cannot be removed from itself.")
        self._check_mutable()
        for day in list(calendar._days):
            self.remove(day, ignore_not_located=True)
        self._notify(
            CalendarChangeEvent.CALENDAR_REMOVED,
            f"Calendar dates from {calendar.name} removed from {self._name}.",
            calendar=calendar,
        )
        return self

    @staticmethod
    def _require_calendar(calendar: Any) -> "LocalDateCalendar":
        not_none(calendar, "calendar")
        if not isinstance(calendar, LocalDateCalendar):
            raise InvalidArgumentError(
                f"Argument 'calendar' must be a LocalDateCalendar, got {type(calendar).__name__}."
            )
        return calendar

    # Set operations across calendars
    @staticmethod
    def intersect(*calendars: "LocalDateCalendar") -> "LocalDateCalendar":
        """Create a calendar from the intersection of calendars.

        Reserved: no merge rule for differing windows has been settled yet.

        Raises:
            InvalidArgumentError: If any calendar is None.
            InvalidStateError: If no calendars are supplied.
            NotImplementedError: Otherwise.
        """
        _check_calendars(calendars, "intersect")
        raise NotImplementedError("LocalDateCalendar.intersect is not implemented")

    @staticmethod
    def union(*calendars: "LocalDateCalendar") -> "LocalDateCalendar":
        """Create a calendar from the union of calendars.

        Reserved, see intersect().
        """
        _check_calendars(calendars, "union")
        raise NotImplementedError("LocalDateCalendar.union is not implemented")

    @staticmethod
    def empty() -> "LocalDateCalendar":
        """Return the shared, read-only calendar that holds no dates."""
        return get_empty_calendar()

    # Python protocol
    def __len__(self) -> int:
        return len(self._days)

    def __contains__(self, item: object) -> bool:
        if not isinstance(item, date):
            return False
        return to_date(item, "date") in self._members

    def __iter__(self) -> Iterator[date]:
        return iter(tuple(self._days))

    def __repr__(self) -> str:
        return (
            f"LocalDateCalendar(name={self._name!r}, "
            f"start_date={self.start_date.isoformat()}, "
            f"end_date={self._end_date.isoformat()}, "
            f"dates={len(self._days)})"
        )


def _check_calendars(calendars: tuple, operation: str) -> None:
    if any(calendar is None for calendar in calendars):
        raise InvalidArgumentError("Mandatory argument 'calendars' is missing.")
    state(len(calendars) > 0, f"Cannot {operation} an empty list of calendars.")


# Module-level singleton
_empty_calendar: LocalDateCalendar | None = None
_empty_lock = threading.Lock()


def get_empty_calendar() -> LocalDateCalendar:
    """Get the shared empty calendar, building it on first use."""
    global _empty_calendar
    if _empty_calendar is None:
        with _empty_lock:
            if _empty_calendar is None:
                calendar = LocalDateCalendar().remove_week_days().remove_weekend_days()
                calendar._frozen = True
                _empty_calendar = calendar
    return _empty_calendar


def reset_empty_calendar() -> None:
    """Drop the shared empty calendar so it is rebuilt. Useful for testing."""
    global _empty_calendar
    with _empty_lock:
        _empty_calendar = None
