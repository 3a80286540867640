"""Change events and listener dispatch for calendars."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import TYPE_CHECKING, Callable, Iterator

from datecal.config import get_calendar_config
from datecal.logging import get_logger
from datecal.validation import InvalidArgumentError, not_none

if TYPE_CHECKING:
    from datecal.calendar import LocalDateCalendar


class CalendarChangeEvent(Enum):
    """Kinds of calendar change."""

    INITIALISED = "initialised"
    DATE_ADDED = "date_added"
    DATE_REMOVED = "date_removed"
    DATES_REMOVED = "dates_removed"
    DAY_OF_WEEK_REMOVED = "day_of_week_removed"
    CALENDAR_ADDED = "calendar_added"
    CALENDAR_REMOVED = "calendar_removed"


@dataclass(frozen=True)
class ChangeEventContext:
    """Payload delivered to listeners for one calendar change.

    ``calendar`` is the calendar the event refers to. For CALENDAR_ADDED and
    CALENDAR_REMOVED that is the *other* calendar, whose dates were applied.
    """

    event: CalendarChangeEvent
    message: str | None
    calendar: "LocalDateCalendar" = field(repr=False)
    dates: tuple[date, ...] = ()


Listener = Callable[[ChangeEventContext], None]


class ListenerRegistry:
    """Ordered registry of change listeners.

    Dispatch is synchronous and follows registration order. What happens
    when a listener raises is governed by ``CalendarConfig.listener_errors``.
    """

    def __init__(self, listeners: tuple[Listener, ...] = ()):
        self._listeners: list[Listener] = []
        self._log = get_logger(__name__)
        for listener in listeners:
            self.register(listener)

    def register(self, listener: Listener) -> None:
        not_none(listener, "listener")
        if not callable(listener):
            raise InvalidArgumentError(
                f"Listener must be callable, got {type(listener).__name__}."
            )
        self._listeners.append(listener)

    def remove(self, listener: Listener) -> bool:
        """Remove a listener. Returns False if it was not registered."""
        try:
            self._listeners.remove(listener)
        except ValueError:
            return False
        return True

    def dispatch(self, context: ChangeEventContext) -> None:
        """Deliver context to every registered listener."""
        self._log.debug(
            "calendar_event",
            calendar=context.calendar.name,
            change=context.event.name,
            dates=len(context.dates),
            listeners=len(self._listeners),
        )
        policy = get_calendar_config().listener_errors
        # Snapshot: a listener may register further listeners mid-dispatch.
        for listener in list(self._listeners):
            if policy == "raise":
                listener(context)
                continue
            try:
                listener(context)
            except Exception:
                self._log.exception(
                    "listener_failed",
                    calendar=context.calendar.name,
                    change=context.event.name,
                    listener=getattr(listener, "__name__", repr(listener)),
                )

    def __len__(self) -> int:
        return len(self._listeners)

    def __iter__(self) -> Iterator[Listener]:
        return iter(tuple(self._listeners))
