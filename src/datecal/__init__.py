"""datecal - Bounded date calendars with set operations and change events."""

from datecal.backends import DateSource, PandasSource, PolarsSource
from datecal.calendar import (
    WEEK_DAYS,
    WEEKEND_DAYS,
    DayOfWeek,
    LocalDateCalendar,
    get_empty_calendar,
    reset_empty_calendar,
)
from datecal.config import (
    CalendarConfig,
    configure_calendar,
    get_calendar_config,
    get_dates_location,
    reset_calendar_config,
)
from datecal.events import (
    CalendarChangeEvent,
    ChangeEventContext,
    Listener,
    ListenerRegistry,
)
from datecal.loader import load_calendar, parse_date, read_dates
from datecal.logging import configure_logging, get_logger
from datecal.query import CreateCalendarStatement, QuerySyntaxError, parse_create_statement
from datecal.validation import CalendarError, InvalidArgumentError, InvalidStateError

__all__ = [
    # Primary API
    "LocalDateCalendar",
    "DayOfWeek",
    "WEEK_DAYS",
    "WEEKEND_DAYS",
    "get_empty_calendar",
    "reset_empty_calendar",
    # Events
    "CalendarChangeEvent",
    "ChangeEventContext",
    "Listener",
    "ListenerRegistry",
    # Errors
    "CalendarError",
    "InvalidArgumentError",
    "InvalidStateError",
    "QuerySyntaxError",
    # Config
    "CalendarConfig",
    "configure_calendar",
    "get_calendar_config",
    "get_dates_location",
    "reset_calendar_config",
    # Logging
    "configure_logging",
    "get_logger",
    # Date sources
    "DateSource",
    "PandasSource",
    "PolarsSource",
    "load_calendar",
    "parse_date",
    "read_dates",
    # Create statements
    "CreateCalendarStatement",
    "parse_create_statement",
]
__version__ = "0.1.0"
