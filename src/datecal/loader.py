"""Populate calendars from delimited date files."""

from datetime import date, datetime
from pathlib import Path
from typing import Iterable, Literal

from datecal.backends import DateSource, PandasSource, PolarsSource
from datecal.calendar import LocalDateCalendar
from datecal.config import get_calendar_config, get_dates_location
from datecal.events import Listener
from datecal.logging import get_logger, timed_block
from datecal.validation import InvalidArgumentError, InvalidStateError, not_none

SourceBackend = Literal["pandas", "polars"]

_log = get_logger(__name__)


def parse_date(text: str, pattern: str | None = None) -> date:
    """Parse a date string with a strptime pattern.

    Args:
        text: Raw value; surrounding whitespace is ignored.
        pattern: strptime format. Defaults to the configured date_pattern.

    Raises:
        InvalidArgumentError: If text is None or does not match the pattern.
    """
    not_none(text, "date")
    pattern = pattern or get_calendar_config().date_pattern
    try:
        return datetime.strptime(text.strip(), pattern).date()
    except ValueError as e:
        raise InvalidArgumentError(
            f"Cannot parse date {text!r} with pattern {pattern!r}"
        ) from e


def get_source(backend: SourceBackend) -> DateSource:
    if backend == "pandas":
        return PandasSource()
    elif backend == "polars":
        return PolarsSource()
    else:
        raise InvalidArgumentError(f"Unknown backend: {backend}")


def read_dates(
    path: Path | str,
    pattern: str | None = None,
    backend: SourceBackend = "pandas",
    delimiter: str = ",",
) -> list[date]:
    """Read and parse every date in a delimited file, in file order.

    Raises:
        InvalidStateError: If the file does not exist.
        InvalidArgumentError: If a value does not match the pattern.
    """
    path = Path(path)
    if not path.is_file():
        raise InvalidStateError(f"Date file not found: {path}. Directory or file name correct?")
    values = get_source(backend).read_values(path, delimiter=delimiter)
    return [parse_date(value, pattern) for value in values]


def load_calendar(
    file_name: str,
    end_date: date,
    period: int | None = None,
    name: str | None = None,
    location: Path | str | None = None,
    backend: SourceBackend = "pandas",
    listeners: Iterable[Listener] = (),
) -> LocalDateCalendar:
    """Build a calendar holding exactly the dates listed in a file.

    An empty calendar spanning the requested window is created and each date
    read from the file is added to it, so listeners see one DATE_ADDED per
    distinct date.

    Args:
        file_name: File name, resolved against location.
        end_date: Last date of the calendar window.
        period: Window length in days. Defaults to the configured default.
        name: Calendar name. Defaults to the file name without suffix.
        location: Directory holding the file. Defaults to the configured
            dates location.
        backend: Reader used for the file ("pandas" or "polars").
        listeners: Listeners registered on the new calendar.

    Raises:
        InvalidStateError: If no location is configured, the file is missing,
            or a date falls outside the calendar window.
        InvalidArgumentError: If a value does not match the date pattern.
    """
    not_none(file_name, "file_name")
    config = get_calendar_config()
    directory = Path(location) if location is not None else get_dates_location()
    path = directory / file_name

    with timed_block(_log, "calendar_loaded", level="info", path=str(path)) as fields:
        dates = read_dates(path, backend=backend)
        calendar = LocalDateCalendar(
            end_date,
            name if name is not None else Path(file_name).stem,
            period if period is not None else config.default_period,
            *listeners,
        )
        calendar.remove_week_days().remove_weekend_days()
        for day in dates:
            calendar.add(day)
        fields["dates"] = len(calendar)
    return calendar
