"""Module-level configuration for calendar defaults."""

import os
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from datecal.validation import InvalidArgumentError, InvalidStateError, state

ListenerErrors = Literal["raise", "log"]

DATES_LOCATION_ENV = "DATECAL_DATES_LOCATION"


@dataclass
class CalendarConfig:
    """Configuration for calendar defaults."""

    default_name: str = "default"
    default_period: int = 365
    date_pattern: str = "%Y-%m-%d"  # strptime format used for date sources
    dates_location: Path | None = None  # None = fall back to $DATECAL_DATES_LOCATION
    listener_errors: ListenerErrors = "raise"


# Module-level singleton
_calendar_config: CalendarConfig | None = None
_config_lock = threading.Lock()


def get_calendar_config() -> CalendarConfig:
    """Get the global calendar configuration singleton."""
    global _calendar_config
    if _calendar_config is None:
        with _config_lock:
            if _calendar_config is None:
                _calendar_config = CalendarConfig()
    return _calendar_config


def configure_calendar(
    default_name: str | None = None,
    default_period: int | None = None,
    date_pattern: str | None = None,
    dates_location: Path | str | None = None,
    listener_errors: ListenerErrors | None = None,
) -> None:
    """Configure default calendar settings.

    Only the arguments that are provided are changed.

    Args:
        default_name: Name given to calendars constructed without one.
        default_period: Day count of calendars constructed without one.
        date_pattern: strptime pattern used to parse dates read from files
            and create statements.
        dates_location: Directory that holds date source files.
        listener_errors: "raise" propagates a listener exception out of the
            mutating call; "log" logs it and notifies the remaining listeners.

    Example:
        from datecal import configure_calendar

        configure_calendar(
            default_period=730,
            date_pattern="%d/%m/%Y",
            dates_location="/etc/calendars",
        )
    """
    if default_period is not None:
        state(default_period > 0, "Argument 'default_period' must be > 0")
    if listener_errors is not None and listener_errors not in ("raise", "log"):
        raise InvalidArgumentError(
            f"Unknown listener error policy: {listener_errors!r}"
        )

    config = get_calendar_config()
    with _config_lock:
        if default_name is not None:
            config.default_name = default_name
        if default_period is not None:
            config.default_period = default_period
        if date_pattern is not None:
            config.date_pattern = date_pattern
        if dates_location is not None:
            config.dates_location = Path(dates_location)
        if listener_errors is not None:
            config.listener_errors = listener_errors


def get_dates_location() -> Path:
    """Get the directory holding date source files.

    Raises:
        InvalidStateError: If neither the configuration nor the
            DATECAL_DATES_LOCATION environment variable supplies one.
    """
    config = get_calendar_config()
    if config.dates_location is not None:
        return config.dates_location
    if location := os.environ.get(DATES_LOCATION_ENV):
        return Path(location)
    raise InvalidStateError(
        f"Dates location is not configured (set {DATES_LOCATION_ENV})."
    )


def reset_calendar_config() -> None:
    """Reset configuration to defaults. Useful for testing."""
    global _calendar_config
    with _config_lock:
        _calendar_config = CalendarConfig()
