"""Pytest configuration and shared fixtures."""

from datetime import date

import pytest

from datecal import LocalDateCalendar
from datecal.calendar import reset_empty_calendar
from datecal.config import reset_calendar_config

END_DATE = date(2018, 12, 30)
TWO_YEARS = 365 * 2


@pytest.fixture(autouse=True)
def reset_module_singletons():
    """Reset configuration and the shared empty calendar around each test.

    Both are module-level singletons that persist across tests. The empty
    calendar is built from the configured defaults, so the two are reset
    together.
    """
    reset_calendar_config()
    reset_empty_calendar()
    yield
    reset_calendar_config()
    reset_empty_calendar()


@pytest.fixture
def calendar():
    """Two-year calendar ending 2018-12-30 (starts 2016-12-31)."""
    return LocalDateCalendar(END_DATE, "default", TWO_YEARS)


@pytest.fixture
def week_calendar():
    """Seven-day calendar, Monday 2020-09-07 to Sunday 2020-09-13."""
    return LocalDateCalendar(date(2020, 9, 13), "tester", 7)


@pytest.fixture
def recorder():
    """Listener that records every event context it receives."""
    class Recorder:
        def __init__(self):
            self.contexts = []

        def __call__(self, context):
            self.contexts.append(context)

        @property
        def events(self):
            return [c.event for c in self.contexts]

    return Recorder()
