"""Tests for create statement parsing."""

from datetime import date

import pytest

from datecal import (
    CalendarChangeEvent,
    CalendarError,
    CreateCalendarStatement,
    DayOfWeek,
    InvalidArgumentError,
    InvalidStateError,
    QuerySyntaxError,
    configure_calendar,
    parse_create_statement,
)


class TestParseCreateStatement:
    """Test parse_create_statement."""

    def test_basic(self):
        statement = parse_create_statement(
            "create calendar 'payroll' start '2018-01-01' duration 2 years"
        )

        assert statement == CreateCalendarStatement(
            name="payroll",
            start_date=date(2018, 1, 1),
            duration_years=2,
        )
        assert statement.statement_type == "create"
        assert statement.end_date == date(2019, 12, 31)
        assert statement.period == 730

    def test_keywords_case_insensitive(self):
        statement = parse_create_statement(
            "CREATE Calendar 'Payroll' START '2018-01-01' Duration 1 YEAR;"
        )

        assert statement.name == "Payroll"
        assert statement.duration_years == 1

    def test_without_weekends(self):
        statement = parse_create_statement(
            "create calendar 'work' start '2018-01-01' duration 1 year without_weekends"
        )

        assert statement.without_weekends is True

    def test_extra_whitespace(self):
        statement = parse_create_statement(
            "  create   calendar 'work'\n start '2018-01-01'  duration 3 years ;  "
        )

        assert statement.duration_years == 3

    def test_configured_date_pattern(self):
        configure_calendar(date_pattern="%d/%m/%Y")

        statement = parse_create_statement(
            "create calendar 'work' start '01/02/2018' duration 1 year"
        )

        assert statement.start_date == date(2018, 2, 1)

    @pytest.mark.parametrize(
        "text",
        [
            "select * from calendar",
            "create calendar payroll start '2018-01-01' duration 2 years",
            "create calendar 'payroll' start '2018-01-01' duration two years",
            "create calendar 'payroll' start '2018-01-01' duration 2 months",
            "create calendar 'payroll' start '2018-01-01' duration 2 years with_weekends",
        ],
    )
    def test_syntax_error(self, text):
        with pytest.raises(QuerySyntaxError):
            parse_create_statement(text)

    def test_syntax_error_is_argument_error(self):
        with pytest.raises(InvalidArgumentError):
            parse_create_statement("drop calendar 'payroll'")

    @pytest.mark.parametrize("duration", ["0", "-1"])
    def test_duration_not_positive(self, duration):
        with pytest.raises(InvalidStateError, match="duration must be > 0"):
            parse_create_statement(
                f"create calendar 'payroll' start '2018-01-01' duration {duration} years"
            )

    def test_bad_start_date(self):
        with pytest.raises(InvalidArgumentError, match="Cannot parse date"):
            parse_create_statement(
                "create calendar 'payroll' start '2018-02-30' duration 1 year"
            )

    @pytest.mark.parametrize(
        "start, duration",
        [("2018-01-01", 9000), ("2016-02-29", 9000), ("9999-06-01", 1)],
    )
    def test_window_past_supported_range(self, start, duration):
        with pytest.raises(InvalidArgumentError, match="supported date range"):
            parse_create_statement(
                f"create calendar 'far' start '{start}' duration {duration} years"
            )

    def test_duration_overflow(self):
        with pytest.raises(CalendarError):
            parse_create_statement(
                "create calendar 'far' start '2018-01-01' duration 99999999999999999999 years"
            )

    def test_last_supported_year(self):
        statement = parse_create_statement(
            "create calendar 'far' start '9998-01-01' duration 1 year"
        )

        assert statement.end_date == date(9998, 12, 31)
        assert statement.to_calendar().end_date == date(9998, 12, 31)

    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_missing_statement(self, text):
        with pytest.raises(InvalidArgumentError):
            parse_create_statement(text)


class TestCreateCalendarStatement:
    """Test window arithmetic and calendar construction."""

    def test_leap_year_span(self):
        statement = CreateCalendarStatement("leap", date(2019, 3, 1), 1)

        assert statement.end_date == date(2020, 2, 29)
        assert statement.period == 366

    def test_feb_29_start(self):
        """The anniversary of Feb 29 in a non-leap year is Mar 1."""
        statement = CreateCalendarStatement("leap", date(2016, 2, 29), 1)

        assert statement.end_date == date(2017, 2, 28)
        assert statement.period == 366

    def test_to_calendar(self):
        statement = parse_create_statement(
            "create calendar 'payroll' start '2018-01-01' duration 2 years"
        )

        calendar = statement.to_calendar()

        assert calendar.name == "payroll"
        assert calendar.start_date == date(2018, 1, 1)
        assert calendar.end_date == date(2019, 12, 31)
        assert len(calendar) == 730

    def test_to_calendar_without_weekends(self, recorder):
        statement = parse_create_statement(
            "create calendar 'work' start '2018-01-01' duration 1 year without_weekends"
        )

        calendar = statement.to_calendar(recorder)

        assert calendar.get_dates_for_days_of_week(DayOfWeek.SATURDAY) == []
        assert calendar.get_dates_for_days_of_week(DayOfWeek.SUNDAY) == []
        assert len(calendar) == 261
        assert recorder.events[0] == CalendarChangeEvent.INITIALISED
        assert recorder.events[-1] == CalendarChangeEvent.DAY_OF_WEEK_REMOVED
