"""Tests for the time and holiday helpers."""

from datetime import date, time

import pytest

from laborpay.core.errors import ConfigurationError, InvalidDateFormat, InvalidShiftDuration, InvalidTimeFormat
from laborpay.services.calendar_service import (
    COLOMBIAN_HOLIDAYS_2024,
    StaticHolidayCalendar,
    get_easter_date,
    get_holiday_calendar,
    hours_between,
    is_holiday,
    is_sunday,
    minutes_to_time,
    next_monday,
    night_hours,
    parse_date,
    time_to_minutes,
)


class TestTimeParsing:

    @pytest.mark.parametrize("value,expected", [
        ("00:00", 0),
        ("08:30", 510),
        ("8:30", 510),
        ("23:59", 1439),
        (time(21, 15), 1275),
    ])
    def test_time_to_minutes(self, value, expected):
        assert time_to_minutes(value) == expected

    @pytest.mark.parametrize("value", ["24:00", "12:60", "8h", "", "12:5", "12:00:00", None])
    def test_malformed_time_rejected(self, value):
        with pytest.raises(InvalidTimeFormat):
            time_to_minutes(value)

    def test_invalid_time_is_a_value_error(self):
        with pytest.raises(ValueError):
            time_to_minutes("99:99")

    def test_minutes_to_time_wraps_past_midnight(self):
        assert minutes_to_time(510) == "08:30"
        assert minutes_to_time(1500) == "01:00"


class TestDurations:

    def test_same_day_shift(self):
        assert hours_between("08:00", "16:00") == 8.0

    def test_overnight_shift_wraps(self):
        assert hours_between("22:00", "06:00") == 8.0
        assert hours_between("23:30", "00:15") == 0.75

    def test_equal_start_and_end_rejected(self):
        with pytest.raises(InvalidShiftDuration):
            hours_between("09:00", "09:00")

    @pytest.mark.parametrize("start,end,expected", [
        ("08:00", "16:00", 0.0),
        ("22:00", "06:00", 8.0),   # 2h before midnight + 6h after
        ("20:00", "23:00", 2.0),
        ("02:00", "08:00", 4.0),
        ("18:00", "02:00", 5.0),
        ("05:00", "04:00", 8.0),   # 05-06 plus 21-04
        ("06:00", "21:00", 0.0),
        ("23:00", "22:00", 8.0),   # 23-06 plus 21-22 of the next day
    ])
    def test_night_hours(self, start, end, expected):
        assert night_hours(start, end) == pytest.approx(expected)

    def test_night_hours_never_exceed_total(self):
        for start, end in [("00:00", "23:59"), ("21:00", "06:00"), ("12:00", "11:00")]:
            assert night_hours(start, end) <= hours_between(start, end)


class TestDates:

    def test_parse_date(self):
        assert parse_date("2024-01-07") == date(2024, 1, 7)
        assert parse_date(date(2024, 1, 7)) == date(2024, 1, 7)

    @pytest.mark.parametrize("value", ["2024/01/07", "07-01-2024", "", None])
    def test_bad_dates_rejected(self, value):
        with pytest.raises(InvalidDateFormat):
            parse_date(value)

    def test_is_sunday(self):
        assert is_sunday("2024-01-07")
        assert not is_sunday("2024-01-08")

    def test_next_monday(self):
        assert next_monday(date(2024, 1, 6)) == date(2024, 1, 8)   # Saturday
        assert next_monday(date(2024, 1, 7)) == date(2024, 1, 8)   # Sunday
        assert next_monday(date(2024, 1, 8)) == date(2024, 1, 8)   # Monday

    @pytest.mark.parametrize("year,expected", [
        (2000, date(2000, 4, 23)),
        (2024, date(2024, 3, 31)),
        (2025, date(2025, 4, 20)),
    ])
    def test_easter(self, year, expected):
        assert get_easter_date(year) == expected


class TestHolidayCalendars:

    def test_static_calendar_membership(self, static_calendar):
        assert static_calendar.is_holiday("2024-01-01")
        assert static_calendar.is_holiday(date(2024, 12, 25))
        assert not static_calendar.is_holiday("2024-01-02")

    def test_static_calendar_outside_year_has_no_holidays(self, static_calendar):
        assert not static_calendar.is_holiday("2025-01-01")
        assert static_calendar.holidays_for_year(2025) == []

    def test_computed_2024_matches_published_list(self, computed_calendar):
        computed = [d.isoformat() for d in computed_calendar.holidays_for_year(2024)]
        assert computed == sorted(COLOMBIAN_HOLIDAYS_2024)

    def test_computed_calendar_other_years(self, computed_calendar):
        assert computed_calendar.is_holiday("2025-01-01")
        assert computed_calendar.is_holiday("2025-01-06")
        assert computed_calendar.is_holiday("2025-04-17")
        assert computed_calendar.is_holiday("2025-04-18")
        assert not computed_calendar.is_holiday("2025-04-20")

    def test_custom_static_calendar(self):
        calendar = StaticHolidayCalendar(["2030-06-15"], name="custom")
        assert calendar.name == "custom"
        assert is_holiday("2030-06-15", calendar)

    def test_get_holiday_calendar(self):
        assert get_holiday_calendar("static").name == "static"
        assert get_holiday_calendar("COMPUTED").name == "computed"
        with pytest.raises(ConfigurationError):
            get_holiday_calendar("lunar")
