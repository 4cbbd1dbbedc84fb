"""Tests for the day/week/month/year interval helpers."""

from datetime import date, datetime, timedelta, timezone

import pytest

from soundtrek.noise.ranges import Bucket, bucket_range, day_range, month_range, week_range, year_range

UTC = timezone.utc


def utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=UTC)


class TestDayRange:
    def test_midnight_to_midnight(self):
        assert day_range(utc(2024, 3, 6, 15, 30)) == (utc(2024, 3, 6), utc(2024, 3, 7))

    def test_accepts_plain_date(self):
        assert day_range(date(2024, 2, 29)) == (utc(2024, 2, 29), utc(2024, 3, 1))

    def test_offset_reference_uses_utc_date(self):
        evening_in_new_york = datetime(2024, 3, 5, 23, 30, tzinfo=timezone(timedelta(hours=-5)))
        assert day_range(evening_in_new_york) == (utc(2024, 3, 6), utc(2024, 3, 7))

    def test_naive_reference_is_read_as_utc(self):
        assert day_range(datetime(2024, 3, 5, 23, 30)) == (utc(2024, 3, 5), utc(2024, 3, 6))


class TestWeekRange:
    def test_wednesday_maps_to_monday(self):
        assert week_range(utc(2024, 3, 6)) == (utc(2024, 3, 4), utc(2024, 3, 11))

    def test_monday_is_its_own_start(self):
        assert week_range(utc(2024, 3, 4, 23, 59)) == (utc(2024, 3, 4), utc(2024, 3, 11))

    def test_sunday_belongs_to_previous_monday(self):
        assert week_range(utc(2024, 3, 10)) == (utc(2024, 3, 4), utc(2024, 3, 11))

    def test_crosses_year_boundary(self):
        start, end = week_range(utc(2025, 1, 1))
        assert start == utc(2024, 12, 30)
        assert end - start == timedelta(days=7)


class TestMonthRange:
    def test_regular_month(self):
        assert month_range(utc(2024, 3, 17)) == (utc(2024, 3, 1), utc(2024, 4, 1))

    def test_december_rolls_into_next_year(self):
        assert month_range(utc(2024, 12, 31, 23)) == (utc(2024, 12, 1), utc(2025, 1, 1))

    def test_offset_reference_can_cross_into_next_month(self):
        march_31_evening_in_sao_paulo = datetime(2024, 3, 31, 22, tzinfo=timezone(timedelta(hours=-3)))
        assert month_range(march_31_evening_in_sao_paulo) == (utc(2024, 4, 1), utc(2024, 5, 1))


class TestYearRange:
    def test_year(self):
        assert year_range(utc(2024, 7, 4)) == (utc(2024, 1, 1), utc(2025, 1, 1))


@pytest.mark.parametrize("bucket", list(Bucket))
def test_bucket_range_is_half_open_and_contains_day(bucket: Bucket):
    day = utc(2024, 3, 6, 12)
    start, end = bucket_range(bucket, day)
    assert start <= day < end
    assert start.tzinfo is not None
    assert end.tzinfo is not None
