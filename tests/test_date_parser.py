"""Tests for date parser with relative dates."""

from datetime import date, timedelta

import pytest

from shopdesk.utils.date_parser import parse_date

TODAY = date(2024, 6, 10)


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    assert parse_date("2024-01-15") == date(2024, 1, 15)


def test_iso_dates_are_never_day_first():
    assert parse_date("2024-03-04") == date(2024, 3, 4)


def test_parse_written_date():
    assert parse_date("January 15, 2024") == date(2024, 1, 15)


def test_parse_today():
    """Test parsing 'today'."""
    assert parse_date("today") == date.today()


def test_relative_words_use_reference_date():
    assert parse_date("Yesterday", today=TODAY) == TODAY - timedelta(days=1)
    assert parse_date(" tomorrow ", today=TODAY) == TODAY + timedelta(days=1)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("+30d", date(2024, 7, 10)),
        ("-1d", date(2024, 6, 9)),
        ("+2w", date(2024, 6, 24)),
        ("+1m", date(2024, 7, 10)),
        ("+1y", date(2025, 6, 10)),
        ("- 3 d", date(2024, 6, 7)),
    ],
)
def test_offsets(text, expected):
    assert parse_date(text, today=TODAY) == expected


def test_month_offset_clamps_to_month_end():
    assert parse_date("+1m", today=date(2024, 1, 31)) == date(2024, 2, 29)


def test_invalid_date():
    """Test that invalid dates raise ValueError."""
    with pytest.raises(ValueError):
        parse_date("not a date")
