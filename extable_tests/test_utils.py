from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from extable.utils import (
    format_number,
    humanize,
    is_numeric,
    join_words,
    parse_date_time,
    to_bool,
    to_date,
    to_float,
    to_text,
    truncate,
)


def test_humanize():
    assert humanize("unit_price") == "Unit price"
    assert humanize("name") == "Name"
    assert humanize("") == ""


def test_to_text():
    assert to_text(None) == ""
    assert to_text(12) == "12"
    assert to_text("abc") == "abc"


@pytest.mark.parametrize(
    "value",
    [5, 2.5, Decimal("1.2"), "3.5", " 7 ", "-4", "1e3", ".5"],
)
def test_is_numeric_true(value):
    assert is_numeric(value) is True


@pytest.mark.parametrize(
    "value",
    [
        True,
        False,
        None,
        "",
        "abc",
        "12abc",
        float("nan"),
        float("inf"),
        [],
        "1e400",
        10**400,
        Decimal("Infinity"),
        Decimal("NaN"),
    ],
)
def test_is_numeric_false(value):
    assert is_numeric(value) is False


def test_to_float():
    assert to_float("2.5") == 2.5
    assert to_float("abc") == 0.0
    assert to_float(None) == 0.0
    assert to_float(True) == 1.0


@pytest.mark.parametrize(
    "value, expected",
    [
        (True, True),
        (False, False),
        (1, True),
        (0, False),
        (-3, True),
        (0.0, False),
        (Decimal("0.00"), False),
        (Decimal("2.5"), True),
        (Decimal("sNaN"), True),
        ("1", True),
        ("true", True),
        (" Yes ", True),
        ("ON", True),
        ("0", False),
        ("false", False),
        ("no", False),
        ("", False),
        (None, False),
        ([1], False),
    ],
)
def test_to_bool(value, expected):
    assert to_bool(value) is expected


class TestFormatNumber:
    def test_grouping_and_decimals(self):
        assert format_number(1234.5, 2) == "1,234.50"
        assert format_number(1234567) == "1,234,567"

    def test_rounds_halves_away_from_zero(self):
        assert format_number(2.5) == "3"
        assert format_number(-2.5) == "-3"
        assert format_number(1.005, 2) == "1.01"

    def test_custom_separators(self):
        assert format_number(1234567.891, 2, ",", ".") == "1.234.567,89"
        assert format_number(1234.5, 1, ".", " ") == "1 234.5"

    def test_non_numeric_is_zero(self):
        assert format_number("abc") == "0"
        assert format_number(None, 2) == "0.00"

    def test_no_negative_zero(self):
        assert format_number(-0.001, 2) == "0.00"

    def test_numeric_strings(self):
        assert format_number("89.90", 2) == "89.90"

    def test_large_values(self):
        assert format_number(1e30, 2) == "1" + ",000" * 10 + ".00"
        assert format_number("1e400", 2) == "0.00"
        assert format_number(10**400) == "0"


def test_truncate_counts_characters():
    assert truncate("héllo wörld", 5) == "héllo..."
    assert truncate("short", 10) == "short"
    assert truncate("exact", 5) == "exact"
    assert truncate("abcdef", 3, "~") == "abc~"


class TestParseDateTime:
    def test_passes_instances_through(self):
        d = date(2024, 1, 15)
        dt = datetime(2024, 1, 15, 10, 30)
        assert parse_date_time(d) is d
        assert parse_date_time(dt) is dt

    def test_iso_strings(self):
        assert parse_date_time("2024-01-15") == datetime(2024, 1, 15)
        assert parse_date_time("2024-01-15T10:30:00") == datetime(
            2024, 1, 15, 10, 30
        )

    def test_zulu_suffix(self):
        result = parse_date_time("2024-01-15T10:30:00Z")
        assert result == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)

    def test_textual_formats(self):
        assert parse_date_time("15.01.2024") == datetime(2024, 1, 15)
        assert parse_date_time("Jan 15, 2024") == datetime(2024, 1, 15)

    def test_timestamps_are_utc(self):
        assert parse_date_time(0) == datetime(
            1970, 1, 1, tzinfo=timezone.utc
        )

    @pytest.mark.parametrize("value", ["not a date", "", None, True, [1]])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_date_time(value)


def test_to_date():
    assert to_date("2024-01-15T23:59:00") == date(2024, 1, 15)
    assert to_date(date(2024, 1, 15)) == date(2024, 1, 15)
    with pytest.raises(ValueError):
        to_date("bad")


def test_join_words():
    assert join_words(["a"]) == "a"
    assert join_words(["a", "b"]) == "a and b"
    assert join_words(["a", "b", "c"]) == "a, b, and c"
    assert join_words([1, 2], "or") == "1 or 2"
