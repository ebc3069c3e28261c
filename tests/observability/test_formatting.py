#!filepath: tests/observability/test_formatting.py
import pytest

from timekeeper.observability.formatting import format_elapsed


@pytest.mark.parametrize(
    "seconds, expected",
    [
        (0, "00:00:00.00"),
        (0.5, "00:00:00.50"),
        (1.23, "00:00:01.23"),
        (59.999, "00:00:59.99"),  # 截断，不进位
        (61.5, "00:01:01.50"),
        (3600, "01:00:00.00"),
        (23 * 3600 + 59 * 60 + 59.99, "23:59:59.99"),
    ],
)
def test_format_sub_day(seconds, expected):
    assert format_elapsed(seconds) == expected


def test_no_day_rollover():
    assert format_elapsed(25 * 3600) == "25:00:00.00"


def test_hours_grow_past_two_digits():
    assert format_elapsed(123 * 3600 + 4.05) == "123:00:04.05"


def test_negative_clamped_to_zero():
    assert format_elapsed(-0.01) == "00:00:00.00"
