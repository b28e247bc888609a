from __future__ import annotations

from datetime import datetime

import pytest
import pytz

from lab_reporting.formatting import (
    completion_rate,
    fmt_generated,
    fmt_number,
    percent_shares,
    round_half_up,
    share_of,
)


def test_completion_rate_rounds_to_whole_percent():
    assert completion_rate(3, 10) == 30
    assert completion_rate(1, 3) == 33
    assert completion_rate(1, 8) == 13
    assert completion_rate(5, 5) == 100


def test_completion_rate_with_zero_total_is_zero():
    assert completion_rate(0, 0) == 0
    assert completion_rate(4, 0) == 0


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(0.5) == 1
    assert round_half_up(2.49) == 2


def test_fmt_number_drops_trailing_zero():
    assert fmt_number(5) == "5"
    assert fmt_number(5.0) == "5"
    assert fmt_number(4.25) == "4.25"


def test_share_of():
    assert share_of(3, 10) == "30.0"
    assert share_of(1, 3) == "33.3"
    assert share_of(3, 0) == "0"


@pytest.mark.parametrize(
    "values, expected",
    [
        ([1, 1, 1], [33.4, 33.3, 33.3]),
        ([1], [100.0]),
        ([0, 0], [0.0, 0.0]),
        ([], []),
        ([3, 1], [75.0, 25.0]),
    ],
)
def test_percent_shares(values, expected):
    assert percent_shares(values) == pytest.approx(expected)


def test_fmt_generated_uses_configured_zone():
    moment = datetime(2026, 3, 5, 23, 30, tzinfo=pytz.UTC)
    assert fmt_generated(moment, "UTC") == "05 Mar 2026, 23:30 UTC"
    assert fmt_generated(moment, "Europe/Warsaw") == "06 Mar 2026, 00:30 CET"


@pytest.mark.parametrize(
    "value, expected",
    [
        (12345.67, "12345.67"),
        (1234567.5, "1234567.5"),
        (0.1, "0.1"),
        (0.00001, "0.00001"),
        (2.0e20, "200000000000000000000"),
        (123456789012345678901234567890, "123456789012345678901234567890"),
    ],
)
def test_fmt_number_keeps_every_digit(value, expected):
    assert fmt_number(value) == expected
