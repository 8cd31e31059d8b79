import pytest

from nostr_health.units import (
    duration_to_seconds,
    format_duration,
    format_number,
    format_pace,
    ft_in_to_cm,
    infer_unit,
    lbs_to_kg,
    pace_to_seconds,
    parse_number,
    round_half_up,
)


@pytest.mark.parametrize(
    "seconds, expected",
    [(45, "0:45"), (1800, "30:00"), (3599, "59:59"), (3600, "1:00:00"), (3725, "1:02:05")],
)
def test_format_duration(seconds, expected):
    assert format_duration(seconds) == expected


@pytest.mark.parametrize(
    "value, expected",
    [("30:00", 1800), ("1:02:05", 3725), ("1800", 1800), ("N/A", None), ("abc", None), (None, None)],
)
def test_duration_to_seconds(value, expected):
    assert duration_to_seconds(value) == expected


@pytest.mark.parametrize("value", ["9" * 400, "1:" + "9" * 400])
def test_duration_to_seconds_rejects_oversized(value):
    assert duration_to_seconds(value) is None


@pytest.mark.parametrize("seconds", [float("nan"), float("inf"), float("-inf")])
def test_formatting_rejects_non_finite(seconds):
    with pytest.raises(ValueError):
        format_duration(seconds)
    with pytest.raises(ValueError):
        format_pace(seconds, "km")


def test_format_pace_rounds_and_carries():
    assert format_pace(300, "km") == "5:00/km"
    assert format_pace(299.6, "mi") == "5:00/mi"
    assert format_pace(330.5, "km") == "5:31/km"


def test_pace_to_seconds():
    assert pace_to_seconds("4:55/km") == 295
    assert pace_to_seconds("5:02") == 302
    assert pace_to_seconds("1:02:03") is None
    assert pace_to_seconds("fast") is None


def test_parse_number():
    assert parse_number("150") == 150
    assert isinstance(parse_number("150"), int)
    assert parse_number("12.5") == 12.5
    assert parse_number("abc") is None
    assert parse_number("nan") is None
    assert parse_number("9" * 400) is None


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(174.5) == 175


def test_format_number():
    assert format_number(80.0) == "80"
    assert format_number(0.5) == "0.5"


def test_conversions():
    assert lbs_to_kg(175) == pytest.approx(79.37866475)
    assert ft_in_to_cm(5, 11) == pytest.approx(180.34)


def test_infer_unit():
    assert infer_unit(None, "3.1 mi") == "mi"
    assert infer_unit(None, "5 km") == "km"
    assert infer_unit(None, None) == "km"
    assert infer_unit("miles", "5 km") == "mi"
