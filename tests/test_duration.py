import datetime as dt

import pytest

from bomboni.duration import Duration, DurationError

I64_MIN = -(1 << 63)
I64_MAX = (1 << 63) - 1


def test_str_convert():
    d = Duration(10, 2)
    s = str(d)
    assert s == "10.000000002s"
    assert Duration.parse(s) == d


def test_str_whole_seconds():
    assert str(Duration(5, 0)) == "5s"
    assert Duration.parse("5s") == Duration(5, 0)


def test_str_microseconds():
    assert str(Duration(3, 1000)) == "3.000001s"
    assert str(Duration(1, 500_000_000)) == "1.5s"


@pytest.mark.parametrize(
    "seconds, nanos, expected_seconds, expected_nanos",
    [
        (0, 0, 0, 0),
        (1, 1, 1, 1),
        (-1, -1, -1, -1),
        (0, 999_999_999, 0, 999_999_999),
        (0, -999_999_999, 0, -999_999_999),
        (0, 1_000_000_000, 1, 0),
        (0, -1_000_000_000, -1, 0),
        (0, 1_000_000_001, 1, 1),
        (0, -1_000_000_001, -1, -1),
        (-1, 1, 0, -999_999_999),
        (1, -1, 0, 999_999_999),
        (-1, 1_000_000_000, 0, 0),
        (1, -1_000_000_000, 0, 0),
        (I64_MIN, 0, I64_MIN, 0),
        (I64_MIN + 1, 0, I64_MIN + 1, 0),
        (I64_MIN, 1, I64_MIN + 1, -999_999_999),
        (I64_MIN, 1_000_000_000, I64_MIN + 1, 0),
        (I64_MIN, -1_000_000_000, I64_MIN, -999_999_999),
        (I64_MIN + 1, -1_000_000_000, I64_MIN, 0),
        (I64_MIN + 2, -1_000_000_000, I64_MIN + 1, 0),
        (I64_MIN, -1_999_999_998, I64_MIN, -999_999_999),
        (I64_MIN + 1, -1_999_999_998, I64_MIN, -999_999_998),
        (I64_MIN + 2, -1_999_999_998, I64_MIN + 1, -999_999_998),
        (I64_MIN, -1_999_999_999, I64_MIN, -999_999_999),
        (I64_MIN + 1, -1_999_999_999, I64_MIN, -999_999_999),
        (I64_MIN + 2, -1_999_999_999, I64_MIN + 1, -999_999_999),
        (I64_MIN, -2_000_000_000, I64_MIN, -999_999_999),
        (I64_MIN + 1, -2_000_000_000, I64_MIN, -999_999_999),
        (I64_MIN + 2, -2_000_000_000, I64_MIN, 0),
        (I64_MIN, -999_999_998, I64_MIN, -999_999_998),
        (I64_MIN + 1, -999_999_998, I64_MIN + 1, -999_999_998),
        (I64_MAX, 0, I64_MAX, 0),
        (I64_MAX - 1, 0, I64_MAX - 1, 0),
        (I64_MAX, -1, I64_MAX - 1, 999_999_999),
        (I64_MAX, 1_000_000_000, I64_MAX, 999_999_999),
        (I64_MAX - 1, 1_000_000_000, I64_MAX, 0),
        (I64_MAX - 2, 1_000_000_000, I64_MAX - 1, 0),
        (I64_MAX, 1_999_999_998, I64_MAX, 999_999_999),
        (I64_MAX - 1, 1_999_999_998, I64_MAX, 999_999_998),
        (I64_MAX - 2, 1_999_999_998, I64_MAX - 1, 999_999_998),
        (I64_MAX, 1_999_999_999, I64_MAX, 999_999_999),
        (I64_MAX - 1, 1_999_999_999, I64_MAX, 999_999_999),
        (I64_MAX - 2, 1_999_999_999, I64_MAX - 1, 999_999_999),
        (I64_MAX, 2_000_000_000, I64_MAX, 999_999_999),
        (I64_MAX - 1, 2_000_000_000, I64_MAX, 999_999_999),
        (I64_MAX - 2, 2_000_000_000, I64_MAX, 0),
        (I64_MAX, 999_999_998, I64_MAX, 999_999_998),
        (I64_MAX - 1, 999_999_998, I64_MAX - 1, 999_999_998),
    ],
)
def test_normalize(seconds, nanos, expected_seconds, expected_nanos):
    assert Duration(seconds, nanos).normalized() == Duration(expected_seconds, expected_nanos)


@pytest.mark.parametrize("text", ["10", "1.2.3s", "abcs", "s", "1.-5s", "1.2_0s"])
def test_parse_invalid(text):
    with pytest.raises(DurationError) as info:
        Duration.parse(text)
    assert info.value.kind == DurationError.INVALID_FORMAT
    assert str(info.value) == f"invalid duration string format `{text}`"


def test_parse_fraction():
    assert Duration.parse("5.00000001s").nanos == 10
    assert Duration.parse("-2.5s") == Duration(-2, 500_000_000)


def test_out_of_range_fields():
    with pytest.raises(DurationError):
        Duration(I64_MAX + 1, 0)


def test_from_timedelta():
    assert Duration.from_timedelta(dt.timedelta(seconds=3, microseconds=5)) == Duration(3, 5000)
    with pytest.raises(DurationError) as info:
        Duration.from_timedelta(dt.timedelta(seconds=-1))
    assert info.value.kind == DurationError.OUT_OF_RANGE


def test_to_timedelta():
    assert Duration(2, 1_500_000).to_timedelta() == dt.timedelta(seconds=2, microseconds=1500)
    assert Duration(0, 2_000_000_000).to_timedelta() == dt.timedelta(seconds=2)
    with pytest.raises(DurationError) as info:
        Duration(-1, 0).to_timedelta()
    assert info.value.kind == DurationError.NEGATIVE_DURATION


def test_json_round_trip():
    d = Duration(3, 1)
    assert d.to_json() == "3.000000001s"
    assert Duration.from_json(d.to_json()) == d


def test_from_json_errors():
    with pytest.raises(ValueError, match="cannot deserialize duration"):
        Duration.from_json("bad")
    with pytest.raises(TypeError):
        Duration.from_json(5)