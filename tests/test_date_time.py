import datetime as dt

import pytest

from bomboni.date_time import UtcDateTime, UtcDateTimeError


def test_convert():
    assert UtcDateTime.new(1, 0) == UtcDateTime.parse_rfc3339("1970-01-01T00:00:01Z")
    assert UtcDateTime.new(0, 1) == UtcDateTime.from_nanoseconds(1)
    assert UtcDateTime.new(10, 20).timestamp() == (10, 20)


def test_string_round_trip_now():
    value = UtcDateTime.now()
    assert UtcDateTime.parse_rfc3339(str(value)) == value


def test_format_with_nanoseconds():
    value = UtcDateTime.new(10, 2)
    assert str(value) == "1970-01-01T00:00:10.000000002Z"
    assert UtcDateTime.parse_rfc3339(str(value)) == value


def test_parse_fraction():
    value = UtcDateTime.parse_rfc3339("2017-01-15T01:30:15.01Z")
    assert value.timestamp() == (1_484_443_815, 10_000_000)


def test_from_naive_datetime():
    naive = dt.datetime(2020, 1, 1, 12, 0, 0)
    value = UtcDateTime.from_datetime(naive)
    assert str(value) == "2020-01-01T12:00:00Z"
    assert value.to_datetime() == naive.replace(tzinfo=dt.timezone.utc)


def test_from_aware_datetime():
    aware = dt.datetime(2020, 1, 1, 12, 0, 0, tzinfo=dt.timezone.utc)
    assert str(UtcDateTime.from_datetime(aware)) == "2020-01-01T12:00:00Z"


def test_timestamp_parts_round_trip():
    value = UtcDateTime.from_timestamp(1337, 420)
    assert value.timestamp() == (1337, 420)


def test_epoch():
    assert UtcDateTime.UNIX_EPOCH.timestamp() == (0, 0)
    assert str(UtcDateTime.UNIX_EPOCH) == "1970-01-01T00:00:00Z"


def test_parse_with_offset_matches_utc():
    shifted = UtcDateTime.parse_rfc3339("1970-01-01T01:00:01+01:00")
    assert shifted == UtcDateTime.new(1, 0)


def test_negative_timestamp_has_positive_nanos():
    seconds, nanos = UtcDateTime.from_nanoseconds(-1).timestamp()
    assert seconds == -1
    assert 0 <= nanos < 1_000_000_000
    assert seconds * 1_000_000_000 + nanos == -1


def test_ordering():
    assert UtcDateTime.new(1, 0) < UtcDateTime.new(1, 1) < UtcDateTime.new(2, 0)


@pytest.mark.parametrize(
    "text",
    ["garbage", "1970-13-01T00:00:00Z", "1970-02-30T00:00:00Z", "1970-01-01T00:00:00"],
)
def test_invalid_format(text):
    with pytest.raises(UtcDateTimeError) as info:
        UtcDateTime.parse_rfc3339(text)
    assert info.value == UtcDateTimeError(UtcDateTimeError.INVALID_FORMAT, text)


def test_out_of_range():
    with pytest.raises(UtcDateTimeError) as info:
        UtcDateTime.from_seconds(10**15)
    assert info.value.kind == UtcDateTimeError.NOT_UTC
    with pytest.raises(UtcDateTimeError):
        UtcDateTime.from_timestamp(-(10**15), 0)


def test_new_out_of_range_falls_back_to_epoch():
    assert UtcDateTime.new(10**15, 0) == UtcDateTime.UNIX_EPOCH


def test_negative_year_is_not_formattable():
    value = UtcDateTime.from_seconds(-377_705_116_800)
    with pytest.raises(ValueError):
        value.format_rfc3339()
    assert str(value) == "INVALID_UTC_DATE_TIME"