"""Tests for creation timestamp normalization."""

import pytest

from content_paths.core.errors import MalformedTimestampError
from content_paths.core.timestamp import normalize_timestamp
from content_paths.core.types import CanonicalInstant


def test_date_only_is_floating_without_time():
    """A bare date keeps no time and no offset"""
    assert normalize_timestamp("2019-03-04") == CanonicalInstant(2019, 3, 4, None, None)


def test_time_without_offset_is_floating():
    """A missing offset is never assumed to be UTC"""
    instant = normalize_timestamp("2019-03-04T10:00")
    assert instant.seconds == 36000
    assert instant.utc_offset is None
    assert instant.is_floating


def test_zulu_and_explicit_zero_offset_are_equal():
    """Textual variants of the same instant normalize identically"""
    a = normalize_timestamp("2019-03-04T10:00:00Z")
    b = normalize_timestamp("2019-03-04 10:00+00:00")
    c = normalize_timestamp("  2019-03-04t10:00:00z  ")
    assert a == b == c
    assert a.utc_offset == 0


def test_offset_forms_and_fraction_truncation():
    """Compact offsets are accepted and fractional seconds are dropped"""
    instant = normalize_timestamp("2019-03-04T10:30:15.987+0530")
    assert instant.seconds == 10 * 3600 + 30 * 60 + 15
    assert instant.utc_offset == 330

    negative = normalize_timestamp("2019-03-04T23:59:59-05:00")
    assert negative.utc_offset == -300
    assert negative.day == 4


@pytest.mark.parametrize(
    "text",
    [
        "not-a-date",
        "",
        "2019-02-30",
        "2019-13-01",
        "2019-03-04T25:00",
        "2019-03-04T10:61",
        "2019-03-04+01:00",
        "2019-03-04T10:00+25:00",
        "04/03/2019",
    ],
)
def test_malformed_timestamps_raise(text):
    """Anything that is not a valid calendar date is rejected"""
    with pytest.raises(MalformedTimestampError) as excinfo:
        normalize_timestamp(text)
    assert excinfo.value.text == text


def test_non_string_timestamp_raises():
    """Non-string input is rejected at the boundary"""
    with pytest.raises(MalformedTimestampError):
        normalize_timestamp(None)  # type: ignore[arg-type]


def test_isoformat_round_trips_date_only():
    """Date-only instants render without a time part"""
    assert normalize_timestamp("2019-03-04").isoformat() == "2019-03-04"
    assert normalize_timestamp("2019-03-04T10:00Z").isoformat() == "2019-03-04T10:00:00+00:00"


@pytest.mark.parametrize("text", ["0001-01-01T00:00+01:00", "9999-12-31T23:30-05:00"])
def test_aware_instants_outside_utc_range_raise(text):
    """Offsets that push the moment past the datetime range are rejected"""
    with pytest.raises(MalformedTimestampError) as excinfo:
        normalize_timestamp(text)
    assert excinfo.value.text == text


@pytest.mark.parametrize("text", ["0001-01-01T00:00Z", "9999-12-31T23:59:59Z", "0001-01-01", "9999-12-31T23:30"])
def test_calendar_edges_within_range_are_accepted(text):
    assert normalize_timestamp(text).year in (1, 9999)
