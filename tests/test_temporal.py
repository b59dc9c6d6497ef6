import io

import pytest

from tdswire.temporal import (
    Date,
    DateTime,
    DateTime2,
    DateTimeOffset,
    ProtocolError,
    SmallDateTime,
    Time,
)


def test_datetime_wire_bytes():
    assert DateTime(1, 300).encode() == b"\x01\x00\x00\x00\x2c\x01\x00\x00"


@pytest.mark.parametrize("days,fragments", [(0, 0), (-53690, 25919999), (2958463, 1)])
def test_datetime_round_trip(days, fragments):
    value = DateTime(days, fragments)
    assert DateTime.decode(io.BytesIO(value.encode())) == value


def test_datetime_rejects_out_of_range():
    with pytest.raises(ValueError):
        DateTime(0, -1)


def test_smalldatetime_round_trip():
    value = SmallDateTime(43940, 980)
    encoded = value.encode()
    assert len(encoded) == 4
    assert SmallDateTime.decode(io.BytesIO(encoded)) == value


def test_date_round_trip_uses_three_bytes():
    value = Date(737535)
    encoded = value.encode()
    assert len(encoded) == 3
    assert Date.decode(io.BytesIO(encoded)) == value


def test_date_rejects_more_than_24_bits():
    with pytest.raises(ValueError):
        Date(1 << 24)


@pytest.mark.parametrize("scale,length", [(0, 3), (2, 3), (3, 4), (4, 4), (5, 5), (7, 5)])
def test_time_byte_length_matches_encoding(scale, length):
    value = Time(5, scale)
    assert value.byte_length() == length
    assert len(value.encode()) == length


def test_time_wire_bytes():
    assert Time(5, 0).encode() == b"\x05\x00\x00"


def test_time_invalid_scale():
    with pytest.raises(ProtocolError, match="timen: invalid scale 8"):
        Time(1, 8).byte_length()
    with pytest.raises(ProtocolError):
        Time(1, 8).encode()


def test_time_increments_too_large_for_scale():
    with pytest.raises(ValueError):
        Time(1 << 24, 0).encode()


@pytest.mark.parametrize("scale,length", [(0, 3), (3, 4), (7, 5)])
def test_time_round_trip(scale, length):
    value = Time(588000000000 % (1 << (8 * length)), scale)
    decoded = Time.decode(io.BytesIO(value.encode()), scale, length)
    assert decoded.increments == value.increments
    assert decoded.scale == scale


def test_time_decode_rejects_mismatched_length():
    with pytest.raises(ProtocolError, match="timen: invalid length 7"):
        Time.decode(io.BytesIO(b"\x00" * 8), 7, 3)


def test_time_equality_ignores_scale():
    assert Time(10, 1) == Time(1, 0)
    assert Time(10, 1) != Time(2, 0)
    assert hash(Time(100, 2)) == hash(Time(1, 0))


def test_decode_short_input_raises():
    with pytest.raises(EOFError):
        DateTime.decode(io.BytesIO(b"\x00\x00"))


def test_datetime2_round_trip_and_layout():
    value = DateTime2(Date(737535), Time(588000000000, 7))
    encoded = value.encode()
    assert encoded == value.time.encode() + value.date.encode()
    assert DateTime2.decode(io.BytesIO(encoded), 7, 5) == value


def test_datetimeoffset_round_trip():
    value = DateTimeOffset(DateTime2(Date(737535), Time(4200, 2)), -180)
    encoded = value.encode()
    assert len(encoded) == 3 + 3 + 2
    assert DateTimeOffset.decode(io.BytesIO(encoded), 2, 3) == value


def test_datetimeoffset_reads_trailing_offset_only():
    value = DateTimeOffset(DateTime2(Date(1), Time(1, 0)), 180)
    stream = io.BytesIO(value.encode() + b"rest")
    assert DateTimeOffset.decode(stream, 0, 3) == value
    assert stream.read() == b"rest"