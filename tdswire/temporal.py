"""Wire representations of the server's date and time types.

Each class mirrors one server type and knows how to write itself to bytes and
read itself back from a binary stream. All integers are little endian.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import BinaryIO

__all__ = [
    "ProtocolError",
    "DateTime",
    "SmallDateTime",
    "Date",
    "Time",
    "DateTime2",
    "DateTimeOffset",
]


class ProtocolError(Exception):
    """Raised when data violates the wire protocol."""


def _read_exact(src: BinaryIO, size: int) -> bytes:
    data = src.read(size)
    if len(data) != size:
        raise EOFError(f"expected {size} bytes, got {len(data)}")
    return data


def _check_range(name: str, value: int, low: int, high: int) -> None:
    if not low <= value <= high:
        raise ValueError(f"{name} out of range: {value}")


@dataclass(frozen=True)
class DateTime:
    """The server's `datetime`.

    `days` counts from 1 January 1900 (negative back to 1753);
    `seconds_fragments` counts 1/300 seconds since midnight.
    """

    days: int
    seconds_fragments: int

    def __post_init__(self) -> None:
        _check_range("days", self.days, -(2**31), 2**31 - 1)
        _check_range("seconds_fragments", self.seconds_fragments, 0, 2**32 - 1)

    def encode(self) -> bytes:
        return struct.pack("<iI", self.days, self.seconds_fragments)

    @classmethod
    def decode(cls, src: BinaryIO) -> DateTime:
        days, fragments = struct.unpack("<iI", _read_exact(src, 8))
        return cls(days, fragments)


@dataclass(frozen=True)
class SmallDateTime:
    """The server's `smalldatetime`: days since 1900 and a 16-bit time part."""

    days: int
    seconds_fragments: int

    def __post_init__(self) -> None:
        _check_range("days", self.days, 0, 2**16 - 1)
        _check_range("seconds_fragments", self.seconds_fragments, 0, 2**16 - 1)

    def encode(self) -> bytes:
        return struct.pack("<HH", self.days, self.seconds_fragments)

    @classmethod
    def decode(cls, src: BinaryIO) -> SmallDateTime:
        days, fragments = struct.unpack("<HH", _read_exact(src, 4))
        return cls(days, fragments)


@dataclass(frozen=True)
class Date:
    """The server's `date`: days since 1 January of year 1, at most 24 bits."""

    days: int

    def __post_init__(self) -> None:
        _check_range("days", self.days, 0, 2**24 - 1)

    def encode(self) -> bytes:
        return self.days.to_bytes(3, "little")

    @classmethod
    def decode(cls, src: BinaryIO) -> Date:
        return cls(int.from_bytes(_read_exact(src, 3), "little"))


@dataclass(frozen=True, eq=False)
class Time:
    """The server's `time`: 10^-scale second increments since midnight.

    Two values are equal when they denote the same number of seconds,
    whatever their scales.
    """

    increments: int
    scale: int

    def __post_init__(self) -> None:
        _check_range("increments", self.increments, 0, 2**64 - 1)
        _check_range("scale", self.scale, 0, 255)

    def _seconds(self) -> float:
        return self.increments / 10.0**self.scale

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return self._seconds() == other._seconds()

    def __hash__(self) -> int:
        return hash(self._seconds())

    def byte_length(self) -> int:
        """Number of bytes the value takes on the wire for its scale."""
        if 0 <= self.scale <= 2:
            return 3
        if 3 <= self.scale <= 4:
            return 4
        if 5 <= self.scale <= 7:
            return 5
        raise ProtocolError(f"timen: invalid scale {self.scale}")

    def encode(self) -> bytes:
        length = self.byte_length()
        if self.increments >> (8 * length):
            raise ValueError(
                f"increments {self.increments} do not fit in {length} bytes"
            )
        return self.increments.to_bytes(length, "little")

    @classmethod
    def decode(cls, src: BinaryIO, scale: int, length: int) -> Time:
        valid = (
            (0 <= scale <= 2 and length == 3)
            or (3 <= scale <= 4 and length == 4)
            or (5 <= scale <= 7 and length == 5)
        )
        if not valid:
            raise ProtocolError(f"timen: invalid length {scale}")
        return cls(int.from_bytes(_read_exact(src, length), "little"), scale)


@dataclass(frozen=True)
class DateTime2:
    """The server's `datetime2`: a time part followed by a date part."""

    date: Date
    time: Time

    def encode(self) -> bytes:
        return self.time.encode() + self.date.encode()

    @classmethod
    def decode(cls, src: BinaryIO, scale: int, length: int) -> DateTime2:
        time = Time.decode(src, scale, length)
        date = Date.decode(src)
        return cls(date, time)


@dataclass(frozen=True)
class DateTimeOffset:
    """The server's `datetimeoffset`: a `datetime2` and minutes from UTC."""

    datetime2: DateTime2
    offset: int

    def __post_init__(self) -> None:
        _check_range("offset", self.offset, -(2**15), 2**15 - 1)

    def encode(self) -> bytes:
        return self.datetime2.encode() + struct.pack("<h", self.offset)

    @classmethod
    def decode(cls, src: BinaryIO, scale: int, length: int) -> DateTimeOffset:
        datetime2 = DateTime2.decode(src, scale, length)
        (offset,) = struct.unpack("<h", _read_exact(src, 2))
        return cls(datetime2, offset)