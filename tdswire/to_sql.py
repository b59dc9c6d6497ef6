"""Turning Python values into typed column values for the server.

Default mappings when no kind is given:

- ``bool`` -> bit, ``int`` -> int (bigint when outside 32 bits), ``float`` -> float(53)
- ``str`` -> nvarchar, ``bytes``/``bytearray``/``memoryview`` -> varbinary
- ``uuid.UUID`` -> uniqueidentifier, ``decimal.Decimal`` -> numeric
- :class:`XmlData` -> xml
- ``date`` -> date, ``time`` -> time, naive ``datetime`` -> datetime2,
  aware ``datetime`` -> datetimeoffset
"""

from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from decimal import Decimal
from typing import Any, Callable, Optional

from .conversions import (
    date_to_sql,
    datetime_to_sql,
    legacy_datetime_to_sql,
    time_to_sql,
)
from .temporal import Date, DateTime, DateTime2, DateTimeOffset, SmallDateTime, Time
from .xml import XmlData

__all__ = ["ColumnKind", "ColumnData", "to_sql"]


class ColumnKind(enum.Enum):
    """The server-side type a column value is sent as."""

    BIT = "bit"
    U8 = "tinyint"
    I16 = "smallint"
    I32 = "int"
    I64 = "bigint"
    F32 = "real"
    F64 = "float"
    STRING = "nvarchar"
    BINARY = "varbinary"
    GUID = "uniqueidentifier"
    NUMERIC = "numeric"
    XML = "xml"
    DATETIME = "datetime"
    SMALLDATETIME = "smalldatetime"
    DATE = "date"
    TIME = "time"
    DATETIME2 = "datetime2"
    DATETIMEOFFSET = "datetimeoffset"


@dataclass(frozen=True)
class ColumnData:
    """A value tagged with its server type; ``None`` stands for NULL."""

    kind: ColumnKind
    value: Any = None

    @property
    def is_null(self) -> bool:
        return self.value is None


def _type_error(kind: ColumnKind, value: Any) -> TypeError:
    return TypeError(f"cannot send {type(value).__name__} as {kind.value}")


def _integer(kind: ColumnKind, low: int, high: int) -> Callable[[Any], int]:
    def convert(value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise _type_error(kind, value)
        if not low <= value <= high:
            raise ValueError(f"{value} out of range for {kind.value}")
        return value

    return convert


def _bit(value: Any) -> bool:
    if not isinstance(value, bool):
        raise _type_error(ColumnKind.BIT, value)
    return value


def _floating(kind: ColumnKind) -> Callable[[Any], float]:
    def convert(value: Any) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise _type_error(kind, value)
        return float(value)

    return convert


def _string(value: Any) -> str:
    if not isinstance(value, str):
        raise _type_error(ColumnKind.STRING, value)
    return value


def _binary(value: Any) -> bytes:
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise _type_error(ColumnKind.BINARY, value)
    return bytes(value)


def _guid(value: Any) -> uuid.UUID:
    if not isinstance(value, uuid.UUID):
        raise _type_error(ColumnKind.GUID, value)
    return value


def _numeric(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return Decimal(value)
    raise _type_error(ColumnKind.NUMERIC, value)


def _xml(value: Any) -> XmlData:
    if not isinstance(value, XmlData):
        raise _type_error(ColumnKind.XML, value)
    return value


def _is_aware(value: datetime) -> bool:
    return value.tzinfo is not None and value.utcoffset() is not None


def _date(value: Any) -> Date:
    if isinstance(value, Date):
        return value
    if isinstance(value, date) and not isinstance(value, datetime):
        return date_to_sql(value)
    raise _type_error(ColumnKind.DATE, value)


def _time(value: Any) -> Time:
    if isinstance(value, Time):
        return value
    if isinstance(value, time):
        return time_to_sql(value)
    raise _type_error(ColumnKind.TIME, value)


def _datetime2(value: Any) -> DateTime2:
    if isinstance(value, DateTime2):
        return value
    if isinstance(value, datetime):
        if _is_aware(value):
            value = value.astimezone(timezone.utc).replace(tzinfo=None)
        return datetime_to_sql(value)
    raise _type_error(ColumnKind.DATETIME2, value)


def _datetimeoffset(value: Any) -> DateTimeOffset:
    if isinstance(value, DateTimeOffset):
        return value
    if isinstance(value, datetime) and _is_aware(value):
        return datetime_to_sql(value)
    raise _type_error(ColumnKind.DATETIMEOFFSET, value)


def _legacy_datetime(value: Any) -> DateTime:
    if isinstance(value, DateTime):
        return value
    if isinstance(value, datetime):
        return legacy_datetime_to_sql(value)
    raise _type_error(ColumnKind.DATETIME, value)


def _smalldatetime(value: Any) -> SmallDateTime:
    if not isinstance(value, SmallDateTime):
        raise _type_error(ColumnKind.SMALLDATETIME, value)
    return value


_CONVERTERS: dict[ColumnKind, Callable[[Any], Any]] = {
    ColumnKind.BIT: _bit,
    ColumnKind.U8: _integer(ColumnKind.U8, 0, 2**8 - 1),
    ColumnKind.I16: _integer(ColumnKind.I16, -(2**15), 2**15 - 1),
    ColumnKind.I32: _integer(ColumnKind.I32, -(2**31), 2**31 - 1),
    ColumnKind.I64: _integer(ColumnKind.I64, -(2**63), 2**63 - 1),
    ColumnKind.F32: _floating(ColumnKind.F32),
    ColumnKind.F64: _floating(ColumnKind.F64),
    ColumnKind.STRING: _string,
    ColumnKind.BINARY: _binary,
    ColumnKind.GUID: _guid,
    ColumnKind.NUMERIC: _numeric,
    ColumnKind.XML: _xml,
    ColumnKind.DATETIME: _legacy_datetime,
    ColumnKind.SMALLDATETIME: _smalldatetime,
    ColumnKind.DATE: _date,
    ColumnKind.TIME: _time,
    ColumnKind.DATETIME2: _datetime2,
    ColumnKind.DATETIMEOFFSET: _datetimeoffset,
}

_WIRE_KINDS: tuple[tuple[type, ColumnKind], ...] = (
    (DateTimeOffset, ColumnKind.DATETIMEOFFSET),
    (DateTime2, ColumnKind.DATETIME2),
    (DateTime, ColumnKind.DATETIME),
    (SmallDateTime, ColumnKind.SMALLDATETIME),
    (Date, ColumnKind.DATE),
    (Time, ColumnKind.TIME),
)


def _infer_kind(value: Any) -> ColumnKind:
    if value is None:
        raise TypeError("a NULL value needs an explicit column kind")
    if isinstance(value, bool):
        return ColumnKind.BIT
    if isinstance(value, int):
        return ColumnKind.I32 if -(2**31) <= value < 2**31 else ColumnKind.I64
    if isinstance(value, float):
        return ColumnKind.F64
    if isinstance(value, str):
        return ColumnKind.STRING
    if isinstance(value, (bytes, bytearray, memoryview)):
        return ColumnKind.BINARY
    if isinstance(value, uuid.UUID):
        return ColumnKind.GUID
    if isinstance(value, Decimal):
        return ColumnKind.NUMERIC
    if isinstance(value, XmlData):
        return ColumnKind.XML
    if isinstance(value, datetime):
        return ColumnKind.DATETIMEOFFSET if _is_aware(value) else ColumnKind.DATETIME2
    if isinstance(value, date):
        return ColumnKind.DATE
    if isinstance(value, time):
        return ColumnKind.TIME
    for wire_type, kind in _WIRE_KINDS:
        if isinstance(value, wire_type):
            return kind
    raise TypeError(f"no column type for {type(value).__name__}")


def to_sql(value: Any, kind: Optional[ColumnKind] = None) -> ColumnData:
    """Wrap ``value`` as a column value, inferring the kind when not given.

    ``None`` is NULL and requires an explicit ``kind``.
    """
    if kind is None:
        kind = _infer_kind(value)
    if value is None:
        return ColumnData(kind, None)
    return ColumnData(kind, _CONVERTERS[kind](value))