import math
import uuid
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal

import pytest

from tdswire.temporal import (
    Date,
    DateTime,
    DateTime2,
    DateTimeOffset,
    SmallDateTime,
    Time,
)
from tdswire.to_sql import ColumnData, ColumnKind, to_sql
from tdswire.xml import XmlData


@pytest.mark.parametrize(
    "value, kind",
    [
        (1, ColumnKind.U8),
        (1, ColumnKind.I16),
        (1, ColumnKind.I32),
        (1, ColumnKind.I64),
        (math.pi, ColumnKind.F32),
        (math.pi, ColumnKind.F64),
    ],
)
def test_numbers_with_kind(value, kind):
    assert to_sql(value, kind) == ColumnData(kind, value)


@pytest.mark.parametrize(
    "kind",
    [
        ColumnKind.U8,
        ColumnKind.I16,
        ColumnKind.I32,
        ColumnKind.I64,
        ColumnKind.F32,
        ColumnKind.F64,
        ColumnKind.BIT,
        ColumnKind.STRING,
        ColumnKind.BINARY,
        ColumnKind.XML,
        ColumnKind.GUID,
        ColumnKind.DATE,
        ColumnKind.TIME,
        ColumnKind.DATETIMEOFFSET,
    ],
)
def test_null_values(kind):
    data = to_sql(None, kind)
    assert data.kind is kind
    assert data.is_null


def test_null_requires_kind():
    with pytest.raises(TypeError):
        to_sql(None)


def test_inferred_scalars():
    assert to_sql(True) == ColumnData(ColumnKind.BIT, True)
    assert to_sql(-4) == ColumnData(ColumnKind.I32, -4)
    assert to_sql(2**40) == ColumnData(ColumnKind.I64, 2**40)
    assert to_sql(4.2) == ColumnData(ColumnKind.F64, 4.2)
    assert to_sql("foo") == ColumnData(ColumnKind.STRING, "foo")


def test_tinyint_limits():
    assert to_sql(0, ColumnKind.U8).value == 0
    assert to_sql(255, ColumnKind.U8).value == 255
    with pytest.raises(ValueError):
        to_sql(256, ColumnKind.U8)
    with pytest.raises(ValueError):
        to_sql(-1, ColumnKind.U8)


def test_integer_kind_rejects_wrong_types():
    with pytest.raises(TypeError):
        to_sql(True, ColumnKind.I32)
    with pytest.raises(TypeError):
        to_sql("1", ColumnKind.I64)


def test_bytes():
    data = bytes([1, 6, 2, 0])
    assert to_sql(data) == ColumnData(ColumnKind.BINARY, data)
    assert to_sql(bytearray(data)).value == data
    assert to_sql(memoryview(data), ColumnKind.BINARY).value == data


def test_empty_values():
    assert to_sql("").value == ""
    assert to_sql(b"").value == b""


def test_xml():
    xml = XmlData("<foo>lol</foo>")
    assert to_sql(xml) == ColumnData(ColumnKind.XML, xml)


def test_guid():
    guid = uuid.UUID("c97dbc01-fb45-4384-a194-e39a4560cf4a")
    assert to_sql(guid) == ColumnData(ColumnKind.GUID, guid)


def test_numeric():
    assert to_sql(Decimal("0.2")) == ColumnData(ColumnKind.NUMERIC, Decimal("0.2"))
    assert to_sql(5, ColumnKind.NUMERIC).value == Decimal(5)


def test_temporal_inference():
    assert to_sql(date(2020, 4, 20)).kind is ColumnKind.DATE
    assert to_sql(time(16, 20)).value == Time(588_000_000_000, 7)
    assert to_sql(datetime(2020, 4, 20, 16, 20)).kind is ColumnKind.DATETIME2
    aware = datetime(2020, 4, 20, 16, 20, tzinfo=timezone(timedelta(hours=3)))
    data = to_sql(aware)
    assert data.kind is ColumnKind.DATETIMEOFFSET
    assert data.value.offset == 180


def test_aware_datetime_as_datetime2_is_utc():
    aware = datetime(2020, 4, 20, 16, 20, tzinfo=timezone(timedelta(hours=3)))
    data = to_sql(aware, ColumnKind.DATETIME2)
    assert data.value == to_sql(datetime(2020, 4, 20, 13, 20)).value


def test_legacy_datetime_kind():
    data = to_sql(datetime(1900, 1, 1, 0, 0, 1), ColumnKind.DATETIME)
    assert data == ColumnData(ColumnKind.DATETIME, DateTime(0, 300))


def test_wire_values_keep_kind():
    assert to_sql(Date(3)).kind is ColumnKind.DATE
    assert to_sql(SmallDateTime(1, 2)).kind is ColumnKind.SMALLDATETIME
    dt2 = DateTime2(Date(1), Time(1, 7))
    assert to_sql(dt2).kind is ColumnKind.DATETIME2
    assert to_sql(DateTimeOffset(dt2, 60)).kind is ColumnKind.DATETIMEOFFSET


def test_naive_datetime_not_offset():
    with pytest.raises(TypeError):
        to_sql(datetime(2020, 4, 20), ColumnKind.DATETIMEOFFSET)


def test_datetime_not_date():
    with pytest.raises(TypeError):
        to_sql(datetime(2020, 4, 20), ColumnKind.DATE)


def test_unknown_type():
    with pytest.raises(TypeError):
        to_sql(object())