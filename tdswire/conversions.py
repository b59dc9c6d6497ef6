"""Conversions between Python date/time values and the wire types.

Dates count days from 1 January of year 1 (`date`, `datetime2`) or from
1 January 1900 (`datetime`, `smalldatetime`). Times written by this module
always use scale 7, i.e. increments of 100 nanoseconds.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Union

from .temporal import Date, DateTime, DateTime2, DateTimeOffset, SmallDateTime, Time

__all__ = [
    "date_to_sql",
    "time_to_sql",
    "datetime_to_sql",
    "legacy_datetime_to_sql",
    "date_from_sql",
    "time_from_sql",
    "datetime_from_sql",
    "datetimeoffset_from_sql",
]

_ORDINAL_YEAR_1 = date(1, 1, 1).toordinal()
_ORDINAL_YEAR_1900 = date(1900, 1, 1).toordinal()
_NANOS_PER_SECOND = 1_000_000_000
_NANOS_PER_DAY = 86_400 * _NANOS_PER_SECOND
_SCALE = 7


def _from_days(days: int, start_ordinal: int) -> date:
    return date.fromordinal(start_ordinal + days)


def _to_days(value: date, start_ordinal: int) -> int:
    return value.toordinal() - start_ordinal


def _nanos_since_midnight(value: time) -> int:
    seconds = (value.hour * 60 + value.minute) * 60 + value.second
    return seconds * _NANOS_PER_SECOND + value.microsecond * 1000


def _time_from_nanos(nanos: int) -> time:
    # Adding a duration to midnight wraps around at the end of the day.
    micros = (nanos % _NANOS_PER_DAY) // 1000
    seconds, micro = divmod(micros, 1_000_000)
    minutes, second = divmod(seconds, 60)
    hour, minute = divmod(minutes, 60)
    return time(hour, minute, second, micro)


def _increments_to_nanos(value: Time) -> int:
    if value.scale <= 9:
        return value.increments * 10 ** (9 - value.scale)
    return value.increments // 10 ** (value.scale - 9)


def _scaled_time(value: time) -> Time:
    return Time(_nanos_since_midnight(value) // 100, _SCALE)


def _naive_datetime2(value: datetime) -> DateTime2:
    days = _to_days(value.date(), _ORDINAL_YEAR_1)
    return DateTime2(Date(days), _scaled_time(value.time()))


def _datetime2_to_naive(value: DateTime2) -> datetime:
    day = _from_days(value.date.days, _ORDINAL_YEAR_1)
    return datetime.combine(day, _time_from_nanos(_increments_to_nanos(value.time)))


def _is_aware(value: datetime) -> bool:
    return value.tzinfo is not None and value.utcoffset() is not None


def date_to_sql(value: Optional[date]) -> Optional[Date]:
    """Convert a calendar date to the `date` wire type."""
    if value is None:
        return None
    if isinstance(value, datetime):
        value = value.date()
    if not isinstance(value, date):
        raise TypeError(f"expected a date, got {type(value).__name__}")
    return Date(_to_days(value, _ORDINAL_YEAR_1))


def time_to_sql(value: Optional[time]) -> Optional[Time]:
    """Convert a time of day to the `time` wire type with scale 7."""
    if value is None:
        return None
    if not isinstance(value, time):
        raise TypeError(f"expected a time, got {type(value).__name__}")
    return _scaled_time(value)


def datetime_to_sql(
    value: Optional[datetime],
) -> Optional[Union[DateTime2, DateTimeOffset]]:
    """Convert a datetime to `datetime2` (naive) or `datetimeoffset` (aware).

    For an aware value the date and time are stored in UTC together with the
    offset in whole minutes.
    """
    if value is None:
        return None
    if not isinstance(value, datetime):
        raise TypeError(f"expected a datetime, got {type(value).__name__}")
    if not _is_aware(value):
        return _naive_datetime2(value)
    offset = value.utcoffset()
    assert offset is not None
    minutes = int(offset.total_seconds() / 60)
    utc = (value - offset).replace(tzinfo=None)
    return DateTimeOffset(_naive_datetime2(utc), minutes)


def legacy_datetime_to_sql(value: Optional[datetime]) -> Optional[DateTime]:
    """Convert a naive datetime to the older `datetime` wire type."""
    if value is None:
        return None
    if not isinstance(value, datetime):
        raise TypeError(f"expected a datetime, got {type(value).__name__}")
    if _is_aware(value):
        raise TypeError("the datetime type takes naive datetime values only")
    days = _to_days(value.date(), _ORDINAL_YEAR_1900)
    fragments = _nanos_since_midnight(value.time()) * 300 // _NANOS_PER_SECOND
    return DateTime(days, fragments)


def date_from_sql(value: Optional[Date]) -> Optional[date]:
    """Convert a `date` wire value to a calendar date."""
    if value is None:
        return None
    if not isinstance(value, Date):
        raise TypeError(f"cannot read a date from {type(value).__name__}")
    return _from_days(value.days, _ORDINAL_YEAR_1)


def time_from_sql(value: Optional[Time]) -> Optional[time]:
    """Convert a `time` wire value to a time of day (microsecond precision)."""
    if value is None:
        return None
    if not isinstance(value, Time):
        raise TypeError(f"cannot read a time from {type(value).__name__}")
    return _time_from_nanos(_increments_to_nanos(value))


def datetime_from_sql(
    value: Optional[Union[SmallDateTime, DateTime2, DateTime]],
) -> Optional[datetime]:
    """Convert `smalldatetime`, `datetime2` or `datetime` to a naive datetime."""
    if value is None:
        return None
    if isinstance(value, SmallDateTime):
        day = _from_days(value.days, _ORDINAL_YEAR_1900)
        seconds = value.seconds_fragments * 60
        return datetime.combine(day, _time_from_nanos(seconds * _NANOS_PER_SECOND))
    if isinstance(value, DateTime2):
        return _datetime2_to_naive(value)
    if isinstance(value, DateTime):
        day = _from_days(value.days, _ORDINAL_YEAR_1900)
        nanos = value.seconds_fragments * _NANOS_PER_SECOND // 300
        return datetime.combine(day, _time_from_nanos(nanos))
    raise TypeError(f"cannot read a datetime from {type(value).__name__}")


def datetimeoffset_from_sql(
    value: Optional[Union[DateTimeOffset, DateTime2]],
) -> Optional[datetime]:
    """Convert to an aware datetime.

    A `datetimeoffset` keeps its own offset; a `datetime2` is taken as UTC.
    """
    if value is None:
        return None
    if isinstance(value, DateTimeOffset):
        utc = _datetime2_to_naive(value.datetime2).replace(tzinfo=timezone.utc)
        return utc.astimezone(timezone(timedelta(minutes=value.offset)))
    if isinstance(value, DateTime2):
        return _datetime2_to_naive(value).replace(tzinfo=timezone.utc)
    raise TypeError(f"cannot read a datetimeoffset from {type(value).__name__}")