# tdswire

Value types and helpers for the TDS protocol spoken by SQL Server: the
on-the-wire date and time representations, XML payloads, conversion of Python
values into typed column data, and a stream that turns received tokens into
result sets and rows. It has no dependencies outside the standard library.

## Installation

```
pip install tdswire
```

To run the test suite:

```
pip install "tdswire[test]"
pytest
```

## Date and time on the wire

`tdswire.temporal` holds the server's own representations as frozen
dataclasses:

- `DateTime`: days since 1 January 1900 and 1/300-second fragments (8 bytes)
- `SmallDateTime`: 16-bit days since 1900 and a 16-bit time part (4 bytes)
- `Date`: days since 1 January of year 1, at most 24 bits (3 bytes)
- `Time`: increments of 10^-scale seconds since midnight (3, 4 or 5 bytes
  depending on the scale)
- `DateTime2`: a `Time` followed by a `Date`
- `DateTimeOffset`: a `DateTime2` followed by a 16-bit offset in minutes

Each has `encode()`, returning little-endian bytes, and a `decode` class
method that reads from a binary stream. `Time`, `DateTime2` and
`DateTimeOffset` are decoded with the scale and byte length given by the
column metadata.

```python
import io
from tdswire.temporal import Date, Time, DateTime2

value = DateTime2(Date(737534), Time(588000000000, 7))
raw = value.encode()
assert DateTime2.decode(io.BytesIO(raw), 7, 5) == value
```

Two `Time` values compare equal when they denote the same number of seconds,
whatever their scales. A scale outside 0 to 7, or a scale and length that do
not belong together, raises `tdswire.temporal.ProtocolError`. Values outside
a field's range raise `ValueError`, and a stream that ends early raises
`EOFError`.

## Converting Python values

`tdswire.conversions` maps between the standard library's `date`, `time` and
`datetime` and the wire types. Every function passes `None` through.

```python
import datetime as dt
from tdswire.conversions import datetime_to_sql, datetime_from_sql

stamp = dt.datetime(2020, 4, 20, 16, 20)
column = datetime_to_sql(stamp)
assert datetime_from_sql(column) == stamp
```

- `date_to_sql` gives a `Date`; `time_to_sql` a `Time` with scale 7
  (100-nanosecond increments).
- `datetime_to_sql` gives a `DateTime2` for a naive value, and for an aware
  one a `DateTimeOffset` holding the UTC date and time and the offset in
  whole minutes.
- `legacy_datetime_to_sql` gives the older `DateTime` and accepts naive
  values only.
- `date_from_sql`, `time_from_sql` read `Date` and `Time` back;
  `datetime_from_sql` reads `SmallDateTime`, `DateTime2` or `DateTime` as a
  naive `datetime`; `datetimeoffset_from_sql` reads a `DateTimeOffset` as an
  aware `datetime` with its own offset, or a `DateTime2` as UTC.

Python's `time` and `datetime` stop at microseconds, so finer increments are
truncated when read back.

## Column values

`tdswire.to_sql.to_sql(value, kind=None)` wraps a Python value in a
`ColumnData` tagged with a `ColumnKind` (bit, tinyint, smallint, int, bigint,
real, float, nvarchar, varbinary, uniqueidentifier, numeric, xml, datetime,
smalldatetime, date, time, datetime2, datetimeoffset). Without a kind it is
inferred: `bool` becomes bit, `int` int (bigint outside 32 bits), `float`
float, `str` nvarchar, bytes-like values varbinary, `uuid.UUID`
uniqueidentifier, `Decimal` numeric, `XmlData` xml, and dates and times their
matching types.

```python
from tdswire.to_sql import ColumnKind, to_sql

assert to_sql("foo").kind is ColumnKind.STRING
assert to_sql(None, ColumnKind.I32).is_null
```

`None` needs an explicit kind. A value of the wrong type for the kind raises
`TypeError`; an integer out of the kind's range raises `ValueError`.

## XML

```python
from tdswire.xml import XmlData

doc = XmlData('<root><child attr="attr-value"/></root>')
payload = doc.encode()
```

`XmlData.encode` writes the document as UTF-16LE in a single chunk of a
partially length-prefixed stream: the unknown-length marker, the chunk length,
the text and the terminator. `str(doc)` is the text itself. `XmlSchema` names
the database, owner and collection a document is bound to.

## Query results

`tdswire.query.QueryStream` wraps an iterable of tokens and yields
`QueryItem` values: a `ResultMetadata` when a `NewResultset` token arrives,
then a `Row` for each `RowToken`. Other tokens are skipped, and a row before
any metadata raises `ProtocolError`. Each `Row` carries its `Column` list and
its result index; `Row.get` takes a column position or a column name and
returns `None` for NULL or a missing column.

```python
from tdswire.query import Column, NewResultset, QueryStream, RowToken
from tdswire.to_sql import ColumnKind, to_sql

tokens = [
    NewResultset((Column("first", ColumnKind.I32),)),
    RowToken((to_sql(1),)),
    NewResultset((Column("second", ColumnKind.I32),)),
    RowToken((to_sql(2),)),
]
results = QueryStream(tokens).into_results()
assert [[row.get(0) for row in rows] for rows in results] == [[1], [2]]
```

`columns()` returns the columns of the current result set, or looks ahead to
the next one when it starts at the next token. `into_first_result()`,
`into_row()` and `into_row_stream()` give simpler views of the same data.

## What it does not do

tdswire is not a database client. It opens no connections, performs no login
or encryption handshake, and does not read tokens from raw packets: the
tokens a `QueryStream` consumes have to be built by the caller.