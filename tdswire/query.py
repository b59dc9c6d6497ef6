"""Turning a stream of server tokens into result sets and rows.

A query response is a sequence of tokens. Metadata tokens start a new result
set and describe its columns. Row tokens carry the values of one row. Any
other token is skipped. Errors raised by the token source propagate to the
caller unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Optional, Union

from .temporal import ProtocolError
from .to_sql import ColumnData, ColumnKind

__all__ = [
    "Column",
    "Row",
    "NewResultset",
    "RowToken",
    "ResultMetadata",
    "QueryItem",
    "QueryStream",
]

_NOTHING = object()


@dataclass(frozen=True)
class Column:
    """Name and type of one column in a result set."""

    name: str
    column_type: Optional[ColumnKind] = None


@dataclass(frozen=True)
class NewResultset:
    """Token announcing a result set and the columns of its rows."""

    columns: tuple[Column, ...]


@dataclass(frozen=True)
class RowToken:
    """Token carrying the values of one row, in column order."""

    data: tuple[ColumnData, ...]


@dataclass(frozen=True)
class Row:
    """One row of a result set together with its column information."""

    columns: tuple[Column, ...]
    data: tuple[ColumnData, ...]
    result_index: int

    def _position(self, key: Union[int, str]) -> Optional[int]:
        if isinstance(key, str):
            for position, column in enumerate(self.columns):
                if column.name == key:
                    return position
            return None
        if isinstance(key, bool) or not isinstance(key, int):
            raise TypeError(f"row keys are column positions or names, not {key!r}")
        if 0 <= key < len(self.data):
            return key
        return None

    def get(self, key: Union[int, str]) -> Any:
        """The value at a column position or name; None for NULL or no such column."""
        position = self._position(key)
        if position is None:
            return None
        return self.data[position].value

    def __iter__(self) -> Iterator[ColumnData]:
        return iter(self.data)

    def __len__(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class ResultMetadata:
    """Columns of the rows that follow and the position of their result set."""

    columns: tuple[Column, ...]
    result_index: int


@dataclass(frozen=True)
class QueryItem:
    """Either a row or the metadata that starts a result set."""

    value: Union[Row, ResultMetadata]

    @property
    def is_row(self) -> bool:
        return isinstance(self.value, Row)

    def as_metadata(self) -> Optional[ResultMetadata]:
        return self.value if isinstance(self.value, ResultMetadata) else None

    def as_row(self) -> Optional[Row]:
        return self.value if isinstance(self.value, Row) else None


@dataclass
class QueryStream:
    """Iterates a query response as :class:`QueryItem` values.

    Every result set starts with a metadata item, followed by its rows.
    """

    _tokens: Iterator[Any] = field(repr=False)
    _peeked: Any = field(default=_NOTHING, repr=False)
    _columns: Optional[tuple[Column, ...]] = None
    _result_index: Optional[int] = None

    def __init__(self, tokens: Iterable[Any]) -> None:
        self._tokens = iter(tokens)
        self._peeked = _NOTHING
        self._columns = None
        self._result_index = None

    def _peek(self) -> Any:
        if self._peeked is _NOTHING:
            self._peeked = next(self._tokens, _NOTHING)
        return self._peeked

    def _advance(self) -> Any:
        token = self._peek()
        if token is not _NOTHING:
            self._peeked = _NOTHING
        return token

    def columns(self) -> Optional[tuple[Column, ...]]:
        """Columns of the current result set, or of the next one if it starts now.

        Tokens that are neither metadata nor rows are consumed on the way.
        """
        while True:
            token = self._peek()
            if token is _NOTHING or isinstance(token, RowToken):
                break
            if isinstance(token, NewResultset):
                self._columns = tuple(token.columns)
                break
            self._advance()
        return self._columns

    def __iter__(self) -> Iterator[QueryItem]:
        return self

    def __next__(self) -> QueryItem:
        while True:
            token = self._advance()
            if token is _NOTHING:
                raise StopIteration
            if isinstance(token, NewResultset):
                self._columns = tuple(token.columns)
                self._result_index = (
                    0 if self._result_index is None else self._result_index + 1
                )
                return QueryItem(ResultMetadata(self._columns, self._result_index))
            if isinstance(token, RowToken):
                if self._columns is None or self._result_index is None:
                    raise ProtocolError("row received before result metadata")
                return QueryItem(
                    Row(self._columns, tuple(token.data), self._result_index)
                )

    def into_results(self) -> list[list[Row]]:
        """Collect every result set into memory, in query order."""
        results: list[list[Row]] = []
        current: Optional[list[Row]] = None
        for item in self:
            row = item.as_row()
            if row is not None:
                if current is None:
                    current = [row]
                else:
                    current.append(row)
            elif current is None:
                current = []
            else:
                results.append(current)
                current = None
        if current is not None:
            results.append(current)
        return results

    def into_first_result(self) -> list[Row]:
        """Rows of the first result set; later results are dropped."""
        results = self.into_results()
        return results[0] if results else []

    def into_row(self) -> Optional[Row]:
        """The first row of the first result set, if any."""
        rows = self.into_first_result()
        return rows[0] if rows else None

    def into_row_stream(self) -> Iterator[Row]:
        """Yield only the rows, skipping metadata items."""
        for item in self:
            row = item.as_row()
            if row is not None:
                yield row