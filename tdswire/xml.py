"""XML values and their schema information."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Optional

__all__ = ["XmlSchema", "XmlData"]

_PLP_UNKNOWN_LENGTH = 0xFFFFFFFFFFFFFFFE
_PLP_TERMINATOR = 0


@dataclass(frozen=True)
class XmlSchema:
    """Where the schema collection an XML value is bound to lives."""

    db_name: str
    owner: str
    collection: str


@dataclass
class XmlData:
    """An XML document as text, optionally bound to a schema.

    The document is not validated here; the server validates it.
    """

    data: str
    schema: Optional[XmlSchema] = None

    def __str__(self) -> str:
        return self.data

    def encode(self) -> bytes:
        """Encode as a single-chunk PLP stream of UTF-16LE text."""
        payload = self.data.encode("utf-16-le")
        return b"".join(
            (
                struct.pack("<Q", _PLP_UNKNOWN_LENGTH),
                struct.pack("<I", len(payload)),
                payload,
                struct.pack("<I", _PLP_TERMINATOR),
            )
        )