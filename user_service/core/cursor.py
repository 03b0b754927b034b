"""Cursor Codec — opaque keyset-pagination tokens built from creation timestamps.

Invariants:
    - decode_cursor(encode_cursor(t)) == t for every datetime t
    - decode_cursor("") is None (no lower bound), never an error
    - Any other undecodable input raises InvalidCursorError

Design Decisions:
    - URL-safe base64 over ISO-8601 text: survives query strings unescaped,
      keeps microseconds and UTC offset
"""

import base64
import binascii
from datetime import datetime

from user_service.core.domain_types import Cursor
from user_service.core.errors import InvalidCursorError


def encode_cursor(timestamp: datetime) -> Cursor:
    """Encode a creation timestamp as an opaque cursor."""
    raw = timestamp.isoformat().encode("utf-8")
    return Cursor(base64.urlsafe_b64encode(raw).decode("ascii"))


def decode_cursor(cursor: str) -> datetime | None:
    """Decode a cursor back to its timestamp. Empty cursor means no bound."""
    if not cursor:
        return None
    try:
        raw = base64.urlsafe_b64decode(cursor.encode("ascii"))
        return datetime.fromisoformat(raw.decode("utf-8"))
    except (binascii.Error, UnicodeError, ValueError):
        raise InvalidCursorError(cursor)
