"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId wraps the storage-assigned integer key
    - Cursor is an opaque token; only core/cursor.py builds or reads one

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
"""

from typing import NewType


UserId = NewType("UserId", int)
Cursor = NewType("Cursor", str)


DEFAULT_PAGE_SIZE = 10
NO_CURSOR = Cursor("")
