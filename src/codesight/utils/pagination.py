"""
Page-number pagination with opaque continuation cursors for MCP tools that
return lists.

Producers hand over items already in a deterministic order; this module only
slices. A cursor encodes the offset of the next page; decoding it and asking
again with the same page size yields the following contiguous slice.
"""

import base64
import binascii
import json
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")

CURSOR_VERSION = 1
DEFAULT_MAX_PAGE_SIZE = 500


@dataclass
class Page(Generic[T]):
    """One slice of an ordered result list."""

    items: list[T] = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 0
    next_cursor: str | None = None

    @property
    def has_more(self) -> bool:
        return self.next_cursor is not None


def encode_cursor(offset: int) -> str:
    """Encode the offset of the next page as an opaque token."""
    payload = json.dumps({"v": CURSOR_VERSION, "offset": offset}, separators=(",", ":"))
    return base64.urlsafe_b64encode(payload.encode("utf-8")).decode("ascii")


def decode_cursor(cursor: str | None) -> int | None:
    """
    Decode a cursor into an offset.

    Returns:
        The offset, or None when the cursor is absent or cannot be understood.
    """
    if not cursor:
        return None
    try:
        raw = base64.urlsafe_b64decode(cursor.encode("ascii"))
        data = json.loads(raw.decode("utf-8"))
    except (binascii.Error, UnicodeError, ValueError):
        return None
    if not isinstance(data, dict) or data.get("v") != CURSOR_VERSION:
        return None
    offset = data.get("offset")
    if not isinstance(offset, int) or isinstance(offset, bool) or offset < 0:
        return None
    return offset


def resolve_page_number(page: int | None, cursor: str | None, page_size: int) -> int:
    """
    Work out the 1-based page to serve.

    A valid cursor wins over ``page``. A cursor that was supplied but cannot be
    decoded starts over at page 1.
    """
    if cursor:
        offset = decode_cursor(cursor)
        if offset is None:
            return 1
        return offset // page_size + 1
    if page is None:
        return 1
    return max(1, page)


def paginate(
    items: list[T],
    page: int = 1,
    page_size: int = 200,
    max_page_size: int = DEFAULT_MAX_PAGE_SIZE,
) -> Page[T]:
    """
    Slice an ordered list into a page.

    Args:
        items: Items in their final, deterministic order
        page: 1-based page number (values below 1 are treated as 1)
        page_size: Items per page, clamped to [1, max_page_size]
        max_page_size: Upper bound for page_size

    Returns:
        Page with ``next_cursor`` set iff ``page * page_size < total``
    """
    page = max(1, page)
    page_size = min(max_page_size, max(1, page_size))
    total = len(items)
    start = (page - 1) * page_size
    end = page * page_size

    next_cursor = encode_cursor(end) if end < total else None
    return Page(items=list(items[start:end]), total=total, page=page, page_size=page_size, next_cursor=next_cursor)
