"""Cursor-based pagination schemas and keyset cursor encoding."""

import base64
from datetime import datetime
from typing import Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel, Field

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """One page of results plus an opaque cursor for the next page.

    Clients pass next_cursor back unchanged to continue listing.
    """

    items: list[T]
    next_cursor: str | None = Field(
        default=None,
        description="Opaque cursor for fetching the next page. None if no more pages.",
    )
    has_more: bool = Field(
        default=False,
        description="Whether there are more items after this page.",
    )


def encode_cursor(created_at: datetime, id: UUID) -> str:
    """Encode the (created_at, id) position of the last row on a page."""
    raw = f"{created_at.isoformat()}|{id}"
    return base64.urlsafe_b64encode(raw.encode()).decode()


def decode_cursor(cursor: str) -> tuple[datetime, UUID]:
    """Decode a cursor produced by encode_cursor.

    Raises:
        ValueError: If the cursor is not one this service issued
    """
    try:
        raw = base64.urlsafe_b64decode(cursor.encode()).decode()
    except Exception as e:
        raise ValueError("Invalid cursor") from e
    stamp, sep, ident = raw.partition("|")
    if not sep:
        raise ValueError("Invalid cursor")
    return datetime.fromisoformat(stamp), UUID(ident)
