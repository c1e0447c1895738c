"""FastAPI dependencies for injection."""
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.errors import BookmarkNotFoundError
from db.session import get_async_session
from models.bookmark import Bookmark
from services import bookmark_service


# Largest value a PostgreSQL integer primary key can hold
MAX_BOOKMARK_ID = 2**31 - 1


def parse_bookmark_id(raw: str) -> int | None:
    """Parse a path segment as a bookmark id; None if it cannot name a row."""
    if not (raw.isascii() and raw.isdigit()):
        return None
    bookmark_id = int(raw)
    if bookmark_id < 1 or bookmark_id > MAX_BOOKMARK_ID:
        return None
    return bookmark_id


async def get_bookmark_or_404(
    bookmark_id: str,
    db: AsyncSession = Depends(get_async_session),
) -> Bookmark:
    """
    Existence guard shared by the ``/bookmarks/{bookmark_id}`` routes.

    Ids that are not positive integers cannot exist and are rejected without
    a query. The found row is the dependency's value, so handlers receive it
    as a parameter.
    """
    parsed_id = parse_bookmark_id(bookmark_id)
    if parsed_id is None:
        raise BookmarkNotFoundError
    bookmark = await bookmark_service.get_bookmark(db, parsed_id)
    if bookmark is None:
        raise BookmarkNotFoundError
    return bookmark


__all__ = [
    "get_async_session",
    "get_bookmark_or_404",
    "parse_bookmark_id",
]
