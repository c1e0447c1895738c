"""Service layer for bookmark persistence."""
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from models.bookmark import Bookmark
from schemas.bookmark import BookmarkCreate


async def get_bookmarks(db: AsyncSession) -> list[Bookmark]:
    """Return every bookmark in insertion (id) order."""
    result = await db.execute(select(Bookmark).order_by(Bookmark.id))
    return list(result.scalars().all())


async def get_bookmark(db: AsyncSession, bookmark_id: int) -> Bookmark | None:
    """Return the bookmark with the given id, or None if there is no such row."""
    result = await db.execute(select(Bookmark).where(Bookmark.id == bookmark_id))
    return result.scalar_one_or_none()


async def insert_bookmark(db: AsyncSession, data: BookmarkCreate) -> Bookmark:
    """
    Persist a new bookmark and return it with its store-assigned id.

    Expects data that already passed validation (title, url and rating
    present, rating within 1-5). Nothing is re-checked here; a row that
    violates the table constraints surfaces as an IntegrityError.
    """
    bookmark = Bookmark(
        title=data.title,
        url=data.url,
        description=data.description,
        rating=data.rating,
    )
    db.add(bookmark)
    await db.flush()
    await db.refresh(bookmark)
    return bookmark


async def delete_bookmark(db: AsyncSession, bookmark_id: int) -> None:
    """Delete the bookmark with the given id. Missing ids are a no-op."""
    await db.execute(delete(Bookmark).where(Bookmark.id == bookmark_id))
    await db.flush()


async def update_bookmark(db: AsyncSession, bookmark_id: int, patch: dict) -> int:
    """
    Write only the columns present in ``patch`` and return the affected row count.

    Columns not in ``patch`` keep their stored values.
    """
    if not patch:
        return 0
    result = await db.execute(
        update(Bookmark)
        .where(Bookmark.id == bookmark_id)
        .values(**patch),
    )
    await db.flush()
    return result.rowcount
