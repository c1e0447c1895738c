"""Bookmark model."""
from sqlalchemy import CheckConstraint, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


MIN_RATING = 1
MAX_RATING = 5


class Bookmark(Base):
    """Bookmark model - a saved URL with a title, optional description and 1-5 rating."""

    __tablename__ = "bookmarks"
    __table_args__ = (
        CheckConstraint(
            f"rating >= {MIN_RATING} AND rating <= {MAX_RATING}",
            name="ck_bookmarks_rating_range",
        ),
        # ids are never reused, even after the highest row is deleted
        {"sqlite_autoincrement": True},
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
