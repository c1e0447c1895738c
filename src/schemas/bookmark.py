"""Pydantic schemas for bookmark endpoints."""
from pydantic import BaseModel, ConfigDict, StrictInt


class BookmarkCreate(BaseModel):
    """
    Schema for creating a new bookmark.

    Every field is optional here: the router checks required fields and the
    rating range itself so that clients get a single, ordered error message
    instead of pydantic's per-field list.
    """

    title: str | None = None
    url: str | None = None
    description: str | None = None
    # Strict: JSON true or "4" must not be stored as a rating
    rating: StrictInt | None = None


class BookmarkUpdate(BaseModel):
    """
    Schema for partially updating a bookmark.

    Unknown keys are ignored. ``model_fields_set`` tells explicitly supplied
    fields apart from omitted ones.
    """

    title: str | None = None
    url: str | None = None
    description: str | None = None
    rating: StrictInt | None = None

    def to_patch(self) -> dict:
        """
        Columns to write.

        A field counts when it was supplied with a non-null value. ``description``
        is the only nullable column, so supplying it as null clears it.
        """
        return {
            field: value
            for field, value in self.model_dump(exclude_unset=True).items()
            if value is not None or field == "description"
        }


class BookmarkResponse(BaseModel):
    """Schema for bookmark responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    url: str
    description: str | None
    rating: int
