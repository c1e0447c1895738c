"""Bookmark CRUD endpoints."""
import logging

from fastapi import APIRouter, Body, Depends, Request, Response
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_bookmark_or_404
from api.error_handlers import validation_error_message
from core.errors import (
    EMPTY_PATCH_MESSAGE,
    EMPTY_TEXT_MESSAGE,
    RATING_RANGE_MESSAGE,
    REQUIRED_FIELDS_MESSAGE,
    BookmarkValidationError,
)
from models.bookmark import MAX_RATING, MIN_RATING, Bookmark
from schemas.bookmark import BookmarkCreate, BookmarkResponse, BookmarkUpdate
from services import bookmark_service
from services.sanitizer import sanitize

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])


def serialize_bookmark(bookmark: Bookmark) -> BookmarkResponse:
    """Build the response for a row, sanitizing the user-supplied text fields."""
    return BookmarkResponse(
        id=bookmark.id,
        title=sanitize(bookmark.title),
        url=sanitize(bookmark.url),
        description=sanitize(bookmark.description),
        rating=bookmark.rating,
    )


def _check_rating(rating: int) -> None:
    if rating < MIN_RATING or rating > MAX_RATING:
        raise BookmarkValidationError(RATING_RANGE_MESSAGE)


def validate_new_bookmark(data: BookmarkCreate) -> None:
    """Required fields, then non-empty text, then the rating range; the first failure wins."""
    if data.title is None or data.url is None or data.rating is None:
        raise BookmarkValidationError(REQUIRED_FIELDS_MESSAGE)
    if data.title == "" or data.url == "":
        raise BookmarkValidationError(EMPTY_TEXT_MESSAGE)
    _check_rating(data.rating)


def build_patch(data: BookmarkUpdate) -> dict:
    """Turn a PATCH body into the columns to write, rejecting invalid values."""
    patch = data.to_patch()
    if not patch:
        raise BookmarkValidationError(EMPTY_PATCH_MESSAGE)
    if patch.get("title") == "" or patch.get("url") == "":
        raise BookmarkValidationError(EMPTY_TEXT_MESSAGE)
    if "rating" in patch:
        _check_rating(patch["rating"])
    return patch


@router.get("", response_model=list[BookmarkResponse])
async def list_bookmarks(
    db: AsyncSession = Depends(get_async_session),
) -> list[BookmarkResponse]:
    """List all bookmarks."""
    bookmarks = await bookmark_service.get_bookmarks(db)
    return [serialize_bookmark(b) for b in bookmarks]


@router.post("", response_model=BookmarkResponse, status_code=201)
async def create_bookmark(
    response: Response,
    data: BookmarkCreate | None = Body(default=None),
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkResponse:
    """Create a new bookmark."""
    data = data or BookmarkCreate()
    validate_new_bookmark(data)

    bookmark = await bookmark_service.insert_bookmark(db, data)
    logger.info("Bookmark with id %s created.", bookmark.id)

    response.headers["Location"] = f"/api/bookmarks/{bookmark.id}"
    return serialize_bookmark(bookmark)


@router.get("/{bookmark_id}", response_model=BookmarkResponse)
async def get_bookmark(
    bookmark: Bookmark = Depends(get_bookmark_or_404),
) -> BookmarkResponse:
    """Get a single bookmark by ID."""
    return serialize_bookmark(bookmark)


@router.delete("/{bookmark_id}", status_code=204)
async def delete_bookmark(
    bookmark: Bookmark = Depends(get_bookmark_or_404),
    db: AsyncSession = Depends(get_async_session),
) -> Response:
    """Delete a bookmark."""
    await bookmark_service.delete_bookmark(db, bookmark.id)
    logger.info("Bookmark with id %s deleted", bookmark.id)
    return Response(status_code=204)


async def read_update_body(request: Request) -> BookmarkUpdate:
    """
    Parse the PATCH body.

    Read inside the handler rather than declared as a body parameter: FastAPI
    parses declared bodies before resolving dependencies, which would answer
    a malformed body for an unknown id with 400 instead of 404.
    """
    raw = await request.body()
    if not raw.strip():
        return BookmarkUpdate()
    try:
        return BookmarkUpdate.model_validate_json(raw)
    except ValidationError as exc:
        raise BookmarkValidationError(validation_error_message(exc.errors())) from exc


@router.patch(
    "/{bookmark_id}",
    status_code=204,
    openapi_extra={
        "requestBody": {
            "content": {"application/json": {"schema": BookmarkUpdate.model_json_schema()}},
        },
    },
)
async def update_bookmark(
    request: Request,
    bookmark: Bookmark = Depends(get_bookmark_or_404),
    db: AsyncSession = Depends(get_async_session),
) -> Response:
    """
    Partially update a bookmark.

    Only the supplied fields change. Responds 204 whether or not the stored
    values actually differed.
    """
    patch = build_patch(await read_update_body(request))

    await bookmark_service.update_bookmark(db, bookmark.id, patch)
    logger.info("Bookmark with id %s updated (%s)", bookmark.id, ", ".join(sorted(patch)))
    return Response(status_code=204)
