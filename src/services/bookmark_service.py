"""Service layer for bookmark CRUD operations."""
import logging
import math
from typing import Any

from pydantic import HttpUrl, TypeAdapter, ValidationError

from db.bookmark_repository import BookmarkRepository
from models.bookmark import Bookmark
from schemas.bookmark import BookmarkCreate, BookmarkResponse
from services.exceptions import (
    BadRequestError,
    BookmarkNotFoundError,
    BookmarkValidationError,
)
from services.sanitize import sanitize

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("title", "url", "description", "rating")
MIN_RATING = 0
MAX_RATING = 5

MISSING_ID_MESSAGE = "bookmark id must be specified as a parameter"
EMPTY_UPDATE_MESSAGE = (
    "Error: request body must contain either 'url', 'desc', 'rating' or 'title'."
)

_http_url_adapter = TypeAdapter(HttpUrl)


def parse_rating(value: Any) -> int | None:
    """
    Interpret `value` as a whole-number rating.

    Accepts ints, integral floats and strings holding an integer. Returns None
    for anything else (booleans included).
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return int(value)
        return None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def is_valid_url(value: Any) -> bool:
    """True if `value` is a well-formed absolute http(s) URL."""
    if not isinstance(value, str):
        return False
    try:
        _http_url_adapter.validate_python(value)
    except ValidationError:
        return False
    return True


def validate_new_bookmark(payload: dict[str, Any]) -> BookmarkCreate:
    """
    Apply the create rules in order and return the validated fields.

    Raises:
        BookmarkValidationError: naming the first rule that fails.
    """
    title = payload.get("title")
    url = payload.get("url")
    rating = payload.get("rating")
    description = payload.get("description")

    if not isinstance(title, str) or not title:
        raise BookmarkValidationError("'title' is required")
    if url is None or url == "":
        raise BookmarkValidationError("'url' is required")
    if rating is None:
        raise BookmarkValidationError("'rating' is required")

    rating_value = parse_rating(rating)
    if rating_value is None or not MIN_RATING <= rating_value <= MAX_RATING:
        raise BookmarkValidationError(
            f"'rating' must be a number between {MIN_RATING} and {MAX_RATING}",
        )
    if not is_valid_url(url):
        raise BookmarkValidationError("'url' must be a valid URL")

    return BookmarkCreate(
        title=title,
        url=url,
        description=None if description is None else str(description),
        rating=rating_value,
    )


def to_column_value(name: str, value: Any) -> Any:
    """
    Convert a PATCH value to the column's type without judging its content.

    Text columns take the string form of any value. A rating that reads as a
    whole number becomes an int; anything else is passed on unchanged and left
    for the database to reject.
    """
    if value is None:
        return None
    if name == "rating":
        rating = parse_rating(value)
        return value if rating is None else rating
    if isinstance(value, str):
        return value
    return str(value)


def serialize_bookmark(bookmark: Bookmark) -> BookmarkResponse:
    """Build the outbound representation with free-text fields sanitized."""
    response = BookmarkResponse.model_validate(bookmark)
    return response.model_copy(
        update={
            "title": sanitize(response.title),
            "description": sanitize(response.description),
        },
    )


async def list_bookmarks(repo: BookmarkRepository) -> list[BookmarkResponse]:
    """Get all bookmarks."""
    bookmarks = await repo.find_all()
    return [serialize_bookmark(b) for b in bookmarks]


async def get_bookmark(repo: BookmarkRepository, bookmark_id: int) -> BookmarkResponse:
    """Get a bookmark by ID. Raises BookmarkNotFoundError if it does not exist."""
    bookmark = await repo.find_by_id(bookmark_id)
    if bookmark is None:
        logger.info("Bookmark with id %s not found", bookmark_id)
        raise BookmarkNotFoundError(bookmark_id)
    return serialize_bookmark(bookmark)


async def create_bookmark(
    repo: BookmarkRepository,
    payload: dict[str, Any],
) -> BookmarkResponse:
    """
    Validate and store a new bookmark.

    Raises:
        BookmarkValidationError: if a create rule fails; nothing is stored.
    """
    data = validate_new_bookmark(payload)
    bookmark = await repo.insert(data)
    logger.info("Bookmark with id %s created", bookmark.id)
    return serialize_bookmark(bookmark)


async def update_bookmark(
    repo: BookmarkRepository,
    bookmark_id: int | None,
    payload: dict[str, Any],
) -> None:
    """
    Merge the supplied fields into an existing bookmark.

    Only `title`, `url`, `description` and `rating` are taken from the payload;
    their formats are not checked here, unlike on create, though values are
    converted to the column type. A field sent as null is not counted as
    supplied.

    Raises:
        BadRequestError: if `bookmark_id` is None or no field was supplied.
        BookmarkNotFoundError: if the bookmark does not exist.
    """
    if bookmark_id is None:
        raise BadRequestError(MISSING_ID_MESSAGE)

    if await repo.find_by_id(bookmark_id) is None:
        logger.info("Bookmark with id %s not found", bookmark_id)
        raise BookmarkNotFoundError(bookmark_id)

    fields = {name: payload[name] for name in UPDATABLE_FIELDS if name in payload}
    if not any(value is not None for value in fields.values()):
        raise BadRequestError(EMPTY_UPDATE_MESSAGE)
    # description is the only nullable column; a null elsewhere means "leave as is"
    fields = {
        name: to_column_value(name, value) for name, value in fields.items()
        if value is not None or name == "description"
    }

    await repo.update(bookmark_id, fields)
    logger.info("Bookmark with id %s updated", bookmark_id)


async def delete_bookmark(repo: BookmarkRepository, bookmark_id: int) -> None:
    """Delete a bookmark. Raises BookmarkNotFoundError if it does not exist."""
    deleted = await repo.delete(bookmark_id)
    if not deleted:
        logger.info("Bookmark with id %s not found", bookmark_id)
        raise BookmarkNotFoundError(bookmark_id)
    logger.info("Bookmark with id %s deleted", bookmark_id)
