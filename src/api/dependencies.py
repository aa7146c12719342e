"""FastAPI dependencies for injection."""
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from db.bookmark_repository import BookmarkRepository, SqlAlchemyBookmarkRepository
from db.session import get_async_session
from services.exceptions import BookmarkNotFoundError

# Postgres INTEGER upper bound; larger ids cannot exist
MAX_BOOKMARK_ID = 2**31 - 1


def get_bookmark_repository(
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkRepository:
    """Repository bound to the request's session."""
    return SqlAlchemyBookmarkRepository(db)


def get_bookmark_id(bookmark_id: str) -> int:
    """
    Parse the `{bookmark_id}` path parameter.

    An id that is not a positive integer cannot match any bookmark, so it is
    reported as not found rather than as a validation error.
    """
    try:
        value = int(bookmark_id)
    except ValueError:
        raise BookmarkNotFoundError(bookmark_id)
    if not 0 < value <= MAX_BOOKMARK_ID:
        raise BookmarkNotFoundError(bookmark_id)
    return value


__all__ = [
    "get_async_session",
    "get_bookmark_id",
    "get_bookmark_repository",
]
