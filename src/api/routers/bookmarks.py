"""Bookmark CRUD endpoints."""
from typing import Any

from fastapi import APIRouter, Body, Depends, Response

from api.dependencies import get_bookmark_id, get_bookmark_repository
from db.bookmark_repository import BookmarkRepository
from schemas.bookmark import BookmarkResponse
from services import bookmark_service

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])


def as_object(payload: Any) -> dict[str, Any]:
    """
    Treat anything other than a JSON object as an empty body.

    Arrays, scalars and non-JSON bodies (which arrive as raw bytes) carry no
    fields, so they fail the same rules as a missing body.
    """
    return payload if isinstance(payload, dict) else {}


@router.get("", response_model=list[BookmarkResponse])
async def list_bookmarks(
    repo: BookmarkRepository = Depends(get_bookmark_repository),
) -> list[BookmarkResponse]:
    """List all bookmarks."""
    return await bookmark_service.list_bookmarks(repo)


@router.post("", response_model=BookmarkResponse, status_code=201)
async def create_bookmark(
    response: Response,
    payload: Any = Body(default=None),
    repo: BookmarkRepository = Depends(get_bookmark_repository),
) -> BookmarkResponse:
    """
    Create a new bookmark.

    Validation failures are answered with 400 and a plain-text message naming
    the first rule that failed.
    """
    bookmark = await bookmark_service.create_bookmark(repo, as_object(payload))
    response.headers["Location"] = f"{router.prefix}/{bookmark.id}"
    return bookmark


@router.patch("", status_code=204, include_in_schema=False)
async def update_bookmark_without_id(
    payload: Any = Body(default=None),
    repo: BookmarkRepository = Depends(get_bookmark_repository),
) -> None:
    """Reject an update that does not name a bookmark."""
    await bookmark_service.update_bookmark(repo, None, as_object(payload))


@router.get("/{bookmark_id}", response_model=BookmarkResponse)
async def get_bookmark(
    bookmark_id: int = Depends(get_bookmark_id),
    repo: BookmarkRepository = Depends(get_bookmark_repository),
) -> BookmarkResponse:
    """Get a single bookmark by ID."""
    return await bookmark_service.get_bookmark(repo, bookmark_id)


@router.patch("/{bookmark_id}", status_code=204)
async def update_bookmark(
    bookmark_id: int = Depends(get_bookmark_id),
    payload: Any = Body(default=None),
    repo: BookmarkRepository = Depends(get_bookmark_repository),
) -> None:
    """Update only the supplied fields of a bookmark."""
    await bookmark_service.update_bookmark(repo, bookmark_id, as_object(payload))


@router.delete("/{bookmark_id}", status_code=204)
async def delete_bookmark(
    bookmark_id: int = Depends(get_bookmark_id),
    repo: BookmarkRepository = Depends(get_bookmark_repository),
) -> None:
    """Delete a bookmark."""
    await bookmark_service.delete_bookmark(repo, bookmark_id)
