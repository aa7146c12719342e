"""Persistence access for bookmarks."""
from typing import Any, Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.bookmark import Bookmark
from schemas.bookmark import BookmarkCreate


class BookmarkRepository(Protocol):
    """The narrow set of operations the bookmark service needs from storage."""

    async def find_all(self) -> list[Bookmark]:
        """Return every bookmark ordered by id."""
        ...

    async def find_by_id(self, bookmark_id: int) -> Bookmark | None:
        """Return the bookmark with `bookmark_id`, or None."""
        ...

    async def insert(self, data: BookmarkCreate) -> Bookmark:
        """Store a new bookmark and return it with its assigned id."""
        ...

    async def update(self, bookmark_id: int, fields: dict[str, Any]) -> Bookmark | None:
        """Merge `fields` into the bookmark. Returns None if not found."""
        ...

    async def delete(self, bookmark_id: int) -> bool:
        """Remove the bookmark. Returns True if deleted, False if not found."""
        ...


class SqlAlchemyBookmarkRepository:
    """
    BookmarkRepository backed by an async SQLAlchemy session.

    Note: Does not commit. Caller (session generator) handles commit at request end.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def find_all(self) -> list[Bookmark]:
        result = await self.db.execute(select(Bookmark).order_by(Bookmark.id))
        return list(result.scalars().all())

    async def find_by_id(self, bookmark_id: int) -> Bookmark | None:
        return await self.db.get(Bookmark, bookmark_id)

    async def insert(self, data: BookmarkCreate) -> Bookmark:
        bookmark = Bookmark(**data.model_dump())
        self.db.add(bookmark)
        await self.db.flush()
        await self.db.refresh(bookmark)
        return bookmark

    async def update(self, bookmark_id: int, fields: dict[str, Any]) -> Bookmark | None:
        bookmark = await self.find_by_id(bookmark_id)
        if bookmark is None:
            return None

        for field, value in fields.items():
            setattr(bookmark, field, value)

        await self.db.flush()
        await self.db.refresh(bookmark)
        return bookmark

    async def delete(self, bookmark_id: int) -> bool:
        bookmark = await self.find_by_id(bookmark_id)
        if bookmark is None:
            return False

        await self.db.delete(bookmark)
        await self.db.flush()
        return True
