"""Pytest fixtures for testing."""
from collections.abc import AsyncGenerator
from typing import Any

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from api.dependencies import get_bookmark_repository
from api.main import create_app
from core.config import Settings
from db.session import get_async_session
from models.bookmark import Bookmark
from schemas.bookmark import BookmarkCreate

TEST_API_TOKEN = "test-api-token-0000"


class InMemoryBookmarkRepository:
    """BookmarkRepository that keeps bookmarks in a dict, for tests."""

    def __init__(self) -> None:
        self.bookmarks: dict[int, Bookmark] = {}
        self._next_id = 1

    def add(self, **fields: Any) -> Bookmark:
        """Store a bookmark directly, bypassing validation (like a raw insert)."""
        bookmark_id = fields.pop("id", None) or self._next_id
        self._next_id = max(self._next_id, bookmark_id + 1)
        bookmark = Bookmark(id=bookmark_id, **fields)
        self.bookmarks[bookmark_id] = bookmark
        return bookmark

    async def find_all(self) -> list[Bookmark]:
        return [self.bookmarks[key] for key in sorted(self.bookmarks)]

    async def find_by_id(self, bookmark_id: int) -> Bookmark | None:
        return self.bookmarks.get(bookmark_id)

    async def insert(self, data: BookmarkCreate) -> Bookmark:
        return self.add(**data.model_dump())

    async def update(self, bookmark_id: int, fields: dict[str, Any]) -> Bookmark | None:
        bookmark = self.bookmarks.get(bookmark_id)
        if bookmark is None:
            return None
        for field, value in fields.items():
            setattr(bookmark, field, value)
        return bookmark

    async def delete(self, bookmark_id: int) -> bool:
        return self.bookmarks.pop(bookmark_id, None) is not None


class FakeSession:
    """Stands in for AsyncSession where only `execute` is exercised."""

    def __init__(self) -> None:
        self.statements: list[Any] = []

    async def execute(self, statement: Any) -> None:
        self.statements.append(statement)


@pytest.fixture
def sample_bookmarks() -> list[dict[str, Any]]:
    """Three well-formed bookmarks."""
    return [
        {
            "id": 1,
            "title": "Thinkful",
            "url": "https://www.thinkful.com",
            "description": "Think outside the classroom",
            "rating": 5,
        },
        {
            "id": 2,
            "title": "Google",
            "url": "https://www.google.com",
            "description": "Where we find everything else",
            "rating": 4,
        },
        {
            "id": 3,
            "title": "MDN",
            "url": "https://developer.mozilla.org",
            "description": "The only place to find web documentation",
            "rating": 5,
        },
    ]


@pytest.fixture
def malicious_bookmark() -> tuple[dict[str, Any], dict[str, Any]]:
    """A bookmark carrying markup, and what it looks like once sanitized."""
    malicious = {
        "id": 911,
        "title": 'Naughty naughty very naughty <script>alert("xss");</script>',
        "url": "https://www.hackers.com",
        "description": (
            'Bad image <img src="https://url.to.file.which/does-not.exist" '
            'onerror="alert(document.cookie);">. But not <strong>all</strong> bad.'
        ),
        "rating": 1,
    }
    expected = {
        **malicious,
        "title": 'Naughty naughty very naughty &lt;script&gt;alert("xss");&lt;/script&gt;',
        "description": (
            'Bad image <img src="https://url.to.file.which/does-not.exist">. '
            'But not <strong>all</strong> bad.'
        ),
    }
    return malicious, expected


@pytest.fixture
def api_token() -> str:
    """The token the test application accepts."""
    return TEST_API_TOKEN


@pytest.fixture
def settings() -> Settings:
    """Settings for tests, independent of any local .env file."""
    return Settings(
        _env_file=None,
        database_url="postgresql+asyncpg://test@localhost/test",
        api_token=TEST_API_TOKEN,
        environment="test",
    )


@pytest.fixture
def repo() -> InMemoryBookmarkRepository:
    """Empty in-memory repository."""
    return InMemoryBookmarkRepository()


@pytest.fixture
def fake_session() -> FakeSession:
    """Session double for endpoints that only run raw statements."""
    return FakeSession()


@pytest.fixture
def app(
    settings: Settings,
    repo: InMemoryBookmarkRepository,
    fake_session: FakeSession,
) -> FastAPI:
    """Application wired to the in-memory repository."""
    application = create_app(settings)

    async def override_get_async_session() -> AsyncGenerator[FakeSession]:
        yield fake_session

    application.dependency_overrides[get_bookmark_repository] = lambda: repo
    application.dependency_overrides[get_async_session] = override_get_async_session
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Test client presenting the configured API token."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"Authorization": f"Bearer {TEST_API_TOKEN}"},
    ) as test_client:
        yield test_client


@pytest.fixture
async def anonymous_client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Test client without an Authorization header."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client
