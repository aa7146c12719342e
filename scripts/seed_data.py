"""Seed script to populate the local dev database with sample bookmarks.

Usage:
    PYTHONPATH=src python scripts/seed_data.py populate
    PYTHONPATH=src python scripts/seed_data.py populate --force
    PYTHONPATH=src python scripts/seed_data.py clear
"""

import argparse
import asyncio

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import get_settings
from db.session import build_engine, build_session_factory
from models import Bookmark

BOOKMARKS = [
    {
        'title': 'Python Official Documentation',
        'url': 'https://docs.python.org/3/',
        'description': 'Reference for the language, the standard library and the tutorial.',
        'rating': 5,
    },
    {
        'title': 'FastAPI',
        'url': 'https://fastapi.tiangolo.com/',
        'description': 'Modern async web framework built on Starlette and pydantic.',
        'rating': 5,
    },
    {
        'title': 'SQLAlchemy 2.0 Tutorial',
        'url': 'https://docs.sqlalchemy.org/en/20/tutorial/',
        'description': 'Unified tutorial covering Core and ORM usage.',
        'rating': 4,
    },
    {
        'title': 'PostgreSQL Documentation',
        'url': 'https://www.postgresql.org/docs/current/',
        'description': None,
        'rating': 4,
    },
    {
        'title': 'MDN Web Docs',
        'url': 'https://developer.mozilla.org/',
        'description': 'Web platform reference. Good for <strong>HTTP</strong> status codes.',
        'rating': 3,
    },
    {
        'title': 'Hacker News',
        'url': 'https://news.ycombinator.com/',
        'description': 'Tech news aggregator.',
        'rating': 2,
    },
]


async def create_bookmarks(session: AsyncSession) -> None:
    """Insert the sample bookmarks."""
    session.add_all(Bookmark(**data) for data in BOOKMARKS)
    await session.flush()
    print(f'  Created {len(BOOKMARKS)} bookmarks')


async def clear_data(session: AsyncSession) -> None:
    """Delete every bookmark."""
    count = (await session.execute(select(func.count()).select_from(Bookmark))).scalar()
    await session.execute(delete(Bookmark))
    await session.flush()
    print(f'  Deleted {count} bookmarks')


async def populate(force: bool = False) -> None:
    """Populate the database with seed data."""
    engine = build_engine(get_settings())
    session_factory = build_session_factory(engine)

    async with session_factory() as session:
        try:
            count = (await session.execute(select(func.count()).select_from(Bookmark))).scalar()

            if count and count > 0:
                if force:
                    print('Existing data found, clearing first (--force)...')
                    await clear_data(session)
                else:
                    print(
                        f'Data already exists ({count} bookmarks). '
                        f'Use --force to clear and re-seed.'
                    )
                    return

            print('Populating seed data...')
            await create_bookmarks(session)
            await session.commit()
            print('Seed data created successfully.')
        except Exception:
            await session.rollback()
            raise
        finally:
            await engine.dispose()


async def clear() -> None:
    """Remove all bookmarks."""
    engine = build_engine(get_settings())
    session_factory = build_session_factory(engine)

    async with session_factory() as session:
        try:
            await clear_data(session)
            await session.commit()
            print('Clear complete.')
        except Exception:
            await session.rollback()
            raise
        finally:
            await engine.dispose()


def main() -> None:
    """CLI entry point."""
    settings = get_settings()
    if settings.is_production:
        print(
            "ERROR: Seed script refuses to run with ENVIRONMENT=production.\n"
            "This script modifies data directly and must only run against a local dev database."
        )
        raise SystemExit(1)

    parser = argparse.ArgumentParser(description='Seed the dev database with sample bookmarks.')
    subparsers = parser.add_subparsers(dest='command', required=True)

    populate_parser = subparsers.add_parser(
        'populate', help='Populate database with sample bookmarks',
    )
    populate_parser.add_argument(
        '--force', action='store_true',
        help='Clear existing data before populating',
    )

    subparsers.add_parser('clear', help='Remove all bookmarks')

    args = parser.parse_args()

    if args.command == 'populate':
        asyncio.run(populate(force=args.force))
    elif args.command == 'clear':
        asyncio.run(clear())


if __name__ == '__main__':
    main()
