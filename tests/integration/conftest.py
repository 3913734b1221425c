"""
Integration test configuration with testcontainers.

This module provides a session-scoped PostgreSQL 16 container for the
review repository tests:

Container Reuse Pattern:
- The container is started once per test session (scope="session")
- The review schema is created per test and the tables are truncated
  afterwards (function-scoped fixtures)
- The container is automatically cleaned up after all tests complete

Usage:
    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_example(session_factory: async_sessionmaker[AsyncSession]) -> None:
        repo = PostgresApplicationRepository(session_factory)
        ...

Note: Docker must be running; the tests are skipped otherwise.
"""

from collections.abc import AsyncGenerator, Generator

import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from testcontainers.postgres import PostgresContainer

from src.bootstrap.database import create_review_schema, normalize_database_url

REVIEW_TABLES = (
    "application_notifications",
    "application_comments",
    "application_votes",
    "client_applications",
)


@pytest.fixture(scope="session")
def postgres_container() -> Generator[PostgresContainer, None, None]:
    """Session-scoped PostgreSQL 16 container.

    The container is started once and reused across all integration tests.
    """
    container = PostgresContainer("postgres:16-alpine")
    try:
        container.start()
    except Exception as exc:
        pytest.skip(f"Docker is not available: {exc}")
    try:
        yield container
    finally:
        container.stop()


@pytest.fixture(scope="session")
def postgres_async_url(postgres_container: PostgresContainer) -> str:
    """Get the asyncpg connection URL of the container.

    testcontainers returns a psycopg2 URL by default.
    """
    sync_url = postgres_container.get_connection_url()
    return normalize_database_url(sync_url.replace("postgresql+psycopg2://", "postgresql://"))


@pytest.fixture
async def session_factory(
    postgres_async_url: str,
) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Per-test session factory over a freshly created review schema."""
    engine = create_async_engine(postgres_async_url, echo=False)
    await create_review_schema(engine)

    yield async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as connection:
        await connection.execute(text(f"TRUNCATE {', '.join(REVIEW_TABLES)} CASCADE"))
    await engine.dispose()
