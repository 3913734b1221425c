"""Driver error translation for the PostgreSQL repositories."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError

from src.domain.errors import StoreUnavailableError


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """Re-raise driver and socket errors as StoreUnavailableError.

    Domain errors raised inside the block pass through unchanged.

    Usage:
        with store_errors("get_application"):
            async with self._session_factory() as session:
                ...
    """
    try:
        yield
    except (SQLAlchemyError, OSError) as exc:
        raise StoreUnavailableError(operation, exc) from exc
