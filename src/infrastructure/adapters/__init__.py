"""Infrastructure adapters for the review workflow.

Adapters implement the ports defined in the application layer,
providing concrete implementations for external services:

- persistence: PostgreSQL repositories (SQLAlchemy async + asyncpg)
- mail: SMTP email sender
- time: System clock
"""

__all__: list[str] = []
