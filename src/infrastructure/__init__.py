"""
Infrastructure layer - External adapters for the review workflow.

This layer contains:
- PostgreSQL adapters (SQLAlchemy async)
- SMTP email sender
- System clock
- In-memory stubs for development and testing
- Observability (structlog configuration, correlation ids)

IMPORT RULES:
- CAN import from: domain, application
- Implements ports defined in application layer
"""
