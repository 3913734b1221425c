"""
Application layer - Use cases and orchestration for the review workflow.

This layer contains:
- Application services (workflow, voting, comments, statistics, notifications)
- Port definitions (abstract interfaces for infrastructure)
- Result DTOs

IMPORT RULES:
- CAN import from: domain
- CANNOT import from: infrastructure
"""
