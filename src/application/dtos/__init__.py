"""Application DTOs (Data Transfer Objects).

These DTOs carry operation outcomes across the application boundary.
They are distinct from domain models (immutable business objects).
"""

from src.application.dtos.operation_result import (
    CommentResult,
    DecisionResult,
    DraftResult,
    OperationResult,
)

__all__ = ["CommentResult", "DecisionResult", "DraftResult", "OperationResult"]
