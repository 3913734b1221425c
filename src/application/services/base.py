"""Base service logging mixin and failure boundary.

This module provides the LoggingMixin class for standardized structured
logging across the review services, and the single place where raised
errors are translated into failed OperationResult values.

Usage:
    from src.application.services.base import LoggingMixin

    class MyService(LoggingMixin):
        def __init__(self, dependency: SomePort) -> None:
            self._dependency = dependency
            self._init_logger()

        async def do_something(self) -> OperationResult:
            log = self._log_operation("do_something", item_id="123")
            try:
                ...
            except Exception as exc:
                return self._failure(log, exc)
            log.info("operation_completed")
            return OperationResult.success()
"""

from __future__ import annotations

from typing import TypeVar

import structlog

from src.application.dtos.operation_result import OperationResult
from src.domain.errors import StoreUnavailableError
from src.domain.exceptions import ReviewWorkflowError
from src.infrastructure.observability.correlation import get_correlation_id

GENERIC_FAILURE_MESSAGE = "An unexpected error occurred while processing the request."

ResultT = TypeVar("ResultT", bound=OperationResult)


class LoggingMixin:
    """Mixin providing structured logging for services.

    The logger is bound with:
    - service: The class name of the service
    - component: The component type (default: "review")

    Each operation gets:
    - operation: The name of the operation being performed
    - correlation_id: From context for distributed tracing
    - Any additional context passed to _log_operation()

    Attributes:
        _log: The structlog BoundLogger for this service instance.
    """

    _log: structlog.BoundLogger

    def _init_logger(self, component: str = "review") -> None:
        """Initialize the logger with service name binding.

        Should be called in __init__ after setting up dependencies.

        Args:
            component: The component type for log categorization.
        """
        self._log = structlog.get_logger().bind(
            service=self.__class__.__name__,
            component=component,
        )

    def _log_operation(
        self,
        operation: str,
        **context: object,
    ) -> structlog.BoundLogger:
        """Create operation-scoped logger with correlation ID.

        Args:
            operation: Name of the operation being performed.
            **context: Additional context to bind to the logger.

        Returns:
            BoundLogger with operation and correlation context.
        """
        return self._log.bind(
            operation=operation,
            correlation_id=get_correlation_id(),
            **context,
        )

    def _failure(
        self,
        log: structlog.BoundLogger,
        exc: Exception,
        result_type: type[ResultT] = OperationResult,  # type: ignore[assignment]
    ) -> ResultT:
        """Translate an exception into a failed result.

        Business-rule errors keep their messages. Infrastructure errors
        and anything unexpected are logged with the traceback and
        reported with a generic message so internals never leak.

        Args:
            log: Operation-scoped logger.
            exc: The exception caught at the service boundary.
            result_type: Result class to build.

        Returns:
            A failed result of result_type.
        """
        if isinstance(exc, StoreUnavailableError):
            log.error(
                "store_unavailable",
                store_operation=exc.operation,
                exc_info=exc,
            )
            return result_type.failure([GENERIC_FAILURE_MESSAGE])
        if isinstance(exc, ReviewWorkflowError):
            log.warning(
                "operation_rejected",
                error_type=type(exc).__name__,
                errors=exc.messages,
            )
            return result_type.failure(exc.messages)
        log.error("operation_failed", error_type=type(exc).__name__, exc_info=exc)
        return result_type.failure([GENERIC_FAILURE_MESSAGE])
