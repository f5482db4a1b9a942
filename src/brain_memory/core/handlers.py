"""Error handlers that turn exceptions into structured failure results."""

from collections.abc import Sequence
from typing import Any

import pydantic

from brain_memory.core.logging import get_logger

from .base import ApplicationError, ErrorCode, ErrorLevel, ValidationErrorDetails
from .error_context import ErrorContext, ErrorContextManager
from .errors import ValidationError

logger = get_logger(__name__)


def validation_error_from_errors(problems: Sequence[Any], operation: str) -> ValidationError:
    """Convert pydantic-style error entries into our ValidationError.

    Only the first offending field is reported in the structured details; the
    message lists all of them.
    """
    first = problems[0] if problems else {}
    field = ".".join(str(part) for part in first.get("loc", ())) or None
    summary = "; ".join(
        f"{'.'.join(str(p) for p in item.get('loc', ())) or 'input'}: {item.get('msg')}"
        for item in problems
    )
    return ValidationError(
        message=f"Invalid input for {operation}: {summary}",
        details=ValidationErrorDetails(
            source="tool_boundary",
            operation=operation,
            field=field,
            actual_value=repr(first.get("input"))[:200] if first else None,
            constraint=first.get("msg"),
        ),
    )


class ErrorHandler:
    """Formats errors caught at an operation boundary."""

    def _format_response(
        self,
        error_context: ErrorContext,
        level: ErrorLevel,
    ) -> dict[str, Any]:
        response: dict[str, Any] = {
            "error": str(error_context.error),
            "error_code": ErrorCode.PROCESSING_FAILED.value,
            "level": level.value,
            "trace_id": error_context.trace_id,
            "timestamp": error_context.timestamp.isoformat(),
        }

        if isinstance(error_context.error, ApplicationError):
            response["error_code"] = error_context.error.code.value
            response["details"] = error_context.error.details.model_dump()

        return response

    def handle(self, error: Exception, operation: str) -> dict[str, Any]:
        """Log the error and return the failure payload for the caller."""
        if isinstance(error, pydantic.ValidationError):
            error = validation_error_from_errors(error.errors(), operation)

        level = error.level if isinstance(error, ApplicationError) else ErrorLevel.ERROR
        with ErrorContextManager(error, operation=operation) as ctx:
            logger.log(
                level.to_logging_level(),
                f"Operation {operation} failed: {error!s}",
                error_context=ctx.to_dict(),
            )
            return self._format_response(ctx, level)
