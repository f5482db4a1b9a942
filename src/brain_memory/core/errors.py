"""Specific error types for the Brain Memory application."""

from .base import (
    ApplicationError,
    ErrorCode,
    ErrorDetails,
    ErrorLevel,
    ServiceErrorDetails,
    StorageErrorDetails,
    ValidationErrorDetails,
)


class ValidationError(ApplicationError):
    """Malformed tool input, rejected before any external call."""

    def __init__(self, message: str, details: ValidationErrorDetails | dict | None = None):
        super().__init__(
            message=message,
            code=ErrorCode.INVALID_INPUT,
            level=ErrorLevel.WARNING,
            details=details,
        )


class EmbeddingError(ApplicationError):
    """The embedding generator failed or returned nothing usable."""

    def __init__(self, message: str, details: ServiceErrorDetails | dict | None = None):
        super().__init__(
            message=message,
            code=ErrorCode.EMBEDDING_FAILED,
            level=ErrorLevel.ERROR,
            details=details,
        )


class AuthenticationError(ApplicationError):
    """Authentication-related errors."""

    def __init__(self, message: str, details: ServiceErrorDetails | dict | None = None):
        super().__init__(
            message=message,
            code=ErrorCode.AUTHENTICATION_FAILED,
            level=ErrorLevel.ERROR,
            details=details
        )


class StorageError(ApplicationError):
    """Key-value store failures. Never retried."""

    def __init__(
        self,
        message: str,
        details: StorageErrorDetails | dict | None = None,
        code: ErrorCode = ErrorCode.STORAGE_OPERATION,
    ):
        super().__init__(
            message=message,
            code=code,
            level=ErrorLevel.ERROR,
            details=details,
        )


class IndexMissingError(ApplicationError):
    """The vector index is still missing after one recreation attempt."""

    def __init__(self, message: str, details: ErrorDetails | dict | None = None):
        super().__init__(
            message=message,
            code=ErrorCode.NOT_FOUND,
            level=ErrorLevel.ERROR,
            details=details,
        )


class PatternConflictError(ApplicationError):
    """A different pattern already occupies the derived key."""

    def __init__(self, message: str, details: ErrorDetails | dict | None = None):
        super().__init__(
            message=message,
            code=ErrorCode.DB_VALIDATION,
            level=ErrorLevel.WARNING,
            details=details,
        )


class ConfigurationError(ApplicationError):
    """Missing or invalid configuration. Fatal at startup."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(
            message=message,
            code=ErrorCode.CONFIG_MISSING,
            level=ErrorLevel.CRITICAL,
            details=details,
        )
