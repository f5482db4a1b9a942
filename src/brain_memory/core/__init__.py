from .base import (
    ApplicationError,
    ErrorCode,
    ErrorLevel,
    ServiceErrorDetails,
)
from .errors import (
    AuthenticationError,
    ConfigurationError,
    EmbeddingError,
    IndexMissingError,
    PatternConflictError,
    StorageError,
    ValidationError,
)
