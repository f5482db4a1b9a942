"""Voyage AI embedding service."""

from typing import Any, cast

import voyageai
from voyageai import error as voyage_errors

from brain_memory.core.base import AIServiceErrorDetails, ErrorLevel
from brain_memory.core.decorators import with_error_handling
from brain_memory.core.errors import AuthenticationError, ConfigurationError, EmbeddingError
from brain_memory.core.logging import get_logger

logger = get_logger(__name__)

MODEL_DIMENSIONS = {
    "voyage-3": 1024,
    "voyage-3-large": 1024,
    "voyage-3-lite": 512,
    "voyage-3.5": 1024,
    "voyage-3.5-lite": 1024,
    "voyage-code-3": 1024,
    "voyage-large-2": 1536,
    "voyage-code-2": 1536,
}


class VoyageEmbeddingService:
    """Turns text into a fixed-length float vector.

    Failures are surfaced immediately: there is no retry and no cache, so a
    failing embedding aborts the operation that needed it before anything is
    written.
    """

    def __init__(self, api_key: str, model: str = "voyage-3", client: Any | None = None) -> None:
        """Initialize the Voyage embedding service.

        Args:
            api_key: Voyage API key
            model: Embedding model name
            client: Optional pre-built ``voyageai.AsyncClient``

        Raises:
            ConfigurationError: If the API key is empty
        """
        if not api_key and client is None:
            raise ConfigurationError(
                message="Voyage API key not configured (set VOYAGE_API_KEY)",
                details={"source": "VoyageEmbeddingService", "operation": "initialization"},
            )

        self.model = model
        # voyageai client doesn't expose a public type
        self.client = client or voyageai.AsyncClient(api_key=api_key)

    def _details(self, operation: str, text: str, status_code: int | None = None) -> AIServiceErrorDetails:
        return AIServiceErrorDetails(
            source="VoyageEmbeddingService",
            operation=operation,
            service_name="Voyage AI",
            endpoint="/embeddings",
            status_code=status_code,
            model_name=self.model,
            text_length=len(text),
        )

    def _map_error(self, e: Exception, text: str) -> EmbeddingError | AuthenticationError:
        """Map client errors to our exception types."""
        error_msg = str(e).lower()
        if isinstance(e, voyage_errors.AuthenticationError) or "api key" in error_msg:
            return AuthenticationError(
                message="Authentication failed for embeddings API",
                details=self._details("embed", text, status_code=401),
            )
        if isinstance(e, voyage_errors.RateLimitError) or "rate limit" in error_msg:
            return EmbeddingError(
                message="Rate limit exceeded for embeddings API",
                details=self._details("embed", text, status_code=429),
            )
        return EmbeddingError(
            message=f"Failed to generate embedding: {e!s}",
            details=self._details("embed", text),
        )

    @with_error_handling(error_level=ErrorLevel.ERROR, reraise=True)
    async def embed(self, text: str) -> list[float]:
        """Generate an embedding vector for ``text``.

        Raises:
            EmbeddingError: If the API call fails or returns no vector
            AuthenticationError: If the API rejects the key
        """
        try:
            response = await self.client.embed(texts=[text], model=self.model)
        except Exception as e:
            raise self._map_error(e, text) from e

        embeddings = getattr(response, "embeddings", None) or []
        if not embeddings:
            raise EmbeddingError(
                message="Embeddings API returned no vector",
                details=self._details("embed", text, status_code=200),
            )

        logger.debug(f"Embedded {len(text)} chars with {self.model}")
        return cast("list[float]", embeddings[0])

    def get_model_dimensions(self) -> int:
        """Dimensionality of the configured model (1024 when unknown)."""
        return MODEL_DIMENSIONS.get(self.model, 1024)
