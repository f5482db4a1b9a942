"""Connectivity checks for the store, the embedding service and the index."""

from __future__ import annotations

from typing import TYPE_CHECKING

from brain_memory.core.logging import get_logger
from brain_memory.domain.models import HealthChecks, HealthReport

if TYPE_CHECKING:
    from brain_memory.services import EmbeddingService, PatternStore

logger = get_logger(__name__)


class HealthService:
    def __init__(self, store: PatternStore, embeddings: EmbeddingService):
        self.store = store
        self.embeddings = embeddings

    async def health_check(self) -> HealthReport:
        """Probe each dependency; a failing probe degrades the report instead of raising."""
        checks = HealthChecks()

        try:
            await self.store.ping()
            checks.store = "connected"
        except Exception as e:
            checks.store = f"error: {e!s}"

        try:
            await self.embeddings.embed("test")
            checks.embedding_service = "connected"
        except Exception as e:
            checks.embedding_service = f"error: {e!s}"

        try:
            checks.index = "exists" if await self.store.index_exists() else "missing"
        except Exception as e:
            logger.warning(f"Index check failed: {e!s}")
            checks.index = "missing"

        healthy = checks.store == "connected" and checks.embedding_service == "connected"
        if not healthy:
            logger.warning("Health check degraded", **checks.model_dump())
        return HealthReport(status="healthy" if healthy else "degraded", checks=checks)
