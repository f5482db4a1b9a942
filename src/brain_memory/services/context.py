"""Explicit dependency bundle for the operations.

Built once at startup and handed to each transport; nothing reads it from
module-level state.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from brain_memory.core.config import MemoryConfig, Settings
from brain_memory.core.logging import get_logger
from brain_memory.domain.models.utils import utc_now
from brain_memory.services import EmbeddingService, PatternStore
from brain_memory.services.consolidation import ConsolidationEngine
from brain_memory.services.health import HealthService
from brain_memory.services.pattern_service import PatternService
from brain_memory.services.reminders import ReminderService

logger = get_logger(__name__)


class MemoryContext:
    """The store handle, the embedding client and the policy, wired into services."""

    def __init__(
        self,
        store: PatternStore,
        embeddings: EmbeddingService,
        config: MemoryConfig | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.store = store
        self.embeddings = embeddings
        self.config = config or MemoryConfig()

        self.patterns = PatternService(store, embeddings, self.config, clock=clock)
        self.consolidation = ConsolidationEngine(self.patterns, self.config)
        self.reminders = ReminderService(store, clock=clock)
        self.health = HealthService(store, embeddings)


async def bootstrap(settings: Settings, config: MemoryConfig | None = None) -> MemoryContext:
    """Build the production context and make sure the vector index exists.

    Any failure here (missing API key, unreachable store) is fatal to the caller.
    """
    from brain_memory.infrastructure.embeddings import VoyageEmbeddingService
    from brain_memory.infrastructure.redis import RedisConnectionFactory, RedisPatternStore

    embeddings = VoyageEmbeddingService(api_key=settings.voyage_api_key, model=settings.voyage_model)
    connections = RedisConnectionFactory(settings.redis_url)
    store = RedisPatternStore(
        connections,
        index_name=settings.index_name,
        key_prefix=settings.key_prefix,
        reminder_prefix=settings.reminder_prefix,
        dimensions=embeddings.get_model_dimensions(),
    )

    logger.info(f"Connecting to {connections.masked_url}")
    await store.ping()
    if await store.ensure_index():
        logger.info(f"{settings.index_name} created successfully")

    return MemoryContext(store=store, embeddings=embeddings, config=config)
