"""Pattern identity, storage and the similarity-search facade."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from brain_memory.core.base import ErrorLevel
from brain_memory.core.config import CollisionPolicy, MemoryConfig
from brain_memory.core.decorators import with_error_handling
from brain_memory.core.errors import PatternConflictError
from brain_memory.core.logging import get_logger
from brain_memory.domain.decay import decay
from brain_memory.domain.identity import candidate_keys
from brain_memory.domain.models import (
    Category,
    MemoryType,
    PatternRecord,
    SearchFilters,
    SearchPatternsRequest,
    SearchResult,
    StorePatternRequest,
    StoreResult,
)
from brain_memory.domain.models.utils import utc_now

if TYPE_CHECKING:
    from brain_memory.services import EmbeddingService, PatternStore

logger = get_logger(__name__)

# Enumerates by tag filter alone, without an embedding or a KNN clause
WILDCARD_QUERY = "*"


class PatternService:
    """Stores patterns under deterministic keys and searches them with decay applied."""

    def __init__(
        self,
        store: PatternStore,
        embeddings: EmbeddingService,
        config: MemoryConfig,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.store = store
        self.embeddings = embeddings
        self.config = config
        self.clock = clock

    async def locate(
        self,
        memory_type: MemoryType,
        category: Category,
        content: str,
    ) -> tuple[str, PatternRecord | None]:
        """Find the key ``content`` belongs at in a tier and category.

        Probes the base key, then widened keys. Returns the first key that is
        free or already holds identical content, together with what it holds.

        Raises:
            PatternConflictError: On a collision under the reject policy, or when
                every widened key is taken.
        """
        for key in candidate_keys(
            memory_type,
            category,
            content,
            modulus=self.config.digest_modulus,
            max_disambiguation=self.config.max_disambiguation,
        ):
            existing = await self.store.read_pattern(key)
            if existing is None or existing.content == content:
                return key, existing

            if self.config.collision_policy == CollisionPolicy.REJECT:
                raise PatternConflictError(
                    message=f"Digest collision: {key} already holds different content",
                    details={"source": "PatternService", "operation": "store_pattern"},
                )
            logger.warning(f"Digest collision at {key}; widening key")

        raise PatternConflictError(
            message=f"No free key for content after {self.config.max_disambiguation} disambiguations",
            details={"source": "PatternService", "operation": "store_pattern"},
        )

    @with_error_handling(error_level=ErrorLevel.ERROR, reraise=True)
    async def store_pattern(self, request: StorePatternRequest) -> StoreResult:
        """Embed, identify, enrich and persist a pattern.

        An embedding failure aborts before anything is written. Storing the same
        content again in the same tier and category overwrites the earlier record.
        """
        embedding = await self.embeddings.embed(request.content)
        pattern_id, _ = await self.locate(request.memory_type, request.category, request.content)

        now = self.clock().isoformat()
        metadata = request.metadata.model_copy(
            update={
                "created_at": now,
                "last_validated": now,
                "source": request.metadata.source or "unknown",
            }
        )
        ttl = self.config.ttl_for(request.memory_type)

        await self.store.write_pattern(
            pattern_id,
            request.category,
            request.memory_type,
            request.content,
            metadata.to_storage(),
            embedding,
            ttl,
        )
        logger.info(f"Stored {pattern_id}", ttl_seconds=ttl)

        return StoreResult(pattern_id=pattern_id, memory_type=request.memory_type, ttl_seconds=ttl)

    @with_error_handling(error_level=ErrorLevel.ERROR, reraise=True)
    async def search_patterns(self, request: SearchPatternsRequest) -> SearchResult:
        """Nearest-neighbour search with optional tag filters and read-time decay."""
        if request.query == WILDCARD_QUERY:
            records = await self.store.filter_search(request.k, request.category, request.memory_type)
        else:
            vector = await self.embeddings.embed(request.query)
            records = await self.store.knn_search(vector, request.k, request.category, request.memory_type)

        now = self.clock()
        results = [self.apply_decay(record, now) for record in records]

        return SearchResult(
            results=results,
            query=request.query,
            filters=SearchFilters(category=request.category, memory_type=request.memory_type),
            count=len(results),
        )

    def apply_decay(self, record: PatternRecord, now: datetime) -> PatternRecord:
        """Expose original and current confidence; the stored value is left as is."""
        metadata = dict(record.metadata)
        confidence = metadata.get("confidence")
        last_validated = metadata.get("last_validated")

        if isinstance(confidence, bool) or not isinstance(confidence, int | float) or not last_validated:
            return record

        try:
            current = decay(
                confidence,
                last_validated,
                now=now,
                rate=self.config.decay_rate,
                period=timedelta(days=self.config.decay_period_days),
            )
        except (TypeError, ValueError):
            logger.warning(f"Pattern {record.pattern_id} has an unreadable last_validated: {last_validated!r}")
            return record

        metadata["confidence_original"] = confidence
        metadata["confidence_current"] = current
        return record.model_copy(update={"metadata": metadata})
