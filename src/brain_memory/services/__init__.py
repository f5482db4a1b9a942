"""Service layer interfaces and implementations."""

from typing import Any, Protocol, runtime_checkable

from brain_memory.domain.models import Category, MemoryType, PatternRecord


@runtime_checkable
class EmbeddingService(Protocol):
    """Protocol for embedding generators."""

    async def embed(self, text: str) -> list[float]:
        """Generate a fixed-length embedding for a single text."""
        ...


@runtime_checkable
class PatternStore(Protocol):
    """Protocol for the key-value store plus its vector index."""

    async def read_pattern(self, key: str) -> PatternRecord | None: ...

    async def write_pattern(
        self,
        key: str,
        category: Category,
        memory_type: MemoryType,
        content: str,
        metadata: dict[str, Any],
        embedding: list[float],
        ttl: int | None,
    ) -> None: ...

    async def knn_search(
        self,
        vector: list[float],
        k: int,
        category: Category | None = None,
        memory_type: MemoryType | None = None,
    ) -> list[PatternRecord]: ...

    async def filter_search(
        self,
        limit: int,
        category: Category | None = None,
        memory_type: MemoryType | None = None,
    ) -> list[PatternRecord]: ...

    async def index_exists(self) -> bool: ...

    async def ensure_index(self) -> bool: ...

    async def add_reminder(self, task_type: str, reminder_id: str, payload: dict[str, Any]) -> None: ...

    async def list_reminders(self, task_type: str) -> list[dict[str, Any]]: ...

    async def ping(self) -> bool: ...


__all__ = ["EmbeddingService", "PatternStore"]
