"""Shared fixtures: in-memory stand-ins for the store and the embedding service."""

import hashlib
from datetime import UTC, datetime
from typing import Any

import numpy as np
import pytest

from brain_memory.core.config import MemoryConfig
from brain_memory.core.errors import EmbeddingError
from brain_memory.domain.models import Category, MemoryType, PatternRecord
from brain_memory.services.context import MemoryContext

DIMENSIONS = 16
FIXED_NOW = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)


class FakeEmbeddingService:
    """Deterministic unit vectors derived from the text."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls: list[str] = []

    async def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        if self.fail:
            raise EmbeddingError("embedding service unavailable")
        seed = int.from_bytes(hashlib.sha256(text.encode()).digest()[:4], "big")
        vector = np.random.default_rng(seed).normal(size=DIMENSIONS)
        return (vector / np.linalg.norm(vector)).tolist()


class InMemoryPatternStore:
    """Dict-backed PatternStore with cosine-distance KNN."""

    def __init__(self):
        self.patterns: dict[str, dict[str, Any]] = {}
        self.ttls: dict[str, int] = {}
        self.reminders: dict[str, dict[str, dict[str, Any]]] = {}
        self.index_present = True
        self.reachable = True
        self.writes: list[str] = []
        self.fail_writes_for: set[str] = set()

    def _check(self) -> None:
        if not self.reachable:
            raise ConnectionError("store unreachable")

    def _record(self, key: str, score: float | None = None) -> PatternRecord:
        entry = self.patterns[key]
        return PatternRecord(
            pattern_id=key,
            category=entry["category"],
            memory_type=entry["memory_type"],
            content=entry["content"],
            metadata=dict(entry["metadata"]),
            score=score,
        )

    def _matching(self, category: Category | None, memory_type: MemoryType | None) -> list[str]:
        return [
            key
            for key, entry in self.patterns.items()
            if (category is None or entry["category"] == category.value)
            and (memory_type is None or entry["memory_type"] == memory_type.value)
        ]

    async def read_pattern(self, key: str) -> PatternRecord | None:
        self._check()
        return self._record(key) if key in self.patterns else None

    async def write_pattern(self, key, category, memory_type, content, metadata, embedding, ttl) -> None:
        self._check()
        if content in self.fail_writes_for:
            raise RuntimeError(f"write rejected for {key}")
        self.patterns[key] = {
            "category": category.value,
            "memory_type": memory_type.value,
            "content": content,
            "metadata": dict(metadata),
            "embedding": np.asarray(embedding, dtype=np.float32),
        }
        if ttl:
            self.ttls[key] = ttl
        else:
            self.ttls.pop(key, None)
        self.writes.append(key)

    async def knn_search(self, vector, k, category=None, memory_type=None) -> list[PatternRecord]:
        self._check()
        query = np.asarray(vector, dtype=np.float32)
        scored = []
        for key in self._matching(category, memory_type):
            stored = self.patterns[key]["embedding"]
            cosine = float(np.dot(query, stored) / (np.linalg.norm(query) * np.linalg.norm(stored)))
            scored.append((1.0 - cosine, key))
        scored.sort()
        return [self._record(key, score) for score, key in scored[:k]]

    async def filter_search(self, limit, category=None, memory_type=None) -> list[PatternRecord]:
        self._check()
        return [self._record(key) for key in self._matching(category, memory_type)[:limit]]

    async def index_exists(self) -> bool:
        self._check()
        return self.index_present

    async def ensure_index(self) -> bool:
        self._check()
        created = not self.index_present
        self.index_present = True
        return created

    async def add_reminder(self, task_type, reminder_id, payload) -> None:
        self._check()
        self.reminders.setdefault(task_type, {})[reminder_id] = dict(payload)

    async def list_reminders(self, task_type) -> list[dict[str, Any]]:
        self._check()
        return list(self.reminders.get(task_type, {}).values())

    async def ping(self) -> bool:
        self._check()
        return True


class Clock:
    """Settable clock for services."""

    def __init__(self, now: datetime = FIXED_NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def store():
    return InMemoryPatternStore()


@pytest.fixture
def embeddings():
    return FakeEmbeddingService()


@pytest.fixture
def clock():
    return Clock()


@pytest.fixture
def config():
    return MemoryConfig()


@pytest.fixture
def context(store, embeddings, config, clock):
    return MemoryContext(store=store, embeddings=embeddings, config=config, clock=clock)


def metadata(**overrides: Any) -> dict[str, Any]:
    data = {"confidence": 0.9, "evidence_count": 1, "tags": ["test"], "source": "pytest"}
    data.update(overrides)
    return data
