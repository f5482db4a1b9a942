from datetime import timedelta

import pytest

from brain_memory.domain.models import Category, MemoryType, SearchPatternsRequest, StorePatternRequest
from tests.conftest import FIXED_NOW, metadata


async def seed(context, content, category=Category.SOLUTION, memory_type=MemoryType.SEMANTIC, **meta):
    return await context.patterns.store_pattern(
        StorePatternRequest(category=category, memory_type=memory_type, content=content, metadata=metadata(**meta))
    )


async def test_exact_content_ranks_first(context):
    await seed(context, "Use exponential backoff for flaky APIs")
    await seed(context, "Never commit secrets")
    await seed(context, "Run migrations before deploying")

    result = await context.patterns.search_patterns(SearchPatternsRequest(query="Never commit secrets"))

    assert result.count == 3
    assert result.results[0].content == "Never commit secrets"
    assert result.results[0].score == pytest.approx(0.0, abs=1e-5)


async def test_k_limits_results(context):
    for i in range(6):
        await seed(context, f"pattern number {i}")

    result = await context.patterns.search_patterns(SearchPatternsRequest(query="pattern", k=2))

    assert result.count == 2
    assert len(result.results) == 2


async def test_filters_are_conjoined(context):
    await seed(context, "a", category=Category.SOLUTION, memory_type=MemoryType.SEMANTIC)
    await seed(context, "b", category=Category.FAILURE, memory_type=MemoryType.SEMANTIC)
    await seed(context, "c", category=Category.FAILURE, memory_type=MemoryType.EPISODIC)

    result = await context.patterns.search_patterns(
        SearchPatternsRequest(query="anything", category=Category.FAILURE, memory_type=MemoryType.EPISODIC)
    )

    assert [r.content for r in result.results] == ["c"]
    assert result.filters.category == Category.FAILURE
    assert result.filters.memory_type == MemoryType.EPISODIC


async def test_decay_fields_added_to_results(context, store, clock):
    stored = await seed(context, "Prefer small PRs", confidence=0.8)
    clock.now = FIXED_NOW + timedelta(days=60)

    result = await context.patterns.search_patterns(SearchPatternsRequest(query="Prefer small PRs"))

    found = result.results[0].metadata
    assert found["confidence_original"] == 0.8
    assert found["confidence_current"] == pytest.approx(0.8 * 0.95**2)
    # Stored record is untouched
    assert "confidence_current" not in store.patterns[stored.pattern_id]["metadata"]
    assert store.patterns[stored.pattern_id]["metadata"]["confidence"] == 0.8


async def test_records_without_validation_time_are_not_decayed(context, store):
    store.patterns["pattern:semantic:solution:1"] = {
        "category": "solution",
        "memory_type": "semantic",
        "content": "legacy",
        "metadata": {"confidence": 0.5},
        "embedding": (await context.embeddings.embed("legacy")),
    }

    result = await context.patterns.search_patterns(SearchPatternsRequest(query="legacy"))

    assert "confidence_current" not in result.results[0].metadata


async def test_unreadable_timestamp_is_left_alone(context, store):
    store.patterns["pattern:semantic:solution:2"] = {
        "category": "solution",
        "memory_type": "semantic",
        "content": "odd",
        "metadata": {"confidence": 0.5, "last_validated": "last tuesday"},
        "embedding": (await context.embeddings.embed("odd")),
    }

    result = await context.patterns.search_patterns(SearchPatternsRequest(query="odd"))

    assert result.results[0].metadata == {"confidence": 0.5, "last_validated": "last tuesday"}


async def test_wildcard_query_skips_embedding(context, embeddings):
    await seed(context, "one", memory_type=MemoryType.EPISODIC)
    await seed(context, "two", memory_type=MemoryType.SEMANTIC)
    calls_before = len(embeddings.calls)

    result = await context.patterns.search_patterns(
        SearchPatternsRequest(query="*", memory_type=MemoryType.EPISODIC)
    )

    assert len(embeddings.calls) == calls_before
    assert [r.content for r in result.results] == ["one"]


async def test_empty_store_returns_no_results(context):
    result = await context.patterns.search_patterns(SearchPatternsRequest(query="nothing"))

    assert result.results == []
    assert result.count == 0
