"""Pattern store and search endpoints."""

from fastapi import APIRouter, Depends

from brain_memory.api.dependencies import get_memory_context
from brain_memory.domain.models import SearchPatternsRequest, SearchResult, StorePatternRequest, StoreResult
from brain_memory.services.context import MemoryContext

router = APIRouter()


@router.post("", response_model=StoreResult, operation_id="store_pattern")
async def store_pattern(
    request: StorePatternRequest,
    context: MemoryContext = Depends(get_memory_context),
) -> StoreResult:
    """Store a learned pattern in its tier."""
    return await context.patterns.store_pattern(request)


@router.post("/search", response_model=SearchResult, operation_id="search_patterns")
async def search_patterns(
    request: SearchPatternsRequest,
    context: MemoryContext = Depends(get_memory_context),
) -> SearchResult:
    """Similarity search with optional category and tier filters."""
    return await context.patterns.search_patterns(request)
