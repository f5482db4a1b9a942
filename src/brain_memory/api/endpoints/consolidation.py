"""Consolidation endpoint. Promotion only ever happens when this is called."""

from fastapi import APIRouter, Depends

from brain_memory.api.dependencies import get_memory_context
from brain_memory.domain.models import ConsolidateRequest, ConsolidationReport
from brain_memory.services.context import MemoryContext

router = APIRouter()


@router.post("", response_model=ConsolidationReport, operation_id="consolidate_memories")
async def consolidate_memories(
    request: ConsolidateRequest | None = None,
    context: MemoryContext = Depends(get_memory_context),
) -> ConsolidationReport:
    """Preview (default) or commit tier promotions."""
    return await context.consolidation.consolidate(request or ConsolidateRequest())
