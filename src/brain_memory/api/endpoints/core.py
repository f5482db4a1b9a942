"""Core API endpoints for Brain Memory."""

from fastapi import APIRouter, Depends

from brain_memory import __version__
from brain_memory.api.dependencies import get_memory_context
from brain_memory.domain.models import HealthReport
from brain_memory.services.context import MemoryContext

router = APIRouter()


@router.get("/")
async def root():
    """Root endpoint with application status."""
    return {
        "message": "Brain Memory API",
        "version": __version__,
        "status": "running",
        "tiers": ["semantic", "episodic", "procedural"],
    }


@router.get("/health", response_model=HealthReport, operation_id="health_check")
async def health_check(context: MemoryContext = Depends(get_memory_context)) -> HealthReport:
    """Store, embedding service and index connectivity."""
    return await context.health.health_check()
