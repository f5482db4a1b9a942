"""API dependencies."""

from fastapi import HTTPException, Request

from brain_memory.services.context import MemoryContext


async def get_memory_context(request: Request) -> MemoryContext:
    """The context built by the application lifespan (or injected by tests)."""
    context: MemoryContext | None = getattr(request.app.state, "memory", None)
    if context is None:
        raise HTTPException(status_code=503, detail="Services not initialized")
    return context
