"""HTTP API module."""

from fastapi import APIRouter

from .endpoints import consolidation, core, patterns, reminders

router = APIRouter()

router.include_router(patterns.router, prefix="/api/v1/patterns", tags=["patterns"])
router.include_router(reminders.router, prefix="/api/v1/reminders", tags=["reminders"])
router.include_router(consolidation.router, prefix="/api/v1/consolidate", tags=["consolidation"])
router.include_router(core.router)
