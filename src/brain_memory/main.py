"""Brain Memory FastAPI application.

Exposes the same operations as the MCP tools over HTTP. The services are built
once in the lifespan and kept on ``app.state``; tests inject a ready-made
context instead. Served by uvicorn as an application factory.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import logfire
import uvicorn
from fastapi import FastAPI

from brain_memory import __version__
from brain_memory.api import router
from brain_memory.api.errors import install_error_handlers
from brain_memory.core.config import load_settings
from brain_memory.core.logging import configure_logfire, get_logger, setup_logging
from brain_memory.services.context import MemoryContext, bootstrap

logger = get_logger(__name__)


def create_app(context: MemoryContext | None = None) -> FastAPI:
    """Create the API application, optionally bound to an existing context."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        if context is not None:
            app.state.memory = context
            yield
            return

        settings = load_settings()
        setup_logging(settings.log_level)
        configure_logfire(settings.logfire_token, console=settings.debug)

        logger.info("Starting Brain Memory API...")
        try:
            app.state.memory = await bootstrap(settings)
        except Exception as e:
            logger.critical(f"Failed to start Brain Memory: {e!s}", exc_info=True)
            raise

        logger.info("Brain Memory API started")
        yield
        logger.info("Brain Memory API shutdown complete")

    app = FastAPI(
        title="Brain Memory API",
        description="Tiered pattern memory for AI assistants",
        version=__version__,
        lifespan=lifespan,
    )
    if context is None:
        # Request tracing only for the real service
        logfire.instrument_fastapi(app)

    install_error_handlers(app)
    app.include_router(router)
    return app


def main() -> None:
    """Development server entry point."""
    settings = load_settings()
    uvicorn.run(
        "brain_memory.main:create_app",
        factory=True,
        host=settings.http_host,
        port=settings.http_port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
