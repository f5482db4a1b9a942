"""Tool catalogue and dispatch shared by the transports.

Every tool call is validated against its request model before any external
call is made. Any error is turned into a structured failure payload at this
boundary instead of propagating to the transport.
"""

import json
from collections.abc import Awaitable, Callable
from typing import Any

import mcp.types as types
from pydantic import BaseModel

from brain_memory.core.base import ValidationErrorDetails
from brain_memory.core.errors import ValidationError
from brain_memory.core.handlers import ErrorHandler
from brain_memory.core.logging import clear_log_context, get_logger, info, set_log_context, update_log_context
from brain_memory.domain.models import (
    CheckRemindersRequest,
    ConsolidateRequest,
    SearchPatternsRequest,
    SetReminderRequest,
    StorePatternRequest,
)
from brain_memory.services.context import MemoryContext

logger = get_logger(__name__)


class ToolCallFailed(Exception):
    """Raised by the MCP handler so the server marks the result with isError.

    The message is the JSON failure payload, which becomes the text content.
    """

    def __init__(self, payload: dict[str, Any]):
        self.payload = payload
        super().__init__(json.dumps(payload))


class ToolSpec:
    def __init__(
        self,
        name: str,
        description: str,
        request_model: type[BaseModel] | None,
        handler: Callable[[MemoryContext, Any], Awaitable[BaseModel]],
    ):
        self.name = name
        self.description = description
        self.request_model = request_model
        self.handler = handler

    def input_schema(self) -> dict[str, Any]:
        if self.request_model is None:
            return {"type": "object", "properties": {}}
        return self.request_model.model_json_schema()


TOOLS: dict[str, ToolSpec] = {
    spec.name: spec
    for spec in (
        ToolSpec(
            "store_pattern",
            "Store learned pattern with semantic embedding for future recall. "
            "memory_type: semantic (facts, persist forever), episodic (interactions, 90-day TTL), "
            "procedural (workflows, persist forever)",
            StorePatternRequest,
            lambda ctx, req: ctx.patterns.store_pattern(req),
        ),
        ToolSpec(
            "search_patterns",
            "Search for similar patterns using semantic similarity; confidence is decayed by time "
            "since last validation",
            SearchPatternsRequest,
            lambda ctx, req: ctx.patterns.search_patterns(req),
        ),
        ToolSpec(
            "set_reminder",
            "Set reminder for specific task type (surfaces before task execution)",
            SetReminderRequest,
            lambda ctx, req: ctx.reminders.set_reminder(req),
        ),
        ToolSpec(
            "check_reminders",
            "Get all reminders for a specific task type, most urgent first",
            CheckRemindersRequest,
            lambda ctx, req: ctx.reminders.check_reminders(req),
        ),
        ToolSpec(
            "consolidate_memories",
            "Identify and promote patterns ready for consolidation (episodic -> semantic) and list "
            "semantic patterns ready for canonical export. dry_run previews without writing",
            ConsolidateRequest,
            lambda ctx, req: ctx.consolidation.consolidate(req),
        ),
        ToolSpec(
            "health_check",
            "Check key-value store, embedding service and vector index",
            None,
            lambda ctx, _req: ctx.health.health_check(),
        ),
    )
}


class ToolDispatcher:
    """Routes tool calls to the services of a MemoryContext."""

    def __init__(self, context: MemoryContext, error_handler: ErrorHandler | None = None):
        self.context = context
        self.error_handler = error_handler or ErrorHandler()

    def list_tools(self) -> list[types.Tool]:
        return [
            types.Tool(name=spec.name, description=spec.description, inputSchema=spec.input_schema())
            for spec in TOOLS.values()
        ]

    async def call(self, name: str, arguments: dict[str, Any] | None) -> tuple[dict[str, Any], bool]:
        """Run a tool. Returns ``(payload, is_error)``."""
        set_log_context({"tool": name})
        try:
            spec = TOOLS.get(name)
            if spec is None:
                raise ValidationError(
                    message=f"Unknown tool: {name}",
                    details=ValidationErrorDetails(
                        source="ToolDispatcher",
                        operation="call_tool",
                        field="name",
                        actual_value=name,
                        constraint=f"one of {sorted(TOOLS)}",
                    ),
                )

            request = spec.request_model.model_validate(arguments or {}) if spec.request_model else None
            update_log_context("arguments", sorted((arguments or {}).keys()))
            info("Tool call")
            result = await spec.handler(self.context, request)
            return result.model_dump(mode="json"), False
        except Exception as e:
            return self.error_handler.handle(e, operation=name), True
        finally:
            clear_log_context()
