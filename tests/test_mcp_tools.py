import json

import mcp.types as types
import pytest

from brain_memory.core.base import ErrorCode
from brain_memory.mcp.stdio_server import create_mcp_server
from brain_memory.mcp.tools import TOOLS, ToolDispatcher
from brain_memory.services.context import MemoryContext
from tests.conftest import FakeEmbeddingService, metadata


@pytest.fixture
def dispatcher(context):
    return ToolDispatcher(context)


def test_catalogue_lists_all_tools(dispatcher):
    names = {tool.name for tool in dispatcher.list_tools()}

    assert names == {
        "store_pattern",
        "search_patterns",
        "set_reminder",
        "check_reminders",
        "consolidate_memories",
        "health_check",
    }


def test_store_schema_requires_content():
    schema = TOOLS["store_pattern"].input_schema()

    assert "content" in schema["required"]
    assert "category" in schema["required"]


async def test_store_then_search(dispatcher):
    stored, is_error = await dispatcher.call(
        "store_pattern",
        {"category": "solution", "content": "Cache node_modules in CI", "metadata": metadata()},
    )
    assert not is_error
    assert stored["status"] == "stored"
    assert stored["ttl_seconds"] is None

    found, is_error = await dispatcher.call("search_patterns", {"query": "Cache node_modules in CI", "k": 1})
    assert not is_error
    assert found["results"][0]["pattern_id"] == stored["pattern_id"]
    json.dumps(found)


async def test_invalid_arguments_fail_before_any_external_call(dispatcher, embeddings, store):
    payload, is_error = await dispatcher.call("store_pattern", {"category": "solution", "content": "x"})

    assert is_error
    assert payload["error_code"] == ErrorCode.INVALID_INPUT.value
    assert "metadata" in payload["error"]
    assert embeddings.calls == []
    assert store.writes == []


async def test_unknown_tool(dispatcher):
    payload, is_error = await dispatcher.call("forget_everything", {})

    assert is_error
    assert payload["error_code"] == ErrorCode.INVALID_INPUT.value
    assert payload["details"]["field"] == "name"


async def test_service_failures_become_payloads(store, config, clock):
    dispatcher = ToolDispatcher(MemoryContext(store, FakeEmbeddingService(fail=True), config, clock=clock))

    payload, is_error = await dispatcher.call("search_patterns", {"query": "anything"})

    assert is_error
    assert payload["error_code"] == ErrorCode.EMBEDDING_FAILED.value
    assert payload["trace_id"]
    json.dumps(payload)


async def test_reminder_tools(dispatcher):
    await dispatcher.call("set_reminder", {"task_type": "deploy", "reminder": "tag the release", "priority": "critical"})

    payload, is_error = await dispatcher.call("check_reminders", {"task_type": "deploy"})

    assert not is_error
    assert payload["count"] == 1
    assert payload["reminders"][0]["priority"] == "critical"


async def test_consolidate_defaults_to_dry_run(dispatcher):
    payload, is_error = await dispatcher.call("consolidate_memories", None)

    assert not is_error
    assert payload["dry_run"] is True
    assert payload["promotion_type"] == "episodic_to_semantic"


async def test_health_tool_takes_no_arguments(dispatcher):
    payload, is_error = await dispatcher.call("health_check", {})

    assert not is_error
    assert payload["status"] == "healthy"


def test_server_registers_handlers(context):
    server = create_mcp_server(context)

    assert types.ListToolsRequest in server.request_handlers
    assert types.CallToolRequest in server.request_handlers


async def call_through_server(context, name, arguments):
    server = create_mcp_server(context)
    handler = server.request_handlers[types.CallToolRequest]
    result = await handler(
        types.CallToolRequest(
            method="tools/call",
            params=types.CallToolRequestParams(name=name, arguments=arguments),
        )
    )
    return result.root


async def test_server_flags_failed_calls(store, config, clock):
    context = MemoryContext(store, FakeEmbeddingService(fail=True), config, clock=clock)

    result = await call_through_server(context, "search_patterns", {"query": "anything"})

    assert result.isError is True
    payload = json.loads(result.content[0].text)
    assert payload["error_code"] == ErrorCode.EMBEDDING_FAILED.value


async def test_server_returns_successful_payloads(context):
    result = await call_through_server(context, "health_check", {})

    assert not result.isError
    assert json.loads(result.content[0].text)["status"] == "healthy"
