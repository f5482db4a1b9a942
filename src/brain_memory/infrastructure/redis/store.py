"""Redis-backed pattern and reminder persistence."""

import json
from typing import Any

from redis import exceptions as redis_exceptions
from redis.asyncio import Redis

from brain_memory.core.base import ErrorLevel, StorageErrorDetails
from brain_memory.core.decorators import with_connection, with_error_handling
from brain_memory.core.errors import IndexMissingError, StorageError
from brain_memory.core.logging import get_logger
from brain_memory.domain.models import Category, MemoryType, PatternRecord

from .codec import encode_vector
from .connection import RedisConnectionFactory
from .index import (
    build_filter,
    create_index_command,
    decode_hash,
    filter_search_command,
    is_index_exists_error,
    is_missing_index_error,
    knn_search_command,
    parse_search_reply,
    record_from_fields,
)

logger = get_logger(__name__)


class RedisPatternStore:
    """Pattern hashes, their vector index, and reminder hashes in Redis."""

    def __init__(
        self,
        connections: RedisConnectionFactory,
        index_name: str = "pattern_index",
        key_prefix: str = "pattern:",
        reminder_prefix: str = "reminder:",
        dimensions: int = 1024,
    ) -> None:
        self.connections = connections
        self.index_name = index_name
        self.key_prefix = key_prefix
        self.reminder_prefix = reminder_prefix
        self.dimensions = dimensions

    def _error(self, e: Exception, operation: str, command: str, key: str | None = None) -> StorageError:
        return StorageError(
            message=f"Store command {command} failed: {e!s}",
            details=StorageErrorDetails(
                source="RedisPatternStore",
                operation=operation,
                service_name="redis",
                key=key,
                command=command,
            ),
        )

    # Patterns

    @with_connection()
    async def read_pattern(self, conn: Redis, key: str) -> PatternRecord | None:
        raw = await conn.hgetall(key)
        if not raw:
            return None
        return record_from_fields(key, decode_hash(raw))

    @with_connection()
    async def write_pattern(
        self,
        conn: Redis,
        key: str,
        category: Category,
        memory_type: MemoryType,
        content: str,
        metadata: dict[str, Any],
        embedding: list[float],
        ttl: int | None,
    ) -> None:
        """Write all fields of a pattern and apply the tier expiry when there is one."""
        mapping = {
            "category": category.value,
            "memory_type": memory_type.value,
            "content": content,
            "metadata": json.dumps(metadata),
            "embedding": encode_vector(embedding),
        }
        try:
            async with conn.pipeline(transaction=True) as pipe:
                pipe.hset(key, mapping=mapping)
                if ttl:
                    pipe.expire(key, ttl)
                await pipe.execute()
        except redis_exceptions.ResponseError as e:
            raise self._error(e, "write_pattern", "HSET", key) from e

        logger.debug(f"Wrote {key}", ttl=ttl)

    async def knn_search(
        self,
        vector: list[float],
        k: int,
        category: Category | None = None,
        memory_type: MemoryType | None = None,
    ) -> list[PatternRecord]:
        command = knn_search_command(self.index_name, build_filter(category, memory_type), k, encode_vector(vector))
        return await self._search(command)

    async def filter_search(
        self,
        limit: int,
        category: Category | None = None,
        memory_type: MemoryType | None = None,
    ) -> list[PatternRecord]:
        command = filter_search_command(self.index_name, build_filter(category, memory_type), limit)
        return await self._search(command)

    @with_connection()
    async def _search(self, conn: Redis, command: list[Any]) -> list[PatternRecord]:
        """Run FT.SEARCH, recreating a missing index once before giving up."""
        try:
            reply = await conn.execute_command(*command)
        except redis_exceptions.ResponseError as e:
            if not is_missing_index_error(e):
                raise self._error(e, "search", "FT.SEARCH") from e
            logger.warning(f"Index {self.index_name} missing during search; recreating it")
            await self._create_index(conn)
            try:
                reply = await conn.execute_command(*command)
            except redis_exceptions.ResponseError as retry_error:
                if is_missing_index_error(retry_error):
                    raise IndexMissingError(
                        message=f"Index {self.index_name} is missing and could not be recreated",
                        details={"source": "RedisPatternStore", "operation": "search"},
                    ) from retry_error
                raise self._error(retry_error, "search", "FT.SEARCH") from retry_error
        return parse_search_reply(reply)

    # Index lifecycle

    async def _index_exists(self, conn: Redis) -> bool:
        try:
            await conn.execute_command("FT.INFO", self.index_name)
        except redis_exceptions.ResponseError as e:
            if is_missing_index_error(e):
                return False
            raise self._error(e, "index_exists", "FT.INFO") from e
        return True

    async def _create_index(self, conn: Redis) -> None:
        try:
            await conn.execute_command(*create_index_command(self.index_name, self.key_prefix, self.dimensions))
        except redis_exceptions.ResponseError as e:
            # Another process created it first
            if is_index_exists_error(e):
                return
            raise self._error(e, "create_index", "FT.CREATE") from e
        logger.info(f"Created index {self.index_name}", dimensions=self.dimensions)

    @with_connection()
    async def index_exists(self, conn: Redis) -> bool:
        return await self._index_exists(conn)

    @with_error_handling(error_level=ErrorLevel.CRITICAL, reraise=True)
    @with_connection()
    async def ensure_index(self, conn: Redis) -> bool:
        """Create the index if absent. Returns True when it was created."""
        if await self._index_exists(conn):
            return False
        logger.info(f"Creating {self.index_name}...")
        await self._create_index(conn)
        return True

    # Reminders

    @with_connection()
    async def add_reminder(self, conn: Redis, task_type: str, reminder_id: str, payload: dict[str, Any]) -> None:
        await conn.hset(f"{self.reminder_prefix}{task_type}", reminder_id, json.dumps(payload))

    @with_connection()
    async def list_reminders(self, conn: Redis, task_type: str) -> list[dict[str, Any]]:
        values = await conn.hvals(f"{self.reminder_prefix}{task_type}")
        return [json.loads(value) for value in values]

    # Health

    @with_connection()
    async def ping(self, conn: Redis) -> bool:
        return bool(await conn.ping())
