"""Scoped Redis connections.

Every store operation opens its own client and releases it on exit, success
or failure. Connectivity failures are surfaced as ``StorageError`` and never
retried.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from redis import exceptions as redis_exceptions
from redis.asyncio import Redis

from brain_memory.core.base import ErrorCode, StorageErrorDetails
from brain_memory.core.errors import StorageError
from brain_memory.core.logging import get_logger

logger = get_logger(__name__)


def _masked(url: str) -> str:
    """Hide credentials in a redis URL for logging."""
    if "@" not in url:
        return url
    scheme, _, rest = url.partition("://")
    return f"{scheme}://***@{rest.split('@', 1)[1]}"


class RedisConnectionFactory:
    """Creates one short-lived client per call."""

    def __init__(self, url: str, socket_timeout: float | None = 10.0) -> None:
        self.url = url
        self.socket_timeout = socket_timeout

    @property
    def masked_url(self) -> str:
        return _masked(self.url)

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[Redis]:
        """Yield a connected client; always closed on exit."""
        client = Redis.from_url(
            self.url,
            decode_responses=False,  # the embedding field is binary
            socket_timeout=self.socket_timeout,
        )
        try:
            yield client
        except (redis_exceptions.ConnectionError, redis_exceptions.TimeoutError) as e:
            raise StorageError(
                message=f"Key-value store unreachable: {e!s}",
                details=StorageErrorDetails(
                    source="RedisConnectionFactory",
                    operation="connection",
                    service_name="redis",
                    endpoint=self.masked_url,
                ),
                code=ErrorCode.STORAGE_CONNECTION,
            ) from e
        finally:
            await client.aclose()
