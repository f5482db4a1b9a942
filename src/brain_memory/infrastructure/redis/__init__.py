"""Redis key-value store and RediSearch vector index adapter."""

from .connection import RedisConnectionFactory
from .store import RedisPatternStore

__all__ = ["RedisConnectionFactory", "RedisPatternStore"]
