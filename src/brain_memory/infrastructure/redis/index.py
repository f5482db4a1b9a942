"""RediSearch schema, query construction and reply parsing for the pattern index.

Commands are issued as raw ``FT.*`` calls so that the reply shape is the plain
RESP2 list regardless of the redis-py version:

    [total, key_1, [field, value, ...], key_2, [field, value, ...], ...]
"""

import json
from typing import Any

from redis import exceptions as redis_exceptions

from brain_memory.core.logging import get_logger
from brain_memory.domain.models import Category, MemoryType, PatternRecord

logger = get_logger(__name__)

RETURN_FIELDS = ("category", "memory_type", "content", "metadata")
SCORE_FIELD = "score"
VECTOR_FIELD = "embedding"
QUERY_VECTOR_PARAM = "vec"


def create_index_command(index_name: str, prefix: str, dimensions: int) -> list[Any]:
    """FT.CREATE arguments for the pattern index."""
    return [
        "FT.CREATE", index_name,
        "ON", "HASH",
        "PREFIX", "1", prefix,
        "SCHEMA",
        "category", "TAG",
        "memory_type", "TAG",
        "content", "TEXT",
        "metadata", "TEXT",
        VECTOR_FIELD, "VECTOR", "HNSW", "6",
        "TYPE", "FLOAT32",
        "DIM", str(dimensions),
        "DISTANCE_METRIC", "COSINE",
    ]


def build_filter(category: Category | None = None, memory_type: MemoryType | None = None) -> str:
    """Conjoin the supplied tag constraints; ``*`` when there are none."""
    clauses = []
    if category is not None:
        clauses.append(f"@category:{{{category.value}}}")
    if memory_type is not None:
        clauses.append(f"@memory_type:{{{memory_type.value}}}")
    if not clauses:
        return "*"
    return f"({' '.join(clauses)})"


def knn_search_command(index_name: str, filter_expr: str, k: int, query_vector: bytes) -> list[Any]:
    """FT.SEARCH arguments for a filtered k-nearest-neighbour query."""
    return [
        "FT.SEARCH", index_name,
        f"{filter_expr}=>[KNN {k} @{VECTOR_FIELD} ${QUERY_VECTOR_PARAM} AS {SCORE_FIELD}]",
        "PARAMS", "2", QUERY_VECTOR_PARAM, query_vector,
        "RETURN", str(len(RETURN_FIELDS) + 1), *RETURN_FIELDS, SCORE_FIELD,
        "SORTBY", SCORE_FIELD,
        "LIMIT", "0", str(k),
        "DIALECT", "2",
    ]


def filter_search_command(index_name: str, filter_expr: str, limit: int) -> list[Any]:
    """FT.SEARCH arguments for enumerating patterns by tag filter alone."""
    return [
        "FT.SEARCH", index_name,
        filter_expr,
        "RETURN", str(len(RETURN_FIELDS)), *RETURN_FIELDS,
        "LIMIT", "0", str(limit),
        "DIALECT", "2",
    ]


def _text(value: Any) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def decode_metadata(raw: str | None, pattern_id: str) -> dict[str, Any]:
    """Decode the JSON metadata field of a stored pattern."""
    if not raw:
        return {}
    try:
        metadata = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning(f"Pattern {pattern_id} has undecodable metadata; returning it empty")
        return {}
    return metadata if isinstance(metadata, dict) else {}


def record_from_fields(pattern_id: str, fields: dict[str, str]) -> PatternRecord:
    score = fields.get(SCORE_FIELD)
    return PatternRecord(
        pattern_id=pattern_id,
        category=fields.get("category"),
        memory_type=fields.get("memory_type"),
        content=fields.get("content", ""),
        metadata=decode_metadata(fields.get("metadata"), pattern_id),
        score=float(score) if score is not None else None,
    )


def parse_search_reply(reply: list[Any]) -> list[PatternRecord]:
    """Turn a raw FT.SEARCH reply into pattern records, preserving order."""
    records: list[PatternRecord] = []
    if not reply:
        return records

    for i in range(1, len(reply) - 1, 2):
        pattern_id = _text(reply[i])
        raw_fields = reply[i + 1] or []
        fields = {
            _text(raw_fields[j]): _text(raw_fields[j + 1])
            for j in range(0, len(raw_fields) - 1, 2)
        }
        records.append(record_from_fields(pattern_id, fields))
    return records


def decode_hash(raw: dict[Any, Any]) -> dict[str, str]:
    """Decode an HGETALL reply, skipping the binary vector field."""
    return {
        _text(key): _text(value)
        for key, value in raw.items()
        if _text(key) != VECTOR_FIELD
    }


def is_missing_index_error(error: Exception) -> bool:
    if not isinstance(error, redis_exceptions.ResponseError):
        return False
    message = str(error).lower()
    return "no such index" in message or "unknown index name" in message


def is_index_exists_error(error: Exception) -> bool:
    return isinstance(error, redis_exceptions.ResponseError) and "index already exists" in str(error).lower()
