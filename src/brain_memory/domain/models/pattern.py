"""Pattern domain models."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .base import Category, MemoryType

# Computed at read time by the decay engine and never persisted
COMPUTED_METADATA_FIELDS = frozenset({"confidence_original", "confidence_current"})


class PatternMetadata(BaseModel):
    """Metadata persisted alongside a pattern.

    Unknown keys supplied by callers are kept and round-trip through storage.
    """

    model_config = ConfigDict(extra="allow")

    confidence: float = Field(ge=0.0, le=1.0, description="Original confidence, 0.0-1.0")
    evidence_count: int = Field(ge=0, description="Number of independent validations")
    tags: list[str] = Field(default_factory=list)
    source: str | None = Field(default=None, description="Where the pattern came from")
    validation_contexts: list[str] = Field(default_factory=list)

    created_at: str | None = None
    last_validated: str | None = None

    # Promotion provenance
    promoted_from: MemoryType | None = None
    promoted_at: str | None = None
    original_pattern_id: str | None = None

    @field_validator("tags", "validation_contexts")
    @classmethod
    def dedupe(cls, values: list[str]) -> list[str]:
        return list(dict.fromkeys(values))

    def to_storage(self) -> dict[str, Any]:
        """Serializable dict for the store, without read-time computed fields."""
        data = self.model_dump(mode="json", exclude_none=True)
        for key in COMPUTED_METADATA_FIELDS:
            data.pop(key, None)
        return data


class StorePatternRequest(BaseModel):
    category: Category
    memory_type: MemoryType = MemoryType.SEMANTIC
    content: str = Field(min_length=1)
    metadata: PatternMetadata

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("content must not be blank")
        return value


class StoreResult(BaseModel):
    pattern_id: str
    memory_type: MemoryType
    ttl_seconds: int | None
    status: Literal["stored"] = "stored"


class SearchPatternsRequest(BaseModel):
    query: str = Field(min_length=1)
    k: int = Field(default=5, ge=1, le=10_000)
    category: Category | None = None
    memory_type: MemoryType | None = None


class PatternRecord(BaseModel):
    """A pattern as returned by the vector index (embedding omitted)."""

    pattern_id: str
    category: str | None = None
    memory_type: str | None = None
    content: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)
    score: float | None = None


class SearchFilters(BaseModel):
    category: Category | None = None
    memory_type: MemoryType | None = None


class SearchResult(BaseModel):
    results: list[PatternRecord]
    query: str
    filters: SearchFilters
    count: int
