"""Configuration management.

Two layers:

* ``Settings`` holds connection details read from the environment / ``.env``.
* ``MemoryConfig`` holds the retention and promotion policy. It is frozen and
  not read from the environment; the defaults below are the documented policy
  and the object is passed explicitly into the services that need it.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from brain_memory.domain.models.base import MemoryType

EPISODIC_TTL_SECONDS = 90 * 24 * 60 * 60


class CollisionPolicy(str, Enum):
    """What to do when a different pattern already owns a derived key."""

    DISAMBIGUATE = "disambiguate"
    REJECT = "reject"


class MemoryConfig(BaseModel):
    """Tier table, promotion thresholds and decay parameters."""

    model_config = ConfigDict(frozen=True)

    tier_ttls: dict[MemoryType, int | None] = Field(
        default_factory=lambda: {
            MemoryType.SEMANTIC: None,
            MemoryType.EPISODIC: EPISODIC_TTL_SECONDS,
            MemoryType.PROCEDURAL: None,
        },
        description="Expiry in seconds per tier; None means the pattern never expires",
    )

    # Promotion gates
    episodic_to_semantic_min_evidence: int = Field(default=5, ge=0)
    canonical_min_evidence: int = Field(default=20, ge=0)
    canonical_min_confidence: float = Field(default=0.95, ge=0.0, le=1.0)

    # Confidence decay: confidence * decay_rate ** (elapsed / decay_period_days)
    decay_rate: float = Field(default=0.95, gt=0.0, le=1.0)
    decay_period_days: float = Field(default=30.0, gt=0.0)

    # Identity
    digest_modulus: int = Field(default=100_000_000, gt=0)
    collision_policy: CollisionPolicy = CollisionPolicy.DISAMBIGUATE
    max_disambiguation: int = Field(default=16, ge=1)

    # Consolidation
    enumeration_limit: int = Field(default=1000, gt=0)
    preview_length: int = Field(default=100, gt=0)

    def ttl_for(self, memory_type: MemoryType) -> int | None:
        """Resolve the expiry for a tier."""
        return self.tier_ttls.get(memory_type)


class Settings(BaseSettings):
    # Key-value store / vector index
    redis_url: str = "redis://localhost:6379/0"
    index_name: str = "pattern_index"
    key_prefix: str = "pattern:"
    reminder_prefix: str = "reminder:"

    # Embeddings
    voyage_api_key: str = ""
    voyage_model: str = "voyage-3"

    # Observability
    logfire_token: str | None = None
    log_level: str = "INFO"

    # HTTP transport
    http_host: str = "0.0.0.0"
    http_port: int = 8000

    debug: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",  # Ignore extra fields in .env file
    )


def load_settings() -> Settings:
    """Read settings from the environment. Called once per process at startup."""
    return Settings()
