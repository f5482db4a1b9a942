"""Consolidation request and report models."""

from enum import Enum

from pydantic import BaseModel, Field

from .base import PromotionType


class ConsolidateRequest(BaseModel):
    dry_run: bool = True
    promotion_type: PromotionType = PromotionType.EPISODIC_TO_SEMANTIC
    min_evidence: int | None = Field(default=None, ge=0, description="Defaults to the configured episodic gate (5)")


class Candidate(BaseModel):
    pattern_id: str
    category: str | None
    content: str = Field(description="Truncated preview of the pattern content")
    evidence_count: int
    confidence: float | None


class CanonicalCandidate(Candidate):
    ready_for_export: bool = True


class PromotionStatus(str, Enum):
    PROMOTED = "promoted"
    ALREADY_PROMOTED = "already_promoted"
    FAILED = "failed"


class PromotionOutcome(BaseModel):
    pattern_id: str
    status: PromotionStatus
    promoted_pattern_id: str | None = None
    error: str | None = None


class EpisodicPhaseReport(BaseModel):
    candidates: list[Candidate] = Field(default_factory=list)
    promoted: int = 0
    failed: int = 0
    outcomes: list[PromotionOutcome] = Field(default_factory=list)


class CanonicalPhaseReport(BaseModel):
    candidates: list[CanonicalCandidate] = Field(default_factory=list)
    graduated: int = 0


class ConsolidationSummary(BaseModel):
    episodic_candidates: int
    episodic_promoted: int
    episodic_failed: int
    canonical_candidates: int
    note: str = "Canonical graduation to knowledge/ requires manual review and markdown export"


class ConsolidationReport(BaseModel):
    dry_run: bool
    promotion_type: PromotionType
    episodic_to_semantic: EpisodicPhaseReport
    semantic_to_canonical: CanonicalPhaseReport
    summary: ConsolidationSummary
