"""Consolidation: promoting patterns between retention tiers.

Two independent phases, selected by ``promotion_type``:

* episodic -> semantic: episodic patterns with enough evidence are copied into
  the semantic tier. Each copy is an independent command; a failure is recorded
  against its candidate and the batch carries on. The episodic source is never
  touched and keeps aging toward expiry.
* semantic -> canonical: semantic patterns passing the fixed evidence and
  confidence gates are reported as ready for manual export. Nothing is written.

A dry run computes exactly the same candidate lists and writes nothing.
"""

from __future__ import annotations

from typing import Any

from brain_memory.core.base import ErrorLevel
from brain_memory.core.config import MemoryConfig
from brain_memory.core.decorators import with_error_handling
from brain_memory.core.logging import get_logger
from brain_memory.domain.models import (
    CanonicalCandidate,
    CanonicalPhaseReport,
    Candidate,
    Category,
    ConsolidateRequest,
    ConsolidationReport,
    ConsolidationSummary,
    EpisodicPhaseReport,
    MemoryType,
    PatternMetadata,
    PatternRecord,
    PromotionOutcome,
    PromotionStatus,
    SearchPatternsRequest,
    StorePatternRequest,
)
from brain_memory.services.pattern_service import WILDCARD_QUERY, PatternService

logger = get_logger(__name__)


def _number(value: Any, default: float | None = 0) -> float | None:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return default
    return value


def preview(content: str, length: int) -> str:
    """Truncate content for candidate listings."""
    if len(content) <= length:
        return content
    return content[:length] + "..."


class ConsolidationEngine:
    """Selects promotion candidates and, outside dry runs, commits promotions."""

    def __init__(self, patterns: PatternService, config: MemoryConfig):
        self.patterns = patterns
        self.config = config

    async def _enumerate(self, memory_type: MemoryType) -> list[PatternRecord]:
        result = await self.patterns.search_patterns(
            SearchPatternsRequest(
                query=WILDCARD_QUERY,
                k=self.config.enumeration_limit,
                memory_type=memory_type,
            )
        )
        if result.count >= self.config.enumeration_limit:
            logger.warning(
                f"Enumeration of {memory_type.value} patterns hit the cap of {self.config.enumeration_limit}"
            )
        return result.results

    def _candidate_fields(self, record: PatternRecord) -> dict[str, Any]:
        return {
            "pattern_id": record.pattern_id,
            "category": record.category,
            "content": preview(record.content, self.config.preview_length),
            "evidence_count": int(_number(record.metadata.get("evidence_count")) or 0),
            "confidence": _number(record.metadata.get("confidence"), default=None),
        }

    async def episodic_candidates(self, min_evidence: int) -> list[tuple[PatternRecord, Candidate]]:
        records = await self._enumerate(MemoryType.EPISODIC)
        return [
            (record, Candidate(**self._candidate_fields(record)))
            for record in records
            if (_number(record.metadata.get("evidence_count")) or 0) >= min_evidence
        ]

    async def canonical_records(self) -> list[tuple[PatternRecord, CanonicalCandidate]]:
        """Semantic patterns passing both canonical gates, with their full records."""
        records = await self._enumerate(MemoryType.SEMANTIC)
        return [
            (record, CanonicalCandidate(**self._candidate_fields(record)))
            for record in records
            if (_number(record.metadata.get("evidence_count")) or 0) >= self.config.canonical_min_evidence
            and (_number(record.metadata.get("confidence")) or 0) >= self.config.canonical_min_confidence
        ]

    async def canonical_candidates(self) -> list[CanonicalCandidate]:
        return [candidate for _, candidate in await self.canonical_records()]

    async def promote(self, record: PatternRecord) -> PromotionOutcome:
        """Copy one episodic pattern into the semantic tier.

        Every failure is captured in the returned outcome rather than raised.
        """
        try:
            category = Category(record.category)
            target_key, existing = await self.patterns.locate(MemoryType.SEMANTIC, category, record.content)
            if existing is not None and existing.metadata.get("original_pattern_id") == record.pattern_id:
                return PromotionOutcome(
                    pattern_id=record.pattern_id,
                    status=PromotionStatus.ALREADY_PROMOTED,
                    promoted_pattern_id=target_key,
                )

            metadata = PatternMetadata.model_validate(
                {
                    **record.metadata,
                    "promoted_from": MemoryType.EPISODIC,
                    "promoted_at": self.patterns.clock().isoformat(),
                    "original_pattern_id": record.pattern_id,
                }
            )
            stored = await self.patterns.store_pattern(
                StorePatternRequest(
                    category=category,
                    memory_type=MemoryType.SEMANTIC,
                    content=record.content,
                    metadata=metadata,
                )
            )
        except Exception as e:
            logger.warning(f"Promotion of {record.pattern_id} failed: {e!s}")
            return PromotionOutcome(pattern_id=record.pattern_id, status=PromotionStatus.FAILED, error=str(e))

        return PromotionOutcome(
            pattern_id=record.pattern_id,
            status=PromotionStatus.PROMOTED,
            promoted_pattern_id=stored.pattern_id,
        )

    async def _episodic_phase(self, dry_run: bool, min_evidence: int) -> EpisodicPhaseReport:
        selected = await self.episodic_candidates(min_evidence)
        report = EpisodicPhaseReport(candidates=[candidate for _, candidate in selected])
        if dry_run:
            return report

        for record, _ in selected:
            outcome = await self.promote(record)
            report.outcomes.append(outcome)
            if outcome.status == PromotionStatus.PROMOTED:
                report.promoted += 1
            elif outcome.status == PromotionStatus.FAILED:
                report.failed += 1
        return report

    async def _canonical_phase(self, dry_run: bool) -> CanonicalPhaseReport:
        report = CanonicalPhaseReport(candidates=await self.canonical_candidates())
        # Graduation itself is a manual export; this only counts what was identified
        if not dry_run:
            report.graduated = len(report.candidates)
        return report

    @with_error_handling(error_level=ErrorLevel.ERROR, reraise=True)
    async def consolidate(self, request: ConsolidateRequest) -> ConsolidationReport:
        """Run the requested phases and build the report."""
        min_evidence = request.min_evidence
        if min_evidence is None:
            min_evidence = self.config.episodic_to_semantic_min_evidence
        logger.info(
            "Consolidation started",
            dry_run=request.dry_run,
            promotion_type=request.promotion_type.value,
            min_evidence=min_evidence,
        )

        # Canonical candidates are selected before any promotion writes to the semantic tier
        canonical = CanonicalPhaseReport()
        if request.promotion_type.includes_canonical:
            canonical = await self._canonical_phase(request.dry_run)

        episodic = EpisodicPhaseReport()
        if request.promotion_type.includes_episodic:
            episodic = await self._episodic_phase(request.dry_run, min_evidence)

        summary = ConsolidationSummary(
            episodic_candidates=len(episodic.candidates),
            episodic_promoted=episodic.promoted,
            episodic_failed=episodic.failed,
            canonical_candidates=len(canonical.candidates),
        )
        logger.info("Consolidation finished", **summary.model_dump(exclude={"note"}))

        return ConsolidationReport(
            dry_run=request.dry_run,
            promotion_type=request.promotion_type,
            episodic_to_semantic=episodic,
            semantic_to_canonical=canonical,
            summary=summary,
        )
