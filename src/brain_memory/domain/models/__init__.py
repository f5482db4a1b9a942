"""Domain models for Brain Memory."""

from .base import Category, MemoryType, Priority, PromotionType
from .consolidation import (
    CanonicalCandidate,
    CanonicalPhaseReport,
    Candidate,
    ConsolidateRequest,
    ConsolidationReport,
    ConsolidationSummary,
    EpisodicPhaseReport,
    PromotionOutcome,
    PromotionStatus,
)
from .health import HealthChecks, HealthReport
from .pattern import (
    COMPUTED_METADATA_FIELDS,
    PatternMetadata,
    PatternRecord,
    SearchFilters,
    SearchPatternsRequest,
    SearchResult,
    StorePatternRequest,
    StoreResult,
)
from .reminder import (
    CheckRemindersRequest,
    ReminderList,
    ReminderRecord,
    SetReminderRequest,
    SetReminderResult,
)

__all__ = [
    "COMPUTED_METADATA_FIELDS",
    "CanonicalCandidate",
    "CanonicalPhaseReport",
    "Candidate",
    "Category",
    "CheckRemindersRequest",
    "ConsolidateRequest",
    "ConsolidationReport",
    "ConsolidationSummary",
    "EpisodicPhaseReport",
    "HealthChecks",
    "HealthReport",
    "MemoryType",
    "PatternMetadata",
    "PatternRecord",
    "Priority",
    "PromotionOutcome",
    "PromotionStatus",
    "PromotionType",
    "ReminderList",
    "ReminderRecord",
    "SearchFilters",
    "SearchPatternsRequest",
    "SearchResult",
    "SetReminderRequest",
    "SetReminderResult",
    "StorePatternRequest",
    "StoreResult",
]
