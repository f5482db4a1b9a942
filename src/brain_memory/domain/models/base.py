from enum import Enum


class MemoryType(str, Enum):
    """Retention tiers."""

    SEMANTIC = "semantic"  # facts and knowledge, permanent
    EPISODIC = "episodic"  # interaction histories, expire unless promoted
    PROCEDURAL = "procedural"  # behavioural rules, permanent


class Category(str, Enum):
    """Recognized pattern categories. Used for filtering only."""

    SOLUTION = "solution"
    FAILURE = "failure"
    PREFERENCE = "preference"
    REMINDER = "reminder"
    PATTERN = "pattern"


class Priority(str, Enum):
    CRITICAL = "critical"
    IMPORTANT = "important"
    INFO = "info"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {Priority.CRITICAL: 0, Priority.IMPORTANT: 1, Priority.INFO: 2}


class PromotionType(str, Enum):
    EPISODIC_TO_SEMANTIC = "episodic_to_semantic"
    SEMANTIC_TO_CANONICAL = "semantic_to_canonical"
    BOTH = "both"

    @property
    def includes_episodic(self) -> bool:
        return self in (PromotionType.EPISODIC_TO_SEMANTIC, PromotionType.BOTH)

    @property
    def includes_canonical(self) -> bool:
        return self in (PromotionType.SEMANTIC_TO_CANONICAL, PromotionType.BOTH)
