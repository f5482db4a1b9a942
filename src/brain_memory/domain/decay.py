"""Time-based confidence decay.

``current = original * rate ** (elapsed / period)`` with elapsed measured
continuously (a "month" is a fixed 30 days by default), clamped to [0, 1].
The function is pure: stored metadata is never modified.
"""

from datetime import datetime, timedelta

from brain_memory.domain.models.utils import parse_timestamp, utc_now

DEFAULT_DECAY_RATE = 0.95
DEFAULT_DECAY_PERIOD = timedelta(days=30)


def decay(
    confidence_original: float,
    last_validated: datetime | str | None,
    now: datetime | None = None,
    rate: float = DEFAULT_DECAY_RATE,
    period: timedelta = DEFAULT_DECAY_PERIOD,
) -> float:
    """Return the confidence after decay since ``last_validated``."""
    if last_validated is None or last_validated == "":
        return confidence_original

    validated_at = parse_timestamp(last_validated)
    reference = parse_timestamp(now) if now is not None else utc_now()
    periods = (reference - validated_at) / period

    return max(0.0, min(1.0, confidence_original * rate**periods))
