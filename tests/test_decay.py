from datetime import UTC, datetime, timedelta

import pytest

from brain_memory.domain.decay import decay

NOW = datetime(2025, 6, 1, tzinfo=UTC)


def test_no_elapsed_time_keeps_confidence():
    assert decay(0.8, NOW, now=NOW) == pytest.approx(0.8)


def test_one_period_applies_rate_once():
    assert decay(1.0, NOW - timedelta(days=30), now=NOW) == pytest.approx(0.95)


def test_ninety_days():
    assert decay(0.9, NOW - timedelta(days=90), now=NOW) == pytest.approx(0.9 * 0.95**3)


def test_partial_period_is_continuous():
    assert decay(1.0, NOW - timedelta(days=15), now=NOW) == pytest.approx(0.95**0.5)


def test_missing_last_validated_returns_original():
    assert decay(0.7, None, now=NOW) == 0.7
    assert decay(0.7, "", now=NOW) == 0.7


def test_accepts_iso_strings():
    validated = (NOW - timedelta(days=60)).isoformat()
    assert decay(1.0, validated, now=NOW) == pytest.approx(0.95**2)


def test_z_suffix_timestamps():
    assert decay(1.0, "2025-05-02T00:00:00Z", now=NOW) == pytest.approx(0.95)


def test_result_is_clamped():
    # A validation timestamp in the future would otherwise grow the confidence
    assert decay(0.99, NOW + timedelta(days=300), now=NOW) == 1.0


def test_custom_rate_and_period():
    result = decay(1.0, NOW - timedelta(days=7), now=NOW, rate=0.5, period=timedelta(days=7))
    assert result == pytest.approx(0.5)


def test_monotonically_non_increasing():
    values = [decay(0.9, NOW - timedelta(days=d), now=NOW) for d in range(0, 400, 20)]
    assert values == sorted(values, reverse=True)
