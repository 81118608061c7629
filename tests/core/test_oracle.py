"""Tests for oracle sample checks and impermanent-loss detection."""

from __future__ import annotations

import pytest

from defi_flow.core.oracle import OraclePolicy, PriceSample, is_fresh, require_usable_sample
from defi_flow.core.risk import evaluate_mitigation
from defi_flow.errors import InvalidParameter, OracleUnavailable

POLICY = OraclePolicy(max_staleness_seconds=60, max_confidence_bps=200)
NOW = 1_000


def _sample(price: int = 2_500, confidence: int = 10, publish_time: int = 990) -> PriceSample:
    return PriceSample(price=price, confidence=confidence, publish_time=publish_time)


# ---------------------------------------------------------------------------
# Freshness
# ---------------------------------------------------------------------------

def test_fresh_within_window() -> None:
    assert is_fresh(_sample(publish_time=990), POLICY, NOW) is True


def test_fresh_exact_boundary() -> None:
    assert is_fresh(_sample(publish_time=940), POLICY, NOW) is True


def test_stale_one_past_boundary() -> None:
    assert is_fresh(_sample(publish_time=939), POLICY, NOW) is False


def test_future_sample_is_not_fresh() -> None:
    assert is_fresh(_sample(publish_time=NOW + 1), POLICY, NOW) is False


def test_policy_rejects_non_positive_staleness() -> None:
    with pytest.raises(InvalidParameter):
        OraclePolicy(max_staleness_seconds=0)


# ---------------------------------------------------------------------------
# require_usable_sample
# ---------------------------------------------------------------------------

def test_usable_sample_passes_through() -> None:
    s = _sample()
    assert require_usable_sample(s, POLICY, NOW) is s


@pytest.mark.parametrize(
    "sample",
    [
        None,
        _sample(price=0),
        _sample(price=-5),
        _sample(confidence=-1),
        _sample(publish_time=939),
        _sample(publish_time=NOW + 5),
        # 100 / 2_500 = 4% > 2%
        _sample(confidence=100),
    ],
)
def test_unusable_samples_raise(sample) -> None:
    with pytest.raises(OracleUnavailable):
        require_usable_sample(sample, POLICY, NOW)


def test_malformed_object_is_unavailable() -> None:
    with pytest.raises(OracleUnavailable):
        require_usable_sample({"price": 1}, POLICY, NOW)  # type: ignore[arg-type]


def test_confidence_at_bound_is_accepted() -> None:
    # 50 / 2_500 = 2%
    require_usable_sample(_sample(confidence=50), POLICY, NOW)


# ---------------------------------------------------------------------------
# evaluate_mitigation
# ---------------------------------------------------------------------------

def test_price_above_threshold_recommends_rebalance() -> None:
    signal = evaluate_mitigation(2_000, sample=_sample(), reserves=(10, 20), current_timestamp=NOW, policy=POLICY)
    assert signal.rebalance_recommended is True
    assert signal.price == 2_500
    assert (signal.reserve_a, signal.reserve_b) == (10, 20)


def test_price_at_threshold_is_quiet() -> None:
    signal = evaluate_mitigation(2_500, sample=_sample(), reserves=(10, 20), current_timestamp=NOW, policy=POLICY)
    assert signal.rebalance_recommended is False


def test_missing_sample_is_never_price_zero() -> None:
    with pytest.raises(OracleUnavailable):
        evaluate_mitigation(0, sample=None, reserves=(1, 1), current_timestamp=NOW, policy=POLICY)
