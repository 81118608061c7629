"""Impermanent-loss detection.

Advisory only: ``evaluate_mitigation`` reports whether rebalancing is
recommended and never moves funds.
"""

from __future__ import annotations

from dataclasses import dataclass

from .math import require_u64
from .oracle import OraclePolicy, PriceSample, require_usable_sample


@dataclass(frozen=True)
class MitigationSignal:
    rebalance_recommended: bool
    price: int
    price_threshold: int
    reserve_a: int
    reserve_b: int
    publish_time: int


def evaluate_mitigation(
    price_threshold: int,
    *,
    sample: PriceSample | None,
    reserves: tuple[int, int],
    current_timestamp: int,
    policy: OraclePolicy = OraclePolicy(),
) -> MitigationSignal:
    """Compare a usable oracle price against *price_threshold*.

    Rebalancing is recommended when the price is strictly above the threshold.
    """
    require_u64("price_threshold", price_threshold)
    usable = require_usable_sample(sample, policy, current_timestamp)
    reserve_a, reserve_b = reserves
    return MitigationSignal(
        rebalance_recommended=usable.price > price_threshold,
        price=usable.price,
        price_threshold=price_threshold,
        reserve_a=reserve_a,
        reserve_b=reserve_b,
        publish_time=usable.publish_time,
    )
