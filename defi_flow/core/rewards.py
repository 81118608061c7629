"""Liquidity-provider reward issuance.

Rewards are proportional to deposit size only: no time weighting, no vesting.
A duration-weighted model would be a separate policy with its own version id
rather than a change to this one's output.
"""

from __future__ import annotations

from ..state.pool_config import REWARD_MULTIPLIER
from .math import mul_div_floor, require_u64

REWARD_DENOM = 1_000
REWARD_POLICY_VERSION = "proportional-v1"


def compute_reward(amount_a: int, amount_b: int, reward_multiplier: int = REWARD_MULTIPLIER) -> int:
    """``floor((amount_a + amount_b) * reward_multiplier / 1000)``.

    The sum and product are widened; ``Overflow`` is raised only when the final
    reward itself does not fit u64.
    """
    require_u64("amount_a", amount_a)
    require_u64("amount_b", amount_b)
    require_u64("reward_multiplier", reward_multiplier)
    return mul_div_floor(amount_a + amount_b, reward_multiplier, REWARD_DENOM, name="reward")
