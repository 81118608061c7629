"""
Fee policy kernels (deterministic, integer-only).

- ``compute_fee`` charges ``floor(amount * fee_bps / 10_000)`` on a trade.
- ``select_fee_tier`` maps an external volatility signal to a fee tier.

Both are pure; persisting a newly selected tier is the pool engine's job.
"""

from __future__ import annotations

from ..errors import InvalidParameter
from ..state.pool_config import (
    BPS_DENOM,
    FEE_BASIS_POINTS_DEFAULT,
    MAX_FEE_BASIS_POINTS,
    FeeTierPolicy,
)
from .math import mul_div_floor, require_u64

__all__ = [
    "BPS_DENOM",
    "FEE_BASIS_POINTS_DEFAULT",
    "MAX_FEE_BASIS_POINTS",
    "compute_fee",
    "select_fee_tier",
]

DEFAULT_FEE_TIERS = FeeTierPolicy()


def compute_fee(amount: int, fee_basis_points: int) -> int:
    """
    Compute ``fee = floor(amount * fee_basis_points / 10_000)``.

    The product is formed on unbounded ints, so ``amount`` may be anywhere in
    the u64 domain. The result never exceeds ``amount`` because the fee is
    capped at ``MAX_FEE_BASIS_POINTS``.

    Raises:
        InvalidParameter: amount outside u64, or fee_basis_points outside
            ``[0, MAX_FEE_BASIS_POINTS]``.
    """
    require_u64("amount", amount)
    require_u64("fee_basis_points", fee_basis_points)
    if fee_basis_points > MAX_FEE_BASIS_POINTS:
        raise InvalidParameter(
            f"fee_basis_points must be <= {MAX_FEE_BASIS_POINTS}: {fee_basis_points}"
        )
    if fee_basis_points == 0:
        return 0
    return mul_div_floor(amount, fee_basis_points, BPS_DENOM, name="fee")


def select_fee_tier(market_volatility: int, policy: FeeTierPolicy = DEFAULT_FEE_TIERS) -> int:
    """Return the fee tier for a volatility reading.

    The threshold is exclusive: only volatility strictly above it selects the
    high tier.
    """
    require_u64("market_volatility", market_volatility)
    if market_volatility > policy.volatility_threshold:
        return policy.high_fee_bps
    return policy.low_fee_bps
