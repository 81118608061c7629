"""
Constant Product Market Maker (CPMM) pricing for the swap path.

Algorithm Design:
- Type: Fixed-Point Integer Arithmetic / Deterministic Rounding
- Time Complexity: O(1) per quote
- Invariant: (reserve_in + net_in) * (reserve_out - amount_out) >= reserve_in * reserve_out

The fee is charged on the gross input with ``compute_fee`` (floor rounding);
pricing uses the net input only.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import InsufficientBalance, InvalidParameter
from ..state.pool_config import MAX_SLIPPAGE_BASIS_POINTS
from .fees import BPS_DENOM, compute_fee
from .math import mul_div_floor, require_positive_u64, require_u64


@dataclass(frozen=True)
class SwapQuote:
    amount_in: int
    fee: int
    net_in: int
    amount_out: int
    new_reserve_in: int
    new_reserve_out: int


def quote_swap_exact_in(
    reserve_in: int,
    reserve_out: int,
    amount_in: int,
    fee_basis_points: int,
) -> SwapQuote:
    """
    Compute the output of an exact-in swap against live reserves.

        fee        = floor(amount_in * fee_bps / 10_000)
        net_in     = amount_in - fee
        amount_out = floor(reserve_out * net_in / (reserve_in + net_in))

    Post-swap reserves:
        new_reserve_in  = reserve_in + net_in   (the fee goes to the fee vault)
        new_reserve_out = reserve_out - amount_out

    Pure and deterministic: the same inputs always give the same quote.

    Raises:
        InvalidParameter: bad inputs, or a trade too small to produce output
        InsufficientBalance: an empty reserve
    """
    require_u64("reserve_in", reserve_in)
    require_u64("reserve_out", reserve_out)
    require_positive_u64("amount_in", amount_in)
    if reserve_in == 0 or reserve_out == 0:
        raise InsufficientBalance(
            f"cannot swap against an empty reserve: ({reserve_in}, {reserve_out})"
        )

    fee = compute_fee(amount_in, fee_basis_points)
    net_in = amount_in - fee
    if net_in <= 0:
        raise InvalidParameter("net_in must be positive after fees")

    amount_out = mul_div_floor(reserve_out, net_in, reserve_in + net_in, name="amount_out")
    if amount_out <= 0:
        raise InvalidParameter("amount_out is zero (trade too small)")

    new_reserve_in = reserve_in + net_in
    new_reserve_out = reserve_out - amount_out

    # Floor rounding on amount_out keeps k from decreasing.
    if new_reserve_in * new_reserve_out < reserve_in * reserve_out:
        raise ValueError(
            f"Invariant violation: new_k {new_reserve_in * new_reserve_out} < old_k {reserve_in * reserve_out}"
        )

    return SwapQuote(
        amount_in=amount_in,
        fee=fee,
        net_in=net_in,
        amount_out=amount_out,
        new_reserve_in=new_reserve_in,
        new_reserve_out=new_reserve_out,
    )


def slippage_floor(
    expected_amount_out: int,
    slippage_bps: int,
    *,
    max_slippage_bps: int = MAX_SLIPPAGE_BASIS_POINTS,
) -> int:
    """
    Minimum acceptable output for a quote and a tolerance:
    ``expected_amount_out - ceil(expected_amount_out * slippage_bps / 10_000)``.

    Rounds the tolerance up so the floor is never looser than requested.
    """
    require_u64("expected_amount_out", expected_amount_out)
    require_u64("slippage_bps", slippage_bps)
    if slippage_bps > max_slippage_bps:
        raise InvalidParameter(f"slippage_bps must be <= {max_slippage_bps}: {slippage_bps}")
    tolerance = (expected_amount_out * slippage_bps + BPS_DENOM - 1) // BPS_DENOM
    return expected_amount_out - tolerance
