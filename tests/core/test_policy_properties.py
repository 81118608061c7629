"""Property tests for the fee, reward and pricing kernels.

Uses Hypothesis to check the bounds and monotonicity claims over the whole u64
domain rather than a handful of points.
"""

from __future__ import annotations

import importlib.util

import pytest

if importlib.util.find_spec("hypothesis") is None:  # pragma: no cover
    pytest.skip("hypothesis not installed", allow_module_level=True)

import hypothesis.strategies as st
from hypothesis import assume, given, settings

from defi_flow.core.cpmm import quote_swap_exact_in
from defi_flow.core.fees import MAX_FEE_BASIS_POINTS, compute_fee
from defi_flow.core.math import U64_MAX
from defi_flow.core.rewards import compute_reward
from defi_flow.errors import InvalidParameter

u64 = st.integers(min_value=0, max_value=U64_MAX)
fee_bps = st.integers(min_value=0, max_value=MAX_FEE_BASIS_POINTS)
# Keep (a + b) * m within u64 so the reward never overflows.
deposit = st.integers(min_value=0, max_value=U64_MAX // 2_000)
multiplier = st.integers(min_value=0, max_value=1_000)


@given(amount=u64, bp=fee_bps)
@settings(max_examples=500, deadline=None)
def test_fee_exact_and_bounded(amount: int, bp: int) -> None:
    fee = compute_fee(amount, bp)
    assert fee == (amount * bp) // 10_000
    assert 0 <= fee <= amount


@given(a=deposit, b=deposit, delta=deposit, m=multiplier)
@settings(max_examples=300, deadline=None)
def test_reward_monotone_in_both_amounts(a: int, b: int, delta: int, m: int) -> None:
    base = compute_reward(a, b, m)
    assert compute_reward(a + delta, b, m) >= base
    assert compute_reward(a, b + delta, m) >= base


@given(
    reserve_in=st.integers(min_value=1, max_value=10**15),
    reserve_out=st.integers(min_value=1, max_value=10**15),
    amount_in=st.integers(min_value=1, max_value=10**15),
    bp=fee_bps,
)
@settings(max_examples=300, deadline=None)
def test_quote_deterministic_and_k_safe(reserve_in: int, reserve_out: int, amount_in: int, bp: int) -> None:
    try:
        first = quote_swap_exact_in(reserve_in, reserve_out, amount_in, bp)
    except InvalidParameter:
        assume(False)
        return
    assert quote_swap_exact_in(reserve_in, reserve_out, amount_in, bp) == first
    assert first.amount_out < reserve_out
    assert first.new_reserve_in * first.new_reserve_out >= reserve_in * reserve_out
