from __future__ import annotations

import pytest

from defi_flow.core import cpmm
from defi_flow.core.cpmm import quote_swap_exact_in, slippage_floor
from defi_flow.errors import InsufficientBalance, InvalidParameter


def test_quote_uses_net_input_against_reserves() -> None:
    q = quote_swap_exact_in(reserve_in=1_000_000, reserve_out=1_000_000, amount_in=10_000, fee_basis_points=50)
    assert q.fee == 50
    assert q.net_in == 9_950
    # floor(1_000_000 * 9_950 / 1_009_950)
    assert q.amount_out == 9_851
    assert q.new_reserve_in == 1_009_950
    assert q.new_reserve_out == 1_000_000 - 9_851


def test_quote_is_deterministic() -> None:
    args = dict(reserve_in=123_456, reserve_out=654_321, amount_in=777, fee_basis_points=25)
    first = quote_swap_exact_in(**args)
    for _ in range(5):
        assert quote_swap_exact_in(**args) == first


def test_quote_never_decreases_constant_product() -> None:
    for amount_in in (1_000, 12_345, 999_999):
        q = quote_swap_exact_in(reserve_in=5_000, reserve_out=7_000_000, amount_in=amount_in, fee_basis_points=10)
        assert q.new_reserve_in * q.new_reserve_out >= 5_000 * 7_000_000
        assert q.amount_out < 7_000_000


def test_quote_raises_on_constant_product_decrease(monkeypatch) -> None:
    # Force an output that drains the reserve; the k check must catch it.
    monkeypatch.setattr(cpmm, "mul_div_floor", lambda a, b, d, *, name: a)
    with pytest.raises(ValueError, match="Invariant violation"):
        cpmm.quote_swap_exact_in(reserve_in=1_000, reserve_out=1_000, amount_in=100, fee_basis_points=0)


def test_quote_rejects_empty_reserve() -> None:
    with pytest.raises(InsufficientBalance):
        quote_swap_exact_in(reserve_in=0, reserve_out=1_000, amount_in=10, fee_basis_points=25)


def test_quote_rejects_trade_too_small() -> None:
    with pytest.raises(InvalidParameter):
        quote_swap_exact_in(reserve_in=1_000_000, reserve_out=1, amount_in=10, fee_basis_points=0)


def test_quote_rejects_zero_amount() -> None:
    with pytest.raises(InvalidParameter):
        quote_swap_exact_in(reserve_in=1_000, reserve_out=1_000, amount_in=0, fee_basis_points=25)


# ---------------------------------------------------------------------------
# slippage_floor
# ---------------------------------------------------------------------------

def test_slippage_floor_exact() -> None:
    assert slippage_floor(10_000, 50) == 9_950


def test_slippage_floor_rounds_tolerance_up() -> None:
    # 999 * 100 / 10_000 = 9.99 -> 10
    assert slippage_floor(999, 100) == 989


def test_slippage_floor_zero_tolerance() -> None:
    assert slippage_floor(10_000, 0) == 10_000


def test_slippage_floor_rejects_tolerance_above_max() -> None:
    with pytest.raises(InvalidParameter):
        slippage_floor(10_000, 101)
    assert slippage_floor(10_000, 200, max_slippage_bps=200) == 9_800
