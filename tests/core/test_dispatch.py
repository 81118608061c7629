from __future__ import annotations

import pytest

from defi_flow.core.dispatch import Action, ActionParams, step, step_or_raise
from defi_flow.errors import SlippageExceeded, Unauthorized
from defi_flow.integration.local_pool import build_local_pool
from defi_flow.state.events import LiquidityAdded


@pytest.fixture
def local():
    return build_local_pool()


def test_step_accepts_provide_liquidity(local) -> None:
    alice = local.open_participant("alice", token_a=5_000, token_b=5_000)
    r = step(local.engine, ActionParams(action=Action.PROVIDE_LIQUIDITY, user=alice, amount_a=1000, amount_b=2000))
    assert r.accepted
    assert isinstance(r.event, LiquidityAdded)
    assert r.event.reward_issued == 30
    assert r.rejection is None


def test_step_rejects_with_error_kind(local) -> None:
    alice = local.open_participant("alice", token_a=50_000)
    r = step(
        local.engine,
        ActionParams(action=Action.SWAP_TOKENS, user=alice, amount=10_000, min_amount_out=10_000),
    )
    assert not r.accepted
    assert r.rejection == "slippage_exceeded"
    assert isinstance(r.error, SlippageExceeded)


def test_step_requires_user(local) -> None:
    r = step(local.engine, ActionParams(action=Action.STAKE_TOKENS, amount=10))
    assert not r.accepted
    assert r.rejection == "invalid_parameter"


def test_step_adjust_fee(local) -> None:
    r = step(local.engine, ActionParams(action=Action.ADJUST_FEE, authority="fee-authority", market_volatility=51))
    assert r.accepted
    assert local.engine.config.fee_basis_points == 50


def test_step_or_raise_reraises_original_error(local) -> None:
    with pytest.raises(Unauthorized):
        step_or_raise(local.engine, ActionParams(action=Action.ADJUST_FEE, authority="mallory", market_volatility=51))
