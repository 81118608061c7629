"""Dispatch-table entry point over ``PoolEngine``.

``step(engine, params)`` runs one action and reports the outcome as a
``StepResult`` instead of raising, for hosts that route requests by tag.
``step_or_raise`` is the same call for callers that prefer exceptions.

Rejections carry the ``PoolError.kind`` of the failure, e.g.
``"slippage_exceeded"``; unknown actions are rejected as ``"unknown_action:<tag>"``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique
from typing import Callable, Optional

from ..errors import InvalidParameter, PoolError
from ..state.events import PoolEvent
from ..state.pool_config import ParticipantAccounts
from .pool import PoolEngine, SwapDirection


@unique
class Action(Enum):
    PROVIDE_LIQUIDITY = "provide_liquidity"
    REMOVE_LIQUIDITY = "remove_liquidity"
    SWAP_TOKENS = "swap_tokens"
    STAKE_TOKENS = "stake_tokens"
    UNSTAKE_TOKENS = "unstake_tokens"
    ADJUST_FEE = "adjust_fee"


@dataclass(frozen=True)
class ActionParams:
    """Parameters for an action. Unused fields default to 0/None."""

    action: Action
    user: Optional[ParticipantAccounts] = None  # every action except adjust_fee
    authority: Optional[str] = None             # adjust_fee
    amount_a: int = 0                           # provide_liquidity
    amount_b: int = 0                           # provide_liquidity
    amount: int = 0                             # remove / stake / unstake / swap (amount_in)
    min_amount_out: int = 0                     # swap_tokens
    direction: SwapDirection = SwapDirection.A_TO_B
    market_volatility: int = 0                  # adjust_fee


@dataclass(frozen=True)
class StepResult:
    accepted: bool
    event: Optional[PoolEvent] = None
    rejection: Optional[str] = None
    error: Optional[PoolError] = None


def _user(params: ActionParams) -> ParticipantAccounts:
    if params.user is None:
        raise InvalidParameter(f"{params.action.value} requires user accounts")
    return params.user


def _provide(engine: PoolEngine, p: ActionParams) -> PoolEvent:
    return engine.provide_liquidity(_user(p), p.amount_a, p.amount_b)


def _remove(engine: PoolEngine, p: ActionParams) -> PoolEvent:
    return engine.remove_liquidity(_user(p), p.amount)


def _swap(engine: PoolEngine, p: ActionParams) -> PoolEvent:
    return engine.swap_tokens(_user(p), p.amount, p.min_amount_out, p.direction)


def _stake(engine: PoolEngine, p: ActionParams) -> PoolEvent:
    return engine.stake_tokens(_user(p), p.amount)


def _unstake(engine: PoolEngine, p: ActionParams) -> PoolEvent:
    return engine.unstake_tokens(_user(p), p.amount)


def _adjust_fee(engine: PoolEngine, p: ActionParams) -> PoolEvent:
    if p.authority is None:
        raise InvalidParameter("adjust_fee requires an authority")
    return engine.adjust_fee(p.authority, p.market_volatility)


HandlerFn = Callable[[PoolEngine, ActionParams], PoolEvent]

_DISPATCH: dict[Action, HandlerFn] = {
    Action.PROVIDE_LIQUIDITY: _provide,
    Action.REMOVE_LIQUIDITY: _remove,
    Action.SWAP_TOKENS: _swap,
    Action.STAKE_TOKENS: _stake,
    Action.UNSTAKE_TOKENS: _unstake,
    Action.ADJUST_FEE: _adjust_fee,
}


def step(engine: PoolEngine, params: ActionParams) -> StepResult:
    """Execute one action against *engine*.

    Returns ``StepResult`` with ``accepted=True`` and the emitted event on
    success, or ``accepted=False`` with the error kind as ``rejection``.
    """
    handler = _DISPATCH.get(params.action)
    if handler is None:
        return StepResult(accepted=False, rejection=f"unknown_action:{params.action}")
    try:
        event = handler(engine, params)
    except PoolError as exc:
        return StepResult(accepted=False, rejection=exc.kind, error=exc)
    return StepResult(accepted=True, event=event)


def step_or_raise(engine: PoolEngine, params: ActionParams) -> StepResult:
    """Like ``step()`` but re-raises the original ``PoolError`` on rejection."""
    result = step(engine, params)
    if result.accepted:
        return result
    if result.error is not None:
        raise result.error
    raise InvalidParameter(result.rejection or "rejected")
