"""Event records emitted after a successful pool operation.

All records are frozen and carry final, committed amounts only. A failed
operation never produces one.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum, unique
from typing import Any, ClassVar, Union

from .balances import AccountId, Amount, PartyId


@unique
class EventKind(Enum):
    """One member per emitted event type."""
    LIQUIDITY_ADDED = "LiquidityAdded"
    LIQUIDITY_REMOVED = "LiquidityRemoved"
    SWAP_EXECUTED = "SwapExecuted"
    TOKENS_STAKED = "TokensStaked"
    TOKENS_UNSTAKED = "TokensUnstaked"
    FEE_ADJUSTED = "FeeAdjusted"


@dataclass(frozen=True)
class LiquidityAdded:
    kind: ClassVar[EventKind] = EventKind.LIQUIDITY_ADDED

    user: PartyId
    token_a_amount: Amount
    token_b_amount: Amount
    reward_issued: Amount


@dataclass(frozen=True)
class LiquidityRemoved:
    kind: ClassVar[EventKind] = EventKind.LIQUIDITY_REMOVED

    user: PartyId
    lp_tokens_burned: Amount


@dataclass(frozen=True)
class SwapExecuted:
    kind: ClassVar[EventKind] = EventKind.SWAP_EXECUTED

    user: PartyId
    token_in: AccountId
    token_out: AccountId
    amount_in: Amount
    amount_out: Amount
    fee: Amount


@dataclass(frozen=True)
class TokensStaked:
    kind: ClassVar[EventKind] = EventKind.TOKENS_STAKED

    user: PartyId
    staked_amount: Amount
    total_staked: Amount


@dataclass(frozen=True)
class TokensUnstaked:
    kind: ClassVar[EventKind] = EventKind.TOKENS_UNSTAKED

    user: PartyId
    unstaked_amount: Amount
    total_staked: Amount


@dataclass(frozen=True)
class FeeAdjusted:
    kind: ClassVar[EventKind] = EventKind.FEE_ADJUSTED

    previous_fee_basis_points: int
    new_fee_basis_points: int
    market_volatility: int


PoolEvent = Union[
    LiquidityAdded,
    LiquidityRemoved,
    SwapExecuted,
    TokensStaked,
    TokensUnstaked,
    FeeAdjusted,
]


def event_to_dict(event: PoolEvent) -> dict[str, Any]:
    """Flat dict view of an event, tagged with its kind."""
    out: dict[str, Any] = {"event": event.kind.value}
    out.update(asdict(event))
    return out
