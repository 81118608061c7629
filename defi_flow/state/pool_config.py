"""Pool configuration records.

``PoolConfig`` is an immutable snapshot. The pool engine reads it once per
operation and replaces it wholesale from ``adjust_fee``; nothing mutates it in
place.

Fee tiers (volatility -> fee):
  volatility >  50  -> 50 bps (0.50%)
  volatility <= 50  -> 10 bps (0.10%)
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import InvalidParameter
from .balances import AccountId, PartyId


BPS_DENOM = 10_000

FEE_BASIS_POINTS_DEFAULT = 25  # 0.25%
MAX_FEE_BASIS_POINTS = 1000  # 10% cap
MAX_SLIPPAGE_BASIS_POINTS = 100  # 1%
REWARD_MULTIPLIER = 10

VOLATILITY_THRESHOLD_DEFAULT = 50
HIGH_VOLATILITY_FEE_BPS = 50
LOW_VOLATILITY_FEE_BPS = 10


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidParameter(f"{name} must be an int")


def _require_fee_bps(name: str, value: int) -> None:
    _require_int(name, value)
    if not (0 <= value <= MAX_FEE_BASIS_POINTS):
        raise InvalidParameter(f"{name} must be in [0, {MAX_FEE_BASIS_POINTS}]: {value}")


@dataclass(frozen=True)
class FeeTierPolicy:
    """Step function from a volatility signal to a fee tier."""

    volatility_threshold: int = VOLATILITY_THRESHOLD_DEFAULT
    high_fee_bps: int = HIGH_VOLATILITY_FEE_BPS
    low_fee_bps: int = LOW_VOLATILITY_FEE_BPS

    def __post_init__(self) -> None:
        _require_int("volatility_threshold", self.volatility_threshold)
        if self.volatility_threshold < 0:
            raise InvalidParameter(
                f"volatility_threshold must be non-negative: {self.volatility_threshold}"
            )
        _require_fee_bps("high_fee_bps", self.high_fee_bps)
        _require_fee_bps("low_fee_bps", self.low_fee_bps)


@dataclass(frozen=True)
class PoolConfig:
    """Per-pool pricing parameters."""

    fee_authority: PartyId
    fee_basis_points: int = FEE_BASIS_POINTS_DEFAULT
    reward_multiplier: int = REWARD_MULTIPLIER
    fee_tiers: FeeTierPolicy = FeeTierPolicy()

    def __post_init__(self) -> None:
        if not isinstance(self.fee_authority, str) or not self.fee_authority:
            raise InvalidParameter("fee_authority must be a non-empty string")
        _require_fee_bps("fee_basis_points", self.fee_basis_points)
        _require_int("reward_multiplier", self.reward_multiplier)
        if self.reward_multiplier < 0:
            raise InvalidParameter(f"reward_multiplier must be non-negative: {self.reward_multiplier}")


@dataclass(frozen=True)
class PoolAccounts:
    """Custody accounts owned by one pool."""

    # Signs outbound transfers from reserves and vaults.
    authority: PartyId
    # Holds the mint authority for the reward asset.
    reward_mint_authority: PartyId

    reserve_a: AccountId
    reserve_b: AccountId
    pool_lp: AccountId
    staking_vault: AccountId
    fee_vault_a: AccountId
    fee_vault_b: AccountId


@dataclass(frozen=True)
class ParticipantAccounts:
    """Custody accounts of one participant, all signed for by ``owner``."""

    owner: PartyId
    token_a: AccountId
    token_b: AccountId
    lp_token: AccountId
    reward: AccountId
