"""
State records for the defi_flow pool core
"""

from .balances import BalanceTable
from .events import (
    EventKind,
    FeeAdjusted,
    LiquidityAdded,
    LiquidityRemoved,
    PoolEvent,
    SwapExecuted,
    TokensStaked,
    TokensUnstaked,
)
from .pool_config import FeeTierPolicy, ParticipantAccounts, PoolAccounts, PoolConfig
from .stakes import StakeRecord, StakeTable

__all__ = [
    "BalanceTable",
    "EventKind",
    "FeeAdjusted",
    "LiquidityAdded",
    "LiquidityRemoved",
    "PoolEvent",
    "SwapExecuted",
    "TokensStaked",
    "TokensUnstaked",
    "FeeTierPolicy",
    "ParticipantAccounts",
    "PoolAccounts",
    "PoolConfig",
    "StakeRecord",
    "StakeTable",
]
