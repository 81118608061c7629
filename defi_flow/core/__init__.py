"""
Core pool accounting algorithms
"""

from .cpmm import SwapQuote, quote_swap_exact_in, slippage_floor
from .dispatch import Action, ActionParams, StepResult, step, step_or_raise
from .fees import compute_fee, select_fee_tier
from .interfaces import Custody, EventSink, PriceFeed, TransferIntent
from .math import U64_MAX
from .oracle import OraclePolicy, PriceSample, is_fresh, require_usable_sample
from .pool import PoolEngine, SwapDirection
from .rewards import REWARD_POLICY_VERSION, compute_reward
from .risk import MitigationSignal, evaluate_mitigation

__all__ = [
    "SwapQuote",
    "quote_swap_exact_in",
    "slippage_floor",
    "Action",
    "ActionParams",
    "StepResult",
    "step",
    "step_or_raise",
    "compute_fee",
    "select_fee_tier",
    "Custody",
    "EventSink",
    "PriceFeed",
    "TransferIntent",
    "U64_MAX",
    "OraclePolicy",
    "PriceSample",
    "is_fresh",
    "require_usable_sample",
    "PoolEngine",
    "SwapDirection",
    "REWARD_POLICY_VERSION",
    "compute_reward",
    "MitigationSignal",
    "evaluate_mitigation",
]
