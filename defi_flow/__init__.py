"""
defi_flow: accounting core for a two-asset liquidity pool
"""

from .errors import (
    InsufficientBalance,
    InvalidParameter,
    OracleUnavailable,
    Overflow,
    PoolError,
    SlippageExceeded,
    Unauthorized,
)

__all__ = [
    "InsufficientBalance",
    "InvalidParameter",
    "OracleUnavailable",
    "Overflow",
    "PoolError",
    "SlippageExceeded",
    "Unauthorized",
]
