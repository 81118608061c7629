"""Exception types for the defi_flow accounting core.

Every failure surfaced to callers is one of the ``PoolError`` subclasses below.
``kind`` is the stable name used by ``step()`` in ``core/dispatch.py`` when it reports a
rejection instead of raising.
"""

from __future__ import annotations


class PoolError(Exception):
    """Base class for all accounting failures."""

    kind: str = "pool_error"


class InvalidParameter(PoolError):
    """Raised for out-of-range configuration or a zero / malformed amount."""

    kind = "invalid_parameter"


class InsufficientBalance(PoolError):
    """Raised when a custody transfer cannot be satisfied."""

    kind = "insufficient_balance"


class Overflow(PoolError):
    """Raised when a result would not fit the u64 domain."""

    kind = "overflow"


class SlippageExceeded(PoolError):
    """Raised when the computed swap output is below the caller's floor."""

    kind = "slippage_exceeded"

    def __init__(self, amount_out: int, min_amount_out: int) -> None:
        self.amount_out = amount_out
        self.min_amount_out = min_amount_out
        super().__init__(f"amount_out {amount_out} < min_amount_out {min_amount_out}")


class Unauthorized(PoolError):
    """Raised when the caller does not hold the role an operation requires."""

    kind = "unauthorized"


class OracleUnavailable(PoolError):
    """Raised when no usable price sample can be read."""

    kind = "oracle_unavailable"
