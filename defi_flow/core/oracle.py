"""
Oracle sample checks.

This module is intentionally small and pure:
- The functional core decides whether a price sample is usable.
- The imperative shell (a ``PriceFeed``) fetches the sample and the clock.

A sample is usable only if it is well-formed, not older than
``max_staleness_seconds``, not from the future, and its confidence interval is
within ``max_confidence_bps`` of the price. Anything else is
``OracleUnavailable``; a bad sample is never read as price 0.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import InvalidParameter, OracleUnavailable
from .fees import BPS_DENOM
from .math import U64_MAX

MAX_STALENESS_SECONDS_DEFAULT = 60
MAX_CONFIDENCE_BPS_DEFAULT = 200


@dataclass(frozen=True)
class PriceSample:
    """Latest oracle reading. Owned by the feed; the core only reads it."""

    price: int
    confidence: int
    publish_time: int


@dataclass(frozen=True)
class OraclePolicy:
    max_staleness_seconds: int = MAX_STALENESS_SECONDS_DEFAULT
    max_confidence_bps: int = MAX_CONFIDENCE_BPS_DEFAULT

    def __post_init__(self) -> None:
        for name, v in (
            ("max_staleness_seconds", self.max_staleness_seconds),
            ("max_confidence_bps", self.max_confidence_bps),
        ):
            if not isinstance(v, int) or isinstance(v, bool):
                raise InvalidParameter(f"{name} must be an int")
        if self.max_staleness_seconds <= 0:
            raise InvalidParameter(
                f"max_staleness_seconds must be positive: {self.max_staleness_seconds}"
            )
        if not (0 <= self.max_confidence_bps <= BPS_DENOM):
            raise InvalidParameter(
                f"max_confidence_bps must be in [0, {BPS_DENOM}]: {self.max_confidence_bps}"
            )


def _is_u64(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= U64_MAX


def is_fresh(sample: PriceSample, policy: OraclePolicy, current_timestamp: int) -> bool:
    """Return True if the sample timestamp is within the max staleness window."""
    if current_timestamp < 0:
        raise InvalidParameter(f"current_timestamp must be non-negative: {current_timestamp}")
    if sample.publish_time > current_timestamp:
        return False
    return (current_timestamp - sample.publish_time) <= policy.max_staleness_seconds


def is_confident(sample: PriceSample, policy: OraclePolicy) -> bool:
    """``confidence / price <= max_confidence_bps / 10_000``, by cross-multiplication."""
    return sample.confidence * BPS_DENOM <= policy.max_confidence_bps * sample.price


def require_usable_sample(
    sample: PriceSample | None,
    policy: OraclePolicy,
    current_timestamp: int,
) -> PriceSample:
    """Return *sample* if it may be trusted, else raise ``OracleUnavailable``."""
    if sample is None:
        raise OracleUnavailable("no price sample")
    if not isinstance(sample, PriceSample):
        raise OracleUnavailable(f"malformed price sample: {type(sample).__name__}")
    if not _is_u64(sample.price) or sample.price == 0:
        raise OracleUnavailable(f"malformed price: {sample.price!r}")
    if not _is_u64(sample.confidence):
        raise OracleUnavailable(f"malformed confidence: {sample.confidence!r}")
    if not _is_u64(sample.publish_time):
        raise OracleUnavailable(f"malformed publish_time: {sample.publish_time!r}")
    if not is_fresh(sample, policy, current_timestamp):
        raise OracleUnavailable(
            f"stale price sample: published {sample.publish_time}, now {current_timestamp}, "
            f"max staleness {policy.max_staleness_seconds}s"
        )
    if not is_confident(sample, policy):
        raise OracleUnavailable(
            f"price confidence too wide: {sample.confidence} on {sample.price} "
            f"(max {policy.max_confidence_bps} bps)"
        )
    return sample
