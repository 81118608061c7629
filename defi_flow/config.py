"""
Policy configuration.

Every tunable constant of the core has a default in code and may be
overridden from a YAML document:

    schema: defi_flow/policy/v1
    fees:
      default_bps: 25
      max_slippage_bps: 100
      tiers: {volatility_threshold: 50, high_bps: 50, low_bps: 10}
    rewards:
      multiplier: 10
    oracle:
      max_staleness_seconds: 60
      max_confidence_bps: 200

Loading is fail-closed: unknown schema, missing sections of the wrong type,
or out-of-range values raise ``ConfigError``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .core.oracle import MAX_CONFIDENCE_BPS_DEFAULT, MAX_STALENESS_SECONDS_DEFAULT, OraclePolicy
from .errors import InvalidParameter
from .state.balances import PartyId
from .state.pool_config import (
    BPS_DENOM,
    FEE_BASIS_POINTS_DEFAULT,
    HIGH_VOLATILITY_FEE_BPS,
    LOW_VOLATILITY_FEE_BPS,
    MAX_FEE_BASIS_POINTS,
    MAX_SLIPPAGE_BASIS_POINTS,
    REWARD_MULTIPLIER,
    VOLATILITY_THRESHOLD_DEFAULT,
    FeeTierPolicy,
    PoolConfig,
)

SCHEMA = "defi_flow/policy/v1"


class ConfigError(InvalidParameter):
    """Raised when a policy document is malformed."""


@dataclass(frozen=True)
class PolicyConfig:
    fee_basis_points_default: int = FEE_BASIS_POINTS_DEFAULT
    max_slippage_bps: int = MAX_SLIPPAGE_BASIS_POINTS
    reward_multiplier: int = REWARD_MULTIPLIER
    fee_tiers: FeeTierPolicy = FeeTierPolicy()
    oracle: OraclePolicy = OraclePolicy()

    def __post_init__(self) -> None:
        for name in ("fee_basis_points_default", "max_slippage_bps", "reward_multiplier"):
            _check_int(getattr(self, name), name=name)
        if not isinstance(self.fee_tiers, FeeTierPolicy):
            raise ConfigError("fee_tiers must be a FeeTierPolicy")
        if not isinstance(self.oracle, OraclePolicy):
            raise ConfigError("oracle must be an OraclePolicy")
        if not (0 <= self.fee_basis_points_default <= MAX_FEE_BASIS_POINTS):
            raise ConfigError(
                f"fee_basis_points_default must be in [0, {MAX_FEE_BASIS_POINTS}]: {self.fee_basis_points_default}"
            )
        if self.reward_multiplier < 0:
            raise ConfigError(f"reward_multiplier must be non-negative: {self.reward_multiplier}")
        if not (0 <= self.max_slippage_bps <= BPS_DENOM):
            raise ConfigError(f"max_slippage_bps must be in [0, {BPS_DENOM}]: {self.max_slippage_bps}")

    def pool_config(self, fee_authority: PartyId) -> PoolConfig:
        """Initial ``PoolConfig`` for a new pool under this policy."""
        return PoolConfig(
            fee_authority=fee_authority,
            fee_basis_points=self.fee_basis_points_default,
            reward_multiplier=self.reward_multiplier,
            fee_tiers=self.fee_tiers,
        )


def _require_mapping(obj: Any, *, name: str) -> dict[str, Any]:
    if obj is None:
        return {}
    if not isinstance(obj, dict):
        raise ConfigError(f"{name} must be an object")
    return obj


def _check_int(obj: Any, *, name: str) -> int:
    if not isinstance(obj, int) or isinstance(obj, bool):
        raise ConfigError(f"{name} must be an int")
    return obj


def _require_int(obj: Any, default: int, *, name: str) -> int:
    if obj is None:
        return default
    return _check_int(obj, name=name)


def policy_config_from_mapping(root: Any) -> PolicyConfig:
    root = _require_mapping(root, name="policy")
    schema = root.get("schema", SCHEMA)
    if schema != SCHEMA:
        raise ConfigError(f"unsupported policy.schema: {schema}")

    fees = _require_mapping(root.get("fees"), name="policy.fees")
    tiers = _require_mapping(fees.get("tiers"), name="policy.fees.tiers")
    rewards = _require_mapping(root.get("rewards"), name="policy.rewards")
    oracle = _require_mapping(root.get("oracle"), name="policy.oracle")

    try:
        return PolicyConfig(
            fee_basis_points_default=_require_int(
                fees.get("default_bps"), FEE_BASIS_POINTS_DEFAULT, name="fees.default_bps"
            ),
            max_slippage_bps=_require_int(
                fees.get("max_slippage_bps"), MAX_SLIPPAGE_BASIS_POINTS, name="fees.max_slippage_bps"
            ),
            reward_multiplier=_require_int(
                rewards.get("multiplier"), REWARD_MULTIPLIER, name="rewards.multiplier"
            ),
            fee_tiers=FeeTierPolicy(
                volatility_threshold=_require_int(
                    tiers.get("volatility_threshold"),
                    VOLATILITY_THRESHOLD_DEFAULT,
                    name="fees.tiers.volatility_threshold",
                ),
                high_fee_bps=_require_int(tiers.get("high_bps"), HIGH_VOLATILITY_FEE_BPS, name="fees.tiers.high_bps"),
                low_fee_bps=_require_int(tiers.get("low_bps"), LOW_VOLATILITY_FEE_BPS, name="fees.tiers.low_bps"),
            ),
            oracle=OraclePolicy(
                max_staleness_seconds=_require_int(
                    oracle.get("max_staleness_seconds"),
                    MAX_STALENESS_SECONDS_DEFAULT,
                    name="oracle.max_staleness_seconds",
                ),
                max_confidence_bps=_require_int(
                    oracle.get("max_confidence_bps"),
                    MAX_CONFIDENCE_BPS_DEFAULT,
                    name="oracle.max_confidence_bps",
                ),
            ),
        )
    except ConfigError:
        raise
    except InvalidParameter as exc:
        raise ConfigError(str(exc)) from exc


def load_policy_config(path: Path | str) -> PolicyConfig:
    raw = Path(path).read_text(encoding="utf-8")
    try:
        obj = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid policy YAML: {exc}") from exc
    return policy_config_from_mapping(obj)
