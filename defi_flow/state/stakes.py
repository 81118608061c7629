"""
Stake record tracking for the staking vault.

Stake records are scoped per participant and hold the amount of pool-share
tokens currently locked in the vault.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from ..errors import InvalidParameter
from .balances import Amount, PartyId


@dataclass(frozen=True)
class StakeRecord:
    staked_amount: Amount = 0

    def __post_init__(self) -> None:
        if not isinstance(self.staked_amount, int) or isinstance(self.staked_amount, bool):
            raise InvalidParameter("staked_amount must be an int")
        if self.staked_amount < 0:
            raise InvalidParameter(f"staked_amount must be non-negative: {self.staked_amount}")


class StakeTable:
    """
    Stake table mapping participant -> StakeRecord.

    Notes:
    - A participant with no record reads as ``StakeRecord(0)``.
    - Zero records are omitted to keep the table sparse.
    """

    def __init__(self) -> None:
        self._records: Dict[PartyId, StakeRecord] = {}

    def get(self, participant: PartyId) -> StakeRecord:
        return self._records.get(participant, StakeRecord())

    def set(self, participant: PartyId, record: StakeRecord) -> None:
        if record.staked_amount == 0:
            self._records.pop(participant, None)
        else:
            self._records[participant] = record

    def total_staked(self) -> Amount:
        return sum(r.staked_amount for r in self._records.values())

    def get_all(self) -> Dict[PartyId, StakeRecord]:
        return dict(self._records)

    def __repr__(self) -> str:
        return f"StakeTable({len(self._records)} entries)"
