"""Collaborator interfaces consumed by the pool engine.

The core never holds balances, reads a clock-bound oracle directly, or writes
to an event backend. It goes through these three capabilities, which the host
(or a test) injects. Implementations live in ``defi_flow.integration``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import ContextManager, Protocol

from ..state.balances import AccountId, Amount, PartyId
from ..state.events import PoolEvent
from .oracle import PriceSample


@dataclass(frozen=True)
class TransferIntent:
    """One balance movement handed to custody. Never persisted."""

    source: AccountId
    destination: AccountId
    authorizer: PartyId
    amount: Amount


class Custody(Protocol):
    def transfer(
        self, source: AccountId, destination: AccountId, authorizer: PartyId, amount: Amount
    ) -> None:
        """Move *amount* or raise ``InsufficientBalance`` / ``Unauthorized``."""

    def mint(self, mint_authority: PartyId, destination: AccountId, amount: Amount) -> None:
        """Issue new units into *destination* or raise ``Unauthorized``."""

    def balance_of(self, account: AccountId) -> Amount:
        ...

    def atomic(self) -> ContextManager[None]:
        """Batch every call made inside the block; commit all or none."""


class PriceFeed(Protocol):
    def read_price(self) -> PriceSample | None:
        """Latest sample, ``None`` if there is none; may raise ``OracleUnavailable``."""


class EventSink(Protocol):
    def record(self, event: PoolEvent) -> None:
        ...


def execute_transfer(custody: Custody, intent: TransferIntent) -> None:
    custody.transfer(intent.source, intent.destination, intent.authorizer, intent.amount)
