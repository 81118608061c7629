"""
Custody collaborator: the system of record that actually holds balances.

The pool core only ever calls the ``Custody`` protocol. ``InMemoryCustody`` is
the reference implementation used by tests and local tooling:
- accounts are opened with an owner (the only party allowed to sign for
  outbound transfers) and an asset,
- each asset may have one mint authority,
- ``atomic()`` groups calls into one all-or-nothing batch by snapshotting the
  balance table and restoring it if the block raises.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, Iterator

from ..core.math import narrow_u64, require_u64
from ..errors import InsufficientBalance, InvalidParameter, Unauthorized
from ..state.balances import AccountId, Amount, AssetId, BalanceTable, PartyId

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Account:
    owner: PartyId
    asset: AssetId


class InMemoryCustody:
    """Single-process custody over a ``BalanceTable``."""

    def __init__(self) -> None:
        self._balances = BalanceTable()
        self._accounts: Dict[AccountId, _Account] = {}
        self._mint_authorities: Dict[AssetId, PartyId] = {}
        self._lock = threading.RLock()
        self._batch_depth = 0

    # -- setup ---------------------------------------------------------------

    def open_account(self, account: AccountId, *, owner: PartyId, asset: AssetId, balance: Amount = 0) -> None:
        with self._lock:
            if account in self._accounts:
                raise InvalidParameter(f"account already exists: {account}")
            require_u64("balance", balance)
            self._accounts[account] = _Account(owner=owner, asset=asset)
            self._balances.set(account, balance)

    def set_mint_authority(self, asset: AssetId, authority: PartyId) -> None:
        with self._lock:
            self._mint_authorities[asset] = authority

    # -- Custody protocol ----------------------------------------------------

    def balance_of(self, account: AccountId) -> Amount:
        with self._lock:
            self._require_account(account)
            return self._balances.get(account)

    def transfer(
        self, source: AccountId, destination: AccountId, authorizer: PartyId, amount: Amount
    ) -> None:
        require_u64("amount", amount)
        with self._lock:
            src = self._require_account(source)
            dst = self._require_account(destination)
            if src.owner != authorizer:
                raise Unauthorized(f"{authorizer} cannot sign for {source}")
            if source == destination:
                raise InvalidParameter(f"source and destination are the same account: {source}")
            if src.asset != dst.asset:
                raise InvalidParameter(f"asset mismatch: {source} ({src.asset}) -> {destination} ({dst.asset})")
            available = self._balances.get(source)
            if available < amount:
                raise InsufficientBalance(f"{source} holds {available}, needs {amount}")
            narrow_u64("destination balance", self._balances.get(destination) + amount)
            self._balances.subtract(source, amount)
            self._balances.add(destination, amount)
            logger.debug("transfer %s -> %s: %d", source, destination, amount)

    def mint(self, mint_authority: PartyId, destination: AccountId, amount: Amount) -> None:
        require_u64("amount", amount)
        with self._lock:
            dst = self._require_account(destination)
            if self._mint_authorities.get(dst.asset) != mint_authority:
                raise Unauthorized(f"{mint_authority} is not the mint authority of {dst.asset}")
            new_dst = narrow_u64("destination balance", self._balances.get(destination) + amount)
            self._balances.set(destination, new_dst)
            logger.debug("mint %s -> %s: %d", dst.asset, destination, amount)

    @contextmanager
    def atomic(self) -> Iterator[None]:
        with self._lock:
            outermost = self._batch_depth == 0
            snapshot = self._balances.snapshot() if outermost else None
            self._batch_depth += 1
            try:
                yield
            except BaseException:
                if outermost:
                    self._balances.restore(snapshot)
                    logger.debug("custody batch rolled back")
                raise
            finally:
                self._batch_depth -= 1

    # -- inspection ----------------------------------------------------------

    def supply_of(self, asset: AssetId) -> Amount:
        with self._lock:
            return sum(
                self._balances.get(acct) for acct, meta in self._accounts.items() if meta.asset == asset
            )

    def snapshot(self) -> Dict[AccountId, Amount]:
        with self._lock:
            return self._balances.snapshot()

    def _require_account(self, account: AccountId) -> _Account:
        meta = self._accounts.get(account)
        if meta is None:
            raise InvalidParameter(f"unknown account: {account}")
        return meta
