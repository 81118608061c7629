"""
Custody-side balance tracking.

Implements BalanceTable[AccountId] -> Amount for the in-memory custody
collaborator. The accounting core never touches this table directly; it only
goes through the custody interface.
"""

from typing import Dict

from ..errors import InsufficientBalance


# Type aliases
AccountId = str  # custody account handle
PartyId = str  # verified signer identity supplied by the host
AssetId = str
Amount = int  # non-negative integer in the u64 domain


class BalanceTable:
    """
    Balance table mapping account -> amount.

    Zero balances are omitted to keep the table sparse, so ``snapshot()`` and
    equality comparisons do not depend on accounts that were touched and
    drained back to zero.
    """

    def __init__(self):
        self._balances: Dict[AccountId, Amount] = {}

    def get(self, account: AccountId) -> Amount:
        """Get balance for an account. Returns 0 if not found."""
        return self._balances.get(account, 0)

    def set(self, account: AccountId, amount: Amount) -> None:
        """
        Set balance for an account.

        Raises:
            ValueError: If amount is negative
        """
        if amount < 0:
            raise ValueError(f"Balance cannot be negative: {amount}")
        if amount == 0:
            self._balances.pop(account, None)
        else:
            self._balances[account] = amount

    def add(self, account: AccountId, delta: Amount) -> None:
        """
        Add delta to balance (delta may be negative).

        Raises:
            InsufficientBalance: If resulting balance would be negative
        """
        current = self.get(account)
        new_balance = current + delta
        if new_balance < 0:
            raise InsufficientBalance(
                f"Insufficient balance in {account}: {current} + {delta} = {new_balance} < 0"
            )
        self.set(account, new_balance)

    def subtract(self, account: AccountId, delta: Amount) -> None:
        """Subtract a non-negative amount from a balance."""
        if delta < 0:
            raise ValueError(f"Delta must be non-negative: {delta}")
        self.add(account, -delta)

    def snapshot(self) -> Dict[AccountId, Amount]:
        """Return a copy of all balances."""
        return dict(self._balances)

    def restore(self, snapshot: Dict[AccountId, Amount]) -> None:
        """Replace all balances with a previously taken snapshot."""
        self._balances = dict(snapshot)

    def total(self) -> Amount:
        return sum(self._balances.values())

    def __repr__(self) -> str:
        return f"BalanceTable({len(self._balances)} entries)"
