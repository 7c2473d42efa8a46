from typing import Dict, Optional

from models import ClientAccount, DisputeState, TransactionRecord


class TransactionStore:
    """
    Records of every accepted deposit and withdrawal, keyed by transaction id.
    Deposits are kept for future dispute lookups; withdrawals only so that
    their ids stay used and disputes against them can be rejected.
    """

    def __init__(self):
        self._records: Dict[int, TransactionRecord] = {}

    def insert(self, transaction_id: int, record: TransactionRecord) -> bool:
        """Store a record. Returns False without changes if the id is already used."""
        if transaction_id in self._records:
            return False
        self._records[transaction_id] = record
        return True

    def lookup(self, transaction_id: int) -> Optional[TransactionRecord]:
        return self._records.get(transaction_id)

    def update_dispute_state(self, transaction_id: int, state: DisputeState) -> None:
        """Set the dispute state of a stored record. Transition legality is checked by the caller."""
        self._records[transaction_id].dispute_state = state

    def __contains__(self, transaction_id: int) -> bool:
        return transaction_id in self._records

    def __len__(self) -> int:
        return len(self._records)


class AccountTable:
    """Client accounts, created lazily and never removed."""

    def __init__(self):
        self._accounts: Dict[int, ClientAccount] = {}

    def get_or_create(self, client_id: int) -> ClientAccount:
        """Get existing account or create new one."""
        if client_id not in self._accounts:
            self._accounts[client_id] = ClientAccount(client_id=client_id)
        return self._accounts[client_id]

    def get(self, client_id: int) -> Optional[ClientAccount]:
        return self._accounts.get(client_id)

    def get_all_accounts(self) -> Dict[int, ClientAccount]:
        """Return all accounts ordered by client id (for final output)."""
        return {client_id: self._accounts[client_id] for client_id in sorted(self._accounts)}

    def __len__(self) -> int:
        return len(self._accounts)
