import logging
from typing import Optional, Tuple

from models import (
    ClientAccount,
    DisputeState,
    ProcessingResult,
    Transaction,
    TransactionRecord,
    TransactionType,
)
from state import AccountTable, TransactionStore

logger = logging.getLogger(__name__)

DISPUTABLE_STATES = (DisputeState.NORMAL, DisputeState.RESOLVED)


class TransactionProcessor:
    """
    Applies transactions to the record store and account table.
    Every call either applies all of its mutations or none of them,
    and reports which through the returned ProcessingResult.
    """

    def __init__(self, records: TransactionStore, accounts: AccountTable, enforce_client_match: bool = False):
        self._records = records
        self._accounts = accounts
        self._enforce_client_match = enforce_client_match

    def process_transaction(self, transaction: Transaction) -> ProcessingResult:
        """
        Process a single transaction.

        Returns:
            APPLIED: balances and/or record state were updated
            REJECTED: the transaction was discarded; no balance or record changed
        """
        match transaction.transaction_type:
            case TransactionType.DEPOSIT:
                return self._handle_deposit(transaction)
            case TransactionType.WITHDRAWAL:
                return self._handle_withdrawal(transaction)
            case TransactionType.DISPUTE:
                return self._handle_dispute(transaction)
            case TransactionType.RESOLVE:
                return self._handle_resolve(transaction)
            case TransactionType.CHARGEBACK:
                return self._handle_chargeback(transaction)
            case _:
                return self._reject(transaction, "unknown transaction type")

    def _handle_deposit(self, transaction: Transaction) -> ProcessingResult:
        if transaction.amount is None or transaction.amount < 0:
            return self._reject(transaction, f"invalid amount {transaction.amount}")

        if transaction.transaction_id in self._records:
            return self._reject(transaction, "transaction id already used")

        account = self._accounts.get_or_create(transaction.client_id)
        if account.locked:
            return self._reject(transaction, "account locked")

        record = TransactionRecord(client_id=transaction.client_id, kind=TransactionType.DEPOSIT, amount=transaction.amount)
        self._records.insert(transaction.transaction_id, record)
        account.credit(transaction.amount)
        return ProcessingResult.APPLIED

    def _handle_withdrawal(self, transaction: Transaction) -> ProcessingResult:
        if transaction.amount is None or transaction.amount < 0:
            return self._reject(transaction, f"invalid amount {transaction.amount}")

        if transaction.transaction_id in self._records:
            return self._reject(transaction, "transaction id already used")

        # An overdrawn withdrawal still leaves the client listed with zero funds.
        account = self._accounts.get_or_create(transaction.client_id)
        if account.locked:
            return self._reject(transaction, "account locked")

        if account.available < transaction.amount:
            return self._reject(transaction, "insufficient funds")

        record = TransactionRecord(client_id=transaction.client_id, kind=TransactionType.WITHDRAWAL, amount=transaction.amount)
        self._records.insert(transaction.transaction_id, record)
        account.debit(transaction.amount)
        return ProcessingResult.APPLIED

    def _handle_dispute(self, transaction: Transaction) -> ProcessingResult:
        found = self._find_disputable(transaction, DISPUTABLE_STATES)
        if found is None:
            return ProcessingResult.REJECTED
        record, account = found

        account.hold(record.amount)
        self._records.update_dispute_state(transaction.transaction_id, DisputeState.DISPUTED)
        return ProcessingResult.APPLIED

    def _handle_resolve(self, transaction: Transaction) -> ProcessingResult:
        found = self._find_disputable(transaction, (DisputeState.DISPUTED,))
        if found is None:
            return ProcessingResult.REJECTED
        record, account = found

        account.release_hold(record.amount)
        self._records.update_dispute_state(transaction.transaction_id, DisputeState.RESOLVED)
        return ProcessingResult.APPLIED

    def _handle_chargeback(self, transaction: Transaction) -> ProcessingResult:
        found = self._find_disputable(transaction, (DisputeState.DISPUTED,))
        if found is None:
            return ProcessingResult.REJECTED
        record, account = found

        account.remove_held(record.amount)
        account.locked = True
        self._records.update_dispute_state(transaction.transaction_id, DisputeState.CHARGED_BACK)
        return ProcessingResult.APPLIED

    def _find_disputable(
        self, transaction: Transaction, allowed_states: Tuple[DisputeState, ...]
    ) -> Optional[Tuple[TransactionRecord, ClientAccount]]:
        """
        Look up the deposit a dispute-family transaction refers to and the
        account that owns it. Returns None if the transaction must be rejected.
        """
        record = self._records.lookup(transaction.transaction_id)

        if record is None:
            self._reject(transaction, "referenced transaction not found")
            return None

        if self._enforce_client_match and record.client_id != transaction.client_id:
            self._reject(transaction, f"client mismatch (owner is {record.client_id})")
            return None

        if not record.is_deposit:
            self._reject(transaction, f"only deposits can be disputed (got {record.kind.value})")
            return None

        # The owning account always exists since the deposit created it.
        account = self._accounts.get_or_create(record.client_id)
        if account.locked:
            self._reject(transaction, "account locked")
            return None

        if record.dispute_state not in allowed_states:
            self._reject(transaction, f"transaction is {record.dispute_state.value}")
            return None

        return record, account

    def _reject(self, transaction: Transaction, reason: str) -> ProcessingResult:
        logger.debug(f"Rejected {transaction}: {reason}")
        return ProcessingResult.REJECTED
