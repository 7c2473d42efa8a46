import logging
from typing import Dict, Iterable

from csv_io import read_transactions
from models import ClientAccount, ProcessingResult, ProcessingStats, Transaction
from processor import TransactionProcessor
from state import AccountTable, TransactionStore

logger = logging.getLogger(__name__)


class PaymentsEngine:
    """
    Owns the record store and account table and feeds transactions
    through the processor in a single sequential pass, in input order.
    """

    def __init__(self, enforce_client_match: bool = False):
        self._records = TransactionStore()
        self._accounts = AccountTable()
        self._processor = TransactionProcessor(self._records, self._accounts, enforce_client_match)
        self.stats = ProcessingStats()

    def process_transaction(self, transaction: Transaction) -> ProcessingResult:
        result = self._processor.process_transaction(transaction)
        if result == ProcessingResult.APPLIED:
            self.stats.record_applied()
        else:
            self.stats.record_rejected()
        return result

    def process_transactions(self, transactions: Iterable[Transaction]) -> Dict[int, ClientAccount]:
        """Apply every transaction in order and return final account states."""
        for transaction in transactions:
            self.process_transaction(transaction)

        logger.info(
            f"Processed: {self.stats.applied} applied, "
            f"{self.stats.rejected} rejected, "
            f"{self.stats.malformed} malformed rows skipped"
        )
        return self.accounts

    def process_file(self, filepath: str) -> Dict[int, ClientAccount]:
        """Process CSV file and return final account states."""
        logger.info(f"Reading transactions from {filepath}")
        with open(filepath, "r", newline="", encoding="utf-8-sig", errors="replace") as f:
            transactions = read_transactions(f, on_malformed=lambda row: self.stats.record_malformed())
            return self.process_transactions(transactions)

    @property
    def accounts(self) -> Dict[int, ClientAccount]:
        return self._accounts.get_all_accounts()

    @property
    def records(self) -> TransactionStore:
        return self._records
