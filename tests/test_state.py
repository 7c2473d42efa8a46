import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from models import DisputeState, TransactionRecord, TransactionType
from state import AccountTable, TransactionStore


def make_record(client_id: int = 1, amount: int = 100) -> TransactionRecord:
    return TransactionRecord(client_id=client_id, kind=TransactionType.DEPOSIT, amount=amount)


class TestTransactionStore:
    def test_insert_and_lookup(self):
        store = TransactionStore()
        record = make_record()
        assert store.insert(1, record) is True
        assert store.lookup(1) is record
        assert 1 in store
        assert len(store) == 1

    def test_lookup_missing_returns_none(self):
        store = TransactionStore()
        assert store.lookup(42) is None
        assert 42 not in store

    def test_insert_duplicate_is_noop(self):
        store = TransactionStore()
        first = make_record(amount=100)
        second = make_record(amount=999)
        store.insert(1, first)

        assert store.insert(1, second) is False
        assert store.lookup(1) is first
        assert len(store) == 1

    def test_update_dispute_state(self):
        store = TransactionStore()
        store.insert(1, make_record())
        store.update_dispute_state(1, DisputeState.DISPUTED)
        assert store.lookup(1).dispute_state == DisputeState.DISPUTED


class TestAccountTable:
    def test_get_or_create_creates_zeroed_account(self):
        table = AccountTable()
        account = table.get_or_create(5)
        assert account.client_id == 5
        assert account.available == 0
        assert account.held == 0
        assert account.locked is False

    def test_get_or_create_returns_same_account(self):
        table = AccountTable()
        account = table.get_or_create(5)
        account.credit(10)
        assert table.get_or_create(5) is account
        assert table.get_or_create(5).available == 10
        assert len(table) == 1

    def test_get_does_not_create(self):
        table = AccountTable()
        assert table.get(3) is None
        assert len(table) == 0

    def test_get_all_accounts_sorted_by_client(self):
        table = AccountTable()
        for client_id in (3, 1, 2):
            table.get_or_create(client_id)
        assert list(table.get_all_accounts()) == [1, 2, 3]
