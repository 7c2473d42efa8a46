from dataclasses import dataclass
from enum import Enum
from typing import Optional

from amounts import format_amount


class TransactionType(Enum):
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"

    @property
    def carries_amount(self) -> bool:
        return self in (TransactionType.DEPOSIT, TransactionType.WITHDRAWAL)


class DisputeState(Enum):
    NORMAL = "normal"
    DISPUTED = "disputed"
    RESOLVED = "resolved"
    CHARGED_BACK = "charged_back"


class ProcessingResult(Enum):
    APPLIED = "applied"
    REJECTED = "rejected"


@dataclass(frozen=True)
class Transaction:
    """An incoming event. Amounts are integer ten-thousandths."""

    transaction_type: TransactionType
    client_id: int
    transaction_id: int
    amount: Optional[int] = None

    def __repr__(self) -> str:
        amount = format_amount(self.amount) if self.amount is not None else None
        return f"Transaction({self.transaction_type.value}, client={self.client_id}, tx={self.transaction_id}, amount={amount})"


@dataclass
class TransactionRecord:
    client_id: int
    kind: TransactionType
    amount: int
    dispute_state: DisputeState = DisputeState.NORMAL

    @property
    def is_deposit(self) -> bool:
        return self.kind == TransactionType.DEPOSIT


@dataclass
class ClientAccount:
    client_id: int
    available: int = 0
    held: int = 0
    locked: bool = False

    @property
    def total(self) -> int:
        return self.available + self.held

    def credit(self, amount: int) -> None:
        self.available += amount

    def debit(self, amount: int) -> None:
        self.available -= amount

    def hold(self, amount: int) -> None:
        self.available -= amount
        self.held += amount

    def release_hold(self, amount: int) -> None:
        self.held -= amount
        self.available += amount

    def remove_held(self, amount: int) -> None:
        self.held -= amount

    def snapshot(self) -> dict:
        """Formatted view of the account, as written to the output table."""
        return {
            "available": format_amount(self.available),
            "held": format_amount(self.held),
            "total": format_amount(self.total),
            "locked": self.locked,
        }


class ProcessingStats:
    """Counters for a single run."""

    def __init__(self):
        self.applied = 0
        self.rejected = 0
        self.malformed = 0

    def record_applied(self):
        self.applied += 1

    def record_rejected(self):
        self.rejected += 1

    def record_malformed(self):
        self.malformed += 1

    def __repr__(self) -> str:
        return f"ProcessingStats(applied={self.applied}, rejected={self.rejected}, malformed={self.malformed})"
