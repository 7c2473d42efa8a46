import csv
import logging
from decimal import Decimal
from typing import Callable, Dict, Iterator, Mapping, Optional, TextIO

from amounts import parse_amount
from models import ClientAccount, Transaction, TransactionType

logger = logging.getLogger(__name__)

MAX_CLIENT_ID = 2**16 - 1
MAX_TRANSACTION_ID = 2**32 - 1

OUTPUT_HEADER = ["client", "available", "held", "total", "locked"]


class MalformedRowError(ValueError):
    """Raised for an input row that cannot be turned into a Transaction."""


def _parse_id(value: Optional[str], field: str, maximum: int) -> int:
    if not value:
        raise MalformedRowError(f"missing {field}")
    try:
        parsed = int(value)
    except ValueError:
        raise MalformedRowError(f"invalid {field} {value!r}") from None
    if not 0 <= parsed <= maximum:
        raise MalformedRowError(f"{field} {parsed} out of range")
    return parsed


def parse_row(row: Mapping[Optional[str], Optional[str]]) -> Transaction:
    """Parse CSV row into Transaction."""
    normalized = {
        k.strip().lower(): v.strip() for k, v in row.items() if isinstance(k, str) and isinstance(v, str)
    }

    type_str = normalized.get("type", "").lower()
    try:
        transaction_type = TransactionType(type_str)
    except ValueError:
        raise MalformedRowError(f"unknown transaction type {type_str!r}") from None

    client_id = _parse_id(normalized.get("client"), "client", MAX_CLIENT_ID)
    transaction_id = _parse_id(normalized.get("tx"), "tx", MAX_TRANSACTION_ID)

    amount = None
    amount_str = normalized.get("amount", "")
    if transaction_type.carries_amount:
        if not amount_str:
            raise MalformedRowError(f"{transaction_type.value} without amount")
        try:
            amount = parse_amount(amount_str)
        except ValueError as e:
            raise MalformedRowError(str(e)) from None
        if Decimal(amount_str) < 0:
            raise MalformedRowError(f"negative amount {amount_str}")

    return Transaction(
        transaction_type=transaction_type,
        client_id=client_id,
        transaction_id=transaction_id,
        amount=amount,
    )


def read_transactions(
    stream: TextIO, on_malformed: Optional[Callable[[Dict], None]] = None
) -> Iterator[Transaction]:
    """
    Lazily yield transactions from a CSV stream in file order.
    Malformed rows are logged and skipped; on_malformed is called for each.
    """
    reader = csv.DictReader(stream, skipinitialspace=True)
    for row in reader:
        try:
            yield parse_row(row)
        except MalformedRowError as e:
            logger.warning(f"Skipping row {reader.line_num}: {e}")
            if on_malformed is not None:
                on_malformed(row)


def write_accounts(accounts: Mapping[int, ClientAccount], stream: TextIO) -> None:
    """Write one row per account in ascending client order."""
    writer = csv.writer(stream, lineterminator="\n")
    writer.writerow(OUTPUT_HEADER)
    for client_id in sorted(accounts):
        snapshot = accounts[client_id].snapshot()
        writer.writerow([
            client_id,
            snapshot["available"],
            snapshot["held"],
            snapshot["total"],
            str(snapshot["locked"]).lower(),
        ])
