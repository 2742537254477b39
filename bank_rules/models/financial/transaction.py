"""Transaction model for financial domain."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from bank_rules.models.financial.enums import TransactionStatus, TransactionType


@dataclass
class Transaction:
    """Journal entry for an accepted transaction.

    Only COMPLETED, APPROVED and PENDING outcomes are ever journaled.
    ``amount`` is stored as requested; account fields are opaque strings
    and are not checked against any account store.
    """

    transaction_id: int
    transaction_type: TransactionType
    amount: Decimal
    source_account: str
    dest_account: str
    timestamp: datetime
    status: TransactionStatus
