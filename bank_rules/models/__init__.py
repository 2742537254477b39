"""Domain models for the banking rule engines."""

from bank_rules.models.base import Amount, to_decimal
from bank_rules.models.financial import Account, Transaction

__all__ = ["Account", "Amount", "Transaction", "to_decimal"]
