"""Account lifecycle and transaction rule engines for a banking demo."""

from bank_rules.context import BankingContext
from bank_rules.engine import TransactionEngine
from bank_rules.store import AccountStore

__version__ = "0.1.0"

__all__ = ["AccountStore", "BankingContext", "TransactionEngine"]
