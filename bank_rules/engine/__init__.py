"""Transaction processing engine."""

from bank_rules.engine.transactions import TransactionEngine

__all__ = ["TransactionEngine"]
