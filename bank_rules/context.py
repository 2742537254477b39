"""Shared runtime flags and counters for account stores and transaction engines."""

from dataclasses import dataclass, field
from decimal import Decimal

from bank_rules.config import BankRulesConfig

ACCOUNT_NUMBER_PREFIX = "ACC"
ACCOUNT_NUMBER_OFFSET = 500000
TRANSACTION_ID_OFFSET = 1000


@dataclass
class BankingContext:
    """Runtime state shared by the components wired to it.

    Holds the two switches that change rule outcomes (``system_locked`` for
    transfers, ``compliance_audit_mode`` for risk evaluation), a set of
    counters kept purely for observability, and the identifier sequences.
    Sequences only move forward: resetting counters or daily limits never
    rewinds them, so account numbers and transaction ids are unique for the
    lifetime of the context.
    """

    system_locked: bool = False
    compliance_audit_mode: bool = False

    # Observability counters, never read by any rule
    total_accounts_created: int = 0
    system_total_balance: Decimal = Decimal("0")
    total_transactions_processed: int = 0
    total_volume_processed: Decimal = Decimal("0")

    _account_sequence: int = field(default=ACCOUNT_NUMBER_OFFSET, repr=False)
    _transaction_sequence: int = field(default=TRANSACTION_ID_OFFSET, repr=False)

    @classmethod
    def from_config(cls, config: BankRulesConfig) -> "BankingContext":
        """Create a context seeded with the flags from ``config``."""
        return cls(
            system_locked=config.system_locked,
            compliance_audit_mode=config.compliance_audit_mode,
        )

    def next_account_number(self) -> str:
        """Allocate the next account number (``ACC500001``, ``ACC500002``, ...)."""
        self._account_sequence += 1
        return f"{ACCOUNT_NUMBER_PREFIX}{self._account_sequence}"

    def next_transaction_id(self) -> int:
        """Allocate the next transaction id, starting at 1001."""
        self._transaction_sequence += 1
        return self._transaction_sequence

    def reset_counters(self) -> None:
        """Zero the observability counters. Identifier sequences are kept."""
        self.total_accounts_created = 0
        self.system_total_balance = Decimal("0")
        self.total_transactions_processed = 0
        self.total_volume_processed = Decimal("0")

    def summary(self) -> dict[str, object]:
        """Return the current flags and counters."""
        return {
            "system_locked": self.system_locked,
            "compliance_audit_mode": self.compliance_audit_mode,
            "total_accounts_created": self.total_accounts_created,
            "system_total_balance": self.system_total_balance,
            "total_transactions_processed": self.total_transactions_processed,
            "total_volume_processed": self.total_volume_processed,
        }
