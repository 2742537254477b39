"""Configuration management for bank-rules."""

from dataclasses import dataclass, field
from decimal import Decimal

from bank_rules.exceptions import ConfigurationError


@dataclass
class AccountRulesConfig:
    """Thresholds used by the account state machine."""

    minimum_balance: Decimal = Decimal("0.01")
    max_accounts: int = 10
    high_risk_threshold: int = 75
    default_owner_email: str = "user@example.com"


@dataclass
class TransactionRulesConfig:
    """Limits used by transaction validation and transfer rules."""

    min_amount: Decimal = Decimal("0.01")
    max_amount: Decimal = Decimal("1000000")
    max_withdrawal: Decimal = Decimal("50000")
    max_refund: Decimal = Decimal("10000")
    urgent_threshold: Decimal = Decimal("100000")
    max_daily_transactions: int = 1000
    max_daily_volume: Decimal = Decimal("5000000")
    high_risk_compliance_limit: Decimal = Decimal("50000")


@dataclass
class BankRulesConfig:
    """Main configuration for bank-rules."""

    accounts: AccountRulesConfig = field(default_factory=AccountRulesConfig)
    transactions: TransactionRulesConfig = field(default_factory=TransactionRulesConfig)
    system_locked: bool = False
    compliance_audit_mode: bool = False
    seed: int | None = None
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "BankRulesConfig":
        """Create config from environment variables."""
        import os

        accounts = AccountRulesConfig(
            max_accounts=_int_env("MAX_ACCOUNTS", "10"),
        )
        transactions = TransactionRulesConfig(
            max_daily_transactions=_int_env("MAX_DAILY_TRANSACTIONS", "1000"),
        )

        return cls(
            accounts=accounts,
            transactions=transactions,
            system_locked=os.getenv("SYSTEM_LOCKED", "false").lower() == "true",
            compliance_audit_mode=os.getenv("COMPLIANCE_AUDIT_MODE", "false").lower() == "true",
            seed=_int_env("SEED", None) if os.getenv("SEED") else None,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )


def _int_env(name: str, default: str | None) -> int:
    import os

    raw = os.getenv(name, default)
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc
