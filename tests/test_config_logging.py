"""Tests for config and logging."""

import json
import logging
import os
import sys
from decimal import Decimal
from unittest.mock import patch

import pytest

from bank_rules.config import AccountRulesConfig, BankRulesConfig, TransactionRulesConfig
from bank_rules.exceptions import ConfigurationError
from bank_rules.logging import JsonFormatter, log_fields, setup_logging
from bank_rules.models.financial import AccountStatus

ENV_VARS = [
    "SYSTEM_LOCKED",
    "COMPLIANCE_AUDIT_MODE",
    "SEED",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "MAX_ACCOUNTS",
    "MAX_DAILY_TRANSACTIONS",
]


@pytest.fixture
def clean_env():
    """Environment without any bank-rules variables."""
    env = {k: v for k, v in os.environ.items() if k not in ENV_VARS}
    with patch.dict(os.environ, env, clear=True):
        yield


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way the test found it."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    package_level = logging.getLogger("bank_rules").level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("bank_rules").setLevel(package_level)


class TestAccountRulesConfig:
    """Tests for AccountRulesConfig."""

    def test_default_values(self) -> None:
        """Test default thresholds."""
        config = AccountRulesConfig()

        assert config.minimum_balance == Decimal("0.01")
        assert config.max_accounts == 10
        assert config.high_risk_threshold == 75
        assert config.default_owner_email == "user@example.com"


class TestTransactionRulesConfig:
    """Tests for TransactionRulesConfig."""

    def test_default_values(self) -> None:
        """Test default limits."""
        config = TransactionRulesConfig()

        assert config.min_amount == Decimal("0.01")
        assert config.max_amount == Decimal("1000000")
        assert config.max_withdrawal == Decimal("50000")
        assert config.max_refund == Decimal("10000")
        assert config.urgent_threshold == Decimal("100000")
        assert config.max_daily_transactions == 1000
        assert config.max_daily_volume == Decimal("5000000")
        assert config.high_risk_compliance_limit == Decimal("50000")


class TestBankRulesConfig:
    """Tests for BankRulesConfig."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        config = BankRulesConfig()

        assert isinstance(config.accounts, AccountRulesConfig)
        assert isinstance(config.transactions, TransactionRulesConfig)
        assert config.system_locked is False
        assert config.compliance_audit_mode is False
        assert config.seed is None
        assert config.log_level == "INFO"
        assert config.log_format == "standard"

    def test_from_env_default(self, clean_env) -> None:
        """Test creating config from an empty environment."""
        config = BankRulesConfig.from_env()

        assert config.system_locked is False
        assert config.compliance_audit_mode is False
        assert config.seed is None
        assert config.log_level == "INFO"
        assert config.accounts.max_accounts == 10
        assert config.transactions.max_daily_transactions == 1000

    def test_from_env_custom(self, clean_env) -> None:
        """Test creating config from custom environment variables."""
        env_vars = {
            "SYSTEM_LOCKED": "true",
            "COMPLIANCE_AUDIT_MODE": "TRUE",
            "SEED": "12345",
            "LOG_LEVEL": "DEBUG",
            "LOG_FORMAT": "json",
            "MAX_ACCOUNTS": "3",
            "MAX_DAILY_TRANSACTIONS": "50",
        }
        with patch.dict(os.environ, env_vars):
            config = BankRulesConfig.from_env()

        assert config.system_locked is True
        assert config.compliance_audit_mode is True
        assert config.seed == 12345
        assert config.log_level == "DEBUG"
        assert config.log_format == "json"
        assert config.accounts.max_accounts == 3
        assert config.transactions.max_daily_transactions == 50

    def test_from_env_invalid_integer(self, clean_env) -> None:
        """Test that a non-numeric limit raises ConfigurationError."""
        with patch.dict(os.environ, {"MAX_ACCOUNTS": "ten"}):
            with pytest.raises(ConfigurationError, match="MAX_ACCOUNTS"):
                BankRulesConfig.from_env()

    def test_from_env_invalid_seed(self, clean_env) -> None:
        with patch.dict(os.environ, {"SEED": "abc"}):
            with pytest.raises(ConfigurationError, match="SEED"):
                BankRulesConfig.from_env()


@pytest.mark.usefixtures("restore_root_logger")
class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_logging_default(self) -> None:
        """Test default logging setup."""
        setup_logging()

        assert logging.getLogger("bank_rules").level == logging.INFO

    def test_setup_logging_debug(self) -> None:
        """Test debug level logging setup."""
        setup_logging(level="DEBUG")

        assert logging.getLogger().level == logging.DEBUG

    def test_setup_logging_invalid_level(self) -> None:
        """Test logging with invalid level defaults to INFO."""
        setup_logging(level="INVALID")

        assert logging.getLogger().level == logging.INFO

    def test_setup_logging_json_format(self) -> None:
        """Test JSON format logging."""
        setup_logging(format_type="json")

        root = logging.getLogger()
        assert any(isinstance(h.formatter, JsonFormatter) for h in root.handlers)

    def test_setup_logging_replaces_handlers(self) -> None:
        """Test that setup_logging replaces existing handlers."""
        root = logging.getLogger()
        root.addHandler(logging.StreamHandler())
        root.addHandler(logging.StreamHandler())

        setup_logging()

        assert len(root.handlers) == 1
        assert root.handlers[0].stream is sys.stderr

    def test_faker_logger_quieted(self) -> None:
        """Test that the faker logger stays at WARNING."""
        setup_logging(level="DEBUG")

        assert logging.getLogger("faker").level == logging.WARNING


class TestJsonFormatter:
    """Tests for JsonFormatter."""

    def _record(self, **kwargs) -> logging.LogRecord:
        defaults = dict(
            name="bank_rules.test",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg="Transaction ID: %d Status: %s",
            args=(1001, "COMPLETED"),
            exc_info=None,
        )
        defaults.update(kwargs)
        return logging.LogRecord(**defaults)

    def test_format_basic(self) -> None:
        """Test basic log formatting."""
        data = json.loads(JsonFormatter().format(self._record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "bank_rules.test"
        assert data["message"] == "Transaction ID: 1001 Status: COMPLETED"
        assert "timestamp" in data

    def test_format_with_exception(self) -> None:
        """Test formatting with exception info."""
        try:
            raise ValueError("boom")
        except ValueError:
            exc_info = sys.exc_info()

        data = json.loads(JsonFormatter().format(self._record(exc_info=exc_info)))

        assert "ValueError" in data["exception"]

    def test_format_with_extra_decimal(self) -> None:
        """Test that extra fields holding Decimals are serialised."""
        record = self._record()
        record.extra = {"amount": Decimal("12.50")}

        data = json.loads(JsonFormatter().format(record))

        assert data["amount"] == "12.50"

    def test_format_context_fields(self) -> None:
        """Test that fields passed through extra become top-level keys."""
        logger = logging.getLogger("bank_rules.test.json")
        record = logger.makeRecord(
            logger.name,
            logging.INFO,
            __file__,
            1,
            "Transaction ID: %d Status: %s",
            (1001, "COMPLETED"),
            None,
            extra=log_fields(transaction_id=1001, amount=Decimal("99.90"), status="COMPLETED"),
        )

        data = json.loads(JsonFormatter().format(record))

        assert data["transaction_id"] == 1001
        assert data["amount"] == "99.90"
        assert data["status"] == "COMPLETED"
        assert "account_number" not in data


class TestLogFields:
    """Tests for log_fields."""

    def test_enum_values_and_none_dropped(self) -> None:
        extra = log_fields(
            account_number="ACC500001",
            status=AccountStatus.FROZEN,
            transaction_id=None,
        )

        assert extra == {"account_number": "ACC500001", "status": "FROZEN"}

    def test_unknown_field(self) -> None:
        with pytest.raises(ValueError, match="reason"):
            log_fields(reason="fraud")


class TestPackageInit:
    """Tests for bank_rules __init__.py."""

    def test_version_exported(self) -> None:
        from bank_rules import __version__

        assert isinstance(__version__, str)
