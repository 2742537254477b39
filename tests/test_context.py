"""Tests for BankingContext."""

from decimal import Decimal

from bank_rules.config import BankRulesConfig
from bank_rules.context import BankingContext


class TestBankingContext:
    """Tests for flags, counters and identifier sequences."""

    def test_defaults(self) -> None:
        context = BankingContext()

        assert context.system_locked is False
        assert context.compliance_audit_mode is False
        assert context.total_accounts_created == 0
        assert context.system_total_balance == Decimal("0")

    def test_from_config(self) -> None:
        """Test that flags are copied from configuration."""
        config = BankRulesConfig(system_locked=True, compliance_audit_mode=True)

        context = BankingContext.from_config(config)

        assert context.system_locked is True
        assert context.compliance_audit_mode is True

    def test_account_numbers_start_above_offset(self) -> None:
        context = BankingContext()

        assert context.next_account_number() == "ACC500001"
        assert context.next_account_number() == "ACC500002"

    def test_transaction_ids_start_above_offset(self) -> None:
        context = BankingContext()

        assert context.next_transaction_id() == 1001
        assert context.next_transaction_id() == 1002

    def test_reset_counters_keeps_sequences(self) -> None:
        """Test that resetting counters never rewinds identifiers."""
        context = BankingContext()
        context.next_account_number()
        context.next_transaction_id()
        context.total_accounts_created = 4
        context.total_volume_processed = Decimal("99")

        context.reset_counters()

        assert context.total_accounts_created == 0
        assert context.total_volume_processed == Decimal("0")
        assert context.next_account_number() == "ACC500002"
        assert context.next_transaction_id() == 1002

    def test_independent_contexts_have_independent_sequences(self) -> None:
        first = BankingContext()
        second = BankingContext()

        first.next_account_number()

        assert second.next_account_number() == "ACC500001"

    def test_summary(self) -> None:
        summary = BankingContext(system_locked=True).summary()

        assert summary["system_locked"] is True
        assert summary["total_transactions_processed"] == 0
