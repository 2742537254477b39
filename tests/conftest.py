"""Pytest configuration and fixtures."""

from unittest.mock import create_autospec

import pytest

from bank_rules.context import BankingContext
from bank_rules.engine.transactions import TransactionEngine
from bank_rules.models.financial.enums import ComplianceLevel
from bank_rules.services.external import (
    AuditLoggingService,
    ComplianceCheckService,
    ExternalDataService,
    NotificationService,
)
from bank_rules.store.accounts import AccountStore


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def context() -> BankingContext:
    """Fresh runtime context with both flags off."""
    return BankingContext()


@pytest.fixture
def store(context: BankingContext) -> AccountStore:
    """Account store without collaborators."""
    return AccountStore(context=context)


@pytest.fixture
def engine(context: BankingContext) -> TransactionEngine:
    """Transaction engine without collaborators."""
    return TransactionEngine(context=context)


@pytest.fixture
def mock_notification():
    mock = create_autospec(NotificationService, instance=True)
    mock.send_email_notification.return_value = True
    return mock


@pytest.fixture
def mock_data_service():
    mock = create_autospec(ExternalDataService, instance=True)
    mock.get_linked_accounts.return_value = []
    mock.get_identity_verification_status.return_value = "VERIFIED"
    mock.get_credit_score.return_value = "720"
    return mock


@pytest.fixture
def mock_compliance():
    mock = create_autospec(ComplianceCheckService, instance=True)
    mock.check_compliance_level.return_value = ComplianceLevel.LOW_RISK
    return mock


@pytest.fixture
def mock_audit():
    mock = create_autospec(AuditLoggingService, instance=True)
    mock.log_transaction.return_value = True
    mock.log_account_event.return_value = True
    return mock
