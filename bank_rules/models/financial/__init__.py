"""Financial domain models."""

from bank_rules.models.financial.account import Account
from bank_rules.models.financial.enums import (
    AccountStatus,
    AccountType,
    ComplianceLevel,
    TransactionStatus,
    TransactionType,
    VerificationResult,
)
from bank_rules.models.financial.transaction import Transaction

__all__ = [
    "Account",
    "AccountStatus",
    "AccountType",
    "ComplianceLevel",
    "Transaction",
    "TransactionStatus",
    "TransactionType",
    "VerificationResult",
]
