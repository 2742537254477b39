"""Financial domain request generators."""

from bank_rules.generators.financial.account import AccountRequest, AccountRequestGenerator
from bank_rules.generators.financial.transaction import (
    TransactionRequest,
    TransactionRequestGenerator,
)

__all__ = [
    "AccountRequest",
    "AccountRequestGenerator",
    "TransactionRequest",
    "TransactionRequestGenerator",
]
