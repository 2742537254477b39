"""Account model for financial domain."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from bank_rules.models.financial.enums import AccountStatus, AccountType


@dataclass
class Account:
    """Bank account record owned by an ``AccountStore``.

    ``account_type`` is informational only. ``credit_limit`` is always zero
    at creation and no rule reads it. ``risk_score`` is only ever set from
    outside the state machine (see ``AccountStore.override_account``) and is
    read when forcing an ACTIVE account into SUSPENDED.
    """

    account_number: str
    account_type: AccountType
    status: AccountStatus
    balance: Decimal
    credit_limit: Decimal = Decimal("0")
    risk_score: int = 0
    is_verified: bool = False
    has_fraud_alert: bool = False
    owner_email: str = "user@example.com"
    created_at: datetime = field(default_factory=datetime.now)
