"""Account store with the account status state machine.

States: PENDING_VERIFICATION (initial), ACTIVE, SUSPENDED, FROZEN and
CLOSED (terminal). No rule method raises; failures are reported as
``False``, an empty account number, the CLOSED sentinel from
``evaluate_account_risk`` or ``-1`` from ``get_account_balance``.
"""

import logging
from dataclasses import dataclass, field, fields
from datetime import datetime
from decimal import Decimal
from typing import Any

from bank_rules.config import AccountRulesConfig
from bank_rules.context import BankingContext
from bank_rules.exceptions import EntityNotFoundError, InvalidEntityStateError
from bank_rules.logging import log_fields
from bank_rules.models.base import Amount, to_decimal
from bank_rules.models.financial import Account, AccountStatus, AccountType
from bank_rules.services.external import (
    AuthenticationService,
    ExternalDataService,
    NotificationService,
)

logger = logging.getLogger(__name__)

BALANCE_NOT_FOUND = Decimal("-1")

VERIFIED_EMAIL_SUBJECT = "Account Verified"
VERIFIED_EMAIL_BODY = "Your account has been verified successfully."


@dataclass
class SuspensionRecord:
    """Why and when an account was suspended through ``suspend_account``."""

    account_number: str
    reason: str
    suspended_at: datetime


@dataclass
class AccountStore:
    """In-memory store owning accounts and their status transitions."""

    context: BankingContext = field(default_factory=BankingContext)
    rules: AccountRulesConfig = field(default_factory=AccountRulesConfig)

    # Optional collaborators, None means skip the call
    auth_service: AuthenticationService | None = None
    notification_service: NotificationService | None = None
    data_service: ExternalDataService | None = None

    accounts: dict[str, Account] = field(default_factory=dict)
    suspended_account_count: int = 0
    total_managed_balance: Decimal = Decimal("0")
    suspension_log: list[SuspensionRecord] = field(default_factory=list)

    def set_authentication_service(self, service: AuthenticationService | None) -> None:
        """Attach (or detach with ``None``) the authentication collaborator."""
        self.auth_service = service

    def set_notification_service(self, service: NotificationService | None) -> None:
        """Attach (or detach with ``None``) the notification collaborator."""
        self.notification_service = service

    def set_external_data_service(self, service: ExternalDataService | None) -> None:
        """Attach (or detach with ``None``) the external data collaborator."""
        self.data_service = service

    def create_account(
        self,
        account_type: AccountType,
        initial_balance: Amount,
        owner_email: str | None = None,
    ) -> str:
        """Open a new account in PENDING_VERIFICATION.

        Parameters
        ----------
        account_type : AccountType
            Informational account type.
        initial_balance : Amount
            Opening balance, at least ``rules.minimum_balance``.
        owner_email : str | None
            Recipient of the verification e-mail. Defaults to
            ``rules.default_owner_email``.

        Returns
        -------
        str
            The new account number, or ``""`` if the balance is NaN or below
            the minimum, or if the store already holds ``rules.max_accounts``.
        """
        balance = to_decimal(initial_balance)
        if balance.is_nan() or balance < self.rules.minimum_balance:
            logger.debug("Rejected account creation: balance %s below minimum", balance)
            return ""

        if len(self.accounts) >= self.rules.max_accounts:
            logger.debug("Rejected account creation: store holds %d accounts", len(self.accounts))
            return ""

        account_number = self.context.next_account_number()
        self.accounts[account_number] = Account(
            account_number=account_number,
            account_type=account_type,
            status=AccountStatus.PENDING_VERIFICATION,
            balance=balance,
            owner_email=owner_email or self.rules.default_owner_email,
        )

        self.total_managed_balance += balance
        self.context.system_total_balance += balance
        self.context.total_accounts_created += 1

        logger.info(
            "Created %s account %s",
            account_type.value,
            account_number,
            extra=log_fields(
                account_number=account_number, status=AccountStatus.PENDING_VERIFICATION
            ),
        )
        return account_number

    def activate_account(self, account_number: str) -> bool:
        """Move an account to ACTIVE.

        Fails for unknown accounts, unverified pending accounts and accounts
        that are CLOSED or FROZEN. Anything else succeeds, including an
        account that is already ACTIVE.
        """
        account = self.accounts.get(account_number)
        if account is None:
            return False

        if account.status == AccountStatus.PENDING_VERIFICATION and not account.is_verified:
            return False

        if account.status in (AccountStatus.CLOSED, AccountStatus.FROZEN):
            return False

        account.status = AccountStatus.ACTIVE
        logger.info(
            "Activated account %s",
            account_number,
            extra=log_fields(account_number=account_number, status=AccountStatus.ACTIVE),
        )
        return True

    def suspend_account(self, account_number: str, reason: str) -> bool:
        """Suspend any account that is not CLOSED.

        Every successful call increments the suspended counter, even if the
        account was already SUSPENDED.
        """
        account = self.accounts.get(account_number)
        if account is None or account.status == AccountStatus.CLOSED:
            return False

        account.status = AccountStatus.SUSPENDED
        self.suspended_account_count += 1
        self.suspension_log.append(SuspensionRecord(account_number, reason, datetime.now()))
        logger.info(
            "Suspended account %s: %s",
            account_number,
            reason,
            extra=log_fields(account_number=account_number, status=AccountStatus.SUSPENDED),
        )
        return True

    def deactivate_account(self, account_number: str) -> bool:
        """Close an account with a zero balance. There is no way back."""
        account = self.accounts.get(account_number)
        if account is None or account.status == AccountStatus.CLOSED:
            return False

        if account.balance > 0:
            logger.debug("Cannot close %s: balance %s", account_number, account.balance)
            return False

        account.status = AccountStatus.CLOSED
        logger.info(
            "Closed account %s",
            account_number,
            extra=log_fields(account_number=account_number, status=AccountStatus.CLOSED),
        )
        return True

    def evaluate_account_risk(
        self,
        account_number: str,
        transaction_count: int,
        volume_last_day: Amount,
    ) -> AccountStatus:
        """Score an account's recent activity and apply the outcome.

        The score sums three bands (first matching threshold wins in each):

        ==================  ==============================================
        Transaction count   >100: 30, >50: 15, >20: 5
        Volume              >1,000,000: 40, >500,000: 20, >100,000: 10
        Verification/fraud  unverified+fraud: 35, unverified: 20, fraud: 25
        ==================  ==============================================

        A score at or above ``rules.high_risk_threshold`` freezes the
        account when the context is in compliance audit mode and suspends
        it otherwise; both of these write the new status. A score above 50
        returns PENDING_VERIFICATION and anything lower returns ACTIVE, and
        neither of these touches the stored status.

        Returns
        -------
        AccountStatus
            The outcome, or CLOSED if the account does not exist. The
            CLOSED sentinel does not mean the account was closed.
        """
        account = self.accounts.get(account_number)
        if account is None:
            return AccountStatus.CLOSED

        if self.data_service is not None:
            linked = self.data_service.get_linked_accounts(account_number)
            logger.debug("Account %s has %d linked accounts", account_number, len(linked))

        volume = to_decimal(volume_last_day)
        risk_score = 0

        if transaction_count > 100:
            risk_score += 30
        elif transaction_count > 50:
            risk_score += 15
        elif transaction_count > 20:
            risk_score += 5

        if volume.is_nan():
            logger.debug("Ignoring NaN volume for %s", account_number)
        elif volume > 1000000:
            risk_score += 40
        elif volume > 500000:
            risk_score += 20
        elif volume > 100000:
            risk_score += 10

        if not account.is_verified and account.has_fraud_alert:
            risk_score += 35
        elif not account.is_verified:
            risk_score += 20
        elif account.has_fraud_alert:
            risk_score += 25

        logger.debug("Risk score for %s: %d", account_number, risk_score)

        if risk_score >= self.rules.high_risk_threshold and self.context.compliance_audit_mode:
            account.status = AccountStatus.FROZEN
            logger.info(
                "Froze account %s (risk score %d)",
                account_number,
                risk_score,
                extra=log_fields(account_number=account_number, status=AccountStatus.FROZEN),
            )
            return AccountStatus.FROZEN
        elif risk_score >= self.rules.high_risk_threshold:
            account.status = AccountStatus.SUSPENDED
            self.suspended_account_count += 1
            logger.info(
                "Suspended account %s (risk score %d)",
                account_number,
                risk_score,
                extra=log_fields(account_number=account_number, status=AccountStatus.SUSPENDED),
            )
            return AccountStatus.SUSPENDED
        elif risk_score > 50:
            return AccountStatus.PENDING_VERIFICATION

        return AccountStatus.ACTIVE

    def update_account_status(self, account_number: str, new_status: AccountStatus) -> bool:
        """Apply a requested status transition.

        Rejected transitions:

        - anything out of CLOSED except CLOSED itself
        - FROZEN to ACTIVE while unverified or flagged for fraud
        - ACTIVE to SUSPENDED while ``risk_score`` is below the high risk
          threshold (non-ACTIVE accounts may be suspended at any score)
        """
        account = self.accounts.get(account_number)
        if account is None:
            return False

        current = account.status
        if current == AccountStatus.CLOSED and new_status != AccountStatus.CLOSED:
            return False
        elif current == AccountStatus.FROZEN and new_status == AccountStatus.ACTIVE:
            if not account.is_verified or account.has_fraud_alert:
                return False
        elif (
            new_status == AccountStatus.SUSPENDED
            and account.risk_score < self.rules.high_risk_threshold
            and current == AccountStatus.ACTIVE
        ):
            return False

        if current == AccountStatus.SUSPENDED and new_status != AccountStatus.SUSPENDED:
            self.suspended_account_count -= 1
        elif current != AccountStatus.SUSPENDED and new_status == AccountStatus.SUSPENDED:
            self.suspended_account_count += 1

        account.status = new_status
        if current != new_status:
            logger.info(
                "Account %s: %s -> %s",
                account_number,
                current.value,
                new_status.value,
                extra=log_fields(account_number=account_number, status=new_status),
            )
        return True

    def get_account(self, account_number: str) -> Account | None:
        """Return the stored (mutable) account, or None."""
        return self.accounts.get(account_number)

    def verify_account(self, account_number: str, verification_result: bool) -> bool:
        """Record the outcome of an identity verification.

        ``is_verified`` is always updated for a known account. The call only
        returns True (and activates the account) when the verification
        succeeded and the account was PENDING_VERIFICATION.
        """
        account = self.accounts.get(account_number)
        if account is None:
            return False

        account.is_verified = verification_result

        if self.data_service is not None:
            identity_status = self.data_service.get_identity_verification_status(account_number)
            credit_score = self.data_service.get_credit_score(account_number)
            logger.debug(
                "Account %s identity=%s credit_score=%s",
                account_number,
                identity_status,
                credit_score,
            )

        if self.notification_service is not None and verification_result:
            sent = self.notification_service.send_email_notification(
                account.owner_email, VERIFIED_EMAIL_SUBJECT, VERIFIED_EMAIL_BODY
            )
            if not sent:
                logger.warning("Verification e-mail for %s was not delivered", account_number)

        if verification_result and account.status == AccountStatus.PENDING_VERIFICATION:
            account.status = AccountStatus.ACTIVE
            logger.info(
                "Verified and activated account %s",
                account_number,
                extra=log_fields(account_number=account_number, status=AccountStatus.ACTIVE),
            )
            return True

        return False

    def get_account_balance(self, account_number: str) -> Decimal:
        """Return the balance, or ``-1`` if the account does not exist."""
        account = self.accounts.get(account_number)
        if account is None:
            return BALANCE_NOT_FOUND
        return account.balance

    def get_suspended_account_count(self) -> int:
        """Return the number of suspensions tracked by the store."""
        return self.suspended_account_count

    def override_account(self, account_number: str, /, **changes: Any) -> Account:
        """Set account fields directly, bypassing the state machine.

        Administrative and test-setup use only. The suspended counter is
        not adjusted, so overriding ``status`` can leave it out of step
        with the accounts actually in SUSPENDED.

        Raises
        ------
        EntityNotFoundError
            If the account does not exist.
        InvalidEntityStateError
            If a keyword does not name an ``Account`` field, or tries to
            change ``account_number``.
        """
        account = self.accounts.get(account_number)
        if account is None:
            raise EntityNotFoundError(f"Account {account_number} not found")

        allowed = {f.name for f in fields(Account)} - {"account_number"}
        unknown = sorted(set(changes) - allowed)
        if unknown:
            raise InvalidEntityStateError(f"Cannot override account fields: {', '.join(unknown)}")

        for name, value in changes.items():
            if name in ("balance", "credit_limit"):
                value = to_decimal(value)
            setattr(account, name, value)

        logger.warning(
            "Administrative override on %s: %s",
            account_number,
            sorted(changes),
            extra=log_fields(account_number=account_number),
        )
        return account

    def summary(self) -> dict[str, Any]:
        """Return account counts per status and the store counters."""
        counts = {status.value: 0 for status in AccountStatus}
        for account in self.accounts.values():
            counts[account.status.value] += 1
        return {
            "accounts": len(self.accounts),
            "by_status": counts,
            "suspended_account_count": self.suspended_account_count,
            "total_managed_balance": self.total_managed_balance,
        }
