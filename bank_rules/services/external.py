"""Interfaces for the external collaborators consumed by the rule engines.

Every collaborator is optional. A store or engine holding ``None`` in a
collaborator slot skips the call; it never treats absence as an error.
Return values signal success with ``True``; a ``False`` is logged by the
caller and never rolls back the state change that triggered the call.
"""

from abc import ABC, abstractmethod

from bank_rules.models.financial.enums import ComplianceLevel, VerificationResult


class AuthenticationService(ABC):
    """Credential and multi-factor checks.

    Attached to ``AccountStore`` but not called by any current rule.
    """

    @abstractmethod
    def validate_credentials(self, username: str, password: str) -> bool:
        """Return True if the credentials are valid."""

    @abstractmethod
    def enable_multi_factor(self, account_number: str) -> bool:
        """Enable multi-factor authentication for an account."""

    @abstractmethod
    def verify_multi_factor_token(self, account_number: str, token: str) -> VerificationResult:
        """Check a multi-factor token for an account."""

    @abstractmethod
    def lock_account(self, account_number: str) -> bool:
        """Lock an account for security purposes."""


class NotificationService(ABC):
    """Outbound customer notifications."""

    @abstractmethod
    def send_email_notification(self, email: str, subject: str, body: str) -> bool:
        """Send an e-mail."""

    @abstractmethod
    def send_sms_notification(self, phone_number: str, message: str) -> bool:
        """Send an SMS."""

    @abstractmethod
    def send_push_notification(self, device_token: str, title: str, message: str) -> bool:
        """Send a push notification to a device."""

    @abstractmethod
    def subscribe_to_notifications(self, account_number: str, notification_type: str) -> bool:
        """Subscribe an account to a notification type."""


class ExternalDataService(ABC):
    """Third-party lookups about an account holder."""

    @abstractmethod
    def get_credit_score(self, account_number: str) -> str:
        """Return the credit score for an account."""

    @abstractmethod
    def get_identity_verification_status(self, account_number: str) -> str:
        """Return the identity verification status for an account."""

    @abstractmethod
    def validate_bank_account(self, bank_account: str, routing_number: str) -> bool:
        """Check a bank account number against its routing number."""

    @abstractmethod
    def get_linked_accounts(self, primary_account: str) -> list[str]:
        """Return accounts linked to ``primary_account``."""


class ComplianceCheckService(ABC):
    """Regulatory screening of accounts."""

    @abstractmethod
    def check_compliance_level(self, account_number: str) -> ComplianceLevel:
        """Return the compliance level of an account."""

    @abstractmethod
    def report_suspicious_activity(self, account_number: str, description: str) -> bool:
        """Record a suspicious activity report."""

    @abstractmethod
    def get_blacklist(self) -> list[str]:
        """Return all blacklisted account numbers."""

    @abstractmethod
    def is_account_blacklisted(self, account_number: str) -> bool:
        """Return True if the account is blacklisted."""


class AuditLoggingService(ABC):
    """Append-only audit trail."""

    @abstractmethod
    def log_transaction(self, account_number: str, transaction_details: str, timestamp: str) -> bool:
        """Record a processed transaction."""

    @abstractmethod
    def log_account_event(self, account_number: str, event_type: str, event_details: str) -> bool:
        """Record an account event."""

    @abstractmethod
    def get_audit_trail(self, account_number: str) -> list[str]:
        """Return audit entries for an account, oldest first."""

    @abstractmethod
    def archive_audit_logs(self, archive_date: str) -> bool:
        """Archive entries recorded before ``archive_date`` (ISO date)."""
