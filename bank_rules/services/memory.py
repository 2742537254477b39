"""In-memory collaborator implementations used by scenarios and tests."""

import logging
from dataclasses import dataclass, field
from datetime import date, datetime

from bank_rules.models.financial.enums import ComplianceLevel, VerificationResult
from bank_rules.services.external import (
    AuditLoggingService,
    AuthenticationService,
    ComplianceCheckService,
    ExternalDataService,
    NotificationService,
)

logger = logging.getLogger(__name__)


@dataclass
class AuditEntry:
    """Single audit trail entry."""

    account_number: str
    kind: str  # "TRANSACTION" or the account event type
    details: str
    recorded_at: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        return f"{self.recorded_at.isoformat()} {self.kind} {self.details}"


class InMemoryAuditLog(AuditLoggingService):
    """Audit log kept in a list; archived entries move to ``archived``."""

    def __init__(self) -> None:
        self.entries: list[AuditEntry] = []
        self.archived: list[AuditEntry] = []

    def log_transaction(self, account_number: str, transaction_details: str, timestamp: str) -> bool:
        self.entries.append(
            AuditEntry(account_number, "TRANSACTION", f"{transaction_details} @ {timestamp}")
        )
        return True

    def log_account_event(self, account_number: str, event_type: str, event_details: str) -> bool:
        self.entries.append(AuditEntry(account_number, event_type, event_details))
        return True

    def get_audit_trail(self, account_number: str) -> list[str]:
        return [str(e) for e in self.entries if e.account_number == account_number]

    def archive_audit_logs(self, archive_date: str) -> bool:
        """Move entries recorded before ``archive_date`` to the archive.

        Returns False if ``archive_date`` is not an ISO date.
        """
        try:
            cutoff = date.fromisoformat(archive_date)
        except ValueError:
            logger.warning("Invalid archive date: %s", archive_date)
            return False

        keep = []
        for entry in self.entries:
            if entry.recorded_at.date() < cutoff:
                self.archived.append(entry)
            else:
                keep.append(entry)
        self.entries = keep
        return True


class InMemoryComplianceService(ComplianceCheckService):
    """Compliance levels looked up from a dict.

    Blacklisted accounts always report BLOCKED; unknown accounts report
    ``default_level``.
    """

    def __init__(
        self,
        levels: dict[str, ComplianceLevel] | None = None,
        blacklist: list[str] | None = None,
        default_level: ComplianceLevel = ComplianceLevel.LOW_RISK,
    ) -> None:
        self.levels = dict(levels or {})
        self.blacklist = list(blacklist or [])
        self.default_level = default_level
        self.reports: list[tuple[str, str]] = []

    def check_compliance_level(self, account_number: str) -> ComplianceLevel:
        if account_number in self.blacklist:
            return ComplianceLevel.BLOCKED
        return self.levels.get(account_number, self.default_level)

    def report_suspicious_activity(self, account_number: str, description: str) -> bool:
        self.reports.append((account_number, description))
        return True

    def get_blacklist(self) -> list[str]:
        return list(self.blacklist)

    def is_account_blacklisted(self, account_number: str) -> bool:
        return account_number in self.blacklist


class RecordingNotificationService(NotificationService):
    """Collects every message instead of delivering it."""

    def __init__(self) -> None:
        self.emails: list[tuple[str, str, str]] = []
        self.sms: list[tuple[str, str]] = []
        self.pushes: list[tuple[str, str, str]] = []
        self.subscriptions: dict[str, set[str]] = {}

    def send_email_notification(self, email: str, subject: str, body: str) -> bool:
        self.emails.append((email, subject, body))
        return True

    def send_sms_notification(self, phone_number: str, message: str) -> bool:
        self.sms.append((phone_number, message))
        return True

    def send_push_notification(self, device_token: str, title: str, message: str) -> bool:
        self.pushes.append((device_token, title, message))
        return True

    def subscribe_to_notifications(self, account_number: str, notification_type: str) -> bool:
        self.subscriptions.setdefault(account_number, set()).add(notification_type)
        return True


class StaticExternalDataService(ExternalDataService):
    """Returns the same canned answers for every account."""

    def __init__(
        self,
        credit_score: str = "700",
        identity_status: str = "VERIFIED",
        linked_accounts: dict[str, list[str]] | None = None,
    ) -> None:
        self.credit_score = credit_score
        self.identity_status = identity_status
        self.linked_accounts = dict(linked_accounts or {})
        self.lookups: list[tuple[str, str]] = []

    def get_credit_score(self, account_number: str) -> str:
        self.lookups.append(("credit_score", account_number))
        return self.credit_score

    def get_identity_verification_status(self, account_number: str) -> str:
        self.lookups.append(("identity", account_number))
        return self.identity_status

    def validate_bank_account(self, bank_account: str, routing_number: str) -> bool:
        # ABA routing numbers are nine digits
        return bool(bank_account) and len(routing_number) == 9 and routing_number.isdigit()

    def get_linked_accounts(self, primary_account: str) -> list[str]:
        self.lookups.append(("linked_accounts", primary_account))
        return list(self.linked_accounts.get(primary_account, []))


class AllowAllAuthenticationService(AuthenticationService):
    """Authentication that only checks for presence.

    Any non-empty username and password pair is valid. A token verifies
    when it is non-empty and MFA was enabled for the account first; every
    other token fails. Locked accounts are remembered in ``locked``.
    """

    def __init__(self) -> None:
        self.mfa_enabled: set[str] = set()
        self.locked: set[str] = set()

    def validate_credentials(self, username: str, password: str) -> bool:
        return bool(username) and bool(password)

    def enable_multi_factor(self, account_number: str) -> bool:
        self.mfa_enabled.add(account_number)
        return True

    def verify_multi_factor_token(self, account_number: str, token: str) -> VerificationResult:
        if account_number not in self.mfa_enabled:
            return VerificationResult.FAILED
        return VerificationResult.SUCCESS if token else VerificationResult.FAILED

    def lock_account(self, account_number: str) -> bool:
        self.locked.add(account_number)
        return True
