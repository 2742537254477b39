"""External collaborator interfaces and in-memory implementations."""

from bank_rules.services.external import (
    AuditLoggingService,
    AuthenticationService,
    ComplianceCheckService,
    ExternalDataService,
    NotificationService,
)
from bank_rules.services.memory import (
    AllowAllAuthenticationService,
    InMemoryAuditLog,
    InMemoryComplianceService,
    RecordingNotificationService,
    StaticExternalDataService,
)

__all__ = [
    "AllowAllAuthenticationService",
    "AuditLoggingService",
    "AuthenticationService",
    "ComplianceCheckService",
    "ExternalDataService",
    "InMemoryAuditLog",
    "InMemoryComplianceService",
    "NotificationService",
    "RecordingNotificationService",
    "StaticExternalDataService",
]
