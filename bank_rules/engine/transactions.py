"""Transaction validation, transfer rules and the daily journal."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from bank_rules.config import TransactionRulesConfig
from bank_rules.context import BankingContext
from bank_rules.logging import log_fields
from bank_rules.models.base import Amount, to_decimal
from bank_rules.models.financial import (
    ComplianceLevel,
    Transaction,
    TransactionStatus,
    TransactionType,
)
from bank_rules.services.external import AuditLoggingService, ComplianceCheckService

logger = logging.getLogger(__name__)

TRANSACTION_PROCESSED_EVENT = "TRANSACTION_PROCESSED"

# Outcomes that are never written to the journal
_DISCARDED = (TransactionStatus.REJECTED, TransactionStatus.CANCELLED)


@dataclass
class TransactionEngine:
    """Processes transactions against daily limits.

    ``history`` is append-only. ``reset_daily_limits`` zeroes the daily
    volume and count but leaves the history in place. Only DEPOSIT and
    WITHDRAWAL amounts count towards the daily volume.
    """

    context: BankingContext = field(default_factory=BankingContext)
    rules: TransactionRulesConfig = field(default_factory=TransactionRulesConfig)

    compliance_service: ComplianceCheckService | None = None
    audit_service: AuditLoggingService | None = None

    history: list[Transaction] = field(default_factory=list)
    daily_volume: Decimal = Decimal("0")
    daily_transaction_count: int = 0

    def set_compliance_service(self, service: ComplianceCheckService | None) -> None:
        """Attach (or detach with ``None``) the compliance collaborator."""
        self.compliance_service = service

    def set_audit_service(self, service: AuditLoggingService | None) -> None:
        """Attach (or detach with ``None``) the audit collaborator."""
        self.audit_service = service

    @property
    def _below_daily_count(self) -> bool:
        return self.daily_transaction_count < self.rules.max_daily_transactions

    def validate_transaction(self, amount: Amount, transaction_type: TransactionType) -> bool:
        """Check an amount against the global and per-type bounds."""
        amount = to_decimal(amount)
        if amount.is_nan():
            return False
        elif amount < self.rules.min_amount:
            return False
        elif amount > self.rules.max_amount:
            return False
        elif transaction_type == TransactionType.WITHDRAWAL and amount > self.rules.max_withdrawal:
            return False
        elif transaction_type == TransactionType.REFUND and amount > self.rules.max_refund:
            return False
        return True

    def execute_transfer(
        self,
        amount: Amount,
        source: str,
        destination: str,
        is_urgent: bool = False,
    ) -> TransactionStatus:
        """Decide the outcome of a transfer between two accounts.

        Parameters
        ----------
        amount : Amount
            Transfer amount. Zero, negative and NaN amounts are cancelled
            unless the system is locked.
        source : str
            Source account number. Not looked up anywhere.
        destination : str
            Destination account number. Not looked up anywhere.
        is_urgent : bool
            Urgent transfers above ``rules.urgent_threshold`` are screened
            against the daily limits first, and urgent transfers are
            approved (not completed) while the system is locked.

        Returns
        -------
        TransactionStatus
            The decision. This method does not journal the transfer or
            touch the daily counters.
        """
        amount = to_decimal(amount)
        # A NaN amount fails every comparison below
        valid = not amount.is_nan()
        positive = valid and amount > 0

        if not source or not destination:
            return TransactionStatus.REJECTED

        if source == destination:
            if positive:
                return TransactionStatus.REJECTED
            return TransactionStatus.CANCELLED

        within_volume = valid and self.daily_volume + amount <= self.rules.max_daily_volume

        if is_urgent and valid and amount > self.rules.urgent_threshold:
            if not self._below_daily_count:
                return TransactionStatus.REJECTED
            elif not within_volume:
                return TransactionStatus.REJECTED

        if self.context.system_locked and not is_urgent:
            return TransactionStatus.PENDING
        elif self.context.system_locked and is_urgent:
            return TransactionStatus.APPROVED

        if positive and self._below_daily_count and within_volume:
            return TransactionStatus.COMPLETED
        elif positive and self._below_daily_count:
            return TransactionStatus.APPROVED
        elif positive:
            return TransactionStatus.PENDING
        return TransactionStatus.CANCELLED

    def process_transaction(
        self,
        transaction_type: TransactionType,
        amount: Amount,
        source_account: str,
        dest_account: str,
    ) -> TransactionStatus:
        """Validate, screen, dispatch and journal a transaction.

        Accepted outcomes (COMPLETED, APPROVED, PENDING) are journaled and
        counted; REJECTED and CANCELLED leave no trace.
        """
        amount = to_decimal(amount)

        if not self.validate_transaction(amount, transaction_type):
            logger.debug("Rejected %s of %s: failed validation", transaction_type, amount)
            return TransactionStatus.REJECTED

        if self.compliance_service is not None:
            level = self.compliance_service.check_compliance_level(source_account)
            if level == ComplianceLevel.BLOCKED:
                logger.info("Rejected transaction from blocked account %s", source_account)
                return TransactionStatus.REJECTED
            if level == ComplianceLevel.HIGH_RISK and amount > self.rules.high_risk_compliance_limit:
                logger.info(
                    "Rejected %s from high risk account %s above %s",
                    amount,
                    source_account,
                    self.rules.high_risk_compliance_limit,
                )
                return TransactionStatus.REJECTED

        # REFUND keeps this when no branch below matches
        status = TransactionStatus.PENDING

        if transaction_type == TransactionType.TRANSFER:
            status = self.execute_transfer(amount, source_account, dest_account, False)
        elif transaction_type == TransactionType.DEPOSIT:
            if amount > 0 and self._below_daily_count:
                status = TransactionStatus.COMPLETED
                self.daily_volume += amount
                self.context.total_volume_processed += amount
            else:
                status = TransactionStatus.REJECTED
        elif transaction_type == TransactionType.WITHDRAWAL:
            if 0 < amount <= self.rules.max_withdrawal and self._below_daily_count:
                status = TransactionStatus.COMPLETED
                self.daily_volume += amount
            elif not self._below_daily_count:
                status = TransactionStatus.REJECTED
            else:
                # Unreachable while validate_transaction enforces max_withdrawal
                status = TransactionStatus.PENDING
        elif transaction_type == TransactionType.REFUND:
            if 0 < amount <= self.rules.max_refund:
                status = TransactionStatus.COMPLETED
            elif amount > self.rules.max_refund:
                # Unreachable while validate_transaction enforces max_refund
                status = TransactionStatus.PENDING
        else:
            status = TransactionStatus.CANCELLED

        if status not in _DISCARDED:
            self.log_transaction(
                Transaction(
                    transaction_id=self.context.next_transaction_id(),
                    transaction_type=transaction_type,
                    amount=amount,
                    source_account=source_account,
                    dest_account=dest_account,
                    timestamp=datetime.now(),
                    status=status,
                )
            )
            self.daily_transaction_count += 1
            self.context.total_transactions_processed += 1

        return status

    def log_transaction(self, transaction: Transaction) -> None:
        """Append a transaction to the journal and forward it to the audit log.

        Audit failures are logged and otherwise ignored.
        """
        self.history.append(transaction)
        logger.info(
            "Transaction ID: %d Status: %s",
            transaction.transaction_id,
            transaction.status.value,
            extra=log_fields(
                account_number=transaction.source_account or None,
                transaction_id=transaction.transaction_id,
                transaction_type=transaction.transaction_type,
                status=transaction.status,
                amount=transaction.amount,
            ),
        )

        if self.audit_service is None:
            return

        logged = self.audit_service.log_transaction(
            transaction.source_account,
            str(transaction.amount),
            transaction.timestamp.isoformat(),
        )
        event_logged = self.audit_service.log_account_event(
            transaction.source_account,
            TRANSACTION_PROCESSED_EVENT,
            f"Transaction: {transaction.transaction_id}",
        )
        if not (logged and event_logged):
            logger.warning(
                "Audit log incomplete for transaction %d",
                transaction.transaction_id,
                extra=log_fields(transaction_id=transaction.transaction_id),
            )

    def reset_daily_limits(self) -> bool:
        """Zero the daily volume and count. The journal is kept."""
        self.daily_volume = Decimal("0")
        self.daily_transaction_count = 0
        logger.info("Daily limits reset")
        return True

    def get_daily_volume(self) -> Decimal:
        return self.daily_volume

    def get_transaction_count(self) -> int:
        return self.daily_transaction_count

    def get_account_transactions(self, account_number: str) -> list[Transaction]:
        """Return journal entries where the account is source or destination."""
        return [
            tx
            for tx in self.history
            if account_number in (tx.source_account, tx.dest_account)
        ]

    def summary(self) -> dict[str, object]:
        """Return journal counts per status and the daily counters."""
        counts = {status.value: 0 for status in TransactionStatus}
        for tx in self.history:
            counts[tx.status.value] += 1
        return {
            "journal_entries": len(self.history),
            "by_status": counts,
            "daily_volume": self.daily_volume,
            "daily_transaction_count": self.daily_transaction_count,
        }
