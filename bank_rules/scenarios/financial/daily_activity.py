"""Daily activity scenario: one simulated banking day through both rule engines."""

import logging
import random
from collections import Counter
from decimal import Decimal
from typing import Any

from bank_rules.config import BankRulesConfig
from bank_rules.context import BankingContext
from bank_rules.engine.transactions import TransactionEngine
from bank_rules.generators.financial import AccountRequestGenerator, TransactionRequestGenerator
from bank_rules.models.financial.enums import AccountStatus
from bank_rules.services.memory import (
    AllowAllAuthenticationService,
    InMemoryAuditLog,
    InMemoryComplianceService,
    RecordingNotificationService,
    StaticExternalDataService,
)
from bank_rules.store.accounts import AccountStore

logger = logging.getLogger(__name__)


class DailyActivityScenario:
    """Run a day of account openings and transactions.

    This scenario:
    - Opens accounts from generated requests (some underfunded)
    - Verifies most of them, leaving the rest pending
    - Raises fraud alerts on a share of accounts
    - Processes generated transactions, a share of them out of bounds
    - Scores every account from its own journal activity
    """

    def __init__(
        self,
        num_accounts: int = 10,
        transactions_per_account: int = 20,
        verification_rate: float = 0.8,
        fraud_alert_rate: float = 0.1,
        seed: int | None = None,
        config: BankRulesConfig | None = None,
    ) -> None:
        """Initialize daily activity scenario.

        Parameters
        ----------
        num_accounts : int
            Number of account openings to attempt. The store cap still
            applies.
        transactions_per_account : int
            Average transactions per opened account.
        verification_rate : float
            Share of accounts whose verification succeeds (0.0 to 1.0).
        fraud_alert_rate : float
            Share of accounts flagged for fraud (0.0 to 1.0).
        seed : int | None
            Random seed for reproducibility.
        config : BankRulesConfig | None
            Rule thresholds and runtime flags. Defaults to ``BankRulesConfig()``.
        """
        self.num_accounts = num_accounts
        self.transactions_per_account = transactions_per_account
        self.verification_rate = verification_rate
        self.fraud_alert_rate = fraud_alert_rate
        self.seed = seed
        self.config = config or BankRulesConfig(seed=seed)

        if seed is not None:
            random.seed(seed)

        self.context = BankingContext.from_config(self.config)
        self.audit_log = InMemoryAuditLog()
        self.compliance = InMemoryComplianceService()
        self.notifications = RecordingNotificationService()

        self.store = AccountStore(
            context=self.context,
            rules=self.config.accounts,
            auth_service=AllowAllAuthenticationService(),
            notification_service=self.notifications,
            data_service=StaticExternalDataService(),
        )
        self.engine = TransactionEngine(
            context=self.context,
            rules=self.config.transactions,
            compliance_service=self.compliance,
            audit_service=self.audit_log,
        )

        self._account_gen = AccountRequestGenerator(seed=seed, underfunded_rate=0.05)
        self._transaction_gen = TransactionRequestGenerator(seed=seed)
        self.risk_outcomes: dict[str, AccountStatus] = {}

    def run(self) -> dict[str, Any]:
        """Run the scenario and return its summary."""
        logger.info(
            "Starting daily activity scenario: %d accounts, %d transactions each",
            self.num_accounts,
            self.transactions_per_account,
        )

        opened = self._open_accounts()
        if not opened:
            logger.warning("No accounts opened, skipping transactions")
            return self.summary()

        outcomes = Counter()
        total = len(opened) * self.transactions_per_account
        for request in self._transaction_gen.generate_batch(opened, total):
            status = self.engine.process_transaction(
                request.transaction_type,
                request.amount,
                request.source_account,
                request.dest_account,
            )
            outcomes[status.value] += 1

        logger.info("Processed %d transactions: %s", total, dict(outcomes))

        for account_number in opened:
            activity = [
                tx for tx in self.engine.history if tx.source_account == account_number
            ]
            volume = sum((tx.amount for tx in activity), Decimal("0"))
            self.risk_outcomes[account_number] = self.store.evaluate_account_risk(
                account_number, len(activity), volume
            )

        return self.summary(outcomes)

    def _open_accounts(self) -> list[str]:
        opened = []
        for request in self._account_gen.generate_batch(self.num_accounts):
            account_number = self.store.create_account(
                request.account_type, request.initial_balance, request.owner_email
            )
            if not account_number:
                continue
            opened.append(account_number)

            self.store.verify_account(account_number, random.random() < self.verification_rate)
            if random.random() < self.fraud_alert_rate:
                self.store.override_account(account_number, has_fraud_alert=True)

        logger.info(
            "Opened %d of %d requested accounts", len(opened), self.num_accounts
        )
        return opened

    def summary(self, transaction_outcomes: Counter | None = None) -> dict[str, Any]:
        """Return store, engine and context summaries for the scenario."""
        return {
            "accounts": self.store.summary(),
            "transactions": self.engine.summary(),
            "transaction_outcomes": dict(transaction_outcomes or {}),
            "risk_outcomes": {k: v.value for k, v in self.risk_outcomes.items()},
            "notifications_sent": len(self.notifications.emails),
            "audit_entries": len(self.audit_log.entries),
            "context": self.context.summary(),
        }
