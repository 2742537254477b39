#!/usr/bin/env python3
"""Run the daily activity scenario and print its summary as JSON.

Rule thresholds and runtime flags are read from the environment
(see ``BankRulesConfig.from_env``); command-line options override them.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from bank_rules.config import BankRulesConfig
from bank_rules.logging import setup_logging
from bank_rules.scenarios import DailyActivityScenario

logger = logging.getLogger(__name__)


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Simulate one banking day through the account and transaction rules"
    )
    parser.add_argument(
        "--accounts",
        type=int,
        default=10,
        help="Number of account openings to attempt (default: 10)",
    )
    parser.add_argument(
        "--transactions",
        type=int,
        default=20,
        help="Transactions per opened account (default: 20)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducibility",
    )
    parser.add_argument(
        "--locked",
        action="store_true",
        help="Run with the system lock engaged",
    )
    parser.add_argument(
        "--audit-mode",
        action="store_true",
        help="Freeze instead of suspend high risk accounts",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Log level (default: LOG_LEVEL or INFO)",
    )
    args = parser.parse_args()

    config = BankRulesConfig.from_env()
    if args.seed is not None:
        config.seed = args.seed
    if args.locked:
        config.system_locked = True
    if args.audit_mode:
        config.compliance_audit_mode = True
    if args.log_level:
        config.log_level = args.log_level

    setup_logging(level=config.log_level, format_type=config.log_format)

    scenario = DailyActivityScenario(
        num_accounts=args.accounts,
        transactions_per_account=args.transactions,
        seed=config.seed,
        config=config,
    )
    summary = scenario.run()
    print(json.dumps(summary, indent=2, default=str))


if __name__ == "__main__":
    main()
