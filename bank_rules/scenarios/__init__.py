"""Scenarios that drive the rule engines with generated activity."""

from bank_rules.scenarios.financial import DailyActivityScenario

__all__ = ["DailyActivityScenario"]
