"""Financial scenarios."""

from bank_rules.scenarios.financial.daily_activity import DailyActivityScenario

__all__ = ["DailyActivityScenario"]
