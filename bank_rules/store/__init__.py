"""In-memory account store."""

from bank_rules.store.accounts import AccountStore, SuspensionRecord

__all__ = ["AccountStore", "SuspensionRecord"]
