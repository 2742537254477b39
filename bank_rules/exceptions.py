"""Custom exception hierarchy for bank-rules.

Rule operations report failure through return values; these exceptions are
reserved for misuse of the administrative and configuration surfaces.
"""


class BankRulesError(Exception):
    """Base exception for all bank-rules errors."""


class EntityNotFoundError(BankRulesError):
    """Raised when a referenced entity does not exist."""


class InvalidEntityStateError(BankRulesError):
    """Raised when an entity cannot be put into the requested state."""


class ConfigurationError(BankRulesError):
    """Raised when configuration is invalid or missing."""
