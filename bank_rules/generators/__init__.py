"""Request generators for demo scenarios."""

from bank_rules.generators.base import BaseGenerator

__all__ = ["BaseGenerator"]
