"""Helpers shared by the financial models."""

from decimal import Decimal

Amount = Decimal | int | float | str


def to_decimal(value: Amount) -> Decimal:
    """Normalise a monetary amount to ``Decimal``.

    Floats go through ``str`` so that ``0.1`` becomes ``Decimal("0.1")``
    rather than its binary expansion.
    """
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))
