"""Transaction request generator."""

import random
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterator, Sequence

from bank_rules.generators.base import BaseGenerator
from bank_rules.models.financial.enums import TransactionType


@dataclass
class TransactionRequest:
    """Arguments for ``TransactionEngine.process_transaction``."""

    transaction_type: TransactionType
    amount: Decimal
    source_account: str
    dest_account: str


class TransactionRequestGenerator(BaseGenerator):
    """Generate transaction requests between known and external accounts.

    Amounts follow a Pareto distribution. ``out_of_bounds_rate`` of the
    requests get an amount outside the validation bounds (zero, negative
    or above the per-type limit).
    """

    TRANSACTION_TYPES = list(TransactionType)
    TRANSACTION_WEIGHTS = [0.35, 0.30, 0.25, 0.10]

    OUT_OF_BOUNDS_AMOUNTS = {
        TransactionType.DEPOSIT: [Decimal("0"), Decimal("-25.00"), Decimal("1500000")],
        TransactionType.WITHDRAWAL: [Decimal("0"), Decimal("75000")],
        TransactionType.TRANSFER: [Decimal("-10.00"), Decimal("2000000")],
        TransactionType.REFUND: [Decimal("0"), Decimal("15000")],
    }

    def __init__(self, seed: int | None = None, out_of_bounds_rate: float = 0.05) -> None:
        super().__init__(seed)
        self.out_of_bounds_rate = out_of_bounds_rate

    def generate(self, accounts: Sequence[str]) -> TransactionRequest:
        """Generate a single request sourced from one of ``accounts``.

        Parameters
        ----------
        accounts : Sequence[str]
            Account numbers to draw sources and transfer destinations from.
            Must not be empty.

        Returns
        -------
        TransactionRequest
            Generated request. Only transfers carry a destination.
        """
        tx_type = random.choices(self.TRANSACTION_TYPES, weights=self.TRANSACTION_WEIGHTS, k=1)[0]
        source = random.choice(accounts)

        dest = ""
        if tx_type == TransactionType.TRANSFER:
            # One in five transfers leaves the bank
            if len(accounts) > 1 and random.random() < 0.8:
                dest = random.choice([a for a in accounts if a != source])
            else:
                dest = self.fake.bothify("EXT########")

        if random.random() < self.out_of_bounds_rate:
            amount = random.choice(self.OUT_OF_BOUNDS_AMOUNTS[tx_type])
        else:
            amount = random.paretovariate(1.5) * 50
            amount = min(amount, 10000)
            amount = Decimal(str(round(amount, 2)))

        return TransactionRequest(
            transaction_type=tx_type,
            amount=amount,
            source_account=source,
            dest_account=dest,
        )

    def generate_batch(self, accounts: Sequence[str], count: int) -> Iterator[TransactionRequest]:
        """Generate ``count`` requests."""
        for _ in range(count):
            yield self.generate(accounts)
