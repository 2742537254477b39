"""Account opening request generator."""

import random
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterator

from bank_rules.generators.base import BaseGenerator
from bank_rules.models.financial.enums import AccountType


@dataclass
class AccountRequest:
    """Arguments for ``AccountStore.create_account``."""

    account_type: AccountType
    initial_balance: Decimal
    owner_email: str


class AccountRequestGenerator(BaseGenerator):
    """Generate account opening requests.

    A share of requests (``underfunded_rate``) carries a zero opening
    balance so that the minimum balance rule gets exercised.
    """

    ACCOUNT_TYPES = list(AccountType)
    ACCOUNT_TYPE_WEIGHTS = [0.55, 0.25, 0.10, 0.10]

    def __init__(self, seed: int | None = None, underfunded_rate: float = 0.0) -> None:
        super().__init__(seed)
        self.underfunded_rate = underfunded_rate

    def generate(self) -> AccountRequest:
        """Generate a single account request."""
        account_type = random.choices(
            self.ACCOUNT_TYPES, weights=self.ACCOUNT_TYPE_WEIGHTS, k=1
        )[0]

        if random.random() < self.underfunded_rate:
            balance = Decimal("0")
        else:
            # Lognormal opening deposits, median around 1 100
            balance = Decimal(str(round(random.lognormvariate(7, 1.2), 2)))
            balance = max(balance, Decimal("0.01"))

        return AccountRequest(
            account_type=account_type,
            initial_balance=balance,
            owner_email=self.fake.email(),
        )

    def generate_batch(self, count: int) -> Iterator[AccountRequest]:
        """Generate ``count`` account requests."""
        for _ in range(count):
            yield self.generate()
