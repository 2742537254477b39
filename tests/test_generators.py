"""Tests for request generators."""

from decimal import Decimal

from bank_rules.generators.financial import AccountRequestGenerator, TransactionRequestGenerator
from bank_rules.models.financial import AccountType, TransactionType


class TestAccountRequestGenerator:
    """Tests for AccountRequestGenerator."""

    def test_generate_request(self, seed: int) -> None:
        request = AccountRequestGenerator(seed=seed).generate()

        assert request.account_type in list(AccountType)
        assert request.initial_balance >= Decimal("0.01")
        assert "@" in request.owner_email

    def test_generate_batch(self, seed: int) -> None:
        requests = list(AccountRequestGenerator(seed=seed).generate_batch(5))

        assert len(requests) == 5

    def test_underfunded_rate(self, seed: int) -> None:
        gen = AccountRequestGenerator(seed=seed, underfunded_rate=1.0)

        assert all(r.initial_balance == 0 for r in gen.generate_batch(10))

    def test_reproducible(self, seed: int) -> None:
        first = list(AccountRequestGenerator(seed=seed).generate_batch(3))
        second = list(AccountRequestGenerator(seed=seed).generate_batch(3))

        assert first == second


class TestTransactionRequestGenerator:
    """Tests for TransactionRequestGenerator."""

    ACCOUNTS = ["ACC500001", "ACC500002", "ACC500003"]

    def test_generate_request(self, seed: int) -> None:
        gen = TransactionRequestGenerator(seed=seed, out_of_bounds_rate=0.0)

        for request in gen.generate_batch(self.ACCOUNTS, 50):
            assert request.source_account in self.ACCOUNTS
            assert Decimal("0") < request.amount <= Decimal("10000")
            if request.transaction_type == TransactionType.TRANSFER:
                assert request.dest_account
                assert request.dest_account != request.source_account
            else:
                assert request.dest_account == ""

    def test_out_of_bounds_amounts(self, seed: int) -> None:
        gen = TransactionRequestGenerator(seed=seed, out_of_bounds_rate=1.0)

        for request in gen.generate_batch(self.ACCOUNTS, 20):
            assert request.amount in gen.OUT_OF_BOUNDS_AMOUNTS[request.transaction_type]

    def test_single_account_transfers_leave_bank(self, seed: int) -> None:
        gen = TransactionRequestGenerator(seed=seed)

        for request in gen.generate_batch(["ACC500001"], 50):
            if request.transaction_type == TransactionType.TRANSFER:
                assert request.dest_account.startswith("EXT")
