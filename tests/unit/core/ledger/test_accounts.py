"""AccountLedger 테스트"""

from decimal import Decimal

import pytest

from core.constants import AccountCodes
from core.errors import UnknownAccountError, ValidationError
from core.ledger.accounts import Account, AccountLedger


class TestAccountSignedDelta:
    """계정 고유 방향 기준 변동분"""

    def _account(self, normal_side: str) -> Account:
        return Account(
            id=1, code="X", name="X", account_type="asset", normal_side=normal_side
        )

    def test_debit_normal(self) -> None:
        account = self._account("DEBIT")
        assert account.signed_delta(Decimal("100"), Decimal("0")) == Decimal("100")
        assert account.signed_delta(Decimal("0"), Decimal("30")) == Decimal("-30")

    def test_credit_normal(self) -> None:
        account = self._account("CREDIT")
        assert account.signed_delta(Decimal("0"), Decimal("100")) == Decimal("100")
        assert account.signed_delta(Decimal("30"), Decimal("0")) == Decimal("-30")


class TestSeed:
    """계정과목표 시드 테스트"""

    def test_opening_balances(self) -> None:
        ledger = AccountLedger()

        assert ledger.balance_of(AccountCodes.CASH) == Decimal("2375000.00")
        assert ledger.balance_of(AccountCodes.INVENTORY) == Decimal("450000.00")
        assert ledger.balance_of(AccountCodes.SHARE_CAPITAL) == Decimal("2825000.00")
        assert ledger.balance_of(AccountCodes.ACCOUNTS_RECEIVABLE) == Decimal("0")

    def test_zero_seed(self) -> None:
        ledger = AccountLedger(seed_opening_balances=False)

        assert all(a.balance == Decimal("0") for a in ledger.list_accounts())
        assert len(ledger.list_accounts()) == 8

    def test_list_sorted_by_code(self) -> None:
        codes = [a.code for a in AccountLedger().list_accounts()]
        assert codes == sorted(codes)


class TestLookup:
    """코드 조회 테스트"""

    def test_get_by_code(self) -> None:
        ledger = AccountLedger()
        account = ledger.get_by_code(AccountCodes.SALES_REVENUE)

        assert account is not None
        assert account.name == "Sales Revenue"
        assert ledger.get_by_code("9999") is None

    def test_require_unknown(self) -> None:
        with pytest.raises(UnknownAccountError):
            AccountLedger().require("9999")


class TestApplyDelta:
    """잔액 반영 테스트"""

    def test_apply_delta_rounds(self) -> None:
        ledger = AccountLedger(seed_opening_balances=False)
        account = ledger.apply_delta(AccountCodes.CASH, Decimal("10.005"))

        assert account.balance == Decimal("10.01")

    def test_apply_deltas_all_or_nothing(self) -> None:
        """알 수 없는 코드가 섞이면 아무것도 반영하지 않음"""
        ledger = AccountLedger()
        before = ledger.balances()

        with pytest.raises(UnknownAccountError):
            ledger.apply_deltas({AccountCodes.CASH: Decimal("100"), "9999": Decimal("1")})

        assert ledger.balances() == before

    def test_restore_balances(self) -> None:
        ledger = AccountLedger()
        saved = ledger.balances()

        ledger.apply_delta(AccountCodes.CASH, Decimal("-500"))
        ledger.restore_balances(saved)

        assert ledger.balance_of(AccountCodes.CASH) == Decimal("2375000.00")


class TestSerialization:
    """직렬화 및 적재 테스트"""

    def test_round_trip(self) -> None:
        account = AccountLedger().require(AccountCodes.CASH)
        restored = Account.from_dict(account.to_dict())

        assert restored == account
        assert account.to_dict()["balance"] == "2375000.00"

    def test_from_dict_rejects_bad_type(self) -> None:
        data = AccountLedger().require(AccountCodes.CASH).to_dict()
        data["account_type"] = "bogus"

        with pytest.raises(ValueError):
            Account.from_dict(data)

    def test_load_rejects_duplicate_code(self) -> None:
        ledger = AccountLedger()
        rows = [
            Account(id=1, code="1001", name="Cash", account_type="asset", normal_side="DEBIT"),
            Account(id=2, code="1001", name="Cash", account_type="asset", normal_side="DEBIT"),
        ]

        with pytest.raises(ValidationError):
            ledger.load(rows)

    def test_load_replaces_index(self) -> None:
        ledger = AccountLedger()
        rows = [
            Account(
                id=5, code="1001", name="Cash", account_type="asset",
                normal_side="DEBIT", balance=Decimal("7.00"),
            )
        ]
        ledger.load(rows)

        assert ledger.balance_of("1001") == Decimal("7.00")
        assert ledger.get_by_code(AccountCodes.INVENTORY) is None
        assert ledger.table.next_id == 6
