"""
계정 원장 (Account Ledger)

계정과목표와 계정별 누적 잔액 관리.
잔액은 분개(Journal)로부터 파생된 캐시 뷰이며,
apply_delta가 잔액을 변경하는 유일한 경로.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable

from core.errors import UnknownAccountError, ValidationError
from core.ledger.types import INITIAL_ACCOUNTS, AccountType, JournalSide
from core.storage.entity_table import EntityTable
from core.utils.money import ZERO, to_money

logger = logging.getLogger(__name__)


@dataclass
class Account:
    """계정

    balance는 계정 고유 방향(normal_side) 기준 부호 있는 금액.
    - DEBIT 계정 (자산, 비용, 매출환입): 차변 시 증가
    - CREDIT 계정 (부채, 자본, 수익): 대변 시 증가
    """

    id: int
    code: str
    name: str
    account_type: str
    normal_side: str
    balance: Decimal = ZERO

    def signed_delta(self, debit: Decimal, credit: Decimal) -> Decimal:
        """차변/대변 금액을 이 계정의 잔액 변동분으로 변환"""
        if self.normal_side == JournalSide.DEBIT.value:
            return debit - credit
        return credit - debit

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (직렬화용)"""
        return {
            "id": self.id,
            "code": self.code,
            "name": self.name,
            "account_type": self.account_type,
            "normal_side": self.normal_side,
            "balance": str(self.balance),
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> Account:
        """딕셔너리에서 생성 (역직렬화용)"""
        return Account(
            id=int(data["id"]),
            code=str(data["code"]),
            name=str(data["name"]),
            account_type=AccountType(data["account_type"]).value,
            normal_side=JournalSide(data["normal_side"]).value,
            balance=to_money(data.get("balance", "0")),
        )


class AccountLedger:
    """계정 원장

    계정 코드 → 계정 인덱스를 유지하여 코드 조회를 O(1)로 처리.
    계정은 초기화 시점에만 생성되며 삭제되지 않는다.

    Args:
        seed_opening_balances: True면 계정과목표의 기초 잔액으로 시작
    """

    def __init__(self, seed_opening_balances: bool = True):
        self._table: EntityTable[Account] = EntityTable("accounts")
        self._by_code: dict[str, int] = {}
        self._seed(INITIAL_ACCOUNTS, seed_opening_balances)

    def _seed(
        self,
        chart: Iterable[tuple[str, str, str, str, str]],
        seed_opening_balances: bool,
    ) -> None:
        """계정과목표 생성"""
        for code, name, account_type, normal_side, opening in chart:
            balance = to_money(opening) if seed_opening_balances else ZERO
            account = self._table.insert(
                lambda new_id: Account(
                    id=new_id,
                    code=code,
                    name=name,
                    account_type=account_type,
                    normal_side=normal_side,
                    balance=balance,
                )
            )
            self._by_code[code] = account.id

    @property
    def table(self) -> EntityTable[Account]:
        """내부 테이블 (스냅샷/Savepoint용)"""
        return self._table

    def get_by_code(self, code: str) -> Account | None:
        """코드로 계정 조회 (없으면 None)"""
        account_id = self._by_code.get(code)
        if account_id is None:
            return None
        return self._table.get(account_id)

    def require(self, code: str) -> Account:
        """코드로 계정 조회

        Raises:
            UnknownAccountError: 계정과목표에 없는 코드
        """
        account = self.get_by_code(code)
        if account is None:
            raise UnknownAccountError(code)
        return account

    def balance_of(self, code: str) -> Decimal:
        """계정 잔액"""
        return self.require(code).balance

    def list_accounts(self) -> list[Account]:
        """전체 계정 (코드 순)"""
        return sorted(self._table.all(), key=lambda a: a.code)

    def apply_delta(self, code: str, delta: Decimal) -> Account:
        """계정 잔액에 변동분 반영

        Args:
            code: 계정 코드
            delta: 계정 고유 방향 기준 변동분 (양수 = 증가)

        Returns:
            갱신된 계정

        Raises:
            UnknownAccountError: 계정과목표에 없는 코드
        """
        account = self.require(code)
        account.balance = to_money(account.balance + delta)
        logger.debug(f"잔액 반영: {code} {delta:+} → {account.balance}")
        return account

    def apply_deltas(self, deltas: dict[str, Decimal]) -> list[Account]:
        """여러 계정에 변동분 반영

        모든 코드를 먼저 검증한 뒤 반영하므로 일부만 반영되는 일이 없다.

        Raises:
            UnknownAccountError: 하나라도 알 수 없는 코드가 있는 경우 (반영 없음)
        """
        for code in deltas:
            self.require(code)
        return [self.apply_delta(code, delta) for code, delta in deltas.items()]

    # -------------------------------------------------------------------------
    # Savepoint / 스냅샷
    # -------------------------------------------------------------------------

    def balances(self) -> dict[str, Decimal]:
        """계정별 잔액 사본"""
        return {a.code: a.balance for a in self._table.all()}

    def restore_balances(self, balances: dict[str, Decimal]) -> None:
        """잔액 사본으로 되돌리기"""
        for code, balance in balances.items():
            self.require(code).balance = balance

    def load(self, accounts: list[Account], next_id: int | None = None) -> None:
        """스냅샷에서 계정 전체 교체

        Raises:
            ValidationError: 계정 코드 중복
        """
        by_code: dict[str, int] = {}
        for account in accounts:
            if account.code in by_code:
                raise ValidationError(f"Duplicate account code: {account.code}")
            by_code[account.code] = account.id

        try:
            self._table.load(accounts, next_id)
        except ValueError as e:
            raise ValidationError(str(e)) from e
        self._by_code = by_code
