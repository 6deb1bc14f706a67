"""
분개장 (Journal)

거래(Transaction)와 분개 라인(JournalEntry)의 추가 전용 저장소.
계정 잔액의 근거가 되는 원본 기록이며, 수정/삭제 연산은 없다.

불변 조건:
- 거래별 Σ차변 == Σ대변 (0.01 이내)
- 분개 라인은 거래와 함께 한 번에 생성됨 (단독 생성 없음)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from core.errors import NotFoundError, UnbalancedEntryError, ValidationError
from core.ledger.entry_builder import PostingLine
from core.ledger.types import TransactionType
from core.storage.entity_table import EntityTable
from core.utils.money import ZERO, money_equal, sum_money, to_money

if TYPE_CHECKING:
    from core.ledger.accounts import AccountLedger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Transaction:
    """거래

    1..N개의 분개 라인을 소유.
    """

    id: int
    date: date
    reference: str
    description: str
    transaction_type: str
    total_amount: Decimal
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (직렬화용)"""
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "reference": self.reference,
            "description": self.description,
            "transaction_type": self.transaction_type,
            "total_amount": str(self.total_amount),
            "created_at": self.created_at.isoformat(),
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> Transaction:
        """딕셔너리에서 생성 (역직렬화용)"""
        created_at = data.get("created_at")
        return Transaction(
            id=int(data["id"]),
            date=date.fromisoformat(data["date"]),
            reference=str(data["reference"]),
            description=str(data["description"]),
            transaction_type=TransactionType(data["transaction_type"]).value,
            total_amount=to_money(data["total_amount"]),
            created_at=(
                datetime.fromisoformat(created_at)
                if created_at
                else datetime.now(timezone.utc)
            ),
        )


@dataclass(frozen=True)
class JournalEntry:
    """분개 라인 (Posting)

    account_name은 기록 시점의 계정명 스냅샷.
    """

    id: int
    transaction_id: int
    account_code: str
    account_name: str
    debit_amount: Decimal
    credit_amount: Decimal
    date: date
    reference: str
    description: str

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (직렬화용)"""
        return {
            "id": self.id,
            "transaction_id": self.transaction_id,
            "account_code": self.account_code,
            "account_name": self.account_name,
            "debit_amount": str(self.debit_amount),
            "credit_amount": str(self.credit_amount),
            "date": self.date.isoformat(),
            "reference": self.reference,
            "description": self.description,
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> JournalEntry:
        """딕셔너리에서 생성 (역직렬화용)"""
        return JournalEntry(
            id=int(data["id"]),
            transaction_id=int(data["transaction_id"]),
            account_code=str(data["account_code"]),
            account_name=str(data["account_name"]),
            debit_amount=to_money(data.get("debit_amount") or "0"),
            credit_amount=to_money(data.get("credit_amount") or "0"),
            date=date.fromisoformat(data["date"]),
            reference=str(data["reference"]),
            description=str(data["description"]),
        )


def check_balanced(
    transaction_id: int | None,
    debits: list[Decimal],
    credits: list[Decimal],
) -> None:
    """차변/대변 균형 검증

    Raises:
        UnbalancedEntryError: |Σ차변 - Σ대변| >= 0.01
    """
    total_debit = sum_money(debits)
    total_credit = sum_money(credits)
    if not money_equal(total_debit, total_credit):
        raise UnbalancedEntryError(transaction_id, total_debit, total_credit)


class Journal:
    """분개장

    Args:
        ledger: 계정명 스냅샷 및 계정 존재 확인용 계정 원장

    사용 예시:
    ```python
    journal = Journal(ledger)
    transaction, entries = journal.record(
        transaction_type=TransactionType.SALE,
        entry_date=date(2024, 1, 15),
        reference="INV-00001",
        description="Sale to Acme",
        total_amount=Decimal("200.00"),
        lines=posting_set.lines,
    )
    ```
    """

    def __init__(self, ledger: AccountLedger):
        self.ledger = ledger
        self.transactions: EntityTable[Transaction] = EntityTable("transactions")
        self.entries: EntityTable[JournalEntry] = EntityTable("journal_entries")

    def record(
        self,
        transaction_type: TransactionType | str,
        entry_date: date,
        reference: str,
        description: str,
        total_amount: Decimal,
        lines: list[PostingLine],
    ) -> tuple[Transaction, list[JournalEntry]]:
        """거래와 분개 라인을 함께 기록

        라인 검증을 먼저 수행하므로 검증 실패 시 거래도 생성되지 않는다.

        Returns:
            (거래, 분개 라인 목록)

        Raises:
            ValidationError: 라인이 없거나 음수 금액
            UnknownAccountError: 알 수 없는 계정 코드
            UnbalancedEntryError: 차변 합계 != 대변 합계
        """
        self._validate_lines(None, lines)

        transaction = self.transactions.insert(
            lambda new_id: Transaction(
                id=new_id,
                date=entry_date,
                reference=reference,
                description=description,
                transaction_type=TransactionType(transaction_type).value,
                total_amount=to_money(total_amount),
            )
        )
        entries = self.append_entries(transaction.id, lines)
        return transaction, entries

    def append_entries(
        self,
        transaction_id: int,
        lines: list[PostingLine],
    ) -> list[JournalEntry]:
        """거래에 분개 라인 추가

        불균형 검증은 Posting 규칙의 보장 여부와 무관하게 항상 수행.

        Args:
            transaction_id: 기존 거래 ID
            lines: 분개 라인 전체 세트

        Returns:
            ID가 부여된 분개 라인 목록

        Raises:
            NotFoundError: 거래가 없는 경우
            ValidationError: 라인이 없거나 음수 금액
            UnknownAccountError: 알 수 없는 계정 코드
            UnbalancedEntryError: 차변 합계 != 대변 합계
        """
        transaction = self.transactions.get(transaction_id)
        if transaction is None:
            raise NotFoundError("Transaction", transaction_id)

        accounts = self._validate_lines(transaction_id, lines)

        entries = [
            self.entries.insert(
                lambda new_id, line=line, name=accounts[line.account_code]: JournalEntry(
                    id=new_id,
                    transaction_id=transaction_id,
                    account_code=line.account_code,
                    account_name=name,
                    debit_amount=to_money(line.debit),
                    credit_amount=to_money(line.credit),
                    date=transaction.date,
                    reference=transaction.reference,
                    description=line.description or transaction.description,
                )
            )
            for line in lines
        ]

        logger.debug(f"분개 기록: transaction={transaction_id}, lines={len(entries)}")
        return entries

    def _validate_lines(
        self,
        transaction_id: int | None,
        lines: list[PostingLine],
    ) -> dict[str, str]:
        """라인 검증 후 계정 코드 → 계정명 매핑 반환"""
        if not lines:
            raise ValidationError("Journal entry requires at least one line")

        names: dict[str, str] = {}
        for line in lines:
            if line.debit < ZERO or line.credit < ZERO:
                raise ValidationError(
                    f"Negative posting amount on {line.account_code}: "
                    f"debit={line.debit} credit={line.credit}"
                )
            names[line.account_code] = self.ledger.require(line.account_code).name

        try:
            check_balanced(
                transaction_id,
                [line.debit for line in lines],
                [line.credit for line in lines],
            )
        except UnbalancedEntryError as e:
            logger.error(f"불균형 분개 거부: {e}")
            raise

        return names

    # -------------------------------------------------------------------------
    # 조회
    # -------------------------------------------------------------------------

    def list_all(self) -> list[JournalEntry]:
        """전체 분개 라인 (날짜 내림차순, 같은 날짜는 기록 순)"""
        return sorted(self.entries.all(), key=lambda e: e.date, reverse=True)

    def list_transactions(self) -> list[Transaction]:
        """전체 거래 (날짜 내림차순, 같은 날짜는 기록 순)"""
        return sorted(self.transactions.all(), key=lambda t: t.date, reverse=True)

    def entries_for(self, transaction_id: int) -> list[JournalEntry]:
        """거래의 분개 라인 (기록 순)"""
        return self.entries.where(lambda e: e.transaction_id == transaction_id)

    def unbalanced_transactions(self) -> list[int]:
        """불균형 거래 ID 목록 (무결성 점검용)"""
        debits: dict[int, list[Decimal]] = {}
        credits: dict[int, list[Decimal]] = {}
        for entry in self.entries.all():
            debits.setdefault(entry.transaction_id, []).append(entry.debit_amount)
            credits.setdefault(entry.transaction_id, []).append(entry.credit_amount)

        unbalanced = []
        for transaction in self.transactions.all():
            try:
                check_balanced(
                    transaction.id,
                    debits.get(transaction.id, []),
                    credits.get(transaction.id, []),
                )
            except UnbalancedEntryError:
                unbalanced.append(transaction.id)
        return unbalanced
