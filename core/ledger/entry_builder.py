"""
분개 생성기 (Posting Rules)

업무 이벤트(매출, 수금, 반품)를 복식부기 분개로 변환.

각 규칙은 다음을 계산한다:
- 순서가 있는 분개 라인 목록 (차변 합계 = 대변 합계)
- 계정별 잔액 변동분 (계정 고유 방향 기준)

자본금(Share Capital) 순이익 반영은 분개 라인이 아닌
잔액 직접 반영이다 (이익잉여금/집합손익 계정 없음).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING

from core.constants import AccountCodes
from core.errors import ExceedsOutstandingError, ValidationError
from core.ledger.types import TransactionType
from core.types import PaymentMethod
from core.utils.money import ZERO, line_total, money_equal, sum_money, to_money

if TYPE_CHECKING:
    from core.ledger.accounts import AccountLedger

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PostingLine:
    """분개 라인

    한 라인은 차변 또는 대변 중 한쪽만 금액을 가진다.
    """

    account_code: str
    debit: Decimal = ZERO
    credit: Decimal = ZERO
    description: str = ""

    @staticmethod
    def debit_line(account_code: str, amount: Decimal, description: str) -> PostingLine:
        return PostingLine(account_code=account_code, debit=amount, description=description)

    @staticmethod
    def credit_line(account_code: str, amount: Decimal, description: str) -> PostingLine:
        return PostingLine(account_code=account_code, credit=amount, description=description)


@dataclass
class PostingSet:
    """분개 세트

    하나의 거래(Transaction)에 대한 전체 분개 라인과 잔액 변동분.
    """

    transaction_type: str
    reference: str
    description: str
    total_amount: Decimal
    lines: list[PostingLine]
    deltas: dict[str, Decimal] = field(default_factory=dict)

    @property
    def total_debit(self) -> Decimal:
        return sum_money(line.debit for line in self.lines)

    @property
    def total_credit(self) -> Decimal:
        return sum_money(line.credit for line in self.lines)

    def is_balanced(self) -> bool:
        """차변 합계 ≈ 대변 합계 (0.01 이내)"""
        return money_equal(self.total_debit, self.total_credit)


@dataclass(frozen=True)
class ItemAmounts:
    """품목 집계 금액"""

    amount: Decimal  # Σ 수량 × 단가
    cogs: Decimal  # Σ 수량 × 단위원가


class PostingRules:
    """업무 이벤트를 분개 세트로 변환

    계정 원장은 계정 존재 확인과 고유 방향 조회에만 사용 (읽기 전용).

    Args:
        ledger: 계정 원장
    """

    def __init__(self, ledger: AccountLedger):
        self.ledger = ledger

    def for_sale(
        self,
        reference: str,
        customer_name: str,
        payment_method: PaymentMethod,
        amounts: ItemAmounts,
    ) -> PostingSet:
        """매출 → 분개

        1. 현금: 차변 Cash / 외상: 차변 Accounts Receivable (amount)
        2. 대변 Sales Revenue (amount)
        3. 차변 COGS (cogs)
        4. 대변 Inventory (cogs)
        + Share Capital += amount - cogs (잔액 직접 반영)
        """
        amount = self._positive(amounts.amount, "sale amount")
        cogs = self._positive(amounts.cogs, "sale cogs")

        description = f"Sale to {customer_name}"
        cogs_description = f"COGS for sale to {customer_name}"

        if payment_method == PaymentMethod.CASH:
            receiving_account = AccountCodes.CASH
        else:
            receiving_account = AccountCodes.ACCOUNTS_RECEIVABLE

        lines = [
            PostingLine.debit_line(receiving_account, amount, description),
            PostingLine.credit_line(AccountCodes.SALES_REVENUE, amount, description),
            PostingLine.debit_line(AccountCodes.COGS, cogs, cogs_description),
            PostingLine.credit_line(AccountCodes.INVENTORY, cogs, cogs_description),
        ]

        return self._build(
            transaction_type=TransactionType.SALE,
            reference=reference,
            description=description,
            total_amount=amount,
            lines=lines,
            equity_rollup=amount - cogs,
        )

    def for_collection(
        self,
        reference: str,
        customer_name: str,
        invoice_id: int,
        amount: Decimal,
        outstanding: Decimal,
    ) -> PostingSet:
        """수금 → 분개

        1. 차변 Cash (amount)
        2. 대변 Accounts Receivable (amount)

        Raises:
            ValidationError: amount <= 0
            ExceedsOutstandingError: amount > outstanding
        """
        amount = self._positive(amount, "collection amount")
        if amount > outstanding:
            raise ExceedsOutstandingError(invoice_id, amount, outstanding)

        description = f"Collection from {customer_name}"
        lines = [
            PostingLine.debit_line(AccountCodes.CASH, amount, description),
            PostingLine.credit_line(AccountCodes.ACCOUNTS_RECEIVABLE, amount, description),
        ]

        return self._build(
            transaction_type=TransactionType.COLLECTION,
            reference=reference,
            description=description,
            total_amount=amount,
            lines=lines,
        )

    def for_return(
        self,
        reference: str,
        customer_name: str,
        original_payment_method: PaymentMethod,
        amounts: ItemAmounts,
    ) -> PostingSet:
        """매출 반품 → 분개

        1. 차변 Sales Return and Allowances (amount)
        2. 원 매출이 현금: 대변 Cash / 외상: 대변 Accounts Receivable (amount)
        3. 차변 Inventory (cogs)
        4. 대변 COGS (cogs)
        + Share Capital -= amount - cogs (잔액 직접 반영)
        """
        amount = self._positive(amounts.amount, "return amount")
        cogs = self._positive(amounts.cogs, "return cogs")

        description = f"Return from {customer_name}"

        if original_payment_method == PaymentMethod.CASH:
            refund_account = AccountCodes.CASH
        else:
            refund_account = AccountCodes.ACCOUNTS_RECEIVABLE

        lines = [
            PostingLine.debit_line(AccountCodes.SALES_RETURNS, amount, description),
            PostingLine.credit_line(refund_account, amount, description),
            PostingLine.debit_line(
                AccountCodes.INVENTORY, cogs, f"Return inventory from {customer_name}"
            ),
            PostingLine.credit_line(
                AccountCodes.COGS, cogs, f"Return COGS from {customer_name}"
            ),
        ]

        return self._build(
            transaction_type=TransactionType.RETURN,
            reference=reference,
            description=description,
            total_amount=amount,
            lines=lines,
            equity_rollup=-(amount - cogs),
        )

    # -------------------------------------------------------------------------
    # 내부 헬퍼
    # -------------------------------------------------------------------------

    def _build(
        self,
        transaction_type: TransactionType,
        reference: str,
        description: str,
        total_amount: Decimal,
        lines: list[PostingLine],
        equity_rollup: Decimal = ZERO,
    ) -> PostingSet:
        """분개 세트 생성 및 잔액 변동분 계산"""
        deltas: dict[str, Decimal] = {}
        for line in lines:
            account = self.ledger.require(line.account_code)
            delta = account.signed_delta(line.debit, line.credit)
            deltas[line.account_code] = deltas.get(line.account_code, ZERO) + delta

        if equity_rollup != ZERO:
            self.ledger.require(AccountCodes.SHARE_CAPITAL)
            deltas[AccountCodes.SHARE_CAPITAL] = (
                deltas.get(AccountCodes.SHARE_CAPITAL, ZERO) + equity_rollup
            )

        posting_set = PostingSet(
            transaction_type=transaction_type.value,
            reference=reference,
            description=description,
            total_amount=total_amount,
            lines=lines,
            deltas={code: to_money(d) for code, d in deltas.items()},
        )

        if not posting_set.is_balanced():
            # 규칙 결함 - Journal 단계에서도 재검증됨
            logger.error(
                f"불균형 분개 생성: {transaction_type.value} {reference} "
                f"debit={posting_set.total_debit} credit={posting_set.total_credit}"
            )

        return posting_set

    @staticmethod
    def _positive(value: Decimal, label: str) -> Decimal:
        amount = to_money(value)
        if amount <= ZERO:
            raise ValidationError(f"{label} must be positive: {value}")
        return amount


def aggregate_items(items: list[tuple[Decimal, Decimal, Decimal]]) -> ItemAmounts:
    """품목 금액 집계

    Args:
        items: (quantity, unit_price, cogs_unit) 목록

    Returns:
        ItemAmounts(amount=Σ 수량×단가, cogs=Σ 수량×단위원가)
    """
    amount = sum_money(line_total(q, price) for q, price, _ in items)
    cogs = sum_money(line_total(q, unit_cost) for q, _, unit_cost in items)
    return ItemAmounts(amount=amount, cogs=cogs)
