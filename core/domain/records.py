"""
업무 문서 도메인 모델

매출 송장(SalesInvoice)과 품목, 수금(Collection), 매출 반품(SalesReturn)과 품목.
모든 레코드는 불변이며, 송장의 결제 필드 변경은 새 인스턴스로 교체한다.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from typing import Any

from core.constants import Money
from core.errors import ValidationError
from core.types import CollectionMethod, InvoiceStatus, PaymentMethod, ReturnType
from core.utils.money import ZERO, is_zero, line_total, to_decimal, to_money


def derive_invoice_status(total: Decimal, outstanding: Decimal) -> InvoiceStatus:
    """미수 잔액으로부터 송장 상태 계산

    - outstanding == 0 → PAID
    - 0 < outstanding < total → PARTIAL
    - 그 외 → OPEN
    """
    if is_zero(outstanding):
        return InvoiceStatus.PAID
    if ZERO < outstanding < total:
        return InvoiceStatus.PARTIAL
    return InvoiceStatus.OPEN


@dataclass(frozen=True)
class ItemLine:
    """품목 입력 (매출/반품 공통)

    생성 시 설명이 있고 수량, 단가, 단위원가가 양수이며 금액 상한 이내인지 검증.
    """

    description: str
    quantity: Decimal
    unit_price: Decimal
    cogs_unit: Decimal

    def __post_init__(self) -> None:
        if not str(self.description or "").strip():
            raise ValidationError("Item description is required")
        for label in ("quantity", "unit_price", "cogs_unit"):
            raw = getattr(self, label)
            try:
                value = to_decimal(raw)
            except ValueError as e:
                raise ValidationError(f"Item {label} is not a number: {raw!r}") from e
            if value <= 0:
                raise ValidationError(f"Item {label} must be positive: {raw}")
            if value > Money.MAX_AMOUNT:
                raise ValidationError(f"Item {label} exceeds {Money.MAX_AMOUNT}: {raw}")
            object.__setattr__(self, label, value)

        # 품목 금액 상한
        for label, unit in (("unit_price", self.unit_price), ("cogs_unit", self.cogs_unit)):
            if self.quantity * unit > Money.MAX_AMOUNT:
                raise ValidationError(
                    f"Item {label} × quantity exceeds {Money.MAX_AMOUNT}: "
                    f"{self.quantity} × {unit}"
                )

    @property
    def total_amount(self) -> Decimal:
        return line_total(self.quantity, self.unit_price)

    @property
    def cogs_amount(self) -> Decimal:
        return line_total(self.quantity, self.cogs_unit)

    def as_tuple(self) -> tuple[Decimal, Decimal, Decimal]:
        """(quantity, unit_price, cogs_unit) - 금액 집계용"""
        return (self.quantity, self.unit_price, self.cogs_unit)


@dataclass(frozen=True)
class SalesInvoice:
    """매출 송장

    불변 조건: paid_amount + outstanding_amount == total_amount
    수금(Collection)만이 결제 필드를 변경한다.
    """

    id: int
    invoice_number: str
    customer_name: str
    date: date
    payment_method: str
    total_amount: Decimal
    paid_amount: Decimal
    outstanding_amount: Decimal
    status: str

    @staticmethod
    def create(
        invoice_id: int,
        invoice_number: str,
        customer_name: str,
        invoice_date: date,
        payment_method: PaymentMethod,
        total_amount: Decimal,
    ) -> SalesInvoice:
        """새 송장 생성

        현금 매출은 즉시 완납, 외상 매출은 전액 미수로 시작.
        """
        total = to_money(total_amount)
        paid = total if payment_method == PaymentMethod.CASH else ZERO
        outstanding = to_money(total - paid)
        return SalesInvoice(
            id=invoice_id,
            invoice_number=invoice_number,
            customer_name=customer_name,
            date=invoice_date,
            payment_method=PaymentMethod(payment_method).value,
            total_amount=total,
            paid_amount=paid,
            outstanding_amount=outstanding,
            status=derive_invoice_status(total, outstanding).value,
        )

    def apply_payment(self, amount: Decimal) -> SalesInvoice:
        """수금 반영된 새 송장 반환"""
        paid = to_money(self.paid_amount + amount)
        outstanding = to_money(self.outstanding_amount - amount)
        return replace(
            self,
            paid_amount=paid,
            outstanding_amount=outstanding,
            status=derive_invoice_status(self.total_amount, outstanding).value,
        )

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (직렬화용)"""
        return {
            "id": self.id,
            "invoice_number": self.invoice_number,
            "customer_name": self.customer_name,
            "date": self.date.isoformat(),
            "payment_method": self.payment_method,
            "total_amount": str(self.total_amount),
            "paid_amount": str(self.paid_amount),
            "outstanding_amount": str(self.outstanding_amount),
            "status": self.status,
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> SalesInvoice:
        """딕셔너리에서 생성 (역직렬화용)

        status는 저장값을 신뢰하지 않고 미수 잔액에서 다시 계산.
        """
        total = to_money(data["total_amount"])
        outstanding = to_money(data["outstanding_amount"])
        return SalesInvoice(
            id=int(data["id"]),
            invoice_number=str(data["invoice_number"]),
            customer_name=str(data["customer_name"]),
            date=date.fromisoformat(data["date"]),
            payment_method=PaymentMethod(data["payment_method"]).value,
            total_amount=total,
            paid_amount=to_money(data["paid_amount"]),
            outstanding_amount=outstanding,
            status=derive_invoice_status(total, outstanding).value,
        )


@dataclass(frozen=True)
class SalesItem:
    """매출 품목"""

    id: int
    invoice_id: int
    description: str
    quantity: Decimal
    unit_price: Decimal
    cogs_unit: Decimal
    total_amount: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "invoice_id": self.invoice_id,
            "description": self.description,
            "quantity": str(self.quantity),
            "unit_price": str(self.unit_price),
            "cogs_unit": str(self.cogs_unit),
            "total_amount": str(self.total_amount),
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> SalesItem:
        return SalesItem(
            id=int(data["id"]),
            invoice_id=int(data["invoice_id"]),
            description=str(data.get("description", "")),
            quantity=to_decimal(data["quantity"]),
            unit_price=to_decimal(data["unit_price"]),
            cogs_unit=to_decimal(data["cogs_unit"]),
            total_amount=to_money(data["total_amount"]),
        )


@dataclass(frozen=True)
class Collection:
    """수금

    amount는 생성 시점의 송장 미수 잔액 이하.
    """

    id: int
    invoice_id: int
    date: date
    amount: Decimal
    payment_method: str
    reference: str
    notes: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "invoice_id": self.invoice_id,
            "date": self.date.isoformat(),
            "amount": str(self.amount),
            "payment_method": self.payment_method,
            "reference": self.reference,
            "notes": self.notes,
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> Collection:
        return Collection(
            id=int(data["id"]),
            invoice_id=int(data["invoice_id"]),
            date=date.fromisoformat(data["date"]),
            amount=to_money(data["amount"]),
            payment_method=CollectionMethod(data["payment_method"]).value,
            reference=str(data["reference"]),
            notes=data.get("notes"),
        )


@dataclass(frozen=True)
class SalesReturn:
    """매출 반품/에누리

    원 송장의 결제 필드는 변경하지 않는다 (원장만 조정).
    """

    id: int
    return_number: str
    invoice_id: int
    date: date
    total_amount: Decimal
    return_type: str
    reason: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "return_number": self.return_number,
            "invoice_id": self.invoice_id,
            "date": self.date.isoformat(),
            "total_amount": str(self.total_amount),
            "return_type": self.return_type,
            "reason": self.reason,
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> SalesReturn:
        return SalesReturn(
            id=int(data["id"]),
            return_number=str(data["return_number"]),
            invoice_id=int(data["invoice_id"]),
            date=date.fromisoformat(data["date"]),
            total_amount=to_money(data["total_amount"]),
            return_type=ReturnType(data["return_type"]).value,
            reason=data.get("reason"),
        )


@dataclass(frozen=True)
class ReturnItem:
    """반품 품목"""

    id: int
    return_id: int
    description: str
    quantity: Decimal
    unit_price: Decimal
    cogs_unit: Decimal
    total_amount: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "return_id": self.return_id,
            "description": self.description,
            "quantity": str(self.quantity),
            "unit_price": str(self.unit_price),
            "cogs_unit": str(self.cogs_unit),
            "total_amount": str(self.total_amount),
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> ReturnItem:
        return ReturnItem(
            id=int(data["id"]),
            return_id=int(data["return_id"]),
            description=str(data.get("description", "")),
            quantity=to_decimal(data["quantity"]),
            unit_price=to_decimal(data["unit_price"]),
            cogs_unit=to_decimal(data["cogs_unit"]),
            total_amount=to_money(data["total_amount"]),
        )
