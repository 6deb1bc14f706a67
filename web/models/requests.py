"""
요청 스키마 (Pydantic)

Web API 요청 데이터 검증
"""

import datetime as dt
from decimal import Decimal

from pydantic import BaseModel, Field

from core.constants import Money
from core.types import CollectionMethod, PaymentMethod, ReturnType


class ItemRequest(BaseModel):
    """품목 (매출/반품 공통)"""

    description: str = Field(..., min_length=1, description="품목 설명")
    quantity: Decimal = Field(..., gt=0, le=Money.MAX_AMOUNT, description="수량")
    unit_price: Decimal = Field(..., gt=0, le=Money.MAX_AMOUNT, description="단가")
    cogs_unit: Decimal = Field(..., gt=0, le=Money.MAX_AMOUNT, description="단위 매출원가")


class SaleCreateRequest(BaseModel):
    """매출 등록 요청"""

    invoice_number: str | None = Field(
        default=None, min_length=1, description="송장 번호 (없으면 INV-00001 형식 자동 발번)"
    )
    customer_name: str = Field(..., min_length=1, description="고객명")
    date: dt.date = Field(..., description="매출일 (YYYY-MM-DD)")
    payment_method: PaymentMethod = Field(..., description="결제 방식 (cash/credit)")
    items: list[ItemRequest] = Field(..., min_length=1, description="품목 목록")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "customer_name": "Acme",
                    "date": "2024-01-15",
                    "payment_method": "cash",
                    "items": [
                        {"description": "Widget", "quantity": 2, "unit_price": 100, "cogs_unit": 40},
                    ],
                },
            ]
        }
    }


class CollectionCreateRequest(BaseModel):
    """수금 등록 요청"""

    invoice_id: int = Field(..., description="송장 ID")
    date: dt.date = Field(..., description="수금일 (YYYY-MM-DD)")
    amount: Decimal = Field(
        ..., gt=0, le=Money.MAX_AMOUNT, description="수금액 (미수 잔액 이하, 소수점 2자리까지)"
    )
    payment_method: CollectionMethod = Field(..., description="수금 수단 (cash/bank_transfer/check)")
    reference: str | None = Field(default=None, description="참조 번호 (없으면 COL-<송장 번호>)")
    notes: str | None = Field(default=None, description="메모")


class ReturnCreateRequest(BaseModel):
    """매출 반품/에누리 등록 요청"""

    return_number: str | None = Field(
        default=None, min_length=1, description="반품 번호 (없으면 RET-00001 형식 자동 발번)"
    )
    invoice_id: int = Field(..., description="원 송장 ID")
    date: dt.date = Field(..., description="반품일 (YYYY-MM-DD)")
    return_type: ReturnType = Field(..., description="반품 유형 (return/allowance)")
    reason: str | None = Field(default=None, description="사유")
    items: list[ItemRequest] = Field(..., min_length=1, description="품목 목록")
