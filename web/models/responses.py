"""
응답 스키마 (Pydantic)

Web API 응답 데이터 직렬화.
금액은 모두 문자열 (Decimal 정밀도 유지).
"""

from datetime import datetime

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """헬스 체크 응답"""

    status: str = Field(default="ok", description="서비스 상태")
    version: str = Field(..., description="애플리케이션 버전")
    timestamp: datetime = Field(..., description="응답 시간 (UTC)")


# =========================================================================
# 원장
# =========================================================================


class AccountResponse(BaseModel):
    """계정 응답"""

    id: int
    code: str = Field(..., description="계정 코드")
    name: str = Field(..., description="계정명")
    account_type: str = Field(..., description="계정 유형 (asset/liability/equity/revenue/expense)")
    normal_side: str = Field(..., description="고유 방향 (DEBIT/CREDIT)")
    balance: str = Field(..., description="잔액")


class TransactionResponse(BaseModel):
    """거래 응답"""

    id: int
    date: str
    reference: str
    description: str
    transaction_type: str = Field(..., description="거래 유형 (sale/collection/return)")
    total_amount: str
    created_at: str


class JournalEntryResponse(BaseModel):
    """분개 라인 응답"""

    id: int
    transaction_id: int
    account_code: str
    account_name: str
    debit_amount: str
    credit_amount: str
    date: str
    reference: str
    description: str


class BalanceSheetResponse(BaseModel):
    """대차대조표 응답"""

    cash: str
    accounts_receivable: str
    inventory: str
    total_assets: str
    accounts_payable: str
    total_liabilities: str
    share_capital: str = Field(..., description="자본금 (순이익 누적 포함)")
    total_equity: str
    total_liab_equity: str


class StatsResponse(BaseModel):
    """손익 통계 응답"""

    total_sales: str
    total_collections: str
    total_returns: str
    outstanding_receivables: str
    gross_profit: str
    net_income: str


class TrialBalanceRowResponse(BaseModel):
    code: str
    name: str
    account_type: str
    debit: str
    credit: str


class TrialBalanceResponse(BaseModel):
    """시산표 응답"""

    rows: list[TrialBalanceRowResponse]
    total_debit: str
    total_credit: str
    is_balanced: bool


class IntegrityResponse(BaseModel):
    """무결성 점검 응답"""

    ok: bool = Field(..., description="문제 없음 여부")
    problems: list[str] = Field(default_factory=list, description="발견된 문제 목록")


# =========================================================================
# 업무 문서
# =========================================================================


class SalesItemResponse(BaseModel):
    id: int
    invoice_id: int
    description: str
    quantity: str
    unit_price: str
    cogs_unit: str
    total_amount: str


class SalesInvoiceResponse(BaseModel):
    """매출 송장 응답"""

    id: int
    invoice_number: str
    customer_name: str
    date: str
    payment_method: str
    total_amount: str
    paid_amount: str
    outstanding_amount: str
    status: str = Field(..., description="송장 상태 (open/partial/paid)")


class SalesInvoiceListItemResponse(SalesInvoiceResponse):
    """송장 목록 항목 (품목 포함)"""

    items: list[SalesItemResponse] = Field(default_factory=list)


class SalesInvoiceDetailResponse(BaseModel):
    """매출 송장 상세 응답 (품목 포함)"""

    invoice: SalesInvoiceResponse
    items: list[SalesItemResponse]
    saved: bool | None = Field(default=None, description="스냅샷 저장 여부 (등록 시)")


class CollectionResponse(BaseModel):
    """수금 응답"""

    id: int
    invoice_id: int
    date: str
    amount: str
    payment_method: str
    reference: str
    notes: str | None = None


class CollectionCreateResponse(BaseModel):
    collection: CollectionResponse
    saved: bool


class ReturnItemResponse(BaseModel):
    id: int
    return_id: int
    description: str
    quantity: str
    unit_price: str
    cogs_unit: str
    total_amount: str


class SalesReturnResponse(BaseModel):
    """매출 반품 응답"""

    id: int
    return_number: str
    invoice_id: int
    date: str
    total_amount: str
    return_type: str
    reason: str | None = None


class SalesReturnListItemResponse(SalesReturnResponse):
    """반품 목록 항목 (품목 포함)"""

    items: list[ReturnItemResponse] = Field(default_factory=list)


class SalesReturnDetailResponse(BaseModel):
    """매출 반품 상세 응답 (품목 포함)"""

    sales_return: SalesReturnResponse
    items: list[ReturnItemResponse]
    saved: bool | None = None


# =========================================================================
# 백업
# =========================================================================


class SaveResponse(BaseModel):
    """저장 결과"""

    saved: bool


class ImportResponse(BaseModel):
    """가져오기 결과"""

    imported: bool
    saved: bool
    counts: dict[str, int] = Field(default_factory=dict, description="엔티티 종류별 건수")
