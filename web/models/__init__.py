"""
Web 모델 패키지

Pydantic 스키마 정의
"""

from web.models.requests import (
    CollectionCreateRequest,
    ItemRequest,
    ReturnCreateRequest,
    SaleCreateRequest,
)
from web.models.responses import (
    AccountResponse,
    BalanceSheetResponse,
    CollectionCreateResponse,
    CollectionResponse,
    HealthResponse,
    ImportResponse,
    IntegrityResponse,
    JournalEntryResponse,
    ReturnItemResponse,
    SalesInvoiceDetailResponse,
    SalesInvoiceListItemResponse,
    SalesInvoiceResponse,
    SalesItemResponse,
    SalesReturnDetailResponse,
    SalesReturnListItemResponse,
    SalesReturnResponse,
    SaveResponse,
    StatsResponse,
    TransactionResponse,
    TrialBalanceResponse,
)

__all__ = [
    # Requests
    "ItemRequest",
    "SaleCreateRequest",
    "CollectionCreateRequest",
    "ReturnCreateRequest",
    # Responses
    "HealthResponse",
    "AccountResponse",
    "TransactionResponse",
    "JournalEntryResponse",
    "BalanceSheetResponse",
    "StatsResponse",
    "TrialBalanceResponse",
    "IntegrityResponse",
    "SalesInvoiceResponse",
    "SalesInvoiceDetailResponse",
    "SalesInvoiceListItemResponse",
    "SalesItemResponse",
    "CollectionResponse",
    "CollectionCreateResponse",
    "SalesReturnResponse",
    "SalesReturnDetailResponse",
    "SalesReturnListItemResponse",
    "ReturnItemResponse",
    "SaveResponse",
    "ImportResponse",
]
