"""
매출 라우트

송장 조회 및 매출 등록 API
"""

from fastapi import APIRouter, Depends, Path

from core.errors import LedgerError
from core.ledger.engine import BookkeepingEngine
from web.dependencies import get_book_service, get_engine, to_http_error
from web.models.requests import SaleCreateRequest
from web.models.responses import (
    SalesInvoiceDetailResponse,
    SalesInvoiceListItemResponse,
    SalesInvoiceResponse,
    SalesItemResponse,
)
from web.services.book_service import BookService

router = APIRouter(prefix="/api", tags=["Sales"])


@router.get("/sales-invoices", response_model=list[SalesInvoiceListItemResponse])
async def list_invoices(
    engine: BookkeepingEngine = Depends(get_engine),
) -> list[SalesInvoiceListItemResponse]:
    """송장 목록 (최신 날짜 순, 품목 포함)"""
    return [
        SalesInvoiceListItemResponse(
            **invoice.to_dict(),
            items=[SalesItemResponse(**item.to_dict()) for item in items],
        )
        for invoice, items in engine.list_invoices_with_items()
    ]


@router.get("/sales-invoices/{invoice_id}", response_model=SalesInvoiceDetailResponse)
async def get_invoice(
    invoice_id: int = Path(..., description="송장 ID"),
    engine: BookkeepingEngine = Depends(get_engine),
) -> SalesInvoiceDetailResponse:
    """송장 상세 (품목 포함)"""
    try:
        invoice = engine.get_invoice(invoice_id)
        items = engine.list_sales_items(invoice_id)
    except LedgerError as e:
        raise to_http_error(e) from e

    return SalesInvoiceDetailResponse(
        invoice=SalesInvoiceResponse(**invoice.to_dict()),
        items=[SalesItemResponse(**item.to_dict()) for item in items],
    )


@router.post("/sales", response_model=SalesInvoiceDetailResponse)
async def create_sale(
    request: SaleCreateRequest,
    service: BookService = Depends(get_book_service),
) -> SalesInvoiceDetailResponse:
    """매출 등록

    현금 매출은 즉시 완납(paid), 외상 매출은 미수(open)로 생성.
    """
    try:
        invoice, items, saved = await service.create_sale(request)
    except LedgerError as e:
        raise to_http_error(e) from e

    return SalesInvoiceDetailResponse(
        invoice=SalesInvoiceResponse(**invoice.to_dict()),
        items=[SalesItemResponse(**item.to_dict()) for item in items],
        saved=saved,
    )
