"""
매출 반품 라우트

반품/에누리 조회 및 등록 API
"""

from fastapi import APIRouter, Depends, Path

from core.errors import LedgerError
from core.ledger.engine import BookkeepingEngine
from web.dependencies import get_book_service, get_engine, to_http_error
from web.models.requests import ReturnCreateRequest
from web.models.responses import (
    ReturnItemResponse,
    SalesReturnDetailResponse,
    SalesReturnListItemResponse,
    SalesReturnResponse,
)
from web.services.book_service import BookService

router = APIRouter(prefix="/api", tags=["Returns"])


@router.get("/sales-returns", response_model=list[SalesReturnListItemResponse])
async def list_returns(
    engine: BookkeepingEngine = Depends(get_engine),
) -> list[SalesReturnListItemResponse]:
    """반품 목록 (최신 날짜 순, 품목 포함)"""
    return [
        SalesReturnListItemResponse(
            **sales_return.to_dict(),
            items=[ReturnItemResponse(**item.to_dict()) for item in items],
        )
        for sales_return, items in engine.list_returns_with_items()
    ]


@router.get("/sales-returns/{return_id}/items", response_model=list[ReturnItemResponse])
async def list_return_items(
    return_id: int = Path(..., description="반품 ID"),
    engine: BookkeepingEngine = Depends(get_engine),
) -> list[ReturnItemResponse]:
    """반품 품목"""
    try:
        items = engine.list_return_items(return_id)
    except LedgerError as e:
        raise to_http_error(e) from e
    return [ReturnItemResponse(**item.to_dict()) for item in items]


@router.post("/sales-returns", response_model=SalesReturnDetailResponse)
async def create_return(
    request: ReturnCreateRequest,
    service: BookService = Depends(get_book_service),
) -> SalesReturnDetailResponse:
    """반품/에누리 등록

    원 송장이 현금 매출이면 현금 환불, 외상 매출이면 매출채권 차감.
    """
    try:
        sales_return, items, saved = await service.create_return(request)
    except LedgerError as e:
        raise to_http_error(e) from e

    return SalesReturnDetailResponse(
        sales_return=SalesReturnResponse(**sales_return.to_dict()),
        items=[ReturnItemResponse(**item.to_dict()) for item in items],
        saved=saved,
    )
