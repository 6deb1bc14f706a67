"""
수금 라우트

수금 조회 및 등록 API
"""

from fastapi import APIRouter, Depends

from core.errors import LedgerError
from core.ledger.engine import BookkeepingEngine
from web.dependencies import get_book_service, get_engine, to_http_error
from web.models.requests import CollectionCreateRequest
from web.models.responses import CollectionCreateResponse, CollectionResponse
from web.services.book_service import BookService

router = APIRouter(prefix="/api", tags=["Collections"])


@router.get("/collections", response_model=list[CollectionResponse])
async def list_collections(
    engine: BookkeepingEngine = Depends(get_engine),
) -> list[CollectionResponse]:
    """수금 목록 (최신 날짜 순)"""
    return [CollectionResponse(**c.to_dict()) for c in engine.list_collections()]


@router.post("/collections", response_model=CollectionCreateResponse)
async def create_collection(
    request: CollectionCreateRequest,
    service: BookService = Depends(get_book_service),
) -> CollectionCreateResponse:
    """수금 등록

    미수 잔액을 초과하는 금액은 400으로 거부.
    """
    try:
        collection, saved = await service.create_collection(request)
    except LedgerError as e:
        raise to_http_error(e) from e

    return CollectionCreateResponse(
        collection=CollectionResponse(**collection.to_dict()),
        saved=saved,
    )
