"""
백업 라우트

스냅샷 내보내기/가져오기 및 수동 저장 API
"""

from typing import Any

from fastapi import APIRouter, Body, Depends

from core.errors import LedgerError
from core.ledger.engine import BookkeepingEngine
from web.dependencies import get_book_service, get_engine, to_http_error
from web.models.responses import ImportResponse, SaveResponse
from web.services.book_service import BookService

router = APIRouter(prefix="/api", tags=["Backup"])


@router.get("/export-data")
async def export_data(
    engine: BookkeepingEngine = Depends(get_engine),
) -> dict[str, Any]:
    """장부 전체 스냅샷 (JSON)"""
    return engine.export_snapshot()


@router.post("/import-data", response_model=ImportResponse)
async def import_data(
    snapshot: dict[str, Any] = Body(..., description="export-data 형식의 스냅샷"),
    service: BookService = Depends(get_book_service),
) -> ImportResponse:
    """스냅샷으로 장부 전체 교체

    형식 오류나 불균형 데이터는 400으로 거부되며 기존 장부는 유지된다.
    """
    try:
        saved = await service.import_data(snapshot)
    except LedgerError as e:
        raise to_http_error(e) from e

    counts = {
        key: len(value)
        for key, value in service.engine.export_snapshot().items()
        if isinstance(value, list)
    }
    return ImportResponse(imported=True, saved=saved, counts=counts)


@router.post("/save", response_model=SaveResponse)
async def save(
    service: BookService = Depends(get_book_service),
) -> SaveResponse:
    """현재 장부를 DB에 저장"""
    return SaveResponse(saved=await service.persist())
