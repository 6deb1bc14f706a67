"""
의존성 주입

FastAPI의 Depends를 사용한 의존성 관리.
엔진과 서비스는 lifespan에서 생성되어 app.state에 보관된다.
"""

import logging

from fastapi import HTTPException, Request

from core.errors import ExceedsOutstandingError, LedgerError, NotFoundError, ValidationError
from core.ledger.engine import BookkeepingEngine
from web.services.book_service import BookService

logger = logging.getLogger(__name__)


def get_book_service(request: Request) -> BookService:
    """장부 서비스 반환"""
    return request.app.state.book_service


def get_engine(request: Request) -> BookkeepingEngine:
    """장부 엔진 반환 (조회용)"""
    return get_book_service(request).engine


def to_http_error(error: LedgerError) -> HTTPException:
    """도메인 예외 → HTTP 예외

    - NotFoundError → 404
    - ValidationError, ExceedsOutstandingError → 400
    - 그 외 (분개 불균형, 알 수 없는 계정) → 500
    """
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, (ValidationError, ExceedsOutstandingError)):
        return HTTPException(status_code=400, detail=str(error))

    logger.exception(f"장부 결함: {error}")
    return HTTPException(status_code=500, detail="Internal bookkeeping error")
