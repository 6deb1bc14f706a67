"""
헬스 체크 엔드포인트

GET /health - 서버 상태 확인
"""

from datetime import datetime, timezone

from fastapi import APIRouter

from core.constants import Defaults
from web.models.responses import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """서버 상태 확인

    Returns:
        HealthResponse: status, version, timestamp 정보
    """
    return HealthResponse(
        status="ok",
        version=Defaults.APP_VERSION,
        timestamp=datetime.now(timezone.utc),
    )
