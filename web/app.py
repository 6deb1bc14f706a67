"""
FastAPI 애플리케이션

라우터 등록 및 앱 설정.
장부 엔진은 lifespan에서 한 번 생성되어 app.state에 보관된다.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
from core.config.loader import AppConfig, get_settings
from core.constants import Defaults
from core.ledger.engine import BookkeepingEngine
from core.storage.snapshot_store import SnapshotStore
from web.routes import backup, collections, health, ledger, returns, sales
from web.services.book_service import BookService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """앱 생명주기 관리

    시작 시: DB 스키마 초기화 → 엔진 생성 → 마지막 스냅샷 복원
    종료 시: 마지막 저장 후 DB 연결 종료
    """
    config: AppConfig = app.state.config

    engine = BookkeepingEngine(seed_opening_balances=config.seed_opening_balances)

    async with SQLiteAdapter(config.db_path) as db:
        await init_schema(db)

        service = BookService(engine, SnapshotStore(db))
        await service.restore()
        app.state.book_service = service
        logger.info(f"Web: 장부 엔진 준비 완료 (db={config.db_path})")

        yield

        await service.persist()
        logger.info("Web: 종료 전 스냅샷 저장 완료")


def create_app(config: AppConfig | None = None) -> FastAPI:
    """FastAPI 앱 생성

    Args:
        config: 애플리케이션 설정 (None이면 settings.yaml)
    """
    app = FastAPI(
        title=f"{Defaults.APP_NAME} API",
        description="매출/수금/반품 복식부기 장부 API",
        version=Defaults.APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.config = config or get_settings().config

    # CORS 설정 (개발용)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # API 라우터 등록
    # =========================================================================

    app.include_router(health.router)
    app.include_router(ledger.router)
    app.include_router(sales.router)
    app.include_router(collections.router)
    app.include_router(returns.router)
    app.include_router(backup.router)

    return app


app = create_app()
