"""
복식부기 API 라우트

계정 잔액 기반 보고서 및 분개 조회 API
"""

from fastapi import APIRouter, Depends

from core.ledger.engine import BookkeepingEngine
from web.dependencies import get_engine
from web.models.responses import (
    AccountResponse,
    BalanceSheetResponse,
    IntegrityResponse,
    JournalEntryResponse,
    StatsResponse,
    TransactionResponse,
    TrialBalanceResponse,
)

router = APIRouter(prefix="/api", tags=["Ledger"])


@router.get("/balance-sheet", response_model=BalanceSheetResponse)
async def get_balance_sheet(
    engine: BookkeepingEngine = Depends(get_engine),
) -> BalanceSheetResponse:
    """대차대조표"""
    return BalanceSheetResponse(**engine.get_balance_sheet().to_dict())


@router.get("/stats", response_model=StatsResponse)
async def get_stats(
    engine: BookkeepingEngine = Depends(get_engine),
) -> StatsResponse:
    """손익 통계 (매출/수금/반품 합계, 매출총이익)"""
    return StatsResponse(**engine.get_stats().to_dict())


@router.get("/trial-balance", response_model=TrialBalanceResponse)
async def get_trial_balance(
    engine: BookkeepingEngine = Depends(get_engine),
) -> TrialBalanceResponse:
    """시산표"""
    return TrialBalanceResponse.model_validate(engine.get_trial_balance().to_dict())


@router.get("/accounts", response_model=list[AccountResponse])
async def list_accounts(
    engine: BookkeepingEngine = Depends(get_engine),
) -> list[AccountResponse]:
    """계정과목표 (코드 순)"""
    return [AccountResponse(**a.to_dict()) for a in engine.list_accounts()]


@router.get("/journal-entries", response_model=list[JournalEntryResponse])
async def list_journal_entries(
    engine: BookkeepingEngine = Depends(get_engine),
) -> list[JournalEntryResponse]:
    """분개 라인 (최신 날짜 순)"""
    return [JournalEntryResponse(**e.to_dict()) for e in engine.list_journal_entries()]


@router.get("/transactions", response_model=list[TransactionResponse])
async def list_transactions(
    engine: BookkeepingEngine = Depends(get_engine),
) -> list[TransactionResponse]:
    """거래 (최신 날짜 순)"""
    return [TransactionResponse(**t.to_dict()) for t in engine.list_transactions()]


@router.get("/integrity", response_model=IntegrityResponse)
async def check_integrity(
    engine: BookkeepingEngine = Depends(get_engine),
) -> IntegrityResponse:
    """장부 무결성 점검"""
    problems = engine.verify_integrity()
    return IntegrityResponse(ok=not problems, problems=problems)
