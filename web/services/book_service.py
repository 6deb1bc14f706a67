"""
장부 서비스

BookkeepingEngine 위에서 HTTP 요청을 처리하고,
이벤트 처리 성공 후 스냅샷을 DB에 저장한다.

저장 순서 보장:
- export_snapshot()과 save()를 asyncio.Lock 안에서 함께 수행
- 먼저 내보낸 스냅샷이 나중 스냅샷을 덮어쓰는 일이 없음
"""

import asyncio
import logging
from typing import Any

from core.domain.records import Collection, ItemLine, ReturnItem, SalesInvoice, SalesItem, SalesReturn
from core.ledger.engine import BookkeepingEngine
from core.storage.snapshot_store import SnapshotStore
from web.models.requests import (
    CollectionCreateRequest,
    ItemRequest,
    ReturnCreateRequest,
    SaleCreateRequest,
)

logger = logging.getLogger(__name__)


def _item_lines(items: list[ItemRequest]) -> list[ItemLine]:
    return [
        ItemLine(
            description=item.description,
            quantity=item.quantity,
            unit_price=item.unit_price,
            cogs_unit=item.cogs_unit,
        )
        for item in items
    ]


class BookService:
    """장부 서비스

    Args:
        engine: 장부 엔진 (프로세스당 1개)
        store: 스냅샷 저장소 (None이면 저장 생략)
    """

    def __init__(self, engine: BookkeepingEngine, store: SnapshotStore | None = None):
        self.engine = engine
        self.store = store
        self._save_lock = asyncio.Lock()

    # -------------------------------------------------------------------------
    # 영속화
    # -------------------------------------------------------------------------

    async def restore(self) -> bool:
        """마지막 저장 스냅샷으로 엔진 복원

        Returns:
            복원 여부 (저장된 스냅샷이 없으면 False)

        Raises:
            ValidationError: 저장된 스냅샷이 손상된 경우
        """
        if self.store is None:
            return False

        snapshot = await self.store.load()
        if snapshot is None:
            logger.info("저장된 스냅샷 없음 - 새 장부로 시작")
            return False

        self.engine.import_snapshot(snapshot)
        logger.info("스냅샷 복원 완료")
        return True

    async def persist(self) -> bool:
        """현재 장부를 스냅샷으로 저장

        저장 실패는 이미 처리된 이벤트를 되돌리지 않는다.

        Returns:
            저장 성공 여부
        """
        if self.store is None:
            return False

        async with self._save_lock:
            snapshot = self.engine.export_snapshot()
            try:
                await self.store.save(snapshot)
            except Exception as e:
                logger.error(f"스냅샷 저장 실패: {e}")
                return False
        return True

    # -------------------------------------------------------------------------
    # 업무 이벤트
    # -------------------------------------------------------------------------

    async def create_sale(self, request: SaleCreateRequest) -> tuple[SalesInvoice, list[SalesItem], bool]:
        """매출 기록 후 저장

        Returns:
            (송장, 품목 목록, 저장 성공 여부)
        """
        invoice = self.engine.submit_sale(
            customer_name=request.customer_name,
            date=request.date,
            payment_method=request.payment_method,
            items=_item_lines(request.items),
            invoice_number=request.invoice_number,
        )
        saved = await self.persist()
        return invoice, self.engine.list_sales_items(invoice.id), saved

    async def create_collection(self, request: CollectionCreateRequest) -> tuple[Collection, bool]:
        """수금 기록 후 저장"""
        collection = self.engine.submit_collection(
            invoice_id=request.invoice_id,
            date=request.date,
            amount=request.amount,
            payment_method=request.payment_method,
            reference=request.reference,
            notes=request.notes,
        )
        saved = await self.persist()
        return collection, saved

    async def create_return(
        self, request: ReturnCreateRequest
    ) -> tuple[SalesReturn, list[ReturnItem], bool]:
        """반품 기록 후 저장"""
        sales_return = self.engine.submit_return(
            invoice_id=request.invoice_id,
            date=request.date,
            return_type=request.return_type,
            items=_item_lines(request.items),
            reason=request.reason,
            return_number=request.return_number,
        )
        saved = await self.persist()
        return sales_return, self.engine.list_return_items(sales_return.id), saved

    async def import_data(self, snapshot: dict[str, Any]) -> bool:
        """스냅샷 가져오기 후 저장"""
        self.engine.import_snapshot(snapshot)
        return await self.persist()
