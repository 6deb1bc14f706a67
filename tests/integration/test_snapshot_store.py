"""SnapshotStore 통합 테스트 (엔진 ↔ SQLite)"""

from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest
import pytest_asyncio

from adapters.db.sqlite_adapter import SQLiteAdapter, init_schema
from core.domain.records import ItemLine
from core.ledger.engine import BookkeepingEngine
from core.storage.snapshot_store import META_KEY, SnapshotStore


@pytest_asyncio.fixture
async def db(tmp_path: Path) -> SQLiteAdapter:
    """테스트용 임시 DB"""
    adapter = SQLiteAdapter(tmp_path / "test_ledger.db")
    await adapter.connect()
    await init_schema(adapter)
    yield adapter
    await adapter.close()


def _populated_engine() -> BookkeepingEngine:
    engine = BookkeepingEngine()
    invoice = engine.submit_sale(
        "Beta",
        date(2024, 1, 15),
        "credit",
        [ItemLine("Widget", Decimal("5"), Decimal("100"), Decimal("40"))],
    )
    engine.submit_collection(invoice.id, date(2024, 1, 20), Decimal("200"), "bank_transfer")
    engine.submit_return(
        invoice.id,
        date(2024, 1, 25),
        "return",
        [ItemLine("Widget", Decimal("1"), Decimal("100"), Decimal("40"))],
        reason="Damaged",
    )
    return engine


class TestSnapshotStore:
    """스냅샷 저장/복원 테스트"""

    @pytest.mark.asyncio
    async def test_load_empty(self, db: SQLiteAdapter) -> None:
        """저장된 적 없으면 None"""
        store = SnapshotStore(db)

        assert await store.load() is None
        assert await store.updated_at() is None

    @pytest.mark.asyncio
    async def test_save_and_load(self, db: SQLiteAdapter) -> None:
        engine = _populated_engine()
        store = SnapshotStore(db)

        saved = await store.save(engine.export_snapshot())
        loaded = await store.load()

        # 8개 테이블 + counters + meta
        assert saved == 10
        assert loaded == engine.export_snapshot()
        assert await store.updated_at() is not None

    @pytest.mark.asyncio
    async def test_meta_row(self, db: SQLiteAdapter) -> None:
        await SnapshotStore(db).save(BookkeepingEngine().export_snapshot())

        row = await db.fetchone(
            "SELECT payload_json FROM ledger_snapshot WHERE collection = ?",
            (META_KEY,),
        )

        assert row is not None
        assert '"version": 1' in row[0]

    @pytest.mark.asyncio
    async def test_save_overwrites(self, db: SQLiteAdapter) -> None:
        store = SnapshotStore(db)
        engine = BookkeepingEngine()
        await store.save(engine.export_snapshot())

        engine.submit_sale(
            "Acme",
            date(2024, 2, 1),
            "cash",
            [ItemLine("Widget", Decimal("1"), Decimal("10"), Decimal("5"))],
        )
        await store.save(engine.export_snapshot())

        loaded = await store.load()
        rows = await db.fetchall("SELECT collection FROM ledger_snapshot")

        assert len(loaded["sales_invoices"]) == 1
        assert len(rows) == 10

    @pytest.mark.asyncio
    async def test_restore_into_new_engine(self, db: SQLiteAdapter) -> None:
        """저장 → 새 엔진 복원 → 동일 보고서"""
        engine = _populated_engine()
        await SnapshotStore(db).save(engine.export_snapshot())

        restored = BookkeepingEngine()
        restored.import_snapshot(await SnapshotStore(db).load())

        assert restored.get_balance_sheet() == engine.get_balance_sheet()
        assert restored.get_stats() == engine.get_stats()
        assert restored.list_return_items(1)[0].description == "Widget"

    @pytest.mark.asyncio
    async def test_survives_reconnect(self, tmp_path: Path) -> None:
        db_path = tmp_path / "persist.db"
        engine = _populated_engine()

        async with SQLiteAdapter(db_path) as adapter:
            await init_schema(adapter)
            await SnapshotStore(adapter).save(engine.export_snapshot())

        async with SQLiteAdapter(db_path, readonly=True) as adapter:
            snapshot = await SnapshotStore(adapter).load()

        assert snapshot["counters"]["collections"] == 2
        assert len(snapshot["journal_entries"]) == 10
