"""
SnapshotStore - 장부 스냅샷 저장소

ledger_snapshot 테이블에 엔진 스냅샷을 저장/복원.
엔티티 종류(collection)마다 1행이며, 저장은 단일 트랜잭션으로 수행되어
일부 종류만 갱신된 스냅샷이 남지 않는다.

행 구조:
- "accounts", "transactions", ... : 엔티티 목록 (JSON 배열)
- "counters": 테이블별 다음 ID (JSON 객체)
- "meta": 스냅샷 버전 등 부가 정보
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any

from adapters.db.sqlite_adapter import SQLiteAdapter

logger = logging.getLogger(__name__)

META_KEY = "meta"


class SnapshotStore:
    """장부 스냅샷 저장소

    Args:
        db: 연결된 SQLiteAdapter (init_schema 적용 완료)

    사용 예시:
    ```python
    async with SQLiteAdapter(Paths.LEDGER_DB) as db:
        await init_schema(db)
        store = SnapshotStore(db)

        await store.save(engine.export_snapshot())

        snapshot = await store.load()
        if snapshot is not None:
            engine.import_snapshot(snapshot)
    ```
    """

    def __init__(self, db: SQLiteAdapter):
        self.db = db

    async def save(self, snapshot: dict[str, Any]) -> int:
        """스냅샷 저장 (UPSERT, 단일 트랜잭션)

        Args:
            snapshot: BookkeepingEngine.export_snapshot() 결과

        Returns:
            저장된 행 수
        """
        now = datetime.now(timezone.utc).isoformat()

        meta = {key: value for key, value in snapshot.items() if not isinstance(value, (list, dict))}
        collections = {key: value for key, value in snapshot.items() if isinstance(value, (list, dict))}
        collections[META_KEY] = meta

        rows = [
            (key, json.dumps(value, ensure_ascii=False), now)
            for key, value in collections.items()
        ]

        async with self.db.transaction() as conn:
            await conn.executemany(
                """
                INSERT INTO ledger_snapshot (collection, payload_json, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(collection) DO UPDATE SET
                    payload_json = excluded.payload_json,
                    updated_at = excluded.updated_at
                """,
                rows,
            )

        logger.info(f"스냅샷 저장: {len(rows)}행 ({self.db.db_path})")
        return len(rows)

    async def load(self) -> dict[str, Any] | None:
        """마지막 저장 스냅샷 조회

        Returns:
            스냅샷 dict, 저장된 적이 없으면 None
        """
        rows = await self.db.fetchall(
            """
            SELECT collection, payload_json
            FROM ledger_snapshot
            ORDER BY collection
            """
        )
        if not rows:
            return None

        snapshot: dict[str, Any] = {}
        for collection, payload_json in rows:
            value = json.loads(payload_json)
            if collection == META_KEY:
                snapshot.update(value)
            else:
                snapshot[collection] = value

        logger.debug(f"스냅샷 로드: {len(rows)}행")
        return snapshot

    async def updated_at(self) -> str | None:
        """마지막 저장 시각 (ISO 8601)"""
        row = await self.db.fetchone("SELECT MAX(updated_at) FROM ledger_snapshot")
        return row[0] if row else None
