#!/usr/bin/env python3
"""장부 점검 스크립트

저장된 스냅샷을 읽어 무결성 점검 결과, 대차대조표, 손익 통계를 출력.
문제가 있으면 종료 코드 1.

실행 방법:
    python scripts/verify_books.py [--db data/salesledger.db]
"""

import argparse
import asyncio
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from adapters.db.sqlite_adapter import SQLiteAdapter
from core.config.loader import get_settings
from core.errors import ValidationError
from core.ledger.engine import BookkeepingEngine
from core.logging import setup_logging
from core.storage.snapshot_store import SnapshotStore


async def main(db_path: Path) -> int:
    if not db_path.exists():
        print(f"DB 파일이 없습니다: {db_path}")
        return 1

    async with SQLiteAdapter(db_path, readonly=True) as db:
        if not await db.table_exists("ledger_snapshot"):
            print(f"ledger_snapshot 테이블이 없습니다: {db_path}")
            return 1
        snapshot = await SnapshotStore(db).load()

    if snapshot is None:
        print("저장된 스냅샷이 없습니다")
        return 0

    engine = BookkeepingEngine(seed_opening_balances=False)
    try:
        engine.import_snapshot(snapshot)
    except ValidationError as e:
        print(f"스냅샷 복원 실패: {e}")
        return 1

    print("=" * 60)
    print(f"=== 장부 점검: {db_path} ===")
    print("=" * 60)

    problems = engine.verify_integrity()
    print("\n[1] 무결성:")
    if problems:
        for problem in problems:
            print(f"  ✗ {problem}")
    else:
        print("  ✓ 문제 없음")

    print("\n[2] 대차대조표:")
    for key, value in engine.get_balance_sheet().to_dict().items():
        print(f"  {key:20} | {value:>15}")

    print("\n[3] 손익 통계:")
    for key, value in engine.get_stats().to_dict().items():
        print(f"  {key:24} | {value:>15}")

    print(f"\n[4] 건수: invoices={len(engine.list_invoices())}, "
          f"collections={len(engine.list_collections())}, "
          f"returns={len(engine.list_returns())}, "
          f"transactions={len(engine.list_transactions())}")

    return 1 if problems else 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="장부 스냅샷 점검")
    parser.add_argument(
        "--db",
        type=Path,
        default=None,
        help="DB 파일 경로 (기본: settings.yaml의 db_path)",
    )
    args = parser.parse_args()

    setup_logging("verify")
    sys.exit(asyncio.run(main(args.db or get_settings().db_path)))
