"""
스토리지 모듈

인메모리 엔티티 테이블과 장부 스냅샷 저장소 제공
"""

from core.storage.entity_table import EntityTable
from core.storage.snapshot_store import SnapshotStore

__all__ = [
    "EntityTable",
    "SnapshotStore",
]
