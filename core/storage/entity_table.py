"""
EntityTable - 엔티티 종류별 인메모리 저장소

엔티티 종류마다 하나의 테이블을 두고 단조 증가 정수 ID를 발급.
관계는 ID(외래 키 방식)로만 표현하므로 참조 순환 없음.

ID 규칙:
- 테이블별 독립 시퀀스 (1부터 시작)
- 한 번 발급된 ID는 재사용하지 않음 (스냅샷 복원 후에도 동일)
"""

from __future__ import annotations

import logging
from typing import Callable, Generic, Iterator, Protocol, TypeVar

logger = logging.getLogger(__name__)


class HasId(Protocol):
    id: int


T = TypeVar("T", bound=HasId)


class EntityTable(Generic[T]):
    """단조 증가 ID를 가진 엔티티 테이블

    Args:
        name: 테이블 이름 (스냅샷 키, 로깅용)

    사용 예시:
    ```python
    invoices: EntityTable[SalesInvoice] = EntityTable("sales_invoices")
    invoice = invoices.insert(lambda new_id: SalesInvoice(id=new_id, ...))
    invoices.get(invoice.id)
    ```
    """

    def __init__(self, name: str):
        self.name = name
        self._rows: dict[int, T] = {}
        self._next_id = 1

    @property
    def next_id(self) -> int:
        """다음에 발급될 ID"""
        return self._next_id

    def insert(self, factory: Callable[[int], T]) -> T:
        """새 ID를 발급하여 엔티티 생성 후 저장

        Args:
            factory: 발급된 ID를 받아 엔티티를 생성하는 함수

        Returns:
            저장된 엔티티
        """
        new_id = self._next_id
        row = factory(new_id)
        if row.id != new_id:
            raise ValueError(f"{self.name}: factory returned id {row.id}, expected {new_id}")
        self._rows[new_id] = row
        self._next_id += 1
        return row

    def replace(self, row: T) -> None:
        """기존 엔티티 교체 (가변 엔티티 갱신용)"""
        if row.id not in self._rows:
            raise KeyError(f"{self.name}: id {row.id} not found")
        self._rows[row.id] = row

    def get(self, entity_id: int) -> T | None:
        """ID로 조회 (없으면 None)"""
        return self._rows.get(entity_id)

    def all(self) -> list[T]:
        """전체 엔티티 (ID 오름차순 = 삽입 순서)"""
        return [self._rows[k] for k in sorted(self._rows)]

    def where(self, predicate: Callable[[T], bool]) -> list[T]:
        """조건에 맞는 엔티티 목록 (ID 오름차순)"""
        return [row for row in self.all() if predicate(row)]

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[T]:
        return iter(self.all())

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._rows

    # -------------------------------------------------------------------------
    # Savepoint (이벤트 단위 원자성)
    # -------------------------------------------------------------------------

    def mark(self) -> int:
        """현재 시퀀스 위치 기록"""
        return self._next_id

    def discard_from(self, mark: int) -> int:
        """mark 이후 삽입된 엔티티 제거

        시퀀스는 되돌리지 않는다 (ID 재사용 금지).

        Returns:
            제거된 엔티티 수
        """
        stale = [k for k in self._rows if k >= mark]
        for k in stale:
            del self._rows[k]
        if stale:
            logger.warning(f"{self.name}: {len(stale)}건 롤백 (id >= {mark})")
        return len(stale)

    # -------------------------------------------------------------------------
    # 스냅샷 복원
    # -------------------------------------------------------------------------

    def load(self, rows: list[T], next_id: int | None = None) -> None:
        """테이블 전체 교체

        next_id가 없거나 기존 최대 ID 이하이면 max(id) + 1로 보정.

        Raises:
            ValueError: 중복 ID가 있는 경우
        """
        loaded: dict[int, T] = {}
        for row in rows:
            if row.id in loaded:
                raise ValueError(f"{self.name}: duplicate id {row.id}")
            loaded[row.id] = row

        floor = max(loaded, default=0) + 1
        if next_id is None or next_id < floor:
            if next_id is not None:
                logger.warning(
                    f"{self.name}: next_id {next_id} 보정 → {floor} (최대 id 이하)"
                )
            next_id = floor

        self._rows = loaded
        self._next_id = next_id
