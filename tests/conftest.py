"""
pytest 공통 fixture 정의

장부 엔진, 설정 파일, 임시 디렉토리 fixture
"""

import tempfile
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

from core.config.loader import Settings
from core.domain.records import ItemLine
from core.ledger.engine import BookkeepingEngine


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def reset_settings() -> None:
    """Settings 싱글턴 초기화 (테스트 간 격리)"""
    Settings.reset()
    yield
    Settings.reset()


@pytest.fixture
def temp_settings_file(temp_dir: Path) -> Path:
    """테스트용 settings.yaml 파일 생성"""
    content = """# 테스트용 settings.yaml
db_path: data/test_ledger.db
web:
  host: 0.0.0.0
  port: 9000
log_level: debug
seed_opening_balances: false
"""
    settings_path = temp_dir / "settings.yaml"
    settings_path.write_text(content, encoding="utf-8")
    return settings_path


@pytest.fixture
def engine() -> BookkeepingEngine:
    """기초 잔액이 시드된 장부 엔진"""
    return BookkeepingEngine(seed_opening_balances=True)


@pytest.fixture
def empty_engine() -> BookkeepingEngine:
    """잔액 0에서 시작하는 장부 엔진"""
    return BookkeepingEngine(seed_opening_balances=False)


@pytest.fixture
def sale_date() -> date:
    return date(2024, 1, 15)


@pytest.fixture
def make_item():
    """품목 입력 생성 헬퍼"""

    def _make(
        quantity: str,
        unit_price: str,
        cogs_unit: str,
        description: str = "Widget",
    ) -> ItemLine:
        return ItemLine(
            description=description,
            quantity=Decimal(quantity),
            unit_price=Decimal(unit_price),
            cogs_unit=Decimal(cogs_unit),
        )

    return _make
