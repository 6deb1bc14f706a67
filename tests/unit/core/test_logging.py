"""
core/logging.py 테스트

로그 파일 경로, 핸들러 구성, 중복 방지 확인
"""

import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

import pytest

from core.constants import Paths
from core.logging import NOISY_LOGGERS, get_log_file_path, setup_logging


@pytest.fixture
def restore_root_logger():
    """setup_logging이 추가한 핸들러 제거 및 루트 레벨 복원"""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if isinstance(handler, TimedRotatingFileHandler) or type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


class TestGetLogFilePath:
    """get_log_file_path 테스트"""

    def test_default_dir(self) -> None:
        assert get_log_file_path("web") == Paths.LOGS_DIR / "web.log"

    def test_custom_dir(self, temp_dir: Path) -> None:
        assert get_log_file_path("verify", temp_dir) == temp_dir / "verify.log"


class TestSetupLogging:
    """setup_logging 테스트"""

    def test_handlers(self, temp_dir: Path, restore_root_logger) -> None:
        root = setup_logging("web", console_level="DEBUG", log_dir=temp_dir)

        assert len(root.handlers) == 2
        file_handlers = [h for h in root.handlers if isinstance(h, TimedRotatingFileHandler)]
        assert len(file_handlers) == 1
        assert (temp_dir / "web.log").exists()

        console = next(h for h in root.handlers if h not in file_handlers)
        assert console.level == logging.DEBUG

    def test_no_duplicate_handlers(self, temp_dir: Path, restore_root_logger) -> None:
        setup_logging("web", log_dir=temp_dir)
        root = setup_logging("web", log_dir=temp_dir)

        assert len(root.handlers) == 2

    def test_noisy_loggers_quieted(self, temp_dir: Path, restore_root_logger) -> None:
        setup_logging("web", log_dir=temp_dir)

        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_writes_to_file(self, temp_dir: Path, restore_root_logger) -> None:
        setup_logging("verify", log_dir=temp_dir)
        logging.getLogger("core.ledger.engine").info("매출 기록: INV-00001")

        for handler in logging.getLogger().handlers:
            handler.flush()

        content = (temp_dir / "verify.log").read_text(encoding="utf-8")
        assert "INV-00001" in content
