"""
설정 로더

settings.yaml 로드 및 애플리케이션 설정 생성.
파일이 없으면 core.constants의 기본값을 사용한다.

settings.yaml 예시:
```yaml
db_path: data/salesledger.db
web:
  host: 127.0.0.1
  port: 8000
log_level: INFO
seed_opening_balances: true
```
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from core.constants import PROJECT_ROOT, Defaults, Paths

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class AppConfig:
    """애플리케이션 설정

    불변 데이터 구조로 설정 변경 방지
    """

    db_path: Path = Paths.LEDGER_DB
    web_host: str = Defaults.WEB_HOST
    web_port: int = Defaults.WEB_PORT
    log_level: str = Defaults.LOG_LEVEL
    seed_opening_balances: bool = Defaults.SEED_OPENING_BALANCES

    @property
    def log_level_no(self) -> int:
        """logging 모듈 레벨 값"""
        return logging.getLevelName(self.log_level)


class SettingsLoadError(Exception):
    """Settings 로드 실패 예외"""

    pass


def _section(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key) or {}
    if not isinstance(value, dict):
        raise SettingsLoadError(f"settings.yaml의 '{key}' 항목은 매핑이어야 합니다")
    return value


def parse_settings(data: dict[str, Any] | None) -> AppConfig:
    """YAML 데이터에서 AppConfig 생성

    Raises:
        SettingsLoadError: 값의 타입이 잘못된 경우
    """
    if data is None:
        return AppConfig()
    if not isinstance(data, dict):
        raise SettingsLoadError("settings.yaml 최상위는 매핑이어야 합니다")

    web = _section(data, "web")

    # db_path: 상대 경로는 프로젝트 루트 기준
    raw_db_path = data.get("db_path", Paths.LEDGER_DB)
    if not isinstance(raw_db_path, (str, Path)) or not str(raw_db_path):
        raise SettingsLoadError(f"db_path가 올바르지 않습니다: {raw_db_path!r}")
    db_path = Path(raw_db_path)
    if not db_path.is_absolute():
        db_path = PROJECT_ROOT / db_path

    web_host = web.get("host", Defaults.WEB_HOST)
    if not isinstance(web_host, str) or not web_host:
        raise SettingsLoadError(f"web.host가 올바르지 않습니다: {web_host!r}")

    web_port = web.get("port", Defaults.WEB_PORT)
    if isinstance(web_port, bool) or not isinstance(web_port, int) or not 0 < web_port < 65536:
        raise SettingsLoadError(f"web.port가 올바르지 않습니다: {web_port!r}")

    log_level = str(data.get("log_level", Defaults.LOG_LEVEL)).upper()
    if log_level not in VALID_LOG_LEVELS:
        raise SettingsLoadError(
            f"유효하지 않은 log_level입니다: '{log_level}'. 유효한 값: {list(VALID_LOG_LEVELS)}"
        )

    seed = data.get("seed_opening_balances", Defaults.SEED_OPENING_BALANCES)
    if not isinstance(seed, bool):
        raise SettingsLoadError(f"seed_opening_balances는 true/false여야 합니다: {seed!r}")

    return AppConfig(
        db_path=db_path,
        web_host=web_host,
        web_port=web_port,
        log_level=log_level,
        seed_opening_balances=seed,
    )


def load_settings(path: Path | None = None) -> AppConfig:
    """settings.yaml 파일 로드

    Args:
        path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        AppConfig 인스턴스 (파일이 없으면 기본값)

    Raises:
        SettingsLoadError: 파싱 실패 또는 잘못된 값
    """
    if path is None:
        path = Paths.SETTINGS_FILE

    if not path.exists():
        return AppConfig()

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SettingsLoadError(f"settings.yaml 파싱 실패: {e}") from e

    return parse_settings(data)


class Settings:
    """애플리케이션 설정 (싱글턴 패턴)

    settings.yaml을 한 번만 로드하고 이후 동일 인스턴스를 반환
    """

    _instance: "Settings | None" = None
    _config: AppConfig | None = None

    def __new__(cls, settings_path: Path | None = None) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, settings_path: Path | None = None) -> None:
        if self._config is None:
            type(self)._config = load_settings(settings_path)

    @property
    def config(self) -> AppConfig:
        assert self._config is not None
        return self._config

    @property
    def db_path(self) -> Path:
        return self.config.db_path

    @property
    def web_host(self) -> str:
        return self.config.web_host

    @property
    def web_port(self) -> int:
        return self.config.web_port

    @property
    def log_level(self) -> str:
        return self.config.log_level

    @classmethod
    def reset(cls) -> None:
        """싱글턴 인스턴스 초기화 (테스트용)"""
        cls._instance = None
        cls._config = None


def get_settings(settings_path: Path | None = None) -> Settings:
    """Settings 인스턴스 반환

    Args:
        settings_path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Settings 싱글턴 인스턴스
    """
    return Settings(settings_path)
