"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from decimal import Decimal
from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → salesledger/)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent


class Defaults:
    """기본값 상수"""

    APP_NAME: str = "SalesLedger"
    APP_VERSION: str = "1.0.0"

    WEB_HOST: str = "127.0.0.1"
    WEB_PORT: int = 8000

    LOG_LEVEL: str = "INFO"

    # 기초 잔액 시드 여부 (Cash 2,375,000 / Inventory 450,000 / Share Capital 2,825,000)
    SEED_OPENING_BALANCES: bool = True


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    DATA_DIR: Path = PROJECT_ROOT / "data"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"

    # 설정 파일
    SETTINGS_FILE: Path = CONFIG_DIR / "settings.yaml"

    # DB 파일 (스냅샷 저장)
    LEDGER_DB: Path = DATA_DIR / "salesledger.db"


class AccountCodes:
    """계정 코드 (계정과목표 고정 코드)"""

    CASH: str = "1001"
    ACCOUNTS_RECEIVABLE: str = "1002"
    INVENTORY: str = "1003"
    ACCOUNTS_PAYABLE: str = "2001"
    SHARE_CAPITAL: str = "3001"
    SALES_REVENUE: str = "4001"
    SALES_RETURNS: str = "4002"
    COGS: str = "5001"


class Money:
    """금액 처리 상수"""

    # 소수점 2자리 (센트 단위)
    QUANTUM: Decimal = Decimal("0.01")

    # 균형 검증 허용 오차 (이 값 미만의 차이는 동일 금액으로 간주)
    TOLERANCE: Decimal = Decimal("0.01")

    # 단일 금액 상한 (품목 금액, 문서 합계, 수금액)
    MAX_AMOUNT: Decimal = Decimal("999999999999.99")


class DocumentPrefixes:
    """문서 번호 접두사"""

    INVOICE: str = "INV"
    RETURN: str = "RET"
    COLLECTION: str = "COL"
