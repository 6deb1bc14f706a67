"""
core/constants.py 테스트

모든 경로가 pathlib.Path 타입이고, 상수가 정상적으로 접근 가능한지 확인
"""

from decimal import Decimal
from pathlib import Path

from core.constants import (
    PROJECT_ROOT,
    AccountCodes,
    Defaults,
    DocumentPrefixes,
    Money,
    Paths,
)


class TestProjectRoot:
    """PROJECT_ROOT 테스트"""

    def test_project_root_is_path(self) -> None:
        """PROJECT_ROOT가 Path 타입인지 확인"""
        assert isinstance(PROJECT_ROOT, Path)

    def test_project_root_is_absolute(self) -> None:
        """PROJECT_ROOT가 절대 경로인지 확인"""
        assert PROJECT_ROOT.is_absolute()

    def test_project_root_contains_core_directory(self) -> None:
        """PROJECT_ROOT에 core 디렉토리가 있는지 확인"""
        assert (PROJECT_ROOT / "core").exists()


class TestPaths:
    """Paths 테스트"""

    def test_all_paths_are_path_type(self) -> None:
        for path in (
            Paths.CONFIG_DIR,
            Paths.DATA_DIR,
            Paths.LOGS_DIR,
            Paths.SETTINGS_FILE,
            Paths.LEDGER_DB,
        ):
            assert isinstance(path, Path)

    def test_paths_under_project_root(self) -> None:
        assert Paths.SETTINGS_FILE.parent == Paths.CONFIG_DIR
        assert Paths.LEDGER_DB.parent == Paths.DATA_DIR
        assert Paths.DATA_DIR.parent == PROJECT_ROOT


class TestDefaults:
    """Defaults 테스트"""

    def test_web_defaults(self) -> None:
        assert isinstance(Defaults.WEB_HOST, str)
        assert Defaults.WEB_PORT == 8000

    def test_seed_enabled_by_default(self) -> None:
        assert Defaults.SEED_OPENING_BALANCES is True


class TestAccountCodes:
    """AccountCodes 테스트"""

    def test_codes_are_unique(self) -> None:
        codes = [
            AccountCodes.CASH,
            AccountCodes.ACCOUNTS_RECEIVABLE,
            AccountCodes.INVENTORY,
            AccountCodes.ACCOUNTS_PAYABLE,
            AccountCodes.SHARE_CAPITAL,
            AccountCodes.SALES_REVENUE,
            AccountCodes.SALES_RETURNS,
            AccountCodes.COGS,
        ]
        assert len(set(codes)) == 8

    def test_fixed_codes(self) -> None:
        assert AccountCodes.CASH == "1001"
        assert AccountCodes.SALES_RETURNS == "4002"
        assert AccountCodes.COGS == "5001"


class TestMoneyAndPrefixes:
    """Money / DocumentPrefixes 테스트"""

    def test_money_precision(self) -> None:
        assert Money.QUANTUM == Decimal("0.01")
        assert Money.TOLERANCE == Decimal("0.01")

    def test_prefixes(self) -> None:
        assert DocumentPrefixes.INVOICE == "INV"
        assert DocumentPrefixes.RETURN == "RET"
        assert DocumentPrefixes.COLLECTION == "COL"
