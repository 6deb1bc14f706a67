"""
복식부기 타입 정의

TransactionType 등 Ledger 시스템에서 사용하는 Enum 및 계정과목표 정의
"""

from enum import Enum

from core.constants import AccountCodes


class TransactionType(str, Enum):
    """분개 거래 유형

    분개를 발생시키는 업무 이벤트 분류.
    str을 상속하여 JSON 직렬화 가능.
    """

    SALE = "sale"  # 매출
    COLLECTION = "collection"  # 수금
    RETURN = "return"  # 매출 반품/에누리


class AccountType(str, Enum):
    """계정 유형

    복식부기의 5대 계정 유형.
    """

    ASSET = "asset"  # 자산 (현금, 매출채권, 재고)
    LIABILITY = "liability"  # 부채 (매입채무)
    EQUITY = "equity"  # 자본 (자본금)
    REVENUE = "revenue"  # 수익 (매출, 매출환입)
    EXPENSE = "expense"  # 비용 (매출원가)


class JournalSide(str, Enum):
    """분개 방향 (차변/대변)"""

    DEBIT = "DEBIT"  # 차변 (자산 증가, 비용 증가)
    CREDIT = "CREDIT"  # 대변 (자산 감소, 수익 증가)


# 초기 계정과목표
INITIAL_ACCOUNTS: list[tuple[str, str, str, str, str]] = [
    # (code, name, account_type, normal_side, opening_balance)

    # ASSET 계정
    (AccountCodes.CASH, "Cash", "asset", "DEBIT", "2375000"),
    (AccountCodes.ACCOUNTS_RECEIVABLE, "Accounts Receivable", "asset", "DEBIT", "0"),
    (AccountCodes.INVENTORY, "Inventory", "asset", "DEBIT", "450000"),

    # LIABILITY 계정
    (AccountCodes.ACCOUNTS_PAYABLE, "Accounts Payable", "liability", "CREDIT", "0"),

    # EQUITY 계정 (순이익이 직접 누적됨)
    (AccountCodes.SHARE_CAPITAL, "Share Capital - Ordinary", "equity", "CREDIT", "2825000"),

    # REVENUE 계정
    (AccountCodes.SALES_REVENUE, "Sales Revenue", "revenue", "CREDIT", "0"),
    (AccountCodes.SALES_RETURNS, "Sales Return and Allowances", "revenue", "DEBIT", "0"),  # 차감적 수익

    # EXPENSE 계정
    (AccountCodes.COGS, "Cost of Goods Sold", "expense", "DEBIT", "0"),
]


# 대차대조표 구성 계정
BALANCE_SHEET_ACCOUNTS: dict[str, tuple[str, ...]] = {
    "assets": (
        AccountCodes.CASH,
        AccountCodes.ACCOUNTS_RECEIVABLE,
        AccountCodes.INVENTORY,
    ),
    "liabilities": (AccountCodes.ACCOUNTS_PAYABLE,),
    "equity": (AccountCodes.SHARE_CAPITAL,),
}
