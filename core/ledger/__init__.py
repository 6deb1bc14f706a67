"""
복식부기 (Double-Entry Bookkeeping) 시스템

매출, 수금, 매출 반품을 균형 잡힌 분개로 기록하고
계정 잔액으로부터 대차대조표와 손익 통계를 계산.

사용 예시:
```python
from core.ledger import BookkeepingEngine

# 초기화 (기초 잔액 포함)
engine = BookkeepingEngine(seed_opening_balances=True)

# 외상 매출 후 일부 수금
invoice = engine.submit_sale(
    customer_name="Acme",
    date="2024-01-15",
    payment_method="credit",
    items=[{"description": "Widget", "quantity": "5", "unit_price": "100", "cogs_unit": "40"}],
)
engine.submit_collection(invoice.id, "2024-01-20", "200", "bank_transfer")

# 보고서 조회
balance_sheet = engine.get_balance_sheet()
stats = engine.get_stats()
```
"""

from core.ledger.accounts import Account, AccountLedger
from core.ledger.engine import BookkeepingEngine
from core.ledger.entry_builder import ItemAmounts, PostingLine, PostingRules, PostingSet
from core.ledger.journal import Journal, JournalEntry, Transaction
from core.ledger.reports import AccountingStats, BalanceSheet, ReportBuilder, TrialBalance
from core.ledger.types import (
    BALANCE_SHEET_ACCOUNTS,
    INITIAL_ACCOUNTS,
    AccountType,
    JournalSide,
    TransactionType,
)

__all__ = [
    # 핵심 클래스
    "BookkeepingEngine",
    "AccountLedger",
    "Journal",
    "PostingRules",
    "ReportBuilder",
    # 데이터
    "Account",
    "Transaction",
    "JournalEntry",
    "PostingLine",
    "PostingSet",
    "ItemAmounts",
    "BalanceSheet",
    "AccountingStats",
    "TrialBalance",
    # Enum
    "TransactionType",
    "AccountType",
    "JournalSide",
    # 상수
    "INITIAL_ACCOUNTS",
    "BALANCE_SHEET_ACCOUNTS",
]
