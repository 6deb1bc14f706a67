"""
재무 보고서 (Report Builder)

현재 계정 잔액과 업무 문서로부터 대차대조표, 손익 통계, 시산표를 계산.
읽기 전용이며 상태를 변경하지 않는다 (반복 호출 시 동일 결과).
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from core.constants import AccountCodes
from core.ledger.types import BALANCE_SHEET_ACCOUNTS, JournalSide
from core.utils.money import ZERO, money_equal, sum_money, to_money

if TYPE_CHECKING:
    from core.domain.records import Collection, SalesInvoice, SalesReturn
    from core.ledger.accounts import AccountLedger
    from core.storage.entity_table import EntityTable


@dataclass(frozen=True)
class BalanceSheet:
    """대차대조표

    자본금(share_capital)에는 순이익이 이미 누적되어 있다.
    """

    cash: Decimal
    accounts_receivable: Decimal
    inventory: Decimal
    total_assets: Decimal
    accounts_payable: Decimal
    total_liabilities: Decimal
    share_capital: Decimal
    total_equity: Decimal
    total_liab_equity: Decimal

    @property
    def is_balanced(self) -> bool:
        """자산 == 부채 + 자본 (0.01 이내)"""
        return money_equal(self.total_assets, self.total_liab_equity)

    def to_dict(self) -> dict[str, str]:
        return {
            "cash": str(self.cash),
            "accounts_receivable": str(self.accounts_receivable),
            "inventory": str(self.inventory),
            "total_assets": str(self.total_assets),
            "accounts_payable": str(self.accounts_payable),
            "total_liabilities": str(self.total_liabilities),
            "share_capital": str(self.share_capital),
            "total_equity": str(self.total_equity),
            "total_liab_equity": str(self.total_liab_equity),
        }


@dataclass(frozen=True)
class AccountingStats:
    """손익 통계

    gross_profit = (매출 - 매출환입) - 매출원가
    net_income = gross_profit (기타 비용 계정 없음)
    """

    total_sales: Decimal
    total_collections: Decimal
    total_returns: Decimal
    outstanding_receivables: Decimal
    gross_profit: Decimal
    net_income: Decimal

    def to_dict(self) -> dict[str, str]:
        return {
            "total_sales": str(self.total_sales),
            "total_collections": str(self.total_collections),
            "total_returns": str(self.total_returns),
            "outstanding_receivables": str(self.outstanding_receivables),
            "gross_profit": str(self.gross_profit),
            "net_income": str(self.net_income),
        }


@dataclass(frozen=True)
class TrialBalanceRow:
    """시산표 행

    잔액은 계정 고유 방향 쪽 열에 표시 (음수 잔액은 반대쪽 열).
    """

    code: str
    name: str
    account_type: str
    debit: Decimal
    credit: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "name": self.name,
            "account_type": self.account_type,
            "debit": str(self.debit),
            "credit": str(self.credit),
        }


@dataclass(frozen=True)
class TrialBalance:
    """시산표"""

    rows: list[TrialBalanceRow]
    total_debit: Decimal
    total_credit: Decimal

    @property
    def is_balanced(self) -> bool:
        return money_equal(self.total_debit, self.total_credit)

    def to_dict(self) -> dict[str, Any]:
        return {
            "rows": [row.to_dict() for row in self.rows],
            "total_debit": str(self.total_debit),
            "total_credit": str(self.total_credit),
            "is_balanced": self.is_balanced,
        }


class ReportBuilder:
    """보고서 생성기

    Args:
        ledger: 계정 원장
        invoices: 매출 송장 테이블
        collections: 수금 테이블
        returns: 매출 반품 테이블
    """

    def __init__(
        self,
        ledger: AccountLedger,
        invoices: EntityTable[SalesInvoice],
        collections: EntityTable[Collection],
        returns: EntityTable[SalesReturn],
    ):
        self.ledger = ledger
        self.invoices = invoices
        self.collections = collections
        self.returns = returns

    def _balance(self, code: str) -> Decimal:
        account = self.ledger.get_by_code(code)
        return account.balance if account else ZERO

    def get_balance_sheet(self) -> BalanceSheet:
        """대차대조표 계산"""
        cash = self._balance(AccountCodes.CASH)
        receivable = self._balance(AccountCodes.ACCOUNTS_RECEIVABLE)
        inventory = self._balance(AccountCodes.INVENTORY)
        payable = self._balance(AccountCodes.ACCOUNTS_PAYABLE)
        share_capital = self._balance(AccountCodes.SHARE_CAPITAL)

        total_assets = sum_money(
            self._balance(code) for code in BALANCE_SHEET_ACCOUNTS["assets"]
        )
        total_liabilities = sum_money(
            self._balance(code) for code in BALANCE_SHEET_ACCOUNTS["liabilities"]
        )
        total_equity = sum_money(
            self._balance(code) for code in BALANCE_SHEET_ACCOUNTS["equity"]
        )

        return BalanceSheet(
            cash=cash,
            accounts_receivable=receivable,
            inventory=inventory,
            total_assets=total_assets,
            accounts_payable=payable,
            total_liabilities=total_liabilities,
            share_capital=share_capital,
            total_equity=total_equity,
            total_liab_equity=to_money(total_liabilities + total_equity),
        )

    def get_stats(self) -> AccountingStats:
        """손익 통계 계산

        합계 항목은 업무 문서에서, 손익 항목은 계정 잔액에서 계산.
        """
        invoices = self.invoices.all()

        revenue = self._balance(AccountCodes.SALES_REVENUE)
        returns_amount = self._balance(AccountCodes.SALES_RETURNS)
        cogs = self._balance(AccountCodes.COGS)
        gross_profit = to_money((revenue - returns_amount) - cogs)

        return AccountingStats(
            total_sales=sum_money(i.total_amount for i in invoices),
            total_collections=sum_money(c.amount for c in self.collections.all()),
            total_returns=sum_money(r.total_amount for r in self.returns.all()),
            outstanding_receivables=sum_money(i.outstanding_amount for i in invoices),
            gross_profit=gross_profit,
            net_income=gross_profit,
        )

    def get_trial_balance(self) -> TrialBalance:
        """시산표 계산

        Share Capital 순이익 반영은 분개 외 잔액 반영이고 수익/비용 계정은
        마감되지 않으므로, 거래 후 대변 합계가 누적 순이익만큼 크게 나온다.
        """
        rows = []
        for account in self.ledger.list_accounts():
            balance = account.balance
            on_debit_side = (account.normal_side == JournalSide.DEBIT.value) == (balance >= ZERO)
            amount = abs(balance)
            rows.append(
                TrialBalanceRow(
                    code=account.code,
                    name=account.name,
                    account_type=account.account_type,
                    debit=amount if on_debit_side else ZERO,
                    credit=ZERO if on_debit_side else amount,
                )
            )

        return TrialBalance(
            rows=rows,
            total_debit=sum_money(row.debit for row in rows),
            total_credit=sum_money(row.credit for row in rows),
        )
