"""
장부 엔진 (Bookkeeping Engine)

계정 원장, 분개장, 업무 문서 테이블, 보고서 생성기를 소유하는 컨텍스트 객체.
프로세스 시작 시 한 번 생성되어 요청 처리기에 전달된다 (전역 싱글톤 없음).

처리 흐름 (업무 이벤트 1건 = 원자적 단위):
1. 입력 검증 및 금액 집계
2. Posting 규칙으로 분개 세트 계산
3. 분개장 기록 + 계정 잔액 반영
4. 업무 문서 생성/갱신

동시성:
- 단일 RLock으로 모든 쓰기와 읽기를 직렬화
- 쓰기 단위는 Savepoint를 잡고 예외 시 전체 복원
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Iterator, Mapping, Sequence, TypeVar

from core.constants import DocumentPrefixes, Money
from core.domain.records import (
    Collection,
    ItemLine,
    ReturnItem,
    SalesInvoice,
    SalesItem,
    SalesReturn,
    derive_invoice_status,
)
from core.errors import (
    ExceedsOutstandingError,
    NotFoundError,
    ValidationError,
)
from core.ledger.accounts import Account, AccountLedger
from core.ledger.entry_builder import ItemAmounts, PostingRules, PostingSet, aggregate_items
from core.ledger.journal import Journal, JournalEntry, Transaction
from core.ledger.reports import AccountingStats, BalanceSheet, ReportBuilder, TrialBalance
from core.ledger.types import INITIAL_ACCOUNTS
from core.storage.entity_table import EntityTable
from core.types import CollectionMethod, PaymentMethod, ReturnType
from core.utils.money import ZERO, is_cent_precise, money_equal, to_decimal, to_money

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)

SNAPSHOT_VERSION = 1

# 호출자 오류 (WARNING) - 그 외 예외는 결함 (ERROR)
CALLER_ERRORS = (ValidationError, NotFoundError, ExceedsOutstandingError)


def _coerce_enum(enum_cls: type[E], value: Any, label: str) -> E:
    try:
        return enum_cls(value)
    except ValueError as e:
        raise ValidationError(f"Invalid {label}: {value!r}") from e


def _coerce_date(value: Any, label: str = "date") -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value)
        except ValueError as e:
            raise ValidationError(f"Invalid {label}: {value!r}") from e
    raise ValidationError(f"Invalid {label}: {value!r}")


def _coerce_amount(value: Any, label: str) -> Decimal:
    """호출자 금액 검증 (양수, 센트 단위, 상한 이내)"""
    try:
        raw = to_decimal(value)
    except ValueError as e:
        raise ValidationError(f"Invalid {label}: {value!r}") from e
    if raw <= ZERO:
        raise ValidationError(f"{label} must be positive: {value}")
    if raw > Money.MAX_AMOUNT:
        raise ValidationError(f"{label} exceeds {Money.MAX_AMOUNT}: {value}")
    if not is_cent_precise(raw):
        raise ValidationError(f"{label} has more than 2 decimal places: {value}")
    return to_money(raw)


def _aggregate(lines: list[ItemLine]) -> ItemAmounts:
    """품목 금액 집계 (문서 합계 상한 검증)"""
    amounts = aggregate_items([line.as_tuple() for line in lines])
    for label, total in (("amount", amounts.amount), ("cogs", amounts.cogs)):
        if total > Money.MAX_AMOUNT:
            raise ValidationError(f"Document {label} exceeds {Money.MAX_AMOUNT}: {total}")
    return amounts


def _check_chart(accounts: list[Account]) -> None:
    """스냅샷 계정이 고정 계정과목표와 일치하는지 검증

    계정 유형이나 고유 방향이 바뀌면 이후 이벤트의 잔액 부호가 뒤집혀
    회계 등식이 깨지므로, 적재 시점에 거부한다.
    """
    chart = {code: (name, account_type, side) for code, name, account_type, side, _ in INITIAL_ACCOUNTS}

    unknown = sorted(a.code for a in accounts if a.code not in chart)
    if unknown:
        raise ValidationError(f"Snapshot has unknown accounts: {', '.join(unknown)}")

    for account in accounts:
        actual = (account.name, account.account_type, account.normal_side)
        if actual != chart[account.code]:
            name, account_type, side = chart[account.code]
            raise ValidationError(
                f"Snapshot account {account.code} does not match chart: "
                f"expected {name}/{account_type}/{side}, "
                f"got {account.name}/{account.account_type}/{account.normal_side}"
            )


def _required_text(value: Any, label: str) -> str:
    text = str(value or "").strip()
    if not text:
        raise ValidationError(f"{label} is required")
    return text


def _item_lines(items: Sequence[ItemLine | Mapping[str, Any]]) -> list[ItemLine]:
    """품목 입력 정규화 (ItemLine 또는 dict)"""
    if not items:
        raise ValidationError("At least one item is required")

    lines = []
    for item in items:
        if isinstance(item, ItemLine):
            lines.append(item)
            continue
        try:
            lines.append(
                ItemLine(
                    description=item["description"],
                    quantity=item["quantity"],
                    unit_price=item["unit_price"],
                    cogs_unit=item["cogs_unit"],
                )
            )
        except (KeyError, TypeError) as e:
            raise ValidationError(f"Malformed item: {item!r}") from e
    return lines


class BookkeepingEngine:
    """장부 엔진

    Args:
        seed_opening_balances: True면 기초 잔액(Cash, Inventory, Share Capital)으로 시작

    사용 예시:
    ```python
    engine = BookkeepingEngine()
    invoice = engine.submit_sale(
        customer_name="Acme",
        date=date(2024, 1, 15),
        payment_method=PaymentMethod.CREDIT,
        items=[ItemLine("Widget", Decimal("2"), Decimal("100"), Decimal("40"))],
    )
    engine.submit_collection(invoice.id, date(2024, 1, 20), Decimal("200"), CollectionMethod.CASH)
    print(engine.get_balance_sheet())
    ```
    """

    def __init__(self, seed_opening_balances: bool = True):
        self._lock = threading.RLock()

        self.ledger = AccountLedger(seed_opening_balances=seed_opening_balances)
        self.journal = Journal(self.ledger)
        self.rules = PostingRules(self.ledger)

        self.invoices: EntityTable[SalesInvoice] = EntityTable("sales_invoices")
        self.sales_items: EntityTable[SalesItem] = EntityTable("sales_items")
        self.collections: EntityTable[Collection] = EntityTable("collections")
        self.returns: EntityTable[SalesReturn] = EntityTable("sales_returns")
        self.return_items: EntityTable[ReturnItem] = EntityTable("return_items")

        self.reports = ReportBuilder(self.ledger, self.invoices, self.collections, self.returns)

    # -------------------------------------------------------------------------
    # 쓰기 단위 (Savepoint)
    # -------------------------------------------------------------------------

    def _tables(self) -> list[EntityTable[Any]]:
        """이벤트 처리 중 행이 추가되는 테이블"""
        return [
            self.journal.transactions,
            self.journal.entries,
            self.invoices,
            self.sales_items,
            self.collections,
            self.returns,
            self.return_items,
        ]

    @contextmanager
    def _unit_of_work(self, label: str) -> Iterator[None]:
        """이벤트 1건의 원자적 처리 구간

        예외 발생 시 추가된 행을 제거하고 계정 잔액을 복원한 뒤 재발생.
        송장 결제 필드 갱신은 구간의 마지막 단계에서만 수행해야 한다.
        """
        with self._lock:
            marks = [(table, table.mark()) for table in self._tables()]
            balances = self.ledger.balances()
            try:
                yield
            except Exception as e:
                for table, mark in marks:
                    table.discard_from(mark)
                self.ledger.restore_balances(balances)
                if isinstance(e, CALLER_ERRORS):
                    logger.warning(f"{label} 거부: {e}")
                else:
                    logger.error(f"{label} 처리 실패 (롤백): {type(e).__name__}: {e}")
                raise

    def _post(self, posting_set: PostingSet, entry_date: date) -> Transaction:
        """분개 기록 + 잔액 반영"""
        transaction, _ = self.journal.record(
            transaction_type=posting_set.transaction_type,
            entry_date=entry_date,
            reference=posting_set.reference,
            description=posting_set.description,
            total_amount=posting_set.total_amount,
            lines=posting_set.lines,
        )
        self.ledger.apply_deltas(posting_set.deltas)
        return transaction

    def _document_number(
        self,
        requested: str | None,
        prefix: str,
        table: EntityTable[Any],
        attr: str,
    ) -> str:
        """문서 번호 결정 (미지정 시 {prefix}-00001 형식으로 발번)

        Raises:
            ValidationError: 지정한 번호가 이미 사용 중
        """
        used = {getattr(row, attr) for row in table}

        if requested is not None:
            number = _required_text(requested, attr)
            if number in used:
                raise ValidationError(f"Duplicate {attr}: {number}")
            return number

        seq = table.next_id
        number = f"{prefix}-{seq:05d}"
        while number in used:
            seq += 1
            number = f"{prefix}-{seq:05d}"
        return number

    def _require_invoice(self, invoice_id: int) -> SalesInvoice:
        invoice = self.invoices.get(invoice_id)
        if invoice is None:
            raise NotFoundError("SalesInvoice", invoice_id)
        return invoice

    # -------------------------------------------------------------------------
    # 업무 이벤트
    # -------------------------------------------------------------------------

    def submit_sale(
        self,
        customer_name: str,
        date: date | str,
        payment_method: PaymentMethod | str,
        items: Sequence[ItemLine | Mapping[str, Any]],
        invoice_number: str | None = None,
    ) -> SalesInvoice:
        """매출 기록

        Returns:
            생성된 송장 (현금 매출은 완납, 외상 매출은 전액 미수)

        Raises:
            ValidationError: 고객명 누락, 품목 없음, 0 이하 금액, 송장 번호 중복
        """
        with self._unit_of_work("매출"):
            customer = _required_text(customer_name, "customer_name")
            sale_date = _coerce_date(date)
            method = _coerce_enum(PaymentMethod, payment_method, "payment_method")
            lines = _item_lines(items)
            amounts = _aggregate(lines)

            number = self._document_number(
                invoice_number, DocumentPrefixes.INVOICE, self.invoices, "invoice_number"
            )
            posting_set = self.rules.for_sale(number, customer, method, amounts)

            invoice = self.invoices.insert(
                lambda new_id: SalesInvoice.create(
                    invoice_id=new_id,
                    invoice_number=number,
                    customer_name=customer,
                    invoice_date=sale_date,
                    payment_method=method,
                    total_amount=amounts.amount,
                )
            )
            for line in lines:
                self.sales_items.insert(
                    lambda new_id, line=line: SalesItem(
                        id=new_id,
                        invoice_id=invoice.id,
                        description=line.description,
                        quantity=line.quantity,
                        unit_price=line.unit_price,
                        cogs_unit=line.cogs_unit,
                        total_amount=line.total_amount,
                    )
                )
            self._post(posting_set, sale_date)

        logger.info(
            f"매출 기록: {invoice.invoice_number} {customer} ({method.value}) "
            f"amount={amounts.amount} cogs={amounts.cogs}"
        )
        return invoice

    def submit_collection(
        self,
        invoice_id: int,
        date: date | str,
        amount: Decimal | str,
        payment_method: CollectionMethod | str,
        reference: str | None = None,
        notes: str | None = None,
    ) -> Collection:
        """수금 기록

        Raises:
            NotFoundError: 송장 없음
            ValidationError: 0 이하 금액, 잘못된 수금 수단
            ExceedsOutstandingError: 수금액 > 미수 잔액
        """
        with self._unit_of_work("수금"):
            invoice = self._require_invoice(invoice_id)
            collection_date = _coerce_date(date)
            method = _coerce_enum(CollectionMethod, payment_method, "payment_method")
            value = _coerce_amount(amount, "amount")
            ref = (reference or "").strip() or (
                f"{DocumentPrefixes.COLLECTION}-{invoice.invoice_number}"
            )

            posting_set = self.rules.for_collection(
                reference=ref,
                customer_name=invoice.customer_name,
                invoice_id=invoice.id,
                amount=value,
                outstanding=invoice.outstanding_amount,
            )

            collection = self.collections.insert(
                lambda new_id: Collection(
                    id=new_id,
                    invoice_id=invoice.id,
                    date=collection_date,
                    amount=value,
                    payment_method=method.value,
                    reference=ref,
                    notes=notes,
                )
            )
            self._post(posting_set, collection_date)

            # 마지막 단계: 이후 실패 지점 없음
            updated = invoice.apply_payment(value)
            self.invoices.replace(updated)

        logger.info(
            f"수금 기록: {invoice.invoice_number} amount={value} "
            f"outstanding={updated.outstanding_amount} status={updated.status}"
        )
        return collection

    def submit_return(
        self,
        invoice_id: int,
        date: date | str,
        return_type: ReturnType | str,
        items: Sequence[ItemLine | Mapping[str, Any]],
        reason: str | None = None,
        return_number: str | None = None,
    ) -> SalesReturn:
        """매출 반품/에누리 기록

        원 송장의 결제 방식에 따라 현금 환불 또는 매출채권 차감.
        송장 결제 필드는 변경하지 않으며 원 송장 금액 한도도 두지 않는다.

        Raises:
            NotFoundError: 송장 없음
            ValidationError: 품목 없음, 0 이하 금액, 반품 번호 중복
        """
        with self._unit_of_work("반품"):
            invoice = self._require_invoice(invoice_id)
            return_date = _coerce_date(date)
            kind = _coerce_enum(ReturnType, return_type, "return_type")
            lines = _item_lines(items)
            amounts = _aggregate(lines)

            number = self._document_number(
                return_number, DocumentPrefixes.RETURN, self.returns, "return_number"
            )
            posting_set = self.rules.for_return(
                reference=number,
                customer_name=invoice.customer_name,
                original_payment_method=PaymentMethod(invoice.payment_method),
                amounts=amounts,
            )

            sales_return = self.returns.insert(
                lambda new_id: SalesReturn(
                    id=new_id,
                    return_number=number,
                    invoice_id=invoice.id,
                    date=return_date,
                    total_amount=amounts.amount,
                    return_type=kind.value,
                    reason=reason,
                )
            )
            for line in lines:
                self.return_items.insert(
                    lambda new_id, line=line: ReturnItem(
                        id=new_id,
                        return_id=sales_return.id,
                        description=line.description,
                        quantity=line.quantity,
                        unit_price=line.unit_price,
                        cogs_unit=line.cogs_unit,
                        total_amount=line.total_amount,
                    )
                )
            self._post(posting_set, return_date)

        logger.info(
            f"반품 기록: {number} ({kind.value}) invoice={invoice.invoice_number} "
            f"amount={amounts.amount} cogs={amounts.cogs}"
        )
        return sales_return

    # -------------------------------------------------------------------------
    # 보고서
    # -------------------------------------------------------------------------

    def get_balance_sheet(self) -> BalanceSheet:
        with self._lock:
            return self.reports.get_balance_sheet()

    def get_stats(self) -> AccountingStats:
        with self._lock:
            return self.reports.get_stats()

    def get_trial_balance(self) -> TrialBalance:
        with self._lock:
            return self.reports.get_trial_balance()

    # -------------------------------------------------------------------------
    # 조회 (날짜 내림차순 목록은 같은 날짜 내 기록 순 유지)
    # -------------------------------------------------------------------------

    def list_accounts(self) -> list[Account]:
        with self._lock:
            return self.ledger.list_accounts()

    def list_journal_entries(self) -> list[JournalEntry]:
        with self._lock:
            return self.journal.list_all()

    def list_transactions(self) -> list[Transaction]:
        with self._lock:
            return self.journal.list_transactions()

    def list_invoices(self) -> list[SalesInvoice]:
        with self._lock:
            return sorted(self.invoices.all(), key=lambda i: i.date, reverse=True)

    def get_invoice(self, invoice_id: int) -> SalesInvoice:
        """송장 조회

        Raises:
            NotFoundError: 송장 없음
        """
        with self._lock:
            return self._require_invoice(invoice_id)

    def list_sales_items(self, invoice_id: int) -> list[SalesItem]:
        with self._lock:
            self._require_invoice(invoice_id)
            return self.sales_items.where(lambda item: item.invoice_id == invoice_id)

    def list_collections(self) -> list[Collection]:
        with self._lock:
            return sorted(self.collections.all(), key=lambda c: c.date, reverse=True)

    def list_returns(self) -> list[SalesReturn]:
        with self._lock:
            return sorted(self.returns.all(), key=lambda r: r.date, reverse=True)

    def list_return_items(self, return_id: int) -> list[ReturnItem]:
        with self._lock:
            if return_id not in self.returns:
                raise NotFoundError("SalesReturn", return_id)
            return self.return_items.where(lambda item: item.return_id == return_id)

    def list_invoices_with_items(self) -> list[tuple[SalesInvoice, list[SalesItem]]]:
        """송장 목록과 송장별 품목 (한 번의 잠금 안에서 조회)"""
        with self._lock:
            by_invoice: dict[int, list[SalesItem]] = {}
            for item in self.sales_items.all():
                by_invoice.setdefault(item.invoice_id, []).append(item)
            return [(i, by_invoice.get(i.id, [])) for i in self.list_invoices()]

    def list_returns_with_items(self) -> list[tuple[SalesReturn, list[ReturnItem]]]:
        """반품 목록과 반품별 품목"""
        with self._lock:
            by_return: dict[int, list[ReturnItem]] = {}
            for item in self.return_items.all():
                by_return.setdefault(item.return_id, []).append(item)
            return [(r, by_return.get(r.id, [])) for r in self.list_returns()]

    # -------------------------------------------------------------------------
    # 무결성 점검
    # -------------------------------------------------------------------------

    def verify_integrity(self) -> list[str]:
        """장부 무결성 점검

        Returns:
            발견된 문제 목록 (빈 목록 = 정상)
        """
        with self._lock:
            problems: list[str] = []

            for transaction_id in self.journal.unbalanced_transactions():
                problems.append(f"Transaction {transaction_id} is unbalanced")

            for entry in self.journal.entries:
                if entry.transaction_id not in self.journal.transactions:
                    problems.append(
                        f"Journal entry {entry.id} references missing transaction "
                        f"{entry.transaction_id}"
                    )
                if self.ledger.get_by_code(entry.account_code) is None:
                    problems.append(
                        f"Journal entry {entry.id} references unknown account "
                        f"{entry.account_code}"
                    )

            sheet = self.reports.get_balance_sheet()
            if not sheet.is_balanced:
                problems.append(
                    f"Accounting equation violated: assets={sheet.total_assets} "
                    f"liabilities+equity={sheet.total_liab_equity}"
                )

            problems.extend(self._invoice_problems())
            problems.extend(self._document_problems())

            if problems:
                logger.error(f"무결성 점검 실패: {len(problems)}건")
            return problems

    def _invoice_problems(self) -> list[str]:
        problems = []
        numbers: set[str] = set()
        for invoice in self.invoices:
            if invoice.invoice_number in numbers:
                problems.append(f"Duplicate invoice number {invoice.invoice_number}")
            numbers.add(invoice.invoice_number)

            if not money_equal(
                invoice.paid_amount + invoice.outstanding_amount, invoice.total_amount
            ):
                problems.append(
                    f"Invoice {invoice.id}: paid {invoice.paid_amount} + outstanding "
                    f"{invoice.outstanding_amount} != total {invoice.total_amount}"
                )
            if invoice.outstanding_amount < ZERO:
                problems.append(f"Invoice {invoice.id}: negative outstanding amount")

            expected = derive_invoice_status(invoice.total_amount, invoice.outstanding_amount)
            if invoice.status != expected.value:
                problems.append(
                    f"Invoice {invoice.id}: status {invoice.status} != {expected.value}"
                )
        return problems

    def _document_problems(self) -> list[str]:
        problems = []
        for item in self.sales_items:
            if item.invoice_id not in self.invoices:
                problems.append(f"Sales item {item.id} references missing invoice {item.invoice_id}")
        for collection in self.collections:
            if collection.invoice_id not in self.invoices:
                problems.append(
                    f"Collection {collection.id} references missing invoice {collection.invoice_id}"
                )

        numbers: set[str] = set()
        for sales_return in self.returns:
            if sales_return.return_number in numbers:
                problems.append(f"Duplicate return number {sales_return.return_number}")
            numbers.add(sales_return.return_number)
            if sales_return.invoice_id not in self.invoices:
                problems.append(
                    f"Sales return {sales_return.id} references missing invoice "
                    f"{sales_return.invoice_id}"
                )
        for item in self.return_items:
            if item.return_id not in self.returns:
                problems.append(f"Return item {item.id} references missing return {item.return_id}")
        return problems

    # -------------------------------------------------------------------------
    # 스냅샷
    # -------------------------------------------------------------------------

    def _snapshot_tables(self) -> dict[str, EntityTable[Any]]:
        return {
            "accounts": self.ledger.table,
            "transactions": self.journal.transactions,
            "journal_entries": self.journal.entries,
            "sales_invoices": self.invoices,
            "sales_items": self.sales_items,
            "collections": self.collections,
            "sales_returns": self.returns,
            "return_items": self.return_items,
        }

    def export_snapshot(self) -> dict[str, Any]:
        """현재 장부 전체를 JSON 직렬화 가능한 dict로 내보내기

        락 안에서 생성되므로 분개장과 계정 잔액이 일치하는 시점의 사본.
        """
        with self._lock:
            tables = self._snapshot_tables()
            snapshot: dict[str, Any] = {"version": SNAPSHOT_VERSION}
            for key, table in tables.items():
                snapshot[key] = [row.to_dict() for row in table]
            snapshot["counters"] = {key: table.next_id for key, table in tables.items()}
            return snapshot

    def import_snapshot(self, snapshot: Mapping[str, Any]) -> None:
        """스냅샷으로 장부 전체 교체 (전부 아니면 전무)

        새 엔진에 먼저 적재하고 무결성 점검을 통과한 경우에만 교체한다.

        Raises:
            ValidationError: 형식 오류, 참조 오류, 불균형 데이터
        """
        with self._lock:
            try:
                staged = self._stage(snapshot)
            except ValidationError as e:
                logger.warning(f"스냅샷 가져오기 거부: {e}")
                raise

            problems = staged.verify_integrity()
            if problems:
                logger.warning(f"스냅샷 가져오기 거부: 무결성 문제 {len(problems)}건")
                raise ValidationError("Snapshot failed integrity check: " + "; ".join(problems))

            self.ledger = staged.ledger
            self.journal = staged.journal
            self.rules = staged.rules
            self.invoices = staged.invoices
            self.sales_items = staged.sales_items
            self.collections = staged.collections
            self.returns = staged.returns
            self.return_items = staged.return_items
            self.reports = staged.reports

        logger.info(
            f"스냅샷 가져오기 완료: invoices={len(self.invoices)}, "
            f"transactions={len(self.journal.transactions)}"
        )

    @staticmethod
    def _stage(snapshot: Mapping[str, Any]) -> BookkeepingEngine:
        """스냅샷을 적재한 새 엔진 생성"""
        if not isinstance(snapshot, Mapping):
            raise ValidationError("Snapshot must be a JSON object")
        if not snapshot.get("accounts"):
            raise ValidationError("Snapshot has no accounts")

        counters = snapshot.get("counters") or {}
        if not isinstance(counters, Mapping):
            raise ValidationError("Snapshot counters must be an object")

        staged = BookkeepingEngine(seed_opening_balances=False)
        row_types: dict[str, Any] = {
            "accounts": Account,
            "transactions": Transaction,
            "journal_entries": JournalEntry,
            "sales_invoices": SalesInvoice,
            "sales_items": SalesItem,
            "collections": Collection,
            "sales_returns": SalesReturn,
            "return_items": ReturnItem,
        }

        for key, table in staged._snapshot_tables().items():
            raw_rows = snapshot.get(key) or []
            if not isinstance(raw_rows, list):
                raise ValidationError(f"Snapshot {key} must be a list")
            try:
                rows = [row_types[key].from_dict(row) for row in raw_rows]
                next_id = counters.get(key)
                next_id = int(next_id) if next_id is not None else None
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                raise ValidationError(f"Malformed {key} in snapshot: {e}") from e

            if key == "accounts":
                staged.ledger.load(rows, next_id)
                missing = [
                    code for code, *_ in INITIAL_ACCOUNTS
                    if staged.ledger.get_by_code(code) is None
                ]
                if missing:
                    raise ValidationError(f"Snapshot is missing accounts: {', '.join(missing)}")
                _check_chart(rows)
                continue
            try:
                table.load(rows, next_id)
            except ValueError as e:
                raise ValidationError(str(e)) from e

        return staged


