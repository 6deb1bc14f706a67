"""Journal 테스트"""

from datetime import date
from decimal import Decimal

import pytest

from core.constants import AccountCodes
from core.errors import (
    NotFoundError,
    UnbalancedEntryError,
    UnknownAccountError,
    ValidationError,
)
from core.ledger.accounts import AccountLedger
from core.ledger.entry_builder import PostingLine
from core.ledger.journal import Journal, JournalEntry, Transaction, check_balanced
from core.ledger.types import TransactionType


@pytest.fixture
def journal() -> Journal:
    return Journal(AccountLedger())


def _sale_lines(amount: str = "200") -> list[PostingLine]:
    value = Decimal(amount)
    return [
        PostingLine.debit_line(AccountCodes.CASH, value, "Sale"),
        PostingLine.credit_line(AccountCodes.SALES_REVENUE, value, "Sale"),
    ]


def _record(journal: Journal, entry_date: date, reference: str, lines=None):
    return journal.record(
        transaction_type=TransactionType.SALE,
        entry_date=entry_date,
        reference=reference,
        description="Sale to Acme",
        total_amount=Decimal("200"),
        lines=lines if lines is not None else _sale_lines(),
    )


class TestCheckBalanced:
    """check_balanced 테스트"""

    def test_within_tolerance(self) -> None:
        check_balanced(1, [Decimal("100.00")], [Decimal("99.995")])

    def test_unbalanced(self) -> None:
        with pytest.raises(UnbalancedEntryError) as exc_info:
            check_balanced(1, [Decimal("100")], [Decimal("99.99")])

        assert exc_info.value.total_debit == Decimal("100.00")


class TestRecord:
    """거래 기록 테스트"""

    def test_record_creates_transaction_and_entries(self, journal: Journal) -> None:
        transaction, entries = _record(journal, date(2024, 1, 15), "INV-00001")

        assert transaction.id == 1
        assert transaction.transaction_type == "sale"
        assert transaction.total_amount == Decimal("200.00")
        assert [e.account_code for e in entries] == [
            AccountCodes.CASH,
            AccountCodes.SALES_REVENUE,
        ]
        assert all(e.transaction_id == transaction.id for e in entries)
        assert all(e.reference == "INV-00001" for e in entries)
        assert all(e.date == date(2024, 1, 15) for e in entries)

    def test_account_name_snapshot(self, journal: Journal) -> None:
        _, entries = _record(journal, date(2024, 1, 15), "INV-00001")

        assert entries[0].account_name == "Cash"
        assert entries[1].account_name == "Sales Revenue"

    def test_unbalanced_creates_nothing(self, journal: Journal) -> None:
        lines = [
            PostingLine.debit_line(AccountCodes.CASH, Decimal("100"), "x"),
            PostingLine.credit_line(AccountCodes.SALES_REVENUE, Decimal("90"), "x"),
        ]

        with pytest.raises(UnbalancedEntryError):
            _record(journal, date(2024, 1, 15), "X", lines)

        assert len(journal.transactions) == 0
        assert len(journal.entries) == 0

    def test_unknown_account(self, journal: Journal) -> None:
        lines = [
            PostingLine.debit_line("9999", Decimal("100"), "x"),
            PostingLine.credit_line(AccountCodes.SALES_REVENUE, Decimal("100"), "x"),
        ]

        with pytest.raises(UnknownAccountError):
            _record(journal, date(2024, 1, 15), "X", lines)

        assert len(journal.transactions) == 0

    def test_empty_lines(self, journal: Journal) -> None:
        with pytest.raises(ValidationError):
            _record(journal, date(2024, 1, 15), "X", [])

    def test_negative_amount(self, journal: Journal) -> None:
        lines = [
            PostingLine.debit_line(AccountCodes.CASH, Decimal("-100"), "x"),
            PostingLine.credit_line(AccountCodes.SALES_REVENUE, Decimal("-100"), "x"),
        ]

        with pytest.raises(ValidationError):
            _record(journal, date(2024, 1, 15), "X", lines)


class TestAppendEntries:
    """분개 라인 추가 테스트"""

    def test_missing_transaction(self, journal: Journal) -> None:
        with pytest.raises(NotFoundError):
            journal.append_entries(99, _sale_lines())

    def test_append_to_existing(self, journal: Journal) -> None:
        transaction, _ = _record(journal, date(2024, 1, 15), "INV-00001")
        journal.append_entries(transaction.id, _sale_lines("50"))

        assert len(journal.entries_for(transaction.id)) == 4


class TestQueries:
    """조회 테스트"""

    def test_list_date_descending_stable(self, journal: Journal) -> None:
        _record(journal, date(2024, 1, 10), "A")
        _record(journal, date(2024, 1, 20), "B")
        _record(journal, date(2024, 1, 20), "C")

        assert [t.reference for t in journal.list_transactions()] == ["B", "C", "A"]
        assert [e.reference for e in journal.list_all()] == ["B", "B", "C", "C", "A", "A"]

    def test_unbalanced_transactions_detects_loaded_rows(self, journal: Journal) -> None:
        transaction, _ = _record(journal, date(2024, 1, 15), "A")
        broken = JournalEntry(
            id=3,
            transaction_id=transaction.id,
            account_code=AccountCodes.CASH,
            account_name="Cash",
            debit_amount=Decimal("5"),
            credit_amount=Decimal("0"),
            date=date(2024, 1, 15),
            reference="A",
            description="x",
        )
        journal.entries.load(journal.entries.all() + [broken])

        assert journal.unbalanced_transactions() == [transaction.id]


class TestSerialization:
    """직렬화 테스트"""

    def test_transaction_round_trip(self, journal: Journal) -> None:
        transaction, entries = _record(journal, date(2024, 1, 15), "INV-00001")

        assert Transaction.from_dict(transaction.to_dict()) == transaction
        assert JournalEntry.from_dict(entries[0].to_dict()) == entries[0]

    def test_transaction_rejects_unknown_type(self, journal: Journal) -> None:
        transaction, _ = _record(journal, date(2024, 1, 15), "INV-00001")
        data = transaction.to_dict()
        data["transaction_type"] = "refund"

        with pytest.raises(ValueError):
            Transaction.from_dict(data)
