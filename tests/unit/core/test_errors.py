"""
core/errors.py 테스트

예외 계층 및 메시지 확인
"""

from decimal import Decimal

from core.errors import (
    ExceedsOutstandingError,
    LedgerError,
    NotFoundError,
    UnbalancedEntryError,
    UnknownAccountError,
    ValidationError,
)


class TestHierarchy:
    """예외 계층 테스트"""

    def test_all_inherit_ledger_error(self) -> None:
        for cls in (
            ValidationError,
            NotFoundError,
            ExceedsOutstandingError,
            UnbalancedEntryError,
            UnknownAccountError,
        ):
            assert issubclass(cls, LedgerError)


class TestAttributes:
    """예외 속성 테스트"""

    def test_not_found(self) -> None:
        error = NotFoundError("SalesInvoice", 42)

        assert error.entity == "SalesInvoice"
        assert error.entity_id == 42
        assert "42" in str(error)

    def test_exceeds_outstanding(self) -> None:
        error = ExceedsOutstandingError(1, Decimal("150.00"), Decimal("100.00"))

        assert error.amount == Decimal("150.00")
        assert error.outstanding == Decimal("100.00")
        assert "exceeds outstanding" in str(error)

    def test_unbalanced(self) -> None:
        error = UnbalancedEntryError(7, Decimal("10.00"), Decimal("9.00"))

        assert error.transaction_id == 7
        assert "debit=10.00" in str(error)
        assert "credit=9.00" in str(error)

    def test_unknown_account(self) -> None:
        error = UnknownAccountError("9999")

        assert error.code == "9999"
        assert "9999" in str(error)
