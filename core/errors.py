"""
도메인 예외 정의

호출자 오류 (상태 변경 없음, 사용자에게 거부 메시지로 반환):
- ValidationError: 잘못된/누락된 입력
- NotFoundError: 참조한 엔티티 없음
- ExceedsOutstandingError: 수금액이 미수 잔액 초과

내부 결함 (로그 후 조사 대상, 절대 무시하지 않음):
- UnbalancedEntryError: 차변 합계 != 대변 합계
- UnknownAccountError: 계정과목표에 없는 계정 코드

모든 예외는 이벤트 전체를 원자적으로 중단시킨다.
"""

from decimal import Decimal


class LedgerError(Exception):
    """Ledger 예외 기본 클래스"""
    pass


class ValidationError(LedgerError):
    """입력 검증 실패"""
    pass


class NotFoundError(LedgerError):
    """참조 엔티티 없음"""

    def __init__(self, entity: str, entity_id: object):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found: {entity_id}")


class ExceedsOutstandingError(LedgerError):
    """수금액이 송장 미수 잔액을 초과"""

    def __init__(self, invoice_id: int, amount: Decimal, outstanding: Decimal):
        self.invoice_id = invoice_id
        self.amount = amount
        self.outstanding = outstanding
        super().__init__(
            f"Collection amount {amount} exceeds outstanding balance "
            f"{outstanding} of invoice {invoice_id}"
        )


class UnbalancedEntryError(LedgerError):
    """불균형 분개 (Posting 규칙 결함)"""

    def __init__(self, transaction_id: int | None, total_debit: Decimal, total_credit: Decimal):
        self.transaction_id = transaction_id
        self.total_debit = total_debit
        self.total_credit = total_credit
        super().__init__(
            f"Unbalanced entry for transaction {transaction_id}: "
            f"debit={total_debit} credit={total_credit}"
        )


class UnknownAccountError(LedgerError):
    """계정과목표에 없는 계정 코드 (설정 결함)"""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Unknown account code: {code}")
