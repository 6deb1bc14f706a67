"""
타입 정의 모듈

업무 문서(매출 송장, 수금, 매출 반품)에서 사용하는 Enum 정의
모든 Enum은 str을 상속하여 문자열 직렬화 가능
"""

from enum import Enum


class PaymentMethod(str, Enum):
    """매출 결제 방식"""

    CASH = "cash"
    CREDIT = "credit"


class CollectionMethod(str, Enum):
    """수금 수단"""

    CASH = "cash"
    BANK_TRANSFER = "bank_transfer"
    CHECK = "check"


class InvoiceStatus(str, Enum):
    """송장 상태

    outstanding_amount 로부터 파생:
    - 0 → PAID
    - 0 < outstanding < total → PARTIAL
    - 그 외 → OPEN
    """

    OPEN = "open"
    PARTIAL = "partial"
    PAID = "paid"


class ReturnType(str, Enum):
    """반품 유형"""

    RETURN = "return"  # 상품 반품
    ALLOWANCE = "allowance"  # 매출 에누리
