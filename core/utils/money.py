"""
금액 유틸리티

모든 금액은 Decimal로 처리하고 소수점 2자리로 반올림.
부동소수점(float) 누적 오차 방지를 위해 입력은 항상 str 경유로 변환.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Iterable

from core.constants import Money

ZERO = Decimal("0.00")


def to_decimal(value: Decimal | int | float | str) -> Decimal:
    """임의 값을 Decimal로 변환 (반올림 없음)

    Args:
        value: Decimal, int, float, str

    Returns:
        Decimal 값

    Raises:
        ValueError: 숫자로 해석할 수 없는 경우
    """
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except InvalidOperation as e:
            raise ValueError(f"Invalid decimal value: {value!r}") from e

    if not result.is_finite():
        raise ValueError(f"Invalid decimal value: {value!r}")
    return result


def to_money(value: Decimal | int | float | str) -> Decimal:
    """금액으로 변환 (소수점 2자리, ROUND_HALF_UP)

    Example:
        >>> to_money("10.005")
        Decimal('10.01')
        >>> to_money(0.1 + 0.2)
        Decimal('0.30')

    Raises:
        ValueError: 숫자가 아니거나 2자리로 표현할 수 없을 만큼 큰 경우
    """
    try:
        return to_decimal(value).quantize(Money.QUANTUM, rounding=ROUND_HALF_UP)
    except InvalidOperation as e:
        raise ValueError(f"Amount out of range: {value!r}") from e


def is_cent_precise(value: Decimal) -> bool:
    """소수점 2자리 이내 금액 여부 (0.004 같은 센트 미만 단위 거부용)"""
    try:
        return value == value.quantize(Money.QUANTUM)
    except InvalidOperation:
        return False


def sum_money(values: Iterable[Decimal]) -> Decimal:
    """금액 합계 (항상 2자리 Decimal 반환)"""
    return to_money(sum(values, ZERO))


def line_total(quantity: Decimal, unit_amount: Decimal) -> Decimal:
    """수량 × 단가 (금액 반올림)"""
    return to_money(quantity * unit_amount)


def money_equal(a: Decimal, b: Decimal) -> bool:
    """허용 오차(0.01) 이내 동일 여부

    0.005 차이는 동일, 0.01 차이는 다른 금액으로 간주.
    """
    return abs(a - b) < Money.TOLERANCE


def is_zero(value: Decimal) -> bool:
    """허용 오차 이내 0 여부"""
    return money_equal(value, ZERO)
