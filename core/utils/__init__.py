"""
유틸리티 패키지

금액(Decimal) 변환, 반올림, 허용 오차 비교 등 공통 유틸리티
"""

from core.utils.money import (
    ZERO,
    is_cent_precise,
    is_zero,
    line_total,
    money_equal,
    sum_money,
    to_decimal,
    to_money,
)

__all__ = [
    "ZERO",
    "is_cent_precise",
    "is_zero",
    "line_total",
    "money_equal",
    "sum_money",
    "to_decimal",
    "to_money",
]
