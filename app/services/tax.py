from decimal import Decimal, ROUND_FLOOR
from typing import Optional, Union

from app.core.config import TAX_RATE

RateLike = Union[Decimal, int, float, str]


def apply_tax(amount: int, rate: Optional[RateLike] = None) -> int:
    """
    세전 금액에 세율을 적용한 세후 금액을 반환합니다. (1엔 미만 버림)

    Decimal로 계산하므로 2301 * 1.1 = 2531.1 -> 2531 처럼 부동소수점 오차 없이 버림됩니다.

    Raises:
        ValueError: 세율이 음수인 경우
    """
    rate = TAX_RATE if rate is None else Decimal(str(rate))
    if rate < 0:
        raise ValueError("tax rate must not be negative")
    taxed = Decimal(amount) * (1 + rate)
    return int(taxed.to_integral_value(rounding=ROUND_FLOOR))
