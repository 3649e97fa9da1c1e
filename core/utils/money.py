"""
금액 파싱 유틸리티

금액은 반드시 Decimal 타입 사용 (float 금지).
"""

from decimal import Decimal, InvalidOperation
from typing import Any

from core.domain.errors import InvalidAmount


def parse_amount(value: Any, field: str = "amount") -> Decimal:
    """금액 검증 및 Decimal 변환

    Args:
        value: Decimal, int, str, float
        field: 오류 메시지에 표시할 필드명

    Returns:
        0 이상의 Decimal

    Raises:
        InvalidAmount: 숫자가 아니거나 음수/무한대인 경우
    """
    if isinstance(value, bool) or value is None:
        raise InvalidAmount(f"{field}: 숫자가 아닙니다: {value!r}")

    try:
        # float는 str 경유 (0.1 → Decimal("0.1"))
        amount = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as e:
        raise InvalidAmount(f"{field}: 숫자가 아닙니다: {value!r}") from e

    if not amount.is_finite():
        raise InvalidAmount(f"{field}: 유한한 숫자여야 합니다: {value!r}")
    if amount < 0:
        raise InvalidAmount(f"{field}: 음수는 허용되지 않습니다: {amount}")

    return amount


def parse_days(value: Any, field: str = "days_covered", minimum: int = 1) -> int:
    """일수 검증

    Raises:
        InvalidAmount: 정수가 아니거나 minimum 미만인 경우
    """
    if isinstance(value, bool):
        raise InvalidAmount(f"{field}: 정수가 아닙니다: {value!r}")
    try:
        days = int(value)
    except (TypeError, ValueError) as e:
        raise InvalidAmount(f"{field}: 정수가 아닙니다: {value!r}") from e

    if days != value and str(days) != str(value).strip():
        raise InvalidAmount(f"{field}: 정수가 아닙니다: {value!r}")
    if days < minimum:
        raise InvalidAmount(f"{field}: {minimum} 이상이어야 합니다: {days}")

    return days
