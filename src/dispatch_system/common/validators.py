from __future__ import annotations

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name}이(가) 올바르지 않습니다")
    return value.strip()


def require_non_negative(value: int, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name}은(는) 숫자여야 합니다")
    if number < 0:
        raise ValidationError(f"{field_name}은(는) 0 이상이어야 합니다")
    return number


def require_month(month: int) -> int:
    try:
        number = int(month)
    except (TypeError, ValueError):
        raise ValidationError("월이 올바르지 않습니다")
    if not 1 <= number <= 12:
        raise ValidationError("월은 1~12 사이여야 합니다")
    return number
