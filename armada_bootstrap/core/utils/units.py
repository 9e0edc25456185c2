from __future__ import annotations

from decimal import ROUND_DOWN, Decimal, InvalidOperation

from armada_bootstrap.core.constants.base import TOKEN_DECIMALS


def _to_decimal(value: str | int | float | Decimal) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return Decimal(value)
    return Decimal(str(value).strip())


def to_raw_units(
    amount: str | int | float | Decimal, decimals: int = TOKEN_DECIMALS
) -> int:
    try:
        amt = _to_decimal(amount)
    except InvalidOperation as exc:
        raise ValueError(f"Invalid amount: {amount}") from exc
    if not amt.is_finite():
        raise ValueError(f"Invalid amount: {amount}")
    if amt < 0:
        raise ValueError("Amount must be non-negative")
    scale = Decimal(10) ** int(decimals)
    return int((amt * scale).to_integral_value(rounding=ROUND_DOWN))


def format_units(raw: int, decimals: int = TOKEN_DECIMALS) -> str:
    value = Decimal(int(raw)) / (Decimal(10) ** int(decimals))
    return format(value.normalize(), "f")
