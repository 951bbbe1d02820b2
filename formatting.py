"""Display formatting for currency and percentage figures."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

_WHOLE = Decimal("1")
_TENTH = Decimal("0.1")

_COMPACT_UNITS = (
    (Decimal(1), ""),
    (Decimal(10) ** 3, "K"),
    (Decimal(10) ** 6, "M"),
    (Decimal(10) ** 9, "B"),
    (Decimal(10) ** 12, "T"),
)


def _as_decimal(value: float) -> Decimal:
    return Decimal(str(value))


def format_currency(value: float, symbol: str = "$") -> str:
    """Whole-unit currency with thousands separators, e.g. ``$35,000,000``."""
    amount = _as_decimal(value).quantize(_WHOLE, rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{int(abs(amount)):,}"


def format_compact_currency(value: float, symbol: str = "$") -> str:
    """Abbreviated currency (K/M/B/T) with at most one fractional digit."""
    amount = _as_decimal(value)
    magnitude = abs(amount)

    for scale, suffix in _COMPACT_UNITS:
        scaled = (magnitude / scale).quantize(_TENTH, rounding=ROUND_HALF_UP)
        if scaled < 1000 or suffix == "T":
            break

    text = f"{scaled:f}"
    if text.endswith(".0"):
        text = text[:-2]
    sign = "-" if amount < 0 and scaled != 0 else ""
    return f"{sign}{symbol}{text}{suffix}"


def format_signed_currency(value: float, symbol: str = "$") -> str:
    if value > 0:
        return f"+{format_currency(value, symbol)}"
    return format_currency(value, symbol)


def format_percent(value: float, decimals: int = 2, signed: bool = False) -> str:
    if signed and value > 0:
        return f"+{value:,.{decimals}f}%"
    return f"{value:,.{decimals}f}%"
