"""Price display helpers."""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from storefront.core.constants import CURRENCY_SYMBOLS, DEFAULT_CURRENCY, Currency


def format_price(amount: Any, currency: Currency | str = DEFAULT_CURRENCY) -> str:
    """
    Format a price for display in the selected currency.

    The amount is shown as-is; no exchange rate is applied.

    Example:
        >>> format_price(1234.5)
        '$1,234.50'
        >>> format_price(35000, "Rupees")
        'Rs 35,000.00'
    """
    if amount is None or isinstance(amount, bool):
        return ""
    try:
        value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError):
        return ""
    if not value.is_finite():
        return ""

    currency = Currency(currency)
    symbol = CURRENCY_SYMBOLS[currency]
    sign = "-" if value < 0 else ""
    formatted = f"{abs(value):,.2f}"
    if currency == Currency.RUPEES:
        return f"{sign}{symbol} {formatted}"
    return f"{sign}{symbol}{formatted}"
