import pytest

from storefront.core.constants import Currency
from storefront.core.pricing import format_price


@pytest.mark.parametrize(
    ("amount", "currency", "expected"),
    [
        (1234.5, Currency.DOLLAR, "$1,234.50"),
        (0, Currency.EURO, "€0.00"),
        (35000, "Rupees", "Rs 35,000.00"),
        (-5, Currency.DOLLAR, "-$5.00"),
        (0.125, Currency.DOLLAR, "$0.13"),
    ],
)
def test_format_price(amount, currency, expected) -> None:
    assert format_price(amount, currency) == expected


@pytest.mark.parametrize("amount", [None, "abc", True, float("nan"), float("inf")])
def test_format_price_non_numbers_render_empty(amount) -> None:
    assert format_price(amount) == ""
