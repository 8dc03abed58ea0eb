"""Storage keys, enumerations and defaults shared across the stores."""
from __future__ import annotations

from enum import Enum

# Storage namespace keys
CART_STORAGE_KEY = "cart-storage"
PREFERENCES_STORAGE_KEY = "preferences-storage"
PRODUCTS_STORAGE_KEY = "products-storage"

# Persisted record envelope
SCHEMA_VERSION = 1

# Redis TTL for persisted records (30 days)
STORAGE_TTL_SECONDS = 30 * 24 * 60 * 60

# Sessions kept in memory by the HTTP API; older ones are rehydrated on demand
MAX_CACHED_SESSIONS = 1024


class Language(str, Enum):
    ENGLISH = "English"
    SPANISH = "Spanish"
    FRENCH = "French"


class Currency(str, Enum):
    DOLLAR = "Dollar"
    EURO = "Euro"
    RUPEES = "Rupees"


DEFAULT_LANGUAGE = Language.ENGLISH
DEFAULT_CURRENCY = Currency.DOLLAR

CURRENCY_SYMBOLS = {
    Currency.DOLLAR: "$",
    Currency.EURO: "€",
    Currency.RUPEES: "Rs",
}

CURRENCY_CODES = {
    Currency.DOLLAR: "USD",
    Currency.EURO: "EUR",
    Currency.RUPEES: "PKR",
}

# Catalog listing filters
SORT_OPTIONS = ("popularity", "newest", "price_asc", "price_desc", "name")
DEFAULT_SORT = "popularity"
DEFAULT_PRICE_RANGE = (0, 1000)
