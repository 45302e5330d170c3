"""Domain constants and enumerations for validation.

Kept as plain sets/dicts; store keys live here so the data layer, seeding and
services agree on them.
"""

from typing import Dict, Set, Tuple

LEDGER_CURRENCY = "AED"

ROLE_CATEGORIES: Set[str] = {"custom", "swat"}
QUOTE_TYPES: Set[str] = ROLE_CATEGORIES

# Currencies extracted from every rate refresh, in display order.
SUPPORTED_CURRENCIES: Tuple[str, ...] = (
    "AED",
    "USD",
    "EUR",
    "GBP",
    "INR",
    "PKR",
    "CAD",
    "AUD",
    "JPY",
    "CHF",
    "CNY",
)

# Units per 1 AED; used whenever the live source is unavailable or omits an entry.
FALLBACK_RATES: Dict[str, float] = {
    "AED": 1.0,
    "USD": 0.272,
    "EUR": 0.25,
    "GBP": 0.215,
    "INR": 22.5,
    "PKR": 75.5,
    "CAD": 0.37,
    "AUD": 0.41,
    "JPY": 40.2,
    "CHF": 0.24,
    "CNY": 1.95,
}

# SWAT pricing rules
SWAT_STRUCTURAL_DISCOUNT_FACTOR = 0.8  # pre-negotiated 20% off every SWAT quote
DURATION_DISCOUNTS: Dict[int, int] = {1: 0, 2: 5, 3: 10}
LONG_ENGAGEMENT_MONTHS = 4
LONG_ENGAGEMENT_DISCOUNT = 15

# Key/value store keys
KEY_REGIONS = "regions"
KEY_ROLES = "roles"
KEY_SENIORITY_LEVELS = "seniority_levels"
KEY_CURRENCIES = "currencies"
KEY_EXCHANGE_RATES = "exchange_rates"
KEY_WORKLOAD_OPTIONS = "workload_options"
KEY_DURATION_OPTIONS = "duration_options"
KEY_SCHEMA_VERSION = "schema_version"
QUOTE_KEY_PREFIX = "quote_"

CATALOG_KEYS: Tuple[str, ...] = (
    KEY_REGIONS,
    KEY_ROLES,
    KEY_SENIORITY_LEVELS,
    KEY_CURRENCIES,
    KEY_EXCHANGE_RATES,
    KEY_WORKLOAD_OPTIONS,
    KEY_DURATION_OPTIONS,
)
