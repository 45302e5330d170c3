"""Seeding helpers for the default catalog.

`seed_catalog` ensures every catalog key exists in the key/value store.
Existing values are left untouched so this can be safely re-run after rates
have been refreshed or the catalog edited.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List

from ratecard.models.constants import (
    FALLBACK_RATES,
    KEY_CURRENCIES,
    KEY_DURATION_OPTIONS,
    KEY_EXCHANGE_RATES,
    KEY_REGIONS,
    KEY_ROLES,
    KEY_SENIORITY_LEVELS,
    KEY_WORKLOAD_OPTIONS,
    LEDGER_CURRENCY,
)

from .dal import Database
from .schema import init_db

logger = logging.getLogger("ratecard.seed")

DEFAULT_REGIONS: List[Dict[str, Any]] = [
    {"id": "euro-asia", "name": "Euro Asia", "multiplier": 1.00},
    {"id": "middle-east", "name": "Middle East", "multiplier": 1.15},
    {"id": "europe", "name": "Europe", "multiplier": 1.30},
    {"id": "north-america", "name": "North America", "multiplier": 1.40},
]

DEFAULT_ROLES: List[Dict[str, Any]] = [
    # Custom resource roles
    {"id": "frontend-developer", "name": "Frontend Developer", "category": "custom", "baseRate": 120},
    {"id": "backend-developer", "name": "Backend Developer", "category": "custom", "baseRate": 130},
    {"id": "fullstack-developer", "name": "Full Stack Developer", "category": "custom", "baseRate": 140},
    {"id": "devops-engineer", "name": "DevOps Engineer", "category": "custom", "baseRate": 150},
    {"id": "data-scientist", "name": "Data Scientist", "category": "custom", "baseRate": 160},
    {"id": "ui-ux-designer", "name": "UI/UX Designer", "category": "custom", "baseRate": 110},
    {"id": "product-manager", "name": "Product Manager", "category": "custom", "baseRate": 180},
    {"id": "project-manager", "name": "Project Manager", "category": "custom", "baseRate": 170},
    {"id": "qa-engineer", "name": "QA Engineer", "category": "custom", "baseRate": 100},
    {"id": "mobile-developer", "name": "Mobile Developer", "category": "custom", "baseRate": 135},
    # SWAT team roles
    {"id": "swat-frontend", "name": "Frontend Specialist", "category": "swat", "baseRate": 200},
    {"id": "swat-backend", "name": "Backend Specialist", "category": "swat", "baseRate": 220},
    {"id": "swat-devops", "name": "DevOps Specialist", "category": "swat", "baseRate": 250},
    {"id": "swat-architecture", "name": "Solution Architect", "category": "swat", "baseRate": 300},
    {"id": "swat-security", "name": "Security Expert", "category": "swat", "baseRate": 280},
    {"id": "swat-performance", "name": "Performance Engineer", "category": "swat", "baseRate": 240},
]

DEFAULT_SENIORITY_LEVELS: List[Dict[str, Any]] = [
    {"id": "junior", "name": "Junior", "multiplier": 0.70},
    {"id": "mid", "name": "Mid-Level", "multiplier": 1.00},
    {"id": "senior", "name": "Senior", "multiplier": 1.40},
    {"id": "lead", "name": "Lead", "multiplier": 1.80},
    {"id": "principal", "name": "Principal", "multiplier": 2.20},
]

_CURRENCY_NAMES = {
    "AED": ("UAE Dirham", "د.إ"),
    "USD": ("US Dollar", "$"),
    "EUR": ("Euro", "€"),
    "GBP": ("British Pound", "£"),
    "INR": ("Indian Rupee", "₹"),
    "PKR": ("Pakistani Rupee", "₨"),
    "CAD": ("Canadian Dollar", "C$"),
    "AUD": ("Australian Dollar", "A$"),
    "JPY": ("Japanese Yen", "¥"),
    "CHF": ("Swiss Franc", "CHF"),
    "CNY": ("Chinese Yuan", "¥"),
}

DEFAULT_CURRENCIES: List[Dict[str, Any]] = [
    {"id": code, "name": name, "symbol": symbol, "rate": FALLBACK_RATES[code]}
    for code, (name, symbol) in _CURRENCY_NAMES.items()
]

DEFAULT_WORKLOAD_OPTIONS: List[Dict[str, str]] = [
    {"id": "25", "label": "25%", "value": "25"},
    {"id": "50", "label": "50%", "value": "50"},
    {"id": "75", "label": "75%", "value": "75"},
    {"id": "100", "label": "100%", "value": "100"},
]

DEFAULT_DURATION_OPTIONS: List[Dict[str, str]] = [
    {"id": "1", "label": "1 Month", "value": "1"},
    {"id": "2", "label": "2 Months", "value": "2"},
    {"id": "3", "label": "3 Months", "value": "3"},
    {"id": "4", "label": "4+ Months", "value": "4"},
]


def default_catalog() -> Dict[str, Any]:
    return {
        KEY_REGIONS: DEFAULT_REGIONS,
        KEY_ROLES: DEFAULT_ROLES,
        KEY_SENIORITY_LEVELS: DEFAULT_SENIORITY_LEVELS,
        KEY_CURRENCIES: DEFAULT_CURRENCIES,
        KEY_EXCHANGE_RATES: {
            "baseCurrency": LEDGER_CURRENCY,
            "rates": dict(FALLBACK_RATES),
            "updatedAt": datetime.now(timezone.utc).isoformat(),
            "version": 0,
        },
        KEY_WORKLOAD_OPTIONS: DEFAULT_WORKLOAD_OPTIONS,
        KEY_DURATION_OPTIONS: DEFAULT_DURATION_OPTIONS,
    }


def seed_catalog(db_path: Path) -> List[str]:
    init_db(db_path)  # ensure tables exist
    inserted = Database(db_path).insert_missing(default_catalog())
    if inserted:
        logger.info("seeded catalog keys: %s", ", ".join(inserted))
    return inserted
