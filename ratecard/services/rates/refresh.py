"""Rate refresh: fetch live rates for a base currency and persist them.

The fetched mapping and the base currency are written as one `RateTable`
record (version bumped), so readers never observe rates quoted against one
base next to a marker naming another. Concurrent refreshes are not
coordinated: the last write wins.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from ratecard.models.catalog import RateTable
from ratecard.models.constants import LEDGER_CURRENCY, SUPPORTED_CURRENCIES
from ratecard.services.catalog_store import CatalogStore

from .providers import RateProvider

logger = logging.getLogger("ratecard.rates.refresh")


def normalize_base_currency(base_currency: str | None) -> str:
    code = (base_currency or LEDGER_CURRENCY).strip().upper()
    if code not in SUPPORTED_CURRENCIES:
        raise ValueError(
            f"Unsupported base currency '{code}'. Allowed: {', '.join(SUPPORTED_CURRENCIES)}"
        )
    return code


def refresh_rates(
    store: CatalogStore, provider: RateProvider, base_currency: str | None = LEDGER_CURRENCY
) -> RateTable:
    base = normalize_base_currency(base_currency)
    rates = provider.fetch_rates(base)
    previous = store.rate_table()
    table = RateTable(
        base_currency=base,
        rates=rates,
        updated_at=datetime.now(timezone.utc),
        version=previous.version + 1,
    )
    logger.info("refreshing rates via %s provider for base %s", provider.name, base)
    return store.replace_rate_table(table)
