from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ratecard.models.constants import LEDGER_CURRENCY
from ratecard.services.catalog_store import CatalogSnapshot
from ratecard.services.money import round_half_up

"""Currency conversion between the AED ledger and a display currency.

Rates in the catalog are "units of X per 1 unit of the base currency", where
the base is whatever the last refresh was anchored on. Calculators always
produce AED, so:

    - base == AED: display = aed * rate[X]
    - base == B:   rate[AED] is "AED per 1 B"; invert it to get B per AED,
                   then display = aed * (1 / rate[AED]) * rate[X]

Unresolvable currencies never raise: the amount is passed through unchanged.
Rounding (round_half_up to whole units) happens once per conversion.
"""

logger = logging.getLogger("ratecard.conversion")


@dataclass(frozen=True)
class DisplayAmount:
    aed_amount: int
    currency: str
    symbol: str
    exchange_rate: float
    amount: int


class CurrencyConverter:
    def __init__(self, catalog: CatalogSnapshot, selected_currency: str = LEDGER_CURRENCY):
        self._catalog = catalog
        self.selected_currency = (selected_currency or LEDGER_CURRENCY).upper()

    @property
    def base_currency(self) -> str:
        return self._catalog.base_currency

    def _aed_to_base_rate(self) -> Optional[float]:
        """Base-currency units per 1 AED, or None when it cannot be derived."""
        # cross rate comes from rate[AED] (AED per 1 base), not rate[base], which is always 1
        if self.base_currency == LEDGER_CURRENCY:
            return 1.0
        if self._catalog.get_currency(self.base_currency) is None:
            logger.warning("base currency %s not in catalog", self.base_currency)
            return None
        ledger = self._catalog.get_currency(LEDGER_CURRENCY)
        if ledger is None:
            logger.warning("ledger currency missing from %s-based rates", self.base_currency)
            return None
        return 1 / ledger.rate

    def convert_from_aed(self, aed_amount: float) -> float:
        if self.selected_currency == LEDGER_CURRENCY:
            return aed_amount
        currency = self._catalog.get_currency(self.selected_currency)
        if currency is None:
            logger.debug("currency not found: %s", self.selected_currency)
            return aed_amount
        if self.base_currency == LEDGER_CURRENCY:
            return round_half_up(aed_amount * currency.rate)
        aed_to_base = self._aed_to_base_rate()
        if aed_to_base is None:
            return aed_amount
        base_amount = aed_amount * aed_to_base
        return round_half_up(base_amount * currency.rate)

    def convert_to_aed(self, amount: float, from_currency: str) -> float:
        from_currency = (from_currency or "").upper()
        if from_currency == LEDGER_CURRENCY:
            return amount
        currency = self._catalog.get_currency(from_currency)
        if currency is None:
            return amount
        if self.base_currency == LEDGER_CURRENCY:
            return round_half_up(amount / currency.rate)
        aed_to_base = self._aed_to_base_rate()
        if aed_to_base is None:
            return amount
        return round_half_up(amount / currency.rate / aed_to_base)

    def get_exchange_rate(self) -> float:
        currency = self._catalog.get_currency(self.selected_currency)
        return currency.rate if currency else 1.0

    def get_currency_symbol(self) -> str:
        if self.selected_currency == LEDGER_CURRENCY:
            return LEDGER_CURRENCY
        currency = self._catalog.get_currency(self.selected_currency)
        return (currency.symbol if currency else None) or self.selected_currency

    def display(self, aed_amount: int) -> DisplayAmount:
        return DisplayAmount(
            aed_amount=aed_amount,
            currency=self.selected_currency,
            symbol=self.get_currency_symbol(),
            exchange_rate=self.get_exchange_rate(),
            amount=int(self.convert_from_aed(aed_amount)),
        )
