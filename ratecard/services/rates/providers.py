from __future__ import annotations

"""Exchange-rate providers and factory.

A provider answers one question: "units of each supported currency per 1 unit
of <base>". Providers never raise; any failure of the live source degrades to
the documented fallback table so a refresh always yields a usable mapping.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Mapping, Optional

from ratecard.core.config import Settings
from ratecard.models.constants import FALLBACK_RATES, SUPPORTED_CURRENCIES
from ratecard.services.http_client import HttpError, get_json_object

logger = logging.getLogger("ratecard.rates.providers")


def fallback_rates() -> Dict[str, float]:
    return dict(FALLBACK_RATES)


def extract_supported_rates(rates: Mapping[str, Any]) -> Dict[str, float]:
    """Pick the supported set out of a provider payload.

    Entries that are missing, non-numeric or not positive take their fallback constant.
    """
    out: Dict[str, float] = {}
    for code in SUPPORTED_CURRENCIES:
        value = rates.get(code)
        if isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0:
            out[code] = float(value)
        else:
            out[code] = FALLBACK_RATES[code]
    return out


class RateProvider(ABC):
    name: str = "abstract"

    @abstractmethod
    def fetch_rates(self, base_currency: str) -> Dict[str, float]:
        """Return units of each supported currency per 1 unit of base_currency."""
        raise NotImplementedError


class StaticRateProvider(RateProvider):
    name = "static"

    def fetch_rates(self, base_currency: str) -> Dict[str, float]:  # type: ignore[override]
        return fallback_rates()


class ExternalHTTPRateProvider(RateProvider):
    """ExchangeRate-API v6: GET {base_url}/{api_key}/latest/{BASE}.

    Expected payload: {"result": "success", "conversion_rates": {"USD": 0.272, ...}}
    """

    name = "external-http"

    def __init__(self, base_url: str, api_key: Optional[str], timeout: float = 5.0):
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout

    def _parse(self, data: Dict[str, Any]) -> Dict[str, float]:
        if data.get("result") != "success":
            raise HttpError(f"API error: {data.get('error-type') or data.get('error') or 'unknown'}")
        rates = data.get("conversion_rates")
        if not isinstance(rates, dict) or not rates:
            raise HttpError("no conversion rates found in API response")
        return extract_supported_rates(rates)

    def fetch_rates(self, base_currency: str) -> Dict[str, float]:  # type: ignore[override]
        if not self._api_key:
            logger.warning("exchange_api_key not configured; using fallback rates")
            return fallback_rates()
        base_currency = base_currency.upper()
        url = f"{self._base_url}/{self._api_key}/latest/{base_currency}"
        try:
            data = get_json_object(url, timeout=self._timeout)
            rates = self._parse(data)
        except HttpError as e:
            # Never propagate; callers always receive a usable table
            logger.warning("rate fetch for base %s failed, using fallback rates: %s", base_currency, e)
            return fallback_rates()
        logger.info(
            "fetched rates for base %s (last update %s)",
            base_currency,
            data.get("time_last_update_utc", "unknown"),
        )
        return rates


_PROVIDER_REGISTRY = {
    "static": lambda settings: StaticRateProvider(),
    "external-http": lambda settings: ExternalHTTPRateProvider(
        settings.exchange_api_base_url,
        settings.exchange_api_key,
        timeout=settings.http_timeout_seconds,
    ),
}


def make_rate_provider(settings: Settings) -> RateProvider:
    factory = _PROVIDER_REGISTRY.get(settings.exchange_rate_provider)
    if not factory:
        raise ValueError(f"Unknown rate provider kind '{settings.exchange_rate_provider}'")
    return factory(settings)
