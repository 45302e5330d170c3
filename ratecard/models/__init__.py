"""Pydantic domain models for the Rate Card Calculator."""

from .constants import (
    FALLBACK_RATES,
    LEDGER_CURRENCY,
    ROLE_CATEGORIES,
    SUPPORTED_CURRENCIES,
)  # re-export
from .catalog import Currency, Option, RateTable, Region, Role, SeniorityLevel
from .quote import Quote, QuoteCreate, QuoteExportRequest, SendQuoteRequest

__all__ = [
    "FALLBACK_RATES",
    "LEDGER_CURRENCY",
    "ROLE_CATEGORIES",
    "SUPPORTED_CURRENCIES",
    "Currency",
    "Option",
    "RateTable",
    "Region",
    "Role",
    "SeniorityLevel",
    "Quote",
    "QuoteCreate",
    "QuoteExportRequest",
    "SendQuoteRequest",
]
