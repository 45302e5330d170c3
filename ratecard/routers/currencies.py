from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ratecard.models.catalog import Currency
from ratecard.models.constants import LEDGER_CURRENCY
from ratecard.services.catalog_store import CatalogSnapshot, CatalogStore
from ratecard.services.rates.providers import RateProvider
from ratecard.services.rates.refresh import refresh_rates

from .deps import get_catalog, get_catalog_store, get_rate_provider

"""Currency endpoints.

    - GET  /api/currencies              -> currencies with effective rates + base currency
    - POST /api/currencies/update-rates -> fetch rates for {baseCurrency} and persist them

A refresh never fails because of the rate source (fallback table instead); it
fails only for an unsupported base currency (400) or a store error (503).
"""

router = APIRouter(prefix="/api/currencies", tags=["currencies"])


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CurrenciesOut(_CamelModel):
    currencies: List[Currency]
    base_currency: str
    updated_at: datetime
    version: int


class UpdateRatesIn(_CamelModel):
    base_currency: str = Field(LEDGER_CURRENCY, description="Currency the new rates are quoted against")


class UpdateRatesOut(_CamelModel):
    message: str
    rates: Dict[str, float]
    base_currency: str


@router.get("", response_model=CurrenciesOut, summary="List currencies and the current base")
async def list_currencies(catalog: CatalogSnapshot = Depends(get_catalog)):
    table = catalog.rate_table
    return CurrenciesOut(
        currencies=list(catalog.currencies.values()),
        base_currency=table.base_currency,
        updated_at=table.updated_at,
        version=table.version,
    )


@router.post("/update-rates", response_model=UpdateRatesOut, summary="Refresh exchange rates")
def update_rates(
    payload: Optional[UpdateRatesIn] = Body(None),
    store: CatalogStore = Depends(get_catalog_store),
    provider: RateProvider = Depends(get_rate_provider),
):
    # sync handler: the provider performs a blocking HTTP call (runs in the threadpool)
    base = payload.base_currency if payload else LEDGER_CURRENCY
    try:
        table = refresh_rates(store, provider, base)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    return UpdateRatesOut(
        message="Exchange rates updated successfully",
        rates=table.rates,
        base_currency=table.base_currency,
    )
