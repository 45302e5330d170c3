from dataclasses import asdict
from typing import Any, Dict, Optional, Union

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ratecard.models.constants import LEDGER_CURRENCY
from ratecard.models.quote import QuoteCreate
from ratecard.services.calculator import (
    RateBreakdown,
    calculate_custom_rate,
    calculate_swat_rate,
)
from ratecard.services.catalog_store import CatalogSnapshot
from ratecard.services.quote_assembly import (
    CustomSelection,
    SwatSelection,
    assemble_quote,
    describe_configuration,
)
from ratecard.services.rates.conversion import CurrencyConverter

from .deps import get_catalog

router = APIRouter(prefix="/api/calculate", tags=["calculate"])


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CustomCalculationIn(_CamelModel):
    region_id: Optional[str] = None
    role_id: Optional[str] = None
    seniority_id: Optional[str] = None
    currency: str = Field(LEDGER_CURRENCY, pattern=r"^[A-Za-z]{3}$", description="Display currency")


class SwatCalculationIn(_CamelModel):
    role_id: Optional[str] = None
    workload: Union[int, str, None] = Field(None, description="Workload percent, e.g. '50'")
    duration: Union[int, str, None] = Field(None, description="Duration in months, e.g. '3'")
    seniority_id: Optional[str] = None
    currency: str = Field(LEDGER_CURRENCY, pattern=r"^[A-Za-z]{3}$", description="Display currency")


class CalculationOut(_CamelModel):
    breakdown: Dict[str, Any]
    display_amount: int
    currency: str
    symbol: str
    exchange_rate: float
    quote: Optional[QuoteCreate] = Field(
        None, description="Ready-to-send quote payload; absent until a rate is available"
    )


def _breakdown_dict(breakdown: RateBreakdown) -> Dict[str, Any]:
    return {to_camel(k): v for k, v in asdict(breakdown).items()}


def _respond(
    breakdown: RateBreakdown, configuration: Dict[str, Any], converter: CurrencyConverter
) -> CalculationOut:
    shown = converter.display(breakdown.final_rate)
    quote = assemble_quote(breakdown, configuration, converter) if breakdown.final_rate > 0 else None
    return CalculationOut(
        breakdown=_breakdown_dict(breakdown),
        display_amount=shown.amount,
        currency=shown.currency,
        symbol=shown.symbol,
        exchange_rate=shown.exchange_rate,
        quote=quote,
    )


@router.post("/custom", response_model=CalculationOut, summary="Custom resource monthly rate")
async def calculate_custom(
    payload: CustomCalculationIn,
    catalog: CatalogSnapshot = Depends(get_catalog),
):
    selection = CustomSelection(payload.region_id, payload.role_id, payload.seniority_id)
    breakdown = calculate_custom_rate(
        catalog, selection.region_id, selection.role_id, selection.seniority_id
    )
    return _respond(
        breakdown,
        describe_configuration(catalog, selection),
        CurrencyConverter(catalog, payload.currency),
    )


@router.post("/swat", response_model=CalculationOut, summary="SWAT team monthly rate")
async def calculate_swat(
    payload: SwatCalculationIn,
    catalog: CatalogSnapshot = Depends(get_catalog),
):
    selection = SwatSelection(
        payload.role_id, payload.workload, payload.duration, payload.seniority_id
    )
    breakdown = calculate_swat_rate(
        catalog,
        selection.role_id,
        selection.workload,
        selection.duration,
        selection.seniority_id,
    )
    return _respond(
        breakdown,
        describe_configuration(catalog, selection),
        CurrencyConverter(catalog, payload.currency),
    )
