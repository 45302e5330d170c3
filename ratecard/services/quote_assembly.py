"""Quote assembly and creation.

`assemble_quote` turns a calculator breakdown plus the user's selections into
the transportable `QuoteCreate` payload (names, not ids; amount already in the
display currency). `create_quote` stamps an id and creation time and persists
the record under ``quote_<id>``; records are never updated afterwards.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

from ratecard.db.dal import Database
from ratecard.models.constants import QUOTE_KEY_PREFIX
from ratecard.models.quote import Quote, QuoteCreate
from ratecard.services.calculator import (
    CustomRateBreakdown,
    RateBreakdown,
    SwatRateBreakdown,
)
from ratecard.services.catalog_store import CatalogSnapshot
from ratecard.services.rates.conversion import CurrencyConverter

logger = logging.getLogger("ratecard.quotes")


@dataclass(frozen=True)
class CustomSelection:
    region_id: Optional[str]
    role_id: Optional[str]
    seniority_id: Optional[str]


@dataclass(frozen=True)
class SwatSelection:
    role_id: Optional[str]
    workload: Union[str, int, None]
    duration: Union[str, int, None]
    seniority_id: Optional[str]


def _name(record: Any) -> Optional[str]:
    return record.name if record is not None else None


def describe_configuration(
    catalog: CatalogSnapshot, selection: Union[CustomSelection, SwatSelection]
) -> Dict[str, Any]:
    """Human-readable snapshot of the selections behind a quote."""
    if isinstance(selection, CustomSelection):
        return {
            "region": _name(catalog.get_region(selection.region_id)),
            "role": _name(catalog.get_role(selection.role_id, category="custom")),
            "seniority": _name(catalog.get_seniority(selection.seniority_id)),
        }
    return {
        "role": _name(catalog.get_role(selection.role_id, category="swat")),
        "workload": None if selection.workload is None else str(selection.workload),
        "duration": None if selection.duration is None else str(selection.duration),
        "seniority": _name(catalog.get_seniority(selection.seniority_id)),
    }


def assemble_quote(
    breakdown: RateBreakdown,
    configuration: Dict[str, Any],
    converter: CurrencyConverter,
) -> QuoteCreate:
    if isinstance(breakdown, CustomRateBreakdown):
        quote_type = "custom"
    elif isinstance(breakdown, SwatRateBreakdown):
        quote_type = "swat"
    else:  # pragma: no cover
        raise TypeError(f"unsupported breakdown {type(breakdown).__name__}")
    return QuoteCreate(
        type=quote_type,
        configuration=configuration,
        final_rate=int(converter.convert_from_aed(breakdown.final_rate)),
        currency=converter.selected_currency,
    )


def create_quote(db: Database, payload: QuoteCreate) -> Quote:
    quote = Quote(
        id=str(uuid.uuid4()),
        created_at=datetime.now(timezone.utc).isoformat(),
        **payload.model_dump(),
    )
    db.set_value(f"{QUOTE_KEY_PREFIX}{quote.id}", quote.model_dump(mode="json", by_alias=True))
    logger.info("quote %s created type=%s currency=%s", quote.id, quote.type, quote.currency)
    return quote
