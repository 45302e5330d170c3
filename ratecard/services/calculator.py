"""Rate calculators.

Both calculators are pure functions of a catalog snapshot and the user's
selections. Unresolved selections are a normal "nothing chosen yet" state and
produce an all-zero breakdown rather than an error.

Amounts are whole AED. The SWAT pipeline rounds after every stage; results are
expected to reproduce those intermediate roundings exactly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Union

from ratecard.models.constants import (
    DURATION_DISCOUNTS,
    LONG_ENGAGEMENT_DISCOUNT,
    LONG_ENGAGEMENT_MONTHS,
    SWAT_STRUCTURAL_DISCOUNT_FACTOR,
)
from ratecard.services.catalog_store import CatalogSnapshot
from ratecard.services.money import round_half_up


@dataclass(frozen=True)
class CustomRateBreakdown:
    base_rate: int = 0
    regional_multiplier: float = 0
    seniority_multiplier: float = 0
    final_rate: int = 0
    kind: Literal["custom"] = "custom"


@dataclass(frozen=True)
class SwatRateBreakdown:
    base_rate: int = 0
    base_with_seniority: int = 0
    after_workload: int = 0
    duration_discount: int = 0
    final_rate: int = 0
    after_duration_discount: int = 0
    kind: Literal["swat"] = "swat"


RateBreakdown = Union[CustomRateBreakdown, SwatRateBreakdown]


def _as_int(value: Union[str, int, None]) -> Optional[int]:
    """Parse an option value ("50", 50) to int; blank or non-numeric -> None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        return None


def duration_discount_percent(months: int) -> int:
    """Duration discount: 1 -> 0%, 2 -> 5%, 3 -> 10%, 4+ -> 15%.

    Zero or negative durations are not rejected here; they get no discount.
    """
    if months >= LONG_ENGAGEMENT_MONTHS:
        return LONG_ENGAGEMENT_DISCOUNT
    return DURATION_DISCOUNTS.get(months, 0)


def calculate_custom_rate(
    catalog: CatalogSnapshot,
    region_id: Optional[str],
    role_id: Optional[str],
    seniority_id: Optional[str],
) -> CustomRateBreakdown:
    region = catalog.get_region(region_id)
    role = catalog.get_role(role_id, category="custom")
    seniority = catalog.get_seniority(seniority_id)
    if region is None or role is None or seniority is None:
        return CustomRateBreakdown()

    final_rate = round_half_up(role.base_rate * region.multiplier * seniority.multiplier)
    return CustomRateBreakdown(
        base_rate=role.base_rate,
        regional_multiplier=region.multiplier,
        seniority_multiplier=seniority.multiplier,
        final_rate=final_rate,
    )


def calculate_swat_rate(
    catalog: CatalogSnapshot,
    role_id: Optional[str],
    workload_percent: Union[str, int, None],
    duration_months: Union[str, int, None],
    seniority_id: Optional[str],
) -> SwatRateBreakdown:
    role = catalog.get_role(role_id, category="swat")
    seniority = catalog.get_seniority(seniority_id)
    workload = _as_int(workload_percent)
    duration = _as_int(duration_months)
    if role is None or seniority is None or workload is None or duration is None:
        return SwatRateBreakdown()

    base_with_seniority = round_half_up(role.base_rate * seniority.multiplier)
    after_workload = round_half_up(base_with_seniority * (workload / 100))
    discount = duration_discount_percent(duration)
    after_duration_discount = round_half_up(after_workload * (1 - discount / 100))
    final_rate = round_half_up(after_duration_discount * SWAT_STRUCTURAL_DISCOUNT_FACTOR)
    return SwatRateBreakdown(
        base_rate=role.base_rate,
        base_with_seniority=base_with_seniority,
        after_workload=after_workload,
        duration_discount=discount,
        final_rate=final_rate,
        after_duration_discount=after_duration_discount,
    )
