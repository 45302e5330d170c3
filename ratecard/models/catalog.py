from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .constants import LEDGER_CURRENCY


class CatalogRecord(BaseModel):
    """Immutable reference record; camelCase on the wire, snake_case in code."""

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    id: str
    name: str


class Region(CatalogRecord):
    multiplier: float = Field(..., gt=0)


class SeniorityLevel(CatalogRecord):
    multiplier: float = Field(..., gt=0)


class Role(CatalogRecord):
    category: Literal["custom", "swat"]
    base_rate: int = Field(..., gt=0, description="Monthly rate in AED")


class Currency(CatalogRecord):
    symbol: str
    rate: float = Field(..., gt=0, description="Units per 1 unit of the base currency")

    @field_validator("id")
    @classmethod
    def upper_code(cls, v: str) -> str:
        return v.upper()


class Option(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    value: str


class RateTable(BaseModel):
    """Exchange rates plus the base currency they are quoted against.

    Stored as one record so the rates and the base marker are always
    replaced together.
    """

    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    base_currency: str = LEDGER_CURRENCY
    rates: Dict[str, float] = Field(default_factory=dict)
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = Field(0, ge=0)

    @field_validator("base_currency")
    @classmethod
    def upper_base(cls, v: str) -> str:
        return v.upper()

    @field_validator("rates")
    @classmethod
    def positive_rates(cls, v: Dict[str, float]) -> Dict[str, float]:
        bad = [k for k, rate in v.items() if rate <= 0]
        if bad:
            raise ValueError(f"rates must be positive: {', '.join(sorted(bad))}")
        return {k.upper(): rate for k, rate in v.items()}
