from __future__ import annotations

from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class QuoteCreate(BaseModel):
    """Payload accepted for a new quote; also the shape handed to delivery."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    type: Literal["custom", "swat"]
    configuration: Dict[str, Any]
    final_rate: int = Field(..., ge=0, description="Monthly rate in the quote currency")
    currency: str = Field(..., pattern=r"^[A-Za-z]{3}$")

    @field_validator("currency")
    @classmethod
    def upper_currency(cls, v: str) -> str:
        return v.upper()

    @property
    def type_label(self) -> str:
        return "Custom Resource" if self.type == "custom" else "SWAT Team"


class Quote(QuoteCreate):
    model_config = ConfigDict(
        frozen=True, alias_generator=to_camel, populate_by_name=True
    )

    id: str
    created_at: str


class SendQuoteRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    recipient_email: EmailStr = Field(..., description="Where the quote is delivered")
    sender_name: str
    message: Optional[str] = None
    quote_data: QuoteCreate

    @field_validator("recipient_email", mode="before")
    @classmethod
    def strip_email(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("sender_name")
    @classmethod
    def sender_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("senderName cannot be empty")
        return v.strip()


class CustomBreakdownIn(BaseModel):
    """Custom calculator breakdown as returned by ``/api/calculate/custom``."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    kind: Literal["custom"]
    base_rate: int = Field(0, ge=0)
    regional_multiplier: float = Field(0, ge=0)
    seniority_multiplier: float = Field(0, ge=0)
    final_rate: int = Field(0, ge=0)


class SwatBreakdownIn(BaseModel):
    """SWAT calculator breakdown as returned by ``/api/calculate/swat``."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    kind: Literal["swat"]
    base_rate: int = Field(0, ge=0)
    base_with_seniority: int = Field(0, ge=0)
    after_workload: int = Field(0, ge=0)
    duration_discount: int = Field(0, ge=0, le=100)
    after_duration_discount: int = Field(0, ge=0)
    final_rate: int = Field(0, ge=0)


class QuoteExportRequest(QuoteCreate):
    """Quote plus the (optional) AED breakdown it was calculated from."""

    breakdown: Optional[Union[CustomBreakdownIn, SwatBreakdownIn]] = Field(
        None, discriminator="kind"
    )

    @model_validator(mode="after")
    def breakdown_matches_type(self) -> "QuoteExportRequest":
        if self.breakdown is not None and self.breakdown.kind != self.type:
            raise ValueError(
                f"breakdown kind '{self.breakdown.kind}' does not match quote type '{self.type}'"
            )
        return self
