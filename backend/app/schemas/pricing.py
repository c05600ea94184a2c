"""API schemas for price conversion."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field

from facturago.domain.models import PriceDisplayMode


class PriceConvertRequest(BaseModel):
    value: Decimal = Field(ge=0)
    vat: Decimal = Field(ge=0, le=100)
    enteredAs: PriceDisplayMode = PriceDisplayMode.HT


class PriceConvertResponse(BaseModel):
    ht: Decimal
    ttc: Decimal
