"""HT/TTC price conversion."""

from __future__ import annotations

from fastapi import APIRouter

from facturago.domain.models import PriceDisplayMode
from facturago.services.pricing import ht_from_ttc, round_money, ttc_from_ht

from ..schemas.pricing import PriceConvertRequest, PriceConvertResponse

router = APIRouter(prefix="/pricing", tags=["pricing"])


@router.post("/convert", response_model=PriceConvertResponse, summary="Convert between HT and TTC")
async def convert(payload: PriceConvertRequest):
    if payload.enteredAs is PriceDisplayMode.TTC:
        ht = ht_from_ttc(payload.value, payload.vat)
        return PriceConvertResponse(ht=ht, ttc=round_money(payload.value))
    return PriceConvertResponse(ht=round_money(payload.value), ttc=ttc_from_ht(payload.value, payload.vat))
