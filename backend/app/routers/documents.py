"""Billing document routes: numbering, totals and PDF export."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from facturago.adapters.pdf_renderer import render_document_pdf
from facturago.errors import DocumentRenderError
from facturago.logging_config import get_logger
from facturago.services.configuration import default_numbering, get_numbering, merge_settings
from facturago.services.currency import format_currency
from facturago.services.documents import compute_totals
from facturago.services.numbering import next_document_number, next_entity_code
from facturago.services.settings_store import SupabaseSettingsStore
from facturago.services.words import amount_in_words

from ..config import get_supabase
from ..schemas.documents import (
    NextCodeRequest,
    NextNumberRequest,
    NextNumberResponse,
    RenderRequest,
    TotalsRequest,
    TotalsResponse,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])


@router.post("/next-number", response_model=NextNumberResponse, summary="Allocate the next reference")
async def next_number(payload: NextNumberRequest, supabase=Depends(get_supabase)):
    """Compute the reference following the highest one already issued this year."""
    settings = merge_settings(SupabaseSettingsStore(supabase, payload.userId).load())
    config = get_numbering(settings, payload.kind) or default_numbering(payload.kind)
    year = payload.year or date.today().year
    document_id = next_document_number(config, payload.existingIds, year=year)
    logger.info("Next %s reference for user %s: %s", payload.kind.value, payload.userId, document_id)
    return NextNumberResponse(kind=payload.kind, documentId=document_id)


@router.post("/next-code", summary="Allocate the next client/product/supplier code")
async def next_code(payload: NextCodeRequest):
    return {"code": next_entity_code(payload.prefix, payload.codes)}


@router.post("/totals", response_model=TotalsResponse, summary="Compute document totals")
async def totals(payload: TotalsRequest):
    result = compute_totals(payload.lineItems)
    return TotalsResponse(
        totals=result,
        amountInWords=amount_in_words(result.total, payload.currencyCode),
        formattedTotal=format_currency(result.total, payload.currencyCode),
    )


@router.post("/pdf", summary="Render a document as PDF")
async def render_pdf(payload: RenderRequest, supabase=Depends(get_supabase)):
    settings = merge_settings(SupabaseSettingsStore(supabase, payload.userId).load())
    try:
        pdf_bytes = render_document_pdf(payload.document, settings, language=payload.language)
    except DocumentRenderError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    filename = f"{payload.document.document_id or payload.document.kind.value}.pdf".replace("/", "-")
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
