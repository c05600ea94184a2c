"""Company settings routes."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query

from facturago.domain.models import DocumentKind
from facturago.errors import SettingsPersistenceError
from facturago.logging_config import get_logger
from facturago.services import columns as column_ops
from facturago.services.configuration import merge_columns, merge_settings
from facturago.services.numbering import format_document_number, preview_document_number
from facturago.services.settings_store import SupabaseSettingsStore, serialize_settings

from ..config import get_supabase
from ..schemas.settings import (
    ColumnMoveRequest,
    ColumnRelabelRequest,
    ColumnToggleRequest,
    NumberingPreviewRequest,
    NumberingPreviewResponse,
    SettingsResponse,
    SettingsSaveRequest,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/settings", tags=["settings"])


def _response(settings) -> SettingsResponse:
    merged = merge_settings(settings)
    return SettingsResponse(
        settings=serialize_settings(merged),
        columns=merge_columns(merged.document_columns),
    )


@router.get("", response_model=SettingsResponse, summary="Load merged settings")
async def get_company_settings(
    user_id: str = Query(..., alias="userId"),
    supabase=Depends(get_supabase),
):
    """Return the stored settings of a user completed with defaults."""
    stored = SupabaseSettingsStore(supabase, user_id).load()
    return _response(stored)


@router.put("", response_model=SettingsResponse, summary="Save settings")
async def save_company_settings(
    payload: SettingsSaveRequest,
    supabase=Depends(get_supabase),
):
    """Write the settings wholesale and return the merged stored row."""
    store = SupabaseSettingsStore(supabase, payload.userId)
    try:
        stored = store.save(payload.settings)
    except SettingsPersistenceError as exc:
        raise HTTPException(status_code=502, detail=f"Erreur de sauvegarde: {exc}") from exc
    return _response(stored)


@router.get(
    "/numbering/{kind}/preview",
    response_model=NumberingPreviewResponse,
    summary="Preview the next reference of a document kind",
)
async def preview_numbering(
    kind: DocumentKind,
    user_id: str = Query(..., alias="userId"),
    supabase=Depends(get_supabase),
):
    stored = SupabaseSettingsStore(supabase, user_id).load()
    preview = preview_document_number(merge_settings(stored), kind)
    return NumberingPreviewResponse(kind=kind, preview=preview)


@router.post(
    "/numbering/preview",
    response_model=NumberingPreviewResponse,
    summary="Preview an unsaved numbering config",
)
async def preview_numbering_config(payload: NumberingPreviewRequest):
    year = payload.year or date.today().year
    return NumberingPreviewResponse(preview=format_document_number(payload.config, year=year))


@router.patch("/columns/move", summary="Move a column one step up or down")
async def move_column(payload: ColumnMoveRequest):
    try:
        columns = column_ops.move(payload.columns, payload.index, payload.direction)
    except (IndexError, ValueError) as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"columns": [column.model_dump() for column in columns]}


@router.patch("/columns/toggle", summary="Show or hide a column")
async def toggle_column(payload: ColumnToggleRequest):
    columns = column_ops.toggle_visibility(payload.columns, payload.columnId)
    return {"columns": [column.model_dump() for column in columns]}


@router.patch("/columns/relabel", summary="Rename a column")
async def relabel_column(payload: ColumnRelabelRequest):
    columns = column_ops.relabel(payload.columns, payload.columnId, payload.label)
    return {"columns": [column.model_dump() for column in columns]}
