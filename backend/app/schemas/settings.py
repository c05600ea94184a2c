"""API schemas for settings endpoints."""

from __future__ import annotations

from typing import Any, Dict, List, Literal

from pydantic import BaseModel, Field

from facturago.domain.models import CompanySettings, DocumentColumn, DocumentKind, NumberingConfig


class SettingsSaveRequest(BaseModel):
    userId: str
    settings: CompanySettings


class SettingsResponse(BaseModel):
    settings: Dict[str, Any]
    columns: List[DocumentColumn]


class NumberingPreviewRequest(BaseModel):
    config: NumberingConfig
    year: int | None = Field(default=None, ge=1900, le=9999)


class NumberingPreviewResponse(BaseModel):
    kind: DocumentKind | None = None
    preview: str


class ColumnMoveRequest(BaseModel):
    columns: List[DocumentColumn]
    index: int = Field(ge=0)
    direction: Literal["up", "down"]


class ColumnToggleRequest(BaseModel):
    columns: List[DocumentColumn]
    columnId: str


class ColumnRelabelRequest(BaseModel):
    columns: List[DocumentColumn]
    columnId: str
    label: str
