"""API schemas for document endpoints."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from facturago.domain.models import BillingDocument, DocumentKind, DocumentTotals, LineItem


class NextNumberRequest(BaseModel):
    userId: str
    kind: DocumentKind
    existingIds: List[Optional[str]] = Field(default_factory=list)
    year: Optional[int] = Field(default=None, ge=1900, le=9999)


class NextNumberResponse(BaseModel):
    kind: DocumentKind
    documentId: str


class NextCodeRequest(BaseModel):
    prefix: str = Field(pattern="^[CPF]$")
    codes: List[Optional[str]] = Field(default_factory=list)


class TotalsRequest(BaseModel):
    lineItems: List[LineItem]
    currencyCode: Optional[str] = None


class TotalsResponse(BaseModel):
    totals: DocumentTotals
    amountInWords: str
    formattedTotal: str


class RenderRequest(BaseModel):
    userId: str
    document: BillingDocument
    language: str = "fr"
