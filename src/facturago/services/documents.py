"""Totals of billing documents."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from facturago.domain.models import BillingDocument, DocumentKind, DocumentTotals, LineItem
from facturago.services.pricing import round_money, to_decimal


def line_total(item: LineItem) -> Decimal:
    """HT amount of one line (quantity x unit price), unrounded."""
    return to_decimal(item.quantity) * to_decimal(item.unit_price)


def compute_totals(items: Iterable[LineItem]) -> DocumentTotals:
    """Return HT, VAT and TTC totals, each rounded half-up to cents."""
    sub_total = Decimal("0")
    vat_amount = Decimal("0")
    for item in items:
        amount = line_total(item)
        sub_total += amount
        vat_amount += amount * to_decimal(item.vat) / Decimal("100")

    sub_total = round_money(sub_total)
    vat_amount = round_money(vat_amount)
    return DocumentTotals(
        sub_total=float(sub_total),
        vat_amount=float(vat_amount),
        total=float(sub_total + vat_amount),
    )


def remaining_due(document: BillingDocument, totals: DocumentTotals) -> Decimal:
    """Amount left to pay on an invoice (never negative)."""
    if document.kind is not DocumentKind.INVOICE:
        return Decimal("0")
    remaining = round_money(totals.total) - round_money(document.amount_paid)
    return max(remaining, Decimal("0"))
