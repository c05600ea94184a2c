"""PDF rendering of billing documents based on PyMuPDF."""

from __future__ import annotations

import base64
import math
from io import BytesIO
from typing import List, Optional, Sequence, Tuple

import fitz  # type: ignore

from facturago.domain.constants import (
    DEFAULT_PRIMARY_COLOR,
    DELIVERY_NOTE_COLUMN_IDS,
    DOCUMENT_TITLES,
)
from facturago.domain.models import (
    BillingDocument,
    CompanySettings,
    DocumentColumn,
    DocumentKind,
    LineItem,
)
from facturago.errors import DocumentRenderError
from facturago.logging_config import get_logger
from facturago.services.columns import visible_columns
from facturago.services.configuration import merge_columns, merge_settings
from facturago.services.currency import format_currency, format_number
from facturago.services.documents import compute_totals, line_total, remaining_due
from facturago.services.words import amount_in_words

logger = get_logger(__name__)

PAGE_WIDTH, PAGE_HEIGHT = fitz.paper_size("a4")
MARGIN = 40
FOOTER_HEIGHT = 50
LINE_HEIGHT = 11

FONT = "helv"
FONT_BOLD = "hebo"
FONT_ITALIC = "heit"

TEXT_COLOR = (0.22, 0.25, 0.32)
MUTED_COLOR = (0.42, 0.45, 0.5)
WHITE = (1.0, 1.0, 1.0)
ROW_SHADE = (0.976, 0.98, 0.984)

# Name takes the remaining width
COLUMN_WIDTHS = {
    "reference": 60,
    "quantity": 45,
    "length": 45,
    "height": 45,
    "unitPrice": 75,
    "vat": 40,
    "total": 80,
}
COLUMN_ALIGN = {
    "quantity": fitz.TEXT_ALIGN_CENTER,
    "length": fitz.TEXT_ALIGN_CENTER,
    "height": fitz.TEXT_ALIGN_CENTER,
    "vat": fitz.TEXT_ALIGN_CENTER,
    "unitPrice": fitz.TEXT_ALIGN_RIGHT,
    "total": fitz.TEXT_ALIGN_RIGHT,
}

MISSING_COMPANY_MESSAGE = (
    "Impossible de générer le document : Les informations de l'entreprise (Nom) "
    "sont manquantes dans les paramètres."
)


def hex_to_rgb(value: Optional[str]) -> Tuple[float, float, float]:
    """Convert ``#rrggbb`` to a PyMuPDF color, falling back to the brand color."""
    text = (value or DEFAULT_PRIMARY_COLOR).lstrip("#")
    if len(text) != 6:
        text = DEFAULT_PRIMARY_COLOR.lstrip("#")
    try:
        return tuple(int(text[i : i + 2], 16) / 255 for i in (0, 2, 4))  # type: ignore[return-value]
    except ValueError:
        return hex_to_rgb(DEFAULT_PRIMARY_COLOR)


def _format_date(value, language: str) -> str:
    if language in ("fr", "ar"):
        return value.strftime("%d/%m/%Y")
    return value.isoformat()


def _format_quantity(value: float) -> str:
    return f"{value:g}"


def document_columns(document: BillingDocument, settings: CompanySettings) -> List[DocumentColumn]:
    """Visible columns in order; delivery notes never show price columns."""
    columns = visible_columns(merge_columns(settings.document_columns))
    if document.kind is DocumentKind.DELIVERY_NOTE:
        columns = [column for column in columns if column.id in DELIVERY_NOTE_COLUMN_IDS]
    return columns


def _layout(columns: Sequence[DocumentColumn]) -> List[Tuple[DocumentColumn, float, float]]:
    available = PAGE_WIDTH - 2 * MARGIN
    fixed = sum(COLUMN_WIDTHS.get(column.id, 0) for column in columns if column.id != "name")
    flexible = max(available - fixed, 60)

    widths = [flexible if column.id == "name" else COLUMN_WIDTHS.get(column.id, 60) for column in columns]
    if columns and all(column.id != "name" for column in columns):
        widths[-1] += max(available - sum(widths), 0)

    placed = []
    x = MARGIN
    for column, width in zip(columns, widths):
        placed.append((column, x, x + width))
        x += width
    return placed


def _cell_text(column_id: str, item: LineItem, currency_code: Optional[str]) -> str:
    if column_id == "name":
        return item.name
    if column_id == "reference":
        return item.reference or ""
    if column_id == "quantity":
        return _format_quantity(item.quantity)
    if column_id == "unitPrice":
        return format_number(item.unit_price, currency_code)
    if column_id == "vat":
        return f"{item.vat:g}%"
    if column_id == "total":
        return format_number(line_total(item), currency_code)
    return ""


class _Canvas:
    """Vertical cursor over the pages of the output document."""

    def __init__(self, doc: fitz.Document) -> None:
        self.doc = doc
        self.page = doc.new_page(width=PAGE_WIDTH, height=PAGE_HEIGHT)
        self.y = MARGIN

    def ensure_space(self, height: float) -> None:
        if self.y + height > PAGE_HEIGHT - MARGIN - FOOTER_HEIGHT:
            self.page = self.doc.new_page(width=PAGE_WIDTH, height=PAGE_HEIGHT)
            self.y = MARGIN

    def box(
        self,
        x0: float,
        x1: float,
        text: str,
        *,
        size: float = 9,
        font: str = FONT,
        color=TEXT_COLOR,
        align: int = fitz.TEXT_ALIGN_LEFT,
        y: Optional[float] = None,
    ) -> float:
        """Write wrapped text at the cursor (or ``y``) and return its height."""
        width = x1 - x0
        lines = 0
        for paragraph in (text or "").split("\n"):
            length = fitz.get_text_length(paragraph, fontname=font, fontsize=size)
            lines += max(1, math.ceil(length / max(width - 4, 1)))
        height = lines * (size + 2.5) + 4
        top = self.y if y is None else y
        self.page.insert_textbox(
            fitz.Rect(x0, top, x1, top + height + 2 * size),
            text or "",
            fontsize=size,
            fontname=font,
            color=color,
            align=align,
        )
        return height


def _render_header(canvas: _Canvas, document: BillingDocument, settings: CompanySettings, language: str) -> None:
    primary = hex_to_rgb(settings.primary_color)
    left_x1 = PAGE_WIDTH / 2
    right_x0 = PAGE_WIDTH * 0.55
    right_x1 = PAGE_WIDTH - MARGIN

    left_y = MARGIN
    if settings.logo and settings.logo.startswith("data:image/"):
        try:
            image = base64.b64decode(settings.logo.split(",", 1)[1])
            canvas.page.insert_image(fitz.Rect(MARGIN, left_y, MARGIN + 150, left_y + 60), stream=image, keep_proportion=True)
            left_y += 65
        except (IndexError, ValueError, RuntimeError) as exc:
            logger.warning("Logo could not be embedded: %s", exc)
    left_y += canvas.box(MARGIN, left_x1, settings.company_name or "", size=14, font=FONT_BOLD, color=primary, y=left_y)
    if settings.address:
        left_y += canvas.box(MARGIN, left_x1, settings.address, y=left_y)
    contact = " | ".join(value for value in (settings.phone, settings.email, settings.website) if value)
    if contact:
        left_y += canvas.box(MARGIN, left_x1, contact, color=MUTED_COLOR, y=left_y)

    right_y = MARGIN
    title = DOCUMENT_TITLES[document.kind.value].upper()
    right_y += canvas.box(right_x0, right_x1, title, size=18, font=FONT_BOLD, color=primary, align=fitz.TEXT_ALIGN_RIGHT, y=right_y)
    right_y += canvas.box(right_x0, right_x1, f"N° {document.document_id}", size=12, font=FONT_BOLD, align=fitz.TEXT_ALIGN_RIGHT, y=right_y)
    details = [f"Date : {_format_date(document.issue_date, language)}"]
    if document.kind is DocumentKind.INVOICE and document.due_date:
        details.append(f"Échéance : {_format_date(document.due_date, language)}")
    elif document.kind is DocumentKind.QUOTE and document.expiry_date:
        details.append(f"Validité : {_format_date(document.expiry_date, language)}")
    elif document.kind is DocumentKind.PURCHASE_ORDER and document.expected_date:
        details.append(f"Livraison prévue : {_format_date(document.expected_date, language)}")
    if document.reference:
        details.append(f"Réf : {document.reference}")
    right_y += canvas.box(right_x0, right_x1, "\n".join(details), align=fitz.TEXT_ALIGN_RIGHT, y=right_y)

    canvas.y = max(left_y, right_y) + 15


def _render_recipient(canvas: _Canvas, document: BillingDocument) -> None:
    recipient = document.recipient
    x0 = PAGE_WIDTH * 0.55
    x1 = PAGE_WIDTH - MARGIN
    lines = [value for value in (recipient.company, recipient.name, recipient.address, recipient.email, recipient.phone) if value]
    canvas.y += canvas.box(x0, x1, "ADRESSÉ À", size=8, font=FONT_BOLD, color=MUTED_COLOR)
    canvas.y += canvas.box(x0, x1, "\n".join(lines), size=10) + 15
    if document.subject:
        canvas.y += canvas.box(MARGIN, PAGE_WIDTH - MARGIN, f"Objet : {document.subject}", font=FONT_BOLD) + 5


def _render_table(
    canvas: _Canvas, document: BillingDocument, settings: CompanySettings, columns: Sequence[DocumentColumn]
) -> None:
    if not columns:
        return
    primary = hex_to_rgb(settings.primary_color)
    placed = _layout(columns)
    table_x1 = placed[-1][2]

    def header() -> None:
        canvas.ensure_space(20)
        canvas.page.draw_rect(fitz.Rect(MARGIN, canvas.y, table_x1, canvas.y + 18), color=None, fill=primary)
        for column, x0, x1 in placed:
            canvas.box(x0 + 3, x1 - 3, column.label.upper(), size=8, font=FONT_BOLD, color=WHITE, align=COLUMN_ALIGN.get(column.id, fitz.TEXT_ALIGN_LEFT), y=canvas.y + 3)
        canvas.y += 20

    header()
    for index, item in enumerate(document.line_items):
        texts = [(column, x0, x1, _cell_text(column.id, item, settings.default_currency_code)) for column, x0, x1 in placed]
        heights = [
            max(1, math.ceil(fitz.get_text_length(text, fontname=FONT, fontsize=9) / max(x1 - x0 - 10, 1))) * LINE_HEIGHT
            for _, x0, x1, text in texts
        ]
        row_height = max(heights) + 6
        if canvas.y + row_height > PAGE_HEIGHT - MARGIN - FOOTER_HEIGHT:
            canvas.ensure_space(row_height + 20)
            header()
        if index % 2:
            canvas.page.draw_rect(fitz.Rect(MARGIN, canvas.y, table_x1, canvas.y + row_height), color=None, fill=ROW_SHADE)
        for column, x0, x1, text in texts:
            canvas.box(x0 + 3, x1 - 3, text, align=COLUMN_ALIGN.get(column.id, fitz.TEXT_ALIGN_LEFT), y=canvas.y + 3)
        canvas.y += row_height
    canvas.y += 15


def _render_totals(canvas: _Canvas, document: BillingDocument, settings: CompanySettings) -> None:
    labels = settings.document_labels
    currency = settings.default_currency_code
    totals = compute_totals(document.line_items)
    canvas.ensure_space(110)

    left_x1 = PAGE_WIDTH * 0.55
    right_x0 = PAGE_WIDTH * 0.6
    right_x1 = PAGE_WIDTH - MARGIN
    top = canvas.y

    left_y = top
    if settings.show_amount_in_words is not False:
        left_y += canvas.box(MARGIN, left_x1, labels.amount_in_words_prefix, size=8, font=FONT_BOLD, color=MUTED_COLOR, y=left_y)
        left_y += canvas.box(MARGIN, left_x1, amount_in_words(totals.total, currency), font=FONT_ITALIC, y=left_y)
    if document.notes:
        left_y += canvas.box(MARGIN, left_x1, f"Notes: {document.notes}", size=8, color=MUTED_COLOR, y=left_y + 8) + 8

    right_y = top
    rows = [
        (labels.total_ht, totals.sub_total, FONT),
        (labels.total_tax, totals.vat_amount, FONT),
        (labels.total_net, totals.total, FONT_BOLD),
    ]
    for label, amount, font in rows:
        canvas.box(right_x0, right_x1, label, font=font, y=right_y)
        right_y += canvas.box(right_x0, right_x1, format_currency(amount, currency), font=font, align=fitz.TEXT_ALIGN_RIGHT, y=right_y)

    if document.kind is DocumentKind.INVOICE and document.amount_paid > 0:
        right_y += canvas.box(right_x0, right_x1, f"Déjà réglé : {format_currency(document.amount_paid, currency)}", size=8, y=right_y + 4)
        remaining = remaining_due(document, totals)
        status = f"Reste à payer : {format_currency(remaining, currency)}" if remaining > 0 else "Soldé"
        right_y += canvas.box(right_x0, right_x1, status, size=8, font=FONT_BOLD, y=right_y + 4)

    canvas.y = max(left_y, right_y) + 20


def _render_signatures(canvas: _Canvas, settings: CompanySettings) -> None:
    labels = settings.document_labels
    canvas.ensure_space(60)
    canvas.box(MARGIN, PAGE_WIDTH / 2, labels.signature_sender, font=FONT_BOLD)
    canvas.box(PAGE_WIDTH / 2, PAGE_WIDTH - MARGIN, labels.signature_recipient, font=FONT_BOLD, align=fitz.TEXT_ALIGN_RIGHT)
    canvas.y += 60


def _render_footer(canvas: _Canvas, settings: CompanySettings) -> None:
    legal_ids = " | ".join(
        f"{name}: {value}"
        for name, value in (
            ("ICE", settings.ice),
            ("RC", settings.rc),
            ("IF", settings.fiscal_id),
            ("TP", settings.patente),
            ("CNSS", settings.cnss),
        )
        if value
    )
    y = PAGE_HEIGHT - MARGIN - FOOTER_HEIGHT + 5
    if settings.footer_notes:
        y += canvas.box(MARGIN, PAGE_WIDTH - MARGIN, settings.footer_notes, size=8, align=fitz.TEXT_ALIGN_CENTER, y=y)
    if legal_ids:
        canvas.box(MARGIN, PAGE_WIDTH - MARGIN, legal_ids, size=7, color=MUTED_COLOR, align=fitz.TEXT_ALIGN_CENTER, y=y)


def render_document_pdf(
    document: BillingDocument, settings: Optional[CompanySettings], *, language: str = "fr"
) -> bytes:
    """
    Render a billing document with the company's layout settings.

    Args:
        document: Document to print.
        settings: Company settings (merged with defaults here).
        language: UI language, drives date formatting.

    Returns:
        The PDF bytes.

    Raises:
        DocumentRenderError: the company name is not configured.
    """
    if settings is None or not settings.company_name:
        raise DocumentRenderError(MISSING_COMPANY_MESSAGE)

    settings = merge_settings(settings)
    columns = document_columns(document, settings)
    is_delivery_note = document.kind is DocumentKind.DELIVERY_NOTE

    doc = fitz.open()
    try:
        canvas = _Canvas(doc)
        _render_header(canvas, document, settings, language)
        _render_recipient(canvas, document)
        _render_table(canvas, document, settings, columns)
        if not is_delivery_note:
            _render_totals(canvas, document, settings)
        if is_delivery_note or settings.show_signature_recipient:
            _render_signatures(canvas, settings)
        _render_footer(canvas, settings)

        logger.info("Rendered %s %s (%d pages)", document.kind.value, document.document_id, doc.page_count)
        output_pdf = BytesIO()
        doc.save(output_pdf)
        return output_pdf.getvalue()
    finally:
        doc.close()
