import unittest
from datetime import date

import fitz

from facturago.adapters.pdf_renderer import hex_to_rgb, render_document_pdf
from facturago.domain.models import (
    BillingDocument,
    CompanySettings,
    DocumentColumn,
    DocumentKind,
    DocumentLabels,
    LineItem,
    Recipient,
)
from facturago.errors import DocumentRenderError

COLUMNS = [
    DocumentColumn(id="reference", label="Code", visible=False, order=0),
    DocumentColumn(id="name", label="Article", order=1),
    DocumentColumn(id="quantity", label="Qty", order=2),
    DocumentColumn(id="unitPrice", label="Unit price", order=3),
    DocumentColumn(id="vat", label="Tax", order=4),
    DocumentColumn(id="total", label="Amount", order=5),
]


def make_settings(**overrides):
    values = dict(
        company_name="Atlas SARL",
        ice="001234567000089",
        document_columns=COLUMNS,
        document_labels=DocumentLabels(
            total_ht="Net amount",
            total_tax="Tax amount",
            total_net="Grand total",
            amount_in_words_prefix="In words:",
            signature_sender="Sender sign",
            signature_recipient="Client sign",
        ),
    )
    values.update(overrides)
    return CompanySettings(**values)


def make_document(kind=DocumentKind.INVOICE, items=None):
    return BillingDocument(
        kind=kind,
        document_id="FAC/2026/00001",
        issue_date=date(2026, 1, 15),
        recipient=Recipient(name="Client Test", address="Rabat"),
        line_items=items or [LineItem(name="Chair", reference="P001", quantity=1, unit_price=100)],
    )


def pdf_text(pdf_bytes):
    with fitz.open(stream=pdf_bytes, filetype="pdf") as doc:
        return doc.page_count, "\n".join(page.get_text() for page in doc)


class TestRenderDocument(unittest.TestCase):
    def test_missing_company_name(self):
        with self.assertRaises(DocumentRenderError):
            render_document_pdf(make_document(), CompanySettings())
        with self.assertRaises(DocumentRenderError):
            render_document_pdf(make_document(), None)

    def test_invoice_content(self):
        pdf_bytes = render_document_pdf(make_document(), make_settings())
        self.assertTrue(pdf_bytes.startswith(b"%PDF"))
        _, text = pdf_text(pdf_bytes)
        for expected in ("Atlas SARL", "FACTURE", "FAC/2026/00001", "15/01/2026", "Client Test",
                         "ARTICLE", "UNIT PRICE", "Chair", "Grand total", "Cent vingt dirhams", "001234567000089"):
            self.assertIn(expected, text)
        self.assertNotIn("CODE", text)
        self.assertNotIn("Sender sign", text)

    def test_english_dates(self):
        _, text = pdf_text(render_document_pdf(make_document(), make_settings(), language="en"))
        self.assertIn("2026-01-15", text)

    def test_reference_column_when_visible(self):
        columns = [column.model_copy(update={"visible": True}) for column in COLUMNS]
        _, text = pdf_text(render_document_pdf(make_document(), make_settings(document_columns=columns)))
        self.assertIn("CODE", text)
        self.assertIn("P001", text)

    def test_amount_in_words_can_be_hidden(self):
        _, text = pdf_text(render_document_pdf(make_document(), make_settings(show_amount_in_words=False)))
        self.assertNotIn("Cent vingt", text)
        self.assertIn("Grand total", text)

    def test_delivery_note_has_no_prices(self):
        _, text = pdf_text(render_document_pdf(make_document(DocumentKind.DELIVERY_NOTE), make_settings()))
        self.assertIn("ARTICLE", text)
        self.assertIn("QTY", text)
        self.assertNotIn("UNIT PRICE", text)
        self.assertNotIn("Grand total", text)
        self.assertIn("Sender sign", text)
        self.assertIn("Client sign", text)

    def test_recipient_signature_option(self):
        _, text = pdf_text(render_document_pdf(make_document(), make_settings(show_signature_recipient=True)))
        self.assertIn("Client sign", text)

    def test_long_table_spans_pages(self):
        items = [LineItem(name=f"Item {index}", quantity=1, unit_price=10) for index in range(80)]
        page_count, text = pdf_text(render_document_pdf(make_document(items=items), make_settings()))
        self.assertGreater(page_count, 1)
        self.assertIn("Item 79", text)


class TestHexToRgb(unittest.TestCase):
    def test_valid(self):
        self.assertEqual(hex_to_rgb("#ff0000"), (1.0, 0.0, 0.0))

    def test_invalid_falls_back(self):
        self.assertEqual(hex_to_rgb("nope"), hex_to_rgb(None))
