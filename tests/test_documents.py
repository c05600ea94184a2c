import unittest
from datetime import date
from decimal import Decimal

from facturago.domain.models import BillingDocument, DocumentKind, LineItem, Recipient
from facturago.services.documents import compute_totals, line_total, remaining_due


def make_document(kind=DocumentKind.INVOICE, amount_paid=0):
    return BillingDocument(
        kind=kind,
        document_id="FAC/2026/00001",
        issue_date=date(2026, 1, 15),
        recipient=Recipient(name="Client"),
        line_items=[
            LineItem(name="Table", quantity=2, unit_price=100, vat=20),
            LineItem(name="Livre", quantity=3, unit_price=33.33, vat=10),
        ],
        amount_paid=amount_paid,
    )


class TestTotals(unittest.TestCase):
    def test_line_total(self):
        self.assertEqual(line_total(LineItem(name="x", quantity=3, unit_price=33.33)), Decimal("99.99"))

    def test_compute_totals(self):
        totals = compute_totals(make_document().line_items)
        self.assertEqual(totals.sub_total, 299.99)
        self.assertEqual(totals.vat_amount, 50.0)
        self.assertEqual(totals.total, 349.99)

    def test_empty(self):
        totals = compute_totals([])
        self.assertEqual((totals.sub_total, totals.vat_amount, totals.total), (0, 0, 0))

    def test_aliases(self):
        totals = compute_totals(make_document().line_items)
        self.assertEqual(totals.model_dump(by_alias=True)["subTotal"], 299.99)


class TestRemainingDue(unittest.TestCase):
    def test_partial_payment(self):
        document = make_document(amount_paid=100)
        self.assertEqual(remaining_due(document, compute_totals(document.line_items)), Decimal("249.99"))

    def test_overpaid_is_zero(self):
        document = make_document(amount_paid=1000)
        self.assertEqual(remaining_due(document, compute_totals(document.line_items)), Decimal("0"))

    def test_only_invoices(self):
        document = make_document(kind=DocumentKind.QUOTE, amount_paid=10)
        self.assertEqual(remaining_due(document, compute_totals(document.line_items)), Decimal("0"))
