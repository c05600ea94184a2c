"""Domain models for company settings and billing documents."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import DEFAULT_LABELS, DEFAULT_NUMBERING

YearFormat = Literal["YYYY", "YY", "NONE"]
ColumnId = Literal[
    "reference", "name", "quantity", "length", "height", "unitPrice", "vat", "total"
]


class DocumentKind(str, Enum):
    """The five kinds of numbered billing documents."""

    INVOICE = "invoice"
    QUOTE = "quote"
    DELIVERY_NOTE = "deliveryNote"
    PURCHASE_ORDER = "purchaseOrder"
    CREDIT_NOTE = "creditNote"


class PriceDisplayMode(str, Enum):
    HT = "HT"
    TTC = "TTC"


class PriceKind(str, Enum):
    SALE = "sale"
    PURCHASE = "purchase"


class NumberingConfig(BaseModel):
    """Rule set used to render a human-readable document reference."""

    model_config = ConfigDict(populate_by_name=True)

    prefix: str
    year_format: YearFormat = Field(alias="yearFormat", default=DEFAULT_NUMBERING["yearFormat"])
    start_number: int = Field(alias="startNumber", default=DEFAULT_NUMBERING["startNumber"], ge=1)
    padding: int = Field(default=DEFAULT_NUMBERING["padding"], ge=1, le=10)
    separator: str = DEFAULT_NUMBERING["separator"]


class DocumentColumn(BaseModel):
    """One column of the line item table printed on documents."""

    model_config = ConfigDict(populate_by_name=True)

    id: ColumnId
    label: str
    visible: bool = True
    order: int = 0
    width: Optional[str] = None


class DocumentLabels(BaseModel):
    """Free-text overrides for the fixed PDF caption slots."""

    model_config = ConfigDict(populate_by_name=True)

    total_ht: str = Field(alias="totalHt", default=DEFAULT_LABELS["totalHt"])
    total_tax: str = Field(alias="totalTax", default=DEFAULT_LABELS["totalTax"])
    total_net: str = Field(alias="totalNet", default=DEFAULT_LABELS["totalNet"])
    amount_in_words_prefix: str = Field(
        alias="amountInWordsPrefix", default=DEFAULT_LABELS["amountInWordsPrefix"]
    )
    signature_sender: str = Field(alias="signatureSender", default=DEFAULT_LABELS["signatureSender"])
    signature_recipient: str = Field(
        alias="signatureRecipient", default=DEFAULT_LABELS["signatureRecipient"]
    )

    @field_validator("*", mode="before")
    @classmethod
    def none_means_default(cls, value, info):  # type: ignore[override]
        if value is None:
            return cls.model_fields[info.field_name].default
        return value


class CompanySettings(BaseModel):
    """Aggregate root of the company configuration, stored as one row per user."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[str] = None

    # Identity
    company_name: Optional[str] = Field(alias="companyName", default=None)
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None

    # Legal identifiers
    rc: Optional[str] = None
    ice: Optional[str] = None
    fiscal_id: Optional[str] = Field(alias="fiscalId", default=None)
    patente: Optional[str] = None
    cnss: Optional[str] = None
    capital: Optional[str] = None

    # Branding
    logo: Optional[str] = None
    stamp: Optional[str] = None
    primary_color: Optional[str] = Field(alias="primaryColor", default=None)

    # Documents
    footer_notes: Optional[str] = Field(alias="footerNotes", default=None)
    default_payment_terms: Optional[str] = Field(alias="defaultPaymentTerms", default=None)
    default_currency_code: Optional[str] = Field(alias="defaultCurrencyCode", default=None)
    show_amount_in_words: Optional[bool] = Field(alias="showAmountInWords", default=None)
    show_signature_recipient: Optional[bool] = Field(alias="showSignatureRecipient", default=None)
    document_columns: Optional[List[DocumentColumn]] = Field(alias="documentColumns", default=None)
    document_labels: Optional[DocumentLabels] = Field(alias="documentLabels", default=None)
    price_display_mode: Optional[PriceDisplayMode] = Field(alias="priceDisplayMode", default=None)

    invoice_numbering: Optional[NumberingConfig] = Field(alias="invoiceNumbering", default=None)
    quote_numbering: Optional[NumberingConfig] = Field(alias="quoteNumbering", default=None)
    delivery_note_numbering: Optional[NumberingConfig] = Field(
        alias="deliveryNoteNumbering", default=None
    )
    purchase_order_numbering: Optional[NumberingConfig] = Field(
        alias="purchaseOrderNumbering", default=None
    )
    credit_note_numbering: Optional[NumberingConfig] = Field(
        alias="creditNoteNumbering", default=None
    )

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value):  # type: ignore[override]
        return None if value is None else str(value)


class LineItem(BaseModel):
    """Line of a billing document, priced HT."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(min_length=1, max_length=500)
    reference: Optional[str] = Field(alias="productCode", default=None, max_length=100)
    description: Optional[str] = None
    quantity: float = Field(ge=0)
    unit_price: float = Field(alias="unitPrice", ge=0)
    vat: float = Field(default=20, ge=0, le=100)


class DocumentTotals(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    sub_total: float = Field(alias="subTotal")
    vat_amount: float = Field(alias="vatAmount")
    total: float


class Recipient(BaseModel):
    """Client or supplier printed in the address block."""

    name: str
    company: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class BillingDocument(BaseModel):
    """Invoice, quote, delivery note, purchase order or credit note to render."""

    model_config = ConfigDict(populate_by_name=True)

    kind: DocumentKind
    document_id: str = Field(alias="documentId", min_length=1)
    issue_date: date = Field(alias="date")
    recipient: Recipient
    due_date: Optional[date] = Field(alias="dueDate", default=None)
    expiry_date: Optional[date] = Field(alias="expiryDate", default=None)
    expected_date: Optional[date] = Field(alias="expectedDate", default=None)
    subject: Optional[str] = None
    reference: Optional[str] = None
    notes: Optional[str] = None
    line_items: List[LineItem] = Field(alias="lineItems", default_factory=list)
    amount_paid: float = Field(alias="amountPaid", default=0, ge=0)
