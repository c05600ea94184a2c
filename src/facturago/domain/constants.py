"""Domain-level constants for the Facturago application."""

from __future__ import annotations

from typing import Dict, List

DEFAULT_PRIMARY_COLOR = "#10b981"

DEFAULT_CURRENCY_CODE = "MAD"

VAT_RATES: List[int] = [20, 14, 10, 7, 0]

# Keyed by DocumentKind value
DEFAULT_NUMBERING_PREFIXES: Dict[str, str] = {
    "invoice": "FAC",
    "quote": "DEV",
    "deliveryNote": "BL",
    "purchaseOrder": "BC",
    "creditNote": "AVO",
}

DEFAULT_NUMBERING: Dict[str, object] = {
    "yearFormat": "YYYY",
    "startNumber": 1,
    "padding": 5,
    "separator": "/",
}

# Settings attribute holding the numbering config of each document kind
NUMBERING_SLOTS: Dict[str, str] = {
    "invoice": "invoice_numbering",
    "quote": "quote_numbering",
    "deliveryNote": "delivery_note_numbering",
    "purchaseOrder": "purchase_order_numbering",
    "creditNote": "credit_note_numbering",
}

DOCUMENT_TITLES: Dict[str, str] = {
    "invoice": "Facture",
    "quote": "Devis",
    "deliveryNote": "Bon de Livraison",
    "purchaseOrder": "Bon de Commande",
    "creditNote": "Avoir",
}

# Zero-based orders; reordering rewrites them as position + 1
DEFAULT_COLUMNS: List[Dict[str, object]] = [
    {"id": "reference", "label": "Réf.", "visible": False, "order": 0},
    {"id": "name", "label": "Désignation", "visible": True, "order": 1},
    {"id": "quantity", "label": "Qté", "visible": True, "order": 2},
    {"id": "unitPrice", "label": "P.U. HT", "visible": True, "order": 3},
    {"id": "vat", "label": "TVA", "visible": True, "order": 4},
    {"id": "total", "label": "Total HT", "visible": True, "order": 5},
]

DEFAULT_COLUMN_IDS = [column["id"] for column in DEFAULT_COLUMNS]

# Columns kept on delivery notes, which never show prices
DELIVERY_NOTE_COLUMN_IDS = ("name", "quantity")

DEFAULT_LABELS: Dict[str, str] = {
    "totalHt": "Total HT",
    "totalTax": "Total TVA",
    "totalNet": "Net à Payer",
    "amountInWordsPrefix": "Arrêté le présent document à la somme de :",
    "signatureSender": "Signature Expéditeur",
    "signatureRecipient": "Signature & Cachet Client",
}

IMAGE_SIZES = ("1K", "2K", "4K")

CURRENCIES: List[Dict[str, str]] = [
    {
        "code": "MAD",
        "symbol": "DH",
        "position": "suffix",
        "decimal_separator": ",",
        "thousand_separator": " ",
        "singular_name_fr": "dirham",
        "plural_name_fr": "dirhams",
        "sub_unit_name_fr": "centimes",
    },
    {
        "code": "EUR",
        "symbol": "€",
        "position": "suffix",
        "decimal_separator": ",",
        "thousand_separator": " ",
        "singular_name_fr": "euro",
        "plural_name_fr": "euros",
        "sub_unit_name_fr": "centimes",
    },
    {
        "code": "USD",
        "symbol": "$",
        "position": "prefix",
        "decimal_separator": ".",
        "thousand_separator": ",",
        "singular_name_fr": "dollar",
        "plural_name_fr": "dollars",
        "sub_unit_name_fr": "cents",
    },
    {
        "code": "GBP",
        "symbol": "£",
        "position": "prefix",
        "decimal_separator": ".",
        "thousand_separator": ",",
        "singular_name_fr": "livre sterling",
        "plural_name_fr": "livres sterling",
        "sub_unit_name_fr": "pences",
    },
]
