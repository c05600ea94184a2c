"""Domain exports."""

from .constants import DEFAULT_COLUMNS, DEFAULT_LABELS, DEFAULT_NUMBERING_PREFIXES
from .models import (
    BillingDocument,
    CompanySettings,
    DocumentColumn,
    DocumentKind,
    DocumentLabels,
    DocumentTotals,
    LineItem,
    NumberingConfig,
    PriceDisplayMode,
    PriceKind,
    Recipient,
)

__all__ = [
    "DEFAULT_COLUMNS",
    "DEFAULT_LABELS",
    "DEFAULT_NUMBERING_PREFIXES",
    "BillingDocument",
    "CompanySettings",
    "DocumentColumn",
    "DocumentKind",
    "DocumentLabels",
    "DocumentTotals",
    "LineItem",
    "NumberingConfig",
    "PriceDisplayMode",
    "PriceKind",
    "Recipient",
]
