"""Service layer exports."""

from .columns import move, relabel, toggle_visibility, visible_columns
from .configuration import get_numbering, merge_columns, merge_settings, with_numbering
from .numbering import (
    format_document_number,
    next_document_number,
    next_entity_code,
    preview_document_number,
)
from .pricing import ProductPrices, ht_from_ttc, ttc_from_ht
from .settings_store import SupabaseSettingsStore, serialize_settings
from .working_copy import SaveOutcome, SettingsWorkingCopy

__all__ = [
    "move",
    "relabel",
    "toggle_visibility",
    "visible_columns",
    "get_numbering",
    "merge_columns",
    "merge_settings",
    "with_numbering",
    "format_document_number",
    "next_document_number",
    "next_entity_code",
    "preview_document_number",
    "ProductPrices",
    "ht_from_ttc",
    "ttc_from_ht",
    "SupabaseSettingsStore",
    "serialize_settings",
    "SaveOutcome",
    "SettingsWorkingCopy",
]
