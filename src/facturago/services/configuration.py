"""Merge of stored company settings with the built-in defaults."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence, Union

from facturago.domain.constants import (
    DEFAULT_COLUMNS,
    DEFAULT_NUMBERING,
    DEFAULT_NUMBERING_PREFIXES,
    DEFAULT_PRIMARY_COLOR,
    NUMBERING_SLOTS,
)
from facturago.domain.models import (
    CompanySettings,
    DocumentColumn,
    DocumentKind,
    DocumentLabels,
    NumberingConfig,
    PriceDisplayMode,
)

StoredSettings = Union[CompanySettings, Mapping[str, Any], None]


def default_numbering(kind: DocumentKind | str) -> NumberingConfig:
    """Return the built-in numbering config of a document kind."""
    kind = DocumentKind(kind)
    return NumberingConfig(prefix=DEFAULT_NUMBERING_PREFIXES[kind.value], **DEFAULT_NUMBERING)


def default_columns() -> List[DocumentColumn]:
    return [DocumentColumn.model_validate(column) for column in DEFAULT_COLUMNS]


def get_numbering(settings: CompanySettings, kind: DocumentKind | str) -> Optional[NumberingConfig]:
    """Return the numbering config stored for ``kind`` (None when the slot is empty)."""
    return getattr(settings, NUMBERING_SLOTS[DocumentKind(kind).value])


def with_numbering(
    settings: CompanySettings, kind: DocumentKind | str, config: NumberingConfig
) -> CompanySettings:
    """Return a copy of ``settings`` whose ``kind`` slot holds ``config``."""
    slot = NUMBERING_SLOTS[DocumentKind(kind).value]
    return settings.model_copy(update={slot: config})


def _coerce(stored: StoredSettings) -> Optional[CompanySettings]:
    if stored is None:
        return None
    if isinstance(stored, CompanySettings):
        return stored
    return CompanySettings.model_validate(stored)


def merge_settings(stored: StoredSettings) -> CompanySettings:
    """
    Complete stored settings with defaults.

    Every numbering slot, the caption labels and the price display mode are
    present in the result. A numbering config that exists is kept as-is, it is
    never merged field by field with the defaults. The input is not mutated.

    Args:
        stored: Settings row as loaded from the gateway (model, mapping or None
            on first run).

    Returns:
        A new, fully populated CompanySettings.
    """
    settings = _coerce(stored)
    if settings is None:
        settings = CompanySettings(primary_color=DEFAULT_PRIMARY_COLOR)

    updates: dict[str, Any] = {}
    for kind in DocumentKind:
        if get_numbering(settings, kind) is None:
            updates[NUMBERING_SLOTS[kind.value]] = default_numbering(kind)

    if settings.document_labels is None:
        updates["document_labels"] = DocumentLabels()
    if settings.price_display_mode is None:
        updates["price_display_mode"] = PriceDisplayMode.HT

    if not updates:
        return settings.model_copy()
    return settings.model_copy(update=updates)


def merge_columns(saved: Optional[Sequence[DocumentColumn]]) -> List[DocumentColumn]:
    """
    Build the working column list from the saved one.

    Each known column is replaced by the saved column with the same id and the
    result is sorted by ``order``. Without a saved list the defaults are
    returned in their declared order.
    """
    if not saved:
        return default_columns()

    saved_by_id = {column.id: column for column in saved}
    merged = [saved_by_id.get(column.id, column) for column in default_columns()]
    return sorted(merged, key=lambda column: column.order)
