"""In-memory working copy edited by the settings customizer."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List, Optional

from facturago.domain.models import (
    CompanySettings,
    DocumentColumn,
    DocumentKind,
    DocumentLabels,
    NumberingConfig,
    PriceDisplayMode,
)
from facturago.errors import FormValidationError, SettingsPersistenceError
from facturago.logging_config import get_logger
from facturago.services import columns as column_ops
from facturago.services.configuration import (
    StoredSettings,
    default_numbering,
    get_numbering,
    merge_columns,
    merge_settings,
    with_numbering,
)
from facturago.services.numbering import preview_document_number
from facturago.services.settings_store import SettingsGateway

logger = get_logger(__name__)

# Plain company fields edited through text inputs and toggles
EDITABLE_FIELDS = frozenset(
    {
        "company_name",
        "address",
        "phone",
        "email",
        "website",
        "rc",
        "ice",
        "fiscal_id",
        "patente",
        "cnss",
        "capital",
        "primary_color",
        "footer_notes",
        "default_payment_terms",
        "default_currency_code",
        "show_amount_in_words",
        "show_signature_recipient",
    }
)

SAVE_SUCCESS_MESSAGE = "Modifications enregistrées"


@dataclass(slots=True)
class SaveOutcome:
    success: bool
    message: str
    settings: Optional[CompanySettings] = None


class SettingsWorkingCopy:
    """
    Merged settings plus the column list, mutated field by field until saved.

    Nothing is persisted until :meth:`save`; a failed save leaves the edits in
    place so the user can retry.
    """

    def __init__(self, settings: CompanySettings, columns: List[DocumentColumn]) -> None:
        self.settings = settings
        self.columns = columns
        self.is_saving = False

    @classmethod
    def from_stored(cls, stored: StoredSettings) -> "SettingsWorkingCopy":
        settings = merge_settings(stored)
        return cls(settings, merge_columns(settings.document_columns))

    # --- Company fields ---

    def update_field(self, name: str, value: Any) -> None:
        if name not in EDITABLE_FIELDS:
            raise ValueError(f"Field {name!r} cannot be edited")
        if isinstance(value, str):
            value = value or None
        self.settings = self.settings.model_copy(update={name: value})

    def set_logo(self, data_url: str) -> None:
        if not data_url or not data_url.startswith("data:image/"):
            raise FormValidationError("Veuillez sélectionner un fichier image valide.")
        self.settings = self.settings.model_copy(update={"logo": data_url})

    def clear_logo(self) -> None:
        self.settings = self.settings.model_copy(update={"logo": None})

    def set_price_display_mode(self, mode: PriceDisplayMode | str) -> None:
        self.settings = self.settings.model_copy(
            update={"price_display_mode": PriceDisplayMode(mode)}
        )

    # --- Numbering ---

    def numbering(self, kind: DocumentKind | str) -> NumberingConfig:
        return get_numbering(self.settings, kind) or default_numbering(kind)

    def update_numbering(self, kind: DocumentKind | str, **changes: Any) -> NumberingConfig:
        """Apply field changes (snake_case) to one numbering config, validated."""
        data = self.numbering(kind).model_dump()
        data.update(changes)
        config = NumberingConfig.model_validate(data)
        self.settings = with_numbering(self.settings, kind, config)
        return config

    def preview(self, kind: DocumentKind | str, today: Optional[date] = None) -> str:
        return preview_document_number(self.settings, kind, today=today)

    def previews(self, today: Optional[date] = None) -> Dict[DocumentKind, str]:
        return {kind: self.preview(kind, today) for kind in DocumentKind}

    # --- Labels ---

    def update_label(self, key: str, text: str) -> None:
        labels = self.settings.document_labels or DocumentLabels()
        if key not in type(labels).model_fields:
            raise ValueError(f"Unknown document label {key!r}")
        self.settings = self.settings.model_copy(
            update={"document_labels": labels.model_copy(update={key: text})}
        )

    # --- Columns ---

    def toggle_column(self, column_id: str) -> None:
        self.columns = column_ops.toggle_visibility(self.columns, column_id)

    def relabel_column(self, column_id: str, text: str) -> None:
        self.columns = column_ops.relabel(self.columns, column_id, text)

    def move_column(self, index: int, direction: column_ops.Direction) -> None:
        self.columns = column_ops.move(self.columns, index, direction)

    # --- Save handshake ---

    def snapshot(self) -> CompanySettings:
        """Settings as they will be written, with the current column list."""
        return self.settings.model_copy(update={"document_columns": list(self.columns)})

    def save(self, gateway: SettingsGateway) -> SaveOutcome:
        if self.is_saving:
            return SaveOutcome(success=False, message="Sauvegarde déjà en cours")

        self.is_saving = True
        try:
            stored = gateway.save(self.snapshot())
        except SettingsPersistenceError as exc:
            logger.error("Save failed: %s", exc)
            return SaveOutcome(
                success=False,
                message=f"Erreur de sauvegarde: {str(exc) or 'Vérifiez votre connexion'}",
            )
        finally:
            self.is_saving = False

        self.settings = merge_settings(stored)
        self.columns = merge_columns(stored.document_columns) if stored.document_columns else self.columns
        return SaveOutcome(success=True, message=SAVE_SUCCESS_MESSAGE, settings=stored)
