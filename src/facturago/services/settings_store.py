"""Persistence gateway for company settings stored in Supabase."""

from __future__ import annotations

from typing import Any, Dict, Optional, Protocol

from pydantic import ValidationError
from supabase import Client

from facturago.domain.models import CompanySettings
from facturago.errors import SettingsPersistenceError
from facturago.logging_config import get_logger

logger = get_logger(__name__)

SETTINGS_TABLE = "settings"


class SettingsGateway(Protocol):
    def load(self) -> Optional[CompanySettings]: ...

    def save(self, settings: CompanySettings) -> CompanySettings: ...


def serialize_settings(settings: CompanySettings) -> Dict[str, Any]:
    """JSON-ready representation used for storage and backup export."""
    return settings.model_dump(by_alias=True, exclude_none=True, mode="json")


def _get_single_row(query_result) -> Optional[Dict[str, Any]]:
    data = getattr(query_result, "data", None) or []
    if not data:
        return None
    return data[0]


class SupabaseSettingsStore:
    """One settings row per user; when duplicates exist the latest row wins."""

    def __init__(self, supabase: Client, user_id: Optional[str]) -> None:
        self._supabase = supabase
        self.user_id = user_id

    def _latest_row(self, columns: str):
        return (
            self._supabase.table(SETTINGS_TABLE)
            .select(columns)
            .eq("user_id", self.user_id)
            .order("created_at", desc=True)
            .limit(1)
            .execute()
        )

    def load(self) -> Optional[CompanySettings]:
        """Return the stored settings, or None on first run, without user or on error."""
        if not self.user_id:
            return None
        try:
            row = _get_single_row(self._latest_row("*"))
        except Exception as exc:
            logger.error("Error fetching settings for user %s: %s", self.user_id, exc)
            return None
        if row is None:
            return None
        try:
            return CompanySettings.model_validate(row)
        except ValidationError as exc:
            logger.error("Stored settings of user %s are invalid: %s", self.user_id, exc)
            return None

    def save(self, settings: CompanySettings) -> CompanySettings:
        """
        Write the settings wholesale and return the stored row.

        The latest row of the user is updated in place; without one a new row
        is inserted with the user id. The id and user id are never part of an
        update body.

        Raises:
            SettingsPersistenceError: no authenticated user, or Supabase failed.
        """
        if not self.user_id:
            raise SettingsPersistenceError("Utilisateur non connecté")

        payload = serialize_settings(settings)
        payload.pop("id", None)
        payload.pop("user_id", None)

        try:
            existing = _get_single_row(self._latest_row("id"))
            table = self._supabase.table(SETTINGS_TABLE)
            if existing and existing.get("id"):
                logger.info("Updating existing settings row %s", existing["id"])
                response = table.update(payload).eq("id", existing["id"]).execute()
            else:
                logger.info("Creating new settings row for user %s", self.user_id)
                response = table.insert({**payload, "user_id": self.user_id}).execute()
        except Exception as exc:
            logger.error("Error saving settings to Supabase: %s", exc)
            raise SettingsPersistenceError(str(exc)) from exc

        row = _get_single_row(response)
        if row is None:
            raise SettingsPersistenceError("Unable to save settings")
        try:
            return CompanySettings.model_validate(row)
        except ValidationError as exc:
            logger.error("Saved settings row is invalid: %s", exc)
            raise SettingsPersistenceError("Invalid settings row returned") from exc
