"""Backend configuration read from the environment, and dependency factories."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Mapping

from dotenv import load_dotenv
from fastapi import HTTPException

from facturago.adapters.image_client import ImageStudioAdapter
from facturago.adapters.supabase_client import get_supabase_client
from facturago.errors import ImageGenerationError

load_dotenv()

REQUIRED_VARIABLES = ("SUPABASE_URL", "SUPABASE_KEY")
DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://localhost:8501"


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()] or ["*"]


@dataclass(slots=True)
class Settings:
    supabase_url: str
    supabase_key: str
    gemini_api_key: str | None = None
    api_key: str | None = None
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> "Settings":
        missing = [name for name in REQUIRED_VARIABLES if not environ.get(name)]
        if missing:
            raise RuntimeError(f"Missing required environment variables: {', '.join(missing)}")
        return cls(
            supabase_url=environ["SUPABASE_URL"],
            supabase_key=environ["SUPABASE_KEY"],
            gemini_api_key=environ.get("GEMINI_API_KEY") or None,
            api_key=environ.get("API_KEY") or None,
            cors_origins=_split_origins(environ.get("CORS_ALLOW_ORIGINS", DEFAULT_CORS_ORIGINS)),
            log_level=environ.get("LOG_LEVEL", "INFO"),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env(os.environ)


def get_supabase():
    settings = get_settings()
    return get_supabase_client(settings.supabase_url, settings.supabase_key)


def get_image_studio() -> ImageStudioAdapter:
    """Gemini adapter; 503 when no API key is configured."""
    try:
        return ImageStudioAdapter(api_key=get_settings().gemini_api_key)
    except ImageGenerationError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
