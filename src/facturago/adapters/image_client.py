"""Wrapper around the Gemini image generation API (google-genai SDK)."""

from __future__ import annotations

import base64
import binascii
from typing import Any, Optional

from google import genai
from google.genai import types

from facturago.domain.constants import IMAGE_SIZES
from facturago.errors import ImageGenerationError
from facturago.logging_config import get_logger

logger = get_logger(__name__)

GENERATION_MODEL = "gemini-3-pro-image-preview"
EDIT_MODEL = "gemini-2.5-flash-image"


def _to_data_url(response: Any) -> str:
    """Return the first inline image of a response as a PNG data URL."""
    candidates = getattr(response, "candidates", None) or []
    if candidates:
        content = getattr(candidates[0], "content", None)
        for part in getattr(content, "parts", None) or []:
            inline_data = getattr(part, "inline_data", None)
            if inline_data is None or not inline_data.data:
                continue
            data = inline_data.data
            if isinstance(data, bytes):
                data = base64.b64encode(data).decode("ascii")
            return f"data:image/png;base64,{data}"
    raise ImageGenerationError("No image data found in the response.")


class ImageStudioAdapter:
    """Text-to-image generation and instruction-based image editing. No retry."""

    def __init__(self, api_key: Optional[str], client: Optional[genai.Client] = None) -> None:
        if client is None:
            if not api_key:
                raise ImageGenerationError("GEMINI_API_KEY environment variable not set")
            client = genai.Client(api_key=api_key)
        self._client = client

    @property
    def client(self) -> genai.Client:
        return self._client

    def generate_image(self, prompt: str, image_size: str = "1K") -> str:
        """Generate a square image from a text prompt at a 1K/2K/4K resolution tier."""
        if image_size not in IMAGE_SIZES:
            raise ValueError(f"Unsupported image size: {image_size}")
        try:
            response = self._client.models.generate_content(
                model=GENERATION_MODEL,
                contents=[prompt],
                config=types.GenerateContentConfig(
                    image_config=types.ImageConfig(aspect_ratio="1:1", image_size=image_size),
                ),
            )
        except Exception as exc:
            logger.error("Image generation failed: %s", exc)
            raise ImageGenerationError(str(exc)) from exc
        return _to_data_url(response)

    def edit_image(self, prompt: str, base64_image_data: str, mime_type: str) -> str:
        """Edit an existing base64-encoded image following a text instruction."""
        try:
            image_bytes = base64.b64decode(base64_image_data, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValueError("Invalid base64 image data") from exc

        try:
            response = self._client.models.generate_content(
                model=EDIT_MODEL,
                contents=[types.Part.from_bytes(data=image_bytes, mime_type=mime_type), prompt],
            )
        except Exception as exc:
            logger.error("Image edition failed: %s", exc)
            raise ImageGenerationError(str(exc)) from exc
        return _to_data_url(response)
