"""API schemas for the image studio."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class ImageGenerateRequest(BaseModel):
    prompt: str = Field(min_length=1)
    imageSize: Literal["1K", "2K", "4K"] = "1K"


class ImageEditRequest(BaseModel):
    prompt: str = Field(min_length=1)
    imageBase64: str = Field(min_length=1)
    mimeType: str = Field(default="image/png", pattern="^image/")


class ImageResponse(BaseModel):
    image: str
