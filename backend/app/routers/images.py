"""Image studio routes backed by Gemini."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from facturago.adapters.image_client import ImageStudioAdapter
from facturago.errors import ImageGenerationError

from ..config import get_image_studio
from ..schemas.images import ImageEditRequest, ImageGenerateRequest, ImageResponse

router = APIRouter(prefix="/images", tags=["images"])

GENERATION_FAILED = "Échec de la génération de l'image. Veuillez réessayer."
EDIT_FAILED = "Échec de la modification de l'image. Veuillez réessayer."


@router.post("/generate", response_model=ImageResponse, summary="Generate an image from a prompt")
async def generate(payload: ImageGenerateRequest, studio: ImageStudioAdapter = Depends(get_image_studio)):
    try:
        image = studio.generate_image(payload.prompt, payload.imageSize)
    except ImageGenerationError as exc:
        raise HTTPException(status_code=502, detail=GENERATION_FAILED) from exc
    return ImageResponse(image=image)


@router.post("/edit", response_model=ImageResponse, summary="Edit an uploaded image")
async def edit(payload: ImageEditRequest, studio: ImageStudioAdapter = Depends(get_image_studio)):
    try:
        image = studio.edit_image(payload.prompt, payload.imageBase64, payload.mimeType)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except ImageGenerationError as exc:
        raise HTTPException(status_code=502, detail=EDIT_FAILED) from exc
    return ImageResponse(image=image)
