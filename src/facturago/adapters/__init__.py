"""Adapter layer exports."""

from .image_client import ImageStudioAdapter
from .pdf_renderer import render_document_pdf
from .supabase_client import get_supabase_client

__all__ = [
    "ImageStudioAdapter",
    "render_document_pdf",
    "get_supabase_client",
]
