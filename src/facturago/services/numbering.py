"""Document reference formatting and sequence allocation."""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from facturago.domain.models import CompanySettings, DocumentKind, NumberingConfig
from facturago.logging_config import get_logger
from facturago.services.configuration import get_numbering

logger = get_logger(__name__)


def _format_year(year: int, year_format: str) -> str:
    if year_format == "YY":
        return str(year)[-2:]
    return str(year)


def reference_stem(config: NumberingConfig, *, year: int) -> str:
    """Return the part of a reference that precedes the sequence number."""
    if config.year_format == "NONE":
        return f"{config.prefix}{config.separator}"
    return f"{config.prefix}{config.separator}{_format_year(year, config.year_format)}{config.separator}"


def format_document_number(
    config: NumberingConfig, *, year: int, sequence: Optional[int] = None
) -> str:
    """
    Render a document reference such as ``FAC/2026/00001``.

    Args:
        config: Numbering rules of the document kind.
        year: Calendar year printed when the year format is not ``NONE``.
        sequence: Sequence value; defaults to the config's start number.

    Returns:
        The reference, with the number zero-padded to ``padding`` characters.
        Numbers wider than ``padding`` are never truncated.
    """
    number = config.start_number if sequence is None else sequence
    return f"{reference_stem(config, year=year)}{str(number).rjust(config.padding, '0')}"


def preview_document_number(
    settings: CompanySettings, kind: DocumentKind | str, *, today: Optional[date] = None
) -> str:
    """Live preview of the first reference of ``kind``; empty when no config exists."""
    try:
        config = get_numbering(settings, kind)
    except ValueError:
        logger.warning("Unknown document kind for preview: %s", kind)
        return ""
    if config is None:
        return ""
    today = today or date.today()
    return format_document_number(config, year=today.year)


def next_document_number(
    config: NumberingConfig, existing_ids: Iterable[Optional[str]], *, year: int
) -> str:
    """
    Allocate the next reference after the existing documents of one kind.

    The highest numeric suffix among references sharing this year's stem is
    incremented. When documents exist but none matches the stem (numbering
    changed, new year), the count of documents plus one is used. The result
    never goes below the configured start number.
    """
    stem = reference_stem(config, year=year)
    ids = [doc_id for doc_id in existing_ids if doc_id]

    numbers = []
    for doc_id in ids:
        if not doc_id.startswith(stem):
            continue
        suffix = doc_id[len(stem):]
        if suffix.isdigit():
            numbers.append(int(suffix))

    next_number = max(numbers, default=0) + 1
    if not numbers and ids:
        next_number = len(ids) + 1

    return format_document_number(config, year=year, sequence=max(next_number, config.start_number))


def next_entity_code(prefix: str, codes: Iterable[Optional[str]], width: int = 3) -> str:
    """Next client/product/supplier code, e.g. ``C001`` then ``C002``."""
    highest = 0
    for code in codes:
        if not code or not code.startswith(prefix):
            continue
        suffix = code[len(prefix):]
        if suffix.isdigit():
            highest = max(highest, int(suffix))
    return f"{prefix}{str(highest + 1).rjust(width, '0')}"
