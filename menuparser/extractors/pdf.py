"""PDF menu extraction with PyMuPDF."""

from __future__ import annotations

import logging

import fitz  # PyMuPDF

from menuparser import settings
from menuparser.extractors.text import items_from_text
from menuparser.items import ExtractionResult, MenuSection, build_result

logger = logging.getLogger(__name__)

PDF_SECTION = "PDF Menu"


def pdf_text(data: bytes) -> str:
    """Concatenate the text of every page, one page after another."""
    with fitz.open(stream=data, filetype="pdf") as doc:
        return "\n".join(page.get_text() for page in doc)


def menu_from_pdf_text(text: str, url: str) -> ExtractionResult | None:
    section = MenuSection(name=PDF_SECTION, items=items_from_text(text))
    return build_result(url, [section], text[: settings.PDF_RAW_TEXT_LIMIT])


def extract_pdf_menu(
    data: bytes | None,
    url: str,
    max_bytes: int = settings.MAX_PAGE_BYTES,
) -> ExtractionResult | None:
    """Return a "PDF Menu" result for the document *data* downloaded from *url*.

    Empty or oversized payloads and unreadable PDFs yield ``None``.
    """
    if not data:
        return None
    if len(data) > max_bytes:
        logger.debug("PDF %s is %d bytes (cap %d) - skipping", url, len(data), max_bytes)
        return None
    try:
        text = pdf_text(data)
    except Exception as exc:
        logger.debug("Unreadable PDF %s: %s", url, exc)
        return None

    result = menu_from_pdf_text(text, url)
    if result is not None:
        logger.debug("PDF %s yielded %d items", url, len(result.menu.sections[0].items))
    return result
