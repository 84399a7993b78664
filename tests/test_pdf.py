"""Tests for menuparser.extractors.pdf - PyMuPDF text extraction."""

from __future__ import annotations

from unittest.mock import patch

import fitz
import pytest

from menuparser.extractors.pdf import (
    PDF_SECTION,
    extract_pdf_menu,
    menu_from_pdf_text,
    pdf_text,
)

PDF_URL = "https://seaside.example.com/files/menu.pdf"


def _make_pdf(*pages: str) -> bytes:
    doc = fitz.open()
    for text in pages:
        page = doc.new_page()
        page.insert_text((72, 72), text)
    data = doc.tobytes()
    doc.close()
    return data


# ---------------------------------------------------------------------------
# Text level
# ---------------------------------------------------------------------------

class TestMenuFromPdfText:
    def test_soup_and_salad(self):
        result = menu_from_pdf_text("Soup - $5\nSalad - $6", PDF_URL)
        assert result is not None
        assert result.found
        assert result.source_url == PDF_URL
        section = result.menu.sections[0]
        assert section.name == PDF_SECTION
        assert [(i.name, i.price) for i in section.items] == [("Soup", "$5"), ("Salad", "$6")]

    def test_raw_text_truncated(self):
        text = "Soup - $5\n" + "x" * 5000
        result = menu_from_pdf_text(text, PDF_URL)
        assert len(result.raw_text) == 2000
        assert result.raw_text.startswith("Soup - $5")

    def test_no_items(self):
        assert menu_from_pdf_text("Terms and conditions apply", PDF_URL) is None


# ---------------------------------------------------------------------------
# Byte level
# ---------------------------------------------------------------------------

class TestExtractPdfMenu:
    def test_real_document(self):
        data = _make_pdf("Soup - $5", "Salad - $6")
        result = extract_pdf_menu(data, PDF_URL)
        assert result is not None
        names = [i.name for i in result.menu.sections[0].items]
        assert names == ["Soup", "Salad"]

    def test_pages_joined_in_order(self):
        data = _make_pdf("first page", "second page")
        text = pdf_text(data)
        assert text.index("first page") < text.index("second page")

    def test_empty_payload(self):
        assert extract_pdf_menu(b"", PDF_URL) is None
        assert extract_pdf_menu(None, PDF_URL) is None

    def test_oversized_payload(self):
        with patch("menuparser.extractors.pdf.pdf_text") as mock_text:
            assert extract_pdf_menu(b"x" * 11, PDF_URL, max_bytes=10) is None
        mock_text.assert_not_called()

    def test_unreadable_pdf(self):
        assert extract_pdf_menu(b"%PDF-1.4 this is not really a pdf", PDF_URL) is None

    @pytest.mark.parametrize("exc", [RuntimeError("boom"), ValueError("bad")])
    def test_parser_errors_are_not_found(self, exc):
        with patch("menuparser.extractors.pdf.pdf_text", side_effect=exc):
            assert extract_pdf_menu(b"%PDF-1.4", PDF_URL) is None
