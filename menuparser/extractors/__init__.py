"""Extraction sub-package: deterministic, schema-agnostic menu strategies."""

from .grid import extract_grid_menu
from .jsonld import extract_jsonld_menu
from .links import discover_menu_links, discover_pdf_links, homepage_url
from .pdf import extract_pdf_menu
from .price_pair import extract_price_pair_menu
from .structural import scan_structural
from .text import PRICE_RE, items_from_text

__all__ = [
    "extract_jsonld_menu",
    "scan_structural",
    "extract_grid_menu",
    "extract_price_pair_menu",
    "extract_pdf_menu",
    "discover_menu_links",
    "discover_pdf_links",
    "homepage_url",
    "items_from_text",
    "PRICE_RE",
]
