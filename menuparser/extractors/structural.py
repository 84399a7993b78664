"""Structural HTML scan: JSON-LD, then keyword/tag heuristics, then the body.

Menu-node selection priority (first non-empty wins):
    1. elements whose id/class mentions "menu" or "restaurant"
    2. the list/table right after an ``h1``-``h4`` heading with a menu keyword
    3. any list/table with prices spanning several lines
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup, Tag

from menuparser import settings
from menuparser.extractors.jsonld import extract_jsonld_menu
from menuparser.extractors.text import (
    HEADING_TAGS,
    class_and_id,
    contains_menu_keyword,
    guess_section_name,
    has_price,
    item_from_line,
    items_from_text,
)
from menuparser.items import ExtractionResult, MenuItem, MenuSection, build_result, items_raw_text

logger = logging.getLogger(__name__)

_NODE_KEYWORDS: tuple[str, ...] = ("menu", "restaurant")
_LIST_TAGS: tuple[str, ...] = ("ul", "ol", "table")

PAGE_CONTENT_SECTION = "Page content"


# ---------------------------------------------------------------------------
# Menu-node selection
# ---------------------------------------------------------------------------

def _has_menu_attr(tag: Tag) -> bool:
    combined = class_and_id(tag)
    return any(k in combined for k in _NODE_KEYWORDS)


def _next_element_sibling(tag: Tag) -> Tag | None:
    sibling = tag.next_sibling
    while sibling is not None and not isinstance(sibling, Tag):
        sibling = sibling.next_sibling
    return sibling


def _nodes_after_headings(soup: BeautifulSoup) -> list[Tag]:
    nodes: list[Tag] = []
    for heading in soup.find_all(list(HEADING_TAGS)):
        text = heading.get_text().strip()
        if not text or not contains_menu_keyword(text):
            continue
        sibling = _next_element_sibling(heading)
        if sibling is None:
            continue
        if sibling.name in _LIST_TAGS or sibling.find("li") is not None:
            nodes.append(sibling)
    return nodes


def _priced_lists(soup: BeautifulSoup) -> list[Tag]:
    nodes: list[Tag] = []
    for node in soup.find_all(list(_LIST_TAGS)):
        text = node.get_text()
        if has_price(text) and len(text.replace("\r", "\n").split("\n")) > 1:
            nodes.append(node)
    return nodes


def find_menu_nodes(soup: BeautifulSoup) -> list[Tag]:
    nodes = [t for t in soup.find_all(True) if _has_menu_attr(t)]
    if nodes:
        return nodes
    nodes = _nodes_after_headings(soup)
    if nodes:
        return nodes
    return _priced_lists(soup)


# ---------------------------------------------------------------------------
# Per-node item extraction
# ---------------------------------------------------------------------------

def _table_items(table: Tag) -> list[MenuItem]:
    items: list[MenuItem] = []
    for tr in table.find_all("tr"):
        cells = [c.get_text().strip() for c in tr.find_all(["td", "th"])]
        cells = [c for c in cells if c]
        if not cells:
            continue
        items.append(
            MenuItem(
                name=cells[0],
                price=cells[1] if len(cells) >= 2 else None,
                description=" ".join(cells[2:]) if len(cells) > 2 else None,
            ),
        )
    return items


def items_from_node(node: Tag) -> list[MenuItem]:
    """List items, else table rows, else line-based text extraction."""
    list_items = node.find_all("li")
    if list_items:
        items: list[MenuItem] = []
        for li in list_items:
            text = li.get_text().strip()
            if text:
                items.append(item_from_line(text))
        return items
    if node.name == "table":
        return _table_items(node)
    return items_from_text(node.get_text())


# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

def _result_from_nodes(nodes: list[Tag], url: str) -> ExtractionResult | None:
    sections: list[MenuSection] = []
    for node in nodes:
        section = MenuSection(name=guess_section_name(node), items=items_from_node(node))
        if section.items:
            sections.append(section)

    all_items = [i for s in sections for i in s.items][: settings.RAW_TEXT_MAX_ITEMS]
    result = build_result(url, sections, items_raw_text(all_items, sep="\n\n"))
    if result is not None:
        logger.debug("Tag heuristic found %d section(s) on %s", len(sections), url)
    return result


def extract_tagged_menu(soup: BeautifulSoup, url: str) -> ExtractionResult | None:
    """Keyword/tag heuristic over menu-like nodes."""
    nodes = find_menu_nodes(soup)
    return _result_from_nodes(nodes, url) if nodes else None


def extract_body_text_menu(soup: BeautifulSoup, url: str) -> ExtractionResult | None:
    """Whole-body fallback: one "Page content" section from the body's lines."""
    body = soup.body
    if body is None:
        return None
    text = body.get_text()
    if not contains_menu_keyword(text):
        return None
    section = MenuSection(name=PAGE_CONTENT_SECTION, items=items_from_text(text))
    return build_result(url, [section], text.strip())


def scan_structural(soup: BeautifulSoup, url: str) -> ExtractionResult | None:
    """JSON-LD, then tag heuristics, then body text.

    The body fallback only runs when no menu node was selected at all.
    """
    result = extract_jsonld_menu(soup, url)
    if result is not None:
        return result
    nodes = find_menu_nodes(soup)
    if nodes:
        return _result_from_nodes(nodes, url)
    return extract_body_text_menu(soup, url)
