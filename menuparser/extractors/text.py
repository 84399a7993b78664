"""Shared price/text helpers used by every extraction strategy.

All tables here are immutable module constants; nothing in this module holds
state between calls.
"""

from __future__ import annotations

import re
import unicodedata

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PageElement

from menuparser.items import MenuItem

# ---------------------------------------------------------------------------
# Keyword tables
# ---------------------------------------------------------------------------

MENU_KEYWORDS: tuple[str, ...] = (
    "menu",
    "menus",
    "dining",
    "restaurant",
    "breakfast",
    "lunch",
    "dinner",
    "room service",
    "à la carte",
    "à-la-carte",
)

NAME_CLASS_TOKENS: tuple[str, ...] = (
    "name", "title", "dish", "item", "menu-item", "menu-title", "dish-title", "menu-name",
)
PRICE_CLASS_TOKENS: tuple[str, ...] = (
    "price", "amount", "cost", "rate", "menu-price", "dish-price", "price-text", "text-right",
)
SECTION_CLASS_TOKENS: tuple[str, ...] = (
    "section", "heading", "title", "group", "category", "tab-panel",
)

HEADING_TAGS: tuple[str, ...] = ("h1", "h2", "h3", "h4")

# ---------------------------------------------------------------------------
# Price pattern
# ---------------------------------------------------------------------------

# Every Unicode "currency symbol" (category Sc) code point; all of them sit
# in the first two planes.
_CURRENCY_SYMBOLS = "".join(
    ch for ch in map(chr, range(0x20000)) if unicodedata.category(ch) == "Sc"
)

# Optional symbol, optional whitespace, digits, optional 1-2 digit fraction.
PRICE_RE = re.compile(rf"[{re.escape(_CURRENCY_SYMBOLS)}]?\s*\d+(?:[.,]\d{{1,2}})?")

_ITEM_SEPARATORS: tuple[str, ...] = (" - ", " — ", "–")
_DESCRIPTION_SPLIT_RE = re.compile(r" - | — ")
_LINE_SPLIT_RE = re.compile(r"[\r\n]+")

_MAX_NAME_CHARS = 60
_HEADING_NOISE_MAX_CHARS = 40


def has_price(text: str) -> bool:
    return PRICE_RE.search(text) is not None


def contains_menu_keyword(text: str) -> bool:
    lowered = text.lower()
    return any(k in lowered for k in MENU_KEYWORDS)


def is_likely_section_heading(text: str) -> bool:
    if not text or not text.strip():
        return False
    return contains_menu_keyword(text) or len(text) <= 2


def split_lines(text: str) -> list[str]:
    """Split *text* on line breaks into stripped, non-empty lines."""
    return [s for s in (ln.strip() for ln in _LINE_SPLIT_RE.split(text)) if s]


# ---------------------------------------------------------------------------
# Line splitting: name / description / price
# ---------------------------------------------------------------------------

def extract_price(line: str) -> str | None:
    m = PRICE_RE.search(line)
    return m.group().strip() if m else None


def extract_item_name(line: str) -> str:
    """Text before the first separator, else before the first price, else a prefix."""
    for sep in _ITEM_SEPARATORS:
        idx = line.find(sep)
        if idx >= 0:
            break
    if idx > 0:
        return line[:idx].strip()
    m = PRICE_RE.search(line)
    if m:
        before = line[: m.start()].strip()
        if before:
            return before
    return line if len(line) <= _MAX_NAME_CHARS else line[:_MAX_NAME_CHARS].strip()


def extract_description(line: str) -> str | None:
    parts = _DESCRIPTION_SPLIT_RE.split(line)
    if len(parts) < 2:
        return None
    if has_price(parts[-1]):
        desc = " - ".join(parts[1:-1]).strip()
    else:
        desc = " - ".join(parts[1:]).strip()
    return desc or None


def item_from_line(line: str) -> MenuItem:
    return MenuItem(
        name=extract_item_name(line),
        description=extract_description(line),
        price=extract_price(line),
    )


def items_from_text(text: str) -> list[MenuItem]:
    """Line-based extraction shared by the DOM fallbacks and the PDF strategy."""
    items: list[MenuItem] = []
    for line in split_lines(text):
        if len(line) <= 2:
            continue
        if contains_menu_keyword(line) and len(line) < _HEADING_NOISE_MAX_CHARS:
            continue
        if has_price(line) or "-" in line or "–" in line:
            item = item_from_line(line)
            if not item.is_empty:
                items.append(item)
    return items


# ---------------------------------------------------------------------------
# DOM helpers
# ---------------------------------------------------------------------------

def node_text(node: PageElement | None) -> str:
    """Raw text of *node* (tags and strings alike), entities decoded, unstripped."""
    if node is None:
        return ""
    if isinstance(node, Tag):
        return node.get_text()
    if isinstance(node, NavigableString):
        return str(node)
    return ""


def element_children(tag: Tag) -> list[Tag]:
    return [c for c in tag.children if isinstance(c, Tag)]


def class_and_id(tag: Tag) -> str:
    classes = tag.get("class") or []
    if isinstance(classes, str):
        classes = [classes]
    return (" ".join(str(c) for c in classes) + " " + str(tag.get("id") or "")).lower()


def class_attr(tag: Tag) -> str:
    classes = tag.get("class") or []
    if isinstance(classes, str):
        return classes
    return " ".join(str(c) for c in classes)


def has_name_class(tag: Tag) -> bool:
    combined = class_and_id(tag)
    return any(t in combined for t in NAME_CLASS_TOKENS)


def preceding_heading_text(tag: Tag) -> str | None:
    heading = tag.find_previous(list(HEADING_TAGS))
    if heading is None:
        return None
    text = heading.get_text().strip()
    return text or None


def guess_section_name(tag: Tag) -> str:
    """Nearest preceding heading, else the parent's class attribute, else ``"Menu"``."""
    heading = preceding_heading_text(tag)
    if heading:
        return heading
    parent = tag.parent
    if isinstance(parent, Tag) and not isinstance(parent, BeautifulSoup):
        cls = class_attr(parent)
        if cls:
            return cls
    return "Menu"


def document_text(soup: BeautifulSoup) -> str:
    return soup.get_text().strip()
