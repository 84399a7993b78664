"""Grid/flex card-layout extraction for sites without semantic lists or tables.

Algorithm:
1. Collect candidate containers (grid/flex/menu/items/cards classes, or any
   block element with at least three element children).
2. Visit them longest-text first; skip small containers and those with
   fewer than two price matches.
3. In the first qualifying container, read each direct child as a card;
   when that yields fewer than three items, pair names and prices by a
   document-order walk instead.
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup, Tag

from menuparser.extractors.text import (
    HEADING_TAGS,
    PRICE_CLASS_TOKENS,
    PRICE_RE,
    SECTION_CLASS_TOKENS,
    NAME_CLASS_TOKENS,
    class_and_id,
    class_attr,
    element_children,
    has_name_class,
    has_price,
    is_likely_section_heading,
    node_text,
    preceding_heading_text,
    split_lines,
)
from menuparser.items import ExtractionResult, MenuItem, MenuSection, build_result, items_raw_text

logger = logging.getLogger(__name__)

_CONTAINER_CLASS_TOKENS: tuple[str, ...] = ("grid", "flex", "menu", "items", "cards")
_BLOCK_TAGS: tuple[str, ...] = ("div", "section", "article", "main")

_MIN_CONTAINER_CHARS = 100
_MIN_CHILDREN = 2
_MIN_GENERIC_CHILDREN = 3
_MIN_PRICE_MATCHES = 2
_MIN_ITEMS = 3
_MIN_NAME_CHARS = 3  # name candidates must be longer than this

_BOLD_TAGS: frozenset[str] = frozenset({"b", "strong"})
_NAME_TAGS: frozenset[str] = frozenset({*HEADING_TAGS, "h5", "h6", "strong", "b", "p", "span"})


# ---------------------------------------------------------------------------
# Class-token lookups
# ---------------------------------------------------------------------------

def _first_with_tokens(node: Tag, tokens: tuple[str, ...]) -> Tag | None:
    """First element in *node* (self included, document order) whose class/id has a token."""
    for el in [node, *node.find_all(True)]:
        combined = class_and_id(el)
        if any(t in combined for t in tokens):
            return el
    return None


def find_name_by_class(node: Tag | None) -> str | None:
    if not isinstance(node, Tag):
        return None
    el = _first_with_tokens(node, NAME_CLASS_TOKENS)
    if el is None:
        return None
    text = el.get_text().strip()
    if text and not has_price(text):
        return text
    return None


def find_price_by_class(node: Tag | None) -> str | None:
    if not isinstance(node, Tag):
        return None
    el = _first_with_tokens(node, PRICE_CLASS_TOKENS)
    if el is None:
        return None
    m = PRICE_RE.search(el.get_text())
    return m.group().strip() if m else None


def find_price_in_node(node: Tag | None) -> str | None:
    if not isinstance(node, Tag):
        return None
    m = PRICE_RE.search(node.get_text())
    return m.group().strip() if m else None


def find_best_text_candidate(node: Tag | None) -> str | None:
    """Prefer headings/bold and name-classed elements, then the longest non-price line."""
    if not isinstance(node, Tag):
        return None

    def score(el: Tag) -> int:
        bonus = 10 if (el.name in HEADING_TAGS or el.name in ("h5", "h6") or el.name in _BOLD_TAGS) else 0
        if has_name_class(el):
            bonus += 8
        return bonus + len(el.get_text())

    ranked = sorted([node, *node.find_all(True)], key=score, reverse=True)
    for el in ranked:
        text = el.get_text().strip()
        if text and not has_price(text) and not is_likely_section_heading(text):
            return text

    lines = sorted(split_lines(node.get_text()), key=len, reverse=True)
    for line in lines:
        if not has_price(line) and len(line) > _MIN_NAME_CHARS:
            return line
    return None


def _previous_element(tag: Tag) -> Tag | None:
    prev = tag.previous_sibling
    while prev is not None and not isinstance(prev, Tag):
        prev = prev.previous_sibling
    return prev


# ---------------------------------------------------------------------------
# Sub-strategy 1: repeating children
# ---------------------------------------------------------------------------

def items_from_repeating_children(container: Tag) -> list[MenuItem]:
    items: list[MenuItem] = []
    for child in element_children(container):
        price = find_price_by_class(child) or find_price_in_node(child)
        name = find_name_by_class(child) or find_best_text_candidate(child)

        if price and not name:
            prev = _previous_element(child)
            if prev is not None:
                name = find_best_text_candidate(prev)

        if not price and not name:
            continue

        if price and not name:
            name = next(
                (ln for ln in split_lines(child.get_text())
                 if not has_price(ln) and len(ln) > _MIN_NAME_CHARS),
                None,
            )
        if name and not price:
            parent = child.parent if isinstance(child.parent, Tag) else None
            price = find_price_in_node(child) or find_price_in_node(parent)

        if not name:
            continue
        items.append(MenuItem(name=name, price=price))
    return items


# ---------------------------------------------------------------------------
# Sub-strategy 2: traversal pairing
# ---------------------------------------------------------------------------

def _name_from_previous_siblings(node: Tag) -> str | None:
    for prev in node.previous_siblings:
        text = node_text(prev).strip()
        if text and not has_price(text) and len(text) > _MIN_NAME_CHARS:
            return text
    return None


def _name_from_ancestors(node: Tag) -> str | None:
    ancestors = [node, *node.parents]
    for anc in ancestors:
        if not isinstance(anc, Tag):
            continue
        for child in element_children(anc):
            text = child.get_text().strip()
            if text and not has_price(text) and len(text) > _MIN_NAME_CHARS:
                return text
    return None


def pair_by_traversal(container: Tag) -> list[MenuItem]:
    """Walk *container* in document order, pairing each price with the best pending name."""
    items: list[MenuItem] = []
    pending: str | None = None
    seen: set[str] = set()

    for node in [container, *container.find_all(True)]:
        text = node.get_text().strip()
        if len(text) <= 2:
            continue

        m = PRICE_RE.search(text)
        if m:
            price = m.group().strip()
            parent = node.parent if isinstance(node.parent, Tag) else None
            name = (
                find_name_by_class(node)
                or find_name_by_class(parent)
                or pending
                or _name_from_previous_siblings(node)
                or _name_from_ancestors(node)
            )
            if not name:
                continue
            key = f"{name}|{price}".lower()
            if key in seen:
                continue
            seen.add(key)
            items.append(MenuItem(name=name, price=price))
            pending = None
            continue

        if len(text) <= _MIN_NAME_CHARS or is_likely_section_heading(text):
            continue
        if has_name_class(node) or node.name in _NAME_TAGS:
            pending = text
        elif len(text) > len(pending or ""):
            pending = text

    return items


# ---------------------------------------------------------------------------
# Container selection
# ---------------------------------------------------------------------------

def _has_container_class(tag: Tag) -> bool:
    cls = class_attr(tag).lower()
    return any(t in cls for t in _CONTAINER_CLASS_TOKENS)


def find_candidate_containers(soup: BeautifulSoup) -> list[Tag]:
    """Union of class-token and many-children containers, longest text first."""
    order: dict[int, int] = {}
    by_id: dict[int, Tag] = {}
    for index, tag in enumerate(soup.find_all(True)):
        order[id(tag)] = index
        if _has_container_class(tag) or (
            tag.name in _BLOCK_TAGS and len(element_children(tag)) >= _MIN_GENERIC_CHILDREN
        ):
            by_id[id(tag)] = tag

    return sorted(
        by_id.values(),
        key=lambda t: (-len(t.get_text()), order[id(t)]),
    )


def container_section_name(container: Tag) -> str:
    aria = str(container.get("aria-label") or "").strip()
    if aria:
        return aria
    cls = class_attr(container).lower()
    for token in SECTION_CLASS_TOKENS:
        if token in cls:
            return token
    return preceding_heading_text(container) or "Menu"


def _qualifies(container: Tag) -> bool:
    text = container.get_text()
    if len(text) < _MIN_CONTAINER_CHARS:
        return False
    if len(element_children(container)) < _MIN_CHILDREN:
        return False
    return len(PRICE_RE.findall(text)) >= _MIN_PRICE_MATCHES


def extract_grid_menu(soup: BeautifulSoup, url: str) -> ExtractionResult | None:
    for container in find_candidate_containers(soup):
        if not _qualifies(container):
            continue

        items = items_from_repeating_children(container)
        method = "repeating_children"
        if len(items) < _MIN_ITEMS:
            items = pair_by_traversal(container)
            method = "traversal"
        if len(items) < _MIN_ITEMS:
            continue

        section = MenuSection(name=container_section_name(container), items=items)
        result = build_result(url, [section], items_raw_text(section.items))
        if result is not None:
            logger.debug(
                "Grid layout (%s) yielded %d items on %s", method, len(section.items), url,
            )
            return result
    return None
