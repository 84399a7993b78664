"""Price-pair layout scan: anchor on every price, then look around it for a name.

Last-resort strategy for rendered DOMs that match neither list/table nor
grid evidence. It overlaps with the grid scan on purpose; both may find the
same menu under different section names.
"""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup, NavigableString, Tag

from menuparser.extractors.text import PRICE_RE, has_price, node_text
from menuparser.items import ExtractionResult, MenuItem, MenuSection, build_result, items_raw_text

logger = logging.getLogger(__name__)

PRICE_PAIR_SECTION = "Detected Menu (price-pair heuristic)"

_ASCEND_LEVELS = 4
_MIN_NAME_CHARS = 2  # name candidates must be longer than this


def _price_nodes(soup: BeautifulSoup) -> list[Tag]:
    """Elements owning a direct text child that matches the price pattern."""
    nodes: list[Tag] = []
    for tag in soup.find_all(True):
        for child in tag.children:
            if isinstance(child, NavigableString) and has_price(str(child)):
                nodes.append(tag)
                break
    return nodes


def _grouping_container(node: Tag) -> Tag:
    container = node
    for _ in range(_ASCEND_LEVELS):
        parent = container.parent
        if not isinstance(parent, Tag) or isinstance(parent, BeautifulSoup):
            break
        container = parent
    return container


def _fragments(container: Tag) -> list[str]:
    """Distinct, stripped, non-empty texts of the container and its descendants."""
    seen: set[str] = set()
    out: list[str] = []
    for el in [container, *container.find_all(True)]:
        text = el.get_text().strip()
        if text and text not in seen:
            seen.add(text)
            out.append(text)
    return out


def _name_near(node: Tag, fragments: list[str]) -> str | None:
    for prev in node.previous_siblings:
        text = node_text(prev).strip()
        if text and not has_price(text) and len(text) > _MIN_NAME_CHARS:
            return text
    candidates = [f for f in fragments if not has_price(f) and len(f) > _MIN_NAME_CHARS]
    return max(candidates, key=len) if candidates else None


def extract_price_pair_menu(soup: BeautifulSoup, url: str) -> ExtractionResult | None:
    """Pair each price node with a nearby name.

    The price node's own match is preferred over the container's first
    price fragment, so items sharing a grouping container keep distinct prices.
    """
    items: list[MenuItem] = []
    seen: set[str] = set()

    for node in _price_nodes(soup):
        fragments = _fragments(_grouping_container(node))
        if not fragments:
            continue

        m = PRICE_RE.search(node.get_text())
        price = m.group().strip() if m else None
        if not price:
            first = next((f for f in fragments if has_price(f)), None)
            fm = PRICE_RE.search(first) if first else None
            price = fm.group().strip() if fm else None
        if not price:
            continue

        name = _name_near(node, fragments)
        if not name:
            continue

        key = f"{name}|{price}".lower()
        if key in seen:
            continue
        seen.add(key)
        items.append(MenuItem(name=name, price=price))

    if not items:
        return None
    section = MenuSection(name=PRICE_PAIR_SECTION, items=items)
    result = build_result(url, [section], items_raw_text(section.items))
    if result is not None:
        logger.debug("Price-pair heuristic yielded %d items on %s", len(items), url)
    return result
