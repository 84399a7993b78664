"""JSON-LD menu extraction (schema.org ``Menu`` / ``MenuSection`` / ``MenuItem``).

The object graph is walked with a visited set and a depth limit, so a
self-referencing or hostile block cannot recurse forever.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from bs4 import BeautifulSoup

from menuparser.extractors.text import document_text
from menuparser.items import ExtractionResult, MenuItem, MenuSection, build_result

logger = logging.getLogger(__name__)

_MAX_DEPTH = 64


# ---------------------------------------------------------------------------
# Node classification
# ---------------------------------------------------------------------------

def _type_names(node: dict) -> list[str]:
    raw = node.get("@type")
    if raw is None:
        raw = node.get("type")
    if isinstance(raw, str):
        return [raw.lower()]
    if isinstance(raw, list):
        return [str(t).lower() for t in raw if isinstance(t, str)]
    return []


def _is_item(types: list[str]) -> bool:
    return any("menuitem" in t for t in types)


def _is_section(types: list[str]) -> bool:
    return any("menusection" in t or t == "menu" for t in types)


def _is_restaurant(types: list[str]) -> bool:
    return "restaurant" in types


def _scalar(val: Any) -> str | None:
    """Strings pass through; numbers are rendered verbatim (``12.5`` -> ``"12.5"``)."""
    if isinstance(val, str):
        return val
    if isinstance(val, bool):
        return None
    if isinstance(val, (int, float)):
        return str(val)
    return None


# ---------------------------------------------------------------------------
# Item / section parsing
# ---------------------------------------------------------------------------

def _price_from_offers(offers: Any) -> tuple[str | None, str | None]:
    """Return ``(price, currency)`` from an ``offers`` value."""
    if isinstance(offers, dict):
        price = _scalar(offers.get("price"))
        if price is not None:
            return price, _scalar(offers.get("priceCurrency"))
        spec = offers.get("priceSpecification")
        if isinstance(spec, dict):
            price = _scalar(spec.get("price"))
            if price is not None:
                return price, _scalar(spec.get("priceCurrency") or offers.get("priceCurrency"))
    elif isinstance(offers, list):
        for offer in offers:
            if isinstance(offer, dict):
                price = _scalar(offer.get("price"))
                if price is not None:
                    return price, _scalar(offer.get("priceCurrency"))
    return None, None


def parse_menu_item(node: dict) -> MenuItem:
    name = _scalar(node.get("name")) or _scalar(node.get("headline"))
    price, currency = _price_from_offers(node.get("offers"))
    return MenuItem(
        name=name,
        description=_scalar(node.get("description")),
        price=price,
        currency=currency,
        url=_scalar(node.get("url")),
    )


def _collect_items(value: Any, items: list[MenuItem]) -> None:
    if isinstance(value, dict):
        items.append(parse_menu_item(value))
    elif isinstance(value, list):
        for entry in value:
            if isinstance(entry, dict):
                items.append(parse_menu_item(entry))


def parse_menu_section(node: dict, depth: int = 0) -> MenuSection | None:
    """Build a section from ``hasMenuItem``/``hasMenu``; nested sections are flattened."""
    if depth > _MAX_DEPTH:
        return None
    items: list[MenuItem] = []
    _collect_items(node.get("hasMenuItem"), items)
    _collect_items(node.get("hasMenu"), items)

    nested = node.get("hasMenuSection")
    if isinstance(nested, dict):
        nested = [nested]
    if isinstance(nested, list):
        for child in nested:
            if isinstance(child, dict):
                sub = parse_menu_section(child, depth + 1)
                if sub is not None:
                    items.extend(sub.items)

    section = MenuSection(name=_scalar(node.get("name")), items=items)
    return section if section.items else None


# ---------------------------------------------------------------------------
# Graph walk
# ---------------------------------------------------------------------------

def menu_from_jsonld(data: Any) -> list[MenuSection]:
    """Walk one parsed JSON-LD value and return the menu sections it describes.

    Explicit ``Menu``/``MenuSection`` nodes win; loose ``MenuItem`` nodes are
    gathered into a single ``"Menu"`` section only when no section exists.
    """
    sections: list[MenuSection] = []
    loose_items: list[MenuItem] = []
    visited: set[int] = set()

    def walk(value: Any, depth: int) -> None:
        if depth > _MAX_DEPTH:
            return
        if isinstance(value, list):
            for entry in value:
                walk(entry, depth + 1)
            return
        if not isinstance(value, dict) or id(value) in visited:
            return
        visited.add(id(value))

        types = _type_names(value)
        if _is_item(types):
            loose_items.append(parse_menu_item(value))
            return
        if _is_section(types):
            section = parse_menu_section(value)
            if section is not None:
                sections.append(section)
            return
        if _is_restaurant(types) and "hasMenu" in value:
            walk(value["hasMenu"], depth + 1)

        for child in value.values():
            if isinstance(child, (dict, list)):
                walk(child, depth + 1)

    walk(data, 0)

    if sections:
        return sections
    loose = MenuSection(name="Menu", items=loose_items)
    return [loose] if loose.items else []


def extract_jsonld_menu(soup: BeautifulSoup, url: str) -> ExtractionResult | None:
    """Return a result from the first ``application/ld+json`` block holding a menu."""
    for script in soup.find_all("script", type="application/ld+json"):
        raw = (script.string or script.get_text() or "").strip()
        if not raw:
            continue
        try:
            data = json.loads(raw)
        except (RecursionError, TypeError, ValueError) as exc:
            logger.debug("Skipping malformed JSON-LD block on %s: %s", url, exc)
            continue

        sections = menu_from_jsonld(data)
        result = build_result(url, sections, document_text(soup))
        if result is not None:
            logger.debug("JSON-LD menu with %d section(s) on %s", len(sections), url)
            return result
    return None
