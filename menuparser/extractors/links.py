"""Link discovery: in-page PDF menus and homepage links worth crawling."""

from __future__ import annotations

from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup, Tag

from menuparser.extractors.text import contains_menu_keyword

_SKIP_PREFIXES: tuple[str, ...] = ("#", "mailto:", "javascript:", "tel:", "data:", "sms:")


def make_absolute(base_url: str, href: str) -> str:
    """Resolve *href* against *base_url*; unparseable input is returned as-is."""
    try:
        return urljoin(base_url, href.strip())
    except ValueError:
        return href


def homepage_url(url: str) -> str:
    """``scheme://host[:port]`` of *url*, or ``""`` when it has no host."""
    parsed = urlparse(url.strip())
    if not parsed.scheme or not parsed.netloc:
        return ""
    return f"{parsed.scheme}://{parsed.netloc}"


def is_pdf_url(url: str) -> bool:
    return urlparse(url).path.lower().endswith(".pdf") or url.lower().endswith(".pdf")


def _anchors(soup: BeautifulSoup, base_url: str) -> list[tuple[str, str]]:
    """``(absolute_url, anchor_text)`` for every usable ``a[href]``, first occurrence wins."""
    out: list[tuple[str, str]] = []
    seen: set[str] = set()
    for a in soup.find_all("a", href=True):
        if not isinstance(a, Tag):
            continue
        href = str(a.get("href") or "").strip()
        if not href or href.lower().startswith(_SKIP_PREFIXES):
            continue
        absolute = make_absolute(base_url, href)
        scheme = urlparse(absolute).scheme
        if scheme and scheme not in ("http", "https"):
            continue
        if absolute in seen:
            continue
        seen.add(absolute)
        out.append((absolute, a.get_text().strip()))
    return out


def discover_pdf_links(soup: BeautifulSoup, page_url: str) -> list[str]:
    """PDF links on the page, links mentioning "menu" first (otherwise in page order)."""
    links = [u for u, _ in _anchors(soup, page_url) if ".pdf" in u.lower()]
    return sorted(links, key=lambda u: 0 if "menu" in u.lower() else 1)


def discover_menu_links(soup: BeautifulSoup, base_url: str) -> list[str]:
    """Links whose URL or anchor text carries a menu keyword, plus any ``.pdf`` link."""
    return [
        u for u, text in _anchors(soup, base_url)
        if contains_menu_keyword(u) or contains_menu_keyword(text) or is_pdf_url(u)
    ]
