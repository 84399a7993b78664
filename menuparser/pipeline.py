"""menuparser.pipeline - the orchestrator.

For one candidate URL, stopping at the first success:

1. static fetch, then the static strategy chain and in-page PDF links
2. if rendering is enabled, render the page and run the rendered chain
3. if crawling is enabled, fetch the origin homepage and repeat 1-2 for
   every link mentioning a menu keyword (``.pdf`` links go straight to PDF
   extraction)

Every strategy is a plain function ``(soup, url) -> ExtractionResult | None``;
a chain is a tuple of them folded until one returns a result.

Usage::

    from menuparser.pipeline import MenuExtractor

    with MenuExtractor() as extractor:
        result = extractor.find_menu(["https://example.com/dining"])
        if result.found:
            print(result.menu.to_json(indent=2))
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from bs4 import BeautifulSoup

from menuparser.config import ExtractorConfig
from menuparser.extractors.grid import extract_grid_menu
from menuparser.extractors.links import (
    discover_menu_links,
    discover_pdf_links,
    homepage_url,
    is_pdf_url,
)
from menuparser.extractors.pdf import extract_pdf_menu
from menuparser.extractors.price_pair import extract_price_pair_menu
from menuparser.extractors.structural import scan_structural
from menuparser.extractors.text import MENU_KEYWORDS
from menuparser.fetcher import download_bytes, fetch_html
from menuparser.items import ExtractionResult
from menuparser.renderer import HeadlessRenderer

logger = logging.getLogger(__name__)

Strategy = Callable[[BeautifulSoup, str], "ExtractionResult | None"]
FetchFn = Callable[[str], "str | None"]
RenderFn = Callable[[str, int], "str | None"]
DownloadFn = Callable[[str], "bytes | None"]

# Static HTML: PDF links are tried after these, by the orchestrator.
STATIC_STRATEGIES: tuple[Strategy, ...] = (scan_structural, extract_grid_menu)

# Rendered DOM: the price-pair scan only runs on rendered pages.
RENDERED_STRATEGIES: tuple[Strategy, ...] = (
    scan_structural,
    extract_grid_menu,
    extract_price_pair_menu,
)

_FAST_REJECT_MARKERS: tuple[str, ...] = (*MENU_KEYWORDS, ".pdf", "application/ld+json")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def looks_promising(html: str) -> bool:
    """Cheap substring gate run before any parsing."""
    lowered = html.lower()
    return any(marker in lowered for marker in _FAST_REJECT_MARKERS)


def first_success(
    strategies: Iterable[Strategy],
    soup: BeautifulSoup,
    url: str,
) -> ExtractionResult | None:
    """Run *strategies* in order; the first positive result wins.

    A strategy that raises is logged and treated like one that found nothing.
    """
    for strategy in strategies:
        try:
            result = strategy(soup, url)
        except Exception as exc:
            logger.warning("%s failed on %s: %s", strategy.__name__, url, exc)
            continue
        if result is not None and result.found:
            logger.debug("%s matched %s", strategy.__name__, url)
            return result
    return None


def _parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------

class MenuExtractor:
    """Find and structure a restaurant menu behind candidate URLs.

    Args:
        config:   Runtime options; defaults to :class:`ExtractorConfig`.
        fetch:    ``fetch(url) -> html | None``.  Defaults to
                  :func:`menuparser.fetcher.fetch_html`.
        render:   ``render(url, timeout_ms) -> html | None``.  Passing one
                  enables rendering regardless of ``config``; otherwise a
                  :class:`HeadlessRenderer` is created when
                  ``config.enable_headless_render`` is set.
        download: ``download(url) -> bytes | None`` for PDFs.  Defaults to
                  :func:`menuparser.fetcher.download_bytes`.

    The payload byte cap is enforced on whatever the adapters return, so
    injected callables are held to it as well.
    """

    def __init__(
        self,
        config: ExtractorConfig | None = None,
        *,
        fetch: FetchFn | None = None,
        render: RenderFn | None = None,
        download: DownloadFn | None = None,
    ) -> None:
        self.config = config or ExtractorConfig()
        self._fetch: FetchFn = fetch or self._fetch_static
        self._download: DownloadFn = download or self._download_static
        self._renderer: HeadlessRenderer | None = None
        self._render: RenderFn | None = render
        if render is None and self.config.enable_headless_render:
            self._renderer = HeadlessRenderer(
                headless=self.config.headless,
                user_agent=self.config.user_agent,
            )
            self._render = self._renderer.render

    # -- context management ------------------------------------------------

    def close(self) -> None:
        if self._renderer is not None:
            self._renderer.close()

    def __enter__(self) -> MenuExtractor:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    # -- default network adapters -------------------------------------------

    def _fetch_static(self, url: str) -> str | None:
        return fetch_html(
            url,
            timeout=self.config.fetch_timeout,
            max_bytes=self.config.max_page_bytes,
            user_agent=self.config.user_agent,
        )

    def _download_static(self, url: str) -> bytes | None:
        return download_bytes(
            url,
            timeout=self.config.fetch_timeout,
            max_bytes=self.config.max_page_bytes,
            user_agent=self.config.user_agent,
        )

    def _get_html(self, url: str) -> str | None:
        try:
            html = self._fetch(url)
        except Exception as exc:
            logger.debug("Fetch failed for %s: %s", url, exc)
            return None
        if not html:
            return None
        if len(html.encode("utf-8", errors="replace")) > self.config.max_page_bytes:
            logger.debug("Page %s exceeds %d bytes - skipping", url, self.config.max_page_bytes)
            return None
        return html

    def _get_rendered(self, url: str, timeout_ms: int) -> str | None:
        if self._render is None:
            return None
        try:
            html = self._render(url, timeout_ms)
        except Exception as exc:
            logger.debug("Render failed for %s: %s", url, exc)
            return None
        if not html:
            return None
        if len(html.encode("utf-8", errors="replace")) > self.config.max_page_bytes:
            logger.debug("Rendered %s exceeds %d bytes - skipping", url, self.config.max_page_bytes)
            return None
        return html

    # -- steps ----------------------------------------------------------------

    def _extract_pdf(self, pdf_url: str) -> ExtractionResult | None:
        try:
            data = self._download(pdf_url)
        except Exception as exc:
            logger.debug("PDF download failed for %s: %s", pdf_url, exc)
            return None
        return extract_pdf_menu(data, pdf_url, max_bytes=self.config.max_page_bytes)

    def _fetch_and_scan(self, url: str) -> ExtractionResult | None:
        html = self._get_html(url)
        if html is None:
            return None
        if not looks_promising(html):
            logger.debug("No menu markers in %s - skipping parse", url)
            return None

        soup = _parse_html(html)
        result = first_success(STATIC_STRATEGIES, soup, url)
        if result is not None:
            return result

        for pdf_url in discover_pdf_links(soup, url):
            result = self._extract_pdf(pdf_url)
            if result is not None:
                return result
        return None

    def _render_and_scan(self, url: str, timeout_ms: int) -> ExtractionResult | None:
        html = self._get_rendered(url, timeout_ms)
        if html is None:
            return None
        return first_success(RENDERED_STRATEGIES, _parse_html(html), url)

    def _scan_url(self, url: str, timeout_ms: int) -> ExtractionResult | None:
        return self._fetch_and_scan(url) or self._render_and_scan(url, timeout_ms)

    def _crawl_homepage(self, url: str) -> ExtractionResult | None:
        home = homepage_url(url)
        if not home:
            return None
        html = self._get_html(home)
        if html is None:
            return None

        links = discover_menu_links(_parse_html(html), home)
        logger.debug("Homepage %s offers %d menu link(s)", home, len(links))
        for link in links:
            if link == url:
                continue
            if is_pdf_url(link):
                result = self._extract_pdf(link)
            else:
                result = self._scan_url(link, self.config.link_render_timeout_ms)
            if result is not None:
                return result
        return None

    # -- public API ----------------------------------------------------------

    def try_extract_menu(self, url: str) -> ExtractionResult:
        """Run the full fallback chain for one candidate URL.  Never raises."""
        try:
            result = self._scan_url(url, self.config.render_timeout_ms)
            if result is None and self.config.enable_page_crawl:
                result = self._crawl_homepage(url)
        except Exception as exc:
            logger.warning("Menu extraction failed for %s: %s", url, exc)
            return ExtractionResult.not_found()

        if result is None:
            return ExtractionResult.not_found()
        logger.info(
            "Menu found for %s at %s (%d section(s))",
            url, result.source_url, len(result.menu.sections),
        )
        return result

    def find_menu(self, candidates: Iterable[str]) -> ExtractionResult:
        """Try *candidates* in order and return the first menu found."""
        for url in candidates:
            result = self.try_extract_menu(url)
            if result.found:
                return result
        return ExtractionResult.not_found()

    def parse(self, html: str, url: str = "") -> ExtractionResult:
        """Run the rendered-page chain over pre-fetched HTML; no network requests."""
        try:
            result = first_success(RENDERED_STRATEGIES, _parse_html(html), url)
        except Exception as exc:
            logger.warning("Menu parse failed for %s: %s", url, exc)
            return ExtractionResult.not_found()
        return result or ExtractionResult.not_found()


def extract_menu(url: str, *, config: ExtractorConfig | None = None, **options: Any) -> ExtractionResult:
    """One-call API: build an extractor and run it on *url*.

    Keyword *options* override fields of *config* (e.g.
    ``enable_headless_render=True``); unknown names raise ``ValueError``.
    """
    cfg = (config or ExtractorConfig()).merged(options)
    with MenuExtractor(cfg) as extractor:
        return extractor.try_extract_menu(url)
