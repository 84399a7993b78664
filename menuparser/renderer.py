"""Headless Chromium rendering via Playwright.

One browser process is kept per thread; every render call gets a fresh,
isolated browser context that is closed as soon as the HTML is captured.
"""

from __future__ import annotations

import contextlib
import logging
import threading
from typing import Any

from menuparser import settings

logger = logging.getLogger(__name__)


class RenderError(RuntimeError):
    """Raised when a page cannot be rendered."""

    def __init__(self, message: str, url: str = "") -> None:
        super().__init__(message)
        self.url = url


class _ThreadState:
    def __init__(self) -> None:
        self.playwright: Any = None
        self.browser: Any = None


class HeadlessRenderer:
    """Render pages with a per-thread Chromium and per-call contexts."""

    def __init__(
        self,
        headless: bool = settings.HEADLESS_MODE,
        user_agent: str = settings.USER_AGENT,
        wait_selectors: tuple[str, ...] = settings.RENDER_WAIT_SELECTORS,
    ) -> None:
        self._headless = headless
        self._user_agent = user_agent
        self._wait_selectors = wait_selectors
        self._local = threading.local()

    def _state(self) -> _ThreadState:
        state = getattr(self._local, "state", None)
        if state is None:
            state = _ThreadState()
            self._local.state = state
        return state

    def _ensure_browser(self, state: _ThreadState) -> Any:
        if state.browser is not None:
            return state.browser
        from playwright.sync_api import sync_playwright

        state.playwright = sync_playwright().start()
        state.browser = state.playwright.chromium.launch(
            headless=self._headless,
            args=list(settings.PLAYWRIGHT_LAUNCH_ARGS),
        )
        return state.browser

    def _render(self, url: str, timeout_ms: int) -> str:
        try:
            browser = self._ensure_browser(self._state())
        except ImportError as exc:
            raise RenderError(
                "rendering requires playwright: pip install playwright && "
                "playwright install chromium",
                url=url,
            ) from exc

        ctx = browser.new_context(
            user_agent=self._user_agent,
            ignore_https_errors=True,
            java_script_enabled=True,
            viewport={"width": 1920, "height": 1080},
        )
        try:
            page = ctx.new_page()
            page.goto(url, timeout=timeout_ms, wait_until="networkidle")

            # Menus behind client-side rendering usually surface one of these.
            if self._wait_selectors:
                try:
                    page.wait_for_selector(
                        ", ".join(self._wait_selectors),
                        timeout=settings.RENDER_SELECTOR_WAIT_MS,
                    )
                except Exception:
                    logger.debug("No menu selector appeared for %s - continuing", url)

            try:
                expanded: int = page.evaluate("""() => {
                    let count = 0;
                    document.querySelectorAll('[aria-expanded="false"]').forEach(el => {
                        try { el.click(); count++; } catch (e) {}
                    });
                    document.querySelectorAll('details:not([open])').forEach(el => {
                        el.setAttribute('open', '');
                        count++;
                    });
                    return count;
                }""")
                if expanded > 0:
                    logger.debug("Expanded %d collapsed sections for %s", expanded, url)
                    page.wait_for_timeout(1_000)
            except Exception as exc:
                logger.debug("Section expansion failed for %s: %s", url, exc)

            html: str = page.content()
        finally:
            with contextlib.suppress(Exception):
                ctx.close()

        if not html.strip():
            raise RenderError(f"Playwright returned empty page for {url}", url=url)
        return html

    def render(self, url: str, timeout_ms: int = settings.RENDER_TIMEOUT_MS) -> str | None:
        """Return the rendered DOM of *url*, or ``None`` on any failure."""
        try:
            return self._render(url, timeout_ms)
        except RenderError as exc:
            logger.debug("Render failed for %s: %s", url, exc)
        except Exception as exc:
            logger.debug("Playwright error rendering %s: %s", url, exc)
        return None

    def close(self) -> None:
        state = getattr(self._local, "state", None)
        if not state:
            return
        if state.browser is not None:
            with contextlib.suppress(Exception):
                state.browser.close()
        if state.playwright is not None:
            with contextlib.suppress(Exception):
                state.playwright.stop()
        state.browser = None
        state.playwright = None
