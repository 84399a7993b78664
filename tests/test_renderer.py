"""Tests for menuparser.renderer - Playwright is mocked throughout."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

from menuparser.renderer import HeadlessRenderer

URL = "https://seaside.example.com/dining"


def _mock_playwright(html: str = "<html><body>menu</body></html>"):
    page = MagicMock()
    page.content.return_value = html
    page.evaluate.return_value = 0
    ctx = MagicMock()
    ctx.new_page.return_value = page
    browser = MagicMock()
    browser.new_context.return_value = ctx
    pw = MagicMock()
    pw.chromium.launch.return_value = browser
    factory = MagicMock()
    factory.return_value.start.return_value = pw
    return factory, pw, browser, ctx, page


class TestHeadlessRenderer:
    def test_returns_rendered_html(self):
        factory, _, browser, ctx, page = _mock_playwright()
        with patch("playwright.sync_api.sync_playwright", factory):
            html = HeadlessRenderer(user_agent="menu-bot/1.0").render(URL, timeout_ms=10_000)
        assert html == "<html><body>menu</body></html>"
        page.goto.assert_called_once_with(URL, timeout=10_000, wait_until="networkidle")
        assert browser.new_context.call_args.kwargs["user_agent"] == "menu-bot/1.0"
        ctx.close.assert_called_once()

    def test_browser_reused_with_fresh_contexts(self):
        factory, pw, browser, _, _ = _mock_playwright()
        renderer = HeadlessRenderer()
        with patch("playwright.sync_api.sync_playwright", factory):
            renderer.render(URL)
            renderer.render(URL)
        pw.chromium.launch.assert_called_once()
        assert browser.new_context.call_count == 2

    def test_missing_selector_tolerated(self):
        factory, _, _, _, page = _mock_playwright()
        page.wait_for_selector.side_effect = TimeoutError("no selector")
        with patch("playwright.sync_api.sync_playwright", factory):
            assert HeadlessRenderer().render(URL) is not None

    def test_expands_collapsed_sections(self):
        factory, _, _, _, page = _mock_playwright()
        page.evaluate.return_value = 3
        with patch("playwright.sync_api.sync_playwright", factory):
            HeadlessRenderer().render(URL)
        page.wait_for_timeout.assert_called_once_with(1_000)

    def test_navigation_failure_returns_none(self):
        factory, _, _, ctx, page = _mock_playwright()
        page.goto.side_effect = RuntimeError("net::ERR_NAME_NOT_RESOLVED")
        with patch("playwright.sync_api.sync_playwright", factory):
            assert HeadlessRenderer().render(URL) is None
        ctx.close.assert_called_once()

    def test_empty_page_returns_none(self):
        factory, *_ = _mock_playwright(html="   ")
        with patch("playwright.sync_api.sync_playwright", factory):
            assert HeadlessRenderer().render(URL) is None

    def test_close_shuts_down_browser(self):
        factory, pw, browser, _, _ = _mock_playwright()
        renderer = HeadlessRenderer()
        with patch("playwright.sync_api.sync_playwright", factory):
            renderer.render(URL)
        renderer.close()
        browser.close.assert_called_once()
        pw.stop.assert_called_once()

    def test_close_without_render(self):
        HeadlessRenderer().close()
