"""Tests for menuparser.extractors.links - PDF and homepage link discovery."""

from __future__ import annotations

from bs4 import BeautifulSoup

from menuparser.extractors.links import (
    discover_menu_links,
    discover_pdf_links,
    homepage_url,
    is_pdf_url,
    make_absolute,
)

HOME = "https://seaside.example.com"


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "lxml")


class TestHomepageUrl:
    def test_keeps_scheme_host_and_port(self):
        assert homepage_url("https://a.example.com:8080/x/y?z=1") == "https://a.example.com:8080"

    def test_not_a_url(self):
        assert homepage_url("not a url") == ""


class TestMakeAbsolute:
    def test_relative(self):
        assert make_absolute("https://x.example/a/b", "../menu") == "https://x.example/menu"

    def test_absolute_untouched(self):
        assert make_absolute("https://x.example/", "https://y.example/m") == "https://y.example/m"

    def test_is_pdf_url(self):
        assert is_pdf_url("https://x.example/Menu.PDF")
        assert is_pdf_url("https://x.example/menu.pdf?v=2")
        assert not is_pdf_url("https://x.example/menu")


class TestDiscoverPdfLinks:
    def test_menu_named_first_and_deduplicated(self, pdf_link_html):
        links = discover_pdf_links(_soup(pdf_link_html), HOME + "/eat")
        assert links == [
            HOME + "/files/menu.pdf",
            HOME + "/files/wine-list.pdf",
        ]

    def test_stable_order_otherwise(self):
        soup = _soup('<a href="b.pdf">b</a><a href="a.pdf">a</a>')
        assert discover_pdf_links(soup, HOME + "/") == [HOME + "/b.pdf", HOME + "/a.pdf"]

    def test_none(self):
        assert discover_pdf_links(_soup('<a href="/about">About</a>'), HOME) == []


class TestDiscoverMenuLinks:
    def test_homepage_fixture(self, homepage_html):
        links = discover_menu_links(_soup(homepage_html), HOME)
        assert links == [
            HOME + "/eat",
            HOME + "/files/room-service.pdf",
        ]

    def test_keyword_in_url(self):
        soup = _soup('<a href="/restaurant/la-mer">La Mer</a>')
        assert discover_menu_links(soup, HOME) == [HOME + "/restaurant/la-mer"]

    def test_skips_non_http_schemes(self):
        soup = _soup(
            '<a href="javascript:openMenu()">Menu</a>'
            '<a href="ftp://files.example.com/menu.txt">Menu</a>',
        )
        assert discover_menu_links(soup, HOME) == []
