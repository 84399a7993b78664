"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


def _read_fixture(name: str) -> str:
    return (FIXTURES_DIR / name).read_text(encoding="utf-8")


@pytest.fixture
def jsonld_menu_html() -> str:
    return _read_fixture("jsonld_menu.html")


@pytest.fixture
def list_menu_html() -> str:
    return _read_fixture("list_menu.html")


@pytest.fixture
def grid_menu_html() -> str:
    return _read_fixture("grid_menu.html")


@pytest.fixture
def no_menu_html() -> str:
    return _read_fixture("no_menu.html")


@pytest.fixture
def pdf_link_html() -> str:
    return _read_fixture("pdf_link.html")


@pytest.fixture
def homepage_html() -> str:
    return _read_fixture("homepage.html")
