"""Tests for menuparser.items - menu value objects and serialization."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from menuparser.items import (
    ExtractionResult,
    MenuItem,
    MenuSection,
    StructuredMenu,
    build_result,
    items_raw_text,
)

URL = "https://seaside.example.com/menu"


class TestMenuItem:
    def test_blank_strings_become_none(self):
        item = MenuItem(name="  ", price=" $5 ")
        assert item.name is None
        assert item.price == "$5"

    def test_is_empty(self):
        assert MenuItem(description="only text").is_empty
        assert not MenuItem(price="$5").is_empty
        assert not MenuItem(name="Soup").is_empty

    def test_frozen(self):
        item = MenuItem(name="Soup")
        with pytest.raises(ValidationError):
            item.name = "Salad"


class TestMenuSection:
    def test_empty_items_dropped_in_order(self):
        section = MenuSection(
            name="Starters",
            items=[MenuItem(name="B"), MenuItem(description="x"), MenuItem(name="A")],
        )
        assert [i.name for i in section.items] == ["B", "A"]


class TestStructuredMenu:
    def test_serialized_schema(self):
        menu = StructuredMenu(
            source_url=URL,
            sections=[MenuSection(name=None, items=[MenuItem(name="Soup", price="$5")])],
        )
        data = json.loads(menu.to_json())
        assert data == {
            "sourceUrl": URL,
            "sections": [{
                "name": None,
                "items": [{
                    "name": "Soup",
                    "description": None,
                    "price": "$5",
                    "currency": None,
                    "url": None,
                }],
            }],
        }

    def test_accepts_alias(self):
        assert StructuredMenu(sourceUrl=URL).source_url == URL

    def test_non_ascii_kept(self):
        menu = StructuredMenu(sections=[MenuSection(items=[MenuItem(name="Crème", price="€4")])])
        assert "€4" in menu.to_json()


class TestBuildResult:
    def test_positive_result(self):
        result = build_result(URL, [MenuSection(name="A", items=[MenuItem(name="Soup")])], "Soup")
        assert result.found
        assert result.source_url == URL
        assert result.menu.source_url == URL
        assert result.raw_text == "Soup"

    def test_empty_sections_removed(self):
        result = build_result(
            URL,
            [MenuSection(name="Empty"), MenuSection(name="Full", items=[MenuItem(name="Tea")])],
        )
        assert [s.name for s in result.menu.sections] == ["Full"]

    def test_none_when_nothing_left(self):
        assert build_result(URL, [MenuSection(name="Empty")]) is None
        assert build_result(URL, []) is None

    def test_not_found(self):
        result = ExtractionResult.not_found()
        assert result.found is False
        assert result.menu.sections == []

    def test_items_raw_text(self):
        items = [MenuItem(name="Soup", price="$5"), MenuItem(name="Bread")]
        assert items_raw_text(items) == "Soup $5\nBread "
