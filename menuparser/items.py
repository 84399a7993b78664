"""Pydantic value objects for extracted menus."""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, Field, field_validator

# ---------------------------------------------------------------------------
# Menu schema
# ---------------------------------------------------------------------------

class MenuItem(BaseModel):
    """One dish/drink line.  ``price`` is the matched substring, never a number."""

    model_config = {"frozen": True}

    name: str | None = None
    description: str | None = None
    price: str | None = None
    currency: str | None = None
    url: str | None = None

    @field_validator("name", "description", "price", mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v

    @property
    def is_empty(self) -> bool:
        return not self.name and not self.price


class MenuSection(BaseModel):
    model_config = {"frozen": True}

    name: str | None = None
    items: list[MenuItem] = Field(default_factory=list)

    @field_validator("items")
    @classmethod
    def drop_empty_items(cls, v: list[MenuItem]) -> list[MenuItem]:
        return [item for item in v if not item.is_empty]


class StructuredMenu(BaseModel):
    """Canonical output schema: ordered sections of items."""

    model_config = {"frozen": True, "populate_by_name": True}

    source_url: str | None = Field(default=None, alias="sourceUrl")
    sections: list[MenuSection] = Field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)


class ExtractionResult(BaseModel):
    """Outcome of one extraction attempt.

    ``found`` implies ``menu`` holds at least one non-empty section; use
    :func:`build_result` to construct positive results.
    """

    model_config = {"frozen": True}

    found: bool = False
    source_url: str = ""
    raw_text: str = ""
    menu: StructuredMenu = Field(default_factory=StructuredMenu)

    @classmethod
    def not_found(cls) -> ExtractionResult:
        return cls()


def build_result(
    source_url: str,
    sections: list[MenuSection],
    raw_text: str = "",
) -> ExtractionResult | None:
    """Return a positive result, or ``None`` when every section is empty."""
    kept = [s for s in sections if s.items]
    if not kept:
        return None
    return ExtractionResult(
        found=True,
        source_url=source_url,
        raw_text=raw_text,
        menu=StructuredMenu(source_url=source_url, sections=kept),
    )


def items_raw_text(items: list[MenuItem], sep: str = "\n") -> str:
    """``"{name} {price}"`` per item, the raw-text form used by DOM strategies."""
    return sep.join(f"{i.name or ''} {i.price or ''}" for i in items)
