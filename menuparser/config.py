"""Extractor configuration, optionally loaded from a YAML file.

YAML layout::

    default:
      max_page_bytes: 2000000
      enable_page_crawl: true
    domains:
      hilton.com:
        enable_headless_render: true
        render_timeout_ms: 60000

The ``default`` block applies everywhere; the longest ``domains`` key that
matches the URL host (exactly or as a parent domain) is merged on top.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import yaml

from menuparser import settings


@dataclass
class ExtractorConfig:
    """Runtime options for :class:`menuparser.pipeline.MenuExtractor`.

    Attributes:
        enable_page_crawl:      Crawl the candidate's homepage for menu links.
        enable_headless_render: Re-scan pages rendered by headless Chromium.
        headless:               Launch Chromium headless (``False`` for debugging).
        max_page_bytes:         Byte cap applied to HTML and PDF payloads.
        fetch_timeout:          Static fetch / download timeout in seconds.
        render_timeout_ms:      Render timeout for the candidate URL.
        link_render_timeout_ms: Render timeout for crawled homepage links.
        user_agent:             User-Agent for static requests and the browser.
    """

    enable_page_crawl: bool = settings.ENABLE_PAGE_CRAWL
    enable_headless_render: bool = settings.ENABLE_HEADLESS_RENDER
    headless: bool = settings.HEADLESS_MODE
    max_page_bytes: int = settings.MAX_PAGE_BYTES
    fetch_timeout: int = settings.FETCH_TIMEOUT
    render_timeout_ms: int = settings.RENDER_TIMEOUT_MS
    link_render_timeout_ms: int = settings.LINK_RENDER_TIMEOUT_MS
    user_agent: str = settings.USER_AGENT

    def __post_init__(self) -> None:
        if self.max_page_bytes <= 0:
            raise ValueError("max_page_bytes must be > 0")
        if self.fetch_timeout <= 0:
            raise ValueError("fetch_timeout must be > 0")

    def merged(self, overrides: dict[str, Any]) -> ExtractorConfig:
        """Return a copy with *overrides* applied; unknown keys raise ``ValueError``."""
        known = {f.name for f in dataclasses.fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
        return dataclasses.replace(self, **overrides)


def _domain_overrides(domains: Any, url: str) -> dict[str, Any]:
    netloc = urlparse(url).netloc.lower() if url else ""
    best_key = ""
    best_cfg: dict[str, Any] = {}
    if not netloc or not isinstance(domains, dict):
        return best_cfg
    for key, cfg in domains.items():
        if not isinstance(key, str) or not isinstance(cfg, dict):
            continue
        key_lower = key.lower()
        if (netloc == key_lower or netloc.endswith("." + key_lower)) and (
            len(key_lower) > len(best_key)
        ):
            best_key = key_lower
            best_cfg = cfg
    return best_cfg


def load_config(path: str | Path, url: str = "") -> ExtractorConfig:
    """Load *path* and return the config that applies to *url*."""
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    default = data.get("default") or {}
    if not isinstance(default, dict):
        raise ValueError(f"'default' in {path} must be a mapping")

    merged: dict[str, Any] = {}
    merged.update(default)
    merged.update(_domain_overrides(data.get("domains"), url))
    return ExtractorConfig().merged(merged)
