"""menuparser - find restaurant menus on the web and return them as structured data.

Quick single-URL usage::

    from menuparser import extract_menu

    result = extract_menu("https://example.com/dining")
    if result.found:
        print(result.menu.to_json(indent=2))

Several ranked candidates, rendered with headless Chromium::

    from menuparser import ExtractorConfig, MenuExtractor

    config = ExtractorConfig(enable_headless_render=True)
    with MenuExtractor(config) as extractor:
        result = extractor.find_menu(candidate_urls)

Pre-fetched HTML, no network::

    from menuparser import MenuExtractor

    result = MenuExtractor().parse(html, url="https://example.com/menu")
"""

from menuparser.config import ExtractorConfig, load_config
from menuparser.fetcher import FetchError
from menuparser.items import ExtractionResult, MenuItem, MenuSection, StructuredMenu
from menuparser.pipeline import MenuExtractor, extract_menu

__version__ = "0.1.0"
__all__ = [
    "ExtractionResult",
    "ExtractorConfig",
    "FetchError",
    "MenuExtractor",
    "MenuItem",
    "MenuSection",
    "StructuredMenu",
    "extract_menu",
    "load_config",
]
