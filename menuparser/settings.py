"""Default settings for menuparser.

Every value here can be overridden per extractor through
:class:`menuparser.config.ExtractorConfig` or a YAML config file.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Network
# ---------------------------------------------------------------------------
FETCH_TIMEOUT = 30  # seconds

# Payloads above this size are rejected before parsing (HTML and PDF alike).
MAX_PAGE_BYTES = 2_000_000

USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/122.0.0.0 Safari/537.36"
)

# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------
ENABLE_PAGE_CRAWL = True
ENABLE_HEADLESS_RENDER = False

# ---------------------------------------------------------------------------
# Headless rendering (Playwright)
# ---------------------------------------------------------------------------
HEADLESS_MODE = True
RENDER_TIMEOUT_MS = 45_000        # candidate URL
LINK_RENDER_TIMEOUT_MS = 30_000   # links discovered on the homepage
RENDER_SELECTOR_WAIT_MS = 5_000

PLAYWRIGHT_LAUNCH_ARGS: tuple[str, ...] = (
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
)

# Selectors hinting that a dynamic menu has been rendered.
RENDER_WAIT_SELECTORS: tuple[str, ...] = (
    "[data-testid*='menu']",
    "[data-testid*='menu-item']",
    ".menu",
    ".menus",
    ".dining",
    ".menu-item",
    ".tab-panel",
    ".price",
    ".menu-section",
    ".grid",
    ".card",
)

# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------
PDF_RAW_TEXT_LIMIT = 2000
RAW_TEXT_MAX_ITEMS = 500

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"
