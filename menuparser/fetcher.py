"""menuparser.fetcher - static HTTP fetch and byte download.

Uses only the stdlib (``urllib``).  Both functions enforce a byte cap
*before* anything is decoded or parsed and make exactly one attempt per URL:
a failure is terminal for that URL and the caller moves on.

Usage::

    from menuparser.fetcher import FetchError, download_bytes, fetch_html

    try:
        html = fetch_html("https://example.com/dining")
    except FetchError as exc:
        print(exc.url, exc.status)
"""

from __future__ import annotations

import gzip
import http.client
import logging
import urllib.error
import urllib.request
import zlib
from urllib.parse import urlparse

from menuparser import settings

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Public exception
# ---------------------------------------------------------------------------

class FetchError(RuntimeError):
    """Raised when a URL cannot be fetched.

    Attributes:
        url    -- the URL that failed
        status -- HTTP status code (0 if no response was received)
    """

    def __init__(self, message: str, url: str = "", status: int = 0) -> None:
        super().__init__(message)
        self.url = url
        self.status = status


def _decompress(raw: bytes, headers: object | None, url: str) -> bytes:
    encoding = ""
    if headers is not None:
        try:
            encoding = str(headers.get("Content-Encoding", "")).lower().strip()
        except Exception:
            encoding = ""
    try:
        if encoding == "gzip":
            return gzip.decompress(raw)
        if encoding in ("deflate", "zlib"):
            return zlib.decompress(raw)
    except (OSError, zlib.error) as exc:
        raise FetchError(f"{encoding} decompression failed for {url}: {exc}", url=url) from exc
    if encoding == "br":
        raise FetchError(f"Brotli-encoded response from {url} is not supported", url=url)
    return raw


def _decode_body(raw: bytes, headers: object | None) -> str:
    charset = "utf-8"
    if headers is not None:
        try:
            charset = headers.get_content_charset("utf-8") or "utf-8"
        except Exception:
            charset = "utf-8"
    try:
        return raw.decode(charset, errors="replace")
    except (LookupError, ValueError):
        return raw.decode("utf-8", errors="replace")


def _read_capped(url: str, *, timeout: int, max_bytes: int, user_agent: str, accept: str) -> tuple[bytes, object]:
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        raise FetchError(f"Unsupported URL scheme: {parsed.scheme!r}", url=url)

    try:
        req = urllib.request.Request(
            url,
            headers={
                "User-Agent": user_agent,
                "Accept": accept,
                "Accept-Language": "en-US,en;q=0.9",
                "Accept-Encoding": "gzip, deflate",
            },
        )
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            declared = resp.headers.get("Content-Length", "") if resp.headers else ""
            if declared and declared.strip().isdigit() and int(declared) > max_bytes:
                raise FetchError(
                    f"Response from {url} declares {declared} bytes (cap {max_bytes})",
                    url=url,
                )
            raw: bytes = resp.read(max_bytes + 1)
            headers = resp.headers
    except urllib.error.HTTPError as exc:
        raise FetchError(
            f"HTTP {exc.code} fetching {url}: {exc.reason}", url=url, status=exc.code,
        ) from exc
    except urllib.error.URLError as exc:
        raise FetchError(f"URL error fetching {url}: {exc.reason}", url=url) from exc
    except OSError as exc:
        raise FetchError(f"Network error fetching {url}: {exc}", url=url) from exc
    except http.client.HTTPException as exc:
        raise FetchError(f"Protocol error fetching {url}: {exc!r}", url=url) from exc
    except ValueError as exc:
        raise FetchError(f"Invalid URL {url}: {exc}", url=url) from exc

    if not raw:
        raise FetchError(f"Empty response from {url}", url=url)
    if len(raw) > max_bytes:
        raise FetchError(f"Response from {url} exceeds {max_bytes} bytes", url=url)
    return raw, headers


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def fetch_html(
    url: str,
    *,
    timeout: int = settings.FETCH_TIMEOUT,
    max_bytes: int = settings.MAX_PAGE_BYTES,
    user_agent: str | None = None,
) -> str:
    """Fetch *url* and return the response body as a decoded string.

    Args:
        url:        Fully-qualified HTTP/HTTPS URL.
        timeout:    Request timeout in seconds.
        max_bytes:  Responses larger than this are rejected.
        user_agent: Override the default browser User-Agent string.

    Raises:
        FetchError: On non-2xx status, network failure, empty or oversized
            responses, and unsupported URL schemes.
    """
    raw, headers = _read_capped(
        url,
        timeout=timeout,
        max_bytes=max_bytes,
        user_agent=user_agent or settings.USER_AGENT,
        accept="text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    )
    body = _decompress(raw, headers, url)
    if len(body) > max_bytes:
        raise FetchError(f"Decompressed body from {url} exceeds {max_bytes} bytes", url=url)
    return _decode_body(body, headers)


def download_bytes(
    url: str,
    *,
    timeout: int = settings.FETCH_TIMEOUT,
    max_bytes: int = settings.MAX_PAGE_BYTES,
    user_agent: str | None = None,
) -> bytes:
    """Download *url* (typically a PDF) and return the raw body.

    Raises:
        FetchError: Same conditions as :func:`fetch_html`.
    """
    raw, headers = _read_capped(
        url,
        timeout=timeout,
        max_bytes=max_bytes,
        user_agent=user_agent or settings.USER_AGENT,
        accept="application/pdf,*/*;q=0.8",
    )
    body = _decompress(raw, headers, url)
    if len(body) > max_bytes:
        raise FetchError(f"Decompressed body from {url} exceeds {max_bytes} bytes", url=url)
    logger.debug("Downloaded %d bytes from %s", len(body), url)
    return body
