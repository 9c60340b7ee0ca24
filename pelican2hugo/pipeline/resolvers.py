#!/usr/bin/env python3
"""
resolvers.py
-------------------
Remote lookups that turn short embed tokens into finished markup.

Two services are involved:
- GIPHY: ``{% giphy <id> %}`` needs the image URL, the page URL and the
  credited source, read from the GIPHY REST API (requires an API key).
- SoundCloud: ``{% soundcloud <url> %}`` is replaced by the embed HTML of
  the public oEmbed endpoint (no key).

The rewriter only depends on the MediaResolver protocol, so tests and
offline runs can inject any object with the two methods.

Usage:
    from pelican2hugo.pipeline.resolvers import HttpMediaResolver

    with HttpMediaResolver(giphy_api_key="...") as resolver:
        media = resolver.resolve_giphy("xT9IgG50Fb7Mi0prBC")
        html = resolver.resolve_soundcloud("https://soundcloud.com/a/b")
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import os
import threading
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

# --- Third party imports ---
import requests

# --- Local imports ---
from pelican2hugo.core.exceptions import MissingCredentialError, ResolverError
from pelican2hugo.core.logging_manager import ConversionLogger, safe_logger
from pelican2hugo.pipeline.configs.defaults import (
    GIPHY_API_KEY_ENV,
    GIPHY_API_URL,
    HTTP_MAX_RETRIES,
    HTTP_RETRY_DELAY,
    HTTP_TIMEOUT,
    SOUNDCLOUD_OEMBED_URL,
    USER_AGENT,
)


# Status codes worth another attempt
RETRY_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


@dataclass(frozen=True)
class GiphyMedia:
    """
    Fields needed to render a GIPHY embed as a linked Markdown image.

    Attributes:
        image_url: Direct URL of the original GIF
        page_url: GIPHY page of the GIF
        source: Credited source, used as alt text
    """

    image_url: str
    page_url: str
    source: str

    def to_markdown(self) -> str:
        """Linked image: ``[![source](image_url)](page_url)``."""
        return f"[![{self.source}]({self.image_url})]({self.page_url})"


class MediaResolver(Protocol):
    """Capability the body rewriter needs for network-backed embeds."""

    def resolve_giphy(self, giphy_id: str) -> GiphyMedia:
        ...

    def resolve_soundcloud(self, url: str) -> str:
        ...


class HttpMediaResolver:
    """
    MediaResolver backed by the GIPHY API and SoundCloud oEmbed.

    One instance is shared by every conversion task of a batch; the
    requests session is only used for stateless GETs.

    Attributes:
        giphy_api_key: GIPHY key (falls back to $GIPHY_API_KEY)
        timeout: Per-request timeout in seconds
        max_retries: Attempts per lookup on transient failures
        retry_delay: Base delay between attempts (exponential backoff)
        min_interval: Minimum seconds between two requests (0 disables)
    """

    def __init__(
        self,
        giphy_api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = HTTP_TIMEOUT,
        max_retries: int = HTTP_MAX_RETRIES,
        retry_delay: float = HTTP_RETRY_DELAY,
        min_interval: float = 0.0,
        logger: Optional[ConversionLogger] = None,
    ) -> None:
        if max_retries < 1:
            raise ValueError(f"max_retries must be at least 1, got {max_retries}")

        self.giphy_api_key = giphy_api_key or os.environ.get(GIPHY_API_KEY_ENV)
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.min_interval = min_interval
        self.logger = logger

        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": USER_AGENT})

        self._rate_lock = threading.Lock()
        self._last_request = 0.0

    # ---- Context manager ----
    def __enter__(self) -> HttpMediaResolver:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()

    # ---- MediaResolver ----
    def resolve_giphy(self, giphy_id: str) -> GiphyMedia:
        """
        Look up a GIF by id.

        Raises:
            MissingCredentialError: If no GIPHY API key is configured
            ResolverError: On network, status, JSON or field errors
        """
        if not self.giphy_api_key:
            raise MissingCredentialError(
                f"missing GIPHY API key (pass --giphy-key or set {GIPHY_API_KEY_ENV})"
            )

        payload = self._get_json(
            GIPHY_API_URL.format(giphy_id=giphy_id),
            {"api_key": self.giphy_api_key},
            context=f"giphy id {giphy_id}",
        )
        try:
            data = payload["data"]
            media = GiphyMedia(
                image_url=str(data["images"]["original"]["url"]),
                page_url=str(data["url"]),
                source=str(data["source"]),
            )
        except (KeyError, TypeError) as e:
            raise ResolverError(
                f"GIPHY response for '{giphy_id}' is missing field {e}"
            ) from e

        safe_logger(self.logger).log_debug(
            "Resolved GIPHY embed", {"id": giphy_id, "image": media.image_url}
        )
        return media

    def resolve_soundcloud(self, url: str) -> str:
        """
        Fetch the oEmbed HTML for a SoundCloud track or playlist URL.

        Raises:
            ResolverError: On network, status, JSON or field errors
        """
        payload = self._get_json(
            SOUNDCLOUD_OEMBED_URL,
            {"format": "json", "url": url},
            context=f"soundcloud url {url}",
        )
        try:
            html = payload["html"]
        except (KeyError, TypeError) as e:
            raise ResolverError(
                f"SoundCloud oEmbed response for '{url}' has no 'html' field"
            ) from e

        safe_logger(self.logger).log_debug("Resolved SoundCloud embed", {"url": url})
        return str(html)

    # ---- HTTP helpers ----
    def _get_json(self, url: str, params: Dict[str, str], context: str) -> Any:
        """
        GET ``url`` and decode the JSON body, retrying transient failures.

        Retries connection errors, timeouts and RETRY_STATUS_CODES with
        exponential backoff. Other failures are raised immediately.
        """
        for attempt in range(self.max_retries):
            self._throttle()
            try:
                response = self.session.get(url, params=params, timeout=self.timeout)
                if (
                    response.status_code in RETRY_STATUS_CODES
                    and attempt < self.max_retries - 1
                ):
                    self._backoff(attempt, context, f"HTTP {response.status_code}")
                    continue
                response.raise_for_status()
                return response.json()
            except (requests.ConnectionError, requests.Timeout) as e:
                if attempt < self.max_retries - 1:
                    self._backoff(attempt, context, type(e).__name__)
                    continue
                raise ResolverError(
                    f"Lookup failed for {context} after {self.max_retries} attempts: {e}"
                ) from e
            except requests.HTTPError as e:
                raise ResolverError(f"Lookup failed for {context}: {e}") from e
            except ValueError as e:
                raise ResolverError(f"Invalid JSON for {context}: {e}") from e
            except requests.RequestException as e:
                raise ResolverError(f"Lookup failed for {context}: {e}") from e

        # Unreachable: the last attempt either returns or raises
        raise ResolverError(f"Lookup failed for {context}")

    def _backoff(self, attempt: int, context: str, reason: str) -> None:
        wait_time = self.retry_delay * (2**attempt)
        safe_logger(self.logger).log_debug(
            f"Retrying {context} in {wait_time}s",
            {"reason": reason, "attempt": attempt + 1, "max_retries": self.max_retries},
        )
        time.sleep(wait_time)

    def _throttle(self) -> None:
        """Space requests at least min_interval seconds apart across threads."""
        if self.min_interval <= 0:
            return
        with self._rate_lock:
            wait_time = self._last_request + self.min_interval - time.monotonic()
            if wait_time > 0:
                time.sleep(wait_time)
            self._last_request = time.monotonic()
