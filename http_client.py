"""
HTTP client for fetching release schedule pages.

Uses curl_cffi with Chrome impersonation to get past bot detection.
"""

import logging
from typing import Optional

from curl_cffi import requests
from curl_cffi.requests import exceptions as requests_exceptions

import crawler_config

logger = logging.getLogger(__name__)


class HttpRequestError(Exception):
    """Fetching a page failed or returned a non-2xx status."""


class HttpClient:
    """Thin wrapper around a curl_cffi session."""

    def __init__(self, timeout: Optional[float] = None, impersonate: Optional[str] = None):
        """
        Initialize the HTTP client.

        Args:
            timeout: Request timeout in seconds (None = use config default)
            impersonate: Browser to impersonate (None = use config default)
        """
        self.timeout = timeout if timeout is not None else crawler_config.REQUEST_TIMEOUT
        self.impersonate = impersonate or crawler_config.IMPERSONATE
        self.session = requests.Session()

    def fetch_html(self, url: str) -> str:
        """
        Fetch a page and return its body as text.

        Args:
            url: URL to fetch

        Returns:
            HTML content

        Raises:
            HttpRequestError: On transport errors or non-2xx responses
        """
        logger.info(f"Fetching HTML from {url}")

        try:
            response = self.session.get(url, impersonate=self.impersonate, timeout=self.timeout)
        except requests_exceptions.RequestException as e:
            raise HttpRequestError(str(e)) from e

        if not 200 <= response.status_code < 300:
            raise HttpRequestError(f"HTTP {response.status_code} for {url}")

        html = response.text
        logger.info(f"Fetched {len(html)} bytes")
        return html

    def close(self) -> None:
        """Close the underlying session."""
        self.session.close()
