"""
Menu API client.

HTTP client for the paginated menu endpoint. Handles page URL assembly,
status code checks and transport errors.
"""

import logging
from typing import Optional
from urllib.parse import urlsplit

import httpx

from menu_validator import __version__
from menu_validator.parser import MenuPage, MenuParseError, parse_menu_page

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

DEFAULT_TIMEOUT = 30.0  # seconds
USER_AGENT = f"Menu-Validator/{__version__}"
QUERY_PARAM_PAGE = "page"


# ============================================================================
# Exceptions
# ============================================================================


class ApiError(Exception):
    """Base exception for API errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ConnectionError(ApiError):
    """Raised when connection to server fails."""

    pass


# ============================================================================
# Helper Functions
# ============================================================================


def page_url(base_url: str, page: int) -> str:
    """
    Append the page query parameter to a URL.

    Uses '&' when the URL already carries a query string, '?' otherwise.

    Example:
        >>> page_url("https://example.com/challenges.json?id=1", 2)
        'https://example.com/challenges.json?id=1&page=2'
    """
    separator = "&" if urlsplit(base_url).query else "?"
    return f"{base_url}{separator}{QUERY_PARAM_PAGE}={page}"


# ============================================================================
# MenuApiClient Class
# ============================================================================


class MenuApiClient:
    """
    HTTP client for the menu endpoint.

    Attributes:
        base_url: Endpoint URL, possibly with its own query string
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize the API client.

        Args:
            base_url: Endpoint URL (e.g. ".../challenges.json?id=1")
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)

        Raises:
            ValueError: If base_url is empty
        """
        if not base_url:
            raise ValueError("base_url is required")

        self._base_url = base_url
        self._timeout = timeout
        self._client = httpx.Client(
            headers={
                "User-Agent": USER_AGENT,
                "Accept": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    @property
    def base_url(self) -> str:
        """Get the endpoint URL."""
        return self._base_url

    # -------------------------------------------------------------------------
    # Pages
    # -------------------------------------------------------------------------

    def get_page(self, page: int) -> MenuPage:
        """
        Fetch and decode one page of menus.

        Args:
            page: 1-based page number

        Returns:
            Decoded MenuPage

        Raises:
            ApiError: If the server answers with an error or invalid JSON
            ConnectionError: If connection to server fails
        """
        url = page_url(self._base_url, page)
        logger.debug(f"Fetching menus page {page}: {url}")

        try:
            response = self._client.get(url)
        except httpx.ConnectError as e:
            raise ConnectionError(f"Failed to connect to server: {e}")
        except httpx.TimeoutException as e:
            raise ConnectionError(f"Connection timed out: {e}")

        if response.status_code == 200:
            try:
                payload = response.json()
            except ValueError as e:
                raise ApiError(f"Invalid JSON in menu page {page}: {e}", status_code=200)
            try:
                return parse_menu_page(payload)
            except MenuParseError as e:
                raise ApiError(f"Invalid menu page {page}: {e}", status_code=200)
        elif response.status_code == 404:
            raise ApiError("Menu page not found", status_code=404)
        else:
            raise ApiError(
                f"Menu request failed with status {response.status_code} when requesting {url}",
                status_code=response.status_code,
            )

    # -------------------------------------------------------------------------
    # Cleanup
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "MenuApiClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
