"""HTTP client for downloading feeds."""

import logging
from typing import Optional
from urllib.parse import urljoin

import httpx

from rss_agent import __version__
from rss_agent.core import FeedFetcher, RssHttpError

logger = logging.getLogger(__name__)

ACCEPT_HEADER = (
    "application/rss+xml, application/xml, text/xml, application/atom+xml, application/json"
)
REDIRECT_STATUS_CODES = {301, 302, 303, 307, 308}


class RssHttpClient(FeedFetcher):
    """Fetch feed documents over HTTP, following redirects like ``curl -L``."""

    def __init__(
        self,
        timeout: float = 30.0,
        user_agent: Optional[str] = None,
        max_redirects: int = 5,
    ) -> None:
        self.timeout = timeout
        self.user_agent = user_agent or f"RSS Agent v{__version__}"
        self.max_redirects = max_redirects

    async def fetch_text(
        self,
        url: str,
        headers: Optional[dict[str, str]] = None,
        max_redirects: Optional[int] = None,
    ) -> str:
        """Fetch ``url`` and return the response body.

        Args:
            url: Feed URL
            headers: Extra request headers, overriding the defaults
            max_redirects: Redirect limit for this request, defaults to the client's

        Returns:
            Response body decoded as text

        Raises:
            RssHttpError: On non-200 responses, too many redirects, invalid
                URLs or network failures
        """
        if max_redirects is None:
            max_redirects = self.max_redirects

        request_headers = {
            "User-Agent": self.user_agent,
            "Accept": ACCEPT_HEADER,
            **(headers or {}),
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=False) as client:
                response = await self._get_following_redirects(
                    client, url, request_headers, max_redirects
                )
        except httpx.InvalidURL as e:
            raise RssHttpError(f"Invalid URL format: {e}", url=url, original=e) from e
        except httpx.UnsupportedProtocol as e:
            raise RssHttpError(f"Invalid URL format: {e}", url=url, original=e) from e
        except httpx.HTTPError as e:
            raise RssHttpError(f"Network error: {e}", url=url, original=e) from e

        if response.status_code != 200:
            raise RssHttpError(
                f"HTTP {response.status_code}: {response.reason_phrase}",
                status_code=response.status_code,
                url=url,
            )

        return response.text

    async def _get_following_redirects(
        self,
        client: httpx.AsyncClient,
        url: str,
        headers: dict[str, str],
        max_redirects: int,
    ) -> httpx.Response:
        current_url = url
        for _ in range(max_redirects + 1):
            logger.debug("GET %s", current_url)
            response = await client.get(current_url, headers=headers)
            if response.status_code not in REDIRECT_STATUS_CODES:
                return response

            location = response.headers.get("location")
            if not location:
                raise RssHttpError(
                    f"HTTP {response.status_code}: Redirect without location header",
                    status_code=response.status_code,
                    url=current_url,
                )

            # Relative locations resolve against the URL that was redirected
            current_url = urljoin(current_url, location)
            logger.debug("Redirect %d to %s", response.status_code, current_url)

        raise RssHttpError(f"Too many redirects (max: {max_redirects})", url=url)
