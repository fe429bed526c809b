"""Fetch recipe pages and hand them to the extractor."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from recipe_relay.config import settings
from recipe_relay.models.recipe import RecipeDocument
from recipe_relay.services.recipe_extractor import DEFAULT_SELECTORS, RecipeSelectors, extract_recipe
from recipe_relay.utils.exceptions import FetchError
from recipe_relay.utils.validators import validate_url

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36",
    "Accept": "text/html,application/xhtml+xml;q=0.9,*/*;q=0.8",
}


class ScraperService:
    """Fetches a recipe page over HTTP and extracts a RecipeDocument."""

    def __init__(
        self,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        selectors: RecipeSelectors = DEFAULT_SELECTORS,
    ):
        self.timeout = timeout if timeout is not None else settings.http_timeout
        self.transport = transport
        self.selectors = selectors

    @staticmethod
    async def _check_request_url(request: httpx.Request) -> None:
        # Runs for every hop, so a redirect cannot lead to a blocked host.
        validate_url(str(request.url))

    async def fetch_html(self, url: str) -> str:
        """
        Download a page and return its decoded body.

        Raises:
            FetchError: On transport errors or non-2xx responses
        """
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                follow_redirects=True,
                headers=DEFAULT_HEADERS,
                transport=self.transport,
                event_hooks={"request": [self._check_request_url]},
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.warning(f"Upstream returned {status_code} for {url}")
            raise FetchError(f"Upstream returned HTTP {status_code} for {url}") from e
        except httpx.HTTPError as e:
            logger.warning(f"Failed to fetch {url}: {e!r}")
            raise FetchError(f"Failed to fetch {url}: {e}") from e

        logger.info(
            f"Fetched {url}",
            extra={"status_code": response.status_code, "content_length": len(response.content)},
        )
        return response.text

    async def scrape(self, url: str) -> RecipeDocument:
        """Validate the URL, fetch the page and extract the recipe."""
        validated_url = validate_url(url)
        html = await self.fetch_html(validated_url)
        return extract_recipe(html, self.selectors)
