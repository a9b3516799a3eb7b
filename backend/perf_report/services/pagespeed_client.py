"""
PageSpeed Client - Fetch Lighthouse results from PageSpeed Insights.
"""
import httpx
from typing import Optional

from perf_report.config import settings
from perf_report.errors import PageSpeedError
from perf_report.logger import logger


class PageSpeedClient:
    """Fetches a Lighthouse result (LHR) for a URL."""

    PAGESPEED_API = "https://www.googleapis.com/pagespeedonline/v5/runPagespeed"

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.transport = transport

    async def fetch(self, url: str, strategy: Optional[str] = None) -> dict:
        """Fetch the Lighthouse result for URL.

        Args:
            url: Page to analyze
            strategy: "mobile" or "desktop" (defaults to settings)

        Returns:
            The `lighthouseResult` object of the PageSpeed response

        Raises:
            PageSpeedError: on transport failure, non-200 status, or a
                response without a Lighthouse result
        """
        params = {
            "url": url,
            "strategy": strategy or settings.PAGESPEED_STRATEGY,
            "category": "performance"
        }
        if settings.PAGESPEED_API_KEY:
            params["key"] = settings.PAGESPEED_API_KEY

        logger.info(f"Fetching PageSpeed result for {url} ({params['strategy']})")
        try:
            async with httpx.AsyncClient(timeout=settings.PAGESPEED_TIMEOUT, transport=self.transport) as client:
                response = await client.get(self.PAGESPEED_API, params=params)
        except httpx.HTTPError as e:
            logger.warning(f"PageSpeed fetch failed: {e}")
            raise PageSpeedError(f"PageSpeed request failed: {e}") from e

        if response.status_code != 200:
            logger.warning(f"PageSpeed API error: {response.status_code}")
            raise PageSpeedError(f"API error: {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise PageSpeedError("PageSpeed response is not JSON") from e

        lhr = data.get("lighthouseResult") if isinstance(data, dict) else None
        if not isinstance(lhr, dict):
            raise PageSpeedError("PageSpeed response has no lighthouseResult")
        return lhr
