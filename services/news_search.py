"""Outlet search against the NewsAPI ``/v2/everything`` endpoint."""

from __future__ import annotations

import logging
from typing import Protocol

import httpx

from config import settings
from engine.errors import CollaboratorUnavailable, ConfigurationMissing
from schemas.response import Article

logger = logging.getLogger("tricheck.search")


class OutletSearcher(Protocol):
    """Interface for finding candidate articles published by one outlet."""

    async def search(self, outlet_id: str, query: str) -> list[Article]:
        """Return articles from *outlet_id* matching *query*.

        Raises:
            CollaboratorUnavailable: the search backend failed or is unreachable.
        """
        ...


class NewsApiSearcher:
    """Search one or more NewsAPI sources.

    Args:
        api_key: NewsAPI key (defaults to ``settings.newsapi_key``).
        base_url: API root, e.g. ``https://newsapi.org/v2``.
        page_size: Articles requested per call (NewsAPI max is 100).
        timeout: Per-request timeout in seconds.
    """

    def __init__(
        self,
        *,
        api_key: str | None = None,
        base_url: str | None = None,
        page_size: int = 10,
        timeout: float = 30.0,
    ) -> None:
        self._api_key = api_key or settings.newsapi_key
        if not self._api_key:
            raise ConfigurationMissing("NewsAPI key required. Pass api_key or set NEWSAPI_KEY.")
        self._base_url = (base_url or settings.newsapi_base_url).rstrip("/")
        self._page_size = min(page_size, 100)
        self._timeout = timeout

    async def search(self, outlet_id: str, query: str) -> list[Article]:
        articles, _ = await self.search_sources(outlet_id, query)
        return articles

    async def search_sources(self, sources: str, query: str) -> tuple[list[Article], int]:
        """Search a comma-separated list of source ids.

        Returns:
            Tuple of (articles, total results reported by the API).
        """
        params: dict[str, str | int] = {
            "q": query,
            "sources": sources,
            "sortBy": "relevancy",
            "pageSize": self._page_size,
        }

        logger.debug("Searching NewsAPI sources=%s q=%r", sources, query)
        try:
            # key goes in a header; httpx logs request URLs at INFO
            async with httpx.AsyncClient(
                timeout=self._timeout, headers={"X-Api-Key": self._api_key}
            ) as client:
                response = await client.get(f"{self._base_url}/everything", params=params)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as exc:
            logger.warning("NewsAPI returned %s for sources=%s", exc.response.status_code, sources)
            raise CollaboratorUnavailable(
                f"NewsAPI returned {exc.response.status_code}: {exc.response.text[:200]}"
            ) from exc
        except httpx.HTTPError as exc:
            logger.warning("NewsAPI request failed for sources=%s: %s", sources, exc)
            raise CollaboratorUnavailable(f"NewsAPI request failed: {exc}") from exc
        except ValueError as exc:
            raise CollaboratorUnavailable(f"NewsAPI returned a non-JSON body: {exc}") from exc

        if data.get("status") != "ok":
            raise CollaboratorUnavailable(f"NewsAPI error: {data.get('message') or 'Unknown error'}")

        articles: list[Article] = []
        for item in data.get("articles") or []:
            source = item.get("source") or {}
            articles.append(
                Article(
                    outlet=source.get("name") or source.get("id") or sources,
                    title=item.get("title") or "",
                    description=item.get("description"),
                    content=item.get("content"),
                    published_at=item.get("publishedAt"),
                    url=item.get("url") or "",
                )
            )

        logger.info("NewsAPI sources=%s returned %d article(s)", sources, len(articles))
        return articles, int(data.get("totalResults") or 0)


def build_searcher() -> NewsApiSearcher | None:
    """Searcher from settings, or ``None`` when search is disabled or unconfigured."""
    if not settings.outlet_search_enabled:
        return None
    try:
        return NewsApiSearcher()
    except ConfigurationMissing as exc:
        logger.warning("Outlet search disabled: %s", exc.message)
        return None
