"""Title search use case: rate-limited, cached TMDB multi-search."""

from __future__ import annotations

from typing import Any

import structlog

from castfinder.domain.entities.cast import (
    MEDIA_TYPES,
    BadRequestError,
    RateLimitError,
    SearchPage,
    SearchResultItem,
)
from castfinder.domain.ports.cache import ResultCachePort
from castfinder.domain.ports.rate_limiter import RateLimiterPort
from castfinder.domain.ports.tmdb import TmdbClientPort

log = structlog.get_logger(__name__)


def normalize_query(query: str) -> str:
    """Trim, collapse inner whitespace and casefold a search query."""
    return " ".join(query.split()).casefold()


def search_cache_key(query: str, page: int) -> str:
    return f"search:{normalize_query(query)}:{page}"


class TitleSearchUseCase:
    """Answers "which titles match this text" for the lookup tool.

    Order of checks: validation, rate limit, cache, upstream.  A rejected
    request never touches the cache or the provider.
    """

    def __init__(
        self,
        *,
        tmdb: TmdbClientPort,
        cache: ResultCachePort,
        rate_limiter: RateLimiterPort,
        image_base_url: str,
    ) -> None:
        self._tmdb = tmdb
        self._cache = cache
        self._rate_limiter = rate_limiter
        self._image_base_url = image_base_url

    async def execute(
        self,
        query: str | None,
        page: int = 1,
        *,
        client_id: str = "anonymous",
    ) -> SearchPage:
        """Search movies and TV shows by title.

        Args:
            query: Free-text title query.
            page: TMDB page number (1-based).
            client_id: Caller identity used for rate limiting.

        Raises:
            BadRequestError: Blank query or invalid page.
            RateLimitError: Caller exceeded its window.
            UpstreamError: TMDB search failed.
        """
        if query is None or not query.strip():
            raise BadRequestError("Search query is required")
        if isinstance(page, bool) or not isinstance(page, int) or page < 1:
            raise BadRequestError("Page must be a positive integer")

        if not self._rate_limiter.check(client_id):
            raise RateLimitError(retry_after_seconds=self._rate_limiter.window_seconds)

        cache_key = search_cache_key(query, page)
        cached = await self._cache.get(cache_key)
        if cached is not None:
            log.debug("title_search_cache_hit", key=cache_key)
            return cached

        data = await self._tmdb.search_multi(query.strip(), page=page)
        result = SearchPage(
            results=[
                self._to_item(item)
                for item in data.get("results") or []
                if item.get("media_type") in MEDIA_TYPES and item.get("id") is not None
            ],
            total_results=int(data.get("total_results") or 0),
            total_pages=int(data.get("total_pages") or 0),
        )

        await self._cache.set(cache_key, result)
        log.info(
            "title_search",
            query=query.strip(),
            page=page,
            results=len(result.results),
            total_results=result.total_results,
        )
        return result

    def _poster_url(self, poster_path: str | None) -> str | None:
        if not poster_path:
            return None
        return f"{self._image_base_url}{poster_path}"

    def _to_item(self, item: dict[str, Any]) -> SearchResultItem:
        return SearchResultItem(
            id=int(item.get("id")),
            title=item.get("title") or item.get("name") or "",
            media_type=item["media_type"],
            poster_path=self._poster_url(item.get("poster_path")),
            release_date=item.get("release_date"),
            first_air_date=item.get("first_air_date"),
            overview=item.get("overview") or "",
            vote_average=item.get("vote_average"),
        )
