"""Cast lookup use case: aggregate, deduplicate and enrich a title's cast."""

from __future__ import annotations

import structlog

from castfinder.application.services.credit_aggregator import CreditAggregator
from castfinder.application.services.person_enricher import (
    PersonEnricher,
    parse_year,
)
from castfinder.domain.entities.cast import (
    MEDIA_TYPES,
    BadRequestError,
    EnrichedActor,
    RateLimitError,
    TitleRef,
)
from castfinder.domain.ports.cache import ResultCachePort
from castfinder.domain.ports.rate_limiter import RateLimiterPort

log = structlog.get_logger(__name__)


class CastLookupUseCase:
    """Resolves a title to its full enriched cast list.

    The result is never paginated or filtered; trimming by popularity or
    gender is left to the presentation layer.  Caching of cast results is
    a policy: pass ``cache=None`` to always resolve fresh.
    """

    def __init__(
        self,
        *,
        aggregator: CreditAggregator,
        enricher: PersonEnricher,
        rate_limiter: RateLimiterPort,
        cache: ResultCachePort | None = None,
    ) -> None:
        self._aggregator = aggregator
        self._enricher = enricher
        self._rate_limiter = rate_limiter
        self._cache = cache

    async def execute(
        self,
        title_id: int | None,
        media_type: str | None,
        release_year: str | int | None = None,
        *,
        client_id: str = "anonymous",
    ) -> list[EnrichedActor]:
        """Build the enriched cast of one title.

        Raises:
            BadRequestError: Missing id or media type.
            RateLimitError: Caller exceeded its window.
            UpstreamError: The primary credits call failed.
        """
        if not title_id or not media_type:
            raise BadRequestError("Movie ID and media type are required")
        if media_type not in MEDIA_TYPES:
            raise BadRequestError(f"Unsupported media type: {media_type!r}")
        try:
            title = TitleRef(id=int(title_id), media_type=media_type)  # type: ignore[arg-type]
        except (TypeError, ValueError) as exc:
            raise BadRequestError(f"Invalid title id: {title_id!r}") from exc

        if not self._rate_limiter.check(client_id):
            raise RateLimitError(retry_after_seconds=self._rate_limiter.window_seconds)

        cache_key = f"cast:{title.media_type}:{title.id}:{parse_year(release_year)}"
        if self._cache is not None:
            cached = await self._cache.get(cache_key)
            if cached is not None:
                log.debug("cast_lookup_cache_hit", key=cache_key)
                return list(cached)

        roster = await self._aggregator.aggregate(title)
        actors = await self._enricher.enrich(roster, movie_year=release_year)

        if self._cache is not None:
            await self._cache.set(cache_key, actors)
        log.info(
            "cast_lookup",
            title_id=title.id,
            media_type=title.media_type,
            roster=len(roster),
            actors=len(actors),
        )
        return actors
