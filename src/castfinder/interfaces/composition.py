"""Composition root: dependency injection via FastAPI lifespan."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, cast

import httpx
import structlog
from fastapi import FastAPI

from castfinder.application.services.credit_aggregator import CreditAggregator
from castfinder.application.services.person_enricher import PersonEnricher
from castfinder.application.use_cases import CastLookupUseCase, TitleSearchUseCase
from castfinder.infrastructure.cache import InMemoryResultCache
from castfinder.infrastructure.config.schema import AppConfig
from castfinder.infrastructure.rate_limit.sliding_window import (
    SlidingWindowRateLimiter,
)
from castfinder.infrastructure.tmdb.client import HttpxTmdbClient
from castfinder.interfaces.app_state import AppState

log = structlog.get_logger(__name__)


def wire_services(state: AppState, config: AppConfig) -> None:
    """Build cache, rate limiter, TMDB client and use cases onto *state*.

    Expects ``state.http_client`` to be set already.
    """
    state.cache = InMemoryResultCache(ttl_seconds=config.cache.ttl_seconds)
    state.rate_limiter = SlidingWindowRateLimiter(
        max_requests=config.rate_limit.max_requests,
        window_seconds=config.rate_limit.window_seconds,
    )
    state.tmdb_client = HttpxTmdbClient(
        api_key=config.tmdb_api_key,
        http_client=state.http_client,
        base_url=config.tmdb_api_base_url,
        language=config.tmdb_language,
    )

    state.title_search_uc = TitleSearchUseCase(
        tmdb=state.tmdb_client,
        cache=state.cache,
        rate_limiter=state.rate_limiter,
        image_base_url=config.tmdb_image_base_url,
    )
    state.cast_lookup_uc = CastLookupUseCase(
        aggregator=CreditAggregator(
            state.tmdb_client,
            untranslated_movie_credits=config.cast.untranslated_movie_credits,
        ),
        enricher=PersonEnricher(
            state.tmdb_client,
            image_base_url=config.tmdb_image_base_url,
            placeholder_image_url=config.placeholder_image_url,
        ),
        rate_limiter=state.rate_limiter,
        cache=state.cache if config.cache.cache_cast_results else None,
    )
    log.info(
        "services_wired",
        cache_ttl=config.cache.ttl_seconds,
        cache_cast_results=config.cache.cache_cast_results,
        rate_limit_max_requests=config.rate_limit.max_requests,
        rate_limit_window_seconds=config.rate_limit.window_seconds,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan Hook: Initialize and cleanup all resources (DI Composition Root).

    Order matters:
        1. HTTP client (required by the TMDB client)
        2. Cache + rate limiter (process-wide, owned by the app state)
        3. TMDB client, aggregator, enricher, use cases
    """
    state = cast(AppState, app.state)
    config = state.config

    state.http_client = httpx.AsyncClient(
        timeout=httpx.Timeout(config.http_timeout_seconds),
        headers={"User-Agent": config.http_user_agent},
    )
    log.info("http_client_initialized", timeout=config.http_timeout_seconds)

    wire_services(state, config)

    try:
        yield
    finally:
        await state.http_client.aclose()
        log.info("http_client_closed")
