"""Application state container for FastAPI dependency injection."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
from starlette.datastructures import State

from castfinder.infrastructure.config import AppConfig

if TYPE_CHECKING:
    from castfinder.application.use_cases import CastLookupUseCase, TitleSearchUseCase
    from castfinder.domain.ports import (
        RateLimiterPort,
        ResultCachePort,
        TmdbClientPort,
    )


class AppState(State):
    """FastAPI application state with all DI resources.

    Lifecycle managed by composition.py::lifespan().  The cache and the rate
    limiter are owned here for the whole process lifetime.
    """

    # Configuration
    config: AppConfig

    # Infrastructure
    http_client: httpx.AsyncClient
    cache: ResultCachePort
    rate_limiter: RateLimiterPort

    # Domain Ports
    tmdb_client: TmdbClientPort

    # Application Services
    title_search_uc: TitleSearchUseCase
    cast_lookup_uc: CastLookupUseCase
