"""Cast lookup API endpoints (title search, movie cast)."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Optional, Union, cast

import structlog
from fastapi import APIRouter, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from castfinder.domain.entities.cast import (
    BadRequestError,
    EnrichedActor,
    RateLimitError,
    SearchPage,
    UpstreamError,
)
from castfinder.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(prefix="/api", tags=["cast"])


class CastRequest(BaseModel):
    """POST body of /api/movie-cast. Presence is validated by the use case."""

    id: Optional[int] = None
    media_type: Optional[str] = Field(default=None, alias="mediaType")
    year: Optional[Union[str, int]] = None


def _client_id(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def _error(message: str, *, status_code: int, **headers: str) -> JSONResponse:
    return JSONResponse(
        content={"error": message}, status_code=status_code, headers=headers or None
    )


def _validation_message(exc: RequestValidationError) -> str:
    """First validation failure as one readable line ("Invalid page: ...")."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    if first.get("type") == "json_invalid":
        return "Invalid JSON body"
    field = ".".join(
        str(part) for part in first.get("loc", ()) if part not in ("body", "query")
    )
    return f"Invalid {field or 'request'}: {first.get('msg', 'invalid value')}"


def register_exception_handlers(app: FastAPI) -> None:
    """Render request validation failures as 400 ``{"error": ...}``."""

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        message = _validation_message(exc)
        log.info("request_validation_failed", path=request.url.path, error=message)
        return _error(message, status_code=400)


def _format_search_page(page: SearchPage) -> dict[str, Any]:
    return {
        "results": [asdict(item) for item in page.results],
        "total_results": page.total_results,
        "total_pages": page.total_pages,
    }


def _format_actor(actor: EnrichedActor) -> dict[str, Any]:
    """Convert an EnrichedActor to the lookup tool's JSON shape."""
    return {
        "id": actor.person_id,
        "name": actor.name,
        "imageUrl": actor.image_url,
        "birthYear": actor.birth_year,
        "movieYear": actor.movie_year,
        "role": actor.role,
        "order": actor.order,
        "popularity": actor.popularity,
        "gender": actor.gender,
        "known_for_department": actor.known_for_department,
        "profile_path": actor.profile_path,
    }


def _map_domain_error(request: Request, exc: Exception, event: str) -> JSONResponse:
    """Translate a domain error into exactly one JSON error response."""
    if isinstance(exc, BadRequestError):
        return _error(str(exc), status_code=400)
    if isinstance(exc, RateLimitError):
        retry_after = str(int(exc.retry_after_seconds))
        return _error(str(exc), status_code=429, **{"Retry-After": retry_after})
    if isinstance(exc, UpstreamError):
        return _error(exc.message, status_code=502)

    log.error(event, path=request.url.path, exc_info=exc)
    state = cast(AppState, request.app.state)
    if state.config.environment == "prod":
        return _error("An unexpected error occurred", status_code=500)
    return _error(str(exc) or "An unexpected error occurred", status_code=500)


@router.get("/search")
async def search_titles(
    request: Request,
    query: Optional[str] = Query(None, description="Title search text"),
    page: int = Query(1, description="TMDB result page (1-based)"),
) -> JSONResponse:
    """Search movies and TV shows by title."""
    state = cast(AppState, request.app.state)
    try:
        result = await state.title_search_uc.execute(
            query, page, client_id=_client_id(request)
        )
    except Exception as exc:
        return _map_domain_error(request, exc, "title_search_failed")
    return JSONResponse(content=_format_search_page(result))


@router.post("/movie-cast")
async def movie_cast(request: Request, body: CastRequest) -> JSONResponse:
    """Resolve the enriched cast of a movie or TV show."""
    state = cast(AppState, request.app.state)
    try:
        actors = await state.cast_lookup_uc.execute(
            body.id,
            body.media_type,
            body.year,
            client_id=_client_id(request),
        )
    except Exception as exc:
        return _map_domain_error(request, exc, "cast_lookup_failed")
    return JSONResponse(content=[_format_actor(a) for a in actors])
