"""TMDB API client: async httpx implementation."""

from __future__ import annotations

from datetime import date
from typing import Any

import httpx
import structlog

from castfinder.domain.entities.cast import (
    GENDER_UNKNOWN,
    UNKNOWN_DEPARTMENT,
    CreditRecord,
    MediaType,
    PersonDetail,
    TitleDetail,
    UpstreamError,
)

log = structlog.get_logger(__name__)

_GENERIC_FAILURE = "Failed to fetch data from TMDB API"


def _parse_date(raw: Any) -> date | None:
    """Parse TMDB's ``YYYY-MM-DD`` dates; empty or malformed -> None."""
    if not raw or not isinstance(raw, str):
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError:
        return None


def _credit_from_cast(item: dict[str, Any]) -> CreditRecord:
    return CreditRecord(
        person_id=int(item.get("id")),
        name=item.get("name") or "",
        character=item.get("character") or "",
        order=item.get("order"),
        profile_path=item.get("profile_path"),
    )


def _credit_from_aggregate(item: dict[str, Any]) -> CreditRecord:
    # aggregate_credits lists every role a person played across seasons
    characters = [
        role["character"] for role in item.get("roles") or [] if role.get("character")
    ]
    return CreditRecord(
        person_id=int(item.get("id")),
        name=item.get("name") or "",
        character=" / ".join(characters),
        order=item.get("order"),
        profile_path=item.get("profile_path"),
    )


def _cast_entries(data: dict[str, Any]) -> list[dict[str, Any]]:
    # entries without a person id cannot be deduplicated or enriched
    return [item for item in data.get("cast") or [] if item.get("id") is not None]


class HttpxTmdbClient:
    """Async TMDB client using httpx.

    Implements ``TmdbClientPort`` from domain.ports.tmdb.  Failures are
    raised as ``UpstreamError``; there is no retry and no caching here.
    """

    def __init__(
        self,
        *,
        api_key: str,
        http_client: httpx.AsyncClient,
        base_url: str,
        language: str = "en-US",
    ) -> None:
        self._api_key = api_key
        self._http = http_client
        self._base_url = base_url.rstrip("/")
        self._language = language

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _params(self, *, localized: bool = True, **extra: Any) -> dict[str, Any]:
        """Build query params with api_key and (optionally) the locale."""
        params: dict[str, Any] = {"api_key": self._api_key}
        if localized:
            params["language"] = self._language
        params.update(extra)
        return params

    @staticmethod
    def _error_message(resp: httpx.Response) -> str:
        """Prefer TMDB's ``status_message``, fall back to the HTTP status."""
        try:
            body = resp.json()
        except ValueError:
            body = None
        detail = body.get("status_message") if isinstance(body, dict) else None
        return f"TMDB API error: {detail or resp.status_code}"

    async def _get(
        self, path: str, *, localized: bool = True, **extra: Any
    ) -> dict[str, Any]:
        """GET request returning parsed JSON, raising UpstreamError on failure."""
        url = f"{self._base_url}{path}"
        try:
            resp = await self._http.get(
                url, params=self._params(localized=localized, **extra)
            )
        except httpx.HTTPError as exc:
            log.warning("tmdb_network_error", path=path, error=str(exc))
            raise UpstreamError(_GENERIC_FAILURE) from exc

        if resp.status_code == 401:
            log.error("tmdb_api_key_invalid", status=401)
        if not resp.is_success:
            message = self._error_message(resp)
            log.warning(
                "tmdb_http_error", path=path, status=resp.status_code, message=message
            )
            raise UpstreamError(message, status_code=resp.status_code)

        try:
            return resp.json()
        except ValueError as exc:
            log.warning("tmdb_invalid_json", path=path)
            raise UpstreamError(_GENERIC_FAILURE, status_code=resp.status_code) from exc

    # ------------------------------------------------------------------
    # Public API (TmdbClientPort)
    # ------------------------------------------------------------------

    async def search_multi(self, query: str, page: int = 1) -> dict[str, Any]:
        """Multi-search over movies, TV shows and people (adult titles excluded)."""
        return await self._get(
            "/search/multi", query=query, page=page, include_adult="false"
        )

    async def get_credits(
        self,
        title_id: int,
        media_type: MediaType,
        *,
        localized: bool = True,
    ) -> list[CreditRecord]:
        data = await self._get(f"/{media_type}/{title_id}/credits", localized=localized)
        return [_credit_from_cast(item) for item in _cast_entries(data)]

    async def get_aggregate_credits(self, tv_id: int) -> list[CreditRecord]:
        data = await self._get(f"/tv/{tv_id}/aggregate_credits")
        return [_credit_from_aggregate(item) for item in _cast_entries(data)]

    async def get_season_credits(
        self, tv_id: int, season_number: int
    ) -> list[CreditRecord]:
        data = await self._get(f"/tv/{tv_id}/season/{season_number}/credits")
        return [_credit_from_cast(item) for item in _cast_entries(data)]

    async def get_person_detail(self, person_id: int) -> PersonDetail:
        data = await self._get(f"/person/{person_id}")
        return PersonDetail(
            person_id=int(data.get("id") or person_id),
            birth_date=_parse_date(data.get("birthday")),
            popularity=float(data.get("popularity") or 0.0),
            gender=int(data.get("gender") or GENDER_UNKNOWN),
            known_for_department=data.get("known_for_department")
            or UNKNOWN_DEPARTMENT,
        )

    async def get_title_detail(self, tv_id: int) -> TitleDetail:
        data = await self._get(f"/tv/{tv_id}")
        return TitleDetail(
            id=int(data.get("id") or tv_id),
            number_of_seasons=int(data.get("number_of_seasons") or 0),
        )
