"""Tests for the /api/search and /api/movie-cast endpoints."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from castfinder.domain.entities.cast import (
    BadRequestError,
    EnrichedActor,
    RateLimitError,
    SearchPage,
    SearchResultItem,
    UpstreamError,
)
from castfinder.interfaces.api.cast.router import register_exception_handlers, router

_ACTOR = EnrichedActor(
    person_id=6193,
    name="Leonardo DiCaprio",
    role="Cobb",
    order=0,
    image_url="https://image.tmdb.org/t/p/w500/wo2hJpn04vbtmh0B9utCFdsQhxM.jpg",
    profile_path="/wo2hJpn04vbtmh0B9utCFdsQhxM.jpg",
    birth_year=1974,
    movie_year=2010,
    popularity=48.2,
    gender=2,
    known_for_department="Acting",
)


def _make_app(environment: str = "dev") -> tuple[FastAPI, AsyncMock, AsyncMock]:
    app = FastAPI()
    app.include_router(router)
    register_exception_handlers(app)

    search_uc = AsyncMock()
    cast_uc = AsyncMock()
    app.state.config = MagicMock(environment=environment)
    app.state.title_search_uc = search_uc
    app.state.cast_lookup_uc = cast_uc
    return app, search_uc, cast_uc


@pytest.fixture()
def app_and_mocks() -> tuple[FastAPI, AsyncMock, AsyncMock]:
    return _make_app()


# ---------------------------------------------------------------------------
# GET /api/search
# ---------------------------------------------------------------------------


class TestSearchEndpoint:
    def test_success(self, app_and_mocks) -> None:
        app, search_uc, _ = app_and_mocks
        search_uc.execute.return_value = SearchPage(
            results=[
                SearchResultItem(
                    id=27205,
                    title="Inception",
                    media_type="movie",
                    poster_path="https://image.tmdb.org/t/p/w500/x.jpg",
                    release_date="2010-07-15",
                )
            ],
            total_results=1,
            total_pages=1,
        )
        client = TestClient(app)

        resp = client.get("/api/search", params={"query": "Inception", "page": 2})

        assert resp.status_code == 200
        body = resp.json()
        assert body["total_results"] == 1
        assert body["total_pages"] == 1
        assert body["results"][0]["id"] == 27205
        assert body["results"][0]["title"] == "Inception"
        assert body["results"][0]["media_type"] == "movie"
        assert body["results"][0]["poster_path"].startswith("https://")
        search_uc.execute.assert_awaited_once_with(
            "Inception", 2, client_id="testclient"
        )

    def test_missing_query_is_400(self, app_and_mocks) -> None:
        app, search_uc, _ = app_and_mocks
        search_uc.execute.side_effect = BadRequestError("Search query is required")
        client = TestClient(app)

        resp = client.get("/api/search")

        assert resp.status_code == 400
        assert resp.json() == {"error": "Search query is required"}

    def test_rate_limited_is_429_with_retry_after(self, app_and_mocks) -> None:
        app, search_uc, _ = app_and_mocks
        search_uc.execute.side_effect = RateLimitError(retry_after_seconds=10.0)
        client = TestClient(app)

        resp = client.get("/api/search", params={"query": "x"})

        assert resp.status_code == 429
        assert resp.headers["Retry-After"] == "10"
        assert resp.json() == {"error": "Too many requests. Please try again later."}

    def test_upstream_failure_is_502(self, app_and_mocks) -> None:
        app, search_uc, _ = app_and_mocks
        search_uc.execute.side_effect = UpstreamError(
            "Failed to fetch data from TMDB API"
        )
        client = TestClient(app)

        resp = client.get("/api/search", params={"query": "x"})

        assert resp.status_code == 502
        assert resp.json() == {"error": "Failed to fetch data from TMDB API"}

    def test_unexpected_error_is_500(self, app_and_mocks) -> None:
        app, search_uc, _ = app_and_mocks
        search_uc.execute.side_effect = RuntimeError("boom")
        client = TestClient(app)

        resp = client.get("/api/search", params={"query": "x"})

        assert resp.status_code == 500
        assert resp.json() == {"error": "boom"}

    def test_unexpected_error_hidden_in_prod(self) -> None:
        app, search_uc, _ = _make_app(environment="prod")
        search_uc.execute.side_effect = RuntimeError("secret detail")
        client = TestClient(app)

        resp = client.get("/api/search", params={"query": "x"})

        assert resp.status_code == 500
        assert resp.json() == {"error": "An unexpected error occurred"}


# ---------------------------------------------------------------------------
# POST /api/movie-cast
# ---------------------------------------------------------------------------


class TestMovieCastEndpoint:
    def test_success_uses_client_keys(self, app_and_mocks) -> None:
        app, _, cast_uc = app_and_mocks
        cast_uc.execute.return_value = [_ACTOR]
        client = TestClient(app)

        resp = client.post(
            "/api/movie-cast",
            json={"id": 27205, "mediaType": "movie", "year": "2010", "title": "Inception"},
        )

        assert resp.status_code == 200
        assert resp.json() == [
            {
                "id": 6193,
                "name": "Leonardo DiCaprio",
                "imageUrl": _ACTOR.image_url,
                "birthYear": 1974,
                "movieYear": 2010,
                "role": "Cobb",
                "order": 0,
                "popularity": 48.2,
                "gender": 2,
                "known_for_department": "Acting",
                "profile_path": "/wo2hJpn04vbtmh0B9utCFdsQhxM.jpg",
            }
        ]
        cast_uc.execute.assert_awaited_once_with(
            27205, "movie", "2010", client_id="testclient"
        )

    def test_missing_birth_year_is_null(self, app_and_mocks) -> None:
        app, _, cast_uc = app_and_mocks
        cast_uc.execute.return_value = [
            EnrichedActor(person_id=1, name="A", role="", order=999, image_url="p")
        ]
        client = TestClient(app)

        resp = client.post("/api/movie-cast", json={"id": 1, "mediaType": "tv"})

        [actor] = resp.json()
        assert actor["birthYear"] is None
        assert actor["movieYear"] is None

    def test_missing_fields_forwarded_to_use_case(self, app_and_mocks) -> None:
        app, _, cast_uc = app_and_mocks
        cast_uc.execute.side_effect = BadRequestError(
            "Movie ID and media type are required"
        )
        client = TestClient(app)

        resp = client.post("/api/movie-cast", json={"mediaType": "movie"})

        assert resp.status_code == 400
        assert resp.json() == {"error": "Movie ID and media type are required"}
        cast_uc.execute.assert_awaited_once_with(
            None, "movie", None, client_id="testclient"
        )

    def test_upstream_message_surfaces(self, app_and_mocks) -> None:
        app, _, cast_uc = app_and_mocks
        cast_uc.execute.side_effect = UpstreamError(
            "TMDB API error: Invalid API key: You must be granted a valid key.",
            status_code=401,
        )
        client = TestClient(app)

        resp = client.post("/api/movie-cast", json={"id": 1, "mediaType": "movie"})

        assert resp.status_code == 502
        assert "Invalid API key" in resp.json()["error"]

    def test_rate_limited(self, app_and_mocks) -> None:
        app, _, cast_uc = app_and_mocks
        cast_uc.execute.side_effect = RateLimitError(retry_after_seconds=10.0)
        client = TestClient(app)

        resp = client.post("/api/movie-cast", json={"id": 1, "mediaType": "movie"})

        assert resp.status_code == 429
        assert resp.headers["Retry-After"] == "10"


# ---------------------------------------------------------------------------
# Malformed requests
# ---------------------------------------------------------------------------


class TestMalformedRequests:
    def test_non_integer_page_is_400(self, app_and_mocks) -> None:
        app, search_uc, _ = app_and_mocks
        client = TestClient(app)

        resp = client.get("/api/search", params={"query": "x", "page": "abc"})

        assert resp.status_code == 400
        assert list(resp.json()) == ["error"]
        assert resp.json()["error"].startswith("Invalid page")
        search_uc.execute.assert_not_awaited()

    def test_non_integer_id_is_400(self, app_and_mocks) -> None:
        app, _, cast_uc = app_and_mocks
        client = TestClient(app)

        resp = client.post("/api/movie-cast", json={"id": "abc", "mediaType": "movie"})

        assert resp.status_code == 400
        assert resp.json()["error"].startswith("Invalid id")
        cast_uc.execute.assert_not_awaited()

    def test_non_string_media_type_is_400(self, app_and_mocks) -> None:
        app, _, cast_uc = app_and_mocks
        client = TestClient(app)

        resp = client.post("/api/movie-cast", json={"id": 1, "mediaType": ["movie"]})

        assert resp.status_code == 400
        assert resp.json()["error"].startswith("Invalid mediaType")
        cast_uc.execute.assert_not_awaited()

    def test_malformed_json_is_400(self, app_and_mocks) -> None:
        app, _, cast_uc = app_and_mocks
        client = TestClient(app)

        resp = client.post(
            "/api/movie-cast",
            content=b'{"id": 1,',
            headers={"Content-Type": "application/json"},
        )

        assert resp.status_code == 400
        assert resp.json() == {"error": "Invalid JSON body"}
        cast_uc.execute.assert_not_awaited()

