"""Shared test fixtures for castfinder test suite."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from castfinder.domain.entities.cast import PersonDetail, TitleDetail

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def _default_person(person_id: int) -> PersonDetail:
    return PersonDetail(
        person_id=person_id,
        popularity=1.0,
        gender=2,
        known_for_department="Acting",
    )


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def mock_tmdb() -> AsyncMock:
    """Mock TmdbClientPort with empty-but-valid default answers."""
    tmdb = AsyncMock()
    tmdb.search_multi = AsyncMock(
        return_value={"results": [], "total_results": 0, "total_pages": 0}
    )
    tmdb.get_credits = AsyncMock(return_value=[])
    tmdb.get_aggregate_credits = AsyncMock(return_value=[])
    tmdb.get_season_credits = AsyncMock(return_value=[])
    tmdb.get_person_detail = AsyncMock(side_effect=_default_person)
    tmdb.get_title_detail = AsyncMock(return_value=TitleDetail(id=0))
    return tmdb


@pytest.fixture()
def mock_cache() -> AsyncMock:
    """Mock ResultCachePort."""
    cache = AsyncMock()
    cache.get = AsyncMock(return_value=None)
    cache.set = AsyncMock()
    return cache
