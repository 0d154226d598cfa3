"""Port for TMDB API operations."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from castfinder.domain.entities.cast import (
    CreditRecord,
    MediaType,
    PersonDetail,
    TitleDetail,
)


@runtime_checkable
class TmdbClientPort(Protocol):
    """Async interface for TMDB API lookups.

    Every method raises ``UpstreamError`` on a non-success status or a
    transport failure.  Implementations never retry.
    """

    async def search_multi(self, query: str, page: int = 1) -> dict[str, Any]:
        """Raw multi-search response (movies, TV shows and people)."""
        ...

    async def get_credits(
        self,
        title_id: int,
        media_type: MediaType,
        *,
        localized: bool = True,
    ) -> list[CreditRecord]:
        """Cast credits of a movie or TV show.

        ``localized=False`` omits the language parameter and returns the
        provider's untranslated credit list.
        """
        ...

    async def get_aggregate_credits(self, tv_id: int) -> list[CreditRecord]:
        """Cast credits aggregated over every season of a TV show."""
        ...

    async def get_season_credits(
        self, tv_id: int, season_number: int
    ) -> list[CreditRecord]:
        """Cast credits of one TV season."""
        ...

    async def get_person_detail(self, person_id: int) -> PersonDetail:
        """Biographical detail for one person."""
        ...

    async def get_title_detail(self, tv_id: int) -> TitleDetail:
        """TV show detail (season count)."""
        ...
