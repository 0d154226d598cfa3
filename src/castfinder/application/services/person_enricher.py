"""Person enrichment: attach biographical detail to every roster entry."""

from __future__ import annotations

import re

import structlog

from castfinder.application.services.fan_out import gather_settled
from castfinder.domain.entities.cast import (
    CreditRecord,
    EnrichedActor,
    PartialUpstreamError,
    PersonDetail,
)
from castfinder.domain.ports.tmdb import TmdbClientPort

log = structlog.get_logger(__name__)

_LEADING_INT = re.compile(r"\s*(\d+)")


def parse_year(raw: str | int | None) -> int | None:
    """Leading integer of a year string (``"2010-07-16"`` -> 2010).

    Missing, non-numeric and zero values yield None.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw or None
    match = _LEADING_INT.match(raw)
    if match is None:
        return None
    return int(match.group(1)) or None


def sort_actors(actors: list[EnrichedActor]) -> list[EnrichedActor]:
    """Billing order ascending, ties broken by popularity descending."""
    return sorted(actors, key=lambda a: (a.order, -a.popularity))


class PersonEnricher:
    """Concurrently merges person detail into each credit of a roster.

    One lookup per roster entry, all issued at once; the batch resolves only
    after every lookup has settled.  A failed lookup drops that person from
    the output and never fails the batch.

    Args:
        tmdb: Provider client.
        image_base_url: Prefix for relative profile image paths.
        placeholder_image_url: Used when a credit has no profile image.
    """

    def __init__(
        self,
        tmdb: TmdbClientPort,
        *,
        image_base_url: str,
        placeholder_image_url: str,
    ) -> None:
        self._tmdb = tmdb
        self._image_base_url = image_base_url
        self._placeholder_image_url = placeholder_image_url

    async def enrich(
        self,
        roster: list[CreditRecord],
        movie_year: str | int | None = None,
    ) -> list[EnrichedActor]:
        year = parse_year(movie_year)
        outcomes = await gather_settled(
            self._tmdb.get_person_detail(credit.person_id) for credit in roster
        )

        actors: list[EnrichedActor] = []
        for credit, outcome in zip(roster, outcomes):
            if outcome.error is not None or outcome.value is None:
                err = PartialUpstreamError(
                    f"person_detail:{credit.person_id}",
                    outcome.error or LookupError("empty person detail"),
                )
                log.warning(
                    "cast_member_dropped",
                    person_id=credit.person_id,
                    name=credit.name,
                    source=err.source,
                    error=str(err.cause),
                )
                continue
            actors.append(self._merge(credit, outcome.value, year))

        if len(actors) < len(roster):
            log.info("cast_enrichment_partial", kept=len(actors), roster=len(roster))
        return sort_actors(actors)

    def _image_url(self, profile_path: str | None) -> str:
        if not profile_path:
            return self._placeholder_image_url
        return f"{self._image_base_url}{profile_path}"

    def _merge(
        self, credit: CreditRecord, detail: PersonDetail, movie_year: int | None
    ) -> EnrichedActor:
        return EnrichedActor(
            person_id=credit.person_id,
            name=credit.name,
            role=credit.character,
            order=credit.effective_order,
            image_url=self._image_url(credit.profile_path),
            profile_path=credit.profile_path,
            birth_year=detail.birth_date.year if detail.birth_date else None,
            movie_year=movie_year,
            popularity=detail.popularity,
            gender=detail.gender,
            known_for_department=detail.known_for_department,
        )
