"""Credit aggregation: one deduplicated cast roster from several sources."""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from castfinder.application.services.fan_out import Settled, gather_settled
from castfinder.domain.entities.cast import (
    CreditRecord,
    PartialUpstreamError,
    TitleDetail,
    TitleRef,
)
from castfinder.domain.ports.tmdb import TmdbClientPort

log = structlog.get_logger(__name__)


def dedupe_credits(credits: Iterable[CreditRecord]) -> list[CreditRecord]:
    """Collapse credits to one per person, sorted by billing order.

    The kept credit is the one with the lowest effective order; on a tie the
    first-seen credit wins.  The sort is stable, so equal orders keep
    first-seen order as well.
    """
    best: dict[int, CreditRecord] = {}
    for credit in credits:
        current = best.get(credit.person_id)
        if current is None or credit.effective_order < current.effective_order:
            best[credit.person_id] = credit
    return sorted(best.values(), key=lambda c: c.effective_order)


class CreditAggregator:
    """Builds the cast roster of a movie or TV show.

    Movies: localized credits (primary) plus untranslated credits
    (best-effort), fetched in parallel.

    TV shows: primary credits, aggregate credits and title detail in
    parallel, then every season's credits in parallel.  Aggregate credits,
    title detail and each season are best-effort.

    Only a failing primary call is fatal; it is raised once its sibling
    branches have settled, and no season fan-out is issued after it.
    """

    def __init__(
        self,
        tmdb: TmdbClientPort,
        *,
        untranslated_movie_credits: bool = True,
    ) -> None:
        self._tmdb = tmdb
        self._untranslated_movie_credits = untranslated_movie_credits

    async def aggregate(self, title: TitleRef) -> list[CreditRecord]:
        if title.media_type == "movie":
            credits = await self._movie_credits(title.id)
        else:
            credits = await self._tv_credits(title.id)

        roster = dedupe_credits(credits)
        log.info(
            "cast_roster_built",
            title_id=title.id,
            media_type=title.media_type,
            credits=len(credits),
            roster=len(roster),
        )
        return roster

    async def _movie_credits(self, movie_id: int) -> list[CreditRecord]:
        calls = [self._tmdb.get_credits(movie_id, "movie")]
        if self._untranslated_movie_credits:
            calls.append(self._tmdb.get_credits(movie_id, "movie", localized=False))

        primary, *extra = await gather_settled(calls)
        if primary.error is not None:
            raise primary.error

        credits = list(primary.value or [])
        for outcome in extra:
            credits.extend(self._best_effort(outcome, "untranslated_credits", movie_id))
        return credits

    async def _tv_credits(self, tv_id: int) -> list[CreditRecord]:
        primary, aggregate, detail = await gather_settled(
            [
                self._tmdb.get_credits(tv_id, "tv"),
                self._tmdb.get_aggregate_credits(tv_id),
                self._tmdb.get_title_detail(tv_id),
            ]
        )

        if primary.error is not None:
            raise primary.error

        seasons = self._season_count(detail, tv_id)
        season_outcomes = await gather_settled(
            self._tmdb.get_season_credits(tv_id, number)
            for number in range(1, seasons + 1)
        )

        credits = list(primary.value or [])
        credits.extend(self._best_effort(aggregate, "aggregate_credits", tv_id))
        for number, outcome in enumerate(season_outcomes, start=1):
            credits.extend(
                self._best_effort(outcome, f"season_credits:{number}", tv_id)
            )
        return credits

    @staticmethod
    def _season_count(outcome: Settled[TitleDetail], tv_id: int) -> int:
        if outcome.error is not None:
            err = PartialUpstreamError("title_detail", outcome.error)
            log.warning(
                "partial_upstream_failure",
                title_id=tv_id,
                source=err.source,
                error=str(err.cause),
            )
            return 0
        return outcome.value.number_of_seasons if outcome.value else 0

    @staticmethod
    def _best_effort(
        outcome: Settled[list[CreditRecord]], source: str, title_id: int
    ) -> list[CreditRecord]:
        """Unwrap a best-effort branch: failures are logged and contribute nothing."""
        if outcome.error is None:
            return list(outcome.value or [])
        err = PartialUpstreamError(source, outcome.error)
        log.warning(
            "partial_upstream_failure",
            title_id=title_id,
            source=err.source,
            status=err.status_code,
            error=str(err.cause),
        )
        return []
