"""Tests for cast domain entities and errors."""

from __future__ import annotations

import dataclasses

import pytest

from castfinder.domain.entities import (
    LEAST_PROMINENT_ORDER,
    CastFinderError,
    CreditRecord,
    PartialUpstreamError,
    PersonDetail,
    RateLimitError,
    TitleRef,
    UpstreamError,
)


class TestCreditRecord:
    def test_effective_order_uses_rank(self) -> None:
        credit = CreditRecord(person_id=1, name="A", order=3)
        assert credit.effective_order == 3

    def test_missing_order_is_least_prominent(self) -> None:
        credit = CreditRecord(person_id=1, name="A")
        assert credit.order is None
        assert credit.effective_order == LEAST_PROMINENT_ORDER

    def test_zero_order_is_kept(self) -> None:
        credit = CreditRecord(person_id=1, name="A", order=0)
        assert credit.effective_order == 0

    def test_is_frozen(self) -> None:
        credit = CreditRecord(person_id=1, name="A")
        with pytest.raises(dataclasses.FrozenInstanceError):
            credit.name = "B"  # type: ignore[misc]


class TestPersonDetail:
    def test_defaults(self) -> None:
        detail = PersonDetail(person_id=7)
        assert detail.birth_date is None
        assert detail.popularity == 0.0
        assert detail.gender == 0
        assert detail.known_for_department == "Unknown"


class TestTitleRef:
    def test_equality(self) -> None:
        assert TitleRef(id=27205, media_type="movie") == TitleRef(
            id=27205, media_type="movie"
        )


class TestErrors:
    def test_hierarchy(self) -> None:
        assert issubclass(UpstreamError, CastFinderError)
        assert issubclass(PartialUpstreamError, UpstreamError)
        assert issubclass(RateLimitError, CastFinderError)

    def test_upstream_error_carries_status(self) -> None:
        err = UpstreamError("TMDB API error: Invalid id", status_code=404)
        assert err.status_code == 404
        assert err.message == "TMDB API error: Invalid id"
        assert str(err) == "TMDB API error: Invalid id"

    def test_partial_error_wraps_cause(self) -> None:
        cause = UpstreamError("boom", status_code=500)
        err = PartialUpstreamError("season_credits:3", cause)
        assert err.source == "season_credits:3"
        assert err.cause is cause
        assert err.status_code == 500
        assert "season_credits:3" in str(err)

    def test_partial_error_without_status(self) -> None:
        err = PartialUpstreamError("person_detail:1", RuntimeError("x"))
        assert err.status_code is None

    def test_rate_limit_default_message(self) -> None:
        err = RateLimitError(retry_after_seconds=10)
        assert err.retry_after_seconds == 10
        assert "Too many requests" in str(err)
