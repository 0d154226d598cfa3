"""Domain entities for cast resolution.

Pure value objects and domain errors: no framework dependencies, no I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Literal

MediaType = Literal["movie", "tv"]

MEDIA_TYPES: frozenset[str] = frozenset({"movie", "tv"})

# Billing rank assumed for credits the provider sent without an ``order``.
# Larger than any real rank, so such credits sort as least prominent.
LEAST_PROMINENT_ORDER = 999

GENDER_UNKNOWN = 0
UNKNOWN_DEPARTMENT = "Unknown"


@dataclass(frozen=True)
class TitleRef:
    """A movie or TV show as identified by the provider."""

    id: int
    media_type: MediaType


@dataclass(frozen=True)
class CreditRecord:
    """One source's claim that a person appears in a title."""

    person_id: int
    name: str
    character: str = ""
    order: int | None = None  # billing rank, lower = more prominent
    profile_path: str | None = None

    @property
    def effective_order(self) -> int:
        """Billing rank with the least-prominent sentinel for missing values."""
        return LEAST_PROMINENT_ORDER if self.order is None else self.order


@dataclass(frozen=True)
class PersonDetail:
    """Biographical and popularity data for one person."""

    person_id: int
    birth_date: date | None = None
    popularity: float = 0.0
    gender: int = GENDER_UNKNOWN  # 0 unknown, 1 female, 2 male
    known_for_department: str = UNKNOWN_DEPARTMENT


@dataclass(frozen=True)
class TitleDetail:
    """The subset of TV title detail needed for season fan-out."""

    id: int
    number_of_seasons: int = 0


@dataclass(frozen=True)
class EnrichedActor:
    """A credit merged with the person's detail and the title's release year."""

    person_id: int
    name: str
    role: str
    order: int
    image_url: str
    profile_path: str | None = None
    birth_year: int | None = None
    movie_year: int | None = None
    popularity: float = 0.0
    gender: int = GENDER_UNKNOWN
    known_for_department: str = UNKNOWN_DEPARTMENT


@dataclass(frozen=True)
class SearchResultItem:
    """A movie or TV match from a multi-search, ready for display."""

    id: int
    title: str
    media_type: MediaType
    poster_path: str | None = None  # absolute image URL
    release_date: str | None = None
    first_air_date: str | None = None
    overview: str = ""
    vote_average: float | None = None


@dataclass(frozen=True)
class SearchPage:
    """One page of filtered search results."""

    results: list[SearchResultItem] = field(default_factory=list)
    total_results: int = 0
    total_pages: int = 0


class CastFinderError(Exception):
    """Base error for cast lookup domain/usecases."""


class BadRequestError(CastFinderError):
    """Request rejected before any cache, rate-limit or upstream work."""


class RateLimitError(CastFinderError):
    """Caller exceeded its admission budget; retry later."""

    def __init__(
        self,
        message: str = "Too many requests. Please try again later.",
        *,
        retry_after_seconds: float = 10.0,
    ) -> None:
        super().__init__(message)
        self.retry_after_seconds = retry_after_seconds


class UpstreamError(CastFinderError):
    """The metadata provider failed or could not be reached."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class PartialUpstreamError(UpstreamError):
    """A best-effort sub-call failed; logged and otherwise ignored."""

    def __init__(self, source: str, cause: BaseException) -> None:
        status_code = getattr(cause, "status_code", None)
        super().__init__(f"{source}: {cause}", status_code=status_code)
        self.source = source
        self.cause = cause
