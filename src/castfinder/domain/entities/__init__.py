from .cast import (
    LEAST_PROMINENT_ORDER,
    MEDIA_TYPES,
    BadRequestError,
    CastFinderError,
    CreditRecord,
    EnrichedActor,
    MediaType,
    PartialUpstreamError,
    PersonDetail,
    RateLimitError,
    SearchPage,
    SearchResultItem,
    TitleDetail,
    TitleRef,
    UpstreamError,
)

__all__ = [
    "LEAST_PROMINENT_ORDER",
    "MEDIA_TYPES",
    "BadRequestError",
    "CastFinderError",
    "CreditRecord",
    "EnrichedActor",
    "MediaType",
    "PartialUpstreamError",
    "PersonDetail",
    "RateLimitError",
    "SearchPage",
    "SearchResultItem",
    "TitleDetail",
    "TitleRef",
    "UpstreamError",
]
