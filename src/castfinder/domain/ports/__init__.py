from .cache import ResultCachePort
from .rate_limiter import RateLimiterPort
from .tmdb import TmdbClientPort

__all__ = [
    "RateLimiterPort",
    "ResultCachePort",
    "TmdbClientPort",
]
