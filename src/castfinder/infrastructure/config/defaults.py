"""Hardcoded default configuration values.

TMDB credentials and endpoints are deliberately absent: they must come from
YAML, the environment or the CLI, otherwise validation fails.
"""

from __future__ import annotations

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "castfinder",
    "environment": "dev",
    "http": {
        "timeout_seconds": 15.0,
        "user_agent": "castfinder/0.1.0",
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
    "tmdb": {
        "language": "en-US",
        "placeholder_image_url": (
            "https://via.placeholder.com/500x750?text=No+Image+Available"
        ),
    },
    "cache": {
        "ttl_seconds": 300,
        "cache_cast_results": False,
    },
    "rate_limit": {
        "window_seconds": 10.0,
        "max_requests": 30,
    },
    "cast": {
        "untranslated_movie_credits": True,
    },
}
