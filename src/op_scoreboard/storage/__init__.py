"""File-backed caches for GitHub user lookups."""

from .cache import (
    DEFAULT_MAX_AGE_SECONDS,
    KIND_NOT_FOUND,
    KIND_USER,
    FileCache,
    NegativeCache,
)

__all__ = [
    "DEFAULT_MAX_AGE_SECONDS",
    "KIND_NOT_FOUND",
    "KIND_USER",
    "FileCache",
    "NegativeCache",
]
