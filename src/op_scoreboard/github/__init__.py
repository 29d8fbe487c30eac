"""GitHub user lookups with retry and caching."""

from .fetcher import FetchOutcome, FetchStatus, GithubUserFetcher
from .resolver import GithubUserResolver, decode_profile

__all__ = [
    "FetchOutcome",
    "FetchStatus",
    "GithubUserFetcher",
    "GithubUserResolver",
    "decode_profile",
]
