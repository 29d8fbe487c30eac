"""OS Programadores scoreboard with cached GitHub user lookups."""

from .config import AppConfig, ResolverSettings, load_config
from .errors import (
    CacheStorageError,
    MaxRetriesError,
    ProfileDecodeError,
    ResolverError,
    TransportError,
)
from .schemas import GithubProfile, PlayerChallenge, PlayerScore, ScoreboardEntry

__all__ = [
    "AppConfig",
    "CacheStorageError",
    "GithubProfile",
    "MaxRetriesError",
    "PlayerChallenge",
    "PlayerScore",
    "ProfileDecodeError",
    "ResolverError",
    "ResolverSettings",
    "ScoreboardEntry",
    "TransportError",
    "load_config",
]
