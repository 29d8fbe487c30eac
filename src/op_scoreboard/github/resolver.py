from __future__ import annotations

import logging

from pydantic import ValidationError

from op_scoreboard.errors import MaxRetriesError, ProfileDecodeError
from op_scoreboard.schemas import GithubProfile, validate_json
from op_scoreboard.storage import (
    DEFAULT_MAX_AGE_SECONDS,
    KIND_USER,
    FileCache,
    NegativeCache,
)

from .fetcher import FetchStatus, GithubUserFetcher

logger = logging.getLogger(__name__)


class GithubUserResolver:
    """Resolves usernames to profiles through the negative cache, the
    positive cache and finally the GitHub API.

    ``resolve`` returns ``None`` for users GitHub confirmed as absent and
    raises a ``ResolverError`` for everything else that goes wrong.
    """

    def __init__(
        self,
        *,
        fetcher: GithubUserFetcher,
        cache: FileCache,
        positive_max_age_seconds: float = DEFAULT_MAX_AGE_SECONDS,
        negative_max_age_seconds: float | None = None,
    ) -> None:
        if positive_max_age_seconds < 0:
            raise ValueError("positive_max_age_seconds must be >= 0")
        if negative_max_age_seconds is None:
            negative_max_age_seconds = positive_max_age_seconds

        self.fetcher = fetcher
        self.cache = cache
        self.positive_max_age_seconds = positive_max_age_seconds
        self.negative_cache = NegativeCache(cache, max_age_seconds=negative_max_age_seconds)

    def resolve(self, username: str, token: str | None = None) -> GithubProfile | None:
        if self.negative_cache.contains(username):
            logger.info("github user known not to exist (cached): %s", username)
            return None

        cached = self.cache.read(username, KIND_USER, self.positive_max_age_seconds)
        if cached is not None:
            try:
                return decode_profile(cached)
            except ProfileDecodeError as exc:
                # A torn write is treated like an expired entry and refetched.
                logger.warning(
                    "file_cache corrupt entry user=%s path=%s: %s",
                    username,
                    self.cache.path_for(username, KIND_USER),
                    exc,
                )

        outcome = self.fetcher.fetch(username, token)
        if outcome.status is FetchStatus.EXHAUSTED:
            raise MaxRetriesError(username, self.fetcher.max_tries)
        if outcome.status is FetchStatus.NOT_FOUND:
            self.negative_cache.mark(username)
            return None

        profile = decode_profile(outcome.payload)
        self.cache.write(username, KIND_USER, outcome.payload)
        return profile


def decode_profile(payload: bytes) -> GithubProfile:
    try:
        profile = validate_json(GithubProfile, payload)
    except ValidationError as exc:
        raise ProfileDecodeError(f"error decoding github data: {exc}") from exc

    if not profile.login:
        raw = payload.decode("utf-8", errors="replace")
        raise ProfileDecodeError(f"got bad json from github: {raw}")
    return profile
