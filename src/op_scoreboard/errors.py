from __future__ import annotations


class ResolverError(Exception):
    """Base class for failures while resolving a GitHub user."""


class CacheStorageError(ResolverError):
    """Cache read, write or directory creation failed."""


class TransportError(ResolverError):
    """GitHub could not be reached or kept answering with retriable errors."""


class MaxRetriesError(TransportError):
    def __init__(self, username: str, max_tries: int) -> None:
        super().__init__(
            f"maximum number of retries reached ({max_tries}), user: {username}"
        )
        self.username = username
        self.max_tries = max_tries


class ProfileDecodeError(ResolverError):
    """GitHub returned a payload that is not a valid user profile."""
