from __future__ import annotations

import hashlib
import logging
import time
from pathlib import Path

from op_scoreboard.errors import CacheStorageError

logger = logging.getLogger(__name__)

DEFAULT_MAX_AGE_SECONDS = 30 * 24 * 60 * 60

KIND_USER = "user"
KIND_NOT_FOUND = "notfound"

_DIR_MODE = 0o755


class FileCache:
    """Per-user file cache whose freshness is anchored on the file mtime.

    Expired entries are ignored on read but never deleted; the next write
    simply overwrites them.
    """

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def path_for(self, username: str, kind: str) -> Path:
        if not kind:
            raise ValueError("kind must not be empty")
        return self.directory / f"{self._sha1_key(username)}.{kind}"

    def read(self, username: str, kind: str, max_age_seconds: float) -> bytes | None:
        if max_age_seconds < 0:
            raise ValueError("max_age_seconds must be >= 0")

        data_path = self.path_for(username, kind)
        try:
            if not data_path.exists():
                logger.info(
                    "file_cache miss user=%s kind=%s reason=not_found", username, kind
                )
                return None

            age = time.time() - data_path.stat().st_mtime
            if age > max_age_seconds:
                logger.info(
                    "file_cache miss user=%s kind=%s reason=expired age_seconds=%d",
                    username,
                    kind,
                    age,
                )
                return None

            payload = data_path.read_bytes()
        except OSError as exc:
            raise CacheStorageError(
                f"error reading cache entry {data_path} for user {username!r}: {exc}"
            ) from exc

        logger.info("file_cache hit user=%s kind=%s", username, kind)
        return payload

    def write(self, username: str, kind: str, payload: bytes) -> Path:
        data_path = self.path_for(username, kind)
        try:
            data_path.parent.mkdir(parents=True, exist_ok=True, mode=_DIR_MODE)
        except OSError as exc:
            raise CacheStorageError(
                f"error creating cache directory {data_path.parent}: {exc}"
            ) from exc

        try:
            data_path.write_bytes(payload)
        except OSError as exc:
            raise CacheStorageError(
                f"error writing cache entry {data_path} for user {username!r}: {exc}"
            ) from exc

        logger.info("file_cache set user=%s kind=%s bytes=%d", username, kind, len(payload))
        return data_path

    @staticmethod
    def _sha1_key(key: str) -> str:
        return hashlib.sha1(key.encode("utf-8")).hexdigest()


class NegativeCache:
    """Remembers users GitHub confirmed as absent."""

    def __init__(
        self,
        cache: FileCache,
        max_age_seconds: float = DEFAULT_MAX_AGE_SECONDS,
    ) -> None:
        if max_age_seconds < 0:
            raise ValueError("max_age_seconds must be >= 0")
        self.cache = cache
        self.max_age_seconds = max_age_seconds

    def contains(self, username: str) -> bool:
        return self.cache.read(username, KIND_NOT_FOUND, self.max_age_seconds) is not None

    def mark(self, username: str) -> Path:
        return self.cache.write(username, KIND_NOT_FOUND, b"")
