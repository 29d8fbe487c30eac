from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import StrEnum
from urllib.parse import quote

import requests

GITHUB_API_BASE = "https://api.github.com"
DEFAULT_MAX_TRIES = 10

logger = logging.getLogger(__name__)


class FetchStatus(StrEnum):
    SUCCESS = "success"
    NOT_FOUND = "not_found"
    TRANSIENT = "transient"
    EXHAUSTED = "exhausted"


@dataclass(slots=True, frozen=True)
class FetchOutcome:
    status: FetchStatus
    payload: bytes = b""
    detail: str = ""
    attempts: int = 0

    @property
    def is_terminal(self) -> bool:
        return self.status is not FetchStatus.TRANSIENT


class GithubUserFetcher:
    """Fetches raw GitHub user JSON, retrying transient failures.

    A 404 is a definitive answer and stops immediately. Transport errors and
    every other non-2xx status are retried with exponential backoff until
    ``max_tries`` attempts have been made.
    """

    def __init__(
        self,
        *,
        session: requests.Session | None = None,
        api_base: str = GITHUB_API_BASE,
        max_tries: int = DEFAULT_MAX_TRIES,
        initial_backoff_seconds: float = 0.5,
        backoff_multiplier: float = 1.5,
        timeout_seconds: float | None = None,
    ) -> None:
        if max_tries < 1:
            raise ValueError("max_tries must be >= 1")
        if initial_backoff_seconds < 0:
            raise ValueError("initial_backoff_seconds must be >= 0")
        if backoff_multiplier < 1:
            raise ValueError("backoff_multiplier must be >= 1")
        if timeout_seconds is not None and timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0")

        self.session = session or requests.Session()
        self.api_base = api_base.rstrip("/")
        self.max_tries = max_tries
        self.initial_backoff_seconds = initial_backoff_seconds
        self.backoff_multiplier = backoff_multiplier
        self.timeout_seconds = timeout_seconds

    def fetch(self, username: str, token: str | None = None) -> FetchOutcome:
        logger.info("fetching data for github user %s", username)
        url = self.user_url(username)
        headers = self._build_headers(token)

        attempt = 0
        while attempt < self.max_tries:
            attempt += 1
            outcome = self._attempt(url=url, headers=headers, username=username, attempt=attempt)
            if outcome.is_terminal:
                return outcome

            logger.warning(outcome.detail)
            if attempt < self.max_tries:
                time.sleep(self.backoff_seconds(attempt))

        logger.error(
            "maximum number of retries reached (%d), user: %s", self.max_tries, username
        )
        return FetchOutcome(status=FetchStatus.EXHAUSTED, attempts=attempt)

    def user_url(self, username: str) -> str:
        return f"{self.api_base}/users/{quote(username, safe='')}"

    def backoff_seconds(self, attempt: int) -> float:
        return self.initial_backoff_seconds * self.backoff_multiplier ** (attempt - 1)

    def _attempt(
        self,
        *,
        url: str,
        headers: dict[str, str],
        username: str,
        attempt: int,
    ) -> FetchOutcome:
        try:
            response = self.session.get(url, headers=headers, timeout=self.timeout_seconds)
        except requests.RequestException as exc:
            return FetchOutcome(
                status=FetchStatus.TRANSIENT,
                detail=f"error on GET for github user {username!r}: {exc} (attempt {attempt})",
                attempts=attempt,
            )

        if response.status_code == 404:
            logger.info("github user not found: %s", username)
            return FetchOutcome(status=FetchStatus.NOT_FOUND, attempts=attempt)

        if not 200 <= response.status_code <= 299:
            return FetchOutcome(
                status=FetchStatus.TRANSIENT,
                detail=(
                    f"github returned status {response.status_code} ({response.reason}) "
                    f"for user {username!r} (attempt {attempt})"
                ),
                attempts=attempt,
            )

        return FetchOutcome(
            status=FetchStatus.SUCCESS, payload=response.content, attempts=attempt
        )

    @staticmethod
    def _build_headers(token: str | None) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": "op-scoreboard/0.1.0 (+https://github.com/osprogramadores)",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers
