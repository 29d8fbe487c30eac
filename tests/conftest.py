from __future__ import annotations

import json

import pytest
import requests

import op_scoreboard.github.fetcher as fetcher_module


class FakeResponse:
    def __init__(self, *, status_code: int, payload: object = None, reason: str = "") -> None:
        self.status_code = status_code
        self.reason = reason or ("OK" if status_code < 400 else "Error")
        if isinstance(payload, bytes):
            self.content = payload
        else:
            self.content = json.dumps(payload if payload is not None else {}).encode("utf-8")


class FakeSession:
    """Queue of responses (or exceptions) returned by successive GETs."""

    def __init__(self, responses: list[FakeResponse | Exception]) -> None:
        self.responses = list(responses)
        self.calls: list[dict[str, object]] = []

    def get(self, url: str, *, headers: dict[str, str], timeout: float | None) -> FakeResponse:
        self.calls.append({"url": url, "headers": dict(headers), "timeout": timeout})
        if not self.responses:
            raise RuntimeError("no response queued")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def profile_payload(login: str, **overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "login": login,
        "id": 1001,
        "node_id": "MDQ6VXNlcjEwMDE=",
        "avatar_url": f"https://avatars.githubusercontent.com/u/1001?v=4&{login}",
        "gravatar_id": "",
        "url": f"https://api.github.com/users/{login}",
        "html_url": f"https://github.com/{login}",
        "type": "User",
        "site_admin": False,
        "name": login.capitalize(),
        "company": None,
        "blog": "",
        "location": "Sao Paulo",
        "email": None,
        "hireable": None,
        "bio": None,
        "public_repos": 12,
        "public_gists": 1,
        "followers": 34,
        "following": 5,
        "created_at": "2015-03-01T12:00:00Z",
        "updated_at": "2024-06-01T08:30:00Z",
    }
    payload.update(overrides)
    return payload


def ok(login: str, **overrides: object) -> FakeResponse:
    return FakeResponse(status_code=200, payload=profile_payload(login, **overrides))


def connection_error() -> requests.ConnectionError:
    return requests.ConnectionError("connection refused")


@pytest.fixture
def sleeps(monkeypatch) -> list[float]:
    recorded: list[float] = []
    monkeypatch.setattr(fetcher_module.time, "sleep", recorded.append)
    return recorded
