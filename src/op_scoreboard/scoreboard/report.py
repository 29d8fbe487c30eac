from __future__ import annotations

import json
from pathlib import Path

from op_scoreboard.schemas import GithubProfile, ScoreboardEntry


def render_scoreboard_table(entries: list[ScoreboardEntry]) -> str:
    if not entries:
        return "no players found"

    headers = ("rank", "user", "name", "points", "completed")
    line_rows = [
        (
            str(index),
            entry.github_user,
            _truncate(entry.full_name or "-", limit=32),
            str(entry.points),
            _truncate(",".join(entry.completed) or "-", limit=48),
        )
        for index, entry in enumerate(entries, start=1)
    ]
    return _render_table(headers=headers, rows=line_rows)


def render_profile_table(profiles: list[GithubProfile]) -> str:
    headers = ("login", "id", "name", "repos", "followers", "location")
    line_rows = [
        (
            profile.login,
            str(profile.id),
            _truncate(profile.name or "-", limit=32),
            str(profile.public_repos),
            str(profile.followers),
            _truncate(profile.location or "-", limit=32),
        )
        for profile in profiles
    ]
    return _render_table(headers=headers, rows=line_rows)


def write_scoreboard_json(entries: list[ScoreboardEntry], path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = [entry.model_dump(mode="json") for entry in entries]
    path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    return path


def _render_table(
    *,
    headers: tuple[str, ...],
    rows: list[tuple[str, ...]],
) -> str:
    if not rows:
        return "no rows"

    widths = [
        max(len(headers[column]), *(len(row[column]) for row in rows))
        for column in range(len(headers))
    ]

    def _line(values: tuple[str, ...]) -> str:
        return " | ".join(
            value.ljust(widths[index]) for index, value in enumerate(values)
        ).rstrip()

    divider = "-+-".join("-" * width for width in widths)
    body = [_line(headers), divider]
    body.extend(_line(row) for row in rows)
    return "\n".join(body)


def _truncate(text: str, *, limit: int) -> str:
    if len(text) <= limit:
        return text
    return f"{text[: limit - 3]}..."
