from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Protocol

from op_scoreboard.schemas import (
    GithubProfile,
    PlayerChallenge,
    PlayerScore,
    ScoreboardEntry,
)

logger = logging.getLogger(__name__)


class ProfileResolver(Protocol):
    def resolve(self, username: str, token: str | None = None) -> GithubProfile | None:
        """Return the profile, or None when the user does not exist."""


def calc_score(challenge: PlayerChallenge, points: Mapping[str, int]) -> int:
    try:
        return points[challenge.challenge]
    except KeyError:
        raise ValueError(
            f"missing points configuration for: {challenge.challenge!r}"
        ) from None


def aggregate_scores(
    challenges: Iterable[PlayerChallenge],
    points: Mapping[str, int],
    *,
    ignore_users: Iterable[str] = (),
) -> dict[str, PlayerScore]:
    ignored = set(ignore_users)
    scores: dict[str, PlayerScore] = {}

    for challenge in challenges:
        if challenge.username in ignored:
            continue

        score = scores.setdefault(challenge.username, PlayerScore())
        score.points += calc_score(challenge, points)
        if challenge.challenge not in score.completed:
            score.completed.append(challenge.challenge)

    return scores


def build_scoreboard(
    scores: Mapping[str, PlayerScore],
    resolver: ProfileResolver,
    *,
    token: str | None = None,
) -> list[ScoreboardEntry]:
    """Resolve every player sequentially and rank them by points.

    Players unknown to GitHub are dropped. Resolver errors propagate.
    """
    entries: list[ScoreboardEntry] = []
    for username in sorted(scores):
        profile = resolver.resolve(username, token)
        if profile is None:
            logger.warning("skipping unknown github user=%s", username)
            continue

        score = scores[username]
        entries.append(
            ScoreboardEntry(
                full_name=profile.display_name,
                github_user=profile.login,
                avatar_url=profile.avatar_url,
                profile_url=profile.html_url,
                points=score.points,
                completed=list(score.completed),
            )
        )

    entries.sort(key=lambda entry: (-entry.points, entry.github_user.lower()))
    return entries
