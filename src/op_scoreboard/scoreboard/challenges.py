from __future__ import annotations

from pathlib import Path

from op_scoreboard.schemas import PlayerChallenge

# Layout is <challenges_dir>/desafio-<challenge>/<username>
CHALLENGES_GLOB = "desafio-*/*"


def read_challenges(challenges_dir: str | Path) -> list[PlayerChallenge]:
    """Return every (username, challenge) pair found under challenges_dir."""
    root = Path(challenges_dir)
    collected: list[PlayerChallenge] = []
    for path in sorted(root.glob(CHALLENGES_GLOB)):
        username, challenge = parse_path(path)
        collected.append(PlayerChallenge(username=username, challenge=challenge))
    return collected


def parse_path(path: str | Path) -> tuple[str, str]:
    elems = Path(path).parts
    if len(elems) < 2:
        raise ValueError(f"invalid file/dir: {str(path)!r}")

    username = elems[-1]
    dirname = elems[-2]

    pieces = dirname.split("-")
    if len(pieces) != 2:
        raise ValueError(f"invalid directory format: {dirname!r}")
    return username, pieces[1]
