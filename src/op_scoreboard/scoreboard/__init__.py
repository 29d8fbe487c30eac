"""Challenge scanning, scoring and scoreboard output."""

from .challenges import parse_path, read_challenges
from .report import render_profile_table, render_scoreboard_table, write_scoreboard_json
from .scoring import aggregate_scores, build_scoreboard, calc_score

__all__ = [
    "aggregate_scores",
    "build_scoreboard",
    "calc_score",
    "parse_path",
    "read_challenges",
    "render_profile_table",
    "render_scoreboard_table",
    "write_scoreboard_json",
]
