from __future__ import annotations

import logging
from pathlib import Path

import typer

from op_scoreboard.config import DEFAULT_TOKEN_ENV, ResolverSettings, load_config
from op_scoreboard.errors import ResolverError
from op_scoreboard.github import GithubUserFetcher, GithubUserResolver
from op_scoreboard.schemas import GithubProfile
from op_scoreboard.scoreboard import (
    aggregate_scores,
    build_scoreboard,
    read_challenges,
    render_profile_table,
    render_scoreboard_table,
    write_scoreboard_json,
)
from op_scoreboard.storage import FileCache

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

app = typer.Typer(help="OS Programadores scoreboard CLI")


@app.command("resolve")
def resolve_users(
    usernames: list[str] = typer.Argument(..., help="GitHub usernames to look up."),
    cache_dir: Path | None = typer.Option(
        None,
        "--cache-dir",
        help="Cache directory for GitHub user data (overrides OP_SCOREBOARD_CACHE_DIR).",
    ),
    token_env: str = typer.Option(
        DEFAULT_TOKEN_ENV,
        "--token-env",
        help="Environment variable name for the GitHub API token.",
    ),
) -> None:
    """Resolve GitHub users through the local cache."""
    settings = _load_settings(cache_dir=cache_dir, token_env=token_env)
    resolver = build_resolver(settings)

    found: list[GithubProfile] = []
    missing: list[str] = []
    for username in usernames:
        try:
            profile = resolver.resolve(username, settings.token)
        except ResolverError as exc:
            typer.echo(f"error resolving {username}: {exc}", err=True)
            raise typer.Exit(code=1) from exc
        if profile is None:
            missing.append(username)
        else:
            found.append(profile)

    if found:
        typer.echo(render_profile_table(found))
    for username in missing:
        typer.echo(f"not found: {username}")
    typer.echo(f"found={len(found)} not_found={len(missing)}")


@app.command("scoreboard")
def scoreboard(
    config_path: Path = typer.Option(
        ...,
        "--config",
        help="Scoreboard config file path (TOML, JSON or YAML).",
        exists=True,
        dir_okay=False,
        readable=True,
    ),
    cache_dir: Path | None = typer.Option(
        None,
        "--cache-dir",
        help="Cache directory for GitHub user data (overrides OP_SCOREBOARD_CACHE_DIR).",
    ),
    json_out: Path | None = typer.Option(
        None,
        "--json-out",
        help="Optional output path for the scoreboard JSON.",
    ),
    token_env: str = typer.Option(
        DEFAULT_TOKEN_ENV,
        "--token-env",
        help="Environment variable name for the GitHub API token.",
    ),
) -> None:
    """Scan solved challenges, resolve players on GitHub and rank them."""
    try:
        config = load_config(config_path)
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc

    settings = _load_settings(cache_dir=cache_dir, token_env=token_env)
    resolver = build_resolver(settings)

    try:
        challenges = read_challenges(config.challenges_dir)
        scores = aggregate_scores(
            challenges,
            config.point_values,
            ignore_users=config.ignore_users,
        )
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc

    try:
        entries = build_scoreboard(scores, resolver, token=settings.token)
    except ResolverError as exc:
        typer.echo(f"error resolving github users: {exc}", err=True)
        raise typer.Exit(code=1) from exc

    typer.echo(render_scoreboard_table(entries))
    typer.echo(f"players={len(entries)} challenges={len(challenges)}")

    if json_out is not None:
        write_scoreboard_json(entries, json_out)
        typer.echo(f"json_out={json_out}")


def build_resolver(settings: ResolverSettings) -> GithubUserResolver:
    return GithubUserResolver(
        fetcher=GithubUserFetcher(max_tries=settings.max_tries),
        cache=FileCache(settings.cache_dir),
        positive_max_age_seconds=settings.positive_max_age_seconds,
        negative_max_age_seconds=settings.negative_max_age_seconds,
    )


def _load_settings(*, cache_dir: Path | None, token_env: str) -> ResolverSettings:
    try:
        settings = ResolverSettings.from_env(token_env=token_env)
    except ValueError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc

    if cache_dir is not None:
        settings = settings.model_copy(update={"cache_dir": cache_dir})
    return settings


def main() -> None:
    app()


if __name__ == "__main__":
    main()
