from __future__ import annotations

import json
import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

ENV_CACHE_DIR = "OP_SCOREBOARD_CACHE_DIR"
ENV_CACHE_TTL_DAYS = "OP_SCOREBOARD_CACHE_TTL_DAYS"
ENV_NEGATIVE_CACHE_TTL_DAYS = "OP_SCOREBOARD_NEGATIVE_CACHE_TTL_DAYS"
ENV_MAX_TRIES = "OP_SCOREBOARD_MAX_TRIES"
DEFAULT_TOKEN_ENV = "GITHUB_TOKEN"

_SECONDS_PER_DAY = 24 * 60 * 60


def default_cache_dir() -> Path:
    return Path.home() / ".cache" / "op-scoreboard"


class ResolverSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    cache_dir: Path = Field(default_factory=default_cache_dir)
    cache_ttl_days: float = Field(default=30.0, ge=0.0)
    negative_cache_ttl_days: float | None = Field(default=None, ge=0.0)
    max_tries: int = Field(default=10, ge=1)
    token: str | None = None

    @field_validator("token")
    @classmethod
    def normalize_token(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None

    @property
    def positive_max_age_seconds(self) -> float:
        return self.cache_ttl_days * _SECONDS_PER_DAY

    @property
    def negative_max_age_seconds(self) -> float:
        days = self.negative_cache_ttl_days
        if days is None:
            days = self.cache_ttl_days
        return days * _SECONDS_PER_DAY

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        token_env: str = DEFAULT_TOKEN_ENV,
    ) -> ResolverSettings:
        env = os.environ if environ is None else environ
        payload: dict[str, Any] = {}

        cache_dir = env.get(ENV_CACHE_DIR, "").strip()
        if cache_dir:
            payload["cache_dir"] = Path(cache_dir).expanduser()
        for env_name, field_name in (
            (ENV_CACHE_TTL_DAYS, "cache_ttl_days"),
            (ENV_NEGATIVE_CACHE_TTL_DAYS, "negative_cache_ttl_days"),
            (ENV_MAX_TRIES, "max_tries"),
        ):
            raw = env.get(env_name, "").strip()
            if raw:
                payload[field_name] = raw
        payload["token"] = env.get(token_env)

        try:
            return cls.model_validate(payload)
        except ValidationError as exc:
            raise ValueError(f"Invalid environment configuration: {exc}") from exc


class PointConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    value: int


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    challenges_dir: str
    # Read by the site generator, not by this tool.
    website_dir: str | None = None
    template_dir: str | None = None
    points: dict[str, PointConfig] = Field(default_factory=dict)
    ignore_users: list[str] = Field(default_factory=list)

    @field_validator("challenges_dir")
    @classmethod
    def validate_challenges_dir(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError("challenges_dir is empty")
        return normalized

    @property
    def point_values(self) -> dict[str, int]:
        return {challenge: point.value for challenge, point in self.points.items()}


def load_config(path: str | Path) -> AppConfig:
    config_path = Path(path)
    raw = config_path.read_text(encoding="utf-8")
    if config_path.suffix.lower() == ".toml":
        payload = _parse_toml(raw)
    else:
        payload = _parse_yaml_or_json(raw)
    try:
        return AppConfig.model_validate(payload)
    except ValidationError as exc:
        raise ValueError(f"Invalid configuration: {exc}") from exc


def _parse_yaml_or_json(raw: str) -> dict[str, Any]:
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        parsed = _parse_yaml(raw)
    if not isinstance(parsed, dict):
        raise ValueError("Configuration root must be an object.")
    return parsed


def _parse_yaml(raw: str) -> dict[str, Any]:
    import yaml

    try:
        parsed = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ValueError(f"Configuration is neither valid JSON nor YAML: {exc}") from exc
    if not isinstance(parsed, dict):
        raise ValueError("Configuration root must be an object.")
    return parsed


def _parse_toml(raw: str) -> dict[str, Any]:
    try:
        return tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Configuration is not valid TOML: {exc}") from exc
