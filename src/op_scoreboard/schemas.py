from __future__ import annotations

from datetime import datetime
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

TModel = TypeVar("TModel", bound=BaseModel)


class DTOBase(BaseModel):
    model_config = ConfigDict(extra="forbid")


class GithubProfile(BaseModel):
    """Public profile returned by GitHub's ``/users/{username}`` endpoint."""

    # GitHub adds fields over time; only the ones below are kept.
    model_config = ConfigDict(extra="ignore")

    login: str = ""
    id: int = 0
    node_id: str = ""
    name: str | None = None
    avatar_url: str = ""
    gravatar_id: str | None = None
    url: str = ""
    html_url: str = ""
    type: str = ""
    site_admin: bool = False
    company: str | None = None
    blog: str | None = None
    location: str | None = None
    email: str | None = None
    hireable: str | None = None
    bio: str | None = None
    public_repos: int = 0
    public_gists: int = 0
    followers: int = 0
    following: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator(
        "name",
        "gravatar_id",
        "company",
        "blog",
        "location",
        "email",
        "hireable",
        "bio",
        mode="before",
    )
    @classmethod
    def coerce_optional_text(cls, value: Any) -> str | None:
        if value is None or isinstance(value, str):
            return value
        if isinstance(value, bool):
            return str(value).lower()
        if isinstance(value, (int, float)):
            return str(value)
        raise ValueError(f"expected string or null, got {type(value).__name__}")

    @property
    def display_name(self) -> str:
        return (self.name or "").strip() or self.login


class PlayerChallenge(DTOBase):
    username: str
    challenge: str


class PlayerScore(DTOBase):
    points: int = 0
    completed: list[str] = Field(default_factory=list)


class ScoreboardEntry(DTOBase):
    full_name: str
    github_user: str
    avatar_url: str
    profile_url: str
    points: int
    completed: list[str] = Field(default_factory=list)


def validate_json(model_cls: type[TModel], payload: str | bytes | bytearray) -> TModel:
    return model_cls.model_validate_json(payload)
