from __future__ import annotations

import json
from pathlib import Path

import pytest

from op_scoreboard.config import AppConfig, ResolverSettings, default_cache_dir, load_config

DAY = 24 * 60 * 60


def test_resolver_settings_defaults() -> None:
    settings = ResolverSettings.from_env({})

    assert settings.cache_dir == default_cache_dir()
    assert settings.max_tries == 10
    assert settings.token is None
    assert settings.positive_max_age_seconds == 30 * DAY
    assert settings.negative_max_age_seconds == 30 * DAY


def test_resolver_settings_from_environment(tmp_path) -> None:
    settings = ResolverSettings.from_env(
        {
            "OP_SCOREBOARD_CACHE_DIR": str(tmp_path / "cache"),
            "OP_SCOREBOARD_CACHE_TTL_DAYS": "14",
            "OP_SCOREBOARD_NEGATIVE_CACHE_TTL_DAYS": "2",
            "OP_SCOREBOARD_MAX_TRIES": "3",
            "GITHUB_TOKEN": " ghp_abc ",
        }
    )

    assert settings.cache_dir == tmp_path / "cache"
    assert settings.max_tries == 3
    assert settings.token == "ghp_abc"
    assert settings.positive_max_age_seconds == 14 * DAY
    assert settings.negative_max_age_seconds == 2 * DAY


def test_resolver_settings_custom_token_env() -> None:
    settings = ResolverSettings.from_env(
        {"GITHUB_TOKEN": "ignored", "OP_TOKEN": "used"}, token_env="OP_TOKEN"
    )
    assert settings.token == "used"


@pytest.mark.parametrize(
    "env",
    [
        {"OP_SCOREBOARD_MAX_TRIES": "0"},
        {"OP_SCOREBOARD_MAX_TRIES": "many"},
        {"OP_SCOREBOARD_CACHE_TTL_DAYS": "-1"},
    ],
)
def test_resolver_settings_rejects_invalid_environment(env) -> None:
    with pytest.raises(ValueError, match="Invalid environment configuration"):
        ResolverSettings.from_env(env)


def test_load_config_json(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps(
            {
                "challenges_dir": "/srv/op-desafios",
                "points": {"01": {"value": 10}, "02": {"value": 20}},
                "ignore_users": ["admin"],
            }
        ),
        encoding="utf-8",
    )

    config = load_config(path)

    assert isinstance(config, AppConfig)
    assert config.point_values == {"01": 10, "02": 20}
    assert config.ignore_users == ["admin"]


def test_load_config_yaml(tmp_path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(
        "challenges_dir: desafios\n"
        "points:\n"
        "  '01':\n"
        "    value: 5\n"
        "ignore_users: []\n",
        encoding="utf-8",
    )

    config = load_config(path)

    assert config.challenges_dir == "desafios"
    assert config.point_values == {"01": 5}


@pytest.mark.parametrize(
    "payload",
    [
        {"challenges_dir": "  "},
        {"points": {}},
        {"challenges_dir": "x", "unknown": 1},
    ],
)
def test_load_config_rejects_invalid_payload(tmp_path, payload) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps(payload), encoding="utf-8")

    with pytest.raises(ValueError, match="Invalid configuration"):
        load_config(path)


def test_load_config_rejects_non_object_root(tmp_path) -> None:
    path = Path(tmp_path / "config.json")
    path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(ValueError, match="root must be an object"):
        load_config(path)


def test_load_config_toml_in_original_layout(tmp_path) -> None:
    path = tmp_path / "config.toml"
    path.write_text(
        'website_dir = "/srv/op-website-hugo"\n'
        'challenges_dir = "/srv/op-desafios"\n'
        'template_dir = "templates"\n'
        'ignore_users = ["admin", "bot"]\n'
        "\n"
        "[points.01]\n"
        "value = 10\n"
        "\n"
        "[points.02]\n"
        "value = 25\n",
        encoding="utf-8",
    )

    config = load_config(path)

    assert config.challenges_dir == "/srv/op-desafios"
    assert config.website_dir == "/srv/op-website-hugo"
    assert config.template_dir == "templates"
    assert config.point_values == {"01": 10, "02": 25}
    assert config.ignore_users == ["admin", "bot"]


def test_load_config_rejects_invalid_toml(tmp_path) -> None:
    path = tmp_path / "config.toml"
    path.write_text("challenges_dir = \n", encoding="utf-8")

    with pytest.raises(ValueError, match="not valid TOML"):
        load_config(path)
