from pathlib import Path

import pytest

from gh_dockerfile.config import AppConfig
from gh_dockerfile.errors import ConfigError

_ENV_KEYS = [
    "OPENAI_API_KEY",
    "OPENAI_BASE_URL",
    "OPENAI_MODEL",
    "OPENAI_API_STYLE",
    "GITHUB_TOKEN",
    "GITHUB_ACCESS_TOKEN",
    "GH_TOKEN",
    "GITHUB_API_BASE",
    "GITHUB_RAW_BASE",
    "README_REF",
    "DOCKERFILE_OUTPUT",
    "DOCKERFILE_NO_COMMENTS",
    "REQUIRE_GITHUB_TOKEN",
    "HTTP_TIMEOUT_SECONDS",
    "MAX_OUTPUT_TOKENS",
]


def _clear_env(monkeypatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_app_config_defaults(monkeypatch):
    _clear_env(monkeypatch)
    config = AppConfig()

    assert config.openai_api_key is None
    assert config.openai_base_url == "https://api.openai.com/v1"
    assert config.model == "gpt-4o"
    assert config.api_style == "chat"
    assert config.github_token is None
    assert config.github_api_base == "https://api.github.com"
    assert config.github_raw_base == "https://raw.githubusercontent.com"
    assert config.readme_ref == "main"
    assert config.output_path == Path("Dockerfile")
    assert config.forbid_comments is False
    assert config.require_github_token is False
    assert config.http_timeout == 30.0
    assert config.max_output_tokens == 4096


def test_app_config_env_overrides(monkeypatch, tmp_path):
    _clear_env(monkeypatch)
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    monkeypatch.setenv("OPENAI_BASE_URL", "http://localhost:1234/v1")
    monkeypatch.setenv("OPENAI_MODEL", "local-model")
    monkeypatch.setenv("OPENAI_API_STYLE", "completions")
    monkeypatch.setenv("GH_TOKEN", "gh-env")
    monkeypatch.setenv("README_REF", "master")
    monkeypatch.setenv("DOCKERFILE_OUTPUT", str(tmp_path / "Dockerfile"))
    monkeypatch.setenv("DOCKERFILE_NO_COMMENTS", "yes")
    monkeypatch.setenv("REQUIRE_GITHUB_TOKEN", "1")
    monkeypatch.setenv("HTTP_TIMEOUT_SECONDS", "12.5")
    monkeypatch.setenv("MAX_OUTPUT_TOKENS", "2048")

    config = AppConfig()

    assert config.openai_api_key == "sk-env"
    assert config.openai_base_url == "http://localhost:1234/v1"
    assert config.model == "local-model"
    assert config.api_style == "completions"
    assert config.github_token == "gh-env"
    assert config.readme_ref == "master"
    assert config.output_path == tmp_path / "Dockerfile"
    assert config.forbid_comments is True
    assert config.require_github_token is True
    assert config.http_timeout == 12.5
    assert config.max_output_tokens == 2048


def test_github_token_precedence(monkeypatch):
    _clear_env(monkeypatch)
    monkeypatch.setenv("GITHUB_TOKEN", "primary")
    monkeypatch.setenv("GH_TOKEN", "fallback")
    assert AppConfig().github_token == "primary"


def test_validate_requires_api_key(monkeypatch):
    _clear_env(monkeypatch)
    with pytest.raises(ConfigError, match="OpenAI API key"):
        AppConfig().validate()
    with pytest.raises(ConfigError):
        AppConfig(openai_api_key="   ").validate()


def test_validate_github_token_only_when_required(monkeypatch):
    _clear_env(monkeypatch)
    AppConfig(openai_api_key="sk").validate()

    with pytest.raises(ConfigError, match="GitHub token"):
        AppConfig(openai_api_key="sk", require_github_token=True).validate()

    AppConfig(openai_api_key="sk", require_github_token=True, github_token="gh").validate()


def test_validate_rejects_unknown_api_style(monkeypatch):
    _clear_env(monkeypatch)
    with pytest.raises(ConfigError, match="API style"):
        AppConfig(openai_api_key="sk", api_style="responses").validate()


@pytest.mark.parametrize(
    "key, value",
    [("HTTP_TIMEOUT_SECONDS", "thirty"), ("MAX_OUTPUT_TOKENS", "4k")],
)
def test_malformed_numbers_raise_config_error(monkeypatch, key, value):
    _clear_env(monkeypatch)
    monkeypatch.setenv(key, value)
    with pytest.raises(ConfigError, match=key):
        AppConfig()


def test_validate_rejects_non_positive_limits(monkeypatch):
    _clear_env(monkeypatch)
    with pytest.raises(ConfigError):
        AppConfig(openai_api_key="sk", http_timeout=0).validate()
    with pytest.raises(ConfigError):
        AppConfig(openai_api_key="sk", max_output_tokens=-1).validate()
