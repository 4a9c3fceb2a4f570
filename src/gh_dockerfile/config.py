from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from .errors import ConfigError

load_dotenv()


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_number(name: str, default: str, cast: type) -> float | int:
    raw = os.getenv(name, default)
    try:
        return cast(raw.strip())
    except ValueError as exc:
        raise ConfigError(f"Invalid value for {name}: {raw!r}") from exc


@dataclass(slots=True)
class AppConfig:
    """
    Runtime configuration for the Dockerfile generator.

    Users can override defaults through environment variables:
      - ``OPENAI_API_KEY``: API key for the completion provider (required).
      - ``OPENAI_BASE_URL``: OpenAI-compatible API base URL.
      - ``OPENAI_MODEL``: Completion model identifier.
      - ``OPENAI_API_STYLE``: ``chat`` (default) or legacy ``completions``.
      - ``GITHUB_TOKEN``: Optional bearer token sent on every GitHub request
        (``GITHUB_ACCESS_TOKEN`` and ``GH_TOKEN`` are accepted as fallbacks).
      - ``REQUIRE_GITHUB_TOKEN``: Set truthy to make a missing token fatal.
      - ``README_REF``: Branch used for the raw README lookup.
      - ``DOCKERFILE_OUTPUT``: Destination path for the generated Dockerfile.
      - ``DOCKERFILE_NO_COMMENTS``: Set truthy to ask the model for a
        comment-free Dockerfile.
      - ``HTTP_TIMEOUT_SECONDS``: Transport timeout for every HTTP request.
      - ``MAX_OUTPUT_TOKENS``: Token limit sent with legacy completions requests.

    A malformed numeric variable raises ``ConfigError`` at construction.
    """
    openai_api_key: str | None = field(
        default_factory=lambda: os.getenv("OPENAI_API_KEY")
    )
    openai_base_url: str = field(
        default_factory=lambda: os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
    )
    model: str = field(default_factory=lambda: os.getenv("OPENAI_MODEL", "gpt-4o"))
    api_style: str = field(
        default_factory=lambda: os.getenv("OPENAI_API_STYLE", "chat")
    )
    github_token: str | None = field(
        default_factory=lambda: os.getenv("GITHUB_TOKEN")
        or os.getenv("GITHUB_ACCESS_TOKEN")
        or os.getenv("GH_TOKEN")
    )
    github_api_base: str = field(
        default_factory=lambda: os.getenv("GITHUB_API_BASE", "https://api.github.com")
    )
    github_raw_base: str = field(
        default_factory=lambda: os.getenv(
            "GITHUB_RAW_BASE", "https://raw.githubusercontent.com"
        )
    )
    readme_ref: str = field(default_factory=lambda: os.getenv("README_REF", "main"))
    output_path: Path = field(
        default_factory=lambda: Path(os.getenv("DOCKERFILE_OUTPUT", "Dockerfile"))
    )
    forbid_comments: bool = field(
        default_factory=lambda: _env_flag("DOCKERFILE_NO_COMMENTS", False)
    )
    require_github_token: bool = field(
        default_factory=lambda: _env_flag("REQUIRE_GITHUB_TOKEN", False)
    )
    http_timeout: float = field(
        default_factory=lambda: _env_number("HTTP_TIMEOUT_SECONDS", "30", float)
    )
    max_output_tokens: int = field(
        default_factory=lambda: _env_number("MAX_OUTPUT_TOKENS", "4096", int)
    )

    def validate(self) -> None:
        """Raise ``ConfigError`` when a mandatory credential or limit is invalid."""
        if not (self.openai_api_key or "").strip():
            raise ConfigError("Missing OpenAI API key in environment variables")
        if self.require_github_token and not (self.github_token or "").strip():
            raise ConfigError("Missing GitHub token in environment variables")
        if self.api_style not in {"chat", "completions"}:
            raise ConfigError(
                f"Unsupported API style {self.api_style!r} (expected 'chat' or 'completions')"
            )
        if self.http_timeout <= 0:
            raise ConfigError("HTTP timeout must be > 0")
        if self.max_output_tokens <= 0:
            raise ConfigError("MAX_OUTPUT_TOKENS must be > 0")
