import argparse
import logging
import sys
from pathlib import Path

from .config import AppConfig
from .errors import ConfigError, FetchError, GenerationError
from .pipeline import run_generation

logger = logging.getLogger("gh_dockerfile")

DEFAULT_REPO_URL = "https://github.com/facebook/react"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gh-dockerfile",
        description="Generate a Dockerfile for a GitHub repository using an LLM.",
    )
    parser.add_argument(
        "repo",
        nargs="?",
        default=DEFAULT_REPO_URL,
        help=f"GitHub repository URL (default: {DEFAULT_REPO_URL}).",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Where to write the Dockerfile (default: DOCKERFILE_OUTPUT or ./Dockerfile).",
    )
    parser.add_argument(
        "--model",
        help="Completion model identifier (overrides OPENAI_MODEL).",
    )
    parser.add_argument(
        "--api-base",
        help="OpenAI-compatible API base URL (overrides OPENAI_BASE_URL).",
    )
    parser.add_argument(
        "--api-key",
        help="Completion API key (overrides OPENAI_API_KEY).",
    )
    parser.add_argument(
        "--api-style",
        choices=["chat", "completions"],
        help="Use the chat or the legacy completions endpoint (default: chat).",
    )
    parser.add_argument(
        "--github-token",
        help="GitHub token sent as a bearer token (overrides GITHUB_TOKEN).",
    )
    parser.add_argument(
        "--readme-ref",
        help="Branch used to fetch the raw README (default: README_REF or main).",
    )
    parser.add_argument(
        "--no-comments",
        action="store_true",
        help="Ask for a Dockerfile without comments or explanations.",
    )
    parser.add_argument(
        "--require-github-token",
        action="store_true",
        help="Fail at startup when no GitHub token is configured.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="HTTP timeout in seconds (default: HTTP_TIMEOUT_SECONDS or 30).",
    )
    parser.add_argument(
        "--max-output-tokens",
        type=int,
        help="Token limit for legacy completions requests (default: MAX_OUTPUT_TOKENS or 4096).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.timeout is not None and args.timeout <= 0:
        parser.error("--timeout must be > 0.")
    if args.max_output_tokens is not None and args.max_output_tokens <= 0:
        parser.error("--max-output-tokens must be > 0.")

    try:
        config = _config_from_args(args)
        config.validate()
        result = run_generation(args.repo, config)
    except (ConfigError, FetchError, GenerationError, OSError) as exc:
        logger.error("An error occurred: %s", exc)
        return 1

    print(f"Dockerfile written to {result.output_path}")
    return 0


def _config_from_args(args: argparse.Namespace) -> AppConfig:
    config = AppConfig()
    if args.output:
        config.output_path = args.output
    if args.model:
        config.model = args.model
    if args.api_base:
        config.openai_base_url = str(args.api_base)
    if args.api_key:
        config.openai_api_key = args.api_key
    if args.api_style:
        config.api_style = args.api_style
    if args.github_token:
        config.github_token = args.github_token
    if args.readme_ref:
        config.readme_ref = args.readme_ref
    if args.no_comments:
        config.forbid_comments = True
    if args.require_github_token:
        config.require_github_token = True
    if args.timeout is not None:
        config.http_timeout = args.timeout
    if args.max_output_tokens is not None:
        config.max_output_tokens = args.max_output_tokens
    return config


if __name__ == "__main__":
    sys.exit(main())
