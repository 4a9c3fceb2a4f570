from __future__ import annotations

import asyncio
import logging
import re
from pathlib import Path

import httpx

from .completion import CompletionClient
from .config import AppConfig
from .github import GitHubFetcher
from .models import GenerationResult
from .prompt import build_prompt
from .writer import write_dockerfile

logger = logging.getLogger(__name__)

_FROM_RE = re.compile(r"^\s*FROM\s+\S+", re.IGNORECASE | re.MULTILINE)


def looks_like_dockerfile(text: str) -> bool:
    return bool(_FROM_RE.search(text))


async def generate_dockerfile(
    repo_url: str,
    config: AppConfig,
    *,
    output_path: Path | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> GenerationResult:
    """
    Fetch ``repo_url``, ask the model for a Dockerfile and write it to disk.

    Stages run strictly in order; the first failing stage's error propagates
    unchanged and nothing is written. Raises ``ConfigError`` before any
    request when a required credential is missing.
    """
    config.validate()
    destination = Path(output_path or config.output_path)
    owns_client = http_client is None
    client = http_client or httpx.AsyncClient(
        timeout=config.http_timeout, follow_redirects=True
    )
    try:
        fetcher = GitHubFetcher(config, client)
        logger.info("Fetching repository details for %s", repo_url)
        details = await fetcher.fetch_repo_details(repo_url)
        files = await fetcher.list_repo_files(repo_url)

        prompt = build_prompt(details, files, forbid_comments=config.forbid_comments)
        logger.debug("Prompt is %d characters", len(prompt))

        dockerfile = await CompletionClient(config, client).generate(prompt)
    finally:
        if owns_client:
            await client.aclose()

    logger.info("Generated Dockerfile:\n%s", dockerfile)
    if not looks_like_dockerfile(dockerfile):
        logger.warning("Generated text has no FROM instruction; writing it unchanged.")

    await write_dockerfile(dockerfile, destination)
    logger.info("Dockerfile has been written to %s", destination)

    return GenerationResult(
        output_path=str(destination),
        dockerfile=dockerfile,
        file_count=len(files),
    )


def run_generation(
    repo_url: str,
    config: AppConfig,
    *,
    output_path: Path | None = None,
) -> GenerationResult:
    return asyncio.run(generate_dockerfile(repo_url, config, output_path=output_path))
