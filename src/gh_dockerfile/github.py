"""
github.py

Responsibility: all direct GitHub interaction.

This module is the only place that:
- Derives REST endpoints and raw content URLs from a repository URL
- Sends HTTP requests to api.github.com / raw.githubusercontent.com
- Normalizes the different content references into plain text
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable

import httpx
from pydantic import ValidationError

from .config import AppConfig
from .errors import FetchError
from .models import (
    Base64Payload,
    BlobPayload,
    ContentEntry,
    FileContent,
    PlainText,
    RepoPayload,
    RepositoryFile,
    RepositoryMetadata,
    StructuredJSON,
)

logger = logging.getLogger(__name__)

GITHUB_HOST_PREFIX = "https://github.com/"
_USER_AGENT = "gh-dockerfile"


def repo_path_from_url(repo_url: str) -> str:
    """Return ``owner/repo`` for a ``https://github.com/<owner>/<repo>`` URL."""
    url = repo_url.strip()
    if not url.startswith(GITHUB_HOST_PREFIX):
        raise FetchError(f"Not a GitHub repository URL: {repo_url}")
    path = url[len(GITHUB_HOST_PREFIX):].strip("/")
    if path.endswith(".git"):
        path = path[: -len(".git")]
    parts = path.split("/")
    if len(parts) != 2 or not all(parts):
        raise FetchError(f"Not a GitHub repository URL: {repo_url}")
    return path


def resolve_content(entry: ContentEntry, response: httpx.Response) -> FileContent:
    """Pick the content variant for one listing entry's fetched reference."""
    if not entry.download_url:
        blob = BlobPayload.model_validate(response.json())
        if blob.encoding == "base64":
            return Base64Payload(blob.content)
        return PlainText(blob.content)
    if "json" in response.headers.get("content-type", ""):
        try:
            return StructuredJSON(response.json())
        except ValueError:
            pass
    return PlainText(response.text)


async def gather_or_cancel(*aws: Awaitable[Any]) -> list[Any]:
    """
    Await all of ``aws`` concurrently and return their results in order.

    On the first failure the still-pending siblings are cancelled and awaited
    before the error propagates, so none of them outlives the shared client.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


def _log_failure(what: str, url: str, exc: Exception) -> None:
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        logger.error("Error fetching %s (%s): HTTP %s", what, url, status)
        if status == 404:
            logger.error("Not found. Please check the repository URL.")
        elif status == 403:
            logger.error("Access denied. Please check your access token and permissions.")
        else:
            logger.error("Unexpected error occurred: %s", exc.response.reason_phrase)
    elif isinstance(exc, httpx.RequestError):
        logger.error("No response received for %s (%s): %s", what, url, exc)
    else:
        logger.error("Error setting up the request for %s: %s", what, exc)


class GitHubFetcher:
    def __init__(self, config: AppConfig, client: httpx.AsyncClient) -> None:
        self._config = config
        self._client = client
        self._api_base = config.github_api_base.rstrip("/")
        self._raw_base = config.github_raw_base.rstrip("/")

    def _headers(self, *, api: bool = True) -> dict[str, str]:
        headers = {"User-Agent": _USER_AGENT}
        if api:
            headers["Accept"] = "application/vnd.github+json"
            headers["X-GitHub-Api-Version"] = "2022-11-28"
        if self._config.github_token:
            headers["Authorization"] = f"Bearer {self._config.github_token}"
        return headers

    async def _get(self, url: str, what: str, *, api: bool = True) -> httpx.Response:
        logger.debug("GET %s", url)
        try:
            response = await self._client.get(url, headers=self._headers(api=api))
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            _log_failure(what, url, exc)
            raise FetchError(f"Request for {what} failed: {exc}") from exc
        return response

    async def _get_json(self, url: str, what: str) -> Any:
        response = await self._get(url, what)
        try:
            return response.json()
        except ValueError as exc:
            logger.error("Unparseable response body for %s (%s)", what, url)
            raise FetchError(f"Unparseable response body for {what}") from exc

    async def fetch_repo_details(self, repo_url: str) -> RepositoryMetadata:
        repo_path = repo_path_from_url(repo_url)
        api_url = f"{self._api_base}/repos/{repo_path}"
        readme_url = f"{self._raw_base}/{repo_path}/{self._config.readme_ref}/README.md"

        try:
            repo_data, readme_response = await gather_or_cancel(
                self._get_json(api_url, "repository metadata"),
                self._get(readme_url, "README", api=False),
            )
            repo = RepoPayload.model_validate(repo_data)
        except (FetchError, ValidationError) as exc:
            logger.error("Error fetching repository details: %s", exc)
            raise FetchError("Failed to fetch repository details") from exc

        return RepositoryMetadata(
            name=repo.name,
            description=repo.description,
            url=repo.html_url,
            readme=readme_response.text,
        )

    async def fetch_file(self, entry: ContentEntry) -> RepositoryFile:
        if entry.download_url:
            response = await self._get(entry.download_url, entry.name, api=False)
        elif entry.git_url:
            response = await self._get(entry.git_url, entry.name)
        else:
            raise FetchError(f"No content reference for {entry.name}")
        try:
            content = resolve_content(entry, response).decode()
        except (ValueError, ValidationError) as exc:
            logger.error("Could not decode content of %s: %s", entry.name, exc)
            raise FetchError(f"Could not decode content of {entry.name}") from exc
        return RepositoryFile(name=entry.name, content=content)

    async def list_repo_files(self, repo_url: str) -> list[RepositoryFile]:
        repo_path = repo_path_from_url(repo_url)
        api_url = f"{self._api_base}/repos/{repo_path}/contents"

        try:
            listing = await self._get_json(api_url, "repository contents")
            if not isinstance(listing, list):
                raise FetchError("Contents listing is not an array")
            entries = [ContentEntry.model_validate(item) for item in listing]

            async def _maybe_fetch(entry: ContentEntry) -> RepositoryFile | None:
                if entry.type != "file":
                    return None
                return await self.fetch_file(entry)

            fetched = await gather_or_cancel(*(_maybe_fetch(entry) for entry in entries))
        except (FetchError, ValidationError) as exc:
            logger.error("Error listing repository files: %s", exc)
            raise FetchError("Failed to list repository files") from exc

        files = [item for item in fetched if item is not None]
        logger.info("Fetched %d of %d top-level entries", len(files), len(entries))
        return files
