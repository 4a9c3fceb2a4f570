from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from .config import AppConfig
from .errors import GenerationError
from .models import CompletionResponse

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a helpful assistant."


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.reason_phrase or f"HTTP {response.status_code}"
    # OpenAI-style errors nest under {"error": {"message": ...}}
    error = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error, dict):
        return str(error.get("message") or response.reason_phrase)
    return str(error or response.reason_phrase)


class CompletionClient:
    """Client for an OpenAI-compatible completion endpoint."""

    def __init__(self, config: AppConfig, client: httpx.AsyncClient) -> None:
        self._config = config
        self._client = client
        self._base_url = config.openai_base_url.rstrip("/")

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._config.openai_api_key}",
            "Content-Type": "application/json",
        }

    def _request_body(self, prompt: str) -> tuple[str, dict[str, Any]]:
        if self._config.api_style == "completions":
            return "/completions", {
                "model": self._config.model,
                "prompt": f"{SYSTEM_PROMPT}\n\n{prompt}",
                "max_tokens": self._config.max_output_tokens,
            }
        return "/chat/completions", {
            "model": self._config.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
        }

    async def _post(self, prompt: str) -> CompletionResponse:
        path, body = self._request_body(prompt)
        logger.info("Requesting completion from model '%s'", self._config.model)
        response = await self._client.post(
            f"{self._base_url}{path}", headers=self._headers(), json=body
        )
        if not response.is_success:
            raise httpx.HTTPStatusError(
                f"Completion API error {response.status_code}: {_error_message(response)}",
                request=response.request,
                response=response,
            )
        return CompletionResponse.model_validate(response.json())

    async def generate(self, prompt: str) -> str:
        try:
            response = await self._post(prompt)
        except (httpx.HTTPError, ValueError, ValidationError) as exc:
            logger.error("Error generating Dockerfile: %s", exc)
            raise GenerationError("Failed to generate Dockerfile") from exc

        if not response.choices:
            logger.error("Completion API returned an empty response.")
            raise GenerationError("Failed to generate Dockerfile")

        text = response.choices[0].output_text(self._config.api_style).strip()
        if not text:
            logger.error("Completion API returned an empty message content.")
            raise GenerationError("Failed to generate Dockerfile")
        return text
