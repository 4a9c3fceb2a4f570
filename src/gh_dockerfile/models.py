from __future__ import annotations

import base64
import binascii
import json
from dataclasses import dataclass
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class RepositoryMetadata:
    """Repository facts fed into the prompt."""

    name: str
    description: str | None
    url: str
    readme: str


@dataclass(frozen=True)
class RepositoryFile:
    name: str
    content: str


@dataclass
class GenerationResult:
    """Outcome of a successful run."""

    output_path: str
    dockerfile: str
    file_count: int


# File content as returned by the different GitHub content references.


@dataclass(frozen=True)
class PlainText:
    text: str

    def decode(self) -> str:
        return self.text


@dataclass(frozen=True)
class Base64Payload:
    data: str

    def decode(self) -> str:
        # GitHub wraps base64 blob content at 60 columns.
        try:
            raw = base64.b64decode("".join(self.data.split()), validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ValueError(f"Invalid base64 content: {exc}") from exc
        return raw.decode("utf-8", "replace")


@dataclass(frozen=True)
class StructuredJSON:
    value: Any

    def decode(self) -> str:
        return json.dumps(self.value, separators=(",", ":"), ensure_ascii=False)


FileContent = PlainText | Base64Payload | StructuredJSON


# Validated subsets of the JSON payloads the tool reads.


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore")


class RepoPayload(_Payload):
    name: str
    description: str | None = None
    html_url: str


class ContentEntry(_Payload):
    name: str
    type: str
    download_url: str | None = None
    git_url: str | None = None


class BlobPayload(_Payload):
    content: str
    encoding: str = "base64"


class ChatMessage(_Payload):
    role: str = "assistant"
    content: str | None = None


class CompletionChoice(_Payload):
    index: int = 0
    message: ChatMessage | None = None
    text: str | None = None

    def output_text(self, style: Literal["chat", "completions"]) -> str:
        if style == "chat":
            return (self.message.content if self.message else None) or ""
        return self.text or ""


class CompletionResponse(_Payload):
    model: str | None = None
    choices: list[CompletionChoice] = Field(default_factory=list)
