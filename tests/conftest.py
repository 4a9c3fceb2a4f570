from __future__ import annotations

from pathlib import Path
from typing import Callable

import httpx
import pytest

from gh_dockerfile.config import AppConfig

API = "https://api.github.com"
RAW = "https://raw.githubusercontent.com"
OPENAI = "https://api.openai.com/v1"

Route = Callable[[httpx.Request], httpx.Response]


def json_route(payload, status_code: int = 200) -> Route:
    return lambda request: httpx.Response(status_code, json=payload)


def text_route(text: str, status_code: int = 200) -> Route:
    return lambda request: httpx.Response(status_code, text=text)


class FakeGitHub:
    """Routes requests to canned responses and records every URL requested."""

    def __init__(self, routes: dict[str, Route] | None = None) -> None:
        self.routes: dict[str, Route] = dict(routes or {})
        self.calls: list[str] = []
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.calls.append(url)
        self.requests.append(request)
        route = self.routes.get(url)
        if route is None:
            return httpx.Response(404, json={"message": "Not Found"})
        return route(request)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


def make_config(tmp_path: Path, **overrides) -> AppConfig:
    values = dict(
        openai_api_key="sk-test",
        openai_base_url=OPENAI,
        model="gpt-4o",
        api_style="chat",
        github_token="gh-test",
        github_api_base=API,
        github_raw_base=RAW,
        readme_ref="main",
        output_path=tmp_path / "Dockerfile",
        forbid_comments=False,
        require_github_token=False,
        http_timeout=5.0,
        max_output_tokens=4096,
    )
    values.update(overrides)
    return AppConfig(**values)


def sample_repo_routes(repo: str = "example/app") -> dict[str, Route]:
    return {
        f"{API}/repos/{repo}": json_route(
            {
                "name": "app",
                "description": "Example service",
                "html_url": f"https://github.com/{repo}",
            }
        ),
        f"{RAW}/{repo}/main/README.md": text_route("# App\n\nRun with `npm start`."),
        f"{API}/repos/{repo}/contents": json_route(
            [
                {
                    "name": "package.json",
                    "type": "file",
                    "download_url": f"{RAW}/{repo}/main/package.json",
                },
                {"name": "src", "type": "dir", "download_url": None},
                {
                    "name": "index.js",
                    "type": "file",
                    "download_url": f"{RAW}/{repo}/main/index.js",
                },
            ]
        ),
        f"{RAW}/{repo}/main/package.json": json_route({"name": "app", "scripts": {"start": "node index.js"}}),
        f"{RAW}/{repo}/main/index.js": text_route("console.log('hi');\n"),
    }


def chat_route(content: str | None) -> Route:
    return json_route(
        {
            "model": "gpt-4o",
            "choices": [{"index": 0, "message": {"role": "assistant", "content": content}}],
        }
    )


@pytest.fixture
def config(tmp_path):
    return make_config(tmp_path)
