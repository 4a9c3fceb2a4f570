"""LLM-powered Dockerfile generation for GitHub repositories."""

from .config import AppConfig
from .errors import ConfigError, FetchError, GenerationError
from .github import GitHubFetcher, repo_path_from_url
from .completion import CompletionClient
from .models import GenerationResult, RepositoryFile, RepositoryMetadata
from .pipeline import generate_dockerfile, run_generation
from .prompt import build_prompt
from .writer import write_dockerfile

__all__ = [
    "AppConfig",
    "CompletionClient",
    "ConfigError",
    "FetchError",
    "GenerationError",
    "GenerationResult",
    "GitHubFetcher",
    "RepositoryFile",
    "RepositoryMetadata",
    "build_prompt",
    "generate_dockerfile",
    "repo_path_from_url",
    "run_generation",
    "write_dockerfile",
]
