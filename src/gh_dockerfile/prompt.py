from __future__ import annotations

from typing import Sequence

from .models import RepositoryFile, RepositoryMetadata

FILE_PREVIEW_CHARS = 200

_COMMENTED_SUFFIX = "Provide a complete and commented Dockerfile."
_NO_COMMENTS_SUFFIX = (
    "Provide a complete Dockerfile with no comments or explanations. "
    "Consider that what you return will be executed as Dockerfile.\n"
    "If you return any comments the Dockerfile will be wrong and will fail."
)


def file_preview(file: RepositoryFile, max_chars: int = FILE_PREVIEW_CHARS) -> str:
    return f"{file.name}: {file.content[:max_chars]}"


def build_prompt(
    details: RepositoryMetadata,
    files: Sequence[RepositoryFile],
    *,
    forbid_comments: bool = False,
) -> str:
    """
    Render the Dockerfile request for a repository.

    Content is embedded as-is; keeping the prompt within the model's input
    limit is left to the caller.
    """
    listing = "\n".join(file_preview(f) for f in files)
    suffix = _NO_COMMENTS_SUFFIX if forbid_comments else _COMMENTED_SUFFIX
    return (
        "Create a Dockerfile for a project with the following details:\n"
        f"- Repository Name: {details.name}\n"
        f"- Description: {details.description or ''}\n"
        f"- README Content: {details.readme}\n"
        f"- Files: {listing}\n"
        "\n"
        f"{suffix}"
    )
