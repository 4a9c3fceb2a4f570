from __future__ import annotations

import asyncio
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


async def write_dockerfile(dockerfile: str, path: str | Path) -> Path:
    """Write ``dockerfile`` to ``path`` verbatim, replacing any existing file."""
    target = Path(path)
    try:
        await asyncio.to_thread(target.write_text, dockerfile, encoding="utf-8", newline="")
    except OSError as exc:
        logger.error("Error writing Dockerfile to disk: %s", exc)
        raise
    return target
