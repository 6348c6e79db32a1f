"""Filename generation and image download helpers."""

from __future__ import annotations

import re
import time
from pathlib import Path

import httpx

from ..constants import FILENAME_PROMPT_MAX_LENGTH


def generate_filename(prompt: str, extension: str = "jpg", now_ms: int | None = None) -> str:
    """Filesystem-safe name derived from a prompt.

    Lowercased, every non-alphanumeric turned into `-`, runs collapsed,
    cut to 50 characters, then `-<epoch ms>.<extension>` appended.
    """
    clean = re.sub(r"[^a-z0-9]", "-", prompt.lower())
    clean = re.sub(r"-+", "-", clean)[:FILENAME_PROMPT_MAX_LENGTH]
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{clean}-{now_ms}.{extension}"


async def download_image(
    image_url: str,
    destination: Path,
    http_client: httpx.AsyncClient | None = None,
) -> Path:
    """Stream a public image to `destination`.

    A transfer that fails midway leaves no file behind.

    Raises:
        httpx.HTTPStatusError: If the image cannot be fetched.
        httpx.TransportError: If the stream breaks off.
    """
    destination.parent.mkdir(parents=True, exist_ok=True)
    client = http_client or httpx.AsyncClient(timeout=60.0)
    try:
        async with client.stream("GET", image_url) as response:
            response.raise_for_status()
            try:
                with open(destination, "wb") as f:
                    async for chunk in response.aiter_bytes():
                        f.write(chunk)
            except BaseException:
                destination.unlink(missing_ok=True)
                raise
    finally:
        if http_client is None:
            await client.aclose()
    return destination
