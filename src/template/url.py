"""Materialize a template published as a zip archive at an ``http(s)`` URL."""

from __future__ import annotations

import asyncio
import tempfile
from pathlib import Path

import httpx

from src.utils import console

from .archive import extract_zip
from .errors import TemplateFetchError
from .resolver import GeneratorContext


async def download(url: str, target: Path, timeout: int = 60) -> Path:
    """GET *url* and write the response body to *target*.

    Raises:
        TemplateFetchError: On connection errors, timeouts or non-2xx replies.
    """
    try:
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(timeout, connect=10.0), follow_redirects=True
        ) as client:
            response = await client.get(url)
            response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise TemplateFetchError(url, f"HTTP {exc.response.status_code}") from exc
    except httpx.TimeoutException as exc:
        raise TemplateFetchError(url, f"request timed out after {timeout}s") from exc
    except httpx.HTTPError as exc:
        raise TemplateFetchError(url, str(exc) or exc.__class__.__name__) from exc

    await asyncio.to_thread(target.write_bytes, response.content)
    return target


async def handle(
    context: GeneratorContext,
    url: str,
    destination: Path,
    timeout: int = 60,
) -> list[str]:
    """Download the archive at *url* and unpack it into *destination*.

    A single wrapper folder (``repo-main/``) around the template is dropped.

    Returns:
        Paths of the extracted files, relative to *destination*.
    """
    console.print(f"[cyan]Downloading template[/cyan] [bold]{url}[/bold]...")
    with tempfile.TemporaryDirectory(prefix="jet-template-") as tmp:
        archive = await download(url, Path(tmp) / "template.zip", timeout=timeout)
        return await asyncio.to_thread(extract_zip, archive, destination, strip_wrapper=True)
