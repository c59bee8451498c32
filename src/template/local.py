"""Materialize a template from a local directory or zip archive."""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path

from src.utils import console

from .archive import extract_zip
from .errors import TemplateError
from .resolver import GeneratorContext

_IGNORED = shutil.ignore_patterns(".git", "node_modules")


def _copy_directory(source: Path, destination: Path) -> list[str]:
    shutil.copytree(source, destination, ignore=_IGNORED, dirs_exist_ok=True)
    copied: list[str] = []
    for path in source.rglob("*"):
        rel = path.relative_to(source)
        if not path.is_file() or {".git", "node_modules"} & set(rel.parts):
            continue
        copied.append(rel.as_posix())
    return copied


async def handle(context: GeneratorContext, path: Path, destination: Path) -> list[str]:
    """Copy the template at *path* into *destination*.

    Directories are copied recursively (skipping ``.git`` and
    ``node_modules``); ``.zip`` files are extracted.

    Returns:
        Paths of the written files, relative to *destination*.
    """
    source = Path(path)
    console.print(f"[cyan]Copying local template[/cyan] [bold]{source}[/bold]...")

    if source.is_dir():
        if destination.resolve().is_relative_to(source.resolve()):
            raise TemplateError(
                f"Destination {destination} is inside the template folder {source}."
            )
        return await asyncio.to_thread(_copy_directory, source, destination)
    if source.is_file() and source.suffix.lower() == ".zip":
        return await asyncio.to_thread(extract_zip, source, destination)

    raise TemplateError(
        f"Local template must be a directory or a .zip archive: {source}"
    )
