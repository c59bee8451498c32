"""Materialize a named template from the templates package on the npm registry.

The package coordinate (``@oracle/oraclejet-templates@~9.1.0``) is resolved
against the registry's package document, the matching tarball is downloaded
and only ``package/<name>/<type>/`` is unpacked into the destination.
"""

from __future__ import annotations

import asyncio
import re
import tempfile
from pathlib import Path
from typing import Any
from urllib.parse import quote

import httpx

from src.utils import console

from .archive import extract_tar
from .errors import TemplateFetchError
from .resolver import GeneratorContext, TemplateSpec
from .url import download

_VERSION_RE = re.compile(r"^(\d+)\.(\d+)\.(\d+)$")

Version = tuple[int, int, int]


# ---------------------------------------------------------------------------
# Coordinates and version ranges
# ---------------------------------------------------------------------------


def split_coordinate(coordinate: str) -> tuple[str, str]:
    """Split ``name@range`` into its parts; scoped names keep their ``@``.

    Examples::

        split_coordinate("@oracle/oraclejet-templates@~9.1.0")
            -> ("@oracle/oraclejet-templates", "~9.1.0")
        split_coordinate("left-pad") -> ("left-pad", "latest")
    """
    at = coordinate.rfind("@")
    if at <= 0:
        return coordinate, "latest"
    return coordinate[:at], coordinate[at + 1:] or "latest"


def parse_version(version: str) -> Version | None:
    """Parse a plain ``X.Y.Z`` release; pre-releases and build tags return ``None``."""
    match = _VERSION_RE.match(version.strip())
    if not match:
        return None
    major, minor, patch = (int(g) for g in match.groups())
    return major, minor, patch


def satisfies(version: Version, version_range: str) -> bool:
    """Return ``True`` if *version* is inside a ``~``, ``^`` or exact range."""
    operator = version_range[:1] if version_range[:1] in ("~", "^") else ""
    base = parse_version(version_range[len(operator):])
    if base is None:
        raise ValueError(f"Unsupported version range: {version_range}")

    if operator == "~":
        return version[:2] == base[:2] and version >= base
    if operator == "^":
        if base[0] > 0:
            return version[0] == base[0] and version >= base
        if base[1] > 0:
            return version[:2] == base[:2] and version >= base
        return version == base
    return version == base


def max_satisfying(document: dict[str, Any], version_range: str) -> str | None:
    """Pick the highest published version of a registry document inside *version_range*."""
    if version_range == "latest":
        return document.get("dist-tags", {}).get("latest")

    best: Version | None = None
    best_raw: str | None = None
    for raw in document.get("versions", {}):
        parsed = parse_version(raw)
        if parsed is None or not satisfies(parsed, version_range):
            continue
        if best is None or parsed > best:
            best, best_raw = parsed, raw
    return best_raw


# ---------------------------------------------------------------------------
# Registry access
# ---------------------------------------------------------------------------


async def fetch_package_document(
    registry_url: str, package_name: str, timeout: int = 60
) -> dict[str, Any]:
    """GET the registry document listing every published version of a package."""
    url = f"{registry_url.rstrip('/')}/{quote(package_name, safe='@')}"
    try:
        async with httpx.AsyncClient(timeout=httpx.Timeout(timeout, connect=10.0)) as client:
            response = await client.get(url, headers={"Accept": "application/json"})
            response.raise_for_status()
            return response.json()
    except httpx.HTTPStatusError as exc:
        raise TemplateFetchError(url, f"HTTP {exc.response.status_code}") from exc
    except httpx.HTTPError as exc:
        raise TemplateFetchError(url, str(exc) or exc.__class__.__name__) from exc
    except ValueError as exc:
        raise TemplateFetchError(url, "registry returned invalid JSON") from exc


async def handle(
    context: GeneratorContext,
    coordinate: str,
    destination: Path,
    spec: TemplateSpec,
    registry_url: str = "https://registry.npmjs.org",
    timeout: int = 60,
) -> list[str]:
    """Fetch *spec* from the templates package and unpack it into *destination*.

    Returns:
        Paths of the extracted files, relative to *destination*.

    Raises:
        TemplateFetchError: The registry is unreachable, no version matches
            the range, or the tarball has no ``<name>/<type>`` folder.
    """
    package_name, version_range = split_coordinate(coordinate)
    document = await fetch_package_document(registry_url, package_name, timeout=timeout)

    try:
        version = max_satisfying(document, version_range)
    except ValueError as exc:
        raise TemplateFetchError(coordinate, str(exc)) from exc
    if version is None:
        raise TemplateFetchError(
            coordinate, f"no published version satisfies {version_range}"
        )
    release = (document.get("versions") or {}).get(version)
    if release is None:
        raise TemplateFetchError(coordinate, f"version {version} is not published")
    tarball_url = (release.get("dist") or {}).get("tarball")
    if not tarball_url:
        raise TemplateFetchError(coordinate, f"version {version} has no tarball")

    console.print(
        f"[cyan]Fetching template[/cyan] [bold]{spec.name}:{spec.type}[/bold] "
        f"from [green]{package_name}@{version}[/green]..."
    )
    root_dir = f"package/{spec.name}/{spec.type}"
    with tempfile.TemporaryDirectory(prefix="jet-template-") as tmp:
        archive = await download(tarball_url, Path(tmp) / "package.tgz", timeout=timeout)
        files = await asyncio.to_thread(extract_tar, archive, destination, root_dir=root_dir)

    if not files:
        raise TemplateFetchError(
            f"{package_name}@{version}", f"package has no template folder {spec.name}/{spec.type}"
        )
    return files
