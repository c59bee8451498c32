"""Safe extraction of template archives (zip and npm tarballs)."""

from __future__ import annotations

import shutil
import tarfile
import zipfile
from pathlib import Path, PurePosixPath

from .errors import TemplateError

# Top-level folders of a generated application; never treated as a wrapper.
APP_FOLDERS = frozenset(
    {"src", "src-web", "src-hybrid", "web", "hybrid", "scripts", "node_modules"}
)


def _safe_relative(raw_name: str) -> PurePosixPath:
    name = raw_name.replace("\\", "/")
    if name.startswith("/") or (len(name) > 1 and name[1] == ":"):
        raise TemplateError(f"Unsafe archive entry: {raw_name}")
    rel = PurePosixPath(name)
    if any(part == ".." for part in rel.parts):
        raise TemplateError(f"Unsafe archive entry: {raw_name}")
    return rel


def _destination(target_dir: Path, rel: PurePosixPath, raw_name: str) -> Path:
    dest = target_dir.joinpath(*rel.parts)
    if not dest.resolve().is_relative_to(target_dir.resolve()):
        raise TemplateError(f"Unsafe archive destination: {raw_name}")
    return dest


def _strip_prefix(rel: PurePosixPath, prefix: PurePosixPath | None) -> PurePosixPath | None:
    if prefix is None:
        return rel
    if rel.parts[: len(prefix.parts)] != prefix.parts:
        return None
    stripped = rel.parts[len(prefix.parts):]
    return PurePosixPath(*stripped) if stripped else None


def common_root(names: list[str]) -> str | None:
    """Return the single top-level wrapper directory shared by every entry, if any.

    GitHub and most hosting services wrap archive contents in one folder
    (``repo-main/``). A lone application folder such as ``src`` is content,
    not a wrapper, and is never reported.
    """
    roots: set[str] = set()
    nested = False
    for raw in names:
        parts = PurePosixPath(raw.replace("\\", "/")).parts
        if not parts:
            continue
        roots.add(parts[0])
        if len(parts) > 1:
            nested = True
        elif not raw.endswith("/"):
            # A file at the archive root means there is no wrapper folder.
            return None
    if len(roots) == 1 and nested:
        root = roots.pop()
        return None if root in APP_FOLDERS else root
    return None


def extract_zip(
    archive_path: Path,
    target_dir: Path,
    *,
    root_dir: str | None = None,
    strip_wrapper: bool = False,
) -> list[str]:
    """Extract *archive_path* into *target_dir*.

    Args:
        archive_path: Zip file to read.
        target_dir: Destination directory (created if missing).
        root_dir: Only entries below this folder are extracted, relative to
            it.
        strip_wrapper: Without *root_dir*, drop a single wrapper folder
            (see ``common_root``). Only downloaded archives carry one.

    Returns:
        The extracted file paths, relative to *target_dir*.
    """
    if not zipfile.is_zipfile(archive_path):
        raise TemplateError(f"Template archive is not a zip file: {archive_path}")

    target_dir.mkdir(parents=True, exist_ok=True)
    extracted: list[str] = []
    with zipfile.ZipFile(archive_path, "r") as zf:
        root = root_dir
        if root is None and strip_wrapper:
            root = common_root(zf.namelist())
        prefix = _safe_relative(root.strip("/")) if root else None
        for member in zf.infolist():
            if member.is_dir():
                continue
            rel = _strip_prefix(_safe_relative(member.filename), prefix)
            if rel is None:
                continue
            dest = _destination(target_dir, rel, member.filename)
            dest.parent.mkdir(parents=True, exist_ok=True)
            with zf.open(member, "r") as src, dest.open("wb") as dst:
                shutil.copyfileobj(src, dst)
            extracted.append(rel.as_posix())
    return extracted


def extract_tar(archive_path: Path, target_dir: Path, *, root_dir: str) -> list[str]:
    """Extract the regular files below *root_dir* of a (gzipped) tarball."""
    prefix = _safe_relative(root_dir.strip("/"))
    target_dir.mkdir(parents=True, exist_ok=True)
    extracted: list[str] = []
    with tarfile.open(archive_path, "r:*") as tf:
        for member in tf.getmembers():
            if not member.isfile():
                continue
            rel = _strip_prefix(_safe_relative(member.name), prefix)
            if rel is None:
                continue
            dest = _destination(target_dir, rel, member.name)
            dest.parent.mkdir(parents=True, exist_ok=True)
            src = tf.extractfile(member)
            if src is None:
                continue
            with src, dest.open("wb") as dst:
                shutil.copyfileobj(src, dst)
            extracted.append(rel.as_posix())
    return extracted
