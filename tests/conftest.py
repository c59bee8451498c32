"""Shared pytest fixtures for the jet-scaffold test suite.

Provides reusable fixtures for:
- Fixture VDOM applications on disk (scaffolded, built and bundled)
- Zip and npm-style tarball template archives
- Mock subprocess helpers
- A fake toolkit that records tasks instead of running ``ojet``
"""

from __future__ import annotations

import io
import json
import tarfile
import zipfile
from pathlib import Path
from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.config import WEBPACK_DEPENDENCIES


# ---------------------------------------------------------------------------
# Fixture applications
# ---------------------------------------------------------------------------

VDOM_ORACLEJET_CONFIG: dict[str, Any] = {
    "architecture": "vdom",
    "paths": {
        "source": {
            "common": "src",
            "web": "src-web",
            "hybrid": "src-hybrid",
            "javascript": ".",
            "typescript": ".",
            "styles": "styles",
            "components": "components",
            "exchangeComponents": "exchange_components",
            "themes": "themes",
        },
        "staging": {"web": "web", "hybrid": "hybrid", "themes": "staged-themes"},
    },
    "defaultBrowser": "chrome",
    "sassVer": "5.0.3",
}


def write_json(path: Path, data: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


@pytest.fixture
def vdom_app(tmp_path: Path) -> Path:
    """A freshly scaffolded VDOM app (no bundler, not built)."""
    app = tmp_path / "vdomTest"
    write_json(app / "oraclejetconfig.json", VDOM_ORACLEJET_CONFIG)
    write_json(
        app / "path_mapping.json",
        {"use": "local", "cdns": {}, "libs": {"knockout": {"cdn": "3rdparty"}}},
    )
    write_json(
        app / "package.json",
        {"name": "vdomTest", "version": "1.0.0", "devDependencies": {"@oracle/ojet-cli": "~11.0.0"}},
    )
    (app / "src" / "components" / "app.tsx").parent.mkdir(parents=True)
    (app / "src" / "components" / "app.tsx").write_text("export {}\n", encoding="utf-8")
    (app / "src" / "index.html").write_text("<html></html>\n", encoding="utf-8")
    return app


@pytest.fixture
def bundled_app(vdom_app: Path) -> Path:
    """The VDOM app after ``add webpack`` and a release build."""
    config = dict(VDOM_ORACLEJET_CONFIG, bundler="webpack", bundleName="bundle.js")
    write_json(vdom_app / "oraclejetconfig.json", config)
    package = json.loads((vdom_app / "package.json").read_text(encoding="utf-8"))
    package["devDependencies"].update({dep: "^1.0.0" for dep in WEBPACK_DEPENDENCIES})
    write_json(vdom_app / "package.json", package)

    web = vdom_app / "web"
    web.mkdir()
    (web / "bundle.js").write_text("(()=>{})();\n", encoding="utf-8")
    (web / "index.html").write_text(
        "<html><body><script type='text/javascript' src='bundle.js'></script></body></html>\n",
        encoding="utf-8",
    )
    return vdom_app


# ---------------------------------------------------------------------------
# Archives
# ---------------------------------------------------------------------------


@pytest.fixture
def make_zip(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a zip archive from a ``{name: content}`` mapping."""

    def factory(files: dict[str, str], name: str = "template.zip") -> Path:
        archive = tmp_path / name
        with zipfile.ZipFile(archive, "w") as zf:
            for entry, content in files.items():
                zf.writestr(entry, content)
        return archive

    return factory


@pytest.fixture
def make_tarball() -> Callable[[dict[str, str]], bytes]:
    """Factory returning a gzipped tarball holding the given files, as npm publishes packages."""

    def factory(files: dict[str, str]) -> bytes:
        buffer = io.BytesIO()
        with tarfile.open(fileobj=buffer, mode="w:gz") as tf:
            for entry, content in files.items():
                data = content.encode("utf-8")
                info = tarfile.TarInfo(entry)
                info.size = len(data)
                tf.addfile(info, io.BytesIO(data))
        return buffer.getvalue()

    return factory


# ---------------------------------------------------------------------------
# Subprocess / toolkit doubles
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_exec", return_value=proc):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory


@pytest.fixture
def fake_toolkit():
    """Factory for a toolkit double whose ``execute`` is an ``AsyncMock``.

    Usage:
        toolkit = fake_toolkit(app_dir, side_effect=TaskError("build", "boom"))
    """
    def factory(cwd: Path, side_effect: Any = None) -> MagicMock:
        toolkit = MagicMock()
        toolkit.cwd = Path(cwd)
        toolkit.execute = AsyncMock(return_value="", side_effect=side_effect)
        return toolkit

    return factory
