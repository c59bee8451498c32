"""Acceptance checks for a generated (and built) application.

Every check is independent: it re-reads whatever it needs from disk, and any
exception it hits, including a failing ``ojet`` task, becomes a ``failed``
``CheckResult`` instead of propagating. Checks never retry.
"""

from __future__ import annotations

import functools
import inspect
import re
import time
from enum import Enum
from pathlib import Path
from typing import Any, Callable

from pydantic import BaseModel, Field

from src.toolkit import Toolkit
from src.utils import load_json

from .app_paths import get_app_path_data

EXPECTED_ARCHITECTURE = "vdom"

EXPECTED_SOURCE_FOLDERS: dict[str, str] = {
    "javascript": ".",
    "typescript": ".",
    "styles": "styles",
    "components": "components",
    "exchangeComponents": "exchange_components",
}

LEGACY_LOADER_PATTERN = re.compile(r"require/require\.js'></script>")


class CheckStatus(str, Enum):
    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"


class CheckResult(BaseModel):
    """Outcome of a single acceptance check."""

    name: str
    status: CheckStatus
    message: str = Field(default="")
    duration_s: float = Field(default=0.0, ge=0.0)

    @property
    def passed(self) -> bool:
        return self.status is CheckStatus.PASSED

    @property
    def failed(self) -> bool:
        return self.status is CheckStatus.FAILED


class CheckFailure(AssertionError):
    """An acceptance condition did not hold."""


def require(condition: Any, message: str) -> None:
    if not condition:
        raise CheckFailure(message)


def _finish(name: str, start: float, exc: BaseException | None = None) -> CheckResult:
    duration = time.monotonic() - start
    if exc is None:
        return CheckResult(name=name, status=CheckStatus.PASSED, duration_s=duration)
    message = str(exc) or exc.__class__.__name__
    return CheckResult(name=name, status=CheckStatus.FAILED, message=message, duration_s=duration)


def check(name: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Turn an assertion-style function into one returning a ``CheckResult``.

    Works for plain and ``async`` functions alike.
    """

    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> CheckResult:
                start = time.monotonic()
                try:
                    await func(*args, **kwargs)
                except Exception as exc:  # noqa: BLE001
                    return _finish(name, start, exc)
                return _finish(name, start)

            async_wrapper.check_name = name  # type: ignore[attr-defined]
            return async_wrapper

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> CheckResult:
            start = time.monotonic()
            try:
                func(*args, **kwargs)
            except Exception as exc:  # noqa: BLE001
                return _finish(name, start, exc)
            return _finish(name, start)

        wrapper.check_name = name  # type: ignore[attr-defined]
        return wrapper

    return decorator


def skipped(name: str, reason: str) -> CheckResult:
    return CheckResult(name=name, status=CheckStatus.SKIPPED, message=reason)


# ---------------------------------------------------------------------------
# Scaffold checks
# ---------------------------------------------------------------------------


@check("path_mapping.json has no baseUrl")
def check_path_mapping(app_dir: str | Path) -> None:
    app = get_app_path_data(app_dir)
    require(app.path_mapping.exists(), f"{app.path_mapping} does not exist")
    path_mapping = load_json(app.path_mapping)
    require(not path_mapping.get("baseUrl"), "path_mapping.json has baseUrl")


@check("oraclejetconfig.json architecture")
def check_architecture(app_dir: str | Path, expected: str = EXPECTED_ARCHITECTURE) -> None:
    app = get_app_path_data(app_dir)
    require(app.oraclejet_config.exists(), f"{app.oraclejet_config} does not exist")
    config = load_json(app.oraclejet_config)
    require(
        config.get("architecture") == expected,
        f'application architecture is not "{expected}"',
    )


@check("oraclejetconfig.json source folders")
def check_source_folders(
    app_dir: str | Path, expected: dict[str, str] | None = None
) -> None:
    app = get_app_path_data(app_dir)
    require(app.oraclejet_config.exists(), f"{app.oraclejet_config} does not exist")
    config = load_json(app.oraclejet_config)
    source = (config.get("paths") or {}).get("source") or {}
    for role, folder in (expected or EXPECTED_SOURCE_FOLDERS).items():
        require(source.get(role) == folder, f'{role} entry is not "{folder}"')


# ---------------------------------------------------------------------------
# Task checks
# ---------------------------------------------------------------------------


@check("create component")
async def check_component_creation(toolkit: Toolkit, component_name: str) -> None:
    app = get_app_path_data(toolkit.cwd)
    component_path = app.component_path(component_name)
    await toolkit.execute(task="create", scope="component", parameters=[component_name])
    require(component_path.exists(), f"{component_path} does not exist")


@check("build")
async def check_build(toolkit: Toolkit) -> None:
    await toolkit.execute(task="build")


@check("build (release)")
async def check_release_build(toolkit: Toolkit) -> None:
    await toolkit.execute(task="build", options={"release": True})


@check("add bundler")
async def check_add_bundler(toolkit: Toolkit, bundler: str = "webpack") -> None:
    await toolkit.execute(task="add", parameters=[bundler])


# ---------------------------------------------------------------------------
# Bundler checks
# ---------------------------------------------------------------------------


@check("bundler devDependencies")
def check_bundler_dependencies(app_dir: str | Path, dependencies: list[str]) -> None:
    app = get_app_path_data(app_dir)
    package_json = load_json(app.package_json)
    dev_dependencies = package_json.get("devDependencies") or {}
    missing = [dep for dep in dependencies if not dev_dependencies.get(dep)]
    require(not missing, f"{', '.join(missing)} not installed")


@check("bundler config")
def check_bundler_config(
    app_dir: str | Path, bundler: str = "webpack", bundle_name: str = "bundle.js"
) -> None:
    app = get_app_path_data(app_dir)
    config = load_json(app.oraclejet_config)
    require(config.get("bundler") == bundler, f'bundler not equal to "{bundler}"')
    require(
        config.get("bundleName") == bundle_name,
        f'bundleName not equal to "{bundle_name}"',
    )


@check("bundle file exists")
def check_bundle_exists(app_dir: str | Path) -> None:
    app = get_app_path_data(app_dir)
    require(app.path_to_bundle_js.exists(), f"{app.path_to_bundle_js} does not exist")


@check("index.html does not load require.js")
def check_no_legacy_loader(app_dir: str | Path) -> None:
    app = get_app_path_data(app_dir)
    content = app.path_to_index_html.read_text(encoding="utf-8")
    require(
        not LEGACY_LOADER_PATTERN.search(content),
        f"{app.path_to_index_html} loads require.js",
    )

