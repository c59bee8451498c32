"""jet-scaffold configuration.

Centralised, typed configuration for template resolution, the ``ojet`` task
runner and the acceptance harness. All settings use Pydantic v2 models so
they can be validated at construction time and serialised to/from JSON or
environment variables without boiler-plate.
"""

from __future__ import annotations

import os
import shlex
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field


DEFAULT_TEMPLATES_PACKAGE = "@oracle/oraclejet-templates@~9.1.0"

WEBPACK_DEPENDENCIES: list[str] = [
    "webpack",
    "webpack-cli",
    "webpack-dev-server",
    "style-loader",
    "css-loader",
    "ts-loader",
    "raw-loader",
    "noop-loader",
    "html-webpack-plugin",
    "html-replace-webpack-plugin",
    "copy-webpack-plugin",
    "@prefresh/webpack",
    "@prefresh/core",
    "mini-css-extract-plugin",
    "zip-webpack-plugin",
    "css-minimizer-webpack-plugin",
    "terser-webpack-plugin",
    "compression-webpack-plugin",
]


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in ("1", "true", "yes", "on")


class AcceptanceConfig(BaseModel):
    """Settings for the scaffold/build acceptance harness."""

    app_dir: Path | None = Field(
        default=None, description="Generated application the checks run against"
    )
    component_name: str = Field(default="vcomp-1")
    bundler: str = Field(default="webpack")
    bundle_name: str = Field(default="bundle.js")
    webpack_dependencies: list[str] = Field(
        default_factory=lambda: list(WEBPACK_DEPENDENCIES)
    )
    no_scaffold: bool = Field(
        default=False, description="Skip checks that run generator tasks on the app"
    )
    no_build: bool = Field(default=False, description="Skip the standalone build checks")


class Config(BaseModel):
    """Global jet-scaffold configuration.

    Instances are typically created once by the CLI entry point (or by
    ``Config.from_env``) and then passed to the template handler, the toolkit
    and the acceptance suite.
    """

    templates_package: str = Field(
        default=DEFAULT_TEMPLATES_PACKAGE,
        description="npm coordinate (name@range) that named templates are fetched from",
    )
    registry_url: str = Field(default="https://registry.npmjs.org")
    http_timeout: int = Field(default=60, ge=1, description="Per-request timeout in seconds")
    cli_command: list[str] = Field(default_factory=lambda: ["ojet"])
    task_timeout: int = Field(
        default=900, ge=1, description="Timeout for a single ojet task in seconds"
    )
    acceptance: AcceptanceConfig = Field(default_factory=AcceptanceConfig)

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            JET_TEMPLATES_PACKAGE, JET_REGISTRY_URL, JET_HTTP_TIMEOUT,
            JET_CLI_COMMAND, JET_TASK_TIMEOUT, JET_APP_DIR,
            JET_NO_SCAFFOLD, JET_NO_BUILD.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("JET_TEMPLATES_PACKAGE"):
            kwargs["templates_package"] = os.environ["JET_TEMPLATES_PACKAGE"]
        if os.environ.get("JET_REGISTRY_URL"):
            kwargs["registry_url"] = os.environ["JET_REGISTRY_URL"]
        if os.environ.get("JET_HTTP_TIMEOUT"):
            kwargs["http_timeout"] = int(os.environ["JET_HTTP_TIMEOUT"])
        if os.environ.get("JET_CLI_COMMAND"):
            kwargs["cli_command"] = shlex.split(os.environ["JET_CLI_COMMAND"])
        if os.environ.get("JET_TASK_TIMEOUT"):
            kwargs["task_timeout"] = int(os.environ["JET_TASK_TIMEOUT"])

        acceptance_kwargs: dict[str, Any] = {
            "no_scaffold": _env_flag("JET_NO_SCAFFOLD"),
            "no_build": _env_flag("JET_NO_BUILD"),
        }
        if os.environ.get("JET_APP_DIR"):
            acceptance_kwargs["app_dir"] = Path(os.environ["JET_APP_DIR"])

        return cls(acceptance=AcceptanceConfig(**acceptance_kwargs), **kwargs)
