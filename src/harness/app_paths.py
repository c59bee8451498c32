"""Application path discovery from ``oraclejetconfig.json``."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from src.utils import load_json

ORACLEJET_CONFIG = "oraclejetconfig.json"
PATH_MAPPING = "path_mapping.json"
PACKAGE_JSON = "package.json"
INDEX_HTML = "index.html"


class AppPathData(BaseModel):
    """Folder names of a generated application and the paths derived from them."""

    path_to_app: Path
    source_folder: str = Field(default="src")
    javascript_folder: str = Field(default="js")
    typescript_folder: str = Field(default="ts")
    styles_folder: str = Field(default="css")
    components_folder: str = Field(default="jet-composites")
    exchange_components_folder: str = Field(default="jet_components")
    staging_folder: str = Field(default="web")
    bundle_name: str = Field(default="bundle.js")

    @property
    def oraclejet_config(self) -> Path:
        return self.path_to_app / ORACLEJET_CONFIG

    @property
    def path_mapping(self) -> Path:
        return self.path_to_app / PATH_MAPPING

    @property
    def package_json(self) -> Path:
        return self.path_to_app / PACKAGE_JSON

    @property
    def path_to_bundle_js(self) -> Path:
        return self.path_to_app / self.staging_folder / self.javascript_folder / self.bundle_name

    @property
    def path_to_index_html(self) -> Path:
        return self.path_to_app / self.staging_folder / INDEX_HTML

    def component_path(self, name: str) -> Path:
        """Path of the ``.tsx`` file ``create component <name>`` produces."""
        return (
            self.path_to_app
            / self.source_folder
            / self.typescript_folder
            / self.components_folder
            / name
            / f"{name}.tsx"
        )


def _string(mapping: dict[str, Any], key: str, default: str) -> str:
    value = mapping.get(key)
    return value if isinstance(value, str) and value else default


def get_app_path_data(app_dir: str | Path) -> AppPathData:
    """Read the folder layout of the application at *app_dir*.

    Missing entries (or a missing ``oraclejetconfig.json``) fall back to the
    generator defaults.
    """
    root = Path(app_dir).resolve()
    config_path = root / ORACLEJET_CONFIG
    config = load_json(config_path) if config_path.exists() else {}

    paths = config.get("paths") or {}
    source = paths.get("source") or {}
    staging = paths.get("staging") or {}
    defaults = AppPathData(path_to_app=root)

    return AppPathData(
        path_to_app=root,
        source_folder=_string(source, "common", defaults.source_folder),
        javascript_folder=_string(source, "javascript", defaults.javascript_folder),
        typescript_folder=_string(source, "typescript", defaults.typescript_folder),
        styles_folder=_string(source, "styles", defaults.styles_folder),
        components_folder=_string(source, "components", defaults.components_folder),
        exchange_components_folder=_string(
            source, "exchangeComponents", defaults.exchange_components_folder
        ),
        staging_folder=_string(staging, "web", defaults.staging_folder),
        bundle_name=_string(config, "bundleName", defaults.bundle_name),
    )
