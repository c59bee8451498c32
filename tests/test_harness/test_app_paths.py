"""Unit tests for application path discovery (src.harness.app_paths)."""

from __future__ import annotations

import json

import pytest

from src.harness.app_paths import AppPathData, get_app_path_data

pytestmark = pytest.mark.unit


class TestGetAppPathData:
    def test_reads_custom_vdom_folders(self, vdom_app):
        app = get_app_path_data(vdom_app)
        assert app.path_to_app == vdom_app.resolve()
        assert app.source_folder == "src"
        assert app.javascript_folder == "."
        assert app.typescript_folder == "."
        assert app.styles_folder == "styles"
        assert app.components_folder == "components"
        assert app.exchange_components_folder == "exchange_components"
        assert app.staging_folder == "web"

    def test_component_path(self, vdom_app):
        app = get_app_path_data(vdom_app)
        expected = vdom_app.resolve() / "src" / "components" / "vcomp-1" / "vcomp-1.tsx"
        assert app.component_path("vcomp-1") == expected

    def test_bundle_and_index_paths(self, bundled_app):
        app = get_app_path_data(bundled_app)
        assert app.path_to_bundle_js == bundled_app.resolve() / "web" / "bundle.js"
        assert app.path_to_bundle_js.exists()
        assert app.path_to_index_html == bundled_app.resolve() / "web" / "index.html"

    def test_defaults_without_config(self, tmp_path):
        app = get_app_path_data(tmp_path)
        assert app == AppPathData(path_to_app=tmp_path.resolve())
        assert app.component_path("x") == tmp_path.resolve() / "src" / "ts" / "jet-composites" / "x" / "x.tsx"
        assert app.path_to_bundle_js == tmp_path.resolve() / "web" / "js" / "bundle.js"

    def test_partial_config_keeps_defaults(self, tmp_path):
        (tmp_path / "oraclejetconfig.json").write_text(
            json.dumps({"paths": {"source": {"typescript": "typescript"}}, "bundleName": "main.js"})
        )
        app = get_app_path_data(tmp_path)
        assert app.typescript_folder == "typescript"
        assert app.javascript_folder == "js"
        assert app.bundle_name == "main.js"

    def test_non_string_entries_ignored(self, tmp_path):
        (tmp_path / "oraclejetconfig.json").write_text(
            json.dumps({"paths": {"source": {"components": 42, "styles": ""}}})
        )
        app = get_app_path_data(tmp_path)
        assert app.components_folder == "jet-composites"
        assert app.styles_folder == "css"
