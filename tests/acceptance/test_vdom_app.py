"""Acceptance tests against a real generated VDOM application.

These run the ``ojet`` CLI and take minutes. They are skipped unless
``JET_APP_DIR`` points at an application created with the ``basic`` VDOM
template. ``JET_NO_SCAFFOLD`` and ``JET_NO_BUILD`` skip the tasks that
modify the application or run the standalone builds.

Run with::

    JET_APP_DIR=./vdomTest pytest -m acceptance tests/acceptance
"""

from __future__ import annotations

import pytest

from src.config import Config
from src.harness import checks
from src.harness.checks import CheckResult
from src.toolkit import Toolkit

CONFIG = Config.from_env()
SETTINGS = CONFIG.acceptance

pytestmark = [
    pytest.mark.acceptance,
    pytest.mark.skipif(SETTINGS.app_dir is None, reason="JET_APP_DIR is not set"),
]


def assert_passed(result: CheckResult) -> None:
    assert result.passed, f"{result.name}: {result.message}"


@pytest.fixture(scope="module")
def app_dir():
    return SETTINGS.app_dir


@pytest.fixture(scope="module")
def toolkit(app_dir):
    return Toolkit.from_config(CONFIG, app_dir, logs=True)


class TestScaffold:
    def test_path_mapping_has_no_base_url(self, app_dir):
        assert_passed(checks.check_path_mapping(app_dir))

    def test_architecture_is_vdom(self, app_dir):
        assert_passed(checks.check_architecture(app_dir))

    def test_source_folders(self, app_dir):
        assert_passed(checks.check_source_folders(app_dir))


class TestComponent:
    @pytest.mark.skipif(SETTINGS.no_scaffold, reason="no_scaffold")
    @pytest.mark.asyncio
    async def test_create_component(self, toolkit):
        assert_passed(await checks.check_component_creation(toolkit, SETTINGS.component_name))


class TestBuild:
    @pytest.mark.skipif(SETTINGS.no_build, reason="no_build")
    @pytest.mark.asyncio
    async def test_debug_build(self, toolkit):
        assert_passed(await checks.check_build(toolkit))

    @pytest.mark.skipif(SETTINGS.no_build, reason="no_build")
    @pytest.mark.asyncio
    async def test_release_build(self, toolkit):
        assert_passed(await checks.check_release_build(toolkit))


class TestWebpack:
    @pytest.mark.skipif(SETTINGS.no_scaffold, reason="no_scaffold")
    @pytest.mark.asyncio
    async def test_add_webpack(self, toolkit):
        assert_passed(await checks.check_add_bundler(toolkit, SETTINGS.bundler))

    def test_dev_dependencies_installed(self, app_dir):
        assert_passed(checks.check_bundler_dependencies(app_dir, SETTINGS.webpack_dependencies))

    def test_bundler_config(self, app_dir):
        assert_passed(checks.check_bundler_config(app_dir, SETTINGS.bundler, SETTINGS.bundle_name))

    @pytest.mark.asyncio
    async def test_debug_build(self, toolkit):
        assert_passed(await checks.check_build(toolkit))

    @pytest.mark.asyncio
    async def test_release_build(self, toolkit):
        assert_passed(await checks.check_release_build(toolkit))

    def test_bundle_exists(self, app_dir):
        assert_passed(checks.check_bundle_exists(app_dir))

    def test_index_does_not_load_require(self, app_dir):
        assert_passed(checks.check_no_legacy_loader(app_dir))
