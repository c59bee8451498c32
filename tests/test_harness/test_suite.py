"""Unit tests for the acceptance suite runner (src.harness.suite)."""

from __future__ import annotations

from pathlib import Path

import pytest

from src.config import AcceptanceConfig, Config
from src.harness import AcceptanceSuite, CheckStatus
from src.toolkit import TaskError

pytestmark = pytest.mark.unit

EXPECTED_ORDER = [
    "path_mapping.json has no baseUrl",
    "oraclejetconfig.json architecture",
    "oraclejetconfig.json source folders",
    "create component",
    "build (debug)",
    "build (release)",
    "add webpack",
    "webpack devDependencies",
    "webpack config",
    "webpack build (debug)",
    "webpack build (release)",
    "bundle file exists",
    "index.html does not load require.js",
]


def _component_writer(app: Path):
    async def _execute(task, scope=None, parameters=None, options=None):
        if task == "create":
            name = parameters[0]
            target = app / "src" / "components" / name / f"{name}.tsx"
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text("export {}")
        return ""

    return _execute


class TestAcceptanceSuite:
    @pytest.mark.asyncio
    async def test_all_checks_pass(self, bundled_app, fake_toolkit):
        toolkit = fake_toolkit(bundled_app, side_effect=_component_writer(bundled_app))
        suite = AcceptanceSuite(bundled_app, toolkit=toolkit)

        results = await suite.run()

        assert [r.name for r in results] == EXPECTED_ORDER
        assert all(r.status is CheckStatus.PASSED for r in results)
        assert suite.succeeded
        tasks = [c.kwargs["task"] for c in toolkit.execute.await_args_list]
        assert tasks == ["create", "build", "build", "add", "build", "build"]

    @pytest.mark.asyncio
    async def test_failures_do_not_short_circuit(self, vdom_app, fake_toolkit):
        toolkit = fake_toolkit(vdom_app, side_effect=TaskError("build", "boom"))
        suite = AcceptanceSuite(vdom_app, toolkit=toolkit)

        results = await suite.run()

        by_name = {r.name: r for r in results}
        assert len(results) == len(EXPECTED_ORDER)
        assert by_name["path_mapping.json has no baseUrl"].passed
        assert by_name["webpack build (release)"].failed
        assert by_name["bundle file exists"].failed
        assert by_name["index.html does not load require.js"].failed
        assert not suite.succeeded

    @pytest.mark.asyncio
    async def test_skip_flags(self, bundled_app, fake_toolkit):
        config = Config(acceptance=AcceptanceConfig(no_scaffold=True, no_build=True))
        toolkit = fake_toolkit(bundled_app)
        suite = AcceptanceSuite(bundled_app, config=config, toolkit=toolkit)

        results = await suite.run()

        skipped = [r.name for r in results if r.status is CheckStatus.SKIPPED]
        assert skipped == ["create component", "build (debug)", "build (release)", "add webpack"]
        assert suite.succeeded
        tasks = [c.kwargs["task"] for c in toolkit.execute.await_args_list]
        assert tasks == ["build", "build"]

    @pytest.mark.asyncio
    async def test_custom_component_name(self, bundled_app, fake_toolkit):
        config = Config(acceptance=AcceptanceConfig(component_name="my-widget"))
        toolkit = fake_toolkit(bundled_app, side_effect=_component_writer(bundled_app))
        await AcceptanceSuite(bundled_app, config=config, toolkit=toolkit).run()
        first = toolkit.execute.await_args_list[0]
        assert first.kwargs["parameters"] == ["my-widget"]
        assert (bundled_app / "src" / "components" / "my-widget" / "my-widget.tsx").exists()

    def test_default_toolkit_uses_config(self, vdom_app):
        config = Config(cli_command=["npx", "ojet"], task_timeout=42)
        suite = AcceptanceSuite(vdom_app, config=config)
        assert suite.toolkit.command == ["npx", "ojet"]
        assert suite.toolkit.timeout == 42
        assert suite.toolkit.cwd == vdom_app
