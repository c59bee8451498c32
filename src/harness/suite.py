"""Ordered acceptance run against a generated VDOM application."""

from __future__ import annotations

import time
from pathlib import Path

from rich.markup import escape

from src.config import AcceptanceConfig, Config
from src.toolkit import Toolkit
from src.utils import console, format_duration, print_error, print_success, print_summary_table

from . import checks
from .checks import CheckResult, CheckStatus

_STATUS_STYLE = {
    CheckStatus.PASSED: "green",
    CheckStatus.FAILED: "red",
    CheckStatus.SKIPPED: "yellow",
}


class AcceptanceSuite:
    """Runs every scaffold, component, build and bundler check in sequence.

    A failing check never stops the run: the release-build check fails on
    its own and the bundle checks after it still run and report their own
    outcome.

    Attributes:
        app_dir: Application under test.
        settings: Component name, bundler settings and skip flags.
        toolkit: Runs ``ojet`` tasks inside ``app_dir``.
        results: Results of the last ``run()``, in execution order.
    """

    def __init__(
        self,
        app_dir: str | Path,
        config: Config | None = None,
        toolkit: Toolkit | None = None,
    ) -> None:
        config = config or Config()
        self.app_dir = Path(app_dir)
        self.settings: AcceptanceConfig = config.acceptance
        self.toolkit = toolkit or Toolkit.from_config(config, self.app_dir, logs=False)
        self.results: list[CheckResult] = []

    def _record(self, result: CheckResult, name: str | None = None) -> CheckResult:
        if name:
            result = result.model_copy(update={"name": name})
        self.results.append(result)
        style = _STATUS_STYLE[result.status]
        line = f"  [{style}]{result.status.value:<7}[/{style}] {escape(result.name)}"
        if result.message and result.status is not CheckStatus.PASSED:
            line += f" [dim]({escape(result.message)})[/dim]"
        console.print(line)
        return result

    async def run(self) -> list[CheckResult]:
        """Execute the checks and return their results."""
        s = self.settings
        self.results = []
        start = time.monotonic()
        console.print(f"[cyan]Verifying application[/cyan] [bold]{self.app_dir}[/bold]")

        # Scaffold
        self._record(checks.check_path_mapping(self.app_dir))
        self._record(checks.check_architecture(self.app_dir))
        self._record(checks.check_source_folders(self.app_dir))

        # Component
        if s.no_scaffold:
            self._record(checks.skipped(checks.check_component_creation.check_name, "no_scaffold"))
        else:
            self._record(await checks.check_component_creation(self.toolkit, s.component_name))

        # Build
        if s.no_build:
            self._record(checks.skipped("build (debug)", "no_build"))
            self._record(checks.skipped("build (release)", "no_build"))
        else:
            self._record(await checks.check_build(self.toolkit), "build (debug)")
            self._record(await checks.check_release_build(self.toolkit))

        # Bundler
        if s.no_scaffold:
            self._record(checks.skipped(f"add {s.bundler}", "no_scaffold"))
        else:
            self._record(await checks.check_add_bundler(self.toolkit, s.bundler), f"add {s.bundler}")
        self._record(
            checks.check_bundler_dependencies(self.app_dir, s.webpack_dependencies),
            f"{s.bundler} devDependencies",
        )
        self._record(
            checks.check_bundler_config(self.app_dir, s.bundler, s.bundle_name),
            f"{s.bundler} config",
        )
        self._record(await checks.check_build(self.toolkit), f"{s.bundler} build (debug)")
        self._record(await checks.check_release_build(self.toolkit), f"{s.bundler} build (release)")
        self._record(checks.check_bundle_exists(self.app_dir))
        self._record(checks.check_no_legacy_loader(self.app_dir))

        self._summarize(time.monotonic() - start)
        return self.results

    @property
    def succeeded(self) -> bool:
        return not any(result.failed for result in self.results)

    def _summarize(self, elapsed: float) -> None:
        counts = {status: 0 for status in CheckStatus}
        for result in self.results:
            counts[result.status] += 1
        console.print()
        print_summary_table(
            [(status.value, str(counts[status])) for status in CheckStatus]
            + [("duration", format_duration(elapsed))],
            title="Acceptance",
            headers=("Status", "Checks"),
        )
        if self.succeeded:
            print_success(f"All checks passed for {self.app_dir}")
        else:
            print_error(f"{counts[CheckStatus.FAILED]} check(s) failed for {self.app_dir}")
