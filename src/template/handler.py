"""Template handling orchestrator.

Resolves the generator's ``--template`` value and materializes the chosen
template into the application directory through the URL, local or npm
handler, followed by the common post-processing step.
"""

from __future__ import annotations

import asyncio
import shutil
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from rich.markup import escape

from src.config import Config
from src.utils import console, print_success

from . import common, local, npm, url
from .resolver import (
    BLANK_TEMPLATE,
    DispatchDecision,
    GeneratorContext,
    LocalTemplate,
    PackageTemplate,
    UrlTemplate,
    resolve,
)


class TemplateResult(BaseModel):
    """Outcome of materializing a template."""

    kind: Literal["url", "local", "npm"]
    source: str = Field(..., description="URL, local path or name:type that was used")
    destination: Path
    files_written: int = Field(default=0, ge=0)
    typescript: bool = False


class TemplateHandler:
    """Materializes the template named in a ``GeneratorContext``."""

    def __init__(self, config: Config | None = None) -> None:
        self.config = config or Config()

    async def handle(
        self, context: GeneratorContext, destination: str | Path
    ) -> TemplateResult:
        """Resolve ``context.template`` and write its files to *destination*.

        Args:
            context: Generator options (template, namespace, typescript).
            destination: Application directory; created if missing and
                removed again when materialization fails.

        Returns:
            A ``TemplateResult``; ``typescript`` reflects the merged flags.

        Raises:
            TemplateError: Resolution or materialization failed.
        """
        template = context.template or BLANK_TEMPLATE
        console.print(f"[dim]Processing template: {escape(template)}[/dim]")

        decision, flags = resolve(template, context, package=self.config.templates_package)
        context = context.merge(flags)

        target = Path(destination)
        created = not target.exists()
        try:
            kind, source = await self._materialize(decision, context, target)
            total = await asyncio.to_thread(common.finalize, target)
        except Exception:
            # Leave no half-written application behind.
            if created:
                await asyncio.to_thread(shutil.rmtree, target, ignore_errors=True)
            raise

        print_success(f"Template {source} written to {target} ({total} files)")
        return TemplateResult(
            kind=kind,
            source=source,
            destination=target,
            files_written=total,
            typescript=context.typescript,
        )

    async def _materialize(
        self, decision: DispatchDecision, context: GeneratorContext, target: Path
    ) -> tuple[str, str]:
        """Run the handler for *decision*; returns ``(kind, source)``."""
        match decision:
            case UrlTemplate(url=template_url):
                await url.handle(
                    context, template_url, target, timeout=self.config.http_timeout
                )
                return "url", template_url
            case LocalTemplate(path=template_path):
                await local.handle(context, template_path, target)
                return "local", str(template_path)
            case PackageTemplate(spec=spec, package=package):
                await npm.handle(
                    context,
                    package,
                    target,
                    spec,
                    registry_url=self.config.registry_url,
                    timeout=self.config.http_timeout,
                )
                return "npm", f"{spec.name}:{spec.type}"
            case _:
                raise TypeError(f"Unknown dispatch decision: {decision!r}")
