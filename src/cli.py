"""jet-scaffold command line.

Usage::

    python -m src.cli resolve basic-ts --namespace hybrid-app
    python -m src.cli create ./my-app --template navbar:web
    python -m src.cli verify ./my-app --no-build
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from src.config import Config
from src.harness import AcceptanceSuite
from src.template import (
    BLANK_TEMPLATE,
    GeneratorContext,
    LocalTemplate,
    PackageTemplate,
    TemplateError,
    TemplateHandler,
    UrlTemplate,
    resolve,
)
from src.toolkit import TaskError
from src.utils import console, print_error, print_summary_table, print_warning


def _context(args: argparse.Namespace) -> GeneratorContext:
    return GeneratorContext(
        template=args.template,
        namespace=args.namespace,
        typescript=args.typescript,
    )


def cmd_resolve(args: argparse.Namespace, config: Config) -> int:
    context = _context(args)
    decision, flags = resolve(args.template, context, package=config.templates_package)

    match decision:
        case UrlTemplate(url=url):
            rows = [("kind", "url"), ("url", url)]
        case LocalTemplate(path=path):
            rows = [("kind", "local"), ("path", str(path))]
        case PackageTemplate(spec=spec, package=package):
            rows = [
                ("kind", "npm"),
                ("name", spec.name),
                ("type", spec.type),
                ("package", package),
            ]
        case _:
            raise TypeError(f"Unknown dispatch decision: {decision!r}")

    rows.append(("typescript", str(flags.typescript).lower()))
    print_summary_table(rows, title=f"Template: {args.template}")
    return 0


def cmd_create(args: argparse.Namespace, config: Config) -> int:
    destination = Path(args.app_dir)
    if destination.exists() and not destination.is_dir():
        print_error(f"Error: destination is not a directory: {destination}")
        return 1
    if destination.exists() and any(destination.iterdir()):
        print_error(f"Error: destination is not empty: {destination}")
        return 1

    result = asyncio.run(TemplateHandler(config).handle(_context(args), destination))
    print_summary_table(
        [
            ("kind", result.kind),
            ("source", result.source),
            ("destination", str(result.destination)),
            ("files", str(result.files_written)),
            ("typescript", str(result.typescript).lower()),
        ],
        title="Template",
    )
    return 0


def cmd_verify(args: argparse.Namespace, config: Config) -> int:
    app_dir = Path(args.app_dir)
    if not app_dir.is_dir():
        print_error(f"Error: application directory not found: {app_dir}")
        return 1

    acceptance = config.acceptance.model_copy(
        update={
            "app_dir": app_dir,
            "no_scaffold": args.no_scaffold or config.acceptance.no_scaffold,
            "no_build": args.no_build or config.acceptance.no_build,
            "component_name": args.component or config.acceptance.component_name,
        }
    )
    config = config.model_copy(update={"acceptance": acceptance})
    if acceptance.no_scaffold:
        print_warning("Skipping create component and add bundler (no_scaffold)")
    if acceptance.no_build:
        print_warning("Skipping standalone debug and release builds (no_build)")
    suite = AcceptanceSuite(app_dir, config=config)
    asyncio.run(suite.run())
    return 0 if suite.succeeded else 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jet-scaffold",
        description="jet-scaffold -- template resolution and acceptance checks for JET apps",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python -m src.cli resolve basic-ts --namespace hybrid-app\n"
            "  python -m src.cli create ./my-app --template navbar:web\n"
            "  python -m src.cli verify ./my-app --no-build\n"
        ),
    )
    sub = parser.add_subparsers(dest="command", required=True)

    def add_template_options(p: argparse.ArgumentParser) -> None:
        p.add_argument(
            "--namespace",
            default="web",
            help="Generator namespace; contains 'hybrid' for hybrid apps (default: web)",
        )
        p.add_argument(
            "--typescript",
            action="store_true",
            help="Generate a TypeScript application",
        )

    p_resolve = sub.add_parser("resolve", help="Show how a template value is resolved")
    p_resolve.add_argument("template", help="URL, local path or name[:web|hybrid]")
    add_template_options(p_resolve)

    p_create = sub.add_parser("create", help="Materialize a template into a new app directory")
    p_create.add_argument("app_dir", help="Destination application directory")
    p_create.add_argument(
        "--template", "-t",
        default=BLANK_TEMPLATE,
        help=f"URL, local path or name[:web|hybrid] (default: {BLANK_TEMPLATE})",
    )
    add_template_options(p_create)

    p_verify = sub.add_parser("verify", help="Run the acceptance checks against an app")
    p_verify.add_argument("app_dir", help="Generated application directory")
    p_verify.add_argument(
        "--no-scaffold", action="store_true", help="Skip create component / add webpack"
    )
    p_verify.add_argument("--no-build", action="store_true", help="Skip the standalone builds")
    p_verify.add_argument("--component", default=None, help="Component name to create")

    return parser


_COMMANDS = {
    "resolve": cmd_resolve,
    "create": cmd_create,
    "verify": cmd_verify,
}


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``python -m src.cli``."""
    args = build_parser().parse_args(argv)
    config = Config.from_env()

    try:
        return _COMMANDS[args.command](args, config)
    except (TemplateError, TaskError) as exc:
        print_error(f"Error: {exc}")
        return 1
    except KeyboardInterrupt:
        console.print("[yellow]Interrupted.[/yellow]")
        return 130


if __name__ == "__main__":
    sys.exit(main())
