"""Template source resolution.

Classifies a raw ``--template`` value as a URL, an existing local path or a
named package template, and returns a dispatch decision for the handler that
materializes it. Checks run in a fixed order and the first match wins:

1. ``http(s)`` URL
2. existing local path that is not a reserved template name
3. named template, optionally suffixed ``:web`` or ``:hybrid``

Resolution never mutates its input. When a named template implies
TypeScript, the returned ``GeneratorFlags`` carry ``typescript=True`` and the
caller merges them into its context.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict

from src.config import DEFAULT_TEMPLATES_PACKAGE
from src.utils import expand_path

from .errors import InvalidTemplateNameError, InvalidTemplateTypeError


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

HYBRID = "hybrid"
WEB = "web"
TEMPLATE_TYPES: tuple[str, ...] = (WEB, HYBRID)

BLANK_TEMPLATE = "blank"
TYPESCRIPT_SUFFIX = "-ts"

TEMPLATES: tuple[str, ...] = (
    BLANK_TEMPLATE,
    f"{BLANK_TEMPLATE}{TYPESCRIPT_SUFFIX}",
    "basic",
    "basic-ts",
    "navbar",
    "navbar-ts",
    "navdrawer",
    "navdrawer-ts",
)

_URL_PATTERN = re.compile(r"^https?://[^\s$.?#].[^\s]*\Z", re.IGNORECASE)


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class TemplateSpec(BaseModel):
    """A named template and the application type it is fetched for."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: Literal["web", "hybrid"]


@dataclass(frozen=True)
class GeneratorFlags:
    """Flags that resolution may change on the generator."""

    typescript: bool = False


@dataclass(frozen=True)
class GeneratorContext:
    """Read-only generator options consulted during resolution."""

    template: str | None = None
    namespace: str = ""
    typescript: bool = False

    @property
    def flags(self) -> GeneratorFlags:
        return GeneratorFlags(typescript=self.typescript)

    def merge(self, flags: GeneratorFlags) -> "GeneratorContext":
        """Return a copy of the context with *flags* applied."""
        return replace(self, typescript=flags.typescript)


@dataclass(frozen=True)
class UrlTemplate:
    url: str


@dataclass(frozen=True)
class LocalTemplate:
    path: Path


@dataclass(frozen=True)
class PackageTemplate:
    spec: TemplateSpec
    package: str = DEFAULT_TEMPLATES_PACKAGE


DispatchDecision = Union[UrlTemplate, LocalTemplate, PackageTemplate]


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


def resolve(
    raw_template: str | None,
    context: GeneratorContext,
    package: str = DEFAULT_TEMPLATES_PACKAGE,
) -> tuple[DispatchDecision, GeneratorFlags]:
    """Classify *raw_template* and pick the handler that materializes it.

    Args:
        raw_template: The ``--template`` value. Empty or ``None`` means the
            blank template.
        context: Generator namespace and current TypeScript flag.
        package: npm coordinate used for named templates.

    Returns:
        The dispatch decision and the generator flags after resolution.

    Raises:
        InvalidTemplateNameError: Named template is not a known template.
        InvalidTemplateTypeError: Template type is not ``web`` or ``hybrid``.
    """
    template = raw_template or BLANK_TEMPLATE

    if is_url(template):
        return UrlTemplate(template), context.flags

    local_path = local_template_path(template)
    # A reserved name never points at a local folder, even if one exists in the cwd.
    if local_path is not None and template not in TEMPLATES:
        return LocalTemplate(local_path), context.flags

    spec, flags = resolve_template_spec(template, context)
    return PackageTemplate(spec, package), flags


def is_url(template: str) -> bool:
    return bool(_URL_PATTERN.match(template))


def local_template_path(template: str) -> Path | None:
    """Return the absolute path of *template* if it exists on disk."""
    absolute = expand_path(template)
    try:
        return absolute if absolute.exists() else None
    except OSError:
        # Names the OS cannot stat (too long, invalid) are not local templates.
        return None


def resolve_template_spec(
    template: str, context: GeneratorContext
) -> tuple[TemplateSpec, GeneratorFlags]:
    """Split ``name[:type]`` and validate both parts."""
    parts = template.split(":")
    name = parts[0]
    template_type = parts[1] if len(parts) > 1 else generator_type(context.namespace)

    flags = context.flags
    if name.endswith(TYPESCRIPT_SUFFIX):
        flags = GeneratorFlags(typescript=True)
    elif context.typescript:
        name = f"{name}{TYPESCRIPT_SUFFIX}"

    validate_template_name(name)
    validate_template_type(template_type)

    return TemplateSpec(name=name, type=template_type), flags


def generator_type(namespace: str) -> str:
    return HYBRID if HYBRID in (namespace or "") else WEB


def validate_template_name(name: str) -> None:
    if name not in TEMPLATES:
        raise InvalidTemplateNameError(name, TEMPLATES)


def validate_template_type(template_type: str) -> None:
    if template_type not in TEMPLATE_TYPES:
        raise InvalidTemplateTypeError(template_type)
