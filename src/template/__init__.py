"""Template resolution and materialization for new applications.

Quick usage::

    from src.template import GeneratorContext, TemplateHandler

    context = GeneratorContext(template="navbar:web", namespace="web-app")
    result = await TemplateHandler().handle(context, "/tmp/my-app")
"""

from src.template.errors import (
    InvalidTemplateNameError,
    InvalidTemplateTypeError,
    TemplateError,
    TemplateFetchError,
)
from src.template.handler import TemplateHandler, TemplateResult
from src.template.resolver import (
    BLANK_TEMPLATE,
    TEMPLATES,
    DispatchDecision,
    GeneratorContext,
    GeneratorFlags,
    LocalTemplate,
    PackageTemplate,
    TemplateSpec,
    UrlTemplate,
    resolve,
)

__all__ = [
    "BLANK_TEMPLATE",
    "DispatchDecision",
    "GeneratorContext",
    "GeneratorFlags",
    "InvalidTemplateNameError",
    "InvalidTemplateTypeError",
    "LocalTemplate",
    "PackageTemplate",
    "TEMPLATES",
    "TemplateError",
    "TemplateFetchError",
    "TemplateHandler",
    "TemplateResult",
    "TemplateSpec",
    "UrlTemplate",
    "resolve",
]
