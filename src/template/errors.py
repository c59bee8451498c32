"""Exceptions raised while resolving or materializing a template."""

from __future__ import annotations


class TemplateError(Exception):
    """Raised when a template cannot be resolved or written to disk."""


class InvalidTemplateNameError(TemplateError):
    """Raised when a named template is not one of the known templates."""

    def __init__(self, name: str, valid_names: list[str] | tuple[str, ...]) -> None:
        self.name = name
        self.valid_names = list(valid_names)
        template_list = "".join(f"\n  {value}" for value in self.valid_names)
        super().__init__(
            f"Invalid template name: {name}. \n"
            f"A URL or one of the following names is expected: {template_list}"
        )


class InvalidTemplateTypeError(TemplateError):
    """Raised when a template type is neither ``web`` nor ``hybrid``."""

    def __init__(self, template_type: str) -> None:
        self.template_type = template_type
        super().__init__(f"Invalid template type: {template_type}")


class TemplateFetchError(TemplateError):
    """Raised when a remote template (URL or npm registry) cannot be fetched."""

    def __init__(self, source: str, message: str) -> None:
        self.source = source
        super().__init__(f"Failed to fetch template from {source}: {message}")
