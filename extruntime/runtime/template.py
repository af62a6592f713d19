"""Runner template rendering."""

from __future__ import annotations

from extruntime.exceptions import TemplateError

SOURCE_MARKER = "#{source}"


def validate_template(template: str) -> str:
    count = template.count(SOURCE_MARKER)
    if count != 1:
        raise TemplateError(
            f"runner template must contain {SOURCE_MARKER} exactly once "
            f"(found {count})"
        )
    return template


def render_program(template: str, source: str) -> str:
    """Insert ``source`` at the template's single marker."""

    validate_template(template)
    return template.replace(SOURCE_MARKER, source, 1)


__all__ = ["SOURCE_MARKER", "render_program", "validate_template"]
