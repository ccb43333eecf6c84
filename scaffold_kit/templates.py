"""Template rendering for generated files."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template
from pydantic import BaseModel

__all__ = ["Renderer", "TemplateRenderer", "context_variables"]

log = logging.getLogger(__name__)


class Renderer(Protocol):
    """Turns a template file and a render context into text."""

    def render(self, template_path: Path, context: Any) -> str: ...


def context_variables(context: Any) -> dict[str, Any]:
    """Return the template variables exposed by *context*.

    Mappings are used as they are.  Pydantic models contribute their
    dumped fields and any other object the public entries of its instance
    ``__dict__``; properties are never evaluated up front.  In both cases the
    object itself is also reachable as ``context`` so templates can call its
    methods and properties lazily.
    """
    if context is None:
        return {}
    if isinstance(context, Mapping):
        return dict(context)
    if isinstance(context, BaseModel):
        return {**context.model_dump(), "context": context}

    variables = {name: value for name, value in getattr(context, "__dict__", {}).items() if not name.startswith("_")}
    variables["context"] = context
    return variables


class TemplateRenderer:
    """Jinja2 backed :class:`Renderer`.

    Templates are looked up relative to their own directory so that
    ``{% include %}`` and ``{% extends %}`` work with sibling files.
    Undefined variables are errors rather than silently rendered as
    empty strings.
    """

    def __init__(self, **environment_options: Any) -> None:
        self.environment_options = {"undefined": StrictUndefined, "autoescape": False, "trim_blocks": True,
                "lstrip_blocks": True, "keep_trailing_newline": True, **environment_options, }

    def load(self, template_path: Path | str) -> Template:
        template_path = Path(template_path)
        if not template_path.is_file():
            raise FileNotFoundError(f"Template not found: {template_path}")

        env = Environment(loader = FileSystemLoader(str(template_path.parent)), **self.environment_options)
        return env.get_template(template_path.name)

    def render(self, template_path: Path | str, context: Any) -> str:
        log.debug("Rendering template %s", template_path)
        template = self.load(template_path)
        return template.render(**context_variables(context))
