"""Tests for the Jinja2 template renderer."""

from __future__ import annotations

from pathlib import Path

import pytest
from jinja2 import UndefinedError
from pydantic import BaseModel

from scaffold_kit.templates import TemplateRenderer, context_variables


class AppContext(BaseModel):
    app_name: str
    ruby_version: str = "3.3"


class LegacyContext:
    def __init__(self, name: str) -> None:
        self.name = name

    def camelized(self) -> str:
        return "".join(part.capitalize() for part in self.name.split("_"))


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    (tmp_path / "Gemfile.j2").write_text('gem "{{ app_name }}"\n')
    return tmp_path


def test_render_mapping(template_dir: Path) -> None:
    text = TemplateRenderer().render(template_dir / "Gemfile.j2", {"app_name": "bookshelf"})
    assert text == 'gem "bookshelf"\n'


def test_render_model(template_dir: Path) -> None:
    (template_dir / ".ruby-version.j2").write_text("{{ ruby_version }} {{ context.app_name }}")
    text = TemplateRenderer().render(template_dir / ".ruby-version.j2", AppContext(app_name = "bookshelf"))
    assert text == "3.3 bookshelf"


def test_render_object_exposes_methods(tmp_path: Path) -> None:
    (tmp_path / "module.j2").write_text("module {{ context.camelized() }}\nend\n")
    text = TemplateRenderer().render(tmp_path / "module.j2", LegacyContext("book_shelf"))
    assert text == "module BookShelf\nend\n"


def test_render_with_include(tmp_path: Path) -> None:
    (tmp_path / "_header.j2").write_text("# {{ title }}\n")
    (tmp_path / "README.j2").write_text('{% include "_header.j2" %}body\n')
    assert TemplateRenderer().render(tmp_path / "README.j2", {"title": "Hi"}) == "# Hi\nbody\n"


def test_missing_template(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match = "Template not found"):
        TemplateRenderer().render(tmp_path / "missing.j2", {})


def test_undefined_variable(template_dir: Path) -> None:
    with pytest.raises(UndefinedError):
        TemplateRenderer().render(template_dir / "Gemfile.j2", {})


def test_environment_options_override(template_dir: Path) -> None:
    renderer = TemplateRenderer(keep_trailing_newline = False)
    assert renderer.render(str(template_dir / "Gemfile.j2"), {"app_name": "x"}) == 'gem "x"'


def test_context_variables() -> None:
    assert context_variables(None) == {}
    assert context_variables({"a": 1}) == {"a": 1}
    variables = context_variables(LegacyContext("x"))
    assert variables["name"] == "x"
    assert variables["context"].name == "x"


class BrokenPropertyContext:
    def __init__(self) -> None:
        self.app_name = "bookshelf"

    @property
    def database_url(self) -> str:
        raise RuntimeError("DATABASE_URL is not set")


def test_properties_are_not_evaluated_up_front(template_dir: Path) -> None:
    text = TemplateRenderer().render(template_dir / "Gemfile.j2", BrokenPropertyContext())
    assert text == 'gem "bookshelf"\n'
    assert "database_url" not in context_variables(BrokenPropertyContext())
