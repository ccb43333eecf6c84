"""Command‑line interface for the **scaffold_kit** package.

Every command maps onto one :class:`scaffold_kit.file_helper.FileHelper`
operation and prints the same progress lines the helper writes for a
generator:

* ``create`` – render a template into a new file.
* ``copy`` – copy a template verbatim.
* ``touch`` – create an empty placeholder file.
* ``delete`` / ``delete-dir`` – remove a file or a directory tree.
* ``remove-line`` / ``insert`` / ``append`` – line level edits.
* ``run`` – execute a shell command.

Options shared by all commands (``--templates-dir``, ``--config``,
``--verbose``) go before the command name.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Optional

import typer
from jinja2 import TemplateError

from scaffold_kit.config import load_config
from scaffold_kit.exceptions import ScaffoldKitError
from scaffold_kit.file_helper import FileHelper

log = logging.getLogger(__name__)

app = typer.Typer(name = "scaffold-kit", help = "Generator file operations with progress reporting")

_HANDLED_ERRORS = (ScaffoldKitError, OSError, TemplateError, subprocess.CalledProcessError)


class _EchoOutput:
    """Progress sink that writes through :func:`typer.echo`."""

    def write(self, text: str) -> None:
        typer.echo(text, nl = False)


def parse_variable(value: str) -> tuple[str, str]:
    """Parse a template variable in the form KEY=VALUE."""
    if "=" not in value:
        raise typer.BadParameter(f"Must be KEY=VALUE, got: {value!r}")
    key, val = value.split("=", 1)
    if not key:
        raise typer.BadParameter(f"Missing variable name in {value!r}")
    return key, val


def _helper(ctx: typer.Context) -> FileHelper:
    return ctx.obj


def _guarded(action, *args, **kwargs) -> None:
    try:
        action(*args, **kwargs)
    except _HANDLED_ERRORS as exc:
        log.debug("Command failed", exc_info = True)
        typer.echo(f"Error: {exc}", err = True)
        raise typer.Exit(code = 1) from exc


@app.callback()
def main_options(
        ctx: typer.Context, templates_dir: Optional[Path] = typer.Option(
                None, "--templates-dir", "-t", help = "Directory template names are resolved against.", ),
        config: Optional[Path] = typer.Option(
                None, "--config", "-c", help = "JSON configuration file (or directory containing scaffold_kit.json).", ),
        verbose: bool = typer.Option(False, "--verbose", "-v", help = "Enable debug logging."), ) -> None:
    """Configure logging and build the file helper shared by all commands."""
    logging.basicConfig(
            level = logging.DEBUG if verbose else logging.WARNING, format = "[%(levelname)s] %(message)s", )

    try:
        cfg = load_config(config)
    except ScaffoldKitError as exc:
        typer.echo(f"Error: {exc}", err = True)
        raise typer.Exit(code = 1) from exc

    if templates_dir is not None:
        cfg = cfg.model_copy(update = {"templates_dir": templates_dir})
    ctx.obj = FileHelper.from_config(cfg, out = _EchoOutput())


@app.command(help = "Render a template into a new file.")
def create(
        ctx: typer.Context, template: str = typer.Argument(..., help = "Template name, relative to the templates dir."),
        destination: str = typer.Argument(..., help = "File to create; must not exist yet."),
        variables: Optional[list[str]] = typer.Option(
                None, "--var", help = "Template variable (KEY=VALUE). Repeatable.", metavar = "KEY=VALUE", ), ) -> None:
    context = dict(parse_variable(v) for v in variables or [])
    _guarded(_helper(ctx).create, template, destination, context)


@app.command(help = "Copy a template verbatim.")
def copy(
        ctx: typer.Context, template: str = typer.Argument(..., help = "Template name, relative to the templates dir."),
        destination: str = typer.Argument(..., help = "Destination path."), ) -> None:
    _guarded(_helper(ctx).copy, template, destination)


@app.command(help = "Create an empty placeholder file.")
def touch(ctx: typer.Context, destination: str = typer.Argument(..., help = "File to create.")) -> None:
    _guarded(_helper(ctx).touch, destination)


@app.command(help = "Delete a file.")
def delete(
        ctx: typer.Context, path: str = typer.Argument(..., help = "File to delete."),
        allow_missing: bool = typer.Option(False, "--allow-missing", help = "Do nothing if the file is absent."), ) -> None:
    _guarded(_helper(ctx).delete, path, allow_missing = allow_missing)


@app.command("delete-dir", help = "Delete a directory and its contents.")
def delete_dir(
        ctx: typer.Context, path: str = typer.Argument(..., help = "Directory to delete."),
        allow_missing: bool = typer.Option(False, "--allow-missing", help = "Do nothing if the directory is absent."), ) -> None:
    _guarded(_helper(ctx).delete_directory, path, allow_missing = allow_missing)


@app.command("remove-line", help = "Remove every line matching CONTENT from a file.")
def remove_line(
        ctx: typer.Context, path: str = typer.Argument(..., help = "File to edit."),
        content: str = typer.Argument(..., help = "Line content to remove."), ) -> None:
    _guarded(_helper(ctx).remove_line, path, content)


@app.command(help = "Insert a line after a marker line.")
def insert(
        ctx: typer.Context, path: str = typer.Argument(..., help = "File to edit."),
        line: str = typer.Argument(..., help = "Line to insert."),
        after_first: Optional[str] = typer.Option(None, "--after-first", help = "Insert after the first matching line."),
        after_last: Optional[str] = typer.Option(None, "--after-last", help = "Insert after the last matching line."), ) -> None:
    _guarded(_helper(ctx).insert, path, line, after_first = after_first, after_last = after_last)


@app.command(help = "Append a line to the end of a file.")
def append(
        ctx: typer.Context, path: str = typer.Argument(..., help = "File to edit."),
        line: str = typer.Argument(..., help = "Line to append."), ) -> None:
    _guarded(_helper(ctx).append, path, line)


@app.command("run", help = "Run a shell command.")
def run_command(
        ctx: typer.Context, command: str = typer.Argument(..., help = "Command line to execute."),
        cwd: Optional[Path] = typer.Option(None, "--cwd", help = "Working directory for the command."), ) -> None:
    options = {"cwd": str(cwd)} if cwd is not None else {}
    _guarded(_helper(ctx).execute, command, options)


def main() -> None:  # pragma: no cover – thin wrapper
    """Entry point used by the ``scaffold-kit`` console script."""
    app()


if __name__ == "__main__":
    main()
