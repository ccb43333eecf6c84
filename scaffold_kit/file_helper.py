"""File operations performed on behalf of generator commands.

:class:`FileHelper` is the single seam every generator step goes through.
For each operation it checks preconditions, delegates the actual work to
the injected file‑system service (or command runner) and then writes one
progress line to its output stream, e.g.::

          create  app/Gemfile
          remove  app/tmp/
        subtract  app/Gemfile
          insert  app/config/routes.rb
          append  app/.gitignore
             run  bundle install

A progress line is only written once the delegated call returned, so a
failed or skipped operation never shows up in the transcript.  Errors
raised by the collaborators propagate unchanged.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, Union

from .commands import CommandRunner, Runner
from .exceptions import ArgumentError, FileAlreadyExistsError
from .files import Files, FileSystem, LineTarget, PathLike
from .templates import Renderer, TemplateRenderer

if TYPE_CHECKING:
    from .config import HelperConfig

__all__ = ["FileHelper", "AfterFirst", "AfterLast", "InsertPosition", "format_progress", "VERB_WIDTH"]

log = logging.getLogger(__name__)

VERB_WIDTH = 12


class Output(Protocol):
    def write(self, text: str) -> Any: ...


@dataclass(frozen = True)
class AfterFirst:
    """Insert after the first line matching ``marker``."""

    marker: LineTarget


@dataclass(frozen = True)
class AfterLast:
    """Insert after the last line matching ``marker``."""

    marker: LineTarget


InsertPosition = Union[AfterFirst, AfterLast]


def format_progress(verb: str, subject: Any) -> str:
    """Return the progress line for *verb* applied to *subject*."""
    return f"{verb:>{VERB_WIDTH}}  {subject}\n"


def _insert_position(
        position: InsertPosition | None, after_first: LineTarget | None, after_last: LineTarget | None, ) -> InsertPosition:
    candidates = [position, None if after_first is None else AfterFirst(after_first),
            None if after_last is None else AfterLast(after_last), ]
    given = [candidate for candidate in candidates if candidate is not None]

    if not given:
        raise ArgumentError("Pass in either after_first: or after_last:")
    if len(given) > 1:
        raise ArgumentError("Pass in only one of either after_first: or after_last:")
    if not isinstance(given[0], (AfterFirst, AfterLast)):
        raise ArgumentError(f"Unsupported insert position: {given[0]!r}")
    return given[0]


class FileHelper:
    """Create, copy, edit and delete files while reporting progress.

    Parameters
    ----------
    out:
        Destination for progress lines; anything with a ``write`` method.
    files:
        File‑system service, defaults to :class:`scaffold_kit.files.Files`.
    templates_dir:
        Directory that template names passed to :meth:`create` and
        :meth:`copy` are resolved against.
    renderer:
        Template renderer used by :meth:`create`.
    runner:
        Command runner used by :meth:`execute`.
    """

    def __init__(
            self, out: Output | None = None, files: FileSystem | None = None, templates_dir: PathLike = ".",
            renderer: Renderer | None = None, runner: Runner | None = None, ) -> None:
        self.out = out if out is not None else sys.stdout
        self.files = files if files is not None else Files()
        self.templates_dir = Path(templates_dir)
        self.renderer = renderer if renderer is not None else TemplateRenderer()
        self.runner = runner if runner is not None else CommandRunner()

    @classmethod
    def from_config(cls, config: HelperConfig, out: Output | None = None) -> FileHelper:
        """Build a helper with the default collaborators configured from *config*."""
        return cls(
                out = out, files = Files(encoding = config.encoding), templates_dir = config.templates_dir,
                runner = CommandRunner(shell = config.shell), )

    def _report(self, verb: str, subject: Any) -> None:
        self.out.write(format_progress(verb, subject))

    def _template(self, name: PathLike) -> Path:
        return self.templates_dir / name

    # ------------------------------------------------------------------
    # Creating files
    # ------------------------------------------------------------------

    def create(self, template_name: PathLike, destination: PathLike, context: Any) -> None:
        """Render *template_name* with *context* into *destination*.

        Raises
        ------
        FileAlreadyExistsError
            If *destination* already exists.  Nothing is rendered, written
            or reported in that case.
        """
        if self.files.exists(destination):
            raise FileAlreadyExistsError(f"{destination} expected to not exist yet")

        source = self._template(template_name)
        log.debug("Creating %s from %s", destination, source)
        self.files.write(destination, self.renderer.render(source, context))
        self._report("create", destination)

    def touch(self, destination: PathLike) -> None:
        self.files.touch(destination)
        self._report("create", destination)

    def copy(self, template_name: PathLike, destination: PathLike) -> None:
        """Copy *template_name* to *destination* without rendering it."""
        source = self._template(template_name)
        log.debug("Copying %s to %s", source, destination)
        self.files.copy(source, destination)
        self._report("create", destination)

    # ------------------------------------------------------------------
    # Deleting
    # ------------------------------------------------------------------

    def delete(self, path: PathLike, allow_missing: bool = False) -> None:
        """Delete the file at *path*.

        With ``allow_missing=True`` an absent path is skipped silently,
        otherwise the file‑system service's ``FileNotFoundError`` propagates.
        """
        if allow_missing and not self.files.exists(path):
            log.debug("Skipping delete of missing %s", path)
            return

        self.files.delete(path)
        self._report("remove", path)

    def delete_directory(self, path: PathLike, allow_missing: bool = False) -> None:
        """Delete the directory at *path* and everything below it."""
        if allow_missing and not self.files.exists(path):
            log.debug("Skipping delete of missing directory %s", path)
            return

        self.files.delete_directory(path)
        self._report("remove", path)

    # ------------------------------------------------------------------
    # Editing existing files
    # ------------------------------------------------------------------

    def remove_line(self, path: PathLike, content: LineTarget) -> None:
        self.files.remove_line(path, content)
        self._report("subtract", path)

    def insert(
            self, path: PathLike, line: str, position: InsertPosition | None = None, *,
            after_first: LineTarget | None = None, after_last: LineTarget | None = None, ) -> None:
        """Insert *line* into *path* after a marker line.

        The marker is given either as a ready made ``position``
        (:class:`AfterFirst` / :class:`AfterLast`) or through exactly one of
        the ``after_first`` / ``after_last`` keywords.

        Raises
        ------
        ArgumentError
            If no marker or more than one marker is supplied.
        """
        position = _insert_position(position, after_first, after_last)

        if isinstance(position, AfterFirst):
            self.files.inject_line_after(path, position.marker, line)
        else:
            self.files.inject_line_after_last(path, position.marker, line)
        self._report("insert", path)

    def append(self, path: PathLike, line: str) -> None:
        self.files.append(path, line)
        self._report("append", path)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def execute(self, command: str, options: Mapping[str, Any] | None = None, **extra: Any) -> None:
        """Run *command* through the command runner and report it.

        Options may be passed as a mapping, as keyword arguments, or both;
        keywords win on conflicts.
        """
        merged = {**(options or {}), **extra}
        self.runner.run(command, merged)
        self._report("run", command)
