"""File‑system service used by :class:`scaffold_kit.file_helper.FileHelper`.

:class:`FileSystem` names the capability set the helper relies on and
:class:`Files` is the default, pathlib based implementation.  Tests (and
callers that want a dry run) can pass any object that satisfies the
protocol structurally.

Line oriented edits read the whole file, splice the list of lines and
write the result back atomically.  Existing line endings are preserved and
inserted lines reuse the ending of the neighbouring line, so CRLF files stay
CRLF.  Rewrites keep the permission bits of the file they replace.
"""

from __future__ import annotations

import logging
import os
import re
import shutil
import tempfile
from pathlib import Path
from typing import Protocol, Union

from .exceptions import ArgumentError, MissingTargetError

__all__ = ["FileSystem", "Files", "LineTarget"]

log = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]
LineTarget = Union[str, re.Pattern]

DEFAULT_MODE = 0o666
_LINE_ENDINGS = ("\r\n", "\n", "\r")


class FileSystem(Protocol):
    """Capabilities the file helper delegates to."""

    def exists(self, path: PathLike) -> bool: ...

    def write(self, path: PathLike, content: str) -> None: ...

    def copy(self, source: PathLike, destination: PathLike) -> None: ...

    def delete(self, path: PathLike) -> None: ...

    def delete_directory(self, path: PathLike) -> None: ...

    def touch(self, path: PathLike) -> None: ...

    def remove_line(self, path: PathLike, target: LineTarget) -> None: ...

    def inject_line_after(self, path: PathLike, target: LineTarget, line: str) -> None: ...

    def inject_line_after_last(self, path: PathLike, target: LineTarget, line: str) -> None: ...

    def append(self, path: PathLike, line: str) -> None: ...


def _check_target(target: LineTarget) -> None:
    if isinstance(target, str) and not target.strip():
        raise ArgumentError("Line target must not be blank")


def _matches(line: str, target: LineTarget) -> bool:
    if isinstance(target, re.Pattern):
        return target.search(line) is not None
    return target.strip() in line.strip()


def _ending(line: str) -> str:
    return next((ending for ending in _LINE_ENDINGS if line.endswith(ending)), "")


def _newline(lines: list[str], index: int) -> str:
    """Line ending to use next to ``lines[index]``, falling back to the file's first one."""
    if 0 <= index < len(lines) and _ending(lines[index]):
        return _ending(lines[index])
    return next((_ending(line) for line in lines if _ending(line)), "\n")


def _terminated(line: str, newline: str) -> str:
    return line if _ending(line) else line + newline


def _current_umask() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return umask


class Files:
    """Default :class:`FileSystem` implementation backed by the local disk.

    Parameters
    ----------
    encoding:
        Text encoding used for every read and write – defaults to ``"utf-8"``.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    # ------------------------------------------------------------------
    # Whole‑file operations
    # ------------------------------------------------------------------

    def exists(self, path: PathLike) -> bool:
        return Path(path).exists()

    def read(self, path: PathLike) -> str:
        return Path(path).read_text(encoding = self.encoding)

    def write(self, path: PathLike, content: str) -> None:
        """Write *content* to *path* atomically.

        Missing parent directories are created.  The content goes to a
        temporary file in the destination directory first and is then moved
        over ``path`` so an interrupted write never leaves a partial file.
        An existing file keeps its permission bits; a new one gets
        ``DEFAULT_MODE`` masked by the umask.
        """
        target = Path(path)
        target.parent.mkdir(parents = True, exist_ok = True)

        fd, tmp_name = tempfile.mkstemp(prefix = f".{target.name}.", dir = str(target.parent))
        try:
            with os.fdopen(fd, "w", encoding = self.encoding, newline = "") as tmp:
                tmp.write(content)
            if target.exists():
                shutil.copymode(target, tmp_name)
            else:
                os.chmod(tmp_name, DEFAULT_MODE & ~_current_umask())
            os.replace(tmp_name, target)
        finally:
            if os.path.exists(tmp_name):
                os.remove(tmp_name)
        log.debug("Wrote %d characters to %s", len(content), target)

    def copy(self, source: PathLike, destination: PathLike) -> None:
        """Copy *source* verbatim to *destination*, creating parent directories."""
        src = Path(source)
        if not src.is_file():
            raise FileNotFoundError(f"No such file: {src}")
        dst = Path(destination)
        dst.parent.mkdir(parents = True, exist_ok = True)
        shutil.copy2(src, dst)
        log.debug("Copied %s to %s", src, dst)

    def delete(self, path: PathLike) -> None:
        """Delete the file at *path*; raises ``FileNotFoundError`` if it is missing."""
        Path(path).unlink()
        log.debug("Deleted %s", path)

    def delete_directory(self, path: PathLike) -> None:
        """Delete the directory at *path* together with its contents."""
        target = Path(path)
        if not target.exists():
            raise FileNotFoundError(f"No such directory: {path}")
        shutil.rmtree(target)
        log.debug("Deleted directory %s", path)

    def touch(self, path: PathLike) -> None:
        """Create an empty file at *path* if it does not exist yet."""
        target = Path(path)
        target.parent.mkdir(parents = True, exist_ok = True)
        target.touch(exist_ok = True)
        log.debug("Touched %s", target)

    # ------------------------------------------------------------------
    # Line‑level edits
    # ------------------------------------------------------------------

    def _read_lines(self, path: PathLike) -> list[str]:
        with open(path, encoding = self.encoding, newline = "") as fp:
            return fp.read().splitlines(keepends = True)

    def _write_lines(self, path: PathLike, lines: list[str]) -> None:
        self.write(path, "".join(lines))

    def remove_line(self, path: PathLike, target: LineTarget) -> None:
        """Remove every line of *path* that matches *target*."""
        _check_target(target)
        lines = self._read_lines(path)
        kept = [line for line in lines if not _matches(line, target)]
        if len(kept) != len(lines):
            self._write_lines(path, kept)
        log.debug("Removed %d line(s) from %s", len(lines) - len(kept), path)

    def _inject(self, path: PathLike, target: LineTarget, line: str, *, last: bool) -> None:
        _check_target(target)
        lines = self._read_lines(path)
        indexes = [i for i, existing in enumerate(lines) if _matches(existing, target)]
        if not indexes:
            raise MissingTargetError(f"Cannot find {target!r} inside {path}")

        index = indexes[-1] if last else indexes[0]
        newline = _newline(lines, index)
        lines[index] = _terminated(lines[index], newline)
        lines.insert(index + 1, _terminated(line, newline))
        self._write_lines(path, lines)
        log.debug("Inserted line after line %d of %s", index + 1, path)

    def inject_line_after(self, path: PathLike, target: LineTarget, line: str) -> None:
        """Insert *line* after the first line of *path* that matches *target*."""
        self._inject(path, target, line, last = False)

    def inject_line_after_last(self, path: PathLike, target: LineTarget, line: str) -> None:
        """Insert *line* after the last line of *path* that matches *target*."""
        self._inject(path, target, line, last = True)

    def append(self, path: PathLike, line: str) -> None:
        """Add *line* as the new final line of *path*."""
        lines = self._read_lines(path)
        newline = _newline(lines, len(lines) - 1)
        if lines:
            lines[-1] = _terminated(lines[-1], newline)
        lines.append(_terminated(line, newline))
        self._write_lines(path, lines)
        log.debug("Appended line to %s", path)
