"""Shell command execution for generator steps such as ``bundle install``."""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Mapping
from typing import Any, Protocol

__all__ = ["Runner", "CommandRunner"]

log = logging.getLogger(__name__)


class Runner(Protocol):
    """Runs a command string with an option mapping."""

    def run(self, command: str, options: Mapping[str, Any]) -> Any: ...


class CommandRunner:
    """Default :class:`Runner` built on :func:`subprocess.run`.

    ``options`` are forwarded as keyword arguments to ``subprocess.run``
    (``cwd``, ``env``, ``timeout`` ...).  A non‑zero exit status raises
    :class:`subprocess.CalledProcessError`.
    """

    def __init__(self, shell: bool = True) -> None:
        self.shell = shell

    def run(self, command: str, options: Mapping[str, Any] | None = None) -> subprocess.CompletedProcess:
        log.info("Running %s", command)
        args: Any = command if self.shell else shlex.split(command)
        return subprocess.run(args, shell = self.shell, check = True, **dict(options or {}))
