"""Tests for the subprocess based command runner."""

from __future__ import annotations

import subprocess
import sys
from pathlib import Path

import pytest

from scaffold_kit.commands import CommandRunner

PYTHON = f'"{sys.executable}"'


def test_run_success() -> None:
    result = CommandRunner().run(f"{PYTHON} -c \"print('hi')\"", {"capture_output": True, "text": True})
    assert result.returncode == 0
    assert result.stdout.strip() == "hi"


def test_run_with_cwd(tmp_path: Path) -> None:
    CommandRunner().run(f"{PYTHON} -c \"open('marker', 'w').close()\"", {"cwd": str(tmp_path)})
    assert (tmp_path / "marker").exists()


def test_run_failure_raises() -> None:
    with pytest.raises(subprocess.CalledProcessError) as excinfo:
        CommandRunner().run(f"{PYTHON} -c \"raise SystemExit(3)\"", {})
    assert excinfo.value.returncode == 3


def test_run_without_shell(tmp_path: Path) -> None:
    runner = CommandRunner(shell = False)
    result = runner.run(f"{PYTHON} -c \"print(1 + 1)\"", {"capture_output": True, "text": True})
    assert result.stdout.strip() == "2"


def test_unknown_option() -> None:
    with pytest.raises(TypeError):
        CommandRunner().run("true", {"argument": 1})
