"""Tests for configuration loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from scaffold_kit.config import CONFIG_FILENAME, HelperConfig, load_config
from scaffold_kit.exceptions import ConfigError
from scaffold_kit.file_helper import FileHelper


def test_defaults() -> None:
    cfg = load_config()
    assert cfg == HelperConfig()
    assert cfg.templates_dir == Path(".")
    assert cfg.encoding == "utf-8"
    assert cfg.shell is True


def test_load_from_file(tmp_path: Path) -> None:
    path = tmp_path / "custom.json"
    path.write_text(json.dumps({"templates_dir": "templates", "shell": False}))
    cfg = load_config(path)
    assert cfg.templates_dir == Path("templates")
    assert cfg.shell is False


def test_load_from_directory(tmp_path: Path) -> None:
    (tmp_path / CONFIG_FILENAME).write_text(json.dumps({"encoding": "latin-1"}))
    assert load_config(tmp_path).encoding == "latin-1"


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match = "Config file not found"):
        load_config(tmp_path / "nope.json")


@pytest.mark.parametrize("content", ["{not json", json.dumps({"unknown": 1}), json.dumps({"shell": "maybe"})],
        ids = ["syntax", "extra-key", "bad-type"], )
def test_invalid_file(tmp_path: Path, content: str) -> None:
    path = tmp_path / "bad.json"
    path.write_text(content)
    with pytest.raises(ConfigError, match = "Invalid config file"):
        load_config(path)


def test_helper_from_config(tmp_path: Path) -> None:
    helper = FileHelper.from_config(HelperConfig(templates_dir = tmp_path, encoding = "latin-1", shell = False))
    assert helper.templates_dir == tmp_path
    assert helper.files.encoding == "latin-1"
    assert helper.runner.shell is False
