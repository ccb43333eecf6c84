"""Configuration for the file helper and the CLI."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import ConfigError

__all__ = ["HelperConfig", "load_config", "CONFIG_FILENAME"]

log = logging.getLogger(__name__)

CONFIG_FILENAME = "scaffold_kit.json"


class HelperConfig(BaseModel):
    """Settings shared by :class:`scaffold_kit.file_helper.FileHelper` and the CLI."""

    templates_dir: Path = Field(Path("."), description = "Directory template names are resolved against")
    encoding: str = Field("utf-8", description = "Text encoding for reads and writes")
    shell: bool = Field(True, description = "Run commands through the shell")

    model_config = ConfigDict(extra = "forbid")


def load_config(config_path: str | Path | None = None) -> HelperConfig:
    """Load a :class:`HelperConfig` from a JSON file.

    Parameters
    ----------
    config_path:
        Path to the JSON configuration file.  If the path points to a
        directory, ``scaffold_kit.json`` inside it is used.  ``None``
        returns the defaults.

    Returns
    -------
    HelperConfig
        Parsed configuration.
    """
    if config_path is None:
        return HelperConfig()

    cfg_file = Path(config_path)
    if cfg_file.is_dir():
        cfg_file = cfg_file / CONFIG_FILENAME

    if not cfg_file.is_file():
        raise ConfigError(f"Config file not found: {cfg_file}")

    try:
        with cfg_file.open("r", encoding = "utf-8") as f:
            data = json.load(f)
        config = HelperConfig.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as exc:
        raise ConfigError(f"Invalid config file {cfg_file}: {exc}") from exc

    log.debug("Loaded config from %s", cfg_file)
    return config
