"""Top‑level package for *scaffold_kit*."""

from __future__ import annotations

import logging

from .commands import CommandRunner, Runner
from .config import HelperConfig, load_config
from .exceptions import ArgumentError, ConfigError, FileAlreadyExistsError, MissingTargetError, ScaffoldKitError
from .file_helper import AfterFirst, AfterLast, FileHelper, InsertPosition, format_progress
from .files import Files, FileSystem
from .templates import Renderer, TemplateRenderer

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Explicitly expose the public API members
__all__ = ["FileHelper", "AfterFirst", "AfterLast", "InsertPosition", "format_progress", "Files", "FileSystem",
        "TemplateRenderer", "Renderer", "CommandRunner", "Runner", "HelperConfig", "load_config", "ScaffoldKitError",
        "FileAlreadyExistsError", "ArgumentError", "MissingTargetError", "ConfigError", ]
