"""Custom exception hierarchy for the scaffold_kit package.

Errors raised by the helper itself derive from :class:`ScaffoldKitError`
so that a CLI can catch a single exception type.  Each concrete error also
inherits the matching builtin (``FileExistsError``, ``ValueError``, ...)
so callers that only know the standard library still catch it.
"""


class ScaffoldKitError(RuntimeError):
    """Base exception for all scaffold‑kit related errors."""


class FileAlreadyExistsError(ScaffoldKitError, FileExistsError):
    """Raised when ``create`` targets a path that already exists."""


class ArgumentError(ScaffoldKitError, ValueError):
    """Raised when a helper method is called with an invalid argument combination."""


class MissingTargetError(ScaffoldKitError, LookupError):
    """Raised when a marker line cannot be found in a file."""


class ConfigError(ScaffoldKitError):
    """Raised when the configuration file is missing or invalid."""
