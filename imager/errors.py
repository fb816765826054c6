from __future__ import annotations
from pathlib import Path


class ImagerError(Exception):
    """Base class for every error the imager CLI reports to the user."""


class UsageError(ImagerError):
    """
    A command-line flag is missing or carries a malformed value.
    `flag` names the offending option (e.g. "--rotate") when known.
    """
    def __init__(self, message: str, flag: str | None = None):
        super().__init__(message)
        self.flag = flag


class MismatchedPathCountError(UsageError):
    def __init__(self, n_inputs: int, n_outputs: int):
        super().__init__(
            f"Inputs must be same length as outputs "
            f"(got {n_inputs} input(s) and {n_outputs} output(s))."
        )
        self.n_inputs = n_inputs
        self.n_outputs = n_outputs


class DecodeError(ImagerError):
    """Input file missing, unreadable or not a recognised image format."""
    def __init__(self, path: str | Path, reason: str = "unreadable or unrecognised image"):
        super().__init__(f"Failed to open {path}: {reason}")
        self.path = Path(path)


class EncodeError(ImagerError):
    """Output file could not be written (bad extension, permissions, ...)."""
    def __init__(self, path: str | Path, reason: str = "unable to save file"):
        super().__init__(f"Failed to save {path}: {reason}")
        self.path = Path(path)


class TransformError(ImagerError):
    """A transform's parameters are invalid for the image it is applied to."""


class ConfigError(UsageError):
    """An environment variable (or .env entry) holds a value that cannot be used."""
    def __init__(self, name: str, value: str, expected: str):
        super().__init__(f"{name}={value!r} is not {expected}", flag=name)
        self.name = name
        self.value = value
