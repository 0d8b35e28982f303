"""Error taxonomy for the baseline harness.

Only structural and setup problems raise. Content-level discrepancies between
generated files and baselines are collected into a Verdict instead.
"""

from __future__ import annotations


class HarnessError(Exception):
    """Base class for all harness errors."""


class SetupError(HarnessError):
    """The generator could not be prepared (missing executable, bad permissions)."""


class GeneratorError(HarnessError):
    """The generator subprocess exited non-zero, crashed, or timed out."""

    def __init__(self, message: str, returncode: int | None = None, stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class FilesystemError(HarnessError):
    """A baseline or output directory is missing or cannot be read."""
