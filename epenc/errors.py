"""Exception types raised by epenc.

Fatal conditions raise one of these; recoverable per-title conditions are
reported as :class:`epenc.model.Warning` records instead.
"""

from __future__ import annotations


class EpencError(Exception):
    """Base class for all errors that abort a run."""


class ConfigError(EpencError):
    pass


class ScanFailure(EpencError):
    """The scanner exited non-zero or produced output we cannot parse."""

    def __init__(self, disc_path: str, message: str, stdout: str = "", stderr: str = "") -> None:
        super().__init__(f"Scan failed for {disc_path}: {message}")
        self.disc_path = disc_path
        self.stdout = stdout
        self.stderr = stderr


class EncodeFailure(EpencError):
    """The encoder exited non-zero; remaining jobs are abandoned."""

    def __init__(self, output_filename: str, returncode: int | None, message: str = "") -> None:
        detail = message or f"exit status {returncode}"
        super().__init__(f"Encoding failed for {output_filename}: {detail}")
        self.output_filename = output_filename
        self.returncode = returncode


class SelectionAborted(EpencError):
    """The operator quit during season confirmation."""

    def __init__(self, message: str = "Aborted by operator") -> None:
        super().__init__(message)
