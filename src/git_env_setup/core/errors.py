"""Error types shared by the setup steps."""

from __future__ import annotations

from typing import Sequence


class SetupError(RuntimeError):
    """Raised when a setup step cannot continue; aborts the whole run."""


class ConfigError(SetupError):
    """Raised when environment configuration is invalid."""


class CommandFailedError(SetupError):
    """Raised when a required external command exits non-zero."""

    def __init__(self, command: Sequence[str], returncode: int, stderr: str = ""):
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr
        message = f"Command failed (exit {returncode}): {' '.join(self.command)}"
        detail = stderr.strip()
        if detail:
            message = f"{message}\n{detail}"
        super().__init__(message)
