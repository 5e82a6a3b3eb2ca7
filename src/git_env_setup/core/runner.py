"""Thin wrapper around subprocess for the external tools the setup drives."""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from typing import Sequence

from .errors import CommandFailedError

logger = logging.getLogger(__name__)

__all__ = ["CommandResult", "CommandRunner"]


@dataclass
class CommandResult:
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        """Combined stdout and stderr text."""
        return self.stdout + self.stderr


class CommandRunner:
    """Run external commands with a fail-fast default.

    ``check=True`` turns any non-zero exit into :class:`CommandFailedError`;
    callers that recover from failure pass ``check=False`` and inspect the
    returned :class:`CommandResult`.
    """

    def which(self, name: str) -> str | None:
        return shutil.which(name)

    def run(
        self,
        cmd: Sequence[str],
        *,
        check: bool = True,
        capture: bool = False,
        merge_output: bool = False,
    ) -> CommandResult:
        logger.debug("Running: %s", " ".join(cmd))
        result = self._execute(list(cmd), capture=capture, merge_output=merge_output)
        logger.debug("Exit %s: %s", result.returncode, cmd[0])
        if check and not result.ok:
            raise CommandFailedError(cmd, result.returncode, result.stderr)
        return result

    def _execute(
        self,
        cmd: list[str],
        *,
        capture: bool,
        merge_output: bool,
    ) -> CommandResult:
        try:
            if capture or merge_output:
                completed = subprocess.run(
                    cmd,
                    stdout=subprocess.PIPE,
                    stderr=subprocess.STDOUT if merge_output else subprocess.PIPE,
                    text=True,
                    encoding="utf-8",
                    errors="replace",
                    check=False,
                )
                return CommandResult(
                    returncode=completed.returncode,
                    stdout=completed.stdout or "",
                    stderr=completed.stderr or "",
                )
            completed = subprocess.run(cmd, check=False)
            return CommandResult(returncode=completed.returncode)
        except FileNotFoundError:
            return CommandResult(returncode=127, stderr=f"{cmd[0]} executable not found on PATH")
