"""Package installer selection by OS markers.

The installer is resolved once per run; each variant knows how to install a
single package and reports whether an install was attempted at all.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from .runner import CommandRunner

if TYPE_CHECKING:
    from git_env_setup.cli.ui import Reporter

logger = logging.getLogger(__name__)

DEBIAN_MARKER = Path("etc/debian_version")
REDHAT_MARKER = Path("etc/redhat-release")


def _privileged(cmd: list[str]) -> list[str]:
    geteuid = getattr(os, "geteuid", None)
    if geteuid is not None and geteuid() == 0:
        return cmd
    return ["sudo", *cmd]


class PlatformInstaller:
    name = "unsupported"

    def __init__(self, runner: CommandRunner):
        self.runner = runner

    def install(self, package: str, reporter: Reporter) -> bool:
        """Try to install ``package``. Returns False when nothing was attempted."""
        reporter.error(f"Unsupported OS. Please install {package} manually.")
        return False


class AptInstaller(PlatformInstaller):
    name = "apt"

    def install(self, package: str, reporter: Reporter) -> bool:
        update = self.runner.run(_privileged(["apt-get", "update"]), check=False)
        if update.ok:
            self.runner.run(_privileged(["apt-get", "install", "-y", package]), check=False)
        else:
            logger.warning("apt-get update failed with exit %s", update.returncode)
        return True


class YumInstaller(PlatformInstaller):
    name = "yum"

    def install(self, package: str, reporter: Reporter) -> bool:
        self.runner.run(_privileged(["yum", "install", "-y", package]), check=False)
        return True


class HomebrewInstaller(PlatformInstaller):
    name = "brew"

    def install(self, package: str, reporter: Reporter) -> bool:
        self.runner.run(["brew", "install", package], check=False)
        return True


class MissingHomebrewInstaller(PlatformInstaller):
    name = "darwin-without-brew"

    def install(self, package: str, reporter: Reporter) -> bool:
        reporter.error(f"Homebrew not found. Please install {package} manually.")
        return False


def detect_installer(
    runner: CommandRunner,
    root: Path = Path("/"),
    platform: str | None = None,
) -> PlatformInstaller:
    """Pick the installer: Debian marker, RedHat marker, then Darwin."""
    platform = sys.platform if platform is None else platform
    if (root / DEBIAN_MARKER).is_file():
        installer: PlatformInstaller = AptInstaller(runner)
    elif (root / REDHAT_MARKER).is_file():
        installer = YumInstaller(runner)
    elif platform.startswith("darwin"):
        if runner.which("brew"):
            installer = HomebrewInstaller(runner)
        else:
            installer = MissingHomebrewInstaller(runner)
    else:
        installer = PlatformInstaller(runner)
    logger.debug("Package installer: %s", installer.name)
    return installer
