"""Required tool check with best-effort installation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .context import SetupContext

logger = logging.getLogger(__name__)

REQUIRED_PACKAGES: tuple[str, ...] = ("git", "ssh")


@dataclass
class PackageStatus:
    name: str
    installed: bool
    detail: str


def check_and_install_packages(
    ctx: SetupContext,
    packages: tuple[str, ...] = REQUIRED_PACKAGES,
) -> list[PackageStatus]:
    """Verify each executable; install missing ones and re-check.

    A failed install is reported and the next package is still processed.
    """
    reporter = ctx.reporter
    reporter.info("Checking required packages...")
    statuses: list[PackageStatus] = []

    for pkg in packages:
        if ctx.runner.which(pkg):
            reporter.success(f"{pkg} is already installed.")
            statuses.append(PackageStatus(pkg, True, "already installed"))
            continue

        reporter.warning(f"{pkg} is not installed. Attempting to install...")
        if not ctx.installer.install(pkg, reporter):
            statuses.append(PackageStatus(pkg, False, "no installer"))
            continue

        if ctx.runner.which(pkg):
            reporter.success(f"{pkg} installed successfully.")
            statuses.append(PackageStatus(pkg, True, "installed"))
        else:
            logger.warning("%s still missing after install via %s", pkg, ctx.installer.name)
            reporter.error(f"Failed to install {pkg}.")
            statuses.append(PackageStatus(pkg, False, "install failed"))

    return statuses
