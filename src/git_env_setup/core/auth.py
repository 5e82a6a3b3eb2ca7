"""SSH authentication probe against the known hosting providers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from git_env_setup.cli.prompts import pause

from .runner import CommandRunner

if TYPE_CHECKING:
    from .context import SetupContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Provider:
    name: str
    host: str
    success_marker: str


PROVIDERS: tuple[Provider, ...] = (
    Provider("GitHub", "git@github.com", "successfully authenticated"),
    Provider("GitLab", "git@gitlab.com", "Welcome to GitLab"),
)


@runtime_checkable
class RemoteProbe(Protocol):
    def probe(self, host: str, key_path: Path) -> str:
        """Return the combined output of a login attempt with only ``key_path``."""
        ...


class SshRemoteProbe:
    def __init__(self, runner: CommandRunner):
        self.runner = runner

    def probe(self, host: str, key_path: Path) -> str:
        result = self.runner.run(
            ["ssh", "-T", "-o", "IdentitiesOnly=yes", "-i", str(key_path), host],
            check=False,
            merge_output=True,
        )
        return result.output


def authenticated_provider(probe: RemoteProbe, key_path: Path) -> Provider | None:
    """Try each provider in order; first one whose marker appears wins."""
    for provider in PROVIDERS:
        output = probe.probe(provider.host, key_path)
        if provider.success_marker in output:
            return provider
        logger.debug("%s rejected key %s: %s", provider.name, key_path, output.strip())
    return None


def check_ssh_auth(ctx: SetupContext, key_path: Path) -> bool:
    """Probe with bounded retries; False means every attempt failed."""
    reporter = ctx.reporter
    max_attempts = ctx.settings.auth_attempts
    attempts = 0

    while attempts < max_attempts:
        reporter.info(f"Testing authentication (attempt {attempts + 1} of {max_attempts})...")
        provider = authenticated_provider(ctx.probe, key_path)
        if provider is not None:
            reporter.success(f"{provider.name} authentication successful!")
            return True

        reporter.error("Authentication failed.")
        attempts += 1
        if attempts < max_attempts:
            reporter.info("Please ensure your public key is added to your Git provider.")
            pause(ctx.io, "Press Enter after you've added the key to retry")

    reporter.error(f"Could not authenticate after {max_attempts} attempts.")
    return False

