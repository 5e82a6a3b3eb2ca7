"""Collaborators shared by every setup step."""

from __future__ import annotations

from dataclasses import dataclass

from git_env_setup.cli.prompts import InputProvider, TerminalInput
from git_env_setup.cli.ui import Reporter
from git_env_setup.config import Settings

from .auth import RemoteProbe, SshRemoteProbe
from .platform import PlatformInstaller, detect_installer
from .repos import GhRepositoryLister, RepositoryLister
from .runner import CommandRunner


@dataclass
class SetupContext:
    settings: Settings
    reporter: Reporter
    io: InputProvider
    runner: CommandRunner
    installer: PlatformInstaller
    probe: RemoteProbe
    lister: RepositoryLister


def build_context(settings: Settings) -> SetupContext:
    """Wire the real terminal, subprocess runner and detected installer."""
    runner = CommandRunner()
    return SetupContext(
        settings=settings,
        reporter=Reporter(),
        io=TerminalInput(),
        runner=runner,
        installer=detect_installer(runner),
        probe=SshRemoteProbe(runner),
        lister=GhRepositoryLister(runner, limit=settings.repo_limit),
    )
