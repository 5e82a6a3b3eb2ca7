"""Global git user.name / user.email configuration."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from git_env_setup.cli.prompts import ask, confirm

from .runner import CommandRunner

if TYPE_CHECKING:
    from .context import SetupContext

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")


@dataclass(frozen=True)
class GitIdentity:
    name: str = ""
    email: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.name and not self.email


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_PATTERN.match(value))


def _get_global(runner: CommandRunner, key: str) -> str:
    # An unset key exits 1; a missing git binary yields 127. Both read as empty.
    result = runner.run(["git", "config", "--global", key], check=False, capture=True)
    return result.stdout.strip() if result.ok else ""


def read_identity(runner: CommandRunner) -> GitIdentity:
    return GitIdentity(
        name=_get_global(runner, "user.name"),
        email=_get_global(runner, "user.email"),
    )


def write_identity(runner: CommandRunner, identity: GitIdentity) -> None:
    runner.run(["git", "config", "--global", "user.name", identity.name])
    runner.run(["git", "config", "--global", "user.email", identity.email])


def configure_git_user(ctx: SetupContext) -> GitIdentity:
    """Show the current identity and optionally replace it.

    Returns the identity in effect afterwards.
    """
    reporter, io = ctx.reporter, ctx.io
    reporter.info("Checking Git user configuration...")

    current = read_identity(ctx.runner)
    if current.is_empty:
        reporter.warning("No Git user is currently configured.")
    else:
        reporter.line("Current Git user configuration:", style="blue")
        reporter.line(f"  Name : {current.name or 'Not set'}", style="blue")
        reporter.line(f"  Email: {current.email or 'Not set'}", style="blue")

    if not confirm(io, "Do you want to update the Git user configuration?"):
        reporter.info("No changes made to Git user configuration.")
        return current

    while True:
        name = ask(io, "Enter your full name")
        if name:
            break
        reporter.error("Name cannot be empty.")

    while True:
        email = ask(io, "Enter your email address")
        if not email:
            reporter.error("Email cannot be empty.")
        elif not is_valid_email(email):
            reporter.error("Invalid email format.")
        else:
            break

    updated = GitIdentity(name=name, email=email)
    write_identity(ctx.runner, updated)
    reporter.success("Git user configuration updated successfully.")
    return updated
