"""SSH keypair discovery and Ed25519 key generation via ssh-keygen."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from git_env_setup.cli.prompts import ask, confirm
from git_env_setup.config import SessionConfig

from .errors import SetupError
from .runner import CommandRunner

if TYPE_CHECKING:
    from .context import SetupContext

logger = logging.getLogger(__name__)

KEY_DIR_MODE = 0o700
PRIVATE_KEY_MODE = 0o600
PUBLIC_KEY_MODE = 0o644


@dataclass(frozen=True)
class SshKey:
    directory: Path
    filename: str
    comment: str

    @property
    def private_path(self) -> Path:
        return self.directory / self.filename

    @property
    def public_path(self) -> Path:
        return self.directory / f"{self.filename}.pub"


def read_public_key(private_path: Path) -> str:
    public_path = private_path.with_name(private_path.name + ".pub")
    try:
        return public_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SetupError(f"Cannot read public key {public_path}: {exc}") from exc


def generate_keypair(runner: CommandRunner, key: SshKey) -> None:
    """Create a passphrase-less Ed25519 pair and fix its permission bits.

    The pair is written under a temporary name and moved into place only once
    ssh-keygen succeeds, so a failed run leaves any previous key untouched.
    """
    staged = SshKey(directory=key.directory, filename=f".{key.filename}.new", comment=key.comment)
    staged.private_path.unlink(missing_ok=True)
    staged.public_path.unlink(missing_ok=True)
    try:
        runner.run(
            ["ssh-keygen", "-t", "ed25519", "-f", str(staged.private_path), "-C", key.comment, "-N", ""]
        )
        staged.private_path.chmod(PRIVATE_KEY_MODE)
        staged.public_path.chmod(PUBLIC_KEY_MODE)
        os.replace(staged.private_path, key.private_path)
        os.replace(staged.public_path, key.public_path)
    finally:
        staged.private_path.unlink(missing_ok=True)
        staged.public_path.unlink(missing_ok=True)


def _choose_directory(ctx: SetupContext) -> Path:
    reporter, io = ctx.reporter, ctx.io
    reporter.section("SSH Key Configuration Options:")
    reporter.line(f"1. Default location ({ctx.settings.ssh_dir})")
    reporter.line("2. Custom location")

    while True:
        choice = ask(io, "Enter your choice (1/2)")
        if choice == "1":
            return ctx.settings.ssh_dir
        if choice == "2":
            break
        reporter.error("Invalid choice. Please enter 1 or 2.")

    while True:
        custom = Path(ask(io, "Enter full path for the SSH key directory")).expanduser()
        if custom.is_dir():
            return custom
        if confirm(io, "Directory doesn't exist. Create it?"):
            custom.mkdir(parents=True, exist_ok=True)
            return custom


def prompt_ssh_key_details(ctx: SetupContext) -> SshKey:
    """Ask for location, filename and comment, then generate the key."""
    reporter, io = ctx.reporter, ctx.io
    ssh_dir = _choose_directory(ctx)
    ssh_dir.mkdir(parents=True, exist_ok=True)
    ssh_dir.chmod(KEY_DIR_MODE)

    default_name = ctx.settings.key_name
    while True:
        filename = ask(io, f"Enter filename for the SSH key (default: {default_name})", default_name)
        key_file = ssh_dir / filename
        if not key_file.is_file():
            break
        reporter.warning(f"Key file already exists: {key_file}")
        if confirm(io, "Overwrite?"):
            break

    default_comment = ctx.settings.key_comment
    comment = ask(io, f"Enter comment for the key (default: {default_comment})", default_comment)

    key = SshKey(directory=ssh_dir, filename=filename, comment=comment)
    generate_keypair(ctx.runner, key)
    logger.info("Generated SSH key %s", key.private_path)

    reporter.success("SSH key generated successfully!")
    reporter.show_public_key("Your new public key", read_public_key(key.private_path))
    return key


def create_or_show_ssh_key(ctx: SetupContext, session: SessionConfig) -> SessionConfig:
    """Reuse the default key or create a new one; returns the updated session."""
    reporter = ctx.reporter
    default_key = ctx.settings.default_key_path

    if default_key.is_file():
        reporter.info(f"Existing SSH key found at: {default_key}")
        if not confirm(ctx.io, "Do you want to create a new SSH key?"):
            reporter.show_public_key("Your existing public key", read_public_key(default_key))
            return session.with_key(default_key)

    key = prompt_ssh_key_details(ctx)
    return session.with_key(key.private_path)
