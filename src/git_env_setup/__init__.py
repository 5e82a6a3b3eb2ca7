#!/usr/bin/env python3
"""
Git Environment Setup - bootstrap a workstation for Git hosting.

Usage:
    git-env-setup            # interactive menu
    git-env-setup run-all    # every step, stop on failed authentication
    git-env-setup clone
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

import typer

from git_env_setup.cli.menu import auth_with_session_key, run_all, run_menu
from git_env_setup.cli.ui import Reporter
from git_env_setup.config import SessionConfig, load_settings
from git_env_setup.core.context import SetupContext, build_context
from git_env_setup.core.errors import SetupError
from git_env_setup.core.identity import configure_git_user
from git_env_setup.core.packages import check_and_install_packages
from git_env_setup.core.repos import clone_repositories
from git_env_setup.core.ssh_keys import create_or_show_ssh_key
from git_env_setup.log import configure_logging

__version__ = "1.0.0"

app = typer.Typer(
    name="git-env-setup",
    help="Configure Git identity, SSH keys and repository checkouts on this machine.",
    add_completion=False,
    invoke_without_command=True,
)


@contextmanager
def _abort_on_setup_error(reporter: Reporter) -> Iterator[None]:
    """Any unguarded failure ends the run with status 1."""
    try:
        yield
    except (SetupError, OSError) as exc:
        reporter.error(str(exc))
        raise typer.Exit(1) from exc


def _setup(ctx: typer.Context) -> tuple[SetupContext, SessionConfig]:
    return ctx.obj["setup"], ctx.obj["session"]


def init_screen(reporter: Reporter) -> None:
    if reporter.console.is_terminal:
        reporter.console.clear()
    reporter.show_header()
    reporter.show_banner()


@app.callback()
def callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging on stderr"),
) -> None:
    """Run the interactive menu when no subcommand is given."""
    reporter = Reporter()
    with _abort_on_setup_error(reporter):
        settings = load_settings()
    configure_logging("DEBUG" if verbose else settings.log_level)

    setup = build_context(settings)
    ctx.obj = {"setup": setup, "session": SessionConfig.from_settings(settings)}

    if ctx.invoked_subcommand is None:
        init_screen(setup.reporter)
        with _abort_on_setup_error(setup.reporter):
            run_menu(setup, ctx.obj["session"])


@app.command()
def packages(ctx: typer.Context) -> None:
    """Check required tools and install the missing ones."""
    setup, _ = _setup(ctx)
    with _abort_on_setup_error(setup.reporter):
        check_and_install_packages(setup)


@app.command()
def identity(ctx: typer.Context) -> None:
    """Show and optionally update the global Git user."""
    setup, _ = _setup(ctx)
    with _abort_on_setup_error(setup.reporter):
        configure_git_user(setup)


@app.command()
def key(ctx: typer.Context) -> None:
    """Create a new SSH key or show the existing one."""
    setup, session = _setup(ctx)
    with _abort_on_setup_error(setup.reporter):
        create_or_show_ssh_key(setup, session)


@app.command()
def auth(ctx: typer.Context) -> None:
    """Test SSH authentication with the default key."""
    setup, session = _setup(ctx)
    with _abort_on_setup_error(setup.reporter):
        ok = auth_with_session_key(setup, session)
    if not ok:
        raise typer.Exit(1)


@app.command()
def clone(ctx: typer.Context) -> None:
    """Select repositories and clone them."""
    setup, _ = _setup(ctx)
    with _abort_on_setup_error(setup.reporter):
        clone_repositories(setup)


@app.command(name="run-all")
def run_all_command(ctx: typer.Context) -> None:
    """Run every setup step; exits 1 when authentication fails."""
    setup, session = _setup(ctx)
    with _abort_on_setup_error(setup.reporter):
        ok, _ = run_all(setup, session)
    if not ok:
        raise typer.Exit(1)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
