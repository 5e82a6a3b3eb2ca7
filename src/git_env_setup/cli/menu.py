"""Interactive menu and the run-everything composite."""

from __future__ import annotations

import logging

import typer

from git_env_setup.config import SessionConfig
from git_env_setup.core.auth import check_ssh_auth
from git_env_setup.core.context import SetupContext
from git_env_setup.core.identity import configure_git_user
from git_env_setup.core.packages import check_and_install_packages
from git_env_setup.core.repos import clone_repositories
from git_env_setup.core.ssh_keys import create_or_show_ssh_key, read_public_key

from .prompts import ask, pause

logger = logging.getLogger(__name__)

MENU_TITLE = "====== Git Environment Setup Menu ======"

MENU_OPTIONS: dict[str, str] = {
    "1": "Check and install required packages",
    "2": "Configure Git user",
    "3": "Create new SSH key or show existing",
    "4": "Test SSH authentication",
    "5": "Clone repositories",
    "6": "Run all setup steps",
    "7": "Exit",
}


def auth_with_session_key(ctx: SetupContext, session: SessionConfig) -> bool | None:
    """Probe with the session key; None when there is no key to test."""
    if not session.key_path.is_file():
        ctx.reporter.error("No SSH key found. Please create one first.")
        return None
    return check_ssh_auth(ctx, session.key_path)


def run_all(ctx: SetupContext, session: SessionConfig) -> tuple[bool, SessionConfig]:
    """Every step in order; cloning only happens after authentication succeeds."""
    reporter = ctx.reporter
    reporter.info("Starting complete setup process...")

    check_and_install_packages(ctx)
    configure_git_user(ctx)
    session = create_or_show_ssh_key(ctx, session)

    reporter.info("Please add the public key to your Git provider:")
    reporter.show_public_key("Public key", read_public_key(session.key_path))
    pause(ctx.io, "Press Enter once you've added the key to continue")

    if not check_ssh_auth(ctx, session.key_path):
        reporter.error("Setup incomplete due to authentication failure.")
        return False, session

    clone_repositories(ctx)
    reporter.success("🎉 All setup steps completed successfully!")
    return True, session


def show_menu(ctx: SetupContext) -> None:
    reporter = ctx.reporter
    reporter.line()
    reporter.line(MENU_TITLE, style="bold cyan")
    for key, label in MENU_OPTIONS.items():
        reporter.line(f"{key}. {label}")


def run_menu(ctx: SetupContext, session: SessionConfig | None = None) -> None:
    """Loop until Exit; a failed run-all ends the process with status 1."""
    session = session or SessionConfig.from_settings(ctx.settings)
    reporter = ctx.reporter

    while True:
        show_menu(ctx)
        choice = ask(ctx.io, f"Select an option (1-{len(MENU_OPTIONS)})").strip()
        logger.debug("Menu choice: %r", choice)

        if choice == "1":
            check_and_install_packages(ctx)
        elif choice == "2":
            configure_git_user(ctx)
        elif choice == "3":
            session = create_or_show_ssh_key(ctx, session)
        elif choice == "4":
            auth_with_session_key(ctx, session)
        elif choice == "5":
            clone_repositories(ctx)
        elif choice == "6":
            ok, session = run_all(ctx, session)
            if not ok:
                raise typer.Exit(1)
        elif choice == "7":
            reporter.info("Exiting Git Environment Setup Tool. Goodbye!")
            raise typer.Exit(0)
        else:
            reporter.error(f"Invalid option. Please select 1-{len(MENU_OPTIONS)}.")
