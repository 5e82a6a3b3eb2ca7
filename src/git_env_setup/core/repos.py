"""Repository selection and cloning.

Locators come either from the GitHub CLI listing or from manual entry; each
one is cloned into a shared base directory or a per-repository path.
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from git_env_setup.cli.prompts import ask, confirm

from .errors import SetupError
from .runner import CommandRunner

if TYPE_CHECKING:
    from git_env_setup.cli.ui import Reporter

    from .context import SetupContext

logger = logging.getLogger(__name__)

LOCATOR_PATTERN = re.compile(r"^git@[^:]+:[^/]+/.+\.git$")
SELECTION_PATTERN = re.compile(r"^[0-9]+(,[0-9]+)*$")
DEFAULT_BASE_PATH = "./"


@runtime_checkable
class RepositoryLister(Protocol):
    def available(self) -> bool: ...

    def list_repositories(self) -> list[str]: ...


class GhRepositoryLister:
    """List the operator's repositories as SSH URLs through ``gh``."""

    def __init__(self, runner: CommandRunner, limit: int = 100):
        self.runner = runner
        self.limit = limit

    def available(self) -> bool:
        return self.runner.which("gh") is not None

    def list_repositories(self) -> list[str]:
        result = self.runner.run(
            ["gh", "repo", "list", "--limit", str(self.limit), "--json", "sshUrl", "--jq", ".[].sshUrl"],
            check=False,
            capture=True,
        )
        if not result.ok:
            logger.warning("gh repo list failed (exit %s): %s", result.returncode, result.stderr.strip())
            return []
        return [line.strip() for line in result.stdout.splitlines() if line.strip()]


@dataclass(frozen=True)
class CloneTarget:
    locator: str
    destination: Path


def is_valid_locator(value: str) -> bool:
    return bool(LOCATOR_PATTERN.match(value))


def repo_name_from_locator(locator: str) -> str:
    """``git@host:owner/name.git`` -> ``name``; also handles URL forms."""
    name = re.split(r"[/:]", locator.rstrip("/"))[-1]
    return name[: -len(".git")] if name.endswith(".git") and name != ".git" else name


def _is_non_empty_dir(path: Path) -> bool:
    return path.is_dir() and any(path.iterdir())


def parse_selection(text: str, listing: list[str], reporter: Reporter) -> list[str] | None:
    """Resolve ``all`` or 1-based comma separated indices against ``listing``.

    Returns None when ``text`` is not in either form. Out-of-range indices are
    warned about and skipped, so the result may be empty.
    """
    if text == "all":
        return list(listing)
    if not SELECTION_PATTERN.match(text):
        return None
    chosen: list[str] = []
    for raw in text.split(","):
        idx = int(raw)
        if 0 < idx <= len(listing):
            chosen.append(listing[idx - 1])
        else:
            reporter.warning(f"Invalid index: {idx}. Skipping.")
    return chosen


def _select_from_provider(ctx: SetupContext) -> list[str]:
    reporter, io = ctx.reporter, ctx.io
    if not ctx.lister.available():
        return []
    if not confirm(io, "GitHub CLI detected. List your repos?"):
        return []

    reporter.info("Fetching GitHub repositories...")
    listing = ctx.lister.list_repositories()
    if not listing:
        reporter.warning("No repositories found via GitHub CLI.")
        return []

    reporter.section("Select repositories to clone:")
    for number, locator in enumerate(listing, start=1):
        reporter.line(f"{number}. {locator}")

    while True:
        chosen = parse_selection(ask(io, "Enter numbers separated by commas (or 'all')"), listing, reporter)
        if chosen:
            return chosen
        reporter.error("Invalid input. Please try again.")


def _enter_manually(ctx: SetupContext) -> list[str]:
    reporter, io = ctx.reporter, ctx.io
    reporter.section("Manual Repository Entry")
    reporter.line("Enter SSH URLs of repositories to clone (one per line).")
    reporter.line("Press ENTER on empty line to finish:")

    repos: list[str] = []
    seen: set[str] = set()
    while True:
        repo = ask(io, "Repo SSH URL")
        if not repo:
            return repos
        if not is_valid_locator(repo):
            reporter.error("Invalid URL format. Example: git@github.com:user/repo.git")
            continue
        if repo in seen:
            reporter.warning(f"Duplicate repo detected: {repo}. Skipping.")
            continue
        seen.add(repo)
        repos.append(repo)


def collect_locators(ctx: SetupContext) -> list[str]:
    """Provider listing first; manual entry when it yields nothing."""
    return _select_from_provider(ctx) or _enter_manually(ctx)


def chown_to_invoking_user(path: Path) -> None:
    """Recursively hand ``path`` to the current uid/gid (``chown -R``)."""
    if not hasattr(os, "getuid"):
        return
    uid, gid = os.getuid(), os.getgid()
    try:
        os.chown(path, uid, gid)
        for root, dirs, files in os.walk(path):
            for entry in dirs + files:
                os.lchown(os.path.join(root, entry), uid, gid)
    except OSError as exc:
        raise SetupError(f"Cannot change ownership of {path}: {exc}") from exc


def clone_repository(ctx: SetupContext, target: CloneTarget) -> bool:
    ctx.reporter.info(f"Cloning {target.locator} into {target.destination} ...")
    result = ctx.runner.run(["git", "clone", target.locator, str(target.destination)], check=False)
    if not result.ok:
        logger.warning("git clone %s exited %s", target.locator, result.returncode)
        return False
    chown_to_invoking_user(target.destination)
    return True


def _ensure_directory(ctx: SetupContext, path: Path) -> bool:
    """True when ``path`` exists or the operator agreed and it was created."""
    if path.is_dir():
        return True
    if not confirm(ctx.io, "Path doesn't exist. Create it?"):
        return False
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logger.warning("mkdir %s failed: %s", path, exc)
        ctx.reporter.error("Failed to create directory.")
        return False
    return True


def _clone_to_shared_base(ctx: SetupContext, repos: list[str]) -> list[CloneTarget]:
    reporter, io = ctx.reporter, ctx.io
    while True:
        base = Path(ask(io, f"Enter base path (default: {DEFAULT_BASE_PATH})", DEFAULT_BASE_PATH)).expanduser()
        if _ensure_directory(ctx, base):
            break

    cloned: list[CloneTarget] = []
    for repo in repos:
        name = repo_name_from_locator(repo)
        dest = base / name
        if _is_non_empty_dir(dest):
            reporter.warning(f"Directory {dest} already exists and is not empty.")
            alternative = ask(io, "Enter alternative path for this repository")
            # The alternative is taken as given, without a second existence check.
            dest = Path(alternative.rstrip("/") or "/").expanduser() / name
        elif dest.is_dir():
            reporter.info(f"Directory {dest} exists but is empty. Using it.")

        dest.parent.mkdir(parents=True, exist_ok=True)
        target = CloneTarget(repo, dest)
        if clone_repository(ctx, target):
            reporter.success(f"Successfully cloned {name}")
            cloned.append(target)
        else:
            reporter.error(f"Failed to clone {name}")
    return cloned


def _clone_per_repository(ctx: SetupContext, repos: list[str]) -> list[CloneTarget]:
    reporter, io = ctx.reporter, ctx.io
    cloned: list[CloneTarget] = []
    for repo in repos:
        name = repo_name_from_locator(repo)
        while True:
            base = Path(
                ask(io, f"Enter path for {name} (default: {DEFAULT_BASE_PATH})", DEFAULT_BASE_PATH)
            ).expanduser()
            if not _ensure_directory(ctx, base):
                continue

            dest = base / name
            if _is_non_empty_dir(dest):
                reporter.warning(f"Directory {dest} already exists and is not empty.")
                continue

            target = CloneTarget(repo, dest)
            if clone_repository(ctx, target):
                reporter.success(f"Successfully cloned {name}")
                cloned.append(target)
                break
            reporter.error(f"Failed to clone {name}")
            if not confirm(io, "Try again with different path?"):
                break
    return cloned


def clone_repositories(ctx: SetupContext) -> list[CloneTarget]:
    """Collect locators and clone them; returns the targets that succeeded."""
    repos = collect_locators(ctx)
    if not repos:
        ctx.reporter.warning("No repositories specified for cloning.")
        return []

    if confirm(ctx.io, "Clone all repos to same base path?"):
        return _clone_to_shared_base(ctx, repos)
    return _clone_per_repository(ctx, repos)
