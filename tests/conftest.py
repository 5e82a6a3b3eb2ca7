from __future__ import annotations

import io
from pathlib import Path
from typing import Callable, Iterable

import pytest
from rich.console import Console

from git_env_setup.cli.ui import Reporter
from git_env_setup.config import Settings
from git_env_setup.core.context import SetupContext
from git_env_setup.core.platform import PlatformInstaller
from git_env_setup.core.runner import CommandResult, CommandRunner

Handler = Callable[[list[str]], CommandResult]


class ScriptedInput:
    """Answers prompts from a fixed list and records what was asked."""

    def __init__(self, answers: Iterable[str] = ()):
        self.answers = list(answers)
        self.prompts: list[str] = []

    def feed(self, *answers: str) -> None:
        self.answers.extend(answers)

    def read_line(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {prompt!r}")
        return self.answers.pop(0)


class FakeRunner(CommandRunner):
    """Records commands; behaviour per program is set through ``handlers``."""

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self.on_path: set[str] = set()
        self.handlers: dict[str, Handler] = {}

    def which(self, name: str) -> str | None:
        return f"/usr/bin/{name}" if name in self.on_path else None

    def _execute(self, cmd, *, capture, merge_output):
        self.calls.append(cmd)
        program = cmd[1] if cmd[0] == "sudo" else cmd[0]
        handler = self.handlers.get(program)
        return handler(cmd) if handler else CommandResult(0)

    def commands_for(self, program: str) -> list[list[str]]:
        return [c for c in self.calls if program in c[:2]]


class FakeProbe:
    """Returns canned outputs per host, one entry consumed per call."""

    def __init__(self, outputs: dict[str, list[str]] | None = None):
        self.outputs = outputs or {}
        self.calls: list[tuple[str, Path]] = []

    def probe(self, host: str, key_path: Path) -> str:
        self.calls.append((host, key_path))
        queue = self.outputs.get(host, [])
        return queue.pop(0) if queue else "Permission denied (publickey)."


class FakeLister:
    def __init__(self, repos: list[str] | None = None, available: bool = False):
        self.repos = repos or []
        self.is_available = available

    def available(self) -> bool:
        return self.is_available

    def list_repositories(self) -> list[str]:
        return list(self.repos)


class RecordingInstaller(PlatformInstaller):
    name = "recording"

    def __init__(self, runner: FakeRunner, installs: set[str] | None = None):
        super().__init__(runner)
        self.installs = installs if installs is not None else set()
        self.attempted: list[str] = []

    def install(self, package, reporter):
        self.attempted.append(package)
        if package in self.installs:
            self.runner.on_path.add(package)
        return True


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(ssh_dir=tmp_path / "home" / ".ssh")


@pytest.fixture()
def console() -> Console:
    return Console(file=io.StringIO(), width=200, color_system=None, force_terminal=False)


@pytest.fixture()
def output(console: Console) -> Callable[[], str]:
    return lambda: console.file.getvalue()


@pytest.fixture()
def scripted_input() -> ScriptedInput:
    return ScriptedInput()


@pytest.fixture()
def fake_runner() -> FakeRunner:
    runner = FakeRunner()
    runner.on_path.update({"git", "ssh"})
    return runner


@pytest.fixture()
def fake_probe() -> FakeProbe:
    return FakeProbe()


@pytest.fixture()
def fake_lister() -> FakeLister:
    return FakeLister()


@pytest.fixture()
def setup_ctx(settings, console, scripted_input, fake_runner, fake_probe, fake_lister) -> SetupContext:
    return SetupContext(
        settings=settings,
        reporter=Reporter(console),
        io=scripted_input,
        runner=fake_runner,
        installer=RecordingInstaller(fake_runner),
        probe=fake_probe,
        lister=fake_lister,
    )


def fake_keygen(cmd: list[str]) -> CommandResult:
    """Stand-in for ssh-keygen: writes both key files at ``-f``."""
    private = Path(cmd[cmd.index("-f") + 1])
    comment = cmd[cmd.index("-C") + 1]
    private.write_text("PRIVATE KEY\n", encoding="utf-8")
    private.with_name(private.name + ".pub").write_text(f"ssh-ed25519 AAAATEST {comment}\n", encoding="utf-8")
    return CommandResult(0)


@pytest.fixture()
def keygen(fake_runner: FakeRunner) -> FakeRunner:
    fake_runner.handlers["ssh-keygen"] = fake_keygen
    return fake_runner
