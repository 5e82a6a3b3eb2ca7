"""Tests for status lines and prompt helpers."""

from __future__ import annotations

import io

import pytest
from rich.console import Console

from git_env_setup.cli.prompts import InputProvider, ask, confirm
from git_env_setup.cli.ui import Reporter


@pytest.mark.parametrize(
    "kind,symbol",
    [("success", "✓"), ("error", "✗"), ("info", "ℹ"), ("warning", "⚠"), ("other", "•")],
)
def test_status_line_symbols(console, output, kind: str, symbol: str) -> None:
    Reporter(console).message(kind, "Cloning [main] repo")
    assert output() == f"{symbol} Cloning [main] repo\n"


def test_long_status_line_is_not_wrapped() -> None:
    console = Console(file=io.StringIO(), width=80, color_system=None, force_terminal=False)
    text = "Cloning git@github.com:acme/some-repository.git into /home/developer/projects/work/some-repository ..."

    Reporter(console).info(text)

    assert console.file.getvalue() == f"ℹ {text}\n"


def test_public_key_is_not_wrapped(console, output) -> None:
    key = "ssh-ed25519 " + "A" * 300 + " me@host"
    Reporter(console).show_public_key("Your new public key", key + "\n")
    assert key in output().splitlines()


@pytest.mark.parametrize("answer,expected", [("y", True), ("Y", True), ("yes", False), ("n", False), ("", False)])
def test_confirm_accepts_single_y(scripted_input, answer: str, expected: bool) -> None:
    scripted_input.feed(answer)
    assert confirm(scripted_input, "Overwrite?") is expected
    assert scripted_input.prompts == ["Overwrite? (y/n)"]


def test_ask_falls_back_to_default(scripted_input) -> None:
    assert isinstance(scripted_input, InputProvider)
    scripted_input.feed("", "custom")
    assert ask(scripted_input, "Enter base path", "./") == "./"
    assert ask(scripted_input, "Enter base path", "./") == "custom"
