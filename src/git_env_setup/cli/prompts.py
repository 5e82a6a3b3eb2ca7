"""Line-oriented operator input.

Every step reads through an :class:`InputProvider`, so the whole flow can be
driven by a scripted sequence of answers instead of a terminal.
"""

from __future__ import annotations

import re
from typing import Protocol, runtime_checkable

import typer

_YES = re.compile(r"[Yy]")


@runtime_checkable
class InputProvider(Protocol):
    def read_line(self, prompt: str) -> str: ...


class TerminalInput:
    """Read answers from the terminal with typer/click prompting."""

    def read_line(self, prompt: str) -> str:
        return typer.prompt(prompt, default="", show_default=False)


def ask(io: InputProvider, prompt: str, default: str = "") -> str:
    """Return the operator's line, or ``default`` when it is empty."""
    value = io.read_line(prompt)
    return value if value else default


def confirm(io: InputProvider, prompt: str) -> bool:
    """Yes only for a single ``y`` or ``Y``; anything else is no."""
    return bool(_YES.fullmatch(io.read_line(f"{prompt} (y/n)")))


def pause(io: InputProvider, prompt: str) -> None:
    io.read_line(prompt)
