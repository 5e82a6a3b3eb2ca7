"""Console presentation: status lines, header, banner and key display."""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.text import Text

TITLE = "GIT ENVIRONMENT SETUP TOOL"

BANNER = r"""
  ____ ___ _____   ____  _____ _____ _   _ ____
 / ___|_ _|_   _| / ___|| ____|_   _| | | |  _ \
| |  _ | |  | |   \___ \|  _|   | | | | | | |_) |
| |_| || |  | |    ___) | |___  | | | |_| |  __/
 \____|___| |_|   |____/|_____| |_|  \___/|_|
"""

TAGLINE = "Identity, SSH keys and repositories for a fresh workstation"

MESSAGE_STYLES: dict[str, tuple[str, str]] = {
    "success": ("✓", "bold green"),
    "error": ("✗", "bold red"),
    "info": ("ℹ", "bold blue"),
    "warning": ("⚠", "bold yellow"),
}


class Reporter:
    """Uniform single-line feedback for every setup step."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def message(self, kind: str, text: str) -> None:
        symbol, style = MESSAGE_STYLES.get(kind, ("•", ""))
        self.console.print(Text(f"{symbol} {text}", style=style), soft_wrap=True)

    def success(self, text: str) -> None:
        self.message("success", text)

    def error(self, text: str) -> None:
        self.message("error", text)

    def info(self, text: str) -> None:
        self.message("info", text)

    def warning(self, text: str) -> None:
        self.message("warning", text)

    def line(self, text: str = "", style: str = "") -> None:
        self.console.print(Text(text, style=style))

    def section(self, title: str) -> None:
        self.console.print()
        self.console.print(Text(title, style="bold blue"))

    def show_header(self) -> None:
        self.console.rule(style="cyan")
        self.console.print(Align.center(Text(TITLE, style="bold cyan")))
        self.console.rule(style="cyan")
        self.console.print()

    def show_banner(self) -> None:
        colors = ["bright_yellow", "yellow", "bright_yellow", "yellow", "bright_yellow"]
        styled = Text()
        for i, line in enumerate(BANNER.strip("\n").split("\n")):
            styled.append(line + "\n", style=colors[i % len(colors)])
        self.console.print(Align.center(styled))
        self.console.print(Align.center(Text(TAGLINE, style="italic grey70")))
        self.console.print()

    def show_public_key(self, title: str, key_text: str) -> None:
        # No wrapping: the key must stay on one line to be pasted into a provider.
        self.console.print()
        self.console.rule(f"[bold cyan]{title}[/bold cyan]", style="cyan")
        self.console.print(key_text.strip(), soft_wrap=True, markup=False, highlight=False)
        self.console.rule(style="cyan")
        self.console.print()
