"""Terminal input/output for interactive commands."""
from __future__ import annotations

from typing import TextIO

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, Prompt


class CommandConsole:
    """Prompt for answers and print progress.

    ``stream`` replaces the terminal for prompts: one answer is read per
    line, which lets scripted answers drive a command. With
    ``interactive=False`` every prompt returns its default.
    """

    def __init__(
        self,
        console: Console | None = None,
        stream: TextIO | None = None,
        interactive: bool = True,
    ) -> None:
        self.console = console or Console()
        self.stream = stream
        self.interactive = interactive

    def alert(self, message: str) -> None:
        self.console.print(Panel.fit(message, style="bold yellow"))

    def line(self, message: str) -> None:
        self.console.print(message, markup=False, highlight=False)

    def info(self, message: str) -> None:
        self.console.print(message, style="green", markup=False, highlight=False)

    def error(self, message: str) -> None:
        self.console.print(message, style="bold red", markup=False, highlight=False)

    def ask(self, question: str, default: str | None = None, password: bool = False) -> str:
        """Ask ``question``; an empty answer returns ``default`` (or "")."""
        fallback = "" if default is None else str(default)
        if not self.interactive:
            return fallback

        if self.stream is not None:
            answer = self._read_line(question)
        else:
            answer = Prompt.ask(
                question,
                console=self.console,
                default=fallback,
                password=password,
                show_default=bool(fallback) and not password,
            )
        # Passwords keep their surrounding spaces; only the line ending is dropped.
        answer = answer.rstrip("\r\n") if password else answer.strip()
        return answer or fallback

    def confirm(self, question: str, default: bool = False) -> bool:
        if not self.interactive:
            return default
        if self.stream is None:
            return Confirm.ask(question, console=self.console, default=default)

        answer = self._read_line(f"{question} [y/n]").strip().lower()
        if answer in {"y", "yes"}:
            return True
        if answer in {"n", "no"}:
            return False
        return default

    def _read_line(self, question: str) -> str:
        self.console.print(f"{question}: ", end="", markup=False, highlight=False)
        answer = self.stream.readline()
        self.console.print()
        return answer
