"""
Terminal collaborators for the vault: prompts, coloured messages, clipboard.

These are thin adapters over click and pyperclip. The vault manager only
relies on their method names, so tests swap in simple fakes.
"""

import re
from typing import List, Sequence

import click
import pyperclip

from .vault.exceptions import VaultError


class ClipboardError(VaultError):
    """Raised when the system clipboard cannot be written"""
    pass


# ── Messages ────────────────────────────────────────────────────────

SEVERITY_COLORS = {
    "info": "blue",
    "ok": "green",
    "error": "red",
}


class MessageRenderer:
    """Print ``[SEVERITY] message`` lines; errors go to stderr."""

    def display(self, severity: str, message: str) -> None:
        color = SEVERITY_COLORS.get(severity, "white")
        click.secho(
            f"[{severity.upper()}] {message}",
            fg=color,
            err=(severity == "error"),
        )


# ── Prompts ─────────────────────────────────────────────────────────


class IndexListType(click.ParamType):
    """Parse '1, 3 4' into zero-based indexes within [0, size)."""

    name = "index-list"

    def __init__(self, size: int):
        self.size = size

    def convert(self, value, param, ctx):
        if isinstance(value, list):
            return value
        indexes: List[int] = []
        for token in re.split(r"[,\s]+", str(value).strip()):
            if not token:
                continue
            # isdigit() alone accepts '²' and other digits int() cannot parse
            if not (token.isascii() and token.isdigit()) or not 1 <= int(token) <= self.size:
                self.fail(f"{token!r} is not a number between 1 and {self.size}", param, ctx)
            index = int(token) - 1
            if index not in indexes:
                indexes.append(index)
        return indexes


class Prompter:
    """Blocking interactive prompts."""

    def confirm(self, question: str, default: bool = True) -> bool:
        return click.confirm(question, default=default)

    def text(self, prompt: str, default: str = "") -> str:
        """Free text, returned exactly as typed so validation sees stray spaces."""
        return click.prompt(prompt, default=default, show_default=bool(default))

    def secret(self, prompt: str) -> str:
        """Masked input typed twice; click re-asks until both entries match."""
        return click.prompt(
            prompt,
            hide_input=True,
            confirmation_prompt=f"Confirm {prompt}",
        )

    @staticmethod
    def _print_items(items: Sequence[str], title: str) -> None:
        click.secho(title, bold=True)
        for number, item in enumerate(items, start=1):
            click.echo(f"  {number}) {item}")

    def select(self, items: Sequence[str], title: str) -> int:
        """Pick one item; returns its zero-based index."""
        self._print_items(items, title)
        choice = click.prompt("Choice", type=click.IntRange(1, len(items)), default=1)
        return choice - 1

    def multi_select(self, items: Sequence[str], title: str) -> List[int]:
        """Pick any number of items; an empty answer selects nothing."""
        self._print_items(items, title)
        return click.prompt(
            "Choices (e.g. 1,3)",
            type=IndexListType(len(items)),
            default="",
            show_default=False,
        )


# ── Clipboard ───────────────────────────────────────────────────────


class ClipboardSink:
    """Write text to the system clipboard."""

    def copy(self, text: str) -> None:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as e:
            raise ClipboardError(f"Clipboard unavailable: {e}") from e
