"""Interactive input gathering for the CLI.

The release client never reads from the terminal itself; the CLI asks an
InputProvider for every value. Two implementations:
- TerminalInputProvider: real prompts on stdin/stdout, getpass for secrets
- ScriptedInputProvider: canned answers, used in tests

Both share the same answer rules (see InputProvider.ask):
- An empty answer falls back to the default, if there is one
- The question is repeated until the answer is non-empty
- With expand=True, the literal escapes \\n and \\r become a newline and
  \\\\ becomes a single backslash, so multi-line release notes can be typed
  on one line
"""

from __future__ import annotations

import getpass
import re
from collections.abc import Iterable
from typing import Protocol

_NEWLINE_ESCAPE = re.compile(r"\\n|\\r")


def expand_escapes(text: str) -> str:
    """Turn literal ``\\n``/``\\r`` into newlines and ``\\\\`` into ``\\``."""
    return _NEWLINE_ESCAPE.sub("\n", text).replace("\\\\", "\\")


def format_prompt(prompt: str, default: str | None = None) -> str:
    if default:
        return f"{prompt} ({default}) : "
    return f"{prompt} : "


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------


class InputProvider(Protocol):
    """Source of operator answers."""

    def ask(
        self,
        prompt: str,
        *,
        default: str | None = None,
        hide: bool = False,
        expand: bool = False,
    ) -> str:
        """Ask until a non-empty answer is available.

        Args:
            prompt: Question label, e.g. "tag name"
            default: Value used when the operator just presses enter
            hide: Suppress terminal echo (passwords)
            expand: Apply expand_escapes() to the answer

        Returns:
            The non-empty answer
        """
        ...


class _AskLoop:
    """Answer rules shared by every provider; subclasses supply _read()."""

    def _read(self, text: str, hide: bool) -> str:
        raise NotImplementedError

    def ask(
        self,
        prompt: str,
        *,
        default: str | None = None,
        hide: bool = False,
        expand: bool = False,
    ) -> str:
        text = format_prompt(prompt, default)
        while True:
            answer = self._read(text, hide).strip() or (default or "")
            if expand:
                answer = expand_escapes(answer)
            if answer:
                return answer


# ---------------------------------------------------------------------------
# Implementations
# ---------------------------------------------------------------------------


class TerminalInputProvider(_AskLoop):
    """Prompts on the controlling terminal.

    A closed stdin raises EOFError, which ends the run.
    """

    def _read(self, text: str, hide: bool) -> str:
        if hide:
            return getpass.getpass(text)
        return input(text)


class ScriptedInputProvider(_AskLoop):
    """Answers questions from a fixed list, in order.

    Usage:
        provider = ScriptedInputProvider(["alice", "", "secret"])
        provider.ask("owner")                # "alice"
        provider.ask("repo", default="proj")  # "proj"

    Attributes:
        prompts: Every prompt text shown, in order (including repeats)
    """

    def __init__(self, answers: Iterable[str]) -> None:
        self._answers = list(answers)
        self.prompts: list[str] = []

    def _read(self, text: str, hide: bool) -> str:
        self.prompts.append(text)
        if not self._answers:
            raise EOFError(f"no scripted answer left for {text!r}")
        return self._answers.pop(0)
