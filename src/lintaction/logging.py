# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing logging helpers with optional colour, emoji and CI annotations."""

from __future__ import annotations

import logging
import os
from typing import Final

from rich.rule import Rule
from rich.text import Text

from .console import detect_tty, get_console_manager

LOGGER: Final[logging.Logger] = logging.getLogger("lintaction")
GITHUB_ACTIONS_ENV: Final[str] = "GITHUB_ACTIONS"


def emoji(symbol: str, enable: bool) -> str:
    """Return *symbol* when emoji output is enabled, otherwise blank."""

    return symbol if enable else ""


def running_in_github_actions() -> bool:
    """Return ``True`` when the process runs inside a GitHub Actions job."""

    return os.environ.get(GITHUB_ACTIONS_ENV, "").lower() == "true"


def annotate(level: str, msg: str) -> None:
    """Emit a workflow command so the runner surfaces *msg* as an annotation.

    Args:
        level: Workflow command name (``warning`` or ``error``).
        msg: Message text attached to the annotation.
    """

    if not running_in_github_actions():
        return
    escaped = msg.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
    console = get_console_manager().get(color=False, emoji=False)
    console.print(Text(f"::{level}::{escaped}"))


def _print_line(
    msg: str,
    *,
    style: str | None,
    use_emoji: bool,
    use_color: bool | None = None,
    stderr: bool = False,
) -> None:
    color_enabled = detect_tty() if use_color is None else use_color
    console = get_console_manager().get(color=color_enabled, emoji=use_emoji, stderr=stderr)
    text = Text(msg)
    if style and color_enabled:
        text.stylize(style)
    console.print(text)


def section(title: str, *, use_color: bool) -> None:
    """Render a section header to delineate console output blocks.

    Args:
        title: Section title displayed to the user.
        use_color: Flag indicating whether ANSI colour support is desired.
    """

    console = get_console_manager().get(color=use_color, emoji=True)
    if use_color:
        console.print()
        console.print(Rule(title))
    else:
        console.print(f"\n--- {title} ---")


def info(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit an informational message."""

    prefix = emoji("ℹ️ ", use_emoji)
    _print_line(f"{prefix}{msg}", style="cyan", use_emoji=use_emoji, use_color=use_color)


def ok(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit a success message."""

    prefix = emoji("✅ ", use_emoji)
    _print_line(f"{prefix}{msg}", style="green", use_emoji=use_emoji, use_color=use_color)


def warn(msg: str, *, use_emoji: bool, use_color: bool | None = None) -> None:
    """Emit a warning message and mirror it as a CI warning annotation."""

    prefix = emoji("⚠️ ", use_emoji)
    _print_line(f"{prefix}{msg}", style="yellow", use_emoji=use_emoji, use_color=use_color)
    annotate("warning", msg)


def fail(msg: str, *, use_emoji: bool, use_color: bool | None = None, annotation: bool = True) -> None:
    """Emit an error message on the error channel.

    Args:
        msg: Message text to display.
        use_emoji: Flag indicating whether emoji output is desired.
        use_color: Optional explicit colour flag overriding TTY detection.
        annotation: Also emit a CI error annotation for the message.
    """

    prefix = emoji("❌ ", use_emoji)
    _print_line(f"{prefix}{msg}", style="red", use_emoji=use_emoji, use_color=use_color, stderr=True)
    if annotation:
        annotate("error", msg)


__all__ = [
    "LOGGER",
    "annotate",
    "emoji",
    "fail",
    "info",
    "ok",
    "running_in_github_actions",
    "section",
    "warn",
]
