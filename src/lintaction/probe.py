# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Interpreter version probe feeding the pip upgrade decision."""

from __future__ import annotations

from typing import Final

from .errors import SpawnError, Stage, VersionCheckCause, VersionCheckError
from .logging import fail, info, ok
from .process import ProcessRunner

DEFAULT_INTERPRETER: Final[str] = "python"


def probe_interpreter_version(
    runner: ProcessRunner,
    *,
    interpreter: str = DEFAULT_INTERPRETER,
    use_emoji: bool = True,
) -> str:
    """Return the trimmed output of ``<interpreter> --version``.

    Args:
        runner: Process capability used to launch the interpreter.
        interpreter: Executable name or path of the interpreter to query.
        use_emoji: Toggle emoji in progress messages.

    Returns:
        str: Version banner such as ``"Python 3.12.4"``.

    Raises:
        VersionCheckError: If the interpreter writes to stderr, exits non-zero
            or cannot be started. ``cause`` identifies which.
    """

    info("Checking Python version.", use_emoji=use_emoji)
    try:
        result = runner.capture([interpreter, "--version"], stage=Stage.VERSION_CHECK)
    except SpawnError as exc:
        fail(f"Error occurred: {exc.reason}.", use_emoji=use_emoji, annotation=False)
        raise VersionCheckError(str(exc), cause=VersionCheckCause.SPAWN) from exc

    if result.stderr:
        fail(f"Error occurred: {result.stderr.strip()}", use_emoji=use_emoji, annotation=False)
        raise VersionCheckError(
            f"Interpreter reported an error: {result.stderr.strip()}",
            cause=VersionCheckCause.STDERR,
            exit_code=result.exit_code,
            stderr=result.stderr,
        )
    if not result.succeeded:
        message = f"Failed to check Python version with code {result.exit_code}."
        fail(message, use_emoji=use_emoji, annotation=False)
        raise VersionCheckError(message, cause=VersionCheckCause.EXIT_CODE, exit_code=result.exit_code)

    ok("Python version checked successfully.", use_emoji=use_emoji)
    return (result.stdout or "").strip()


__all__ = ["DEFAULT_INTERPRETER", "probe_interpreter_version"]
