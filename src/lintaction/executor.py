# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run the built lint command through the shell."""

from __future__ import annotations

from .config import LintTool
from .errors import LintError, SpawnError, Stage
from .logging import LOGGER, fail, info, ok
from .process import ProcessRunner


def run_lint(runner: ProcessRunner, tool: LintTool, command: str, *, use_emoji: bool = True) -> None:
    """Execute ``command`` for ``tool``; the child writes its own report file.

    Raises:
        LintError: If the command exits with a non-zero status.
        SpawnError: If the shell cannot be started.
    """

    info(f"Running {tool.value} linting.", use_emoji=use_emoji)
    info(command, use_emoji=False)
    LOGGER.debug("Lint command for %s: %s", tool.value, command)
    try:
        result = runner.shell(command, stage=Stage.LINT)
    except SpawnError as exc:
        fail(f"Error occurred: {exc.reason}.", use_emoji=use_emoji, annotation=False)
        raise
    if not result.succeeded:
        error = LintError(tool.value, result.exit_code)
        fail(str(error), use_emoji=use_emoji, annotation=False)
        raise error
    ok(f"{tool.value} linting completed.", use_emoji=use_emoji)


__all__ = ["run_lint"]
