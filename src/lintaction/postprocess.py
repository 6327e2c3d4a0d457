# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tool-specific report relocation performed after a successful lint run."""

from __future__ import annotations

from pathlib import Path
from typing import Final

from .config import LintTool
from .errors import RenameError
from .logging import fail, ok

MYPY_REPORT_INDEX: Final[str] = "index.html"


def rename_report(source: Path, target: Path, *, use_emoji: bool = True) -> Path:
    """Move ``source`` to ``target``, replacing an existing target.

    Raises:
        RenameError: If ``source`` is missing or the filesystem rejects the move.
    """

    try:
        moved = source.replace(target)
    except OSError as exc:
        error = RenameError(str(source), str(target), exc.strerror or str(exc))
        fail(str(error), use_emoji=use_emoji, annotation=False)
        raise error from exc
    ok(f"File renamed successfully from {source.name} to {target.name}", use_emoji=use_emoji)
    return moved


def post_process(tool: LintTool, artifact_name: str, workdir: Path, *, use_emoji: bool = True) -> Path | None:
    """Apply the cleanup ``tool`` needs before its report can be published.

    Only mypy needs one: its HTML index is renamed to ``artifact_name``.

    Returns:
        Path | None: The renamed report, or ``None`` when nothing was done.
    """

    if tool is not LintTool.MYPY:
        return None
    return rename_report(workdir / MYPY_REPORT_INDEX, workdir / artifact_name, use_emoji=use_emoji)


__all__ = ["MYPY_REPORT_INDEX", "post_process", "rename_report"]
