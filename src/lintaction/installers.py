# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""pip upgrade and tool installation stages."""

from __future__ import annotations

from typing import Final

from .config import LintTool
from .errors import InstallError, SpawnError, Stage, UpgradeError
from .logging import fail, info, ok
from .platform import DARWIN
from .process import ProcessRunner

PINNED_UPGRADE_PREFIX: Final[str] = "Python 3.10"
PINNED_UPGRADE_COMMAND: Final[str] = "python3.10 -m pip install --upgrade pip"
GENERIC_UPGRADE_COMMAND: Final[str] = "pip install --upgrade pip"
MYPY_REPORT_DEPENDENCY: Final[str] = "lxml"


def build_upgrade_command(platform: str, python_version: str) -> str:
    """Return the shell command used to upgrade pip.

    macOS runners with a Python 3.10 default need pip invoked through the
    versioned interpreter; everything else uses the ``pip`` on ``PATH``.
    """

    if platform == DARWIN and python_version.startswith(PINNED_UPGRADE_PREFIX):
        return PINNED_UPGRADE_COMMAND
    return GENERIC_UPGRADE_COMMAND


def upgrade_pip(
    runner: ProcessRunner,
    *,
    platform: str,
    python_version: str,
    use_emoji: bool = True,
) -> str:
    """Upgrade pip and return the command that was executed.

    Raises:
        UpgradeError: If the upgrade exits with a non-zero status.
        SpawnError: If the shell cannot be started.
    """

    info(f"Python version: {python_version}", use_emoji=use_emoji)
    info("Upgrading pip.", use_emoji=use_emoji)
    command = build_upgrade_command(platform, python_version)
    try:
        result = runner.shell(command, stage=Stage.UPGRADE)
    except SpawnError as exc:
        fail(f"Error occurred: {exc.reason}.", use_emoji=use_emoji, annotation=False)
        raise
    if not result.succeeded:
        error = UpgradeError(result.exit_code)
        fail(str(error), use_emoji=use_emoji, annotation=False)
        raise error
    return command


def install_package(runner: ProcessRunner, package: str, *, use_emoji: bool = True) -> None:
    """Install ``package`` with ``pip install``.

    Raises:
        InstallError: If pip exits with a non-zero status.
        SpawnError: If pip cannot be started.
    """

    info(f"Installing {package}.", use_emoji=use_emoji)
    try:
        result = runner.inherit(["pip", "install", package], stage=Stage.INSTALL)
    except SpawnError as exc:
        fail(f"Error occurred: {exc.reason}.", use_emoji=use_emoji, annotation=False)
        raise
    if not result.succeeded:
        error = InstallError(package, result.exit_code)
        fail(str(error), use_emoji=use_emoji, annotation=False)
        raise error
    ok(f"{package} installed successfully.", use_emoji=use_emoji)


def install_tool(runner: ProcessRunner, tool: LintTool, *, use_emoji: bool = True) -> tuple[str, ...]:
    """Install ``tool`` and, for mypy, the lxml package its HTML report needs.

    Returns:
        tuple[str, ...]: Packages installed, in order.
    """

    install_package(runner, tool.value, use_emoji=use_emoji)
    if tool is LintTool.MYPY:
        install_package(runner, MYPY_REPORT_DEPENDENCY, use_emoji=use_emoji)
        return (tool.value, MYPY_REPORT_DEPENDENCY)
    return (tool.value,)


__all__ = [
    "GENERIC_UPGRADE_COMMAND",
    "MYPY_REPORT_DEPENDENCY",
    "PINNED_UPGRADE_COMMAND",
    "build_upgrade_command",
    "install_package",
    "install_tool",
    "upgrade_pip",
]
