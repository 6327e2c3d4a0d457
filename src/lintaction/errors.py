# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy raised by the lint pipeline stages."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum


class Stage(str, Enum):
    """Enumerate the pipeline stages that can report a failure."""

    PLATFORM = "platform"
    TOOL = "tool"
    VERSION_CHECK = "version-check"
    UPGRADE = "upgrade"
    INSTALL = "install"
    LINT = "lint"
    RENAME = "rename"
    PUBLISH = "publish"


class LintActionError(RuntimeError):
    """Base class for failures raised while driving the lint pipeline."""

    stage: Stage

    def __init__(self, message: str, *, stage: Stage) -> None:
        """Initialise the error with a message and the failing stage.

        Args:
            message: Human-readable description of the failure.
            stage: Pipeline stage that produced the failure.
        """

        super().__init__(message)
        self.stage = stage


class PlatformUnsupportedError(LintActionError):
    """Raised when the host operating system is outside the allow-list."""

    def __init__(self, platform: str) -> None:
        super().__init__(f"Unsupported Platform: {platform}", stage=Stage.PLATFORM)
        self.platform = platform


class ToolUnsupportedError(LintActionError):
    """Raised for an unrecognised tool identifier; treated as a benign skip."""

    def __init__(self, tool: str) -> None:
        super().__init__(f"Unsupported Linting Tool: {tool}", stage=Stage.TOOL)
        self.tool = tool


class VersionCheckCause(str, Enum):
    """Distinguish the three ways an interpreter version probe can fail."""

    STDERR = "stderr"
    EXIT_CODE = "exit-code"
    SPAWN = "spawn"


class VersionCheckError(LintActionError):
    """Raised when the interpreter version cannot be determined."""

    def __init__(
        self,
        message: str,
        *,
        cause: VersionCheckCause,
        exit_code: int | None = None,
        stderr: str | None = None,
    ) -> None:
        """Initialise the error with the probe failure details.

        Args:
            message: Human-readable description of the failure.
            cause: Which failure mode the probe hit.
            exit_code: Interpreter exit status when ``cause`` is ``EXIT_CODE``.
            stderr: Error stream content when ``cause`` is ``STDERR``.
        """

        super().__init__(message, stage=Stage.VERSION_CHECK)
        self.cause = cause
        self.exit_code = exit_code
        self.stderr = stderr


class SpawnError(LintActionError):
    """Raised when a subprocess cannot be started at all."""

    def __init__(self, command: Sequence[str], reason: str, *, stage: Stage) -> None:
        """Initialise the error with the command that failed to spawn.

        Args:
            command: Argument vector that was being launched.
            reason: Operating system explanation for the failure.
            stage: Pipeline stage that attempted the spawn.
        """

        head = command[0] if command else "<empty>"
        super().__init__(f"Failed to start '{head}': {reason}", stage=stage)
        self.command = tuple(command)
        self.reason = reason


class UpgradeError(LintActionError):
    """Raised when upgrading pip exits with a non-zero status."""

    def __init__(self, exit_code: int) -> None:
        super().__init__(f"Failed to upgrade pip with code {exit_code}.", stage=Stage.UPGRADE)
        self.exit_code = exit_code


class InstallError(LintActionError):
    """Raised when ``pip install`` of a package exits with a non-zero status."""

    def __init__(self, package: str, exit_code: int) -> None:
        super().__init__(f"Failed to install {package} with code {exit_code}.", stage=Stage.INSTALL)
        self.package = package
        self.exit_code = exit_code


class LintError(LintActionError):
    """Raised when the lint command exits with a non-zero status."""

    def __init__(self, tool: str, exit_code: int) -> None:
        super().__init__(f"Failed to run {tool} with code {exit_code}.", stage=Stage.LINT)
        self.tool = tool
        self.exit_code = exit_code


class RenameError(LintActionError):
    """Raised when the generated report cannot be moved to the artifact name."""

    def __init__(self, source: str, target: str, reason: str) -> None:
        super().__init__(f"Failed to rename file {source} to {target}: {reason}", stage=Stage.RENAME)
        self.source = source
        self.target = target


class PublishError(LintActionError):
    """Raised when the artifact cannot be read or the store rejects it."""

    def __init__(self, artifact_name: str, reason: str) -> None:
        super().__init__(f"Failed to publish artifact {artifact_name}: {reason}", stage=Stage.PUBLISH)
        self.artifact_name = artifact_name


__all__ = [
    "InstallError",
    "LintActionError",
    "LintError",
    "PlatformUnsupportedError",
    "PublishError",
    "RenameError",
    "SpawnError",
    "Stage",
    "ToolUnsupportedError",
    "UpgradeError",
    "VersionCheckCause",
    "VersionCheckError",
]
