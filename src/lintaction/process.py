# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Subprocess wrappers used by every pipeline stage."""

from __future__ import annotations

import shutil

# Bandit: subprocess usage is intentional; this module is the single place where
# the pipeline launches the interpreter, pip and the selected linter.
import subprocess  # nosec B404
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Final, Protocol

from .errors import SpawnError, Stage

DEFAULT_SHELL: Final[str] = "sh"


@dataclass(frozen=True, slots=True)
class ProcessResult:
    """Exit status and optional captured streams of a finished subprocess."""

    exit_code: int
    stdout: str | None = None
    stderr: str | None = None

    @property
    def succeeded(self) -> bool:
        """Return ``True`` when the process exited with status zero."""

        return self.exit_code == 0


class ProcessRunner(Protocol):
    """Capability required by the stages to launch external processes."""

    def capture(self, args: Sequence[str], *, stage: Stage) -> ProcessResult:
        """Run ``args`` and collect both output streams."""
        ...

    def inherit(self, args: Sequence[str], *, stage: Stage) -> ProcessResult:
        """Run ``args`` with the terminal streams inherited."""
        ...

    def shell(self, command: str, *, stage: Stage) -> ProcessResult:
        """Run ``command`` through a shell with the terminal streams inherited."""
        ...


def _normalize_args(args: Sequence[str], *, stage: Stage) -> list[str]:
    """Resolve the executable of ``args`` against ``PATH``.

    Args:
        args: Raw command arguments supplied by the caller.
        stage: Pipeline stage recorded on spawn failures.

    Returns:
        list[str]: Argument list whose head is an absolute executable path.

    Raises:
        ValueError: If no arguments are provided.
        SpawnError: If the executable cannot be found.
    """

    if not args:
        msg = "subprocess command requires at least one argument"
        raise ValueError(msg)

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        raise SpawnError(args, f"Executable '{head}' was not found on PATH", stage=stage)
    return [resolved, *rest]


class SubprocessRunner:
    """Blocking :class:`ProcessRunner` backed by :mod:`subprocess`.

    No timeout is applied: a subprocess that never exits blocks the caller.
    """

    def __init__(
        self,
        *,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
        shell_executable: str = DEFAULT_SHELL,
    ) -> None:
        """Initialise the runner.

        Args:
            cwd: Working directory for every spawned process.
            env: Environment for spawned processes; ``None`` inherits ours.
            shell_executable: POSIX-compatible shell used for :meth:`shell`.
        """

        self._cwd = cwd
        self._env = dict(env) if env is not None else None
        self._shell_executable = shell_executable

    def capture(self, args: Sequence[str], *, stage: Stage) -> ProcessResult:
        """Run ``args`` and collect stdout and stderr as text.

        Raises:
            SpawnError: If the process cannot be started.
        """

        normalized = _normalize_args(args, stage=stage)
        try:
            # Bandit: argument vectors are assembled by the pipeline itself.
            completed = subprocess.run(  # nosec B603
                normalized,
                cwd=self._cwd,
                env=self._env,
                check=False,
                capture_output=True,
                text=True,
            )
        except OSError as exc:
            raise SpawnError(args, str(exc), stage=stage) from exc
        return ProcessResult(exit_code=completed.returncode, stdout=completed.stdout, stderr=completed.stderr)

    def inherit(self, args: Sequence[str], *, stage: Stage) -> ProcessResult:
        """Run ``args`` letting the child write straight to our terminal.

        Raises:
            SpawnError: If the process cannot be started.
        """

        normalized = _normalize_args(args, stage=stage)
        try:
            completed = subprocess.run(  # nosec B603
                normalized,
                cwd=self._cwd,
                env=self._env,
                check=False,
            )
        except OSError as exc:
            raise SpawnError(args, str(exc), stage=stage) from exc
        return ProcessResult(exit_code=completed.returncode)

    def shell(self, command: str, *, stage: Stage) -> ProcessResult:
        """Run ``command`` as ``sh -c <command>`` with inherited terminal streams.

        The lint stage relies on shell redirection to write its report, so the
        command string is passed to the shell unmodified.

        Raises:
            SpawnError: If the shell cannot be started.
        """

        return self.inherit([self._shell_executable, "-c", command], stage=stage)


__all__ = ["DEFAULT_SHELL", "ProcessResult", "ProcessRunner", "SubprocessRunner"]
