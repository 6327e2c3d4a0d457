# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import os
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from lintaction.console import get_console_manager
from lintaction.errors import SpawnError, Stage
from lintaction.process import ProcessResult


@dataclass(slots=True)
class RecordedCall:
    kind: str
    args: tuple[str, ...]
    stage: Stage


@dataclass
class RecordingRunner:
    """Process runner double that records every launch and replays scripted results."""

    version: str = "Python 3.12.4\n"
    exit_codes: dict[Stage, int] = field(default_factory=dict)
    spawn_failures: set[Stage] = field(default_factory=set)
    on_shell: Callable[[str], None] | None = None
    calls: list[RecordedCall] = field(default_factory=list)

    def _result(self, args: Sequence[str], stage: Stage, **streams: str | None) -> ProcessResult:
        if stage in self.spawn_failures:
            raise SpawnError(args, "No such file or directory", stage=stage)
        return ProcessResult(exit_code=self.exit_codes.get(stage, 0), **streams)

    def capture(self, args: Sequence[str], *, stage: Stage) -> ProcessResult:
        self.calls.append(RecordedCall("capture", tuple(args), stage))
        return self._result(args, stage, stdout=self.version, stderr="")

    def inherit(self, args: Sequence[str], *, stage: Stage) -> ProcessResult:
        self.calls.append(RecordedCall("inherit", tuple(args), stage))
        return self._result(args, stage)

    def shell(self, command: str, *, stage: Stage) -> ProcessResult:
        self.calls.append(RecordedCall("shell", (command,), stage))
        result = self._result([command], stage)
        if self.on_shell is not None and stage is Stage.LINT:
            self.on_shell(command)
        return result

    def stages(self) -> list[Stage]:
        return [call.stage for call in self.calls]


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host CI variables from leaking into configuration and annotations."""

    for name in ("GITHUB_ACTIONS", "RUNNER_TEMP", "LINT_ACTION_ARTIFACT_DIR", "INPUT_PROFILE"):
        monkeypatch.delenv(name, raising=False)
    for name in list(os.environ):
        if name.startswith("INPUT_"):
            monkeypatch.delenv(name, raising=False)
    get_console_manager().clear()


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    target = tmp_path / "work"
    target.mkdir()
    return target
