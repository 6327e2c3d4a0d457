# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the sequential pipeline driver."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import pytest

from lintaction.config import ActionConfig, LintTool
from lintaction.errors import (
    LintError,
    PlatformUnsupportedError,
    PublishError,
    RenameError,
    SpawnError,
    Stage,
    ToolUnsupportedError,
    VersionCheckError,
)
from lintaction.pipeline import (
    TERMINAL_STATES,
    LintPipeline,
    PipelineHooks,
    PipelineOutcome,
    PipelineState,
)
from lintaction.postprocess import MYPY_REPORT_INDEX
from lintaction.publish import UploadReceipt

HAPPY_PATH = [
    PipelineState.START,
    PipelineState.PLATFORM_CHECKED,
    PipelineState.TOOL_VALIDATED,
    PipelineState.PIP_UPGRADED,
    PipelineState.TOOL_INSTALLED,
    PipelineState.LINTED,
    PipelineState.POST_PROCESSED,
    PipelineState.PUBLISHED,
    PipelineState.DONE,
]


class RecordingStore:
    def __init__(self) -> None:
        self.uploads: list[tuple[str, tuple[str, ...], Path, bytes]] = []

    def upload(self, name: str, files: Sequence[str], root_directory: Path) -> UploadReceipt:
        content = (root_directory / files[0]).read_bytes()
        self.uploads.append((name, tuple(files), root_directory, content))
        return UploadReceipt(artifact_id="abc", size=len(content))


def _pipeline(runner, store: RecordingStore, workdir: Path, platform: str = "linux") -> LintPipeline:
    return LintPipeline(
        runner,
        store,
        workdir=workdir,
        hooks=PipelineHooks(platform=lambda: platform),
        use_emoji=False,
    )


def _write_report(workdir: Path, name: str) -> None:
    (workdir / name).write_text("report\n", encoding="utf-8")


def test_successful_run_visits_every_state(runner, workdir: Path) -> None:
    runner.on_shell = lambda command: _write_report(workdir, "report.txt")
    store = RecordingStore()
    config = ActionConfig(tool="flake8", path="src", artifact_name="report.txt")

    result = _pipeline(runner, store, workdir).run(config)

    assert result.outcome is PipelineOutcome.DONE
    assert result.states == HAPPY_PATH
    assert result.exit_code == 0
    assert result.command == "flake8 src --color auto --count --statistics --format=default --output-file=report.txt"
    assert store.uploads == [("report.txt", ("report.txt",), workdir, b"report\n")]
    assert result.receipt == UploadReceipt(artifact_id="abc", size=7)
    assert runner.stages() == [Stage.VERSION_CHECK, Stage.UPGRADE, Stage.INSTALL, Stage.LINT]


def test_mypy_run_renames_report_before_publishing(runner, workdir: Path) -> None:
    runner.on_shell = lambda command: _write_report(workdir, MYPY_REPORT_INDEX)
    store = RecordingStore()
    config = ActionConfig(tool="mypy", path="src", artifact_name="mypy.html")

    result = _pipeline(runner, store, workdir).run(config)

    assert result.outcome is PipelineOutcome.DONE
    assert [call.args for call in runner.calls if call.stage is Stage.INSTALL] == [
        ("pip", "install", "mypy"),
        ("pip", "install", "lxml"),
    ]
    assert store.uploads[0][0] == "mypy.html"
    assert not (workdir / MYPY_REPORT_INDEX).exists()


def test_unsupported_tool_is_a_benign_skip(runner, workdir: Path) -> None:
    store = RecordingStore()

    result = _pipeline(runner, store, workdir).run(ActionConfig(tool="eslint"))

    assert result.outcome is PipelineOutcome.SKIPPED
    assert result.exit_code == 0
    assert result.last_state is PipelineState.SKIPPED
    assert isinstance(result.error, ToolUnsupportedError)
    assert runner.calls == []
    assert store.uploads == []


def test_unsupported_platform_fails_before_spawning(runner, workdir: Path) -> None:
    result = _pipeline(runner, RecordingStore(), workdir, platform="sunos5").run(ActionConfig(tool="flake8"))

    assert result.outcome is PipelineOutcome.FAILED
    assert result.exit_code == 1
    assert result.states == [PipelineState.START, PipelineState.FAILED]
    assert isinstance(result.error, PlatformUnsupportedError)
    assert runner.calls == []


def test_lint_failure_skips_post_processing_and_publish(runner, workdir: Path) -> None:
    runner.exit_codes[Stage.LINT] = 1
    (workdir / MYPY_REPORT_INDEX).write_text("<html/>", encoding="utf-8")
    store = RecordingStore()

    result = _pipeline(runner, store, workdir).run(ActionConfig(tool="mypy", artifact_name="mypy.html"))

    assert result.outcome is PipelineOutcome.FAILED
    assert isinstance(result.error, LintError)
    assert PipelineState.POST_PROCESSED not in result.states
    assert result.last_state is PipelineState.FAILED
    assert (workdir / MYPY_REPORT_INDEX).exists()
    assert not (workdir / "mypy.html").exists()
    assert store.uploads == []


@pytest.mark.parametrize(
    ("stage", "expected_calls"),
    [
        (Stage.VERSION_CHECK, [Stage.VERSION_CHECK]),
        (Stage.UPGRADE, [Stage.VERSION_CHECK, Stage.UPGRADE]),
        (Stage.INSTALL, [Stage.VERSION_CHECK, Stage.UPGRADE, Stage.INSTALL]),
    ],
)
def test_failure_stops_later_stages(runner, workdir: Path, stage: Stage, expected_calls: list[Stage]) -> None:
    runner.exit_codes[stage] = 3
    store = RecordingStore()

    result = _pipeline(runner, store, workdir).run(ActionConfig(tool="pylint"))

    assert result.outcome is PipelineOutcome.FAILED
    assert result.error is not None and result.error.stage is stage
    assert runner.stages() == expected_calls
    assert store.uploads == []


@pytest.mark.parametrize("stage", [Stage.UPGRADE, Stage.INSTALL, Stage.LINT])
def test_spawn_failure_is_reported_as_failed(runner, workdir: Path, stage: Stage) -> None:
    runner.spawn_failures.add(stage)
    store = RecordingStore()

    result = _pipeline(runner, store, workdir).run(ActionConfig(tool="black"))

    assert result.outcome is PipelineOutcome.FAILED
    assert result.last_state is PipelineState.FAILED
    assert isinstance(result.error, SpawnError)
    assert result.error.stage is stage
    assert runner.stages()[-1] is stage
    assert store.uploads == []


def test_version_probe_failure_is_reported(runner, workdir: Path) -> None:
    runner.spawn_failures.add(Stage.VERSION_CHECK)

    result = _pipeline(runner, RecordingStore(), workdir).run(ActionConfig(tool="black"))

    assert isinstance(result.error, VersionCheckError)
    assert result.states[-2] is PipelineState.TOOL_VALIDATED


def test_missing_report_fails_publish(runner, workdir: Path) -> None:
    result = _pipeline(runner, RecordingStore(), workdir).run(ActionConfig(tool="black", artifact_name="out.txt"))

    assert isinstance(result.error, PublishError)
    assert result.states[-2] is PipelineState.POST_PROCESSED


def test_mypy_without_index_fails_rename(runner, workdir: Path) -> None:
    store = RecordingStore()

    result = _pipeline(runner, store, workdir).run(ActionConfig(tool="mypy", artifact_name="mypy.html"))

    assert isinstance(result.error, RenameError)
    assert store.uploads == []


@pytest.mark.parametrize("tool", [tool for tool in LintTool if tool is not LintTool.MYPY])
def test_rename_never_runs_for_other_tools(runner, workdir: Path, tool: LintTool) -> None:
    (workdir / MYPY_REPORT_INDEX).write_text("untouched", encoding="utf-8")
    runner.on_shell = lambda command: _write_report(workdir, "report.txt")

    result = _pipeline(runner, RecordingStore(), workdir).run(
        ActionConfig(tool=tool.value, artifact_name="report.txt")
    )

    assert result.outcome is PipelineOutcome.DONE
    assert (workdir / MYPY_REPORT_INDEX).read_text(encoding="utf-8") == "untouched"


def test_every_run_ends_in_a_terminal_state(runner, workdir: Path) -> None:
    runner.exit_codes[Stage.LINT] = 1

    result = _pipeline(runner, RecordingStore(), workdir).run(ActionConfig(tool="flake8"))

    assert result.last_state in TERMINAL_STATES


class RaisingStore:
    def upload(self, name: str, files: Sequence[str], root_directory: Path) -> UploadReceipt:
        raise RuntimeError("upload service rejected artifact")


def test_store_rejection_ends_in_failed(runner, workdir: Path) -> None:
    runner.on_shell = lambda command: _write_report(workdir, "report.txt")

    result = _pipeline(runner, RaisingStore(), workdir).run(ActionConfig(tool="black", artifact_name="report.txt"))

    assert result.outcome is PipelineOutcome.FAILED
    assert result.exit_code == 1
    assert isinstance(result.error, PublishError)
    assert "upload service rejected artifact" in str(result.error)
    assert isinstance(result.error.__cause__, RuntimeError)
    assert result.states[-2] is PipelineState.POST_PROCESSED
