# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Sequential driver that takes a configuration from platform check to upload.

The driver is a small state machine. Each stage runs only after the previous
one succeeded; the first :class:`~lintaction.errors.LintActionError` moves the
run to ``FAILED`` and no later stage executes. An unrecognised tool is the one
benign exit and ends in ``SKIPPED``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .commands import build_lint_command
from .config import ActionConfig, LintTool
from .errors import LintActionError, ToolUnsupportedError
from .executor import run_lint
from .installers import install_tool, upgrade_pip
from .logging import LOGGER, fail, warn
from .platform import check_platform, current_platform
from .postprocess import post_process
from .probe import DEFAULT_INTERPRETER, probe_interpreter_version
from .process import ProcessRunner
from .publish import ArtifactStore, UploadReceipt, publish_artifact


class PipelineState(str, Enum):
    """States visited by :class:`LintPipeline`."""

    START = "start"
    PLATFORM_CHECKED = "platform-checked"
    TOOL_VALIDATED = "tool-validated"
    PIP_UPGRADED = "pip-upgraded"
    TOOL_INSTALLED = "tool-installed"
    LINTED = "linted"
    POST_PROCESSED = "post-processed"
    PUBLISHED = "published"
    DONE = "done"
    SKIPPED = "skipped"
    FAILED = "failed"


TERMINAL_STATES = frozenset({PipelineState.DONE, PipelineState.SKIPPED, PipelineState.FAILED})


class PipelineOutcome(str, Enum):
    """How a pipeline run ended."""

    DONE = "done"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(slots=True)
class PipelineResult:
    """Typed result of a run; callers translate it into an exit status."""

    outcome: PipelineOutcome
    states: list[PipelineState] = field(default_factory=list)
    error: LintActionError | None = None
    command: str | None = None
    receipt: UploadReceipt | None = None

    @property
    def exit_code(self) -> int:
        """Return ``1`` for failures and ``0`` for completed or skipped runs."""

        return 1 if self.outcome is PipelineOutcome.FAILED else 0

    @property
    def last_state(self) -> PipelineState:
        """Return the final state reached."""

        return self.states[-1] if self.states else PipelineState.START


@dataclass(slots=True)
class PipelineHooks:
    """Injectable collaborators; defaults talk to the real host."""

    platform: Callable[[], str] = current_platform
    interpreter: str = DEFAULT_INTERPRETER


class LintPipeline:
    """Drive the lint stages for one configuration."""

    def __init__(
        self,
        runner: ProcessRunner,
        store: ArtifactStore,
        *,
        workdir: Path | None = None,
        hooks: PipelineHooks | None = None,
        use_emoji: bool = True,
    ) -> None:
        """Initialise the pipeline.

        Args:
            runner: Process capability used by every subprocess stage.
            store: Storage collaborator receiving the report.
            workdir: Directory the lint command runs in and writes the report to.
            hooks: Platform and interpreter overrides.
            use_emoji: Toggle emoji in progress messages.
        """

        self._runner = runner
        self._store = store
        self._workdir = workdir or Path.cwd()
        self._hooks = hooks or PipelineHooks()
        self._use_emoji = use_emoji

    def run(self, config: ActionConfig) -> PipelineResult:
        """Run every stage for ``config`` and return the outcome.

        Never raises :class:`LintActionError`; the error is attached to the
        returned result instead.
        """

        result = PipelineResult(outcome=PipelineOutcome.DONE)
        self._enter(result, PipelineState.START)
        try:
            self._run_stages(config, result)
        except ToolUnsupportedError as exc:
            warn(str(exc), use_emoji=self._use_emoji)
            result.outcome = PipelineOutcome.SKIPPED
            result.error = exc
            self._enter(result, PipelineState.SKIPPED)
        except LintActionError as exc:
            fail(f"{exc.stage.value} stage failed: {exc}", use_emoji=self._use_emoji)
            result.outcome = PipelineOutcome.FAILED
            result.error = exc
            self._enter(result, PipelineState.FAILED)
        return result

    def _run_stages(self, config: ActionConfig, result: PipelineResult) -> None:
        platform = check_platform(self._hooks.platform())
        self._enter(result, PipelineState.PLATFORM_CHECKED)

        tool: LintTool = config.require_tool()
        self._enter(result, PipelineState.TOOL_VALIDATED)

        version = probe_interpreter_version(
            self._runner,
            interpreter=self._hooks.interpreter,
            use_emoji=self._use_emoji,
        )
        upgrade_pip(self._runner, platform=platform, python_version=version, use_emoji=self._use_emoji)
        self._enter(result, PipelineState.PIP_UPGRADED)

        install_tool(self._runner, tool, use_emoji=self._use_emoji)
        self._enter(result, PipelineState.TOOL_INSTALLED)

        result.command = build_lint_command(config)
        run_lint(self._runner, tool, result.command, use_emoji=self._use_emoji)
        self._enter(result, PipelineState.LINTED)

        post_process(tool, config.artifact_name, self._workdir, use_emoji=self._use_emoji)
        self._enter(result, PipelineState.POST_PROCESSED)

        result.receipt = publish_artifact(self._store, config.artifact_name, self._workdir, use_emoji=self._use_emoji)
        self._enter(result, PipelineState.PUBLISHED)
        self._enter(result, PipelineState.DONE)

    @staticmethod
    def _enter(result: PipelineResult, state: PipelineState) -> None:
        LOGGER.debug("Pipeline state -> %s", state.value)
        result.states.append(state)


__all__ = [
    "LintPipeline",
    "PipelineHooks",
    "PipelineOutcome",
    "PipelineResult",
    "PipelineState",
    "TERMINAL_STATES",
]
