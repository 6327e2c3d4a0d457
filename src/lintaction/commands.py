# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shell command construction for each supported linter.

Every :class:`~lintaction.config.LintTool` owns one builder. A builder emits the
base invocation, the flags implied by the boolean options, any extra
arguments and finally the clause that captures output into the report file.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Final

from .config import ActionConfig, LintTool, normalize_arguments

PYLINT_MESSAGE_TEMPLATE: Final[str] = "'{path}:{line}:{column}: {msg_id} {msg} [{symbol}]'"
MYPY_REPORT_DIRECTORY: Final[str] = "."


@dataclass(frozen=True, slots=True)
class CommandInputs:
    """Values a builder needs, already resolved from the configuration."""

    path: str
    artifact_name: str
    verbose: bool
    color: bool
    statistics: bool
    arguments: str

    @classmethod
    def from_config(cls, config: ActionConfig) -> CommandInputs:
        """Return builder inputs honouring the profile's argument handling."""

        return cls(
            path=config.path,
            artifact_name=config.artifact_name,
            verbose=config.verbose,
            color=config.color,
            statistics=config.statistics,
            arguments=normalize_arguments(config.effective_arguments),
        )


class _CommandParts:
    """Accumulate command fragments in order."""

    def __init__(self, *head: str) -> None:
        self._parts: list[str] = list(head)

    def add(self, *fragments: str, when: bool = True) -> None:
        if when:
            self._parts.extend(fragments)

    def add_arguments(self, arguments: str) -> None:
        self.add(arguments, when=bool(arguments))

    def render(self) -> str:
        return " ".join(self._parts)


def _flake8(inputs: CommandInputs) -> str:
    parts = _CommandParts("flake8", inputs.path)
    parts.add("--verbose", when=inputs.verbose)
    parts.add("--color", "auto", when=inputs.color)
    parts.add("--count", "--statistics", when=inputs.statistics)
    parts.add_arguments(inputs.arguments)
    parts.add("--format=default", f"--output-file={inputs.artifact_name}")
    return parts.render()


def _pylint(inputs: CommandInputs) -> str:
    parts = _CommandParts("pylint", inputs.path)
    parts.add("-v", when=inputs.verbose)
    parts.add("--output-format=colorized", when=inputs.color)
    parts.add(f"--msg-template={PYLINT_MESSAGE_TEMPLATE}", when=inputs.statistics)
    parts.add_arguments(inputs.arguments)
    # --exit-zero keeps findings from failing the stage; only crashes do.
    parts.add("--reports=y", "--exit-zero", ">", inputs.artifact_name)
    return parts.render()


def _pycodestyle(inputs: CommandInputs) -> str:
    parts = _CommandParts("pycodestyle", inputs.path)
    parts.add("--verbose", when=inputs.verbose)
    parts.add("--count", "--statistics", when=inputs.statistics)
    parts.add_arguments(inputs.arguments)
    parts.add("--format=default", ">", inputs.artifact_name)
    return parts.render()


def _pyflakes(inputs: CommandInputs) -> str:
    parts = _CommandParts("pyflakes", inputs.path)
    parts.add_arguments(inputs.arguments)
    parts.add(">", inputs.artifact_name)
    return parts.render()


def _black(inputs: CommandInputs) -> str:
    parts = _CommandParts("black", inputs.path)
    parts.add("--verbose", when=inputs.verbose)
    parts.add("--color", when=inputs.color)
    parts.add_arguments(inputs.arguments)
    parts.add(">", inputs.artifact_name)
    return parts.render()


def _mypy(inputs: CommandInputs) -> str:
    # mypy writes index.html into the report directory; the post-processor
    # moves it to the artifact name.
    parts = _CommandParts("mypy", inputs.path)
    parts.add("--verbose", when=inputs.verbose)
    parts.add("--color-output", when=inputs.color)
    parts.add_arguments(inputs.arguments)
    parts.add("--show-error-codes", "--html-report", MYPY_REPORT_DIRECTORY)
    return parts.render()


CommandBuilder = Callable[[CommandInputs], str]

COMMAND_BUILDERS: Final[Mapping[LintTool, CommandBuilder]] = {
    LintTool.FLAKE8: _flake8,
    LintTool.PYLINT: _pylint,
    LintTool.PYCODESTYLE: _pycodestyle,
    LintTool.PYFLAKES: _pyflakes,
    LintTool.BLACK: _black,
    LintTool.MYPY: _mypy,
}


def _verify_builders() -> None:
    missing = [tool.value for tool in LintTool if tool not in COMMAND_BUILDERS]
    if missing:
        raise RuntimeError(f"No command builder registered for: {', '.join(missing)}")


_verify_builders()


def build_lint_command(config: ActionConfig) -> str:
    """Return the shell command that lints ``config.path`` and writes the report.

    Args:
        config: Configuration whose tool has already been validated.

    Returns:
        str: Command string suitable for ``sh -c``.

    Raises:
        ToolUnsupportedError: If the configuration names an unknown tool.
    """

    tool = config.require_tool()
    return COMMAND_BUILDERS[tool](CommandInputs.from_config(config))


__all__ = [
    "COMMAND_BUILDERS",
    "CommandBuilder",
    "CommandInputs",
    "MYPY_REPORT_DIRECTORY",
    "PYLINT_MESSAGE_TEMPLATE",
    "build_lint_command",
]
