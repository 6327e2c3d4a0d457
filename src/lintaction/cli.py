# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Typer application exposing the lint pipeline to CI hosts."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from . import __version__
from .commands import build_lint_command
from .config import ActionConfig, DefaultProfile, LintTool, build_config, default_artifact_dir, resolve_profile
from .errors import ToolUnsupportedError
from .logging import fail, info, ok, section, warn
from .pipeline import LintPipeline, PipelineOutcome
from .process import SubprocessRunner
from .publish import DirectoryArtifactStore

app = typer.Typer(help="Install a Python linter, run it and publish its report.", no_args_is_help=True)

TOOL_OPTION = Annotated[
    str | None,
    typer.Option("--tool", "-t", help="Linter to run; falls back to INPUT_TOOL."),
]
PATH_OPTION = Annotated[
    str | None,
    typer.Option("--path", "-p", help="Path or glob passed to the linter; falls back to INPUT_PATH."),
]
ARTIFACT_NAME_OPTION = Annotated[
    str | None,
    typer.Option("--artifact-name", "-a", help="Report file name; falls back to INPUT_ARTIFACT-NAME."),
]
VERBOSE_OPTION = Annotated[
    bool | None,
    typer.Option("--verbose/--no-verbose", help="Pass the linter's verbose flag."),
]
COLOR_OPTION = Annotated[
    bool | None,
    typer.Option("--color/--no-color", help="Pass the linter's colour flag."),
]
STATISTICS_OPTION = Annotated[
    bool | None,
    typer.Option("--statistics/--no-statistics", help="Pass the linter's statistics flags."),
]
ARGUMENTS_OPTION = Annotated[
    str | None,
    typer.Option("--arguments", help="Extra arguments appended to the lint command."),
]
PROFILE_OPTION = Annotated[
    DefaultProfile | None,
    typer.Option("--profile", case_sensitive=False, help="Default profile; falls back to INPUT_PROFILE."),
]
EMOJI_OPTION = Annotated[
    bool,
    typer.Option("--emoji/--no-emoji", help="Toggle emoji in CLI output."),
]
WORKDIR_OPTION = Annotated[
    Path | None,
    typer.Option("--workdir", help="Directory to lint from; defaults to the current directory."),
]
ARTIFACT_DIR_OPTION = Annotated[
    Path | None,
    typer.Option(
        "--artifact-dir",
        help="Where published artifacts are stored; defaults to LINT_ACTION_ARTIFACT_DIR or RUNNER_TEMP.",
    ),
]


@dataclass(slots=True)
class RunCLIOptions:
    """Normalised CLI inputs shared by the run and command sub-commands."""

    config: ActionConfig
    workdir: Path
    use_emoji: bool


def _resolve_options(
    *,
    tool: str | None,
    path: str | None,
    artifact_name: str | None,
    verbose: bool | None,
    color: bool | None,
    statistics: bool | None,
    arguments: str | None,
    profile: DefaultProfile | None,
    workdir: Path | None,
    use_emoji: bool,
) -> RunCLIOptions:
    try:
        resolved_profile = resolve_profile(profile)
        config = build_config(
            {
                "tool": tool,
                "path": path,
                "artifact_name": artifact_name,
                "verbose": verbose,
                "color": color,
                "statistics": statistics,
                "arguments": arguments,
            },
            profile=resolved_profile,
        )
    except (ValueError, ValidationError) as exc:
        fail(f"Invalid configuration: {exc}", use_emoji=use_emoji)
        raise typer.Exit(code=1) from exc
    return RunCLIOptions(config=config, workdir=(workdir or Path.cwd()).resolve(), use_emoji=use_emoji)


@app.command("run")
def run_command(
    tool: TOOL_OPTION = None,
    path: PATH_OPTION = None,
    artifact_name: ARTIFACT_NAME_OPTION = None,
    verbose: VERBOSE_OPTION = None,
    color: COLOR_OPTION = None,
    statistics: STATISTICS_OPTION = None,
    arguments: ARGUMENTS_OPTION = None,
    profile: PROFILE_OPTION = None,
    workdir: WORKDIR_OPTION = None,
    artifact_dir: ARTIFACT_DIR_OPTION = None,
    emoji: EMOJI_OPTION = True,
) -> None:
    """Install the selected linter, run it and publish the report."""

    options = _resolve_options(
        tool=tool,
        path=path,
        artifact_name=artifact_name,
        verbose=verbose,
        color=color,
        statistics=statistics,
        arguments=arguments,
        profile=profile,
        workdir=workdir,
        use_emoji=emoji,
    )
    section(f"lint-action {__version__}", use_color=False)
    store = DirectoryArtifactStore(artifact_dir or default_artifact_dir(options.workdir))
    pipeline = LintPipeline(
        SubprocessRunner(cwd=options.workdir),
        store,
        workdir=options.workdir,
        use_emoji=options.use_emoji,
    )
    result = pipeline.run(options.config)
    if result.outcome is PipelineOutcome.DONE:
        ok(f"Published {options.config.artifact_name}.", use_emoji=options.use_emoji)
    raise typer.Exit(code=result.exit_code)


@app.command("command")
def command_command(
    tool: TOOL_OPTION = None,
    path: PATH_OPTION = None,
    artifact_name: ARTIFACT_NAME_OPTION = None,
    verbose: VERBOSE_OPTION = None,
    color: COLOR_OPTION = None,
    statistics: STATISTICS_OPTION = None,
    arguments: ARGUMENTS_OPTION = None,
    profile: PROFILE_OPTION = None,
    emoji: EMOJI_OPTION = True,
) -> None:
    """Print the lint command that ``run`` would execute, without running it."""

    options = _resolve_options(
        tool=tool,
        path=path,
        artifact_name=artifact_name,
        verbose=verbose,
        color=color,
        statistics=statistics,
        arguments=arguments,
        profile=profile,
        workdir=None,
        use_emoji=emoji,
    )
    try:
        command = build_lint_command(options.config)
    except ToolUnsupportedError as exc:
        warn(str(exc), use_emoji=options.use_emoji)
        raise typer.Exit(code=0) from exc
    typer.echo(command)


@app.command("tools")
def tools_command(emoji: EMOJI_OPTION = True) -> None:
    """List the supported linter identifiers."""

    info("Supported linting tools:", use_emoji=emoji)
    for tool in LintTool:
        typer.echo(f"  {tool.value}")


__all__ = ["app"]
