# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration record for a lint run and the CI input surface that feeds it."""

from __future__ import annotations

import os
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .errors import ToolUnsupportedError

TRUTHY_INPUTS: Final[frozenset[str]] = frozenset({"true", "True", "TRUE"})
INPUT_ENV_PREFIX: Final[str] = "INPUT_"
ARTIFACT_DIR_ENV: Final[str] = "LINT_ACTION_ARTIFACT_DIR"
RUNNER_TEMP_ENV: Final[str] = "RUNNER_TEMP"
ARTIFACT_DIR_NAME: Final[str] = "lint-artifacts"
LOCAL_ARTIFACT_DIR_NAME: Final[str] = ".lint-artifacts"


class LintTool(str, Enum):
    """Enumerate the linters the action knows how to install and run."""

    FLAKE8 = "flake8"
    PYLINT = "pylint"
    PYCODESTYLE = "pycodestyle"
    PYFLAKES = "pyflakes"
    BLACK = "black"
    MYPY = "mypy"

    @classmethod
    def from_raw(cls, raw: str) -> LintTool | None:
        """Return the member matching ``raw`` exactly, or ``None``."""

        try:
            return cls(raw)
        except ValueError:
            return None


class DefaultProfile(str, Enum):
    """Named sets of input defaults and argument handling.

    ``STANDARD`` forwards extra arguments to every tool. ``LEGACY`` reproduces
    the historical behaviour where pyflakes ignored them.
    """

    STANDARD = "standard"
    LEGACY = "legacy"


class ProfileDefaults(BaseModel):
    """Default input values applied when the CI host leaves an input blank."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    tool: str
    path: str
    artifact_name: str
    verbose: bool
    color: bool
    statistics: bool
    arguments: str
    ignores_arguments: frozenset[LintTool] = Field(default_factory=frozenset)


PROFILE_DEFAULTS: Final[Mapping[DefaultProfile, ProfileDefaults]] = {
    DefaultProfile.STANDARD: ProfileDefaults(
        tool=LintTool.FLAKE8.value,
        path=".",
        artifact_name="lint-report.txt",
        verbose=False,
        color=True,
        statistics=True,
        arguments="",
    ),
    DefaultProfile.LEGACY: ProfileDefaults(
        tool=LintTool.FLAKE8.value,
        path=".",
        artifact_name="report.txt",
        verbose=False,
        color=False,
        statistics=False,
        arguments="",
        ignores_arguments=frozenset({LintTool.PYFLAKES}),
    ),
}


def normalize_arguments(value: str | None) -> str:
    """Return ``value`` with surrounding whitespace removed.

    This is the single whitespace definition used by the pipeline: an
    argument string that is blank after stripping counts as absent.
    """

    return (value or "").strip()


def parse_flag(value: str | bool | None) -> bool:
    """Interpret a CI boolean input; only ``true``/``True``/``TRUE`` are truthy.

    Surrounding whitespace is ignored, as it is for every other input.
    """

    if isinstance(value, bool):
        return value
    return normalize_arguments(value) in TRUTHY_INPUTS


INPUT_NAMES: Final[Mapping[str, str]] = {
    "tool": "tool",
    "path": "path",
    "artifact_name": "artifact-name",
    "verbose": "verbose",
    "color": "color",
    "statistics": "statistics",
    "arguments": "arguments",
}


class ActionConfig(BaseModel):
    """Immutable configuration for one lint run.

    Input fields left out take their value from the selected profile's
    :class:`ProfileDefaults`, so a directly built config matches one produced
    by :func:`build_config`.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    tool: str
    path: str
    artifact_name: str
    verbose: bool
    color: bool
    statistics: bool
    arguments: str
    profile: DefaultProfile = DefaultProfile.STANDARD

    @model_validator(mode="before")
    @classmethod
    def _apply_profile_defaults(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        values = dict(data)
        defaults = PROFILE_DEFAULTS[DefaultProfile(values.get("profile") or DefaultProfile.STANDARD)]
        for field_name in INPUT_NAMES:
            if values.get(field_name) is None:
                values[field_name] = getattr(defaults, field_name)
        return values

    @field_validator("verbose", "color", "statistics", mode="before")
    @classmethod
    def _coerce_flag(cls, value: str | bool | None) -> bool:
        return parse_flag(value)

    @field_validator("tool", "path", "artifact_name", "arguments", mode="before")
    @classmethod
    def _strip_text(cls, value: str | None) -> str:
        return normalize_arguments(value)

    @property
    def lint_tool(self) -> LintTool | None:
        """Return the recognised tool, or ``None`` for an unsupported identifier."""

        return LintTool.from_raw(self.tool)

    def require_tool(self) -> LintTool:
        """Return the recognised tool.

        Raises:
            ToolUnsupportedError: If ``tool`` is not one of :class:`LintTool`.
        """

        tool = self.lint_tool
        if tool is None:
            raise ToolUnsupportedError(self.tool)
        return tool

    @property
    def effective_arguments(self) -> str:
        """Return the extra arguments the selected profile forwards to the tool."""

        tool = self.lint_tool
        if tool is not None and tool in PROFILE_DEFAULTS[self.profile].ignores_arguments:
            return ""
        return self.arguments


def input_env_name(name: str) -> str:
    """Return the environment variable a runner uses for input ``name``.

    Runners upper-case the input name and replace spaces with underscores;
    hyphens are kept, so ``artifact-name`` becomes ``INPUT_ARTIFACT-NAME``.
    """

    return f"{INPUT_ENV_PREFIX}{name.replace(' ', '_').upper()}"


def read_inputs(environ: Mapping[str, str] | None = None) -> dict[str, str]:
    """Collect the non-blank action inputs from ``environ``.

    Args:
        environ: Environment mapping to read; defaults to :data:`os.environ`.

    Returns:
        dict[str, str]: Field name to trimmed input value for inputs that were set.
    """

    source = os.environ if environ is None else environ
    values: dict[str, str] = {}
    for field_name, input_name in INPUT_NAMES.items():
        raw = source.get(input_env_name(input_name))
        if raw is None or not raw.strip():
            continue
        values[field_name] = normalize_arguments(raw)
    return values


def resolve_profile(raw: str | DefaultProfile | None, environ: Mapping[str, str] | None = None) -> DefaultProfile:
    """Return the profile named by ``raw`` or the ``profile`` input, else ``STANDARD``."""

    if isinstance(raw, DefaultProfile):
        return raw
    source = os.environ if environ is None else environ
    candidate = raw if raw is not None else source.get(input_env_name("profile"), "")
    candidate = candidate.strip().lower()
    if not candidate:
        return DefaultProfile.STANDARD
    return DefaultProfile(candidate)


def build_config(
    overrides: Mapping[str, str | bool | None] | None = None,
    *,
    profile: DefaultProfile = DefaultProfile.STANDARD,
    environ: Mapping[str, str] | None = None,
) -> ActionConfig:
    """Layer profile defaults, CI inputs and explicit overrides into a config.

    Args:
        overrides: Values supplied directly (for example CLI options); ``None``
            entries are ignored.
        profile: Profile providing defaults for inputs left blank.
        environ: Environment to read CI inputs from.

    Returns:
        ActionConfig: Validated, immutable configuration.
    """

    values: dict[str, str | bool | DefaultProfile] = dict(read_inputs(environ))
    for key, value in (overrides or {}).items():
        if value is not None:
            values[key] = value
    values["profile"] = profile
    return ActionConfig.model_validate(values)


def default_artifact_dir(workdir: Path, environ: Mapping[str, str] | None = None) -> Path:
    """Return the directory where the filesystem artifact store keeps uploads."""

    source = os.environ if environ is None else environ
    override = source.get(ARTIFACT_DIR_ENV)
    if override:
        return Path(override).expanduser()
    runner_temp = source.get(RUNNER_TEMP_ENV)
    if runner_temp:
        return Path(runner_temp) / ARTIFACT_DIR_NAME
    return workdir / LOCAL_ARTIFACT_DIR_NAME


__all__ = [
    "ActionConfig",
    "DefaultProfile",
    "INPUT_NAMES",
    "LintTool",
    "PROFILE_DEFAULTS",
    "ProfileDefaults",
    "build_config",
    "default_artifact_dir",
    "input_env_name",
    "normalize_arguments",
    "parse_flag",
    "read_inputs",
    "resolve_profile",
]
