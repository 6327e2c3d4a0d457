# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Coarse host platform gate evaluated before any subprocess is spawned."""

from __future__ import annotations

import sys
from typing import Final

from .errors import PlatformUnsupportedError
from .logging import LOGGER

LINUX: Final[str] = "linux"
DARWIN: Final[str] = "darwin"
WINDOWS: Final[str] = "win32"
SUPPORTED_PLATFORMS: Final[frozenset[str]] = frozenset({LINUX, DARWIN, WINDOWS})


def current_platform() -> str:
    """Return the platform identifier reported by the interpreter."""

    return sys.platform


def check_platform(platform: str | None = None) -> str:
    """Validate that ``platform`` belongs to a supported family.

    Args:
        platform: Identifier to validate; defaults to :func:`current_platform`.

    Returns:
        str: The validated platform identifier.

    Raises:
        PlatformUnsupportedError: If the identifier is not on the allow-list.
    """

    identifier = current_platform() if platform is None else platform
    if identifier not in SUPPORTED_PLATFORMS:
        raise PlatformUnsupportedError(identifier)
    LOGGER.debug("Platform %s is supported", identifier)
    return identifier


__all__ = ["DARWIN", "LINUX", "SUPPORTED_PLATFORMS", "WINDOWS", "check_platform", "current_platform"]
