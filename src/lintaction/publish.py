# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Hand the lint report to durable artifact storage."""

from __future__ import annotations

import hashlib
import shutil
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from .errors import PublishError
from .logging import LOGGER, fail, ok


@dataclass(frozen=True, slots=True)
class UploadReceipt:
    """Identifier and total size reported by the store for an upload."""

    artifact_id: str
    size: int


class ArtifactStore(Protocol):
    """Durable storage capability for named artifacts."""

    def upload(self, name: str, files: Sequence[str], root_directory: Path) -> UploadReceipt:
        """Persist ``files`` (relative to ``root_directory``) under ``name``.

        Any exception raised here is reported as a :class:`PublishError`.
        """
        ...


class DirectoryArtifactStore:
    """Store artifacts as plain copies under a local directory.

    Each artifact lands in ``<base>/<name>/`` with the relative layout of the
    uploaded files preserved.
    """

    def __init__(self, base: Path) -> None:
        self.base = base

    def upload(self, name: str, files: Sequence[str], root_directory: Path) -> UploadReceipt:
        """Copy ``files`` into the artifact directory for ``name``.

        Raises:
            OSError: If a file cannot be copied.
            ValueError: If a file lies outside ``root_directory``.
        """

        root = root_directory.resolve()
        destination_root = self.base / name
        digest = hashlib.sha256(name.encode("utf-8"))
        size = 0
        for entry in files:
            source = (root / entry).resolve()
            relative = source.relative_to(root)
            target = destination_root / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, target)
            size += target.stat().st_size
            digest.update(str(relative).encode("utf-8"))
        LOGGER.debug("Stored %d file(s) for artifact %s in %s", len(files), name, destination_root)
        return UploadReceipt(artifact_id=digest.hexdigest()[:16], size=size)


def publish_artifact(
    store: ArtifactStore,
    artifact_name: str,
    workdir: Path,
    *,
    use_emoji: bool = True,
) -> UploadReceipt:
    """Read the report named ``artifact_name`` and upload it to ``store``.

    The full contents are read first so a missing or unreadable report fails
    here rather than inside the store.

    Raises:
        PublishError: If the report cannot be read or the store rejects it.
    """

    report = workdir / artifact_name
    try:
        report.read_bytes()
        receipt = store.upload(artifact_name, [artifact_name], workdir)
    except PublishError:
        raise
    except Exception as exc:  # any store client failure is a rejected upload
        error = PublishError(artifact_name, str(exc))
        fail(f"Error occurred: {exc}.", use_emoji=use_emoji, annotation=False)
        raise error from exc
    ok(f"Uploaded artifact {artifact_name} ({receipt.size} bytes).", use_emoji=use_emoji)
    return receipt


__all__ = ["ArtifactStore", "DirectoryArtifactStore", "UploadReceipt", "publish_artifact"]
