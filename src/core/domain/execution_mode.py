"""Execution options shared by the CLI, the runner and the pipeline.

This module centralizes the small enums that drive how the conversion
executable is launched and what happens to its output afterwards. Keeping
them in the domain layer lets config, adapters and services share a single
source of truth without importing each other.
"""

from __future__ import annotations

from enum import Enum


class ExecutionMode(str, Enum):
    """How the conversion executable is spawned."""

    LOCAL = "local"
    REMOTE = "remote"

    @classmethod
    def default(cls) -> "ExecutionMode":
        """Return the mode used when nothing hints at a remote session."""

        return cls.LOCAL

    @classmethod
    def from_remote_name(cls, remote_name: str | None) -> "ExecutionMode":
        """Derive the mode from the host's remote session name (None = local)."""

        return cls.REMOTE if remote_name else cls.LOCAL

    @property
    def uses_shell(self) -> bool:
        """Local sessions go through the shell so user PATH tweaks apply."""

        return self is ExecutionMode.LOCAL

    def label(self) -> str:
        """Human readable label for logs and diagnostics."""

        return "remote (direct spawn)" if self is ExecutionMode.REMOTE else "local (shell)"


class ArtifactPolicy(str, Enum):
    """Retention of the temp artifact once it has been read."""

    KEEP = "keep"
    DELETE = "delete"
