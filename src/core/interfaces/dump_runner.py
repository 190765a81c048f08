"""Contrato del runner de conversión."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from core.domain.execution_mode import ExecutionMode


@runtime_checkable
class DumpRunner(Protocol):
    """Ejecuta la herramienta externa y devuelve la ruta del artefacto.

    Lanza `LaunchError`/`ExecutableNotFoundError`, `ExitError` o
    `ArtifactError` (ver `core.domain.errors`).
    """

    async def run(self, source: Path, *, mode: ExecutionMode) -> Path:
        ...
