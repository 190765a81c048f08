"""Runner de gdxdump (subprocess asíncrono).

Responsabilidad:
- Lanzar `<tool> <source>` vía shell (local) o directo (remote).
- Copiar stdout al artefacto temporal a medida que llega (el archivo crece
  mientras la herramienta corre).
- Clasificar fallos: no encontrado / no arrancó / salió con código != 0.
"""

from __future__ import annotations

import asyncio
import logging
import shlex
import subprocess
import sys
import tempfile
from collections import deque
from pathlib import Path
from typing import IO

from core.config import AppSettings
from core.domain.errors import (
    ArtifactError,
    ExecutableNotFoundError,
    ExitError,
    GdxViewerError,
    LaunchError,
)
from core.domain.execution_mode import ArtifactPolicy, ExecutionMode

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024
_STDERR_TAIL_CHARS = 2_000
_STDERR_TAIL_BYTES = 4 * _STDERR_TAIL_CHARS

# "command not found" del shell que media en modo local (sh/bash, cmd.exe).
_SHELL_NOT_FOUND_CODES: frozenset[int] = frozenset({127, 9009})


def resolve_artifact_path(
    source: Path,
    *,
    suffix: str = ".csv",
    temp_dir: Path | None = None,
) -> Path:
    """Ruta del artefacto: `<temp>/<basename(source)><suffix>`.

    Dos fuentes con el mismo nombre base comparten artefacto; no se deduplica.
    """

    base = temp_dir if temp_dir is not None else Path(tempfile.gettempdir())
    return base / f"{source.name}{suffix}"


def build_shell_command(command: str, source: Path) -> str:
    if sys.platform.startswith("win"):
        return subprocess.list2cmdline([command, str(source)])
    return shlex.join([command, str(source)])


async def _pump(stream: asyncio.StreamReader, sink: IO[bytes]) -> int:
    total = 0
    while True:
        chunk = await stream.read(_CHUNK_SIZE)
        if not chunk:
            break
        sink.write(chunk)
        sink.flush()
        total += len(chunk)
    return total


async def _read_tail(stream: asyncio.StreamReader, limit: int) -> bytes:
    """Drena el stream conservando solo los últimos `limit` bytes."""

    tail: deque[bytes] = deque()
    size = 0
    while True:
        chunk = await stream.read(_CHUNK_SIZE)
        if not chunk:
            break
        tail.append(chunk)
        size += len(chunk)
        while len(tail) > 1 and size - len(tail[0]) >= limit:
            size -= len(tail.popleft())
    return b"".join(tail)[-limit:]


class GdxDumpRunner:
    """Implementación de `DumpRunner` sobre `asyncio` subprocess."""

    def __init__(self, settings: AppSettings | None = None, *, command: str | None = None) -> None:
        self._settings = settings or AppSettings()
        self._command = command or self._settings.dump_command

    @property
    def command(self) -> str:
        return self._command

    def artifact_path_for(self, source: Path) -> Path:
        return resolve_artifact_path(
            source,
            suffix=self._settings.artifact_suffix,
            temp_dir=self._settings.temp_dir,
        )

    async def _spawn(self, source: Path, mode: ExecutionMode) -> asyncio.subprocess.Process:
        try:
            if mode.uses_shell:
                return await asyncio.create_subprocess_shell(
                    build_shell_command(self._command, source),
                    stdout=asyncio.subprocess.PIPE,
                    stderr=asyncio.subprocess.PIPE,
                )
            return await asyncio.create_subprocess_exec(
                self._command,
                str(source),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except FileNotFoundError as exc:
            raise ExecutableNotFoundError(self._command, exc) from exc
        except OSError as exc:
            raise LaunchError(self._command, exc) from exc

    async def run(self, source: Path, *, mode: ExecutionMode) -> Path:
        artifact = self.artifact_path_for(source)
        logger.debug("Running %s on %s [%s] -> %s", self._command, source, mode.label(), artifact)
        try:
            return await self._run(source, artifact, mode)
        except GdxViewerError:
            if self._settings.artifact_policy is ArtifactPolicy.DELETE:
                artifact.unlink(missing_ok=True)
            raise

    async def _run(self, source: Path, artifact: Path, mode: ExecutionMode) -> Path:
        try:
            artifact.parent.mkdir(parents=True, exist_ok=True)
            sink = artifact.open("wb")
        except OSError as exc:
            raise ArtifactError(artifact, exc) from exc

        with sink:
            process = await self._spawn(source, mode)
            stdout, stderr = process.stdout, process.stderr
            if stdout is None or stderr is None:
                raise LaunchError(self._command, "stdout/stderr pipes were not opened")

            stderr_task = asyncio.create_task(_read_tail(stderr, _STDERR_TAIL_BYTES))
            try:
                written = await _pump(stdout, sink)
            except OSError as exc:
                stderr_task.cancel()
                if process.returncode is None:
                    process.kill()
                await process.wait()
                await asyncio.gather(stderr_task, return_exceptions=True)
                raise ArtifactError(artifact, exc) from exc
            stderr_raw = await stderr_task
            returncode = await process.wait()

        stderr_text = stderr_raw.decode("utf-8", errors="replace")[-_STDERR_TAIL_CHARS:].strip()
        logger.info("%s exited with code %s (%d bytes written)", self._command, returncode, written)

        if returncode == 0:
            return artifact
        if stderr_text:
            logger.debug("%s stderr: %s", self._command, stderr_text)
        if mode.uses_shell and returncode in _SHELL_NOT_FOUND_CODES:
            raise ExecutableNotFoundError(self._command, stderr_text or f"shell exit code {returncode}")
        raise ExitError(self._command, returncode, stderr_text)
