"""Errores tipados del pipeline.

Por qué una jerarquía propia:
- El handler de la acción necesita distinguir "gdxdump no instalado" del
  resto de fallos para mostrar un mensaje accionable.
- Todo lo demás se reporta con un mensaje genérico que incluye el detalle.
"""

from __future__ import annotations

from pathlib import Path


class GdxViewerError(Exception):
    """Base de todos los errores esperables del visor."""


class LaunchError(GdxViewerError):
    """El ejecutable no pudo arrancar (permisos, binario inválido, etc.)."""

    def __init__(self, command: str, cause: BaseException | str) -> None:
        self.command = command
        self.cause = cause
        super().__init__(f"Unable to launch '{command}': {cause}")


class ExecutableNotFoundError(LaunchError):
    """El ejecutable no existe en el PATH del entorno de ejecución."""

    def __init__(self, command: str, cause: BaseException | str = "not found on PATH") -> None:
        super().__init__(command, cause)


class ExitError(GdxViewerError):
    """El ejecutable corrió pero terminó con código distinto de cero."""

    def __init__(self, command: str, exit_code: int, stderr: str = "") -> None:
        self.command = command
        self.exit_code = exit_code
        self.stderr = stderr
        super().__init__(f"{command} exited with code {exit_code}")


class ArtifactError(GdxViewerError):
    """Fallo de I/O al crear o leer el artefacto temporal."""

    def __init__(self, path: Path, cause: BaseException) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Could not access temp artifact {path}: {cause}")
