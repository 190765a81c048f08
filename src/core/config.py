"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que adaptadores (runner/renderer) lean config de forma consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.execution_mode import ArtifactPolicy, ExecutionMode


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias).

    Objetivo: que `doctor setup-tool` guarde la ruta de gdxdump sin editar `.env`
    en el proyecto.
    """

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "gdx-viewer"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "gdx-viewer"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "gdx-viewer"
    return Path.home() / ".config" / "gdx-viewer"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# GDX Viewer user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="GDX_VIEWER_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    dump_command: str = Field(
        default="gdxdump",
        min_length=1,
        description="Ejecutable de conversión (nombre en PATH o ruta absoluta).",
    )
    artifact_suffix: str = Field(
        default=".csv",
        min_length=1,
        description="Sufijo añadido al nombre base del .gdx para el artefacto temporal.",
    )
    temp_dir: Path | None = Field(
        default=None,
        description="Directorio del artefacto; None usa el temp del sistema.",
    )
    execution_mode: ExecutionMode | None = Field(
        default=None,
        description="local/remote; None lo deduce de la sesión del host.",
    )
    artifact_policy: ArtifactPolicy = Field(
        default=ArtifactPolicy.KEEP,
        description="keep deja el artefacto en disco; delete lo borra tras leerlo.",
    )
    artifact_encoding: str = Field(
        default="utf-8",
        min_length=1,
        description="Encoding con el que se lee la salida de gdxdump.",
    )
    file_extensions: list[str] = Field(
        default_factory=lambda: ["gdx"],
        description="Extensiones ofrecidas por el diálogo de apertura.",
    )
    log_level: str = Field(
        default="WARNING",
        min_length=1,
        description="Nivel de logging de la CLI (DEBUG, INFO, WARNING, ...).",
    )
