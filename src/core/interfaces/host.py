"""Contrato del host (IDE, CLI, tests).

Por qué Protocol:
- El pipeline no sabe si corre dentro de un editor, en una terminal o en un
  test; solo necesita tres capacidades del host.
- Permite que los hosts sean intercambiables y testeables sin herencia rígida.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, Sequence, runtime_checkable

from core.domain.models import FileFilter


@runtime_checkable
class HostServices(Protocol):
    """Servicios que el host presta al visor.

    Reglas de diseño:
    - `select_file` es asíncrono porque típicamente espera al usuario.
    - `show_panel` y `notify_error` no bloquean.
    - `remote_name` es None en sesiones locales (equivale a `env.remoteName`).
    """

    remote_name: str | None

    async def select_file(self, filters: Sequence[FileFilter]) -> Path | None:
        """Pide un archivo al usuario; None si cancela."""

        ...

    def show_panel(self, html: str, *, title: str) -> None:
        """Muestra el documento HTML en un panel del host."""

        ...

    def notify_error(self, message: str) -> None:
        """Notificación de error no bloqueante."""

        ...
