"""Host de terminal para el visor.

Por qué existe:
- Implementa `HostServices` sin editor: el diálogo es un argumento o un
  prompt, el panel es un archivo HTML (opcionalmente abierto en el
  navegador) y las notificaciones van a stderr.
"""

from __future__ import annotations

import asyncio
import os
import webbrowser
from pathlib import Path
from typing import Mapping, Sequence

import typer
from rich.console import Console
from rich.markup import escape

from core.domain.models import FileFilter


def detect_remote_name(environ: Mapping[str, str] | None = None) -> str | None:
    """Nombre de sesión remota, al estilo de `env.remoteName` de los IDEs."""

    env = os.environ if environ is None else environ
    if env.get("CODESPACES"):
        return "codespaces"
    if env.get("REMOTE_CONTAINERS"):
        return "dev-container"
    if env.get("SSH_CONNECTION") or env.get("SSH_TTY"):
        return "ssh-remote"
    return None


def describe_filters(filters: Sequence[FileFilter]) -> str:
    parts = []
    for f in filters:
        patterns = " ".join("*" if ext == "*" else f"*.{ext}" for ext in f.extensions)
        parts.append(f"{f.name} ({patterns})")
    return ", ".join(parts)


class CliHost:
    """`HostServices` para la CLI."""

    def __init__(
        self,
        *,
        console: Console,
        error_console: Console | None = None,
        path: Path | None = None,
        output_path: Path | None = None,
        open_browser: bool = False,
        remote_name: str | None = None,
    ) -> None:
        self._console = console
        self._error_console = error_console or Console(stderr=True)
        self._path = path
        self._output_path = output_path
        self._open_browser = open_browser
        self.remote_name = remote_name
        self.selected: Path | None = None
        self.panel_path: Path | None = None
        self.errors: list[str] = []

    async def select_file(self, filters: Sequence[FileFilter]) -> Path | None:
        if self._path is None:
            answer = await asyncio.to_thread(
                typer.prompt,
                f"Open GDX File [{describe_filters(filters)}]",
                default="",
                show_default=False,
            )
            answer = answer.strip()
            if not answer:
                return None
            self._path = Path(answer).expanduser()

        self.selected = self._path
        return self._path

    def _default_output_path(self) -> Path:
        name = self.selected.name if self.selected else "gdx-viewer"
        return Path.cwd() / f"{name}.html"

    def show_panel(self, html: str, *, title: str) -> None:
        output_path = self._output_path or self._default_output_path()
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(html, encoding="utf-8")
        self.panel_path = output_path
        self._console.print(f"[green]{escape(title)} saved to:[/green] {escape(str(output_path))}")
        if self._open_browser:
            webbrowser.open(output_path.resolve().as_uri())

    def notify_error(self, message: str) -> None:
        self.errors.append(message)
        self._error_console.print(f"[red]{escape(message)}[/red]")
