"""CLI principal (Typer).

Comandos:
- `open`: el equivalente de "Open GDX File" del editor.
- `doctor`: diagnóstico del entorno y configuración de gdxdump.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console

from adapters.cli_host import CliHost, detect_remote_name
from cli import doctor
from cli.logging_setup import configure_logging
from cli.ui_components import build_preview_table, print_banner
from core.config import AppSettings
from core.domain.execution_mode import ExecutionMode
from core.services.viewer_pipeline import open_file_action

app = typer.Typer(no_args_is_help=True, help="Render gdxdump output as an HTML table.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


@app.command(name="open")
def open_file(
    file: Path | None = typer.Argument(
        None,
        help="GDX file to dump. Prompts for a path when omitted.",
    ),
    output: Path | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Where to write the HTML table (default: ./<file>.html).",
    ),
    remote: bool | None = typer.Option(
        None,
        "--remote/--local",
        help="Spawn gdxdump directly (remote) or through the shell (local). Auto-detected by default.",
    ),
    browser: bool = typer.Option(False, "--browser", help="Open the HTML table in the default browser."),
    preview: int = typer.Option(0, "--preview", min=0, help="Print the first N rows in the terminal."),
    banner: bool = typer.Option(True, "--banner/--no-banner", help="Show the welcome banner."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Dump a GDX file with gdxdump and render it as an HTML table."""

    settings = AppSettings()
    if remote is not None:
        mode = ExecutionMode.REMOTE if remote else ExecutionMode.LOCAL
        settings = settings.model_copy(update={"execution_mode": mode})

    configure_logging("DEBUG" if verbose else settings.log_level, console=_err_console)
    if banner:
        print_banner(_console)

    host = CliHost(
        console=_console,
        error_console=_err_console,
        path=file,
        output_path=output,
        open_browser=browser,
        remote_name=detect_remote_name(),
    )
    result = asyncio.run(open_file_action(settings=settings, host=host))

    if host.errors:
        raise typer.Exit(code=1)
    if result is None:
        _console.print("[yellow]No file selected.[/yellow]")
        return
    if preview:
        _console.print(build_preview_table(result.data, limit=preview))


def run() -> None:
    app()


if __name__ == "__main__":
    run()
