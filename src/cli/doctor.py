"""Doctor command for environment diagnostics."""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from adapters.cli_host import detect_remote_name
from adapters.table_renderer import render_artifact
from core.config import AppSettings, write_user_env_vars
from core.domain.execution_mode import ExecutionMode

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_command(command: str) -> tuple[bool, str]:
    resolved = shutil.which(command)
    if resolved:
        return True, resolved
    return False, f"'{command}' not found on PATH"


def _check_temp_dir(temp_dir: Path | None) -> tuple[bool, str]:
    """Create and drop a scratch file where artifacts will be written."""

    target = temp_dir if temp_dir is not None else Path(tempfile.gettempdir())
    try:
        target.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(dir=target, suffix=".csv"):
            pass
        return True, str(target)
    except OSError as exc:
        return False, f"{target}: {exc}"


def _check_renderer() -> tuple[bool, str]:
    try:
        html = render_artifact("a,b\n1,2\n")
    except Exception as exc:
        return False, str(exc)
    return "<th>a</th>" in html, f"{len(html)} bytes"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="GDX Viewer Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    ok_cmd, detail_cmd = _check_command(settings.dump_command)
    table.add_row("Dump command", "OK" if ok_cmd else "FAIL", detail_cmd)

    remote_name = detect_remote_name()
    mode = settings.execution_mode or ExecutionMode.from_remote_name(remote_name)
    source = "config" if settings.execution_mode is not None else (remote_name or "local session")
    table.add_row("Execution mode", "OK", f"{mode.label()} [{source}]")

    ok_tmp, detail_tmp = _check_temp_dir(settings.temp_dir)
    table.add_row("Temp dir", "OK" if ok_tmp else "FAIL", detail_tmp)
    table.add_row("Artifact policy", "OK", settings.artifact_policy.value)

    ok_render, detail_render = _check_renderer()
    table.add_row("HTML renderer", "OK" if ok_render else "FAIL", detail_render)

    _console.print(table)

    if not ok_cmd:
        _console.print(
            "\n[yellow]Note:[/yellow] install GAMS (gdxdump ships with it) or run "
            "`gdx-viewer doctor setup-tool` to point at the executable."
        )
    if not (ok_cmd and ok_tmp and ok_render):
        raise typer.Exit(code=1)


@app.command(name="setup-tool")
def setup_tool() -> None:
    """Interactive gdxdump setup (stores config in the user config .env)."""

    settings = AppSettings()
    command = typer.prompt(
        "gdxdump command or path",
        default=settings.dump_command,
        show_default=True,
    ).strip()
    if not command:
        raise typer.BadParameter("command is required")

    ok, detail = _check_command(command)
    if not ok:
        _console.print(f"[yellow]Warning:[/yellow] {detail}; saving it anyway.")

    env_path = write_user_env_vars({"GDX_VIEWER_DUMP_COMMAND": command})
    _console.print(f"[green]Saved dump command to:[/green] {env_path}")
