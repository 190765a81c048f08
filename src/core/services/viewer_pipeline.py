"""GDX viewing orchestration utilities.

This module owns the single user-facing action: pick a file, run the dump
tool on it, read the temp artifact back, render it and hand the markup to the
host. Keeping it out of the CLI layer makes the flow reusable for any host
(terminal, editor integration, tests) and keeps side-effects behind the
`HostServices` contract.

Failures are caught once, here, and turned into exactly one notification.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

from adapters.dump_runner import GdxDumpRunner
from adapters.table_renderer import PANEL_TITLE, read_artifact, render_table_html, split_rows
from core.config import AppSettings
from core.domain.errors import ExecutableNotFoundError, GdxViewerError
from core.domain.execution_mode import ArtifactPolicy, ExecutionMode
from core.domain.models import TabularData, build_file_filters
from core.interfaces.dump_runner import DumpRunner
from core.interfaces.host import HostServices

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = (
    "The '{command}' command was not found. "
    "Please ensure that it is installed and available in your PATH."
)
GENERIC_MESSAGE = "Error processing GDX file: {detail}"


@dataclass
class ViewerResult:
    """Output of a successful pipeline run."""

    source: Path
    artifact: Path
    data: TabularData
    html: str


def resolve_execution_mode(settings: AppSettings, host: HostServices) -> ExecutionMode:
    """Explicit config wins; otherwise the host's session decides."""

    if settings.execution_mode is not None:
        return settings.execution_mode
    return ExecutionMode.from_remote_name(host.remote_name)


def describe_error(exc: BaseException) -> str:
    """User-facing message for a pipeline failure."""

    if isinstance(exc, ExecutableNotFoundError):
        return NOT_FOUND_MESSAGE.format(command=exc.command)
    return GENERIC_MESSAGE.format(detail=exc)


async def build_view(
    source: Path,
    *,
    settings: AppSettings,
    runner: DumpRunner,
    mode: ExecutionMode,
) -> ViewerResult:
    """Run the tool, read the finished artifact and render it.

    Raises the typed errors of `core.domain.errors`; nothing is rendered when
    the tool fails.
    """

    artifact = await runner.run(source, mode=mode)
    try:
        text = await asyncio.to_thread(read_artifact, artifact, encoding=settings.artifact_encoding)
    finally:
        if settings.artifact_policy is ArtifactPolicy.DELETE:
            artifact.unlink(missing_ok=True)

    data = split_rows(text)
    logger.debug("Parsed %d rows from %s", len(data.rows), artifact)
    return ViewerResult(source=source, artifact=artifact, data=data, html=render_table_html(data))


async def display_gdx_data(
    source: Path,
    *,
    settings: AppSettings,
    host: HostServices,
    runner: DumpRunner | None = None,
) -> ViewerResult | None:
    """Top-level handler: show the table or notify the failure (never both)."""

    runner = runner or GdxDumpRunner(settings)
    mode = resolve_execution_mode(settings, host)

    try:
        result = await build_view(source, settings=settings, runner=runner, mode=mode)
        host.show_panel(result.html, title=PANEL_TITLE)
    except GdxViewerError as exc:
        logger.error("Could not display %s: %s", source, exc)
        logger.debug("Pipeline failure details", exc_info=True)
        host.notify_error(describe_error(exc))
        return None
    except Exception as exc:
        logger.exception("Unexpected failure while displaying %s", source)
        host.notify_error(describe_error(exc))
        return None

    return result


async def open_file_action(
    *,
    settings: AppSettings,
    host: HostServices,
    runner: DumpRunner | None = None,
) -> ViewerResult | None:
    """The "open GDX file" command: dialog first, then the pipeline."""

    selected = await host.select_file(build_file_filters(settings.file_extensions))
    if selected is None:
        logger.debug("File selection cancelled")
        return None
    return await display_gdx_data(selected, settings=settings, host=host, runner=runner)
