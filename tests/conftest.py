import os
import stat
import sys
from pathlib import Path

import pytest

from core.config import AppSettings


# Emits the source file verbatim, or fails with `EXIT <code> [<noise>]` as first
# line (optionally writing <noise> bytes of stderr before the failure message).
# `GATE <path>` as first line: emit the next line, then wait for <path> to
# exist before emitting the rest.
FAKE_GDXDUMP = """#!{python}
import os
import sys
import time

if len(sys.argv) != 2:
    sys.stderr.write("usage: fake-gdxdump <file>\\n")
    sys.exit(64)

with open(sys.argv[1], encoding="utf-8", newline="") as handle:
    text = handle.read()

if text.startswith("EXIT "):
    fields = text.split("\\n", 1)[0].split()
    if len(fields) > 2:
        sys.stderr.write("x" * int(fields[2]))
    sys.stderr.write("fake failure\\n")
    sys.exit(int(fields[1]))

if text.startswith("GATE "):
    gate, _, text = text[len("GATE "):].partition("\\n")
    first, _, rest = text.partition("\\n")
    sys.stdout.write(first + "\\n")
    sys.stdout.flush()
    deadline = time.monotonic() + 10
    while not os.path.exists(gate) and time.monotonic() < deadline:
        time.sleep(0.02)
    text = rest

sys.stdout.write(text)
"""


@pytest.fixture
def fake_gdxdump(tmp_path: Path) -> Path:
    """Executable stand-in for gdxdump."""
    if sys.platform.startswith("win"):
        pytest.skip("fake gdxdump relies on a POSIX shebang")
    tool = tmp_path / "bin" / "fake-gdxdump"
    tool.parent.mkdir()
    tool.write_text(FAKE_GDXDUMP.format(python=sys.executable), encoding="utf-8")
    tool.chmod(tool.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return tool


@pytest.fixture
def make_source(tmp_path: Path):
    """Factory writing a `.gdx` file whose content the fake tool echoes."""

    def _make(content: str, name: str = "model.gdx", folder: str = "data") -> Path:
        target = tmp_path / folder / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8", newline="")
        return target

    return _make


@pytest.fixture
def settings(tmp_path: Path, fake_gdxdump: Path) -> AppSettings:
    return AppSettings(
        _env_file=None,
        dump_command=str(fake_gdxdump),
        temp_dir=tmp_path / "tmp",
    )


class FakeHost:
    """Records what the pipeline asks of the host."""

    def __init__(self, selection: Path | None = None, remote_name: str | None = None):
        self.selection = selection
        self.remote_name = remote_name
        self.filters_seen: list = []
        self.panels: list[tuple[str, str]] = []
        self.errors: list[str] = []

    async def select_file(self, filters):
        self.filters_seen = list(filters)
        return self.selection

    def show_panel(self, html: str, *, title: str) -> None:
        self.panels.append((title, html))

    def notify_error(self, message: str) -> None:
        self.errors.append(message)


class FakeRunner:
    """Returns a canned artifact or raises a canned error."""

    def __init__(self, artifact: Path | None = None, error: Exception | None = None):
        self.artifact = artifact
        self.error = error
        self.calls: list = []

    async def run(self, source, *, mode):
        self.calls.append((source, mode))
        if self.error is not None:
            raise self.error
        return self.artifact


@pytest.fixture
def fake_host():
    return FakeHost


@pytest.fixture
def fake_runner():
    return FakeRunner


@pytest.fixture
def clean_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith("GDX_VIEWER_"):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch
