"""
Tests for settings, the user .env writer and small domain helpers.

Run with: pytest tests/test_config.py -v
"""

import sys

import pytest

from adapters.cli_host import describe_filters, detect_remote_name
from core.config import AppSettings, get_user_config_dir, write_user_env_vars
from core.domain.execution_mode import ArtifactPolicy, ExecutionMode
from core.domain.models import FileFilter, build_file_filters


class TestAppSettings:
    """Test defaults and env overrides."""

    def test_defaults(self, clean_env):
        """Should match the original tool's behavior out of the box."""
        settings = AppSettings(_env_file=None)
        assert settings.dump_command == "gdxdump"
        assert settings.artifact_suffix == ".csv"
        assert settings.temp_dir is None
        assert settings.execution_mode is None
        assert settings.artifact_policy is ArtifactPolicy.KEEP
        assert settings.file_extensions == ["gdx"]

    def test_env_overrides(self, clean_env, tmp_path):
        """Should read GDX_VIEWER_* variables."""
        clean_env.setenv("GDX_VIEWER_DUMP_COMMAND", "/opt/gams/gdxdump")
        clean_env.setenv("GDX_VIEWER_EXECUTION_MODE", "remote")
        clean_env.setenv("GDX_VIEWER_ARTIFACT_POLICY", "delete")
        clean_env.setenv("GDX_VIEWER_TEMP_DIR", str(tmp_path))

        settings = AppSettings(_env_file=None)
        assert settings.dump_command == "/opt/gams/gdxdump"
        assert settings.execution_mode is ExecutionMode.REMOTE
        assert settings.artifact_policy is ArtifactPolicy.DELETE
        assert settings.temp_dir == tmp_path

    def test_rejects_unknown_mode(self, clean_env):
        """Should fail validation for an unknown execution mode."""
        clean_env.setenv("GDX_VIEWER_EXECUTION_MODE", "sideways")
        with pytest.raises(ValueError):
            AppSettings(_env_file=None)


class TestUserEnvFile:
    """Test persisting values to the user .env."""

    def test_merges_existing_values(self, tmp_path):
        """Should keep unrelated keys and update the given ones."""
        env_path = tmp_path / "cfg" / ".env"
        env_path.parent.mkdir()
        env_path.write_text("# comment\nGDX_VIEWER_LOG_LEVEL=INFO\nGDX_VIEWER_DUMP_COMMAND='old'\n", encoding="utf-8")

        write_user_env_vars({"GDX_VIEWER_DUMP_COMMAND": "/usr/local/bin/gdxdump"}, env_path=env_path)

        lines = env_path.read_text(encoding="utf-8").splitlines()
        assert "GDX_VIEWER_DUMP_COMMAND=/usr/local/bin/gdxdump" in lines
        assert "GDX_VIEWER_LOG_LEVEL=INFO" in lines

    @pytest.mark.skipif(sys.platform.startswith("win") or sys.platform == "darwin", reason="XDG layout only")
    def test_user_config_dir_honors_xdg(self, monkeypatch, tmp_path):
        """Should live under XDG_CONFIG_HOME when set."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert get_user_config_dir() == tmp_path / "gdx-viewer"


class TestDomainHelpers:
    """Test execution mode and dialog filters."""

    def test_mode_from_remote_name(self):
        """Should treat any remote name as remote."""
        assert ExecutionMode.from_remote_name(None) is ExecutionMode.LOCAL
        assert ExecutionMode.from_remote_name("") is ExecutionMode.LOCAL
        assert ExecutionMode.from_remote_name("dev-container") is ExecutionMode.REMOTE
        assert ExecutionMode.LOCAL.uses_shell
        assert not ExecutionMode.REMOTE.uses_shell

    def test_build_file_filters(self):
        """Should normalize extensions and append the all-files fallback."""
        filters = build_file_filters([".GDX", "gdx", " "])
        assert filters[0] == FileFilter(name="GDX Files", extensions=("GDX", "gdx"))
        assert filters[-1].extensions == ("*",)
        assert describe_filters(filters) == "GDX Files (*.GDX *.gdx), All Files (*)"

    def test_no_extensions_leaves_all_files_only(self):
        """Should still offer the all-files filter."""
        assert [f.name for f in build_file_filters([])] == ["All Files"]

    @pytest.mark.parametrize(
        ("environ", "expected"),
        [
            ({}, None),
            ({"SSH_CONNECTION": "10.0.0.1 5000 10.0.0.2 22"}, "ssh-remote"),
            ({"REMOTE_CONTAINERS": "true"}, "dev-container"),
            ({"CODESPACES": "true", "SSH_CONNECTION": "x"}, "codespaces"),
        ],
    )
    def test_detect_remote_name(self, environ, expected):
        """Should mirror the editor's remote session names."""
        assert detect_remote_name(environ) == expected
