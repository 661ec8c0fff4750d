import importlib
import json
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from monoprep.commands import cli
from monoprep.commands.utils import (
    EXIT_CLASSIFICATION_ERROR,
    EXIT_CONFIG_ERROR,
    EXIT_INSTALL_FAILED,
    exit_code_for,
)
from monoprep.errors import ClassificationError, IOFailure


@pytest.fixture
def runner():
    """Create a CliRunner for testing."""
    return CliRunner()


def _invoke(runner, workspace_root, *args):
    return runner.invoke(
        cli, ["--config", str(workspace_root / "monoprep.json"), *args]
    )


class TestGenerate:
    """Test the generate command."""

    def test_generate(self, runner, workspace_root):
        with patch("monoprep.engine.orchestration.run_command", return_value=0) as mock_run:
            result = _invoke(runner, workspace_root, "generate")

        assert result.exit_code == 0, result.output
        assert "finished successfully" in result.output
        assert [call.args[0][-1] for call in mock_run.call_args_list] == [
            "install",
            "shrinkwrap",
        ]

        common = workspace_root / "common"
        web = json.loads(
            (common / "temp_modules" / "monoprep-web" / "package.json").read_text()
        )
        assert web == {
            "name": "monoprep-web",
            "version": "0.0.0",
            "private": True,
            "dependencies": {"react": "^18.0.0"},
            "optionalDependencies": {"@acme/widgets": "^1.2.0"},
        }
        aggregate = json.loads((common / "package.json").read_text())
        assert list(aggregate["dependencies"]) == ["monoprep-widgets", "monoprep-web"]

    def test_generate_debug_lists_written_manifests(self, runner, workspace_root):
        generate_module = importlib.import_module("monoprep.commands.generate")
        with patch("monoprep.engine.orchestration.run_command", return_value=0), \
                patch.object(generate_module, "_logging") as mock_logging:
            result = runner.invoke(
                cli,
                ["--debug", "--config", str(workspace_root / "monoprep.json"), "generate"],
            )

        assert result.exit_code == 0, result.output
        messages = [call.args[0] for call in mock_logging.debug.call_args_list]
        common = workspace_root.resolve() / "common"
        assert messages == [
            f"Wrote {common / 'temp_modules' / 'monoprep-widgets' / 'package.json'}",
            f"Wrote {common / 'temp_modules' / 'monoprep-web' / 'package.json'}",
            f"Wrote {common / 'package.json'}",
        ]

    def test_generate_fast_skips_shrinkwrap(self, runner, workspace_root):
        installed = workspace_root / "common" / "node_modules"
        (installed / "monoprep-web").mkdir(parents=True)
        (installed / "react").mkdir()

        with patch("monoprep.engine.orchestration.run_command", return_value=0) as mock_run:
            result = _invoke(runner, workspace_root, "generate", "--fast")

        assert result.exit_code == 0, result.output
        assert 'Skipping "npm shrinkwrap"' in result.output
        assert len(mock_run.call_args_list) == 1
        assert not (installed / "monoprep-web").exists()
        assert (installed / "react").exists()

    def test_lazy_alias(self, runner, workspace_root):
        with patch("monoprep.engine.orchestration.run_command", return_value=0) as mock_run:
            result = _invoke(runner, workspace_root, "generate", "-l")

        assert result.exit_code == 0, result.output
        assert len(mock_run.call_args_list) == 1

    def test_install_failure(self, runner, workspace_root):
        with patch("monoprep.engine.orchestration.run_command", return_value=1):
            result = _invoke(runner, workspace_root, "generate")

        assert result.exit_code == EXIT_INSTALL_FAILED
        assert "npm install" in result.output
        assert "exit status 1" in result.output

    def test_dry_run_writes_nothing(self, runner, workspace_root):
        with patch("monoprep.engine.orchestration.run_command") as mock_run:
            result = _invoke(runner, workspace_root, "generate", "--dry-run")

        assert result.exit_code == 0, result.output
        assert "Consolidation Plan (full reset)" in result.output
        assert "@acme/widgets ^1.2.0 (local)" in result.output
        assert not (workspace_root / "common").exists()
        mock_run.assert_not_called()

    def test_empty_registry(self, runner, temp_dir):
        # Scenario C
        (temp_dir / "monoprep.json").write_text('{"projects": []}')

        result = _invoke(runner, temp_dir, "generate")

        assert result.exit_code == EXIT_CONFIG_ERROR
        assert "Error:" in result.output
        assert not (temp_dir / "common").exists()

    def test_malformed_version_range(self, runner, workspace_root):
        path = workspace_root / "apps" / "web" / "package.json"
        path.write_text(json.dumps({"name": "web", "dependencies": {"react": ""}}))

        result = _invoke(runner, workspace_root, "generate")

        assert result.exit_code == EXIT_CLASSIFICATION_ERROR
        assert "react" in result.output
        assert not (workspace_root / "common").exists()


class TestList:
    def test_list(self, runner, workspace_root):
        result = _invoke(runner, workspace_root, "list")

        assert result.exit_code == 0, result.output
        assert "@acme/widgets: monoprep-widgets" in result.output
        assert "web: monoprep-web" in result.output

    def test_list_verbose(self, runner, workspace_root):
        result = _invoke(runner, workspace_root, "list", "--verbose")

        assert result.exit_code == 0, result.output
        assert "Local dependencies: @acme/widgets" in result.output
        assert "Local dependencies: none" in result.output


class TestConfigCommands:
    def test_check(self, runner, workspace_root):
        result = runner.invoke(cli, ["config", "check", str(workspace_root / "monoprep.json")])

        assert result.exit_code == 0, result.output
        assert "2 projects" in result.output

    def test_check_invalid(self, runner, temp_dir):
        path = temp_dir / "monoprep.json"
        path.write_text('{"projects": [{"packageName": "a"}]}')

        result = runner.invoke(cli, ["config", "check", str(path)])

        assert result.exit_code == EXIT_CONFIG_ERROR
        assert "projectFolder is required" in result.output

    def test_fmt_stdout(self, runner, workspace_root):
        result = runner.invoke(cli, ["config", "fmt", str(workspace_root / "monoprep.json")])

        assert result.exit_code == 0, result.output
        assert "//" not in result.output
        assert json.loads(result.output)["projects"][1]["packageName"] == "web"

    def test_fmt_write(self, runner, workspace_root):
        path = workspace_root / "monoprep.json"

        result = runner.invoke(cli, ["config", "fmt", str(path), "--write"])

        assert result.exit_code == 0, result.output
        assert "Formatted" in result.output
        assert "//" not in path.read_text()
        assert path.read_text().endswith("}\n")

    def test_fmt_write_keeps_non_ascii(self, runner, temp_dir):
        path = temp_dir / "monoprep.json"
        path.write_text(
            '{"projects": [{"packageName": "caf\u00e9", "projectFolder": "libs/caf\u00e9"},]}',
            encoding="utf-8",
        )

        result = runner.invoke(cli, ["config", "fmt", str(path), "--write"])

        assert result.exit_code == 0, result.output
        assert "caf\u00e9".encode("utf-8") in path.read_bytes()
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["projects"][0]["packageName"] == "caf\u00e9"

    def test_fmt_file_not_found(self, runner):
        result = runner.invoke(cli, ["config", "fmt", "/nonexistent/path/monoprep.json"])

        assert result.exit_code == 1
        assert "File not found" in result.output


def test_exit_code_for():
    assert exit_code_for(ClassificationError("bad", project="a")) == EXIT_CLASSIFICATION_ERROR
    assert exit_code_for(IOFailure("Failed to write manifest", Path("x"))) == 6
