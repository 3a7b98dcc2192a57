"""Tests for the gsync CLI."""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from gsync.cli import main
from gsync.exceptions import TransferError
from gsync.schemas import MappedPath

COMMIT_OUTPUT = (
    "M\tsrc/app/a.go\n"
    "D\tsrc/app/b.go\n"
    "R087\told/c.go\tsrc/app/c.go\n"
    "M\tdocs/notes.md\n"
    "M\tsrc/app/debug.log"
)


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "gsync.json"
    path.write_text(
        json.dumps(
            {"dir_map": [["src/app", "/remote/app"]], "ignored": [r"\.log$"]}
        )
    )
    return str(path)


@pytest.fixture
def backend(canned_backend, tmp_path):
    return canned_backend(
        diffs={("abc123",): COMMIT_OUTPUT}, repo_root=str(tmp_path)
    )


@pytest.fixture(autouse=True)
def repository(tmp_path, backend):
    with patch("gsync.cli.find_repo_root", return_value=tmp_path), patch(
        "gsync.cli.GitBackend", return_value=backend
    ):
        yield


@pytest.fixture
def mock_transfer():
    with patch("gsync.cli.SshTransfer") as mock_transfer_class:
        yield mock_transfer_class.return_value


def invoke(runner, config_file, *args, input=None):
    return runner.invoke(
        main,
        ["-c", config_file, "-s", ".", "-d", "deploy@example.com", *args],
        input=input,
    )


class TestPlanOutput:
    """Plan printing."""

    def test_dry_run_prints_plan(self, runner, config_file, mock_transfer):
        result = invoke(runner, config_file, "--dry-run", "abc123")

        assert result.exit_code == 0, result.output
        assert "Following files are ignored:\nsrc/app/debug.log" in result.output
        assert "Following files will be updated:" in result.output
        assert "1. src/app/a.go --> /remote/app/a.go" in result.output
        assert "2. src/app/c.go --> /remote/app/c.go" in result.output
        assert "Following files have no configured remote dir:\ndocs/notes.md" in result.output
        assert "src/app/b.go" not in result.output
        mock_transfer.push.assert_not_called()

    def test_nothing_to_update(self, runner, config_file, mock_transfer):
        result = invoke(runner, config_file, "..")

        assert result.exit_code == 0, result.output
        assert "No file will be updated, exit." in result.output
        mock_transfer.push.assert_not_called()

    def test_failed_specifier_is_reported(self, runner, config_file, mock_transfer):
        result = invoke(runner, config_file, "--dry-run", "a..b..c", "abc123")

        assert result.exit_code == 0, result.output
        assert "Following commits could not be read:" in result.output
        assert "a..b..c" in result.output
        assert "1. src/app/a.go --> /remote/app/a.go" in result.output


class TestStartupErrors:
    """Fatal configuration errors."""

    def test_missing_config(self, runner, tmp_path):
        result = invoke(runner, str(tmp_path / "missing.json"), "abc123")

        assert result.exit_code == 1
        assert "does not exist" in result.output

    def test_invalid_regex(self, runner, tmp_path, backend):
        path = tmp_path / "bad.json"
        path.write_text('{"dir_map": [["src/(", "/srv"]]}')

        result = invoke(runner, str(path), "abc123")

        assert result.exit_code == 1
        assert "src/(" in result.output
        assert backend.calls == []

    def test_missing_destination(self, runner, config_file):
        result = runner.invoke(main, ["-c", config_file, "abc123"])

        assert result.exit_code == 2
        assert "destination" in result.output

    def test_invalid_destination(self, runner, config_file):
        result = runner.invoke(main, ["-c", config_file, "-d", "a@b@c", "abc123"])

        assert result.exit_code == 1
        assert "Failed to parse destination" in result.output


class TestConfirmation:
    """Operator confirmation and transfer."""

    def test_decline(self, runner, config_file, mock_transfer):
        result = invoke(runner, config_file, "abc123", input="n\n")

        assert result.exit_code == 0, result.output
        assert "Update cancelled." in result.output
        mock_transfer.push.assert_not_called()

    def test_accept_all(self, runner, config_file, mock_transfer, tmp_path):
        result = invoke(runner, config_file, "abc123", input="y\n")

        assert result.exit_code == 0, result.output
        assert "Done!" in result.output
        repo_root, entries = mock_transfer.push.call_args.args
        assert repo_root == tmp_path
        assert entries == [
            MappedPath(source="src/app/a.go", destination="/remote/app/a.go"),
            MappedPath(source="src/app/c.go", destination="/remote/app/c.go"),
        ]

    def test_pick_by_line_number(self, runner, config_file, mock_transfer):
        result = invoke(runner, config_file, "abc123", input="2\n")

        assert result.exit_code == 0, result.output
        _, entries = mock_transfer.push.call_args.args
        assert entries == [
            MappedPath(source="src/app/c.go", destination="/remote/app/c.go")
        ]

    def test_yes_flag_skips_prompt(self, runner, config_file, mock_transfer):
        result = invoke(runner, config_file, "--yes", "abc123")

        assert result.exit_code == 0, result.output
        assert "Update remote files?" not in result.output
        assert len(mock_transfer.push.call_args.args[1]) == 2

    def test_invalid_line_number(self, runner, config_file, mock_transfer):
        result = invoke(runner, config_file, "abc123", input="7\n")

        assert result.exit_code == 1
        assert "Invalid line numbers!" in result.output
        mock_transfer.push.assert_not_called()

    def test_connection_failure(self, runner, config_file, mock_transfer):
        mock_transfer.__enter__.side_effect = TransferError(
            "Failed to connect to deploy@example.com: timed out"
        )

        result = invoke(runner, config_file, "--yes", "abc123")

        assert result.exit_code == 1
        assert "Failed to connect" in result.output
        assert "Done!" not in result.output
