"""Tests for the command-line interface."""

import pytest
from click.testing import CliRunner

from task_tracker.cli import Session, cli
from task_tracker.storage import Storage
from task_tracker.task import Todo


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def cli_args(tmp_path):
    """Global options pointing the CLI at temporary files."""
    return [
        "--config", str(tmp_path / "config.yaml"),
        "--data-file", str(tmp_path / "tasks.md"),
    ]


class TestRunCommand:
    """Test the non-interactive run command."""

    def test_run_adds_and_saves(self, runner, cli_args, tmp_path, config):
        result = runner.invoke(cli, cli_args + ["run", "todo read book", "list"])

        assert result.exit_code == 0
        assert "Got it. I've added this task:" in result.output
        assert "1. [T][ ] read book" in result.output
        assert Storage(config, tmp_path / "tasks.md").load() == [Todo("read book")]

    def test_run_reports_errors(self, runner, cli_args):
        result = runner.invoke(cli, cli_args + ["run", "list"])

        assert result.exit_code == 1
        assert "Your list is empty" in result.output

    def test_tasks_persist_between_runs(self, runner, cli_args):
        runner.invoke(cli, cli_args + ["run", "todo one", "todo two"])
        runner.invoke(cli, cli_args + ["run", "done 2"])

        result = runner.invoke(cli, cli_args + ["run", "list"])

        assert "1. [T][ ] one" in result.output
        assert "2. [T][X] two" in result.output


class TestShell:
    """Test the interactive loop."""

    def test_shell_session(self, runner, cli_args, tmp_path, config):
        result = runner.invoke(
            cli, cli_args + ["shell"],
            input="todo read book\n\nfoo\nlist\nbye\ntodo never read\n",
        )

        assert result.exit_code == 0
        assert "Task Tracker" in result.output
        assert "Please type a command." in result.output
        assert "I'm sorry, but I don't know what that means." in result.output
        assert "1. [T][ ] read book" in result.output
        assert "Bye. Hope to see you again soon!" in result.output
        assert Storage(config, tmp_path / "tasks.md").load() == [Todo("read book")]

    def test_shell_is_default(self, runner, cli_args):
        result = runner.invoke(cli, cli_args, input="bye\n")

        assert result.exit_code == 0
        assert "Bye." in result.output

    def test_shell_ends_on_eof(self, runner, cli_args):
        result = runner.invoke(cli, cli_args + ["shell"], input="todo read book\n")
        assert result.exit_code == 0


class TestInitConfig:
    """Test writing a configuration file."""

    def test_writes_file(self, runner, cli_args, tmp_path):
        result = runner.invoke(cli, cli_args + ["init-config"])

        assert result.exit_code == 0
        assert (tmp_path / "config.yaml").exists()

    def test_refuses_to_overwrite(self, runner, cli_args, tmp_path):
        (tmp_path / "config.yaml").write_text("prompt: '$ '\n")

        result = runner.invoke(cli, cli_args + ["init-config"])

        assert result.exit_code == 1
        assert (tmp_path / "config.yaml").read_text() == "prompt: '$ '\n"


class TestSession:
    """Test saving behavior of a session."""

    def test_autosave_off_saves_on_request(self, config, tmp_path):
        storage = Storage(config, tmp_path / "tasks.md")
        session = Session(storage, autosave=False)

        session.process("todo read book")
        assert not storage.path.exists()
        assert session.dirty

        assert session.save()
        assert storage.load() == [Todo("read book")]
        assert not session.dirty

    def test_queries_do_not_mark_dirty(self, config, tmp_path):
        session = Session(Storage(config, tmp_path / "tasks.md"))
        session.process("list")
        session.process("find x")
        assert not session.dirty


class TestUnreadableData:
    """Test that a data file the session cannot read is never lost."""

    def test_corrupt_file_is_copied_before_saving(self, runner, cli_args, tmp_path):
        data_file = tmp_path / "tasks.md"
        original = b"- [ ] T | keep me \xff\n- [ ] T | second\n"
        data_file.write_bytes(original)

        result = runner.invoke(cli, cli_args + ["run", "todo new"])

        assert "Could not read your tasks." in result.output
        backups = list(tmp_path.glob("tasks.md.*.bak"))
        assert len(backups) == 1
        assert backups[0].read_bytes() == original

    def test_session_refuses_to_save_without_backup(self, config, tmp_path, monkeypatch):
        data_file = tmp_path / "tasks.md"
        data_file.write_bytes(b"\xff\xfe")
        storage = Storage(config, data_file)
        monkeypatch.setattr(storage, "backup", lambda: None)

        session = Session(storage)
        session.process("todo new")

        assert not session.writable
        assert session.load_error
        assert not session.save()
        assert data_file.read_bytes() == b"\xff\xfe"

    def test_skipped_lines_reported(self, runner, cli_args, tmp_path):
        (tmp_path / "tasks.md").write_text("- [ ] T | keep me\n- [ ] E | party | soon\n")

        result = runner.invoke(cli, cli_args + ["run", "list"])

        assert "Some saved tasks could not be read" in result.output
        assert "1. [T][ ] keep me" in result.output
        assert len(list(tmp_path.glob("tasks.md.*.bak"))) == 1


def test_init_config_path_with_brackets(runner, tmp_path):
    path = tmp_path / "[conf]" / "config.yaml"

    result = runner.invoke(cli, ["--config", str(path), "init-config"])

    assert result.exit_code == 0
    assert path.exists()
    assert "[conf]" in result.output.replace("\n", "")
