"""Command-line interface for the task tracker."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.text import Text

from .config import ConfigModel, default_config_path, get_config, load_config, save_config
from .interpreter import CommandInterpreter
from .result import CommandResult
from .storage import Storage, StorageError
from .task_store import TaskStore
from .ui import get_console, show_banner, show_error, show_result

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(config: ConfigModel, verbose: bool = False) -> None:
    """Set up root logging from the config level or the verbose flag."""
    level = logging.DEBUG if verbose else logging.getLevelName(config.log_level)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger().setLevel(level)


class Session:
    """One interactive or scripted run: a store, its interpreter and storage.

    If the data file cannot be read it is copied aside before the session
    starts empty; when even that copy fails the session never writes.
    """

    def __init__(self, storage: Storage, autosave: bool = True):
        self.storage = storage
        self.autosave = autosave
        self.writable = True
        self.load_error: Optional[str] = None

        try:
            tasks = storage.load()
        except StorageError as e:
            self.load_error = str(e)
            self.writable = storage.backup() is not None
            tasks = []

        self.store = TaskStore(tasks)
        self.interpreter = CommandInterpreter(self.store)
        self.dirty = False

    def process(self, line: str) -> CommandResult:
        """Run one command line, saving afterwards when it changed the list."""
        result = self.interpreter.execute(line)
        if result.changed:
            self.dirty = True
            if self.autosave:
                self.save()
        return result

    def save(self) -> bool:
        if not self.dirty:
            return True
        if not self.writable:
            logger.error("Not saving over unreadable data file %s", self.storage.path)
            return False
        if self.storage.save(self.store.tasks):
            self.dirty = False
            return True
        return False


def report_load_problems(session: Session, console: Console) -> None:
    """Tell the user about an unreadable data file and where its copy went."""
    backup = session.storage.backup_path
    if session.load_error:
        if session.writable:
            detail = f"Starting with an empty list; the old file was copied to {backup}."
        else:
            detail = "Starting with an empty list; changes will not be saved."
        show_error(console, "Could not read your tasks.", f"{session.load_error}\n{detail}")
    elif backup is not None:
        show_error(
            console,
            "Some saved tasks could not be read and were left out.",
            f"The original file was copied to {backup}.",
        )


def get_session(ctx: click.Context) -> Session:
    """Build a session from the configuration stored on the context."""
    config: ConfigModel = ctx.obj["config"]
    data_file: Optional[str] = ctx.obj.get("data_file")
    storage = Storage(config, Path(data_file) if data_file else None)
    return Session(storage, autosave=config.autosave)


def run_shell(session: Session, console: Console, prompt: str) -> None:
    """Read commands until ``bye`` or end of input."""
    while True:
        try:
            line = console.input(prompt)
        except (EOFError, KeyboardInterrupt):
            console.print()
            break

        try:
            result = session.process(line)
        except Exception as e:
            logger.exception("Unexpected error while handling %r", line)
            show_error(console, f"Something went wrong: {e}")
            continue

        show_result(console, result)
        if result.exit_requested:
            break

    if not session.save():
        show_error(console, "Could not save your tasks.", str(session.storage.path))


@click.group(invoke_without_command=True)
@click.option("--config", type=click.Path(dir_okay=False), help="Path to config file")
@click.option("--data-file", type=click.Path(dir_okay=False), help="Path to the task data file")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.pass_context
def cli(ctx, config, data_file, verbose):
    """Task Tracker - keep todos, deadlines and events from the command line."""
    ctx.ensure_object(dict)
    ctx.obj["data_file"] = data_file
    ctx.obj["config_path"] = Path(config) if config else None

    try:
        if config:
            cfg = load_config(Path(config))
        else:
            cfg = get_config()
    except Exception as e:
        show_error(get_console(), f"Configuration error: {e}")
        sys.exit(1)

    ctx.obj["config"] = cfg
    configure_logging(cfg, verbose)

    if ctx.invoked_subcommand is None:
        ctx.invoke(shell)


@cli.command()
@click.pass_context
def shell(ctx):
    """Start an interactive session (the default)."""
    config: ConfigModel = ctx.obj["config"]
    console = get_console(no_color=config.no_color)
    session = get_session(ctx)

    if config.show_banner:
        show_banner(console)
    report_load_problems(session, console)
    run_shell(session, console, config.prompt)


@cli.command()
@click.argument("commands", nargs=-1, required=True)
@click.pass_context
def run(ctx, commands):
    """Run one or more commands, e.g. run "todo read book" list."""
    config: ConfigModel = ctx.obj["config"]
    console = get_console(no_color=config.no_color)
    session = get_session(ctx)
    report_load_problems(session, console)

    failed = False
    for line in commands:
        result = session.process(line)
        show_result(console, result)
        failed = failed or not result.ok
        if result.exit_requested:
            break

    if not session.save():
        show_error(console, "Could not save your tasks.", str(session.storage.path))
        sys.exit(1)
    if failed:
        sys.exit(1)


@cli.command("init-config")
@click.option("--force", is_flag=True, help="Overwrite an existing config file")
@click.pass_context
def init_config(ctx, force):
    """Write the current configuration to a YAML file."""
    config: ConfigModel = ctx.obj["config"]
    path = ctx.obj["config_path"] or default_config_path()
    console = get_console(no_color=config.no_color)

    if path.exists() and not force:
        show_error(console, f"{path} already exists.", "Use --force to overwrite it.")
        sys.exit(1)
    if not save_config(config, path):
        show_error(console, f"Could not write {path}.")
        sys.exit(1)
    console.print(Text(f"Configuration written to {path}", style="success"))


def main():
    """Console script entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
