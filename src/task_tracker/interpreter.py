"""Turns one line of user input into a task store operation."""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Tuple

from .result import CommandResult, ErrorKind
from .task_store import TaskStore

logger = logging.getLogger(__name__)

CommandHandler = Callable[[str], CommandResult]


@dataclass(frozen=True)
class CommandSpec:
    """A recognized command keyword."""
    name: str
    handler: CommandHandler
    usage: str
    help_text: str
    requires_argument: bool = False


def split_command(line: str) -> Tuple[str, str]:
    """Split a line into its command word and the rest of the line.

    The rest keeps its internal spacing; only the whitespace run after the
    command word is dropped. Surrounding whitespace of the line is ignored.
    """
    parts = line.strip().split(None, 1)
    if not parts:
        return "", ""
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1]


def last_token(text: str) -> str:
    """Last whitespace-separated token of ``text``."""
    return text.split()[-1]


class CommandInterpreter:
    """Dispatches command lines to a :class:`TaskStore`.

    Every failure comes back as a :class:`CommandResult` carrying the error;
    nothing a user types can make :meth:`execute` raise.
    """

    def __init__(self, store: TaskStore):
        self.store = store
        self._commands: Dict[str, CommandSpec] = {}
        self._register_defaults()

    def register(self, spec: CommandSpec) -> None:
        self._commands[spec.name] = spec

    @property
    def commands(self) -> List[CommandSpec]:
        return list(self._commands.values())

    def _register_defaults(self) -> None:
        store = self.store
        self.register(CommandSpec(
            "list", lambda rest: store.display_list(),
            "list", "Show every task in the list",
        ))
        self.register(CommandSpec(
            "todo", store.add_todo,
            "todo <description>", "Add a todo",
            requires_argument=True,
        ))
        self.register(CommandSpec(
            "deadline", store.add_deadline,
            "deadline <description> /by yyyy/MM/dd HHmm", "Add a deadline",
            requires_argument=True,
        ))
        self.register(CommandSpec(
            "event", store.add_event,
            "event <description> /at yyyy/MM/dd HHmm-HHmm", "Add an event",
            requires_argument=True,
        ))
        self.register(CommandSpec(
            "done", lambda rest: store.mark_done(last_token(rest)),
            "done <task number>", "Mark a task as done",
            requires_argument=True,
        ))
        self.register(CommandSpec(
            "delete", lambda rest: store.delete_task(last_token(rest)),
            "delete <task number>", "Remove a task",
            requires_argument=True,
        ))
        self.register(CommandSpec(
            "find", store.find_task,
            "find <keyword>", "Search tasks by keyword",
        ))
        self.register(CommandSpec(
            "help", lambda rest: CommandResult.success(self.build_help()),
            "help", "Show this help",
        ))
        self.register(CommandSpec(
            "bye", self._bye,
            "bye", "Save and exit",
        ))

    def _bye(self, rest: str) -> CommandResult:
        result = CommandResult.success("Bye. Hope to see you again soon!")
        result.exit_requested = True
        return result

    def build_help(self) -> str:
        width = max(len(spec.usage) for spec in self._commands.values())
        lines = ["Here are the commands I understand:"]
        for spec in self._commands.values():
            lines.append(f"  {spec.usage.ljust(width)}  {spec.help_text}")
        return "\n".join(lines)

    def execute(self, line: str) -> CommandResult:
        """Interpret one line of input."""
        command, rest = split_command(line)
        if not command:
            return CommandResult.failure(ErrorKind.EMPTY_COMMAND)

        spec = self._commands.get(command)
        if spec is None:
            logger.debug("Unknown command %r", command)
            return CommandResult.failure(ErrorKind.INVALID_COMMAND)

        if spec.requires_argument and not rest:
            return CommandResult.failure(ErrorKind.MESSAGE_EMPTY)

        result = spec.handler(rest)
        if not result.ok:
            logger.debug("Command %r failed: %s", command, result.error.kind.value)
        return result

    def handle_command(self, line: str) -> str:
        """Interpret one line and return the text to show the user."""
        return self.execute(line).text
