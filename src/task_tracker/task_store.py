"""In-memory task list and the operations that mutate and query it."""

import logging
import re
from typing import Iterable, List, Optional, Tuple, Union

from .parser import parse_deadline, parse_event
from .result import CommandResult, ErrorKind, TaskError
from .task import Deadline, Event, Task, Todo

logger = logging.getLogger(__name__)

_INDEX_RE = re.compile(r"[+-]?\d+")


def pluralize_tasks(count: int) -> str:
    """Return "1 task" or "N tasks"."""
    noun = "task" if count == 1 else "tasks"
    return f"{count} {noun}"


def numbered(tasks: Iterable[Task]) -> List[str]:
    """Render tasks as a 1-based numbered list."""
    return [f"{number}. {task}" for number, task in enumerate(tasks, start=1)]


class TaskStore:
    """Ordered collection of tasks.

    Insertion order is display order. Callers address tasks with 1-based
    indices; the store converts them to list positions after checking
    bounds. The live list is never handed out, only tuple snapshots.
    """

    def __init__(self, tasks: Optional[Iterable[Task]] = None):
        self._tasks: List[Task] = list(tasks or [])

    def __len__(self) -> int:
        return len(self._tasks)

    @property
    def tasks(self) -> Tuple[Task, ...]:
        """Read-only snapshot of the tasks in display order."""
        return tuple(self._tasks)

    def _count_line(self) -> str:
        return f"Now you have {pluralize_tasks(len(self._tasks))} in the list."

    def _resolve_index(self, index: Union[int, str]) -> Tuple[Optional[int], Optional[TaskError]]:
        """Validate a 1-based index against the current size.

        Returns:
            (position, None) with a 0-based position, or (None, error).
        """
        size = len(self._tasks)
        if size == 0:
            return None, TaskError(ErrorKind.EMPTY_LIST)

        if isinstance(index, str):
            token = index.strip()
            if not _INDEX_RE.fullmatch(token):
                return None, TaskError.invalid_number(token)
            index = int(token)

        if index < 1 or index > size:
            return None, TaskError.invalid_index(1, size, index)
        return index - 1, None

    def add_to_list(self, task: Task) -> CommandResult:
        """Append a task and confirm with the new count."""
        self._tasks.append(task)
        logger.debug("Added task #%d: %s", len(self._tasks), task)
        lines = [
            "Got it. I've added this task:",
            f"Added: {task}",
            self._count_line(),
        ]
        return CommandResult.success("\n".join(lines), changed=True)

    def display_list(self) -> CommandResult:
        """Numbered rendering of every task."""
        if not self._tasks:
            return CommandResult.failure(ErrorKind.EMPTY_LIST)
        return CommandResult.success("\n".join(numbered(self._tasks)), tasks=self._tasks)

    def mark_done(self, index: Union[int, str]) -> CommandResult:
        """Mark the task at a 1-based index as done."""
        position, error = self._resolve_index(index)
        if error:
            return CommandResult.failure(error)

        task = self._tasks[position]
        if not task.mark_as_done():
            return CommandResult.success(f"This task is already done:\n{task}")

        logger.debug("Marked task #%d as done", position + 1)
        return CommandResult.success(f"Nice! I've marked this task as done:\n{task}", changed=True)

    def delete_task(self, index: Union[int, str]) -> CommandResult:
        """Remove the task at a 1-based index; later tasks move up."""
        position, error = self._resolve_index(index)
        if error:
            return CommandResult.failure(error)

        task = self._tasks.pop(position)
        logger.debug("Deleted task #%d: %s", position + 1, task)
        lines = [
            "Noted. I've removed this task:",
            str(task),
            self._count_line(),
        ]
        return CommandResult.success("\n".join(lines), changed=True)

    def add_todo(self, text: str) -> CommandResult:
        """Add a todo whose description is the trimmed text."""
        text = text.strip()
        if not text:
            return CommandResult.failure(ErrorKind.MESSAGE_EMPTY)
        return self.add_to_list(Todo(text))

    def add_deadline(self, text: str) -> CommandResult:
        """Add a deadline from ``<description> /by yyyy/MM/dd HHmm``."""
        parsed, error = parse_deadline(text)
        if error:
            logger.debug("Rejected deadline %r: %s", text, error.kind.value)
            return CommandResult.failure(error)

        description, due_at = parsed
        return self.add_to_list(Deadline(description, due_at=due_at))

    def add_event(self, text: str) -> CommandResult:
        """Add an event from ``<description> /at yyyy/MM/dd HHmm-HHmm``."""
        parsed, error = parse_event(text)
        if error:
            logger.debug("Rejected event %r: %s", text, error.kind.value)
            return CommandResult.failure(error)

        description, day, start, end = parsed
        return self.add_to_list(Event(description, date=day, start_time=start, end_time=end))

    def find_task(self, query: str) -> CommandResult:
        """Case-insensitive substring search over task renderings.

        An empty query matches every task.
        """
        needle = query.lower()
        matches = [task for task in self._tasks if needle in str(task).lower()]

        if not matches:
            return CommandResult.success("There are no matching tasks in your list.")

        lines = ["Here are the matching tasks in your list:"]
        lines.extend(numbered(matches))
        return CommandResult.success("\n".join(lines), tasks=matches)
