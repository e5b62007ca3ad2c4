"""Task Tracker - a command-line tracker for todos, deadlines and events."""

__version__ = "0.1.0"

from .task import Task, Todo, Deadline, Event
from .result import CommandResult, ErrorKind, TaskError
from .task_store import TaskStore
from .interpreter import CommandInterpreter

__all__ = [
    "Task",
    "Todo",
    "Deadline",
    "Event",
    "CommandResult",
    "ErrorKind",
    "TaskError",
    "TaskStore",
    "CommandInterpreter",
    "__version__",
]
