"""Error kinds and result records returned by the task store and interpreter."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union, TYPE_CHECKING

if TYPE_CHECKING:
    from .task import Task


class ErrorKind(Enum):
    """Every recoverable failure a command can produce."""
    EMPTY_COMMAND = "empty_command"
    INVALID_COMMAND = "invalid_command"
    MESSAGE_EMPTY = "message_empty"
    INCORRECT_FORMAT = "incorrect_format"
    INVALID_DATE_TIME = "invalid_date_time"
    INVALID_DURATION = "invalid_duration"
    EMPTY_LIST = "empty_list"
    INVALID_INDEX = "invalid_index"
    INVALID_NUMBER = "invalid_number"


@dataclass(frozen=True)
class TaskError:
    """A failure kind plus the payload fields that kind carries."""
    kind: ErrorKind
    command: Optional[str] = None
    marker: Optional[str] = None
    low: Optional[int] = None
    high: Optional[int] = None
    given: Optional[Union[int, str]] = None

    @classmethod
    def incorrect_format(cls, command: str, marker: str) -> "TaskError":
        return cls(ErrorKind.INCORRECT_FORMAT, command=command, marker=marker)

    @classmethod
    def invalid_index(cls, low: int, high: int, given: int) -> "TaskError":
        return cls(ErrorKind.INVALID_INDEX, low=low, high=high, given=given)

    @classmethod
    def invalid_number(cls, given: str) -> "TaskError":
        return cls(ErrorKind.INVALID_NUMBER, given=given)

    @property
    def message(self) -> str:
        """Single-line, user-facing description of the error."""
        kind = self.kind
        if kind is ErrorKind.EMPTY_COMMAND:
            return "Please type a command. Type 'help' to see what I understand."
        if kind is ErrorKind.INVALID_COMMAND:
            return "I'm sorry, but I don't know what that means. Type 'help' for the list of commands."
        if kind is ErrorKind.MESSAGE_EMPTY:
            return "The description after the command cannot be empty."
        if kind is ErrorKind.INCORRECT_FORMAT:
            return (
                f"Please use the format: {self.command} (description) "
                f"{self.marker} (date and time)"
            )
        if kind is ErrorKind.INVALID_DATE_TIME:
            return "Please write dates as yyyy/MM/dd and times as HHmm, e.g. 2024/01/31 1800."
        if kind is ErrorKind.INVALID_DURATION:
            return "Please give the event time as yyyy/MM/dd HHmm-HHmm, e.g. 2024/01/31 0900-1000."
        if kind is ErrorKind.EMPTY_LIST:
            return "Your list is empty. Add a task first!"
        if kind is ErrorKind.INVALID_INDEX:
            return (
                f"Please choose a task number from {self.low} to {self.high} "
                f"(you entered {self.given})."
            )
        if kind is ErrorKind.INVALID_NUMBER:
            return f"'{self.given}' is not a task number."
        return kind.value

    def __str__(self) -> str:
        return self.message


@dataclass
class CommandResult:
    """Outcome of a store operation or an interpreted command line.

    Exactly one of ``message`` (success) or ``error`` (failure) is meaningful.
    ``tasks`` carries the matches of a search.
    """
    message: str = ""
    error: Optional[TaskError] = None
    tasks: Tuple["Task", ...] = field(default_factory=tuple)
    exit_requested: bool = False
    changed: bool = False

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def text(self) -> str:
        """The text shown to the user, whichever way the operation went."""
        if self.error is not None:
            return self.error.message
        return self.message

    @classmethod
    def success(cls, message: str, changed: bool = False, tasks=()) -> "CommandResult":
        return cls(message=message, changed=changed, tasks=tuple(tasks))

    @classmethod
    def failure(cls, error: Union[TaskError, ErrorKind]) -> "CommandResult":
        if isinstance(error, ErrorKind):
            error = TaskError(error)
        return cls(error=error)
