"""Task data model for the task tracker."""

import datetime
import re
from dataclasses import dataclass
from typing import Optional


DISPLAY_DATE_FORMAT = "%b %d %Y"
DISPLAY_TIME_FORMAT = "%H:%M"

# Descriptions are stored one per line
_LINE_BREAK_RE = re.compile(r"\s*[\r\n]+\s*")


@dataclass
class Task:
    """Base record shared by every kind of task."""

    description: str
    done: bool = False

    # Single-letter type tag shown in renderings and in the data file
    type_code = "?"

    def __post_init__(self):
        self.description = _LINE_BREAK_RE.sub(" ", self.description).strip()
        if not self.description:
            raise ValueError("Task description cannot be empty")

    def mark_as_done(self) -> bool:
        """Mark the task as done.

        Returns:
            True if the task changed state, False if it was already done.
        """
        if self.done:
            return False
        self.done = True
        return True

    @property
    def status_icon(self) -> str:
        return "X" if self.done else " "

    def details(self) -> str:
        """Date/time suffix appended to the rendering, empty for plain tasks."""
        return ""

    def __str__(self) -> str:
        return f"[{self.type_code}][{self.status_icon}] {self.description}{self.details()}"


@dataclass
class Todo(Task):
    """A task with nothing but a description."""

    type_code = "T"


@dataclass
class Deadline(Task):
    """A task that has to be finished by a given date and time."""

    due_at: Optional[datetime.datetime] = None

    type_code = "D"

    def __post_init__(self):
        super().__post_init__()
        if self.due_at is None:
            raise ValueError("Deadline requires a due date")

    def details(self) -> str:
        due = self.due_at.strftime(f"{DISPLAY_DATE_FORMAT} {DISPLAY_TIME_FORMAT}")
        return f" (by: {due})"


@dataclass
class Event(Task):
    """A task happening on a date between a start and an end time."""

    date: Optional[datetime.date] = None
    start_time: Optional[datetime.time] = None
    end_time: Optional[datetime.time] = None

    type_code = "E"

    def __post_init__(self):
        super().__post_init__()
        if self.date is None or self.start_time is None or self.end_time is None:
            raise ValueError("Event requires a date, a start time and an end time")

    def details(self) -> str:
        day = self.date.strftime(DISPLAY_DATE_FORMAT)
        start = self.start_time.strftime(DISPLAY_TIME_FORMAT)
        end = self.end_time.strftime(DISPLAY_TIME_FORMAT)
        return f" (at: {day} {start}-{end})"

