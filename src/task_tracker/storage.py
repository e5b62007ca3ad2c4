"""Storage layer for the task tracker using a markdown file with YAML frontmatter."""

import logging
import os
import re
import shutil
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import frontmatter
import yaml

from .config import ConfigModel
from .parser import (
    format_date_time,
    format_event_slot,
    parse_date_time,
    parse_event_slot,
)
from .task import Deadline, Event, Task, Todo

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1
FIELD_SEPARATOR = " | "
TASK_LINE_RE = re.compile(r"^- \[( |x)\] ([TDE]) \| (.+)$")


class StorageError(Exception):
    """Raised when the data file exists but cannot be read."""

    def __init__(self, message: str, path: Path):
        self.path = path
        super().__init__(message)


class TaskMarkdownFormat:
    """Handles conversion between Task objects and markdown checklist lines."""

    @staticmethod
    def to_markdown(task: Task) -> str:
        """Convert a task to one checklist line."""
        checkbox = "- [x]" if task.done else "- [ ]"
        line = f"{checkbox} {task.type_code}{FIELD_SEPARATOR}{task.description}"

        if isinstance(task, Deadline):
            line += f"{FIELD_SEPARATOR}{format_date_time(task.due_at)}"
        elif isinstance(task, Event):
            slot = format_event_slot(task.date, task.start_time, task.end_time)
            line += f"{FIELD_SEPARATOR}{slot}"

        return line

    @staticmethod
    def from_markdown(line: str) -> Optional[Task]:
        """Parse a checklist line back to a Task.

        Returns None for lines that are not task lines or carry a broken
        date/time column.
        """
        line = line.strip()
        m = TASK_LINE_RE.match(line)
        if not m:
            return None

        done = m.group(1) == "x"
        type_code = m.group(2)
        body = m.group(3)

        if type_code == "T":
            return Todo(body, done=done)

        # Description may itself contain the separator; the date is last
        if FIELD_SEPARATOR not in body:
            return None
        description, when = body.rsplit(FIELD_SEPARATOR, 1)
        if not description.strip():
            return None

        if type_code == "D":
            due_at = parse_date_time(when.strip())
            if due_at is None:
                return None
            return Deadline(description, done=done, due_at=due_at)

        slot, error = parse_event_slot(when)
        if error:
            return None
        day, start, end = slot
        return Event(description, done=done, date=day, start_time=start, end_time=end)


class TaskListMarkdownFormat:
    """Handles conversion between a task list and a markdown document."""

    @staticmethod
    def to_markdown(tasks: List[Task]) -> str:
        """Convert tasks to a markdown document with YAML frontmatter."""
        content_lines = ["# Tasks", ""]
        content_lines.extend(TaskMarkdownFormat.to_markdown(task) for task in tasks)

        post = frontmatter.Post(
            "\n".join(content_lines),
            format=FORMAT_VERSION,
            count=len(tasks),
            saved_at=datetime.now(timezone.utc).isoformat(),
        )
        return frontmatter.dumps(post)

    @staticmethod
    def from_markdown(content: str) -> Tuple[List[Task], int]:
        """Parse a markdown document back to tasks, skipping broken lines.

        Returns:
            (tasks, skipped) where skipped counts the unreadable task lines.
        """
        post = frontmatter.loads(content)

        version = post.metadata.get("format", FORMAT_VERSION)
        if version != FORMAT_VERSION:
            logger.warning("Unexpected data format version %r", version)

        tasks = []
        skipped = 0
        for number, line in enumerate(post.content.split("\n"), start=1):
            if not line.startswith("- ["):
                continue
            task = TaskMarkdownFormat.from_markdown(line)
            if task is None:
                logger.warning("Skipping unreadable task line %d: %r", number, line)
                skipped += 1
                continue
            tasks.append(task)
        return tasks, skipped


class Storage:
    """File-based storage for the task list."""

    def __init__(self, config: ConfigModel, path: Optional[Path] = None):
        self.config = config
        self.path = Path(path) if path else config.get_data_path()
        self.backup_path: Optional[Path] = None

    def load(self) -> List[Task]:
        """Load tasks from the data file; a missing file means no tasks.

        When some task lines cannot be read, the file is copied aside first
        so the next save cannot lose them.

        Raises:
            StorageError: If the file exists but cannot be read at all.
        """
        if not self.path.exists():
            logger.info("No data file at %s, starting with an empty list", self.path)
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                content = f.read()
            tasks, skipped = TaskListMarkdownFormat.from_markdown(content)
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
            logger.error("Error loading tasks from %s: %s", self.path, e)
            raise StorageError(f"Cannot read {self.path}: {e}", self.path) from e

        if skipped:
            logger.warning("%d unreadable task lines in %s", skipped, self.path)
            self.backup()

        logger.info("Loaded %d tasks from %s", len(tasks), self.path)
        return tasks

    def backup(self) -> Optional[Path]:
        """Copy the data file next to itself with a timestamped ``.bak`` name."""
        if not self.path.exists():
            return None

        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d_%H-%M-%S-%f")
        backup_path = self.path.with_name(f"{self.path.name}.{timestamp}.bak")
        try:
            shutil.copy2(self.path, backup_path)
        except OSError as e:
            logger.error("Error backing up %s: %s", self.path, e)
            return None

        logger.warning("Copied %s to %s", self.path, backup_path)
        self.backup_path = backup_path
        return backup_path

    def save(self, tasks: Iterable[Task]) -> bool:
        """Write tasks to the data file, replacing it atomically."""
        tasks = list(tasks)
        content = TaskListMarkdownFormat.to_markdown(tasks)

        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=str(self.path.parent), prefix=".tasks-", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(tmp_name, self.path)
        except OSError as e:
            logger.error("Error saving tasks to %s: %s", self.path, e)
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            return False

        logger.info("Saved %d tasks to %s", len(tasks), self.path)
        return True
