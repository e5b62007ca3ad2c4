"""Tests for the Task model."""

import pytest
from datetime import date, datetime, time

from task_tracker.task import Deadline, Event, Todo


class TestTodo:
    """Test Todo model functionality."""

    def test_todo_creation(self):
        """Test basic todo creation."""
        todo = Todo("read book")

        assert todo.description == "read book"
        assert todo.done is False

    def test_description_is_trimmed(self):
        """Surrounding whitespace is not part of the description."""
        assert Todo("  read book  ").description == "read book"

    def test_line_breaks_become_spaces(self):
        """Descriptions are always a single line."""
        assert Todo("a\n- [x] T | injected").description == "a - [x] T | injected"
        assert Todo("one\r\n  two").description == "one two"

    def test_empty_description_rejected(self):
        """A task always has a description."""
        with pytest.raises(ValueError):
            Todo("   ")

    def test_rendering(self):
        """Pending and done todos render with their status marker."""
        todo = Todo("read book")
        assert str(todo) == "[T][ ] read book"

        todo.mark_as_done()
        assert str(todo) == "[T][X] read book"

    def test_mark_as_done_is_one_way(self):
        """Marking twice reports that nothing changed the second time."""
        todo = Todo("read book")

        assert todo.mark_as_done() is True
        assert todo.mark_as_done() is False
        assert todo.done is True


class TestDeadline:
    """Test Deadline model functionality."""

    def test_rendering(self):
        """Deadlines show their due date and time."""
        deadline = Deadline("buy milk", due_at=datetime(2024, 1, 1, 18, 0))
        assert str(deadline) == "[D][ ] buy milk (by: Jan 01 2024 18:00)"

    def test_requires_due_date(self):
        with pytest.raises(ValueError):
            Deadline("buy milk")


class TestEvent:
    """Test Event model functionality."""

    def test_rendering(self):
        """Events show their date and time range."""
        event = Event(
            "meeting",
            date=date(2024, 1, 1),
            start_time=time(9, 0),
            end_time=time(10, 0),
        )
        assert str(event) == "[E][ ] meeting (at: Jan 01 2024 09:00-10:00)"

    def test_requires_all_fields(self):
        with pytest.raises(ValueError):
            Event("meeting", date=date(2024, 1, 1), start_time=time(9, 0))
