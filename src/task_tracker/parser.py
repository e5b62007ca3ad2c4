"""Argument parsing for the deadline and event commands.

All knowledge of the fixed input layouts lives here:

* deadlines: ``<description> /by yyyy/MM/dd HHmm``
* events:    ``<description> /at yyyy/MM/dd HHmm-HHmm``

Every routine returns a ``(value, error)`` pair; exactly one side is set.
"""

import re
from datetime import date, datetime, time
from typing import List, Optional, Tuple

from .result import ErrorKind, TaskError


DEADLINE_MARKER = "/by"
EVENT_MARKER = "/at"

DATE_FORMAT = "%Y/%m/%d"
TIME_FORMAT = "%H%M"
DATE_TIME_FORMAT = f"{DATE_FORMAT} {TIME_FORMAT}"

# strptime accepts single-digit fields; the input layouts do not
_DATE_RE = re.compile(r"\d{4}/\d{2}/\d{2}")
_TIME_RE = re.compile(r"\d{4}")
_DATE_TIME_RE = re.compile(r"\d{4}/\d{2}/\d{2} \d{4}")
_WHITESPACE_RE = re.compile(r"\s")

# "YYYY/MM/DDHHMM-HHMM" once all whitespace is removed
MIN_EVENT_SLOT_LENGTH = 19
EVENT_DATE_LENGTH = 10
EVENT_DURATION_OFFSET = 11


def split_pieces(text: str, separator: str) -> List[str]:
    """Split on a literal separator, dropping trailing empty pieces.

    ``"a /by"`` gives ``["a "]`` and ``"/by"`` gives ``[]``.
    """
    pieces = text.split(separator)
    while pieces and pieces[-1] == "":
        pieces.pop()
    return pieces


def split_on_marker(
    text: str, command: str, marker: str
) -> Tuple[Optional[Tuple[str, str]], Optional[TaskError]]:
    """Split ``text`` into a description and the argument after ``marker``.

    Returns:
        ((description, argument), None) on success, (None, error) otherwise.
        Both halves are trimmed. Pieces after a second marker are ignored.
    """
    pieces = split_pieces(text, marker)
    if not pieces:
        return None, TaskError(ErrorKind.MESSAGE_EMPTY)
    if len(pieces) == 1:
        return None, TaskError.incorrect_format(command, marker)

    description = pieces[0].strip()
    if not description:
        return None, TaskError(ErrorKind.MESSAGE_EMPTY)
    return (description, pieces[1].strip()), None


def parse_date(text: str) -> Optional[date]:
    """Parse ``yyyy/MM/dd``; None when the text does not match."""
    if not _DATE_RE.fullmatch(text):
        return None
    try:
        return datetime.strptime(text, DATE_FORMAT).date()
    except ValueError:
        return None


def parse_time(text: str) -> Optional[time]:
    """Parse ``HHmm``; None when the text does not match."""
    if not _TIME_RE.fullmatch(text):
        return None
    try:
        return datetime.strptime(text, TIME_FORMAT).time()
    except ValueError:
        return None


def parse_date_time(text: str) -> Optional[datetime]:
    """Parse ``yyyy/MM/dd HHmm``; None when the text does not match."""
    if not _DATE_TIME_RE.fullmatch(text):
        return None
    try:
        return datetime.strptime(text, DATE_TIME_FORMAT)
    except ValueError:
        return None


def parse_deadline(text: str) -> Tuple[Optional[Tuple[str, datetime]], Optional[TaskError]]:
    """Parse the arguments of a ``deadline`` command."""
    parts, error = split_on_marker(text, "deadline", DEADLINE_MARKER)
    if error:
        return None, error

    description, by = parts
    due_at = parse_date_time(by)
    if due_at is None:
        return None, TaskError(ErrorKind.INVALID_DATE_TIME)
    return (description, due_at), None


def parse_event_slot(
    slot: str,
) -> Tuple[Optional[Tuple[date, time, time]], Optional[TaskError]]:
    """Parse ``yyyy/MM/dd HHmm-HHmm`` into (date, start, end).

    The date is taken from the first ten characters and the time range from
    offset eleven onwards, so the separator character itself is not checked.
    """
    slot = slot.strip()
    if len(_WHITESPACE_RE.sub("", slot)) < MIN_EVENT_SLOT_LENGTH:
        return None, TaskError(ErrorKind.INVALID_DURATION)

    day_text = slot[:EVENT_DATE_LENGTH].strip()
    duration = slot[EVENT_DURATION_OFFSET:].strip()

    times = split_pieces(duration, "-")
    if len(times) != 2:
        return None, TaskError(ErrorKind.INVALID_DURATION)

    day = parse_date(day_text)
    start = parse_time(times[0].strip())
    end = parse_time(times[1].strip())
    if day is None or start is None or end is None:
        return None, TaskError(ErrorKind.INVALID_DATE_TIME)
    return (day, start, end), None


def parse_event(
    text: str,
) -> Tuple[Optional[Tuple[str, date, time, time]], Optional[TaskError]]:
    """Parse the arguments of an ``event`` command."""
    parts, error = split_on_marker(text, "event", EVENT_MARKER)
    if error:
        return None, error

    description, at = parts
    slot, error = parse_event_slot(at)
    if error:
        return None, error
    return (description, *slot), None


def format_date_time(value: datetime) -> str:
    """Inverse of :func:`parse_date_time`."""
    return value.strftime(DATE_TIME_FORMAT)


def format_event_slot(day: date, start: time, end: time) -> str:
    """Inverse of :func:`parse_event_slot`."""
    return f"{day.strftime(DATE_FORMAT)} {start.strftime(TIME_FORMAT)}-{end.strftime(TIME_FORMAT)}"
