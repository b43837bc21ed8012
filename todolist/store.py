"""Persistence of todo items, currently as CSV files."""

from __future__ import annotations

import csv
import logging
import os
import re
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import IO, Iterable, Iterator, Sequence, Union

from .models import Status, TodoItem

try:
    import fcntl
except ImportError:  # pragma: no cover - platforms without flock
    fcntl = None  # type: ignore[assignment]

log = logging.getLogger(__name__)

PathType = Union[str, "os.PathLike[str]"]

_FIELD_COUNT = 8
_ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)
_ZERO_TEXT = "0001-01-01T00:00:00Z"
_INT_RE = re.compile(r"[+-]?\d+", re.ASCII)
_RFC3339_RE = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})",
    re.ASCII,
)


class StoreError(Exception):
    """Raised when todo data cannot be read, decoded or written."""


class UnsupportedFormatError(StoreError):
    """Raised when a file's format has no handler."""


class DataHandler(ABC):
    """Something that loads and saves a list of todo items."""

    @abstractmethod
    def load(self) -> list[TodoItem]:
        """Return all stored items."""

    @abstractmethod
    def save(self, items: Iterable[TodoItem]) -> None:
        """Replace the stored items with ``items``."""


@dataclass
class CSVData(DataHandler):
    """Todo items kept in a CSV file, one item per record."""

    path: PathType

    def load(self) -> list[TodoItem]:
        """Read the file, creating it if missing, and decode its records."""
        log.debug("loading CSV data from %s", self.path)
        with _open_locked(self.path, "a+", "reading") as handle:
            handle.seek(0)
            records = _read_records(handle)
        try:
            return decode_records(records)
        except StoreError as exc:
            raise StoreError(f"error decoding CSV; {exc}") from exc

    def save(self, items: Iterable[TodoItem]) -> None:
        """Overwrite the file with ``items``."""
        log.debug("saving CSV data to %s", self.path)
        records = encode_records(items)
        with _open_locked(self.path, "w", "writing") as handle:
            try:
                csv.writer(handle, lineterminator="\n").writerows(records)
            except (OSError, csv.Error) as exc:
                raise StoreError(f"failed writing file; {exc}") from exc


def encode_records(todos: Iterable[TodoItem]) -> list[list[str]]:
    """Turn items into CSV records."""
    return [
        [
            str(todo.id),
            str(todo.parent_id),
            _format_children(todo.children_ids),
            todo.task,
            _format_time(todo.created_at),
            _format_time(todo.due),
            _format_time(todo.done_at),
            str(int(todo.status)),
        ]
        for todo in todos
    ]


def decode_records(records: Iterable[Sequence[str]]) -> list[TodoItem]:
    """Turn CSV records into items, raising StoreError on bad data."""
    todos = []
    for index, record in enumerate(records):
        if len(record) < _FIELD_COUNT:
            raise StoreError(f"incorrect record length; {index}")
        status_value = _parse_int(record[7], "failed to convert status to int")
        try:
            status = Status(status_value)
        except ValueError as exc:
            raise StoreError(f"unknown status, {record[7]}") from exc
        todos.append(
            TodoItem(
                id=_parse_int(record[0], "failed to convert id to int"),
                parent_id=_parse_int(record[1], "failed to convert parent id to int"),
                children_ids=_parse_children(record[2]),
                task=record[3],
                created_at=_parse_time(record[4], "created"),
                due=_parse_time(record[5], "due"),
                done_at=_parse_time(record[6], "done"),
                status=status,
            )
        )
    return todos


def new_store(path: PathType) -> DataHandler:
    """Pick a handler from the file name's extension."""
    text = os.fspath(path)
    extension = text.rsplit(".", 1)[-1]
    if extension == "csv":
        return CSVData(text)
    if extension in ("json", "sqlite"):
        raise UnsupportedFormatError(f"{extension} format is not supported yet")
    raise UnsupportedFormatError(f"unknown format, {extension}")


@contextmanager
def _open_locked(path: PathType, mode: str, purpose: str) -> Iterator[IO[str]]:
    try:
        handle = open(path, mode, newline="", encoding="utf-8")
    except OSError as exc:
        raise StoreError(f"failed to open file for {purpose}: {os.fspath(path)}") from exc
    with handle:
        if fcntl is not None:
            fcntl.flock(handle.fileno(), fcntl.LOCK_EX)
        try:
            yield handle
        finally:
            if fcntl is not None:
                fcntl.flock(handle.fileno(), fcntl.LOCK_UN)


def _read_records(handle: IO[str]) -> list[list[str]]:
    records: list[list[str]] = []
    reader = csv.reader(handle, strict=True)
    try:
        for row in reader:
            if not row:
                continue
            if records and len(row) != len(records[0]):
                raise StoreError(f"record on line {reader.line_num}: wrong number of fields")
            records.append(row)
    except csv.Error as exc:
        raise StoreError(f"failed to read records from file; {exc}") from exc
    return records


def _parse_int(text: str, message: str) -> int:
    if _INT_RE.fullmatch(text) is None:
        raise StoreError(f"{message}, {text}")
    return int(text)


def _format_children(children: Iterable[int]) -> str:
    return "[" + ",".join(str(child) for child in children) + "]"


def _parse_children(text: str) -> list[int]:
    stripped = text.strip()
    if not (stripped.startswith("[") and stripped.endswith("]")):
        raise StoreError(f"can not convert children ids to a list, {text}")
    inner = stripped[1:-1].strip()
    if not inner:
        return []
    return [
        _parse_int(part.strip(), "can not convert children ids to a list")
        for part in inner.split(",")
    ]


def _format_time(value: datetime | None) -> str:
    if value is None:
        return _ZERO_TEXT
    if value.tzinfo is None or value.utcoffset() is None:
        value = value.astimezone()
    stamp = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )
    offset = value.utcoffset()
    if not offset:
        return stamp + "Z"
    seconds = int(offset.total_seconds())
    sign = "-" if seconds < 0 else "+"
    minutes = abs(seconds) // 60
    return f"{stamp}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def _parse_time(text: str, what: str) -> datetime | None:
    match = _RFC3339_RE.fullmatch(text)
    if match is None:
        raise StoreError(f"unable to parse {what} time, {text}")
    year, month, day, hour, minute, second, fraction, zone = match.groups()
    try:
        if zone == "Z":
            tz = timezone.utc
        else:
            sign = -1 if zone[0] == "-" else 1
            tz = timezone(sign * timedelta(hours=int(zone[1:3]), minutes=int(zone[4:6])))
        micro = int((fraction or "0")[:6].ljust(6, "0"))
        value = datetime(
            int(year), int(month), int(day),
            int(hour), int(minute), int(second), micro,
            tzinfo=tz,
        )
    except ValueError as exc:
        raise StoreError(f"unable to parse {what} time, {text}") from exc
    return None if value == _ZERO_TIME else value