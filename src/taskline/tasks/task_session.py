# src/taskline/tasks/task_session.py

"""
Locked file session.

A session is the lock-protected open period of the backing CSV file:
- open (creating if missing) for reading and writing
- take a non-blocking exclusive flock; contention fails fast with StoreBusy
- read / rewrite / append rows
- always unlock + close on exit (use it as a context manager)

flock locks belong to the open file description, so two sessions on the same
path conflict even inside one process.
"""

from __future__ import annotations

import contextlib
import csv
import fcntl
import logging
import os
import sys
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path
from types import TracebackType
from typing import TextIO

from ..errors import MalformedRecord, StorageError, StoreBusy

logger = logging.getLogger(__name__)

Row = list[str]

# Task names are free text of any length; lift the csv default of 128 KiB per field.
csv.field_size_limit(sys.maxsize)


@contextlib.contextmanager
def _io_errors(action: str, path: Path) -> Iterator[None]:
    try:
        yield
    except csv.Error as exc:
        raise MalformedRecord(f"failed to parse {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise MalformedRecord(f"failed to parse {path}: not valid UTF-8 ({exc.reason})") from exc
    except OSError as exc:
        raise StorageError(f"failed to {action} {path}: {exc}") from exc


class LockedFileSession:
    def __init__(self, path: Path, fh: TextIO) -> None:
        self.path = path
        self._fh = fh

    @classmethod
    def open(cls, path: str | Path) -> LockedFileSession:
        path = Path(path)
        with _io_errors("open", path):
            path.parent.mkdir(parents=True, exist_ok=True)
            fh = open(path, "a+", encoding="utf-8", newline="")

        try:
            fcntl.flock(fh.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
        except BlockingIOError:
            fh.close()
            logger.debug("Lock busy path=%s", path)
            raise StoreBusy(path) from None
        except OSError as exc:
            fh.close()
            raise StorageError(f"error locking the file {path}: {exc}") from exc

        logger.debug("Session opened path=%s", path)
        return cls(path, fh)

    # ---- context manager ----

    def __enter__(self) -> LockedFileSession:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._fh.closed

    def close(self) -> None:
        """Release the lock and close the file. Safe to call more than once."""
        if self._fh.closed:
            return
        try:
            fcntl.flock(self._fh.fileno(), fcntl.LOCK_UN)
        finally:
            self._fh.close()
            logger.debug("Session closed path=%s", self.path)

    # ---- reads ----

    def _rows(self) -> Iterator[Row]:
        self._fh.seek(0)
        for row in csv.reader(self._fh):
            if row:
                yield row

    def read_all(self) -> list[Row]:
        with _io_errors("read", self.path):
            rows = list(self._rows())
        logger.debug("Read %d rows path=%s", len(rows), self.path)
        return rows

    def read_last_record(self) -> Row | None:
        """
        Return the final row of the file, or None when the file holds at most a
        header row. Rows are tokenized but never decoded into tasks.
        """
        last: Row | None = None
        seen = 0
        with _io_errors("read", self.path):
            for row in self._rows():
                seen += 1
                last = row
        return last if seen > 1 else None

    def is_empty(self) -> bool:
        with _io_errors("stat", self.path):
            return os.fstat(self._fh.fileno()).st_size == 0

    # ---- writes ----

    def replace_all(self, rows: Iterable[Sequence[str]]) -> None:
        with _io_errors("write", self.path):
            self._fh.seek(0)
            self._fh.truncate()
            csv.writer(self._fh, lineterminator="\n").writerows(rows)
            self._fh.flush()
        logger.debug("Rewrote path=%s", self.path)

    def append(self, rows: Iterable[Sequence[str]]) -> None:
        with _io_errors("append to", self.path):
            self._fh.seek(0, os.SEEK_END)
            fd = self._fh.fileno()
            size = os.fstat(fd).st_size
            # A hand-edited file may lack the trailing newline.
            if size and os.pread(fd, 1, size - 1) != b"\n":
                self._fh.write("\n")
            csv.writer(self._fh, lineterminator="\n").writerows(rows)
            self._fh.flush()
        logger.debug("Appended to path=%s", self.path)


def open_session(path: str | Path) -> LockedFileSession:
    """Open and lock `path`. Use as `with open_session(path) as session: ...`."""
    return LockedFileSession.open(path)
