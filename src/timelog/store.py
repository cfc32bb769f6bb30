"""Append new entries to the log file and the in-memory log."""

from __future__ import annotations

import logging
import os
import re
from datetime import datetime
from pathlib import Path
from typing import Optional

from .errors import IOFailure
from .models import DayBlock, Entry, Log

logger = logging.getLogger(__name__)

_TAIL_BYTES = 4096
# same boundaries as str.splitlines(), which the parser uses
_LINE_BREAK = re.compile(r"\r\n|[\n\r\x0b\x0c\x1c\x1d\x1e\x85\u2028\u2029]")


def append(log: Log, description: str, at: Optional[datetime] = None) -> Entry:
    """Record ``description`` as finished at ``at`` (defaults to now).

    Only the new line, preceded by a blank separator when a new day starts,
    is written to the file. The in-memory log changes only once the write went
    through, so both stay in step when the file cannot be written.

    A file that already ends with a blank line has closed its last block, so
    the entry opens a new block even on the same day.
    """
    description = description.strip()
    if not description:
        raise ValueError("description must not be empty")
    if len(description.splitlines()) > 1:
        raise ValueError("description must fit on a single line")

    timestamp = (at or datetime.now()).replace(second=0, microsecond=0)
    entry = Entry(timestamp=timestamp, description=description)

    last = log.last_entry
    if last is not None and timestamp < last.timestamp:
        logger.warning("Entry at %s is earlier than the previous one at %s", timestamp, last.timestamp)

    new_block = last is None or last.timestamp.date() != timestamp.date()
    if log.path is not None:
        needs_newline, ends_blank = _inspect_tail(log.path)
        if ends_blank and not new_block:
            logger.info("%s ends with a blank line; %s starts a new block", log.path, entry)
            new_block = True
        chunk = f"{entry}\n"
        if new_block and last is not None and not ends_blank:
            chunk = "\n" + chunk
        if needs_newline:
            chunk = "\n" + chunk
        _write_chunk(log.path, chunk)

    if new_block:
        log.blocks.append(DayBlock([entry]))
    else:
        log.blocks[-1].entries.append(entry)
    logger.debug("Appended %s", entry)
    return entry


def _write_chunk(path: Path, chunk: str) -> None:
    try:
        with path.open("a", encoding="utf-8") as handle:
            handle.write(chunk)
    except OSError as exc:
        raise IOFailure(path, exc) from exc


def _inspect_tail(path: Path) -> tuple[bool, bool]:
    """Return whether the file lacks a final line break and whether its last line is blank."""
    try:
        with path.open("rb") as handle:
            handle.seek(0, os.SEEK_END)
            size = handle.tell()
            if size == 0:
                return False, False
            handle.seek(max(size - _TAIL_BYTES, 0))
            tail = handle.read().decode("utf-8", errors="replace")
    except FileNotFoundError:
        return False, False
    except OSError as exc:
        raise IOFailure(path, exc) from exc

    needs_newline = not tail.endswith(("\n", "\r"))
    body = tail
    if body.endswith("\r\n"):
        body = body[:-2]
    elif not needs_newline:
        body = body[:-1]
    last_line = _LINE_BREAK.split(body)[-1]
    return needs_newline, not last_line.strip()
