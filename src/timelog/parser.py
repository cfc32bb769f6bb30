"""Read the plain-text log format into day blocks."""

from __future__ import annotations

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Optional

from .errors import IOFailure, MalformedEntry, OutOfOrderTimestamp
from .models import TIME_FMT, DayBlock, Entry, Log

logger = logging.getLogger(__name__)

_ENTRY_PATTERN = re.compile(r"^(\d{4}-\d{2}-\d{2} \d{2}:\d{2}): (.*)$")


def parse_line(line: str, line_number: int) -> Entry:
    """Parse ``YYYY-MM-DD HH:MM: description`` into an entry."""
    stripped = line.strip()
    match = _ENTRY_PATTERN.match(stripped)
    if not match:
        raise MalformedEntry(line_number, line, "expected 'YYYY-MM-DD HH:MM: description'")
    stamp, description = match.groups()
    try:
        timestamp = datetime.strptime(stamp, TIME_FMT)
    except ValueError as exc:
        raise MalformedEntry(line_number, line, "invalid date or time") from exc
    description = description.strip()
    if not description:
        raise MalformedEntry(line_number, line, "missing description")
    return Entry(timestamp=timestamp, description=description, line_number=line_number)


def parse_log(text: str, path: Optional[Path] = None) -> Log:
    """Build a log from file content.

    A blank line closes the current day block. Runs of blank lines, and blank
    lines at either end of the text, never produce empty blocks. The first
    malformed line aborts the whole parse.
    """
    blocks: list[DayBlock] = []
    current: list[Entry] = []
    for line_number, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            if current:
                blocks.append(DayBlock(current))
                current = []
            continue
        current.append(parse_line(line, line_number))
    if current:
        blocks.append(DayBlock(current))
    return Log(blocks=blocks, path=path)


def check_order(log: Log) -> list[OutOfOrderTimestamp]:
    """Flag entries dated before the entry that precedes them in the file."""
    issues: list[OutOfOrderTimestamp] = []
    previous: Optional[Entry] = None
    for entry in log.entries():
        if previous is not None and entry.timestamp < previous.timestamp:
            issues.append(
                OutOfOrderTimestamp(
                    line_number=entry.line_number, entry=entry, previous=previous
                )
            )
        previous = entry
    return issues


def load(path: Path) -> Log:
    """Read and parse the whole log file.

    A missing file is an empty log; it gets created by the first append.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.info("No existing %s, starting new log", path)
        return Log(path=path)
    except (OSError, UnicodeDecodeError) as exc:
        raise IOFailure(path, exc) from exc

    log = parse_log(text, path=path)
    for issue in check_order(log):
        logger.warning("%s: %s", path, issue)
    logger.debug(
        "Loaded %d entries in %d day blocks from %s",
        sum(len(block.entries) for block in log.blocks),
        len(log.blocks),
        path,
    )
    return log
