"""Suggest known descriptions for a partially typed entry."""

from __future__ import annotations

from typing import Optional

from .models import Log

PROJECT_SEPARATOR = ":"
TASK_SEPARATOR = "--"


def suggest(log: Log, prefix: str) -> list[str]:
    """Return known descriptions starting with ``prefix``.

    Descriptions read as ``project: sub-project -- task``. Candidates are cut
    at the next level the prefix has not reached yet, so typing ``cust``
    offers ``customer joe`` rather than every task done for that customer.
    """
    if not prefix:
        return []
    separator: Optional[str]
    if PROJECT_SEPARATOR not in prefix:
        separator = PROJECT_SEPARATOR
    elif TASK_SEPARATOR not in prefix:
        separator = TASK_SEPARATOR
    else:
        separator = None

    candidates: set[str] = set()
    for entry in log.entries():
        if not entry.description.startswith(prefix):
            continue
        if separator is None:
            candidates.add(entry.description)
        else:
            candidates.add(entry.description.split(separator, 1)[0].strip())
    return sorted(candidates)
