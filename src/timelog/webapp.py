"""FastAPI application that exposes the time log over a local HTTP API."""

from __future__ import annotations

import logging
import threading
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field

from .aggregation import Report, aggregate
from .completion import suggest
from .config import ReportWindow
from .errors import IOFailure, MalformedEntry
from .models import TIME_FMT, Entry, Log
from .parser import load
from .paths import get_log_path
from .reporting import format_duration, format_report
from .store import append

logger = logging.getLogger(__name__)


class LogHolder:
    """Own the in-memory log for the lifetime of the app."""

    def __init__(self, log_path: Path) -> None:
        self.path = Path(log_path)
        self.lock = threading.Lock()
        self.log: Log = load(self.path)

    def reload(self) -> Log:
        with self.lock:
            self.log = load(self.path)
            logger.info("Reloaded %s", self.path)
            return self.log


class EntryCreate(BaseModel):
    description: str = Field(..., min_length=1)
    at: Optional[datetime] = None

    model_config = ConfigDict(extra="forbid")


def create_app(*, log_path: Optional[Path] = None) -> FastAPI:
    """Instantiate the FastAPI application."""
    holder = LogHolder(Path(log_path or get_log_path()))

    app = FastAPI(title="timelog", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.log_holder = holder

    @app.on_event("startup")
    async def _startup() -> None:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s %(levelname)s %(name)s %(message)s",
        )

    @app.get("/api/status")
    def status(request: Request) -> Dict[str, Any]:
        holder: LogHolder = request.app.state.log_holder
        with holder.lock:
            last = holder.log.last_entry
            return {
                "log_path": str(holder.path),
                "day_blocks": len(holder.log.blocks),
                "entries": sum(len(block.entries) for block in holder.log.blocks),
                "last_entry": _entry_payload(last) if last else None,
            }

    @app.get("/api/report")
    def report(
        request: Request,
        days: Optional[int] = Query(default=None, ge=1, description="Trailing day blocks."),
        weeks: Optional[int] = Query(default=None, ge=1, description="Trailing calendar weeks."),
    ) -> Dict[str, Any]:
        try:
            window = ReportWindow.from_options(days=days, weeks=weeks)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        holder: LogHolder = request.app.state.log_holder
        with holder.lock:
            result = aggregate(holder.log, window)
        return _report_payload(result)

    @app.get("/api/entries")
    def entries(
        request: Request,
        date: Optional[str] = Query(
            default=None,
            description="Target date in YYYY-MM-DD format.",
        ),
    ) -> Dict[str, Any]:
        target_day = _parse_date(date)
        holder: LogHolder = request.app.state.log_holder
        with holder.lock:
            found = holder.log.entries_on(target_day)
        return {
            "date": target_day.strftime("%Y-%m-%d"),
            "entries": [_entry_payload(entry) for entry in found],
        }

    @app.post("/api/entries", status_code=201)
    def create_entry(payload: EntryCreate, request: Request) -> Dict[str, Any]:
        holder: LogHolder = request.app.state.log_holder
        with holder.lock:
            try:
                entry = append(holder.log, payload.description, at=_local_time(payload.at))
            except IOFailure as exc:
                logger.error("Append failed: %s", exc)
                raise HTTPException(status_code=500, detail=str(exc)) from exc
            except ValueError as exc:
                raise HTTPException(status_code=400, detail=str(exc)) from exc
        return _entry_payload(entry)

    @app.post("/api/reload")
    def reload(request: Request) -> Dict[str, Any]:
        holder: LogHolder = request.app.state.log_holder
        try:
            log = holder.reload()
        except MalformedEntry as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except IOFailure as exc:
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        return {"day_blocks": len(log.blocks)}

    @app.get("/api/suggestions")
    def suggestions(
        request: Request,
        prefix: str = Query(default="", description="Beginning of a description."),
    ) -> Dict[str, Any]:
        holder: LogHolder = request.app.state.log_holder
        with holder.lock:
            return {"prefix": prefix, "suggestions": suggest(holder.log, prefix)}

    return app


def _parse_date(value: Optional[str]) -> date:
    if not value:
        return datetime.now().date()
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError as exc:
        raise HTTPException(status_code=400, detail="Invalid date format") from exc


def _local_time(value: Optional[datetime]) -> Optional[datetime]:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def _entry_payload(entry: Entry) -> Dict[str, Any]:
    return {
        "timestamp": entry.timestamp.strftime(TIME_FMT),
        "description": entry.description,
        "classification": entry.classification.value,
    }


def _report_payload(result: Report) -> Dict[str, Any]:
    return {
        "window": {"mode": result.window.mode.value, "count": result.window.count},
        "activities": [
            {
                "name": activity.name,
                "classification": activity.classification.value,
                "minutes": int(activity.total.total_seconds() // 60),
            }
            for activity in result.activities
        ],
        "totals": {
            "work_minutes": int(result.total_work.total_seconds() // 60),
            "slack_minutes": int(result.total_slack.total_seconds() // 60),
        },
        "since_last": (
            format_duration(result.since_last) if result.since_last is not None else None
        ),
        "text": format_report(result),
    }
