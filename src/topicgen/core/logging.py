"""Structured logging and verbosity levels for generation runs."""

from __future__ import annotations

import json
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import IntEnum
from pathlib import Path
from threading import Lock
from typing import Any

from rich.console import Console


class Verbosity(IntEnum):
    """Verbosity levels for console output."""

    DEFAULT = 0   # CREATED/FAILED lines and summary only
    VERBOSE = 1   # + run header, per-section progress
    DEBUG = 2     # + template id, timing


@dataclass
class SectionLog:
    """Per-section generation statistics."""

    slug: str
    created_ids: list[str] = field(default_factory=list)
    failed_ids: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "slug": self.slug,
            "created_ids": list(self.created_ids),
            "failed_ids": list(self.failed_ids),
        }


@dataclass
class RunLog:
    """Structured log of a complete generation run.

    The dict format is::

        {
            "run_id": "20261018T120000Z",
            "sections": {
                "06-security": {
                    "slug": "06-security",
                    "created_ids": ["51-authentication-strategies", ...],
                    "failed_ids": [],
                },
                ...
            },
            "total_created": 90,
            "total_failed": 0,
            "total_time": 0.4,
        }
    """

    run_id: str = ""
    sections: dict[str, SectionLog] = field(default_factory=dict)
    total_time: float = 0.0
    total_created: int = 0
    total_failed: int = 0

    def get_or_create_section(self, slug: str) -> SectionLog:
        """Get existing section log or create a new one."""
        if slug not in self.sections:
            self.sections[slug] = SectionLog(slug=slug)
        return self.sections[slug]

    def finalize(self) -> None:
        """Compute totals from section data."""
        self.total_created = sum(len(s.created_ids) for s in self.sections.values())
        self.total_failed = sum(len(s.failed_ids) for s in self.sections.values())

    def to_dict(self) -> dict[str, Any]:
        return {
            "run_id": self.run_id,
            "sections": {
                slug: section.to_dict() for slug, section in self.sections.items()
            },
            "total_created": self.total_created,
            "total_failed": self.total_failed,
            "total_time": self.total_time,
        }


class GenerationLogger:
    """Structured logger for generation runs.

    Writes JSONL log files to log_dir/ and optionally emits console
    output via Rich based on verbosity level. Safe to call from the
    runner's worker threads.
    """

    def __init__(
        self,
        verbosity: Verbosity = Verbosity.DEFAULT,
        log_dir: Path | None = None,
        console: Console | None = None,
    ):
        self.verbosity = verbosity
        self.log_dir = log_dir
        self.console = console or Console(stderr=True)
        self.run_log = RunLog(
            run_id=datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ"),
        )
        self._lock = Lock()
        self._log_file = None
        self._log_path: Path | None = None
        self._run_start: float = 0.0

        if log_dir is not None:
            log_dir.mkdir(parents=True, exist_ok=True)
            self._log_path = log_dir / f"{self.run_log.run_id}.jsonl"
            self._log_file = open(self._log_path, "a", encoding="utf-8")

    @property
    def log_path(self) -> Path | None:
        return self._log_path

    def _write_event(self, event: dict[str, Any]) -> None:
        """Write a JSON event to the JSONL log file."""
        if self._log_file is not None:
            event["timestamp"] = datetime.now(timezone.utc).isoformat()
            with self._lock:
                self._log_file.write(json.dumps(event) + "\n")
                self._log_file.flush()

    def _console_print(self, message: str, min_verbosity: Verbosity) -> None:
        if self.verbosity >= min_verbosity:
            self.console.print(message)

    # -- Run lifecycle --

    def run_start(self, registry_name: str, topic_count: int, template_id: str) -> None:
        """Log the start of a generation run."""
        self._run_start = time.time()
        self._write_event({
            "event": "run_start",
            "registry": registry_name,
            "topic_count": topic_count,
            "template_id": template_id,
        })
        self._console_print(
            f"[bold]Generating:[/bold] {registry_name} ({topic_count} topics)",
            Verbosity.VERBOSE,
        )
        self._console_print(f"[dim]Template: {template_id}[/dim]", Verbosity.DEBUG)

    def run_finish(self) -> RunLog:
        """Log the completion of a run, finalize stats and close the log file."""
        elapsed = time.time() - self._run_start if self._run_start else 0.0
        self.run_log.total_time = elapsed
        self.run_log.finalize()

        self._write_event({
            "event": "run_finish",
            "total_created": self.run_log.total_created,
            "total_failed": self.run_log.total_failed,
            "total_time": round(elapsed, 3),
        })
        self._console_print(
            f"[dim]Finished in {elapsed:.2f}s[/dim]",
            Verbosity.DEBUG,
        )
        self.close()
        return self.run_log

    # -- Topic events --

    def topic_created(self, section_slug: str, label: str, file_path: Path) -> None:
        """Log that a topic's prompt file was written."""
        with self._lock:
            self.run_log.get_or_create_section(section_slug).created_ids.append(label)

        self._write_event({
            "event": "topic_created",
            "section": section_slug,
            "topic": label,
            "path": str(file_path),
        })
        self._console_print(f"      [green]+[/green] {label}", Verbosity.VERBOSE)

    def topic_failed(self, section_slug: str, label: str, error_kind: str, reason: str) -> None:
        """Log that a topic failed to generate."""
        with self._lock:
            self.run_log.get_or_create_section(section_slug).failed_ids.append(label)

        self._write_event({
            "event": "topic_failed",
            "section": section_slug,
            "topic": label,
            "error_kind": error_kind,
            "reason": reason,
        })
        self._console_print(
            f"      [red]x[/red] {label} [dim]({error_kind})[/dim]",
            Verbosity.VERBOSE,
        )

    def close(self) -> None:
        """Close the log file if open."""
        if self._log_file is not None:
            self._log_file.close()
            self._log_file = None
