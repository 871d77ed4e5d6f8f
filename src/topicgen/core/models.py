"""Core data models for topicgen."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

_SECTION_PREFIX = re.compile(r"^(\d+)-")


@dataclass(frozen=True)
class TopicRecord:
    """One row of the topic table; drives exactly one generated file."""

    section_name: str
    section_slug: str
    topic_index: int
    topic_name: str
    topic_slug: str

    @property
    def label(self) -> str:
        """Identify the topic in messages: ``{topic_index}-{topic_slug}``."""
        return f"{self.topic_index}-{self.topic_slug}"

    @property
    def section_index(self) -> int | None:
        """Numeric prefix of the section slug (``06-security`` -> 6)."""
        match = _SECTION_PREFIX.match(self.section_slug or "")
        return int(match.group(1)) if match else None

    def to_dict(self) -> dict:
        return {
            "section_name": self.section_name,
            "section_slug": self.section_slug,
            "topic_index": self.topic_index,
            "topic_name": self.topic_name,
            "topic_slug": self.topic_slug,
        }


@dataclass
class TopicRegistry:
    """Ordered, read-only collection of topic records for one generation pass."""

    name: str
    records: list[TopicRecord] = field(default_factory=list)
    source: Path | None = None

    def __iter__(self) -> Iterator[TopicRecord]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def sections(self) -> list[tuple[str, str]]:
        """(section_slug, section_name) pairs in first-seen order."""
        seen: dict[str, str] = {}
        for record in self.records:
            seen.setdefault(record.section_slug, record.section_name)
        return list(seen.items())


@dataclass(frozen=True)
class ResolvedPath:
    """Where a topic's rendered prompt lands on disk."""

    directory: Path
    file_path: Path


@dataclass
class TopicResult:
    """Outcome of generating one topic."""

    record: TopicRecord
    status: str  # "created", "failed"
    file_path: Path | None = None
    error_kind: str | None = None  # "ValidationError", "RenderError", "FilesystemError"
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == "created"

    def to_dict(self) -> dict:
        return {
            "label": self.record.label,
            "status": self.status,
            "file_path": str(self.file_path) if self.file_path is not None else None,
            "error_kind": self.error_kind,
            "reason": self.reason,
        }


@dataclass
class RunReport:
    """Per-topic results of a run, in registry order."""

    results: list[TopicResult] = field(default_factory=list)
    total: int = 0

    @property
    def created(self) -> int:
        return sum(1 for r in self.results if r.ok)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r.ok)

    @property
    def exit_code(self) -> int:
        return 0 if self.failed == 0 and len(self.results) == self.total else 1

    def failures(self) -> list[TopicResult]:
        return [r for r in self.results if not r.ok]

    def summary_line(self) -> str:
        return f"{self.created} created, {self.failed} failed"
