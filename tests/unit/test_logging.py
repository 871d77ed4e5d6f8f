"""Unit tests for generation logging."""

from __future__ import annotations

import io
import json
from pathlib import Path

from rich.console import Console

from topicgen.core.logging import GenerationLogger, RunLog, SectionLog, Verbosity


class TestSectionLog:
    def test_to_dict(self):
        section = SectionLog(slug="06-security", created_ids=["56-rate-limit-bypass-attacks"], failed_ids=["57-x"])
        assert section.to_dict() == {
            "slug": "06-security",
            "created_ids": ["56-rate-limit-bypass-attacks"],
            "failed_ids": ["57-x"],
        }


class TestRunLog:
    def test_get_or_create_section(self):
        log = RunLog(run_id="test")
        first = log.get_or_create_section("06-security")
        first.created_ids.append("56-a")
        assert log.get_or_create_section("06-security") is first

    def test_finalize_computes_totals(self):
        log = RunLog(run_id="test")
        log.get_or_create_section("01-a").created_ids.extend(["1-x", "2-y"])
        log.get_or_create_section("02-b").failed_ids.append("3-z")
        log.finalize()
        assert log.total_created == 2
        assert log.total_failed == 1
        d = log.to_dict()
        assert d["run_id"] == "test"
        assert set(d["sections"]) == {"01-a", "02-b"}


class TestGenerationLogger:
    def _read_events(self, path: Path) -> list[dict]:
        return [json.loads(line) for line in path.read_text(encoding="utf-8").splitlines()]

    def test_writes_jsonl_events(self, tmp_path):
        logger = GenerationLogger(log_dir=tmp_path / "logs")
        logger.run_start("sample", 2, "topic_prompt_vabc12345")
        logger.topic_created("06-security", "56-rate-limit-bypass-attacks", tmp_path / "x.md")
        logger.topic_failed("06-security", "57-dependency-vulnerabilities", "FilesystemError", "disk full")
        logger.run_finish()

        events = self._read_events(logger.log_path)
        assert [e["event"] for e in events] == ["run_start", "topic_created", "topic_failed", "run_finish"]
        assert events[0]["template_id"] == "topic_prompt_vabc12345"
        assert events[2]["error_kind"] == "FilesystemError"
        assert events[3]["total_created"] == 1
        assert events[3]["total_failed"] == 1
        assert all("timestamp" in e for e in events)

    def test_no_log_dir_writes_nothing(self, tmp_path):
        logger = GenerationLogger()
        logger.run_start("sample", 1, "t")
        logger.topic_created("06-security", "56-a", tmp_path / "a.md")
        log = logger.run_finish()
        assert logger.log_path is None
        assert log.total_created == 1

    def test_default_verbosity_is_quiet(self):
        buf = io.StringIO()
        logger = GenerationLogger(console=Console(file=buf, width=120))
        logger.run_start("sample", 1, "t")
        logger.topic_created("06-security", "56-a", Path("a.md"))
        logger.run_finish()
        assert buf.getvalue() == ""

    def test_verbose_prints_progress(self):
        buf = io.StringIO()
        logger = GenerationLogger(verbosity=Verbosity.VERBOSE, console=Console(file=buf, width=120))
        logger.run_start("sample", 1, "t")
        logger.topic_created("06-security", "56-a", Path("a.md"))
        logger.run_finish()
        output = buf.getvalue()
        assert "Generating:" in output
        assert "56-a" in output
        assert "Finished" not in output

    def test_debug_prints_template_and_timing(self):
        buf = io.StringIO()
        logger = GenerationLogger(verbosity=Verbosity.DEBUG, console=Console(file=buf, width=120))
        logger.run_start("sample", 1, "topic_prompt_v1")
        logger.run_finish()
        output = buf.getvalue()
        assert "topic_prompt_v1" in output
        assert "Finished" in output
