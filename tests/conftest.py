"""Shared test fixtures for topicgen."""

from __future__ import annotations

import os
import textwrap

import pytest

from topicgen import TopicRecord, TopicRegistry
from topicgen.config import reset_settings


SIMPLE_TEMPLATE = textwrap.dedent("""\
    # {TOPIC_INDEX}. {TOPIC_NAME}

    Section: {SECTION_NAME}
    Save as src/{{SECTION_INDEX}}-{{SECTION_SLUG}}/{TOPIC_INDEX}-{{TOPIC_SLUG}}.md
""")


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """No TOPICGEN_* env vars or stray .env files leak into a test."""
    for key in list(os.environ):
        if key.startswith("TOPICGEN_"):
            monkeypatch.delenv(key, raising=False)
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def security_record():
    return TopicRecord(
        section_name="F. Security",
        section_slug="06-security",
        topic_index=56,
        topic_name="Rate-limit bypass attacks",
        topic_slug="rate-limit-bypass-attacks",
    )


@pytest.fixture
def sample_records(security_record):
    """Four valid records across three sections, declared out of numeric order."""
    return [
        TopicRecord("A. Node.js Internals", "01-nodejs-internals", 2, "Event Loop", "event-loop"),
        TopicRecord("A. Node.js Internals", "01-nodejs-internals", 1, "Node.js Architecture", "nodejs-architecture"),
        security_record,
        TopicRecord("C. Event-Driven Architecture", "03-event-driven-architecture", 20, "Pub/Sub Patterns", "pub-sub-patterns"),
    ]


@pytest.fixture
def sample_registry(sample_records):
    return TopicRegistry(name="sample", records=sample_records)


@pytest.fixture
def template():
    return SIMPLE_TEMPLATE


@pytest.fixture
def output_dir(tmp_path):
    """Clean output directory for each test."""
    out = tmp_path / "out"
    out.mkdir()
    return out


@pytest.fixture
def registry_yaml(tmp_path):
    """A nested-format registry file with two sections."""
    path = tmp_path / "registry.yaml"
    path.write_text(textwrap.dedent("""\
        name: mini-playbook
        sections:
          - name: "A. Node.js Internals"
            slug: 01-nodejs-internals
            topics:
              - {index: 1, name: "Node.js Architecture", slug: nodejs-architecture}
              - {index: 2, name: "Event Loop", slug: event-loop}
          - name: "F. Security"
            slug: 06-security
            topics:
              - {index: 56, name: "Rate-limit bypass attacks", slug: rate-limit-bypass-attacks}
    """))
    return path


@pytest.fixture
def list_files():
    """Return a helper listing all files under a root as sorted POSIX relative paths."""

    def _list(root):
        return sorted(p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file())

    return _list
