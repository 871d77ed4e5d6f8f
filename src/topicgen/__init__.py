"""topicgen - Generate per-topic prompt files for a sectioned knowledge base.

Usage:
    from topicgen import load_registry, load_template, run

    registry = load_registry("registry.yaml")
    report = run(registry, base_path="src", template=load_template())
    print(report.summary_line())
"""

from topicgen.build.materialize import materialize
from topicgen.build.registry import default_registry_path, load_registry, slugify, validate_registry
from topicgen.build.renderer import load_template, render
from topicgen.build.resolver import PathResolver, resolve_path
from topicgen.build.runner import run
from topicgen.core.errors import FilesystemError, RenderError, TopicgenError, ValidationError
from topicgen.core.models import ResolvedPath, RunReport, TopicRecord, TopicRegistry, TopicResult

__all__ = [
    "FilesystemError",
    "PathResolver",
    "RenderError",
    "ResolvedPath",
    "RunReport",
    "TopicRecord",
    "TopicRegistry",
    "TopicResult",
    "TopicgenError",
    "ValidationError",
    "default_registry_path",
    "load_registry",
    "load_template",
    "materialize",
    "render",
    "resolve_path",
    "run",
    "slugify",
    "validate_registry",
]

__version__ = "0.1.0"
