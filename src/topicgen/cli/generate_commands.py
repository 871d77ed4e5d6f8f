"""Generate commands — topicgen generate, topicgen plan."""

from __future__ import annotations

import sys
from pathlib import Path

import click
from rich import box
from rich.panel import Panel
from rich.table import Table

from topicgen.cli.main import (
    console,
    echo_line,
    index_scope_option,
    print_validation_issues,
    registry_option,
    resolve_registry_path,
)
from topicgen.core.errors import TopicgenError, ValidationError
from topicgen.core.models import TopicResult


def _print_result(result: TopicResult) -> None:
    if result.ok:
        echo_line(f"CREATED: {result.file_path}")
    else:
        echo_line(f"FAILED: {result.file_path}: {result.reason}")


@click.command()
@registry_option
@click.option("--base-path", type=click.Path(path_type=Path), default=None, help="Root folder for generated output (default: .)")
@click.option("--template", "template_path", type=click.Path(path_type=Path, dir_okay=False), default=None, help="Prompt template file")
@click.option("--fail-fast", is_flag=True, default=False, help="Stop at the first failing topic")
@index_scope_option
@click.option("--index-width", type=click.IntRange(min=1), default=None, help="Zero-padding for topic indexes (default 2)")
@click.option("--concurrency", "-j", type=click.IntRange(min=1), default=None, help="Number of worker threads (default 1)")
@click.option("--log-dir", type=click.Path(path_type=Path, file_okay=False), default=None, help="Write a JSONL run log here")
@click.option("--verbose", "-v", count=True, help="Verbosity level: -v per-topic progress, -vv debug details")
def generate(
    registry_path: Path | None,
    base_path: Path | None,
    template_path: Path | None,
    fail_fast: bool,
    index_scope: str | None,
    index_width: int | None,
    concurrency: int | None,
    log_dir: Path | None,
    verbose: int,
):
    """Generate one prompt file per topic in the registry.

    Files land at BASE_PATH/SECTION_SLUG/INDEX-TOPIC_SLUG.md. Exits non-zero
    if any topic failed.
    """
    from topicgen.build.registry import load_registry
    from topicgen.build.renderer import load_template
    from topicgen.build.runner import run as run_generation
    from topicgen.config import get_settings
    from topicgen.core.logging import GenerationLogger, Verbosity

    settings = get_settings()
    base_path = base_path or settings.base_path
    fail_fast = fail_fast or settings.fail_fast
    index_scope = index_scope or settings.index_scope
    index_width = index_width or settings.index_width
    concurrency = concurrency or settings.concurrency
    log_dir = log_dir or settings.log_dir

    try:
        registry = load_registry(resolve_registry_path(registry_path), index_scope=index_scope)
    except ValidationError as e:
        print_validation_issues(e)
        sys.exit(1)
    except Exception as e:
        console.print(f"[red]Error loading registry:[/red] {e}")
        sys.exit(1)

    try:
        template = load_template(template_path or settings.template_path)
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Error loading template:[/red] {e}")
        sys.exit(1)

    if verbose:
        console.print(
            Panel(
                f"[bold]Registry:[/bold] {registry.name} ({len(registry)} topics)\n"
                f"[bold]Output:[/bold] {base_path}\n"
                f"[bold]Policy:[/bold] {'fail-fast' if fail_fast else 'continue-on-error'}",
                title="[bold cyan]topicgen[/bold cyan]",
                border_style="cyan",
            )
        )

    try:
        logger = GenerationLogger(
            verbosity=Verbosity(min(verbose, Verbosity.DEBUG)),
            log_dir=log_dir,
        )
    except OSError as e:
        console.print(f"[red]Error opening run log:[/red] {e}")
        sys.exit(1)

    try:
        report = run_generation(
            registry,
            base_path,
            template,
            fail_fast=fail_fast,
            index_width=index_width,
            concurrency=concurrency,
            logger=logger,
            on_result=_print_result,
        )
    except TopicgenError as e:
        partial = getattr(e, "report", None)
        echo_line(f"Generation aborted: {e}")
        if partial is not None:
            echo_line(partial.summary_line())
        sys.exit(1)

    echo_line(report.summary_line())
    if logger.log_path is not None and verbose:
        console.print(f"[dim]Run log: {logger.log_path}[/dim]")

    if report.exit_code != 0:
        sys.exit(report.exit_code)


@click.command()
@registry_option
@click.option("--base-path", type=click.Path(path_type=Path), default=None, help="Root folder for generated output (default: .)")
@index_scope_option
@click.option("--index-width", type=click.IntRange(min=1), default=None, help="Zero-padding for topic indexes (default 2)")
def plan(
    registry_path: Path | None,
    base_path: Path | None,
    index_scope: str | None,
    index_width: int | None,
):
    """Show where every topic would be written, without writing anything."""
    from topicgen.build.registry import load_registry
    from topicgen.build.resolver import resolve_all
    from topicgen.config import get_settings

    settings = get_settings()
    base_path = base_path or settings.base_path
    index_width = index_width or settings.index_width

    try:
        registry = load_registry(
            resolve_registry_path(registry_path), index_scope=index_scope or settings.index_scope,
        )
        resolved = resolve_all(registry, base_path, index_width)
    except ValidationError as e:
        print_validation_issues(e)
        sys.exit(1)
    except Exception as e:
        console.print(f"[red]Error loading registry:[/red] {e}")
        sys.exit(1)

    table = Table(title=f"Generation Plan: {registry.name}", box=box.ROUNDED)
    table.add_column("Index", justify="right", style="bold")
    table.add_column("Section", style="cyan")
    table.add_column("Topic")
    table.add_column("Path", style="dim", overflow="fold")

    for record, target in zip(registry, resolved):
        table.add_row(str(record.topic_index), record.section_slug, record.topic_name, str(target.file_path))

    console.print(table)
    console.print(
        f"\n[bold]Total:[/bold] {len(registry)} topics in {len(registry.sections())} sections"
    )
