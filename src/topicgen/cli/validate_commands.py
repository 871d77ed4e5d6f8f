"""Validate command — check a registry and template without writing files."""

from __future__ import annotations

import sys
from pathlib import Path

import click
from rich import box
from rich.table import Table

from topicgen.cli.main import (
    console,
    echo_line,
    index_scope_option,
    print_validation_issues,
    registry_option,
    resolve_registry_path,
)
from topicgen.core.errors import RenderError, ValidationError


@click.command()
@registry_option
@click.option("--template", "template_path", type=click.Path(path_type=Path, dir_okay=False), default=None, help="Prompt template file")
@index_scope_option
def validate(registry_path: Path | None, template_path: Path | None, index_scope: str | None):
    """Validate the registry and render every topic in memory.

    Exits non-zero on any invalid record or rendering error.
    """
    from topicgen.build.registry import load_registry
    from topicgen.build.renderer import load_template, render, template_id
    from topicgen.build.resolver import resolve_all
    from topicgen.config import get_settings

    settings = get_settings()

    try:
        registry = load_registry(
            resolve_registry_path(registry_path), index_scope=index_scope or settings.index_scope,
        )
        resolve_all(registry, settings.base_path, settings.index_width)
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

    render_errors: list[RenderError] = []
    for record in registry:
        try:
            render(template, record, settings.index_width)
        except RenderError as e:
            render_errors.append(e)

    table = Table(title="Validation", box=box.ROUNDED)
    table.add_column("Check", style="bold")
    table.add_column("Status", justify="center")
    table.add_column("Message")
    table.add_row("registry", "[green]PASS[/green]", f"{len(registry)} topics, {len(registry.sections())} sections")
    if render_errors:
        table.add_row("render", "[red]FAIL[/red]", f"{len(render_errors)} topic(s) failed to render")
    else:
        table.add_row("render", "[green]PASS[/green]", f"template {template_id(template)}")
    console.print(table)

    for error in render_errors:
        echo_line(f"  {error}")

    if render_errors:
        sys.exit(1)
