"""topicgen CLI — main entry point and shared utilities."""

from __future__ import annotations

from pathlib import Path

import click
from rich.console import Console

console = Console()


def echo_line(line: str) -> None:
    """Print a machine-readable line verbatim: no markup, emoji codes, highlighting or wrapping."""
    console.print(line, markup=False, emoji=False, highlight=False, soft_wrap=True)


def registry_option(fn):
    """Shared Click option for the registry definition (defaults to the bundled playbook)."""
    return click.option(
        "--registry",
        "registry_path",
        type=click.Path(path_type=Path, dir_okay=False),
        default=None,
        help="Registry definition (.yaml, .yml, .json or .py). Defaults to the bundled playbook.",
    )(fn)


def index_scope_option(fn):
    return click.option(
        "--index-scope",
        type=click.Choice(["global", "section"]),
        default=None,
        help="Where topic indexes must be unique (default: global).",
    )(fn)


def resolve_registry_path(registry_path: Path | None) -> Path:
    """CLI option > TOPICGEN_REGISTRY_PATH > bundled playbook."""
    from topicgen.build.registry import default_registry_path
    from topicgen.config import get_settings

    return registry_path or get_settings().registry_path or default_registry_path()


def print_validation_issues(error) -> None:
    console.print(f"[red]Invalid registry:[/red] {len(error.issues)} issue(s)")
    for issue in error.issues:
        echo_line(f"  {issue}")


@click.group()
@click.version_option(package_name="topicgen")
def main():
    """topicgen — generate per-topic prompt files from a topic registry."""
    pass


def cli():
    """Entrypoint that loads .env before running the CLI."""
    from dotenv import load_dotenv

    load_dotenv()
    main()


# Import subcommand modules to register commands
from topicgen.cli.generate_commands import generate, plan  # noqa: E402
from topicgen.cli.validate_commands import validate  # noqa: E402

# Register commands
main.add_command(generate)
main.add_command(plan)
main.add_command(validate)
