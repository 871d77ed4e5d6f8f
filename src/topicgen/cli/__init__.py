"""topicgen command-line interface."""

from topicgen.cli.main import cli, main

__all__ = ["cli", "main"]
