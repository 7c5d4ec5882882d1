"""Command-line interface for i3-reorder."""

from .commands import build_request, cli_main, create_parser

__all__ = ["build_request", "cli_main", "create_parser"]
