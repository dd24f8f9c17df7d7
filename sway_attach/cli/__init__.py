"""Command-line interface for sway-attach."""

from .commands import build_parser, cli_main
from .logging_config import setup_logging

__all__ = ["build_parser", "cli_main", "setup_logging"]
