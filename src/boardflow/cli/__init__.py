"""Command-line interface for boardflow."""

from boardflow.cli.app import main
from boardflow.cli.parser import build_parser

__all__ = ["build_parser", "main"]
