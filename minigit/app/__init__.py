"""Command-line interface for Mini Git."""

from .cli import create_parser, main

__all__ = ["create_parser", "main"]
