"""Command-line interface for central-release."""

from .release import main

__all__ = ["main"]
