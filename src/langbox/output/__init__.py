"""Output formatters for langbox."""

from langbox.output.console import Console

__all__ = ["Console"]
