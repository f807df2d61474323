"""Composite-region membership classifier and CLI."""

__version__ = "0.1.0"
