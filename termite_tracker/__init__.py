"""Annotate termite head and body positions across a video timeline."""

__version__ = "0.1.0"
