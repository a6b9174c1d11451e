"""Jackbox replay GIF downloader."""

__version__ = "1.0.0"
