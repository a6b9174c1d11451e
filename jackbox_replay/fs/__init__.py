"""Filesystem helpers."""
from .utils import ensure_directory, gif_filename

__all__ = ["ensure_directory", "gif_filename"]
