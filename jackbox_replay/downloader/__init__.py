"""Async GIF file transfer."""
from .downloader import GifDownloader

__all__ = ["GifDownloader"]
