"""Clients for the artifact gallery and GIF rendering service."""
from .endpoints import FisheryEndpoints
from .poller import GifPoller
from .resolver import IdentifierResolver

__all__ = ["FisheryEndpoints", "GifPoller", "IdentifierResolver"]
