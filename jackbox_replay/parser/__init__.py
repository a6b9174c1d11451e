"""Extraction of artifact ids and replay URLs from JSON."""
from .extractor import extract_from_response, extract_game_object_ids
from .inputs import extract_urls, parse_local_storage

__all__ = [
    "extract_from_response",
    "extract_game_object_ids",
    "extract_urls",
    "parse_local_storage",
]
