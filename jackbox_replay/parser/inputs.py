"""Replay URL extraction from browser local storage dumps."""
import json
from typing import Any

from ..domain import InvalidLocalStorageError


def parse_local_storage(raw: str) -> list:
    """
    Parse a local storage dump.
    
    Args:
        raw: JSON text copied from the replay site's local storage
        
    Returns:
        Top-level JSON array
        
    Raises:
        InvalidLocalStorageError: If the text is not a JSON array
    """
    try:
        parsed = json.loads(raw)
    except ValueError as e:
        raise InvalidLocalStorageError(f"Invalid local storage JSON: {e}") from e
    
    if not isinstance(parsed, list):
        raise InvalidLocalStorageError("Invalid local storage JSON: expected an array")
    
    return parsed


def extract_urls(entries: Any) -> list[str]:
    """
    Collect distinct replay URLs from a local storage dump.
    
    Only objects with a string ``url`` field count; everything else is
    ignored. Duplicates collapse to their first occurrence.
    
    Args:
        entries: Parsed local storage array
        
    Returns:
        Distinct URLs
    """
    if not isinstance(entries, list):
        return []
    
    urls = (
        entry.get("url")
        for entry in entries
        if isinstance(entry, dict)
    )
    return list(dict.fromkeys(url for url in urls if isinstance(url, str)))
