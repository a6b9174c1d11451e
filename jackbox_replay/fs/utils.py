"""Filesystem utilities."""
from pathlib import Path

from ..domain import SessionRef


def ensure_directory(path: str | Path) -> Path:
    """
    Create a directory (and parents) if it does not exist.
    
    Args:
        path: Directory path
        
    Returns:
        The directory as a Path
    """
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def gif_filename(ref: SessionRef, game_object_id: str) -> str:
    """
    Local file name for an artifact's GIF.
    
    Underscores in the artifact id become hyphens, e.g.
    ``quiplash3Game-abc123-round-1.gif``.
    """
    game_object_id_dashes = game_object_id.replace("_", "-")
    return f"{ref.game_name}-{ref.session_id}-{game_object_id_dashes}.gif"
