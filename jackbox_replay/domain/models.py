"""Domain models for the replay downloader."""
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


class InvalidArtifactUrlError(ValueError):
    """Raised when a replay URL has no game name and session id."""


class InvalidLocalStorageError(ValueError):
    """Raised when a local storage dump is not a JSON array."""


class DownloadStatus(str, Enum):
    """Status of a single GIF download."""
    PROBING = "probing"
    DOWNLOADING = "downloading"
    DONE = "done"
    NOT_READY = "not_ready"
    FAILED = "failed"


@dataclass(frozen=True)
class SessionRef:
    """A finished game session, identified by game name and session id."""
    game_name: str
    session_id: str

    @classmethod
    def from_url(cls, url: str) -> "SessionRef":
        """
        Parse a replay URL.

        The last two path segments are the game name and the session id,
        e.g. ``https://jackbox.tv/artifact/quiplash3Game/abc123``.

        Args:
            url: Replay URL

        Returns:
            Parsed SessionRef

        Raises:
            InvalidArtifactUrlError: If the URL has fewer than two segments
        """
        cleaned = url.strip().split("#", 1)[0].split("?", 1)[0].rstrip("/")
        parts = cleaned.split("/")
        if len(parts) < 2 or not parts[-2] or not parts[-1]:
            raise InvalidArtifactUrlError(f"Invalid URL: {url}")
        return cls(game_name=parts[-2], session_id=parts[-1])

    def __str__(self) -> str:
        return f"{self.game_name}/{self.session_id}"


@dataclass
class GifDownload:
    """Outcome of fetching one artifact's GIF."""
    session: SessionRef
    game_object_id: str
    status: DownloadStatus = DownloadStatus.PROBING
    gif_url: Optional[str] = None
    path: Optional[Path] = None
    error: Optional[str] = None
