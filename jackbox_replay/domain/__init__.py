"""Domain models, enums and errors."""
from .models import (
    DownloadStatus,
    GifDownload,
    InvalidArtifactUrlError,
    InvalidLocalStorageError,
    SessionRef,
)

__all__ = [
    "DownloadStatus",
    "GifDownload",
    "InvalidArtifactUrlError",
    "InvalidLocalStorageError",
    "SessionRef",
]
