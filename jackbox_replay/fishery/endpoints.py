"""URL construction for the artifact service and GIF storage."""
from dataclasses import dataclass

from ..domain import SessionRef


DEFAULT_ARTIFACT_URL = "https://fishery.jackboxgames.com/artifact"
DEFAULT_STORAGE_URL = "https://s3.amazonaws.com/jbg-blobcast-artifacts"


@dataclass(frozen=True)
class FisheryEndpoints:
    """Base URLs of the services a download talks to."""
    artifact_url: str = DEFAULT_ARTIFACT_URL
    gallery_url: str = f"{DEFAULT_ARTIFACT_URL}/gallery"
    gif_url: str = f"{DEFAULT_ARTIFACT_URL}/gif"
    storage_url: str = DEFAULT_STORAGE_URL
    
    @classmethod
    def from_base(cls, artifact_url: str, storage_url: str = DEFAULT_STORAGE_URL) -> "FisheryEndpoints":
        """Derive gallery and GIF URLs from the artifact base URL."""
        artifact_url = artifact_url.rstrip("/")
        return cls(
            artifact_url=artifact_url,
            gallery_url=f"{artifact_url}/gallery",
            gif_url=f"{artifact_url}/gif",
            storage_url=storage_url.rstrip("/"),
        )
    
    def gallery(self, ref: SessionRef) -> str:
        return f"{self.gallery_url}/{ref.game_name}/{ref.session_id}"
    
    def legacy_session(self, ref: SessionRef) -> str:
        return f"{self.artifact_url}/{ref.game_name}/{ref.session_id}"
    
    def gif_probe(self, ref: SessionRef, game_object_id: str) -> str:
        return f"{self.gif_url}/{ref.game_name}/{ref.session_id}/{game_object_id}"
    
    def gif_file(self, ref: SessionRef, game_object_id: str) -> str:
        return f"{self.storage_url}/{ref.game_name}/{ref.session_id}/anim_{game_object_id}.gif"
