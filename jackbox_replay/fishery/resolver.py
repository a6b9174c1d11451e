"""Discovery of the artifact ids belonging to a session."""
import asyncio
import logging
from typing import Optional

import aiohttp

from ..domain import SessionRef
from ..parser import extract_from_response
from ..parser.extractor import QUIPLASH2_GAME
from .endpoints import FisheryEndpoints


class IdentifierResolver:
    """Fetches a session's gallery document and extracts its artifact ids."""
    
    def __init__(
        self,
        endpoints: Optional[FisheryEndpoints] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize resolver.
        
        Args:
            endpoints: Service URLs
            logger: Logger instance
        """
        self.endpoints = endpoints or FisheryEndpoints()
        self.logger = logger or logging.getLogger("replay")
    
    def request_url(self, ref: SessionRef) -> str:
        if ref.game_name == QUIPLASH2_GAME:
            return self.endpoints.legacy_session(ref)
        return self.endpoints.gallery(ref)
    
    async def resolve(self, session: aiohttp.ClientSession, ref: SessionRef) -> list[str]:
        """
        Resolve the artifact ids of a session.
        
        Transport errors and unparseable bodies are logged and treated as
        a session without artifacts.
        
        Args:
            session: aiohttp session
            ref: Session to resolve
            
        Returns:
            Artifact ids, possibly empty
        """
        request_url = self.request_url(ref)
        
        try:
            async with session.get(request_url) as response:
                body = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            self.logger.warning(
                f"An error occurred while retrieving data from {request_url}: "
                f"{type(e).__name__}: {e}"
            )
            return []
        
        game_object_ids = extract_from_response(body, ref.game_name)
        self.logger.info(f"Found {len(game_object_ids)} artifacts for {ref}")
        return game_object_ids
