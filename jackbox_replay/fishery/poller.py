"""Polling for rendered GIFs."""
import asyncio
import logging
from typing import Awaitable, Callable, Optional

import aiohttp

from ..domain import SessionRef
from .endpoints import FisheryEndpoints


class GifPoller:
    """Probes the GIF service until an artifact is rendered or attempts run out."""
    
    def __init__(
        self,
        endpoints: Optional[FisheryEndpoints] = None,
        max_attempts: int = 5,
        retry_delay: float = 5.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize poller.
        
        Args:
            endpoints: Service URLs
            max_attempts: Probes per artifact, including the first one
            retry_delay: Seconds to wait between probes
            sleep: Coroutine used to wait between probes
            logger: Logger instance
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        
        self.endpoints = endpoints or FisheryEndpoints()
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay
        self.sleep = sleep
        self.logger = logger or logging.getLogger("replay")
    
    async def probe(
        self,
        session: aiohttp.ClientSession,
        ref: SessionRef,
        game_object_id: str
    ) -> bool:
        """
        Ask once whether the GIF is rendered.
        
        Returns:
            True only for an HTTP 200 response
        """
        request_url = self.endpoints.gif_probe(ref, game_object_id)
        
        try:
            async with session.get(request_url) as response:
                return response.status == 200
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self.logger.warning(
                f"An error occurred while requesting {request_url}: "
                f"{type(e).__name__}: {e}"
            )
            return False
    
    async def resolve_gif_url(
        self,
        session: aiohttp.ClientSession,
        ref: SessionRef,
        game_object_id: str
    ) -> Optional[str]:
        """
        Wait for an artifact's GIF and return its storage URL.
        
        Args:
            session: aiohttp session
            ref: Session the artifact belongs to
            game_object_id: Artifact id
            
        Returns:
            Storage URL of the GIF, or None if it never became ready
        """
        attempts_left = self.max_attempts
        
        while True:
            attempts_left -= 1
            if await self.probe(session, ref, game_object_id):
                return self.endpoints.gif_file(ref, game_object_id)
            
            if attempts_left == 0:
                self.logger.warning(
                    f"GIF not ready after {self.max_attempts} attempts: "
                    f"{ref}/{game_object_id}"
                )
                return None
            
            self.logger.debug(
                f"GIF not ready, retrying in {self.retry_delay}s "
                f"({attempts_left} attempts left): {ref}/{game_object_id}"
            )
            await self.sleep(self.retry_delay)
