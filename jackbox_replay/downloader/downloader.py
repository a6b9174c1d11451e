"""Async GIF downloader."""
import asyncio
import logging
import os
from pathlib import Path
from typing import Optional

import aiofiles
import aiofiles.tempfile
import aiohttp


CHUNK_SIZE = 64 * 1024


class GifDownloader:
    """Streams rendered GIFs from storage to local files."""
    
    def __init__(
        self,
        timeout: int = 300,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize downloader.
        
        Args:
            timeout: Timeout in seconds for a single transfer
            logger: Logger instance
        """
        self.timeout = timeout
        self.logger = logger or logging.getLogger("replay")
    
    async def download(
        self,
        session: aiohttp.ClientSession,
        url: str,
        output_path: Path
    ) -> tuple[bool, Optional[str]]:
        """
        Download a GIF, replacing any existing file at output_path.
        
        The body is streamed to a staging file of its own next to
        output_path, which is moved into place only after the transfer
        completes. Concurrent transfers to the same path never share a
        staging file.
        
        Args:
            session: aiohttp session
            url: GIF storage URL
            output_path: Output file path
            
        Returns:
            Tuple of (success, error_message)
        """
        part_path: Optional[Path] = None
        
        try:
            async with session.get(
                url,
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            ) as response:
                response.raise_for_status()
                
                async with aiofiles.tempfile.NamedTemporaryFile(
                    "wb",
                    dir=output_path.parent,
                    prefix=f"{output_path.name}.",
                    suffix=".part",
                    delete=False
                ) as f:
                    part_path = Path(f.name)
                    async for chunk in response.content.iter_chunked(CHUNK_SIZE):
                        await f.write(chunk)
            
            # Atomic move
            os.replace(part_path, output_path)
            
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
            error_msg = f"{type(e).__name__}: {str(e)}"
            self.logger.error(f"An error occurred while retrieving data from {url}: {error_msg}")
            if part_path is not None:
                self._discard(part_path)
            return False, error_msg
        
        self.logger.info(f"Downloaded: {url} -> {output_path.name}")
        return True, None
    
    def _discard(self, part_path: Path) -> None:
        try:
            part_path.unlink(missing_ok=True)
        except OSError as e:
            self.logger.warning(f"Could not remove partial file {part_path}: {e}")
