"""Main orchestrator for coordinating all components."""
import asyncio
import logging
from pathlib import Path
from typing import Any, Awaitable, Callable, Iterable, Optional

import aiohttp

from ..domain import DownloadStatus, GifDownload, InvalidArtifactUrlError, SessionRef
from ..downloader import GifDownloader
from ..fishery import FisheryEndpoints, GifPoller, IdentifierResolver
from ..fs import ensure_directory, gif_filename
from ..parser import extract_urls


class Orchestrator:
    """Coordinates id discovery, GIF polling, and downloading."""
    
    def __init__(
        self,
        output_dir: str | Path = "output",
        endpoints: Optional[FisheryEndpoints] = None,
        max_attempts: int = 5,
        retry_delay: float = 5.0,
        request_timeout: int = 60,
        download_timeout: int = 300,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize orchestrator.
        
        Args:
            output_dir: Directory GIFs are saved to
            endpoints: Service URLs
            max_attempts: GIF probes per artifact
            retry_delay: Seconds between GIF probes
            request_timeout: Timeout in seconds for API requests
            download_timeout: Timeout in seconds for a GIF transfer
            sleep: Coroutine used to wait between probes
            logger: Logger instance
        """
        self.output_dir = Path(output_dir)
        self.request_timeout = request_timeout
        self.logger = logger or logging.getLogger("replay")
        
        # Initialize components
        endpoints = endpoints or FisheryEndpoints()
        self.resolver = IdentifierResolver(endpoints, logger=self.logger)
        self.poller = GifPoller(
            endpoints,
            max_attempts=max_attempts,
            retry_delay=retry_delay,
            sleep=sleep,
            logger=self.logger
        )
        self.downloader = GifDownloader(timeout=download_timeout, logger=self.logger)
    
    async def process_artifact(
        self,
        session: aiohttp.ClientSession,
        ref: SessionRef,
        game_object_id: str
    ) -> GifDownload:
        """
        Poll for one artifact's GIF and save it.
        
        Never raises; failures are recorded on the returned GifDownload.
        
        Args:
            session: aiohttp session
            ref: Session the artifact belongs to
            game_object_id: Artifact id
            
        Returns:
            Outcome of the download
        """
        download = GifDownload(session=ref, game_object_id=game_object_id)
        
        try:
            download.gif_url = await self.poller.resolve_gif_url(session, ref, game_object_id)
            if download.gif_url is None:
                download.status = DownloadStatus.NOT_READY
                return download
            
            download.status = DownloadStatus.DOWNLOADING
            output_path = self.output_dir / gif_filename(ref, game_object_id)
            success, error = await self.downloader.download(session, download.gif_url, output_path)
            
            if success:
                download.status = DownloadStatus.DONE
                download.path = output_path
            else:
                download.status = DownloadStatus.FAILED
                download.error = error
        
        except Exception as e:
            self.logger.exception(f"Unexpected error downloading {ref}/{game_object_id}: {e}")
            download.status = DownloadStatus.FAILED
            download.error = f"{type(e).__name__}: {str(e)}"
        
        return download
    
    def _unique_by_filename(self, ref: SessionRef, game_object_ids: list[str]) -> list[str]:
        """
        Keep the first id for each local file name.
        
        Repeated ids, and ids differing only in "_" versus "-", would be
        written to the same file.
        """
        unique = {}
        for game_object_id in game_object_ids:
            filename = gif_filename(ref, game_object_id)
            if filename in unique:
                self.logger.warning(
                    f"Skipping {ref}/{game_object_id}: same file as {unique[filename]}"
                )
                continue
            unique[filename] = game_object_id
        return list(unique.values())
    
    async def process_session(
        self,
        session: aiohttp.ClientSession,
        ref: SessionRef
    ) -> list[GifDownload]:
        """
        Download every GIF of a session concurrently.
        
        Args:
            session: aiohttp session
            ref: Session to download
            
        Returns:
            Outcomes in artifact order
        """
        game_object_ids = await self.resolver.resolve(session, ref)
        if not game_object_ids:
            self.logger.info(f"No artifacts to download for {ref}")
            return []
        
        game_object_ids = self._unique_by_filename(ref, game_object_ids)
        
        downloads = await asyncio.gather(
            *(self.process_artifact(session, ref, game_object_id) for game_object_id in game_object_ids)
        )
        
        for download in downloads:
            if download.status != DownloadStatus.DONE:
                self.logger.debug(
                    f"No GIF for {ref}/{download.game_object_id}: "
                    f"{download.status.value} (url={download.gif_url}, error={download.error})"
                )
        
        done = sum(1 for download in downloads if download.status == DownloadStatus.DONE)
        self.logger.info(f"Session {ref} complete: {done}/{len(downloads)} GIFs downloaded")
        
        return list(downloads)
    
    async def download_sessions(self, refs: Iterable[SessionRef]) -> list[Path]:
        """
        Download the GIFs of many sessions concurrently.
        
        Args:
            refs: Sessions to download
            
        Returns:
            Saved file paths, in submission order
        """
        refs = list(dict.fromkeys(refs))
        if not refs:
            return []
        
        ensure_directory(self.output_dir)
        
        timeout = aiohttp.ClientTimeout(total=self.request_timeout)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            results = await asyncio.gather(
                *(self.process_session(session, ref) for ref in refs),
                return_exceptions=True
            )
        
        paths = []
        for ref, result in zip(refs, results):
            if isinstance(result, BaseException):
                self.logger.error(f"Session {ref} failed: {type(result).__name__}: {result}")
                continue
            paths.extend(download.path for download in result if download.status == DownloadStatus.DONE)
        
        return paths
    
    async def download_all(self, urls: Iterable[str]) -> list[Path]:
        """
        Download the GIFs of the given replay URLs.
        
        Every URL is parsed before any request is made.
        
        Args:
            urls: Replay URLs
            
        Returns:
            Saved file paths, in submission order
            
        Raises:
            InvalidArtifactUrlError: If any URL is malformed
        """
        refs = [SessionRef.from_url(url) for url in urls]
        return await self.download_sessions(refs)
    
    async def download_url(self, url: str) -> list[Path]:
        """Download the GIFs of a single replay URL."""
        return await self.download_all([url])
    
    async def download_local_storage(self, entries: Any) -> list[Path]:
        """
        Download the GIFs of every replay URL in a local storage dump.
        
        Malformed URLs in the dump are skipped.
        
        Args:
            entries: Parsed local storage array
            
        Returns:
            Saved file paths, in dump order
        """
        urls = extract_urls(entries)
        self.logger.info(f"Found {len(urls)} replay URLs in local storage")
        
        refs = []
        for url in urls:
            try:
                refs.append(SessionRef.from_url(url))
            except InvalidArtifactUrlError as e:
                self.logger.warning(f"Skipping local storage entry: {e}")
        
        return await self.download_sessions(refs)
