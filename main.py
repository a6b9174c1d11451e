"""
Jackbox Replay Downloader - saves the GIFs of finished game sessions

Usage:
    python main.py                                  # Prompt for a URL or local storage JSON
    python main.py <url> [<url> ...]                # Download one or more replay URLs
    python main.py --local-storage <json_file>      # Download every replay in a local storage dump
    python main.py --local-storage-json "<json>"    # Same, with the dump passed inline

Examples:
    python main.py https://jackbox.tv/artifact/quiplash3Game/0a1b2c3d
    python main.py --local-storage storage.json
"""
import asyncio
import sys
from pathlib import Path

from jackbox_replay.app import Orchestrator
from jackbox_replay.config import Config
from jackbox_replay.domain import InvalidArtifactUrlError, InvalidLocalStorageError
from jackbox_replay.log import setup_logger
from jackbox_replay.parser import parse_local_storage


def report(paths: list[Path], logger) -> None:
    """Display downloaded files."""
    logger.info("=" * 60)

    if not paths:
        logger.info("No files downloaded")
    else:
        logger.info(f"{len(paths)} files downloaded:")
        for path in paths:
            print(path.absolute())

    logger.info("=" * 60)


async def process_urls(urls: list[str], orchestrator: Orchestrator, logger):
    """Download GIFs for replay URLs."""
    logger.info(f"Downloading {len(urls)} replay URL(s)...")

    paths = await orchestrator.download_all(urls)
    report(paths, logger)


async def process_local_storage(raw: str, orchestrator: Orchestrator, logger):
    """Download GIFs for every replay URL in a local storage dump."""
    entries = parse_local_storage(raw)

    logger.info("Downloading from local storage...")

    paths = await orchestrator.download_local_storage(entries)
    report(paths, logger)


def prompt() -> tuple[str, str]:
    """
    Ask for input interactively.

    Returns:
        Tuple of (mode, value) where mode is "url" or "local_storage"
    """
    choice = input("Input from URL (1) or from local storage JSON (2)? Default: 1\n").strip()
    print()

    if choice == "2":
        return "local_storage", input("Input local storage JSON:\n").strip()

    return "url", input("Input URL:\n").strip()


def main():
    """Main entry point."""
    # Setup logger
    logger = setup_logger(
        name="replay",
        log_dir=Config.LOGS_DIR,
        level=Config.get_log_level(),
        max_bytes=Config.LOG_MAX_BYTES,
        backup_count=Config.LOG_BACKUP_COUNT
    )

    errors = Config.validate()
    if errors:
        for error in errors:
            logger.error(f"Configuration error: {error}")
        sys.exit(1)

    # Display configuration
    Config.display()

    # Initialize orchestrator
    orchestrator = Orchestrator(
        output_dir=Config.OUTPUT_DIR,
        endpoints=Config.get_endpoints(),
        max_attempts=Config.MAX_GIF_ATTEMPTS,
        retry_delay=Config.GIF_RETRY_DELAY,
        request_timeout=Config.REQUEST_TIMEOUT,
        download_timeout=Config.DOWNLOAD_TIMEOUT,
        logger=logger
    )

    try:
        # Parse command line arguments
        if len(sys.argv) < 2:
            mode, value = prompt()
            if mode == "local_storage":
                asyncio.run(process_local_storage(value, orchestrator, logger))
            else:
                asyncio.run(process_urls([value], orchestrator, logger))

        elif sys.argv[1] == "--local-storage":
            if len(sys.argv) < 3:
                logger.error("--local-storage requires a JSON file argument")
                sys.exit(1)

            storage_file = Path(sys.argv[2])
            if not storage_file.exists():
                logger.error(f"File not found: {storage_file}")
                sys.exit(1)

            raw = storage_file.read_text(encoding="utf-8")
            asyncio.run(process_local_storage(raw, orchestrator, logger))

        elif sys.argv[1] == "--local-storage-json":
            if len(sys.argv) < 3:
                logger.error("--local-storage-json requires a JSON string argument")
                sys.exit(1)

            asyncio.run(process_local_storage(sys.argv[2], orchestrator, logger))

        else:
            asyncio.run(process_urls(sys.argv[1:], orchestrator, logger))

    except (InvalidArtifactUrlError, InvalidLocalStorageError) as e:
        logger.error(str(e))
        sys.exit(1)

    except KeyboardInterrupt:
        logger.info("Interrupted by user")

    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
