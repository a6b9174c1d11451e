"""Configuration management."""
import logging
import os

from dotenv import load_dotenv

from .fishery.endpoints import DEFAULT_ARTIFACT_URL, DEFAULT_STORAGE_URL, FisheryEndpoints

load_dotenv()


class Config:
    """Application configuration from environment variables."""
    
    # Service endpoints
    ARTIFACT_URL: str = os.getenv("ARTIFACT_URL", DEFAULT_ARTIFACT_URL).rstrip("/")
    GALLERY_URL: str = os.getenv("GALLERY_URL", f"{ARTIFACT_URL}/gallery").rstrip("/")
    GIF_URL: str = os.getenv("GIF_URL", f"{ARTIFACT_URL}/gif").rstrip("/")
    STORAGE_URL: str = os.getenv("STORAGE_URL", DEFAULT_STORAGE_URL).rstrip("/")
    
    # Directories
    OUTPUT_DIR: str = os.getenv("OUTPUT_DIR", "output")
    LOGS_DIR: str = os.getenv("LOGS_DIR", "logs")
    
    # GIF polling
    MAX_GIF_ATTEMPTS: int = int(os.getenv("MAX_GIF_ATTEMPTS", "5"))
    GIF_RETRY_DELAY: float = float(os.getenv("GIF_RETRY_DELAY", "5"))
    
    # Timeouts
    REQUEST_TIMEOUT: int = int(os.getenv("REQUEST_TIMEOUT", "60"))
    DOWNLOAD_TIMEOUT: int = int(os.getenv("DOWNLOAD_TIMEOUT", "300"))
    
    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_MAX_BYTES: int = int(os.getenv("LOG_MAX_BYTES", str(10 * 1024 * 1024)))  # 10 MB
    LOG_BACKUP_COUNT: int = int(os.getenv("LOG_BACKUP_COUNT", "10"))
    
    @classmethod
    def get_log_level(cls) -> int:
        """
        Get logging level as integer.
        
        Returns:
            Logging level constant
        """
        return getattr(logging, cls.LOG_LEVEL.upper(), logging.INFO)
    
    @classmethod
    def get_endpoints(cls) -> FisheryEndpoints:
        """Service URLs as configured."""
        return FisheryEndpoints(
            artifact_url=cls.ARTIFACT_URL,
            gallery_url=cls.GALLERY_URL,
            gif_url=cls.GIF_URL,
            storage_url=cls.STORAGE_URL,
        )
    
    @classmethod
    def validate(cls) -> list[str]:
        """
        Validate configuration.
        
        Returns:
            List of validation errors (empty if valid)
        """
        errors = []
        
        for name in ("ARTIFACT_URL", "GALLERY_URL", "GIF_URL", "STORAGE_URL"):
            value = getattr(cls, name)
            if not value.startswith(("http://", "https://")):
                errors.append(f"{name} must be an http(s) URL")
        
        # Check numeric ranges
        if cls.MAX_GIF_ATTEMPTS < 1:
            errors.append("MAX_GIF_ATTEMPTS must be >= 1")
        
        if cls.GIF_RETRY_DELAY < 0:
            errors.append("GIF_RETRY_DELAY must be >= 0")
        
        if cls.REQUEST_TIMEOUT < 1:
            errors.append("REQUEST_TIMEOUT must be >= 1")
        
        if cls.DOWNLOAD_TIMEOUT < 1:
            errors.append("DOWNLOAD_TIMEOUT must be >= 1")
        
        return errors
    
    @classmethod
    def display(cls) -> None:
        """Display current configuration."""
        print("=== Configuration ===")
        print(f"ARTIFACT_URL: {cls.ARTIFACT_URL}")
        print(f"GALLERY_URL: {cls.GALLERY_URL}")
        print(f"GIF_URL: {cls.GIF_URL}")
        print(f"STORAGE_URL: {cls.STORAGE_URL}")
        print(f"OUTPUT_DIR: {cls.OUTPUT_DIR}")
        print(f"LOGS_DIR: {cls.LOGS_DIR}")
        print(f"MAX_GIF_ATTEMPTS: {cls.MAX_GIF_ATTEMPTS}")
        print(f"GIF_RETRY_DELAY: {cls.GIF_RETRY_DELAY}s")
        print(f"REQUEST_TIMEOUT: {cls.REQUEST_TIMEOUT}s")
        print(f"DOWNLOAD_TIMEOUT: {cls.DOWNLOAD_TIMEOUT}s")
        print(f"LOG_LEVEL: {cls.LOG_LEVEL}")
        print("=" * 30)
