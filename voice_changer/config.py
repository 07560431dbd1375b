"""
Configuration management for the voice changer
"""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Logging
    log_level: str = "INFO"
    log_file: str = ""  # Empty disables the file handler

    # Output
    output_path: str = "."
    download_prefix: str = "voice-changed"

    # External tools
    ffmpeg_binary: str = "ffmpeg"

    def get_output_file(self, filename: str) -> str:
        """Resolve a filename inside the output directory."""
        return str(Path(self.output_path) / filename)

    class Config:
        env_prefix = "VOICE_CHANGER_"
        env_file = ".env"
        extra = "ignore"
        case_sensitive = False


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
