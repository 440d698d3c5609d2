"""Application configuration."""
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="HOOKCLIP_",
    )

    # App settings
    app_name: str = "HookClip"
    debug: bool = False

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000

    # Analysis defaults (used when a request omits them)
    default_clip_length_seconds: float = 35.0
    default_clip_count: int = 3
    default_language: str = "en"

    # Only the first N caption segments are analyzed
    max_transcript_segments: int = 1200

    # Debug output
    write_debug_json: bool = False
    debug_dir: Path = Path("./data/debug")

    # Frontend
    frontend_url: str = "http://localhost:3000"


settings = Settings()
