"""Centralized configuration management using Pydantic Settings."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Defines application settings, loaded from environment variables or .env file.

    Attributes
    ----------
    max_archive_size : int
        Largest archive file, in bytes, the loader reads into memory.
    verify_archive_data : bool
        Check member data while indexing so corrupt archives are rejected
        up front.
    state_file : pathlib.Path
        JSON file remembering the last visited path of each archive.
    restore_last_path : bool
        Start browsing where the previous session left off.
    log_format : str
        Log record format.
    """

    max_archive_size: int = 512 * 1024 * 1024
    verify_archive_data: bool = True
    state_file: Path = Path.home() / ".archive_browser_state.json"
    restore_last_path: bool = True
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    model_config = SettingsConfigDict(
        env_prefix="ARCHIVE_BROWSER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
