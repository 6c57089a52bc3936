# filemerger/config.py
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Sandbox: comma-separated directories; empty means the working directory
    ALLOWED_DIRECTORIES: str = ""
    # Escape hatch: no restrictions at all. Must be set explicitly.
    ALLOW_ALL_PATHS: bool = False

    # Merge behaviour
    MERGE_CHUNK_SIZE: int = 64 * 1024
    MERGE_ATOMIC_WRITES: bool = True   # temp file + rename; False truncates the output in place
    MERGE_STAT_WORKERS: int = 8

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"

    def allowed_directories(self) -> list[str]:
        return [d.strip() for d in self.ALLOWED_DIRECTORIES.split(",") if d.strip()]
