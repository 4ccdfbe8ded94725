from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings

CLIENT_SECRET_FILENAME = "google_credentials.json"
TOKEN_FILENAME = "youtube_token.json"

LogLevel = Literal["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]


class Settings(BaseSettings):
    credentials_dir: Path = Path.home() / ".credentials"
    client_secret_file: Path | None = None
    token_file: Path | None = None
    log_level: LogLevel = "ERROR"
    downloader_binary: str = "yt-dlp"
    oauth_port: int = 0

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value

    @property
    def client_secret_path(self) -> Path:
        return self.client_secret_file or self.credentials_dir / CLIENT_SECRET_FILENAME

    @property
    def token_path(self) -> Path:
        return self.token_file or self.credentials_dir / TOKEN_FILENAME


@lru_cache
def get_settings() -> Settings:
    return Settings()
