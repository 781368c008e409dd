from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    host: str = "127.0.0.1"
    port: int = 9000
    log_level: str = "INFO"
    gemini_api_key: str = ""
    gemini_api_key_backup: str = ""
    gemini_models: list[str] = ["gemini-2.5-flash"]
    temperature: float = 0.7
    pdf_mode: Literal["inline", "extract"] = "inline"
    max_upload_mb: int = 20
    cache_file: Path = Path("studyguardian_cache.json")

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def gemini_api_keys(self) -> list[str]:
        return [k for k in (self.gemini_api_key, self.gemini_api_key_backup) if k]


@lru_cache
def get_settings() -> Settings:
    return Settings()
