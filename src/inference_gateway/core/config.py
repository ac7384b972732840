import os
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    huggingface_api_key: str = os.getenv("HUGGINGFACE_API_KEY", "")
    openrouter_api_key: str = os.getenv("OPENROUTER_API_KEY", "")

    huggingface_base_url: str = "https://router.huggingface.co/hf-inference/models"
    openrouter_base_url: str = "https://openrouter.ai/api/v1"
    openrouter_referer: str = "https://g-squad.dev"
    openrouter_title: str = "G-Squad AI Studio"

    # Per-call HTTP timeout in seconds; retry budgets live in the catalog
    request_timeout: float = 120.0

    log_level: str = "INFO"
    log_dir: Optional[str] = None

    class Config:
        env_file = ".env"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
