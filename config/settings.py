from __future__ import annotations

import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv


load_dotenv()


def _optional_float(name: str) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return float(raw)


class Settings:
    """Application settings loaded from environment variables.

    Keep all credentials and config centralized here. The provider key is
    handed to the gateway explicitly; nothing else reads it.
    """

    def __init__(self) -> None:
        self.app_env: str = os.getenv("APP_ENV", "development")
        self.google_api_key: Optional[str] = os.getenv("GOOGLE_API_KEY") or None
        self.gemini_model: str = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")
        self.temperature: float = float(os.getenv("MODEL_TEMPERATURE", "0.3"))
        self.top_p: float = float(os.getenv("MODEL_TOP_P", "0.9"))
        self.model_timeout: Optional[float] = _optional_float("MODEL_TIMEOUT")
        self.gateway_url: str = os.getenv("GATEWAY_URL", "http://127.0.0.1:8000")
        self.client_timeout: Optional[float] = _optional_float("CLIENT_TIMEOUT")

    @property
    def is_dev(self) -> bool:
        return self.app_env.lower() in {"dev", "development", "local"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
