import os
from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator


class Settings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    app_env: Literal["development", "test", "production"] = "production"
    generation_transport: Literal["relay", "direct"] = "relay"
    relay_url: str | None = None
    relay_token: str | None = None
    llm_api_key: str | None = None
    llm_base_url: str = "https://api.deepseek.com"
    llm_model: str = "deepseek-chat"
    generation_timeout_seconds: float = Field(default=30.0, gt=0)

    @model_validator(mode="after")
    def _validate_urls(self) -> "Settings":
        for name in ("llm_base_url", "relay_url"):
            value = getattr(self, name)
            if value is not None and not value.startswith(("http://", "https://")):
                raise ValueError(f"{name.upper()} must be an http(s) URL")
        return self

    @property
    def fallback_enabled(self) -> bool:
        return self.app_env != "production"


def _optional(name: str) -> str | None:
    value = os.getenv(name, "").strip()
    return value or None


@lru_cache
def get_settings() -> Settings:
    raw = {
        "app_env": os.getenv("APP_ENV", "production").strip().lower(),
        "generation_transport": os.getenv("GENERATION_TRANSPORT", "relay").strip().lower(),
        "relay_url": _optional("RELAY_URL"),
        "relay_token": _optional("RELAY_TOKEN"),
        "llm_api_key": _optional("LLM_API_KEY"),
        "llm_base_url": os.getenv("LLM_BASE_URL", "https://api.deepseek.com"),
        "llm_model": os.getenv("LLM_MODEL", "deepseek-chat"),
        "generation_timeout_seconds": os.getenv("GENERATION_TIMEOUT_SECONDS", "30"),
    }
    try:
        return Settings.model_validate(raw)
    except ValidationError as exc:
        raise RuntimeError(f"Invalid configuration: {exc}") from exc
