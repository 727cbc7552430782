import os
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field, ValidationError

DEFAULT_GEMINI_MODEL = "gemini-2.5-flash-preview-09-2025"
DEFAULT_GEMINI_API_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


class Settings(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    gemini_api_key: str | None = None
    gemini_model: str = DEFAULT_GEMINI_MODEL
    gemini_api_base_url: str = DEFAULT_GEMINI_API_BASE_URL
    gemini_timeout_seconds: float | None = Field(default=None, gt=0)
    validate_output: bool = False


def _env_flag(name: str) -> bool:
    return os.getenv(name, "0").strip().lower() in {"1", "true", "yes", "on"}


@lru_cache
def get_settings() -> Settings:
    raw = {
        "gemini_api_key": os.getenv("GEMINI_API_KEY") or None,
        "gemini_model": os.getenv("GEMINI_MODEL", DEFAULT_GEMINI_MODEL).strip(),
        "gemini_api_base_url": os.getenv(
            "GEMINI_API_BASE_URL", DEFAULT_GEMINI_API_BASE_URL
        ).rstrip("/"),
        "gemini_timeout_seconds": os.getenv("GEMINI_TIMEOUT_SECONDS") or None,
        "validate_output": _env_flag("RECIPE_VALIDATE_OUTPUT"),
    }
    try:
        return Settings.model_validate(raw)
    except ValidationError as exc:
        raise RuntimeError(f"Invalid configuration: {exc}") from exc
