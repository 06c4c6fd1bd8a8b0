import os
from typing import Annotated

from pydantic_settings import BaseSettings, NoDecode


def _parse_list_env(name: str) -> list[str] | None:
    """Parse a list env var as comma-separated string or JSON list."""
    raw = os.environ.get(name)
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings(BaseSettings):
    gemini_api_key: str = ""
    # Ordered fallback chain, tried strictly one after another
    gemini_models: Annotated[list[str], NoDecode] = [
        "gemini-2.5-flash",
        "gemini-2.0-flash",
        "gemini-2.0-flash-001",
        "gemini-2.5-pro",
    ]
    min_resume_chars: int = 200
    max_error_message_chars: int = 500
    max_upload_size_mb: int = 5
    cors_origins: Annotated[list[str], NoDecode] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    debug: bool = False

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_ignore_empty": True,
        "protected_namespaces": ("settings_",),
    }


def _list_overrides() -> dict[str, list[str]]:
    overrides = {}
    for field, env_name in (("cors_origins", "CORS_ORIGINS"), ("gemini_models", "GEMINI_MODELS")):
        parsed = _parse_list_env(env_name)
        if parsed:
            overrides[field] = parsed
    return overrides


settings = Settings(**_list_overrides())
