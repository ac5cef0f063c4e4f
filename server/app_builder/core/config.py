# app_builder/core/config.py
import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

DEFAULT_MODEL = "gemini-2.5-flash-lite"
DEFAULT_PORT = 5050
DEFAULT_LOG_DIR = "./ai_backend_logs"
MAX_DESCRIPTION_CHARS = 2000
MAX_OUTPUT_TOKENS = 5000


@dataclass(frozen=True)
class Settings:
    model: str = DEFAULT_MODEL
    api_key: Optional[str] = None
    port: int = DEFAULT_PORT
    log_dir: str = DEFAULT_LOG_DIR
    max_description_chars: int = MAX_DESCRIPTION_CHARS
    max_output_tokens: int = MAX_OUTPUT_TOKENS
    temperature: float = 0.5
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "Settings":
        """
        Read settings from the environment (and a .env file, unless dotenv=False).
        Built once in create_app and handed to the request handlers.
        """
        if dotenv:
            load_dotenv()
        origins = os.environ.get("APP_BUILDER_CORS_ORIGINS", "*")
        return cls(
            model=os.environ.get("APP_BUILDER_MODEL", DEFAULT_MODEL),
            api_key=os.environ.get("GOOGLE_API_KEY_GEMINI") or None,
            port=int(os.environ.get("PORT", DEFAULT_PORT)),
            log_dir=os.environ.get("APP_BUILDER_LOG_DIR", DEFAULT_LOG_DIR),
            max_description_chars=int(os.environ.get("APP_BUILDER_MAX_DESCRIPTION", MAX_DESCRIPTION_CHARS)),
            max_output_tokens=int(os.environ.get("APP_BUILDER_MAX_OUTPUT_TOKENS", MAX_OUTPUT_TOKENS)),
            temperature=float(os.environ.get("APP_BUILDER_TEMPERATURE", 0.5)),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        )
