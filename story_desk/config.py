"""Client settings from the environment (and a .env file, if present).

    STORY_DESK_BACKEND_URL  API root of the story backend
    DATA_DIR                Local data directory (shared with the backend)
    STORY_DESK_DRAFTS       Draft cache file (default: <DATA_DIR>/drafts.json)
    STORY_DESK_MIN_WORDS    Words a story needs before it can be submitted
    STORY_DESK_TIMEOUT      HTTP timeout in seconds
    STORY_DESK_LOG_LEVEL    Logging level name
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

ROOT = Path(__file__).parent.parent

DEFAULT_BACKEND_URL = "http://localhost:13013/api"


class Settings(BaseModel):
    backend_url: str = DEFAULT_BACKEND_URL
    data_dir: Path = Path("data")
    drafts_path: Path | None = None
    min_words: int = 500
    timeout: float = 10.0
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, v: str) -> str:
        if v.upper() not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level {v!r}")
        return v.upper()

    @property
    def drafts_file(self) -> Path:
        return self.drafts_path or self.data_dir / "drafts.json"


def load_settings(env_file: Path | None = None) -> Settings:
    load_dotenv(env_file or ROOT / ".env")
    values: dict[str, str] = {}
    for field, var in (
        ("backend_url", "STORY_DESK_BACKEND_URL"),
        ("data_dir", "DATA_DIR"),
        ("drafts_path", "STORY_DESK_DRAFTS"),
        ("min_words", "STORY_DESK_MIN_WORDS"),
        ("timeout", "STORY_DESK_TIMEOUT"),
        ("log_level", "STORY_DESK_LOG_LEVEL"),
    ):
        value = os.getenv(var, "")
        if value:
            values[field] = value
    return Settings.model_validate(values)
