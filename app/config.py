"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import load_env_files


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


@dataclass(frozen=True)
class UploadSettings:
    """
    Runtime settings for collection uploads.
    """

    sample_size: int = 5
    batch_size: int = 500
    log_validation_errors: bool = True
    max_file_bytes: int = 10 * 1024 * 1024


@lru_cache(maxsize=1)
def get_upload_settings() -> UploadSettings:
    """
    Return cached upload settings from environment variables.
    """

    return UploadSettings(
        sample_size=max(1, _get_int_env("UPLOAD_SCHEMA_SAMPLE_SIZE", 5)),
        batch_size=max(1, _get_int_env("UPLOAD_BATCH_SIZE", 500)),
        log_validation_errors=_get_bool_env("UPLOAD_LOG_VALIDATION_ERRORS", True),
        max_file_bytes=max(1, _get_int_env("UPLOAD_MAX_FILE_BYTES", 10 * 1024 * 1024)),
    )
