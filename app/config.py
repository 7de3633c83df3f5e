from __future__ import annotations

import logging
import os
from functools import lru_cache

from pydantic import BaseModel, Field
from pydantic import ConfigDict, field_validator

ENV_BOOL_TRUE = {"1", "true", "yes", "on"}
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.lower() in ENV_BOOL_TRUE


class Settings(BaseModel):
    build_version: str = Field(default_factory=lambda: os.getenv("BUILD_VERSION", "dev"))
    build_sha: str = Field(default_factory=lambda: os.getenv("BUILD_SHA", "local"))
    log_dir: str = Field(default_factory=lambda: os.getenv("LOG_DIR", "logs"))
    log_to_file: bool = Field(default_factory=lambda: _env_bool("LOG_TO_FILE", False))
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    max_dependents: int = Field(default_factory=lambda: int(os.getenv("MAX_DEPENDENTS", "30")))

    model_config = ConfigDict(frozen=True, validate_default=True)

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        upper = (value or "INFO").upper()
        if upper not in _LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {sorted(_LOG_LEVELS)}, got {upper}")
        return upper

    @field_validator("max_dependents")
    @classmethod
    def _validate_max_dependents(cls, value: int) -> int:
        return max(0, value)

    def level(self) -> int:
        return logging.getLevelName(self.log_level)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
