"""Suite settings powered by Pydantic BaseSettings."""

import logging
import os

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Reruns per failed test on CI when RERUNS is unset
CI_RERUNS = 2

# CI values that mean "not on CI"
FALSE_VALUES = frozenset({"", "0", "false", "no", "off"})


class AppSettings(BaseSettings):
    """Centralized environment configuration.

    Browser-side collaborator options (headless mode, screenshot, video and
    trace capture) are pytest options and live in pyproject.toml. Reruns
    and worker count follow CI, RERUNS and WORKERS and are applied by the
    root conftest.
    """

    model_config = SettingsConfigDict(
        env_prefix="",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
    )

    ui_base_url: str = Field(
        default="https://www.saucedemo.com", validation_alias="UI_BASE_URL"
    )
    api_base_url: str = Field(
        default="https://reqres.in", validation_alias="API_BASE_URL"
    )
    api_key: str = Field(default="reqres-free-v1", validation_alias="REQRES_API_KEY")
    api_timeout_seconds: float = Field(
        default=30.0, gt=0.0, le=300.0, validation_alias="API_TIMEOUT_SECONDS"
    )
    ui_expect_timeout_ms: int = Field(
        default=5000, ge=100, le=120_000, validation_alias="UI_EXPECT_TIMEOUT_MS"
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_json: bool = Field(default=True, validation_alias="LOG_JSON")
    run_live: bool = Field(default=False, validation_alias="RUN_LIVE")
    ci: bool = Field(default=False, validation_alias="CI")
    reruns: int | None = Field(default=None, ge=0, le=10, validation_alias="RERUNS")
    workers: str | None = Field(default=None, validation_alias="WORKERS")

    @field_validator("ui_base_url", "api_base_url")
    @classmethod
    def validate_origin(cls, v: str) -> str:
        """Require an http(s) origin and strip any trailing slash."""
        if not v.startswith(("http://", "https://")):
            msg = f"Origin must start with http:// or https://: {v}"
            raise ValueError(msg)
        return v.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize the log level name."""
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            msg = f"Unknown log level: {v}"
            raise ValueError(msg)
        return level

    @field_validator("ci", mode="before")
    @classmethod
    def validate_ci(cls, v: object) -> bool:
        """Treat any non-empty CI value other than an explicit false as set."""
        if isinstance(v, str):
            return v.strip().lower() not in FALSE_VALUES
        return bool(v)

    @field_validator("reruns", mode="before")
    @classmethod
    def validate_reruns(cls, v: object) -> object:
        """Treat an empty RERUNS as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("workers")
    @classmethod
    def validate_workers(cls, v: str | None) -> str | None:
        """Accept a positive worker count or `auto`."""
        if v is None or v == "":
            return None
        v = v.strip().lower()
        if v != "auto" and not (v.isdigit() and int(v) > 0):
            msg = f"WORKERS must be a positive integer or 'auto': {v}"
            raise ValueError(msg)
        return v

    @property
    def log_level_value(self) -> int:
        """Numeric logging level."""
        return logging.getLevelNamesMapping()[self.log_level]

    @property
    def effective_reruns(self) -> int:
        """Reruns per failed test: RERUNS if set, else 2 on CI and 0 locally."""
        if self.reruns is not None:
            return self.reruns
        return CI_RERUNS if self.ci else 0

    @property
    def effective_workers(self) -> int | None:
        """Parallel workers: WORKERS if set, else 1 on CI, else None.

        `auto` resolves to half the CPUs. None leaves the choice to the
        pytest command line.
        """
        if self.workers == "auto":
            return max(1, (os.cpu_count() or 2) // 2)
        if self.workers is not None:
            return int(self.workers)
        return 1 if self.ci else None


def get_settings() -> AppSettings:
    """Get a settings instance."""
    return AppSettings()
