"""
Constraint Engine Configuration — pydantic-settings based.

All settings are read from CONSTRAINT_* environment variables or a .env file.
Engine callers normally build EngineOptions from these defaults.
"""

from pydantic_settings import BaseSettings
from pydantic import Field

VERSION = "1.0.0"


class Settings(BaseSettings):
    """Process-wide defaults sourced from environment variables."""

    # ── Engine ──
    project_root: str = Field(
        default=".", description="Base path for file discovery and relative patterns"
    )
    max_concurrency: int = Field(
        default=10, ge=1, description="Files validated concurrently per batch"
    )
    enable_cache: bool = Field(
        default=True, description="Reuse results for unchanged file content"
    )
    verbose: bool = Field(default=False, description="Log rule-level failures")

    # ── Discovery ──
    exclude_patterns: list[str] = Field(
        default=["**/node_modules/**", "**/dist/**", "**/*.d.ts"],
        description="Global discovery exclusions (globs relative to project root)",
    )
    default_patterns: list[str] = Field(
        default=["**/*.ts", "**/*.js", "**/*.tsx", "**/*.jsx"],
        description="Patterns used by validate_project when none are given",
    )

    # ── Cache ──
    cache_ttl_seconds: int = Field(
        default=3600, description="Time-to-live for cached per-file results"
    )

    # ── Logging ──
    log_level: str = Field(default="INFO", description="Root log level for entry points")

    # ── Server ──
    max_file_size_bytes: int = Field(
        default=500_000, description="Max submitted file size accepted by the HTTP API"
    )
    port: int = Field(default=5001, description="Server port")
    host: str = Field(default="0.0.0.0", description="Server bind host")

    model_config = {
        "env_prefix": "CONSTRAINT_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


# Singleton instance, imported by other modules
settings = Settings()
