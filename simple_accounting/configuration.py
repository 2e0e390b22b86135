"""Mini README: Centralised configuration models and helpers for Simple Accounting.

Structure:
    * AccountingSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to read environment variables, pick the ledger
    storage backend, tune the PDF export timeout, and specify service ports.
    The configuration is cached so the cost of validation is incurred only
    once per process.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field, validator
from pydantic_settings import BaseSettings


class AccountingSettings(BaseSettings):
    """Runtime configuration for the Simple Accounting service."""

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    log_level: str = Field(
        "INFO",
        description="Root logging level applied by the CLI launcher.",
    )
    storage_backend: str = Field(
        "sqlite",
        description="Ledger storage backend: 'sqlite' for a durable file or 'memory'.",
    )
    database_path: Path = Field(
        Path("data/accounting.db"),
        description="SQLite file holding the transactions table.",
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the API service to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Default port the API service exposes.",
        ge=1,
        le=65535,
    )
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://localhost:3001"],
        description="Frontend origins allowed to call the API from a browser.",
    )
    journal_label: str = Field(
        "仕訳帳",
        description="Journal title used in the PDF heading and download filename.",
    )
    currency_suffix: str = Field(
        "円",
        description="Suffix appended to formatted amounts in the journal.",
    )
    pdf_timeout_seconds: float = Field(
        30.0,
        description="Overall deadline for one PDF export, browser provisioning included.",
        gt=0,
    )
    auto_install_browser: bool = Field(
        True,
        description="Download the headless Chromium build on first export when missing.",
    )

    class Config:
        env_prefix = "SIMPLE_ACCOUNTING_"
        env_file = ".env"
        case_sensitive = False

    @validator("storage_backend", pre=True)
    def _normalise_backend(cls, value: str) -> str:
        """Accept any casing and reject unknown backends early."""

        backend = str(value).strip().lower()
        if backend not in {"sqlite", "memory"}:
            raise ValueError(f"Unsupported storage backend: {value}")
        return backend

    @validator("database_path", pre=True)
    def _expand_path(cls, value: str | Path) -> Path:
        """Ensure the database path expands user directories and its folder exists."""

        path = Path(value).expanduser().resolve()
        path.parent.mkdir(parents=True, exist_ok=True)
        return path


@lru_cache()
def get_settings() -> AccountingSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return AccountingSettings()
