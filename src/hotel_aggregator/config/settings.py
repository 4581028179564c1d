"""Runtime configuration for the hotel aggregator.

Relies on pydantic-settings so that environment variables (prefixed with ``HOTELS_``)
can override defaults.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Iterable, Optional, Tuple

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from hotel_aggregator.services.retry import RetryPolicy

from .suppliers import SupplierRegistry

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Captures runtime configuration for supplier fetching and output."""

    supplier_timeout_s: float = Field(default=10.0, description="Per-request timeout for supplier calls")
    fetch_max_attempts: int = Field(default=3, description="Attempts per supplier before giving up")
    retry_base_delay_s: float = Field(default=1.0, description="Wait after the first failed attempt")
    retry_backoff_factor: float = Field(default=2.0, description="Multiplier applied to the wait per attempt")
    retry_jitter: float = Field(default=0.25, description="Relative random spread applied to each wait")
    retry_on_status: Annotated[Tuple[int, ...], NoDecode] = Field(
        default=(429,), description="Status codes below 500 that are still retried"
    )

    suppliers_path: Optional[Path] = Field(
        default=None, description="JSON supplier table; built-in suppliers are used when unset"
    )
    supplier_names: Annotated[Tuple[str, ...], NoDecode] = Field(
        default=(), description="Restrict fetching to these suppliers; comma-separated when provided via env"
    )

    log_level: str = Field(default="INFO")
    log_dir: Path = Field(default=Path("data/logs"))
    output_dir: Path = Field(default=Path("data/catalog"))

    model_config = SettingsConfigDict(
        env_prefix="HOTELS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("suppliers_path", mode="before")
    def _expand_suppliers_path(cls, value: str | Path | None) -> Optional[Path]:
        if value in (None, ""):
            return None
        return Path(value).expanduser()

    @field_validator("log_dir", "output_dir", mode="before")
    def _expand_dir(cls, value: str | Path) -> Path:
        if isinstance(value, Path):
            return value
        return Path(value).expanduser()

    @field_validator("supplier_timeout_s")
    def _validate_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("supplier_timeout_s must be positive")
        return value

    @field_validator("fetch_max_attempts")
    def _validate_attempts(cls, value: int) -> int:
        if value < 1:
            raise ValueError("fetch_max_attempts must be at least 1")
        return value

    @field_validator("retry_jitter")
    def _validate_jitter(cls, value: float) -> float:
        if not 0 <= value <= 1:
            raise ValueError("retry_jitter must be between 0 and 1")
        return value

    @field_validator("supplier_names", mode="before")
    def _parse_supplier_names(cls, value: object) -> Tuple[str, ...]:
        if value is None or value == "":
            return ()
        if isinstance(value, (list, tuple)):
            return tuple(str(item).strip() for item in value if str(item).strip())
        if isinstance(value, str):
            names: Iterable[str] = (name.strip() for name in value.split(","))
            return tuple(name for name in names if name)
        raise TypeError("supplier_names must be provided as a comma-separated string or list")

    @field_validator("retry_on_status", mode="before")
    def _parse_retry_on_status(cls, value: object) -> Tuple[int, ...]:
        if value is None or value == "":
            return ()
        if isinstance(value, str):
            return tuple(int(code.strip()) for code in value.split(",") if code.strip())
        if isinstance(value, (list, tuple)):
            return tuple(int(code) for code in value)
        raise TypeError("retry_on_status must be provided as a comma-separated string or list")

    def ensure_directories(self) -> None:
        """Create directories that must exist at runtime."""
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def retry_policy(self) -> RetryPolicy:
        return RetryPolicy(
            max_attempts=self.fetch_max_attempts,
            base_delay=self.retry_base_delay_s,
            backoff_factor=self.retry_backoff_factor,
            jitter=self.retry_jitter,
            retry_on_status=self.retry_on_status,
        )

    def supplier_registry(self) -> SupplierRegistry:
        if self.suppliers_path is not None:
            logger.info("Loading supplier table from %s", self.suppliers_path)
            registry = SupplierRegistry.load(self.suppliers_path)
        else:
            registry = SupplierRegistry.default()
        if self.supplier_names:
            registry = registry.select(self.supplier_names)
        return registry
