"""Configuration for the EquiSplit calculation engine.

This module provides Pydantic Settings-based configuration with environment
variable support and defaults matching the published methodology.

Usage:
    from equisplit_core.config import EngineConfig

    # Load from environment variables and .env file
    config = EngineConfig()

    # Tighten the equalization threshold for a what-if analysis
    config = EngineConfig(equalization_threshold=Decimal("250"))
"""

import logging
from decimal import Decimal

import structlog
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


METHODOLOGY_VERSION = "2025.1"


class EngineConfig(BaseSettings):
    """Engine settings.

    Environment Variables:
        EQUISPLIT_ENV: Environment name (development, staging, production, test)
        EQUISPLIT_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        EQUISPLIT_METHODOLOGY_VERSION: Algorithm version stamped on results
        EQUISPLIT_EQUALIZATION_THRESHOLD: Net-value gap that triggers an
            equalization payment
        EQUISPLIT_VERIFY_CONSERVATION: Re-check that spouse totals equal the
            net estate after every calculation
        EQUISPLIT_CONSERVATION_TOLERANCE: Allowed rounding drift in that check
    """

    model_config = SettingsConfigDict(
        env_prefix="EQUISPLIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    env: str = Field(
        default="development",
        description="Environment name (development, staging, production, test)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    methodology_version: str = Field(
        default=METHODOLOGY_VERSION,
        description="Algorithm version recorded on every result for audit",
    )
    equalization_threshold: Decimal = Field(
        default=Decimal("1000"),
        ge=0,
        description="Minimum net-value difference before an equalization payment is due",
    )
    verify_conservation: bool = Field(
        default=True,
        description="Verify the conservation law on every calculation",
    )
    conservation_tolerance: Decimal = Field(
        default=Decimal("0.01"),
        ge=0,
        description="Tolerance for the conservation check",
    )

    @field_validator("env")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """Validate environment name."""
        valid_envs = {"development", "staging", "production", "test"}
        v_lower = v.lower().strip()
        if v_lower not in valid_envs:
            raise ValueError(f"Invalid environment: {v}. Must be one of: {valid_envs}")
        return v_lower

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate and normalize log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper().strip()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {v}. Must be one of: {valid_levels}")
        return v_upper

    @field_validator("methodology_version")
    @classmethod
    def validate_methodology_version(cls, v: str) -> str:
        """Ensure methodology version is not empty."""
        if not v or not v.strip():
            raise ValueError("Methodology version cannot be empty")
        return v.strip()

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.env == "production"

    @property
    def is_debug(self) -> bool:
        """Check if debug logging is enabled."""
        return self.log_level == "DEBUG"


def configure_logging(config: EngineConfig) -> None:
    """Configure structlog for a host process.

    The engine itself only calls ``structlog.get_logger()``. Hosts that want
    engine events rendered call this once at startup: JSON lines in
    production, a console renderer otherwise.
    """
    renderer = (
        structlog.processors.JSONRenderer()
        if config.is_production
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(config.log_level)
        ),
        cache_logger_on_first_use=False,
    )
