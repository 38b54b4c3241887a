# Copyright 2025 Vijaykumar Singh
# SPDX-License-Identifier: Apache-2.0
"""
Pydantic settings models for FiscalMetrics configuration.

This module provides type-safe configuration with validation using Pydantic.
Configuration is loaded from config.yaml with environment variable substitution.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Dict, Optional

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CONFIG_PATH = "config.yaml"

# =============================================================================
# Application Settings
# =============================================================================


class ApplicationSettings(BaseSettings):
    """Application metadata and environment configuration."""

    model_config = SettingsConfigDict(env_prefix="APP_")

    name: str = Field(default="FiscalMetrics")
    version: str = Field(default="0.1.0")
    environment: str = Field(default="development")
    debug: bool = Field(default=False)

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is development or production."""
        if v not in ["development", "production"]:
            raise ValueError("environment must be 'development' or 'production'")
        return v


# =============================================================================
# Metrics Settings
# =============================================================================


class MetricsSettings(BaseSettings):
    """Defaults applied when a request leaves a parameter unset."""

    model_config = SettingsConfigDict(env_prefix="METRICS_")

    default_period_type: str = Field(default="quarterly")
    default_period_count: int = Field(default=8)
    default_fiscal_year_end_month: int = Field(default=12)
    default_currency: str = Field(default="USD")
    heat_map_enabled: bool = Field(default=True)
    currency_symbols: Dict[str, str] = Field(
        default_factory=lambda: {"USD": "$", "INR": "₹", "EUR": "€", "GBP": "£", "JPY": "¥"}
    )

    @field_validator("default_period_type")
    @classmethod
    def validate_period_type(cls, v: str) -> str:
        """Validate period type is quarterly or annual."""
        normalized = v.strip().lower()
        if normalized not in ["quarterly", "annual"]:
            raise ValueError("default_period_type must be 'quarterly' or 'annual'")
        return normalized

    @field_validator("default_period_count")
    @classmethod
    def validate_period_count(cls, v: int) -> int:
        """Validate period count is reasonable."""
        if not 1 <= v <= 40:
            raise ValueError("default_period_count must be between 1 and 40")
        return v

    @field_validator("default_fiscal_year_end_month")
    @classmethod
    def validate_fye_month(cls, v: int) -> int:
        """Validate fiscal year end month is a calendar month."""
        if not 1 <= v <= 12:
            raise ValueError("default_fiscal_year_end_month must be between 1 and 12")
        return v

    @field_validator("currency_symbols")
    @classmethod
    def normalize_currency_codes(cls, v: Dict[str, str]) -> Dict[str, str]:
        """Store currency codes upper-cased."""
        return {code.upper(): symbol for code, symbol in v.items()}


# =============================================================================
# Logging Settings
# =============================================================================


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = Field(default="INFO")
    format: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    file: Optional[str] = Field(default=None)

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate level is a standard logging level name."""
        level = v.upper()
        if level not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            raise ValueError(f"Unknown log level: {v}")
        return level


# =============================================================================
# Master Configuration
# =============================================================================


class FiscalMetricsConfig(BaseSettings):
    """
    Master configuration - single source of truth.

    Example:
        >>> config = FiscalMetricsConfig.from_yaml("config.yaml")
        >>> print(config.metrics.default_period_count)
        8
    """

    model_config = SettingsConfigDict(extra="allow")

    application: ApplicationSettings = Field(default_factory=ApplicationSettings)
    metrics: MetricsSettings = Field(default_factory=MetricsSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def from_yaml(cls, config_path: str | Path = DEFAULT_CONFIG_PATH) -> "FiscalMetricsConfig":
        """
        Load configuration from YAML file with environment variable substitution.

        Args:
            config_path: Path to config.yaml file (default: "config.yaml")

        Returns:
            Validated FiscalMetricsConfig instance

        Raises:
            ValidationError: If configuration is invalid
            FileNotFoundError: If config file doesn't exist
            ValueError: If required environment variable is missing
        """
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "r", encoding="utf-8") as f:
            yaml_content = f.read()

        # Pattern: ${VAR_NAME} or ${VAR_NAME:-default_value}
        def env_var_replacer(match):
            var_spec = match.group(1)
            if ":-" in var_spec:
                var_name, default = var_spec.split(":-", 1)
                return os.getenv(var_name, default)
            value = os.getenv(var_spec)
            if value is None:
                raise ValueError(f"Environment variable {var_spec} not set and no default provided")
            return value

        yaml_content = re.sub(r"\$\{([^}]+)\}", env_var_replacer, yaml_content)
        config_dict = yaml.safe_load(yaml_content) or {}

        return cls(**config_dict)


_settings: Optional[FiscalMetricsConfig] = None


def get_settings(config_path: Optional[str | Path] = None) -> FiscalMetricsConfig:
    """
    Get application settings.

    With no path, returns a cached instance loaded from ./config.yaml, or
    defaults when that file does not exist. An explicit path always loads
    that file.
    """
    global _settings
    if config_path is not None:
        return FiscalMetricsConfig.from_yaml(config_path)

    if _settings is None:
        try:
            _settings = FiscalMetricsConfig.from_yaml(DEFAULT_CONFIG_PATH)
        except FileNotFoundError:
            _settings = FiscalMetricsConfig()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings (used by tests and config reloads)."""
    global _settings
    _settings = None


__all__ = [
    "FiscalMetricsConfig",
    "ApplicationSettings",
    "MetricsSettings",
    "LoggingSettings",
    "get_settings",
    "reset_settings",
]
