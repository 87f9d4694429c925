"""
Centralized configuration management for ArchGraph.

All environment variables and settings are managed here to ensure consistency
across the API, the CLI and the upstream clients.
"""

from functools import lru_cache
from typing import Optional, Dict, Any, List
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from pathlib import Path


class Settings(BaseSettings):
    """
    Centralized settings for ArchGraph.

    All configuration is loaded from environment variables with sensible defaults.
    Uses Pydantic for validation and type safety.
    """

    # === Application Settings ===
    app_name: str = Field(default="ArchGraph", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: Optional[str] = Field(default=None, description="Optional log file path")

    # === API Settings ===
    api_host: str = Field(default="0.0.0.0", description="API host")
    api_port: int = Field(default=8080, description="API port")
    cors_origins: List[str] = Field(default=["*"], description="Allowed CORS origins")

    # === Core Service Settings ===
    core_service_url: str = Field(
        default="http://localhost:8081", description="Core service base URL", validation_alias="CORE_SERVICE_URL"
    )
    core_service_timeout: float = Field(default=30.0, gt=0, description="Core service request timeout in seconds")
    records_file: Optional[Path] = Field(
        default=None,
        description="JSON snapshot used instead of the core service",
        validation_alias="ARCHGRAPH_RECORDS_FILE",
    )

    # === Monitoring Settings ===
    enable_metrics: bool = Field(default=True, description="Enable metrics collection")
    metrics_max_history: int = Field(default=1000, description="Max samples kept per metric")

    # === Logging Configuration ===
    @property
    def logging_config(self) -> Dict[str, Any]:
        """Get logging configuration."""
        return {
            'level': self.log_level,
            'file': self.log_file,
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        }

    # === Monitoring Configuration ===
    @property
    def monitoring_config(self) -> Dict[str, Any]:
        """Get monitoring configuration."""
        return {
            'enabled': self.enable_metrics,
            'max_history': self.metrics_max_history,
        }

    # === Upstream Configuration ===
    @property
    def upstream_config(self) -> Dict[str, Any]:
        """Get core service configuration as dictionary."""
        return {
            'base_url': self.core_service_url.rstrip('/'),
            'timeout': self.core_service_timeout,
            'records_file': self.records_file,
        }

    @field_validator('core_service_url')
    @classmethod
    def validate_core_service_url(cls, v):
        if not v.startswith(("http://", "https://")):
            raise ValueError("CORE_SERVICE_URL must be an http(s) URL")
        return v

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "populate_by_name": True,
        "extra": "ignore",
    }


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses LRU cache to ensure settings are only loaded once per application lifecycle.
    """
    return Settings()
