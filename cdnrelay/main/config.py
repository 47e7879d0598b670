"""
Application Settings - Main Layer

Use Pydantic Settings for configuration management.
This module handles configuration settings provided using
environment variables, .env files and default values.
"""

from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from cdnrelay.domain.entities.manifest import DeliveryMode, Rule
from cdnrelay.domain.entities.origin import Origin
from cdnrelay.domain.services.rule_engine import DEFAULT_RULES
from cdnrelay.shared import (
    MANIFEST_FILENAME,
    PROBE_FILENAME,
    EnumEnvironment,
    EnumLogLevel,
)


class OriginConfig(BaseModel):
    """One configured origin, in priority order."""

    name: str
    base_url: str
    probe_url: str

    def to_domain(self) -> Origin:
        return Origin(
            name=self.name,
            base_url=self.base_url.rstrip("/"),
            probe_url=self.probe_url,
        )


class RuleConfig(BaseModel):
    """One classification rule; unset attributes fall back to defaults."""

    pattern: str
    critical: Optional[bool] = None
    mode: Optional[DeliveryMode] = None
    priority: Optional[int] = Field(default=None, ge=1)

    def to_domain(self) -> Rule:
        return Rule(
            pattern=self.pattern,
            critical=self.critical,
            mode=self.mode,
            priority=self.priority,
        )


def _default_origins() -> List[OriginConfig]:
    return [
        OriginConfig(
            name="AWS",
            base_url="http://dev.cdn.ai",
            probe_url=f"http://dev.cdn.ai/{PROBE_FILENAME}",
        ),
        OriginConfig(
            name="Azure",
            base_url="http://stage.cdn.ai",
            probe_url=f"http://stage.cdn.ai/{PROBE_FILENAME}",
        ),
    ]


def _default_rules() -> List[RuleConfig]:
    return [
        RuleConfig(
            pattern=rule.pattern,
            critical=rule.critical,
            mode=rule.mode,
            priority=rule.priority,
        )
        for rule in DEFAULT_RULES
    ]


class ServerSettings(BaseSettings):
    """HTTP server configuration settings."""

    title: str = Field(default="CDN Relay", description="Service title")
    description: str = Field(
        default="Origin health monitoring, failover selection and "
        "manifest-driven asset delivery",
        description="Service description",
    )
    version: str = Field(default="1.0.0", description="Service version")
    host: str = Field(default="0.0.0.0", description="Interface to bind")
    port: int = Field(default=3000, description="Port to bind the server")
    reload: bool = Field(
        default=False, description="Enable auto-reload for development"
    )

    model_config = SettingsConfigDict(
        env_prefix="SERVER_", case_sensitive=False, extra="ignore"
    )


class StorageSettings(BaseSettings):
    """Asset storage configuration settings."""

    assets_dir: str = Field(
        default="./buckets", description="Directory holding uploaded assets"
    )
    manifest_filename: str = Field(
        default=MANIFEST_FILENAME, description="Persisted manifest file name"
    )
    reserved_names: List[str] = Field(
        default_factory=lambda: [PROBE_FILENAME],
        description="Stored files never listed in the manifest",
    )

    model_config = SettingsConfigDict(
        env_prefix="STORAGE_", case_sensitive=False, extra="ignore"
    )


class MonitorSettings(BaseSettings):
    """Origin health monitor configuration settings."""

    origins: List[OriginConfig] = Field(
        default_factory=_default_origins,
        description="Origins in priority order (JSON list)",
    )
    interval_seconds: float = Field(
        default=5.0, gt=0, description="Delay between probe cycles"
    )
    probe_timeout_seconds: float = Field(
        default=1.0, gt=0, description="Timeout of the liveness request"
    )
    connect_timeout_seconds: float = Field(
        default=1.0, gt=0, description="Timeout of the TCP reachability check"
    )
    subscriber_buffer_size: int = Field(
        default=16, ge=1, description="Pending events kept per stream subscriber"
    )

    model_config = SettingsConfigDict(
        env_prefix="MONITOR_", case_sensitive=False, extra="ignore"
    )


class RuleSettings(BaseSettings):
    """Default classification rules for uploaded assets."""

    rules: List[RuleConfig] = Field(
        default_factory=_default_rules,
        description="Ordered rules, first match wins (JSON list)",
    )

    model_config = SettingsConfigDict(
        env_prefix="RULES_", case_sensitive=False, extra="ignore"
    )


class LoaderSettings(BaseSettings):
    """Loader client configuration settings."""

    server_url: str = Field(
        default="http://localhost:3000", description="Relay server base URL"
    )
    local_fallback_base: Optional[str] = Field(
        default=None,
        description="Base URL of the local fallback (defaults to server_url)",
    )
    timeout_seconds: float = Field(
        default=10.0, gt=0, description="Timeout of each loader request"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOADER_", case_sensitive=False, extra="ignore"
    )

    @property
    def fallback_base(self) -> str:
        return self.local_fallback_base or self.server_url


class LoggingSettings(BaseSettings):
    """Logging configuration settings."""

    level: EnumLogLevel = Field(default=EnumLogLevel.INFO, description="Logging level")
    file_path: Optional[str] = Field(
        default=None, description="Log file path (if None, logs to console)"
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_", case_sensitive=False, extra="ignore"
    )


class AppSettings(BaseSettings):
    """Main application settings, aggregating all sub-settings."""

    environment: EnumEnvironment = Field(
        default=EnumEnvironment.DEVELOPMENT, description="Application environment"
    )

    server: ServerSettings = Field(default_factory=ServerSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    monitor: MonitorSettings = Field(default_factory=MonitorSettings)
    rules: RuleSettings = Field(default_factory=RuleSettings)
    loader: LoaderSettings = Field(default_factory=LoaderSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )


def get_settings() -> AppSettings:
    """
    Get application settings instance Factory.

    Used to be mocked in tests, allowing different settings based on environment.
    """
    return AppSettings()
