"""
Plugin configuration using pydantic-settings.

Settings only supply defaults for transport tuning and logging; every value
can still be overridden per invocation on the command line.

環境變數統一使用 ``CPU_CHECK_`` 前綴：
    CPU_CHECK_SNMP_TIMEOUT=10
    CPU_CHECK_SNMP_MOCK_FILE=/etc/icinga2/snmp/core-sw1.yaml
"""
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Plugin settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CPU_CHECK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    check_name: str = Field(
        default="CPU",
        description="Service name printed at the start of the report line",
    )

    # SNMP transport
    snmp_port: int = Field(default=161, description="SNMP agent UDP port")
    snmp_timeout: float = Field(
        default=5.0,
        description="Per-request timeout in seconds",
    )
    snmp_retries: int = Field(default=2, description="Per-request retries")
    snmp_max_repetitions: int = Field(
        default=25,
        description="GETBULK max-repetitions used by walks (SNMPv2c/v3)",
    )
    snmp_walk_timeout: float = Field(
        default=120.0,
        description="Upper bound in seconds for a whole subtree walk",
    )
    snmp_mock_file: str = Field(
        default="",
        description="YAML snapshot served instead of querying the device",
    )

    # Logging (stderr only, stdout belongs to the plugin report)
    log_level: str = Field(default="WARNING", description="Root log level")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance (Singleton pattern)."""
    return Settings()
