"""Application settings and configuration management."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from famlyeml.config.constants import DATA_TABLE_ID


class Config(BaseSettings):
    """Application configuration with validation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="FAMLYEML_",
        case_sensitive=False,
        extra="ignore",
    )

    # Parsing
    data_table_id: str = Field(
        default=DATA_TABLE_ID,
        min_length=1,
        description="id (or class marker) of the question/answer table",
    )
    default_charset: str = Field(
        default="utf-8",
        description="Charset assumed when the HTML part declares none",
    )

    # Output Settings
    export_dir: str = Field(default="exports", description="Export directory")
    export_filename: str = Field(
        default="famly-parsed-data.json",
        description="File name used by the export command",
    )
    json_indent: int = Field(default=2, ge=0, le=8)

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: str | None = Field(default=None, description="Optional log file")

    # HTTP API
    api_host: str = Field(default="127.0.0.1")
    api_port: int = Field(default=8765, ge=1, le=65535)

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Loguru level names are upper case."""
        return v.strip().upper()

    @field_validator("default_charset")
    @classmethod
    def normalize_charset(cls, v: str) -> str:
        """Charset names compare case-insensitively."""
        return v.strip().lower()


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config
