"""
Configuration management using Pydantic Settings.

Environment variables:
- DATABASE_URL: SQLAlchemy database URL for the template store
- EXTRACTION_PARALLEL: Whether documents of a batch are processed in parallel
- EXTRACTION_MAX_WORKERS: Worker threads for parallel extraction
- DEFAULT_DATE_FORMAT: Date format used when only days are added
- DATE_PARSE_DEFAULT: ISO date supplying date parts missing from extracted text
- CSV_FILE_NAME_PATTERN: Name of each CSV payload, formatted with its index
- LOG_LEVEL: Logging level for the engine
"""
import logging
from datetime import datetime

from pydantic import Field
from pydantic_settings import BaseSettings

from core.constants import (
    CSV_FILE_NAME_PATTERN,
    DATE_PARSE_DEFAULT,
    DEFAULT_DATE_FORMAT,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database Configuration
    database_url: str = Field(
        default="sqlite:///template_store.db",
        env="DATABASE_URL"
    )

    # Batch Processing
    extraction_parallel: bool = Field(default=True, env="EXTRACTION_PARALLEL")
    extraction_max_workers: int = Field(default=4, env="EXTRACTION_MAX_WORKERS")

    # Cell Value Post-processing
    default_date_format: str = Field(
        default=DEFAULT_DATE_FORMAT,
        env="DEFAULT_DATE_FORMAT"
    )
    date_parse_default: str = Field(
        default=DATE_PARSE_DEFAULT,
        env="DATE_PARSE_DEFAULT"
    )

    # Output
    csv_file_name_pattern: str = Field(
        default=CSV_FILE_NAME_PATTERN,
        env="CSV_FILE_NAME_PATTERN"
    )

    # Logging
    log_level: str = Field(default="INFO", env="LOG_LEVEL")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    def get_date_parse_default(self) -> datetime:
        """Date supplying missing parts when parsing extracted dates."""
        return datetime.fromisoformat(self.date_parse_default)

    def get_extraction_config(self) -> dict:
        """Get batch extraction options as compile_data keyword arguments."""
        return {
            'parallel': self.extraction_parallel,
            'max_workers': self.extraction_max_workers,
            'default_date_format': self.default_date_format,
            'date_parse_default': self.get_date_parse_default(),
            'file_name_pattern': self.csv_file_name_pattern,
        }


def configure_logging(level: str = None) -> None:
    """Configure root logging for the engine."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


# Global settings instance
settings = Settings()
