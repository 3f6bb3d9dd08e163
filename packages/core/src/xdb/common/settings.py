from typing import Dict
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env into os.environ
load_dotenv()

# Property keys understood by notebook hosts, mapped to field names.
PROPERTY_KEYS: Dict[str, str] = {
    "postgresql.url": "postgresql_url",
    "postgresql.user": "postgresql_user",
    "postgresql.password": "postgresql_password",
    "postgresql.driver.name": "postgresql_driver",
}


class Settings(BaseSettings):
    """Interpreter configuration backed by environment variables or host properties."""

    postgresql_url: str = Field(
        default="postgresql://localhost:5432",
        validation_alias=AliasChoices("XDB_POSTGRESQL_URL", "postgresql.url"),
        description="URL for PostgreSQL with XDB."
    )
    postgresql_user: str = Field(
        default="gpadmin",
        validation_alias=AliasChoices("XDB_POSTGRESQL_USER", "postgresql.user"),
        description="PostgreSQL user name."
    )
    postgresql_password: str = Field(
        default="",
        validation_alias=AliasChoices("XDB_POSTGRESQL_PASSWORD", "postgresql.password"),
        description="PostgreSQL user password."
    )
    postgresql_driver: str = Field(
        default="psycopg2",
        validation_alias=AliasChoices("XDB_POSTGRESQL_DRIVER", "postgresql.driver.name"),
        description="DBAPI driver name used by SQLAlchemy (e.g. psycopg2, psycopg)."
    )

    read_only: bool = Field(
        default=True,
        validation_alias="XDB_READ_ONLY",
        description="Run every query inside a read-only transaction."
    )
    fetch_size: int = Field(
        default=1,
        ge=1,
        validation_alias="XDB_FETCH_SIZE",
        description="Rows requested from the server per round trip."
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="XDB_LOG_LEVEL",
        description="Root logging level."
    )
    log_json: bool = Field(
        default=False,
        validation_alias="XDB_LOG_JSON",
        description="Emit structured JSON log lines."
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    def configure_env(self, env: str) -> None:
        """Loads environment-specific variables and reloads settings."""
        if not env:
            return

        load_dotenv(f".env.{env}", override=True)
        new_settings = Settings()
        self.__dict__.update(new_settings.__dict__)

    def as_properties(self, mask_secrets: bool = True) -> Dict[str, str]:
        """Returns the connection settings keyed by their host property names."""
        props = {}
        for key, field_name in PROPERTY_KEYS.items():
            value = getattr(self, field_name)
            if mask_secrets and field_name == "postgresql_password" and value:
                value = "****"
            props[key] = value
        return props


settings = Settings()

# Configure logging during import
from xdb.common.logger import configure_logging
configure_logging(
    level=settings.log_level,
    json_format=settings.log_json
)
