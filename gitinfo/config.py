from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from gitinfo.schema import BUNDLED_SCHEMA

class Settings(BaseSettings):
    schema_path: str = str(BUNDLED_SCHEMA)
    default_document: str = ".gitinfo"
    allow_data_uri_icon: bool = True

    color: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    model_config = SettingsConfigDict(env_prefix="GITINFO_", env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v

settings = Settings()
