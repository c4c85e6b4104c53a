"""Runtime settings, read from the environment or a local .env file."""

import tempfile
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PORT = 8080


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="RESTASSURED_GEN_", env_file=".env", extra="ignore")

    libs_dir: Path = Path("libs")
    work_dir: Path = Path(tempfile.gettempdir())
    java_bin: str = "java"
    javac_bin: str = "javac"
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    default_expected_status: int = 200


@lru_cache
def get_settings() -> Settings:
    return Settings()
