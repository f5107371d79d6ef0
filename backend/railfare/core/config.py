from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
    # reads .env and ignores variables we do not declare
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # defaults for a local start
    DATABASE_URL: str = Field(default="sqlite:///./local.db")
    HOST: str = "127.0.0.1"
    PORT: int = Field(default=8000, ge=1, le=65535)
    STATIC_ROOT: str = "www"
    GZIP_MINIMUM_SIZE: int = Field(default=1024, ge=0)
    LOG_LEVEL: str = "INFO"

    # fare collaborator: "dummy" (built in) or "remote" (HTTP)
    FARE_SERVICE: str = "dummy"
    FARE_SERVICE_URL: str = ""
    FARE_SERVICE_TIMEOUT: Optional[float] = None

settings = Settings()
