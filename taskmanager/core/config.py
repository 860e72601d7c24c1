# taskmanager/core/config.py
from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


_DEFAULT_ORIGINS = "http://localhost:3000,http://localhost:5173"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = Field("dev", alias="ENV")
    app_version: str = Field("0.1.0", alias="APP_VERSION")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    # DB
    database_url: str = Field("", alias="DATABASE_URL")
    database_driver: str = Field("psycopg2", alias="DATABASE_DRIVER")
    db_sslmode: str = Field("", alias="DB_SSLMODE")
    run_migrations: bool = Field(True, alias="RUN_MIGRATIONS")

    # HTTP
    cors_allow_origins: str = Field(_DEFAULT_ORIGINS, alias="CORS_ALLOW_ORIGINS")
    host: str = Field("0.0.0.0", alias="HOST")
    port: int = Field(8000, alias="PORT")

    # 새니타이저 실패 시 원문 통과(False) / 요청 거부(True)
    sanitizer_fail_closed: bool = Field(False, alias="SANITIZER_FAIL_CLOSED")

    @property
    def origins(self) -> List[str]:
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
