from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    API_PREFIX: str = "/api"

    PER_PERSON_MINUTES: int = 15
    QUEUE_GROUPING: Literal["service_type", "global"] = "service_type"

    STORE_PROVIDER: Literal["memory", "json"] = "memory"
    DATA_DIR: str = "./data"

    JWT_SECRET: str = "CHANGE_ME_DEV_SECRET"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 60

    AUTH_MAX_FAILED_ATTEMPTS: int = 5
    AUTH_LOCKOUT_MINUTES: int = 15
    AUTH_ATTEMPT_WINDOW_MINUTES: int = 15
    TRUST_PROXY_HEADERS: bool = False


settings = Settings()
