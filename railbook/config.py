from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    APP_NAME: str = "RailBook"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    DATABASE_URL: str = "sqlite+aiosqlite:///./railbook.db"
    # create tables at startup instead of running alembic (local/dev only)
    CREATE_SCHEMA_ON_STARTUP: bool = False
    SECRET_KEY: str = "replace-me"
    ALEMBIC_LOCATION: str = "alembic"
    # JWT / session settings
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    SENTRY_DSN: str = ""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings = Settings()
