# config/settings.py
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Project settings.
    Values are read from environment variables or from a .env file.
    """
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "REC Hub API"

    # database
    DATABASE_URL: str = "sqlite:///./rechub.db"
    SQL_ECHO: bool = False

    # session cookie
    SESSION_SECRET: str = "dev-secret-change-me"
    SESSION_COOKIE: str = "rechub_session"
    SESSION_MAX_AGE: int = 60 * 60 * 24 * 7
    SESSION_HTTPS_ONLY: bool = False

    # admin account created on first start
    DEFAULT_ADMIN_EMAIL: str = "admin@rechub.local"
    DEFAULT_ADMIN_PASSWORD: str = "admin"
    DEFAULT_ADMIN_NAME: str = "System Admin"

    LOG_LEVEL: str = "INFO"

    # dashboard
    RECENT_HIRE_DAYS: int = 30
    RECENT_LIST_LIMIT: int = 5


settings = Settings()
