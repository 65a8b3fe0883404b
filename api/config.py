"""
Environment-aware configuration.
Values come from the process environment, with .env loaded first.
"""
import os
from dotenv import load_dotenv

load_dotenv()  # Read .env if present


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")  # Set a strong key in production
    DEBUG = False
    TESTING = False
    # CORS: in dev we usually allow '*', in prod supply a comma-separated list in env
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    APP_ENV = os.getenv("APP_ENV", "dev")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///user-auth.db")
    SQL_ECHO = _env_bool("SQL_ECHO", "false")
    DB_CONNECT_TIMEOUT = int(os.getenv("DB_CONNECT_TIMEOUT", "10"))

    # jwt / refresh token configuration
    JWT_SECRET = os.getenv("JWT_SECRET", "")
    ACCESS_TOKEN_TTL_MINUTES = int(os.getenv("ACCESS_TOKEN_TTL_MINUTES", "15"))
    REFRESH_TOKEN_TTL_HOURS = int(os.getenv("REFRESH_TOKEN_TTL_HOURS", "168"))
    REFRESH_TOKENS_ENABLED = _env_bool("REFRESH_TOKENS_ENABLED", "true")


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
    JWT_SECRET = os.getenv("JWT_SECRET", "dev-secret-change-me")


class TestingConfig(BaseConfig):
    TESTING = True
    APP_ENV = "test"
    DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite://")
    JWT_SECRET = "test-secret"
    REFRESH_TOKENS_ENABLED = True


class ProductionConfig(BaseConfig):
    DEBUG = False
    APP_ENV = "prod"


def get_config(name: str | None):
    """
    Select config class.
    - If name is provided, choose by name.
    - Else choose based on APP_ENV (dev/test/prod).
    """
    env = (name or os.getenv("APP_ENV", "dev")).lower()
    if env in ["prod", "production"]:
        return ProductionConfig
    if env in ["test", "testing"]:
        return TestingConfig
    return DevelopmentConfig
