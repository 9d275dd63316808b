"""
Environment-aware configuration.
Values are read once, when create_app() builds the app; the signing secret and
token lifetimes are then captured by the SessionManager and never change.
"""
import os
from dotenv import load_dotenv
from datetime import timedelta

load_dotenv()  # Read .env if present


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")  # Set a strong key in production
    DEBUG = False
    TESTING = False
    # CORS: in dev we usually allow '*', in prod supply a comma-separated list in env
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
    APP_ENV = os.getenv("APP_ENV", "dev")
    # "dev" enables POST /admin/reset
    PLATFORM = os.getenv("PLATFORM", "prod")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///chirpy.db")
    SQL_ECHO = _env_flag("SQL_ECHO")
    # Directory served under /app/
    FILESERVER_ROOT = os.getenv("FILESERVER_ROOT", os.path.join(os.getcwd(), "static"))
    # Token settings
    JWT_SECRET = os.getenv("JWT_SECRET") or os.getenv("SECRET", "dev-secret-change-me")
    ACCESS_TOKEN_EXPIRES = timedelta(seconds=int(os.getenv("ACCESS_TOKEN_EXPIRES_SECONDS", "3600")))
    REFRESH_TOKEN_EXPIRES = timedelta(days=int(os.getenv("REFRESH_TOKEN_EXPIRES_DAYS", "60")))
    # Answer 401 instead of 404 on login with an unknown email
    LOGIN_HIDE_UNKNOWN_ACCOUNTS = _env_flag("LOGIN_HIDE_UNKNOWN_ACCOUNTS")
    # Payment provider webhook key
    POLKA_KEY = os.getenv("POLKA_KEY", "")


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    PLATFORM = os.getenv("PLATFORM", "dev")


class ProductionConfig(BaseConfig):
    DEBUG = False


class TestingConfig(BaseConfig):
    TESTING = True
    PLATFORM = "dev"
    DATABASE_URL = "sqlite://"
    SQL_ECHO = False
    JWT_SECRET = "test-secret-0123456789abcdef0123456789abcdef"
    POLKA_KEY = "test-polka-key"
    LOGIN_HIDE_UNKNOWN_ACCOUNTS = False


def get_config(name: str | None):
    """
    Select config class.
    - If name is provided, choose by name.
    - Else choose based on APP_ENV (dev/prod/testing).
    """
    env = (name or os.getenv("APP_ENV", "dev")).lower()
    if env in ["prod", "production"]:
        return ProductionConfig
    if env in ["test", "testing"]:
        return TestingConfig
    return DevelopmentConfig
