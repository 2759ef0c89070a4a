import os
from datetime import timedelta
from dotenv import load_dotenv

# Load environment variables from .env (only for local development)
if os.getenv("FLASK_ENV") != "production":
    load_dotenv()


def normalize_database_url(value):
    """Hosted Postgres providers still hand out the old ``postgres://`` scheme."""
    raw = (value or "").strip()
    if raw.startswith("postgres://"):
        return "postgresql://" + raw[len("postgres://"):]
    return raw


def parse_origins(value):
    return [origin.strip() for origin in (value or "").split(",") if origin.strip()]


class Config:
    """Base configuration."""

    TESTING = False
    DEBUG = os.getenv("FLASK_ENV") != "production"

    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

    # Database
    DATABASE_URL = normalize_database_url(os.getenv("DATABASE_URL"))
    SQLALCHEMY_DATABASE_URI = DATABASE_URL or "sqlite:///skillforge.db"
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Tokens
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY")
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(days=int(os.getenv("JWT_EXPIRE_DAYS", "7")))

    BCRYPT_LOG_ROUNDS = int(os.getenv("BCRYPT_LOG_ROUNDS", "12"))

    # AI
    OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
    OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini").strip()

    # CORS configuration
    CORS_ORIGINS = parse_origins(os.getenv("CORS_ORIGINS")) or ["http://localhost:3000"]

    PORT = int(os.getenv("PORT", "5001"))

    # Settings the process refuses to serve without outside development
    REQUIRED_SETTINGS = ("DATABASE_URL", "JWT_SECRET_KEY")


class TestingConfig(Config):
    TESTING = True
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    JWT_SECRET_KEY = "testing-jwt-secret-key-of-sufficient-length"
    BCRYPT_LOG_ROUNDS = 4
    OPENAI_API_KEY = None
    CORS_ORIGINS = ["http://localhost:3000"]


def missing_settings(config):
    """Names of required settings that are unset for a production start."""
    if config.get("TESTING") or config.get("DEBUG"):
        return []
    return [name for name in config.get("REQUIRED_SETTINGS", ()) if not config.get(name)]
