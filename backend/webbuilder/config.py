import os
from dotenv import load_dotenv

from webbuilder.errors import ConfigurationError

# Load .env from project root
load_dotenv()

PERPLEXITY_API_KEY = os.getenv("PERPLEXITY_API_KEY", "")
PERPLEXITY_BASE_URL = os.getenv("PERPLEXITY_BASE_URL", "https://api.perplexity.ai")
PERPLEXITY_MODEL = os.getenv("PERPLEXITY_MODEL", "sonar")

GENERATION_MAX_TOKENS = int(os.getenv("GENERATION_MAX_TOKENS", "10000"))
GENERATION_TIMEOUT_SECONDS = float(os.getenv("GENERATION_TIMEOUT_SECONDS", "300"))

DAILY_PROMPT_LIMIT = int(os.getenv("DAILY_PROMPT_LIMIT", "2"))

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./webbuilder.db")

APP_ENV = os.getenv("APP_ENV", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "CORS_ORIGINS",
        "https://webbuilder.amanraj.me,http://localhost:3000,http://localhost:5173",
    ).split(",")
    if origin.strip()
]


def is_production() -> bool:
    return APP_ENV.lower() == "production"


def validate_settings() -> None:
    """
    Fail fast on settings the generator cannot run without.
    Called once at startup, never per request.
    """
    if not PERPLEXITY_API_KEY:
        raise ConfigurationError("PERPLEXITY_API_KEY is not set")
    if DAILY_PROMPT_LIMIT < 0:
        raise ConfigurationError("DAILY_PROMPT_LIMIT must be >= 0")
    if GENERATION_TIMEOUT_SECONDS <= 0:
        raise ConfigurationError("GENERATION_TIMEOUT_SECONDS must be > 0")
