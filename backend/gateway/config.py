# gateway/config.py
import os
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()  # Load environment variables from .env file


def _csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _model_rates(value: str) -> dict[str, int]:
    """
    Parse MODEL_RATES ("gpt-4=2,gpt-3.5-turbo=1") into {name: rate}.
    Malformed entries are skipped.
    """
    rates: dict[str, int] = {}
    for item in _csv(value):
        name, sep, rate = item.partition("=")
        if not sep or not name.strip():
            continue
        try:
            rates[name.strip()] = int(rate)
        except ValueError:
            continue
    return rates


class Settings(BaseModel):
    # General app settings
    APP_NAME: str = "Credit Gateway API"
    env: str = os.getenv("ENV", "dev")

    # Host & Port settings
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "3000"))

    CORS_ORIGINS: list[str] = _csv(os.getenv("CORS_ORIGINS", "*"))

    # Database (Tortoise connection URL)
    database_url: str = os.getenv("DATABASE_URL", "sqlite://db.sqlite3")
    # Create missing tables on startup (local sqlite); otherwise use Aerich migrations
    generate_schemas: bool = os.getenv("GENERATE_SCHEMAS", "false").lower() in ("true", "1", "yes")

    # Session tokens: no default secret, see gateway.core.security
    jwt_secret: str | None = os.getenv("JWT_SECRET")
    access_token_expire_days: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_DAYS", "30"))
    password_hash_rounds: int = int(os.getenv("PASSWORD_HASH_ROUNDS", "10"))

    # Upstream text-generation provider
    upstream_api_url: str = os.getenv("UPSTREAM_API_URL", "https://bothub.chat/api/v2/openai/v1")
    upstream_api_key: str | None = os.getenv("UPSTREAM_API_KEY")
    upstream_max_tokens: int = int(os.getenv("UPSTREAM_MAX_TOKENS", "100"))
    upstream_timeout_seconds: float = float(os.getenv("UPSTREAM_TIMEOUT_SECONDS", "60"))

    # Billing
    starting_balance: int = 1000
    text_generation_cost: int = int(os.getenv("TEXT_GENERATION_COST", "100"))
    model_rates: dict[str, int] = _model_rates(os.getenv("MODEL_RATES", "gpt-4=2,gpt-3.5-turbo=1"))

    # Event stream
    stream_interval_seconds: float = float(os.getenv("STREAM_INTERVAL_SECONDS", "1.0"))

    # Default admin (created on startup only when ADMIN_PASSWORD is set)
    admin_email: str = os.getenv("ADMIN_EMAIL", "admin@example.com")
    admin_password: str | None = os.getenv("ADMIN_PASSWORD")
    admin_first_name: str = os.getenv("ADMIN_FIRST_NAME", "Admin")
    admin_last_name: str = os.getenv("ADMIN_LAST_NAME", "Admin")

settings = Settings()  # Instantiate configuration
