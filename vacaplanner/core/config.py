import logging
import os
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

DEV_SECRET_MARKER = "dev-only"
RELAXED_ENVIRONMENTS = ("development", "testing")


def _env_list(name: str, default: str) -> List[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


def _env_flag(name: str, default: str = "true") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


class BalanceDefaults(BaseModel):
    """Allowances granted to every new account."""
    vacation_days_total: int = Field(default_factory=lambda: int(os.getenv("DEFAULT_VACATION_DAYS", "22")))
    personal_hours_total: int = Field(default_factory=lambda: int(os.getenv("DEFAULT_PERSONAL_HOURS", "32")))
    workday_hours: int = 8


class Config(BaseModel):
    app_name: str = "VacaPlanner"
    environment: str = Field(default_factory=lambda: os.getenv("APP_ENV", "development"))
    api_prefix: str = "/api"
    version: str = "1.0.0"
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    database_url: str = Field(default_factory=lambda: os.getenv("DATABASE_URL", "sqlite:///./vacaplanner.db"))

    secret_key: str = Field(
        default_factory=lambda: os.getenv("SECRET_KEY", f"{DEV_SECRET_MARKER}-vacaplanner-signing-key")
    )
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = Field(
        default_factory=lambda: int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24)))
    )
    request_id_header: str = "X-Request-ID"

    cors_origins: List[str] = Field(
        default_factory=lambda: _env_list("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000")
    )

    # Throttling of register and login
    rate_limit_enabled: bool = Field(default_factory=lambda: _env_flag("RATE_LIMIT_ENABLED"))
    auth_rate_limit: str = Field(default_factory=lambda: os.getenv("AUTH_RATE_LIMIT", "10/minute"))

    balances: BalanceDefaults = Field(default_factory=BalanceDefaults)

    @property
    def uses_dev_secret(self) -> bool:
        return self.secret_key.startswith(DEV_SECRET_MARKER)


settings = Config()

_logger = logging.getLogger(__name__)
if settings.uses_dev_secret:
    if settings.environment not in RELAXED_ENVIRONMENTS:
        raise RuntimeError(
            f"SECRET_KEY must be set when APP_ENV={settings.environment}. "
            "The built-in signing key is for local development only."
        )
    _logger.warning("Using the built-in development SECRET_KEY")
