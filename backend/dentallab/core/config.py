"""
Centralized configuration module for application-wide settings.

Values come from environment variables; a ``.env`` file is loaded first when
present (python-dotenv), without overriding variables already set.
``load_settings()`` snapshots everything into an immutable ``Settings``
object that ``create_app`` consumes.
"""

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

load_dotenv()

TRUTHY = ("true", "1", "yes")

DEV_JWT_SECRET = "dev-jwt-secret-change-me"
WEAK_SECRETS = (DEV_JWT_SECRET, "secret", "secret123", "changeme")


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in TRUTHY


# ===========================
# Server Configuration
# ===========================


def get_environment() -> str:
    """
    Get the runtime environment.

    Environment Variables:
        FLASK_ENV: 'development' (default), 'production' or 'testing'
    """
    return os.getenv("FLASK_ENV", "development").strip().lower()


def get_host() -> str:
    return os.getenv("HOST", "0.0.0.0")


def get_port() -> int:
    """
    Get the HTTP port.

    Environment Variables:
        PORT: TCP port for the development server. Default: 8080
    """
    raw = os.getenv("PORT", "8080")
    try:
        return int(raw)
    except ValueError:
        logger.warning(
            "Invalid PORT value, falling back to 8080",
            extra={"context": {"PORT": raw}},
        )
        return 8080


# ===========================
# Logging Configuration
# ===========================


def get_log_level() -> str:
    default = "INFO" if get_environment() == "production" else "DEBUG"
    return os.getenv("LOG_LEVEL", default).strip().upper()


def get_log_json() -> bool:
    """JSON log lines in production by default, colored console otherwise."""
    default = "true" if get_environment() == "production" else "false"
    return _flag("LOG_JSON", default)


# ===========================
# Authentication Configuration
# ===========================


def get_jwt_secret_key() -> str:
    """Get JWT secret key with production validation.

    In production (FLASK_ENV=production) the secret must be set, must not be
    one of the known weak defaults, and must be at least 32 characters.

    Raises:
        ValueError: If production deployment uses weak or missing JWT secret
    """
    secret = os.getenv("JWT_SECRET_KEY", DEV_JWT_SECRET)

    if get_environment() == "production":
        if secret in WEAK_SECRETS or len(secret) < 32:
            raise ValueError(
                "Production deployment requires strong JWT_SECRET_KEY (min 32 chars). "
                "Set JWT_SECRET_KEY environment variable."
            )

    return secret


def get_jwt_algorithm() -> str:
    return os.getenv("JWT_ALGORITHM", "HS256")


def get_allow_query_laboratory_id() -> bool:
    """
    Whether prosthesis and technician routes accept a ``laboratory_id`` query
    parameter instead of a bearer token.

    Environment Variables:
        ALLOW_QUERY_LABORATORY_ID: Default 'false'
    """
    return _flag("ALLOW_QUERY_LABORATORY_ID", "false")


# ===========================
# Rate Limiting Configuration
# ===========================


def get_rate_limit_enabled() -> bool:
    return _flag("RATE_LIMIT_ENABLED", "true")


def get_rate_limit_default() -> str:
    return os.getenv("RATE_LIMIT_DEFAULT", "200 per minute")


def get_limiter_storage_uri() -> str:
    return os.getenv("LIMITER_STORAGE_URI", "memory://")


@dataclass(frozen=True)
class Settings:
    """Immutable snapshot of the application configuration."""

    environment: str = "development"
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "DEBUG"
    log_json: bool = False
    jwt_secret_key: str = DEV_JWT_SECRET
    jwt_algorithm: str = "HS256"
    allow_query_laboratory_id: bool = False
    rate_limit_enabled: bool = True
    rate_limit_default: str = "200 per minute"
    limiter_storage_uri: str = "memory://"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_testing(self) -> bool:
        return self.environment == "testing"


def load_settings() -> Settings:
    """Read every setting from the environment."""
    return Settings(
        environment=get_environment(),
        host=get_host(),
        port=get_port(),
        log_level=get_log_level(),
        log_json=get_log_json(),
        jwt_secret_key=get_jwt_secret_key(),
        jwt_algorithm=get_jwt_algorithm(),
        allow_query_laboratory_id=get_allow_query_laboratory_id(),
        rate_limit_enabled=get_rate_limit_enabled(),
        rate_limit_default=get_rate_limit_default(),
        limiter_storage_uri=get_limiter_storage_uri(),
    )


def log_settings(settings: Settings) -> None:
    """
    Log the active configuration (without secrets).

    Should be called during application startup.
    """
    logger.info(
        "Configuration initialized",
        extra={
            "context": {
                "environment": settings.environment,
                "log_level": settings.log_level,
                "json_logs": settings.log_json,
                "jwt_algorithm": settings.jwt_algorithm,
                "allow_query_laboratory_id": settings.allow_query_laboratory_id,
                "rate_limit_enabled": settings.rate_limit_enabled,
            }
        },
    )
