"""
Application factory for the dental laboratory API.

Run locally with:
    python -m dentallab.main
"""

import logging
from typing import Optional

from flask import Flask
from flask_limiter.errors import RateLimitExceeded
from werkzeug.exceptions import HTTPException

from dentallab.core.api_utils import error_response
from dentallab.core.config import Settings, load_settings, log_settings
from dentallab.core.exceptions import (
    DomainError,
    DuplicateEmailError,
    ForbiddenError,
    InternalError,
    InvalidStatusTransitionError,
    NotFoundError,
    UnauthorizedError,
    UnknownStatusError,
    ValidationError,
)
from dentallab.core.limiter_config import init_limiter
from dentallab.core.logging_config import setup_logging
from dentallab.services.registry import (
    EXTENSION_KEY,
    ServiceRegistry,
    build_in_memory_registry,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = (
    (NotFoundError, 404),
    (DuplicateEmailError, 409),
    (InvalidStatusTransitionError, 400),
    (UnknownStatusError, 400),
    (UnauthorizedError, 401),
    (ForbiddenError, 403),
    (InternalError, 500),
)


def register_error_handlers(app: Flask) -> None:
    """Map domain errors to JSON error responses in one place."""

    @app.errorhandler(ValidationError)
    def handle_validation_error(error: ValidationError):
        return error_response(
            ValidationError.default_message, 400, details=error.as_dict()
        )

    @app.errorhandler(DomainError)
    def handle_domain_error(error: DomainError):
        for error_type, status_code in STATUS_BY_ERROR:
            if isinstance(error, error_type):
                if status_code >= 500:
                    logger.error(
                        "Internal error while handling request",
                        extra={"context": {"error": error.message}},
                    )
                    return error_response(InternalError.default_message, status_code)
                return error_response(error.message, status_code)
        return error_response(error.message, 400)

    @app.errorhandler(RateLimitExceeded)
    def handle_rate_limit(error: RateLimitExceeded):
        logger.warning(
            "Rate limit exceeded",
            extra={"context": {"limit": str(error.description)}},
        )
        return error_response("rate limit exceeded", 429)

    @app.errorhandler(HTTPException)
    def handle_http_exception(error: HTTPException):
        return error_response(error.description or error.name, error.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception):
        logger.error(
            "Unhandled exception",
            extra={"context": {"error": str(error)}},
            exc_info=True,
        )
        return error_response(InternalError.default_message, 500)


def register_blueprints(app: Flask) -> None:
    from dentallab.controllers.client_controller import client_bp
    from dentallab.controllers.health_controller import health_bp
    from dentallab.controllers.laboratory_controller import laboratory_bp
    from dentallab.controllers.order_controller import order_bp
    from dentallab.controllers.prosthesis_controller import prosthesis_bp
    from dentallab.controllers.technician_controller import technician_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(laboratory_bp)
    app.register_blueprint(client_bp)
    app.register_blueprint(order_bp)
    app.register_blueprint(prosthesis_bp)
    app.register_blueprint(technician_bp)


def create_app(
    settings: Optional[Settings] = None,
    registry: Optional[ServiceRegistry] = None,
    configure_logging: bool = True,
) -> Flask:
    """Build the Flask application.

    Args:
        settings: Configuration snapshot; read from the environment when omitted
        registry: Services to serve; fresh in-memory storage when omitted
        configure_logging: Install root log handlers (disable to keep pytest's)
    """
    settings = settings or load_settings()

    app = Flask(__name__)
    app.config["ENV_NAME"] = settings.environment
    app.config["TESTING"] = settings.is_testing
    app.config["JWT_SECRET_KEY"] = settings.jwt_secret_key
    app.config["JWT_ALGORITHM"] = settings.jwt_algorithm
    app.config["ALLOW_QUERY_LABORATORY_ID"] = settings.allow_query_laboratory_id

    if configure_logging:
        setup_logging(
            app,
            log_level=settings.log_level,
            use_json_format=settings.log_json,
        )
    log_settings(settings)

    init_limiter(
        app,
        enabled=settings.rate_limit_enabled,
        default_limit=settings.rate_limit_default,
        storage_uri=settings.limiter_storage_uri,
    )

    app.extensions[EXTENSION_KEY] = registry or build_in_memory_registry()

    register_error_handlers(app)
    register_blueprints(app)

    logger.info(
        "Application created",
        extra={"context": {"environment": settings.environment}},
    )
    return app


if __name__ == "__main__":
    _settings = load_settings()
    create_app(_settings).run(
        host=_settings.host,
        port=_settings.port,
        debug=not _settings.is_production,
    )
