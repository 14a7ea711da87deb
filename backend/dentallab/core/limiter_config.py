from flask import Flask
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

# Global Limiter instance to be imported by controllers.
# Defaults and storage are bound per app in init_limiter.
limiter = Limiter(key_func=get_remote_address)


def init_limiter(app: Flask, enabled: bool, default_limit: str, storage_uri: str) -> None:
    """Bind the shared limiter to ``app`` with the configured limits."""
    app.config["RATELIMIT_ENABLED"] = enabled
    app.config["RATELIMIT_DEFAULT"] = default_limit
    app.config["RATELIMIT_STORAGE_URI"] = storage_uri
    app.config["RATELIMIT_HEADERS_ENABLED"] = True
    limiter.init_app(app)
