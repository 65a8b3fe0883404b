from flask import Flask
from flasgger import Swagger
from flask_cors import CORS
import logging

from .config import get_config
from .errors import register_error_handlers
from models.db_storage import DBStorage
from models.user_store import UserStore
from models.refresh_token_store import RefreshTokenStore
from services.auth_service import AuthService
from services.settings import SecuritySettings
from services.user_service import UserService

__version__ = "1.0.0"

# Minimal Swagger config: exposes /swagger.json and UI at /apidocs
SWAGGER_TEMPLATE = {
    "swagger": "2.0.0",
    "info": {
        "title": "User Auth API",
        "version": __version__,
        "description": "REST API for user registration, login (JWT + refresh tokens) and user listing.",
    },
    "basePath": "/",  # blueprints are mounted under /api/v1
    "schemes": ["http"],
    "securityDefinitions": {
        "Bearer": {
            "type": "apiKey",
            "name": "Authorization",
            "in": "header",
            "description": "Enter the token with the `Bearer ` prefix, e.g. \"Bearer abcde12345\"."
        }
    }
}

SWAGGER_CONFIG = {
    "headers": [],
    "specs": [
        {
            "endpoint": "apispec_1",
            "route": "/swagger.json",
            "rule_filter": lambda rule: True,   # include all endpoints
            "model_filter": lambda tag: True,   # include all models
        }
    ],
    "static_url_path": "/flasgger_static",
    "swagger_ui": True,
    "specs_route": "/apidocs/",
}


def configure_logging(app: Flask) -> None:
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    app.logger.setLevel(level)


def create_app(config_name: str | None = None, overrides: dict | None = None) -> Flask:
    """
    Application factory: creates and configures the Flask app.

    Storage, stores and services are built here and registered in
    app.extensions; views look them up there instead of importing globals.
    `overrides` is applied on top of the selected config (used by tests).
    """
    app = Flask(__name__)

    # Load configuration (reads .env via get_config)
    app.config.from_object(get_config(config_name))
    if overrides:
        app.config.update(overrides)

    configure_logging(app)

    # Cross-Origin Resource Sharing: enable for dev, configurable for prod
    CORS(app, resources={r"/*": {"origins": app.config.get("CORS_ORIGINS", "*")}})

    # Swagger UI and JSON
    Swagger(app, template=SWAGGER_TEMPLATE, config=SWAGGER_CONFIG)

    # Register global error handlers that return the uniform error envelope
    register_error_handlers(app)

    storage = DBStorage(
        app.config["DATABASE_URL"],
        echo=app.config.get("SQL_ECHO", False),
        connect_timeout=app.config.get("DB_CONNECT_TIMEOUT"),
    )
    storage.reload()

    settings = SecuritySettings.from_config(app.config)
    user_store = UserStore(storage)
    refresh_token_store = RefreshTokenStore(storage)

    app.extensions["storage"] = storage
    app.extensions["user_service"] = UserService(user_store)
    app.extensions["auth_service"] = AuthService(user_store, refresh_token_store, settings)

    from .health import bp as health_bp
    from .auth import bp as auth_bp
    from .users import bp as users_bp

    app.register_blueprint(health_bp, url_prefix="/api/v1")
    app.register_blueprint(auth_bp, url_prefix="/api/v1/auth")
    app.register_blueprint(users_bp, url_prefix="/api/v1")

    # Ensure the DB session is removed at the end of each request/app context
    @app.teardown_appcontext
    def remove_session(exception=None):
        # calls scoped_session.remove(), preventing connection leaks
        storage.close()

    @app.route("/")
    def root():
        return {
            "message": "Welcome to User Auth API",
            "docs": "/apidocs/",
            "health": "/api/v1/health",
        }, 200

    app.logger.info("app created (env=%s, refresh tokens %s)",
                    app.config.get("APP_ENV"),
                    "enabled" if settings.refresh_tokens_enabled else "disabled")
    return app
