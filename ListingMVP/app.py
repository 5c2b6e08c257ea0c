# ListingMVP/app.py

import importlib
import logging
import os

from flask import Blueprint, Flask, Response, current_app, jsonify

from ListingMVP.ai import AIAssistant, build_generator
from ListingMVP.config import Config
from ListingMVP.exceptions import (
    AuthRequiredError,
    ConfigurationError,
    GenerationError,
    NotFoundError,
    UsernameTakenError,
    ValidationError,
)
from ListingMVP.extensions import cors, login_manager, mail
from ListingMVP.services.storage import MemStorage
from ListingMVP.utils.logging import setup_logging

logger = logging.getLogger(__name__)


# ---------------------------------------------------------
# App Factory
# ---------------------------------------------------------
def create_app(config_object=Config, store=None, generator=None):
    """Build the app with one store and one assistant.

    ``store`` and ``generator`` may be injected (tests); otherwise a seeded
    MemStorage and the generator named by AI_PROVIDER are built here.
    """
    app = Flask(__name__, instance_relative_config=True)

    # Core configuration
    app.config.from_object(config_object)
    app.secret_key = app.config.get("SECRET_KEY")

    if not app.testing:
        setup_logging(app.config.get("LOG_LEVEL", "INFO"), app.config.get("LOG_FORMAT", "standard"))

    # Initialize extensions
    cors.init_app(app)
    login_manager.init_app(app)
    mail.init_app(app)

    # Collaborators live on the app, not in module globals
    app.store = store if store is not None else MemStorage(seed=app.config.get("SEED_DEMO_DATA", True))
    app.assistant = AIAssistant(generator if generator is not None else build_generator(app.config))

    @login_manager.user_loader
    def load_user(user_id):
        try:
            return current_app.store.get_user(int(user_id))
        except (TypeError, ValueError):
            return None

    register_blueprints(app)
    register_error_handlers(app)

    logger.info(
        "ListingMVP ready: provider=%s, %d properties loaded",
        type(app.assistant.generator).__name__,
        len(app.store.get_all_properties()),
    )
    return app


# ---------------------------------------------------------
# Dynamic Blueprint Registration
# ---------------------------------------------------------
def register_blueprints(app):
    routes_dir = os.path.join(os.path.dirname(__file__), "routes")

    for file in sorted(os.listdir(routes_dir)):
        if file.endswith(".py") and not file.startswith("__"):
            mod = importlib.import_module(f"ListingMVP.routes.{file[:-3]}")
            for attr in dir(mod):
                obj = getattr(mod, attr)
                if isinstance(obj, Blueprint):
                    app.register_blueprint(obj)
                    logger.debug("Registered blueprint: %s -> %s", obj.name, obj.url_prefix)


# ---------------------------------------------------------
# Error mapping
# ---------------------------------------------------------
def _text(message, status):
    return Response(message, status=status, mimetype="text/plain")


def register_error_handlers(app):
    @app.errorhandler(NotFoundError)
    def handle_not_found(e):
        return _text(str(e), 404)

    @app.errorhandler(ValidationError)
    def handle_validation(e):
        return jsonify(e.issues), 400

    @app.errorhandler(UsernameTakenError)
    def handle_username_taken(e):
        return _text(str(e), 400)

    @app.errorhandler(AuthRequiredError)
    def handle_auth_required(e):
        return _text(str(e) or "Unauthorized", 401)

    @app.errorhandler(GenerationError)
    def handle_generation(e):
        logger.error("Generation failed: %s", e)
        return jsonify({"error": str(e)}), 500

    @app.errorhandler(ConfigurationError)
    def handle_configuration(e):
        logger.error("Configuration error: %s", e)
        return jsonify({"error": str(e)}), 500
