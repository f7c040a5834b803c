import json
import os
from typing import Optional

import structlog
from flask import Flask, Response, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from .errors import RecipeServiceError
from .firestore_storage import FirestoreRecipeStorage
from .logging_config import configure_logging
from .models import Recipe
from .routes import bp as recipes_bp
from .storage import RecipeRepository

logger = structlog.get_logger(__name__)


def create_app(storage: Optional[RecipeRepository] = None) -> Flask:
    """Create and configure the Flask application.

    Parameters
    ----------
    storage:
        Optional recipe repository. When ``None`` the application will use
        :class:`FirestoreRecipeStorage` configured through environment variables.
    """

    configure_logging(os.environ.get("LOG_LEVEL", "INFO"))

    app = Flask(__name__)
    app.config.setdefault(
        "MAX_CONTENT_LENGTH", int(os.environ.get("MAX_CONTENT_LENGTH", 1024 * 1024))
    )

    if storage is None:
        storage = FirestoreRecipeStorage.from_env()
    app.config["RECIPE_STORAGE"] = storage

    origins = [
        origin.strip()
        for origin in os.environ.get("CORS_ORIGINS", "*").split(",")
        if origin.strip()
    ]
    CORS(app, resources={r"/api/*": {"origins": origins}})

    app.register_blueprint(recipes_bp)

    @app.errorhandler(RecipeServiceError)
    def handle_service_error(exc: RecipeServiceError) -> tuple[Response, int]:
        return jsonify(error=exc.message), exc.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException) -> Response:
        response = exc.get_response()
        response.data = json.dumps({"error": exc.description})
        response.content_type = "application/json"
        return response

    logger.info("app_created", storage=type(storage).__name__)
    return app


__all__ = ["create_app", "Recipe"]
