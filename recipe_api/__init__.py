import logging
from typing import Optional

from flask import Flask, jsonify, request

from .config import Settings
from .errors import RecipeError, ValidationError
from .gcp_storage import FirestoreRecipeStorage
from .logging_config import setup_logging
from .models import Recipe
from .service import RecipeService
from .storage import RecipeRepository

logger = logging.getLogger(__name__)


def create_app(
    storage: Optional[RecipeRepository] = None,
    settings: Optional[Settings] = None,
) -> Flask:
    """Create and configure the Flask application.

    Parameters
    ----------
    storage:
        Optional recipe repository. When ``None`` the application will use
        :class:`FirestoreRecipeStorage` configured from ``settings``.
    settings:
        Optional settings. Read from the environment when ``None``.
    """

    settings = settings or Settings.from_env()
    setup_logging(settings.log_level)

    app = Flask(__name__)

    if storage is None:
        storage = FirestoreRecipeStorage.from_settings(settings)
    app.config["RECIPE_SERVICE"] = RecipeService(
        storage,
        default_amount=settings.default_amount,
        max_amount=settings.max_amount,
        empty_list_is_error=settings.empty_list_is_error,
    )

    def service() -> RecipeService:
        return app.config["RECIPE_SERVICE"]

    @app.errorhandler(RecipeError)
    def handle_recipe_error(exc: RecipeError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.path, exc.message)
        return jsonify(exc.to_dict()), exc.status_code

    @app.get("/recipes")
    def list_recipes():
        amount = _amount_param()
        recipes = service().list_recent(amount)
        return jsonify([recipe.to_dict() for recipe in recipes])

    @app.get("/recipes/<recipe_id>")
    def get_recipe(recipe_id: str):
        return jsonify(service().get_recipe(recipe_id).to_dict())

    @app.post("/recipes")
    def create_recipe():
        payload = _json_object()
        recipe = service().create_recipe(payload.get("name"), payload.get("description"))
        return jsonify(recipe.to_dict()), 201

    @app.patch("/recipes/<recipe_id>")
    def edit_recipe(recipe_id: str):
        payload = _json_object()
        success = service().edit_recipe(
            recipe_id,
            name=payload.get("name"),
            description=payload.get("description"),
        )
        return jsonify({"success": success})

    @app.delete("/recipes/<recipe_id>")
    def delete_recipe(recipe_id: str):
        return jsonify({"success": service().delete_recipe(recipe_id)})

    return app


def _json_object() -> dict:
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload


def _amount_param() -> Optional[int]:
    raw = request.args.get("amount")
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except ValueError:
        raise ValidationError("Amount must be a valid number") from None


__all__ = ["create_app", "Recipe", "RecipeService"]
