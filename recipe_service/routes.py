from __future__ import annotations

from flask import Blueprint, Response, current_app, jsonify, request

from . import handlers
from .query import RecipeQuery
from .storage import RecipeRepository

bp = Blueprint("recipes", __name__, url_prefix="/api/recipe")


def _storage() -> RecipeRepository:
    return current_app.config["RECIPE_STORAGE"]


@bp.post("/create")
def create_recipe() -> Response:
    recipe = handlers.create_recipe(_storage(), request.get_json(silent=True))
    return jsonify(success=recipe.to_dict())


@bp.get("/")
def list_recipes() -> Response:
    page = handlers.list_recipes(_storage(), RecipeQuery.from_args(request.args))
    return jsonify(success=page.to_dict())


@bp.get("/<recipe_id>")
def get_recipe(recipe_id: str) -> Response:
    recipe = handlers.get_recipe(_storage(), recipe_id)
    return jsonify(success=recipe.to_dict())


@bp.put("/update/<recipe_id>")
def update_recipe(recipe_id: str) -> Response:
    message = handlers.update_recipe(_storage(), recipe_id, request.get_json(silent=True))
    return jsonify(success=message)


@bp.delete("/delete/<recipe_id>")
def delete_recipe(recipe_id: str) -> Response:
    message = handlers.delete_recipe(_storage(), recipe_id)
    return jsonify(success=message)


__all__ = ["bp"]
